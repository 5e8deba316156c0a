"""Chapter file loading."""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".markdown", ".txt", ".rst")
SKIPPED_DIR_NAMES = frozenset({".git", ".hg", ".svn", "__pycache__", "node_modules", ".venv"})


class LoaderError(Exception):
    """Base class for loader failures."""


class RootNotFoundError(LoaderError):
    """Raised when the root path to lint does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Root path does not exist: {path}")
        self.path = path


class ReadError(LoaderError):
    """A single file that could not be read or decoded as text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read {path}: {reason}")
        self.path = path
        self.reason = reason


@dataclass(frozen=True, slots=True)
class Document:
    """One loaded chapter file."""

    path: str
    text: str

    def lines(self) -> list[str]:
        return self.text.splitlines()


def load_documents(
    root: Path,
    *,
    extensions: list[str] | tuple[str, ...] | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> Iterator[Document | ReadError]:
    """Validate ``root`` and return a lazy iterator over its documents.

    Unreadable files are yielded as :class:`ReadError` instances in place of
    their document so callers can report them and keep going. A missing root
    raises :class:`RootNotFoundError` before anything is yielded.
    """
    if not root.exists():
        raise RootNotFoundError(root)

    if root.is_file():
        return iter([_read_document(root, root.name)])

    suffixes = {item.lower() for item in (extensions or DEFAULT_EXTENSIONS)}
    return _iter_directory(
        root,
        suffixes=suffixes,
        includes=include or [],
        excludes=exclude or [],
    )


def _iter_directory(
    root: Path,
    *,
    suffixes: set[str],
    includes: list[str],
    excludes: list[str],
) -> Iterator[Document | ReadError]:
    for entry in _walk(root):
        if isinstance(entry, ReadError):
            if _matches_any(entry.path, excludes):
                logger.debug("Skipping unreadable %s: excluded", entry.path)
                continue
            yield entry
            continue

        relative = entry.relative_to(root).as_posix()
        if entry.suffix.lower() not in suffixes:
            continue
        if includes and not _matches_any(relative, includes):
            logger.debug("Skipping %s: not included", relative)
            continue
        if _matches_any(relative, excludes):
            logger.debug("Skipping %s: excluded", relative)
            continue
        yield _read_document(entry, relative)


def _walk(root: Path) -> list[Path | ReadError]:
    """List files under ``root`` plus one ReadError per directory that could not be scanned."""
    entries: list[Path | ReadError] = []

    def on_error(exc: OSError) -> None:
        failed = Path(exc.filename) if exc.filename else root
        relative = failed.relative_to(root).as_posix() if failed != root else "."
        logger.warning("Could not scan directory %s: %s", relative, exc)
        entries.append(
            ReadError(relative, f"directory not readable ({exc.strerror or exc})")
        )

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [name for name in dirnames if name not in SKIPPED_DIR_NAMES]
        base = Path(dirpath)
        entries.extend(base / name for name in filenames)

    return sorted(entries, key=lambda item: _entry_key(root, item))


def _entry_key(root: Path, entry: Path | ReadError) -> str:
    if isinstance(entry, ReadError):
        return entry.path
    return entry.relative_to(root).as_posix()


def _matches_any(relative: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in patterns)


def _read_document(file_path: Path, identifier: str) -> Document | ReadError:
    try:
        text = file_path.read_bytes().decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        logger.warning("Could not decode %s as UTF-8: %s", identifier, exc)
        return ReadError(identifier, f"not valid UTF-8 text ({exc.reason} at byte {exc.start})")
    except OSError as exc:
        logger.warning("Could not read %s: %s", identifier, exc)
        return ReadError(identifier, exc.strerror or str(exc))
    logger.debug("Loaded %s (%d bytes)", identifier, len(text))
    return Document(path=identifier, text=text)

"""Loader tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from notelint.loader import Document, ReadError, RootNotFoundError, load_documents


def test_load_documents_walks_tree_in_sorted_order(tmp_path: Path) -> None:
    _write(tmp_path / "b.md", "second")
    _write(tmp_path / "a.txt", "first")
    _write(tmp_path / "part1" / "c.rst", "nested")
    _write(tmp_path / "image.png", "not a chapter")
    _write(tmp_path / ".git" / "notes.md", "vcs internals")

    items = list(load_documents(tmp_path))

    assert items == [
        Document(path="a.txt", text="first"),
        Document(path="b.md", text="second"),
        Document(path="part1/c.rst", text="nested"),
    ]


def test_missing_root_raises_before_iteration(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(RootNotFoundError) as exc_info:
        load_documents(missing)
    assert exc_info.value.path == missing
    assert str(missing) in str(exc_info.value)


def test_undecodable_file_is_reported_and_loading_continues(tmp_path: Path) -> None:
    (tmp_path / "a.md").write_bytes(b"\xff\xfe\xfa broken")
    _write(tmp_path / "b.md", "fine")

    items = list(load_documents(tmp_path))

    assert len(items) == 2
    assert isinstance(items[0], ReadError)
    assert items[0].path == "a.md"
    assert "UTF-8" in items[0].reason
    assert items[1] == Document(path="b.md", text="fine")


def test_include_and_exclude_globs_filter_relative_paths(tmp_path: Path) -> None:
    _write(tmp_path / "chapters" / "ch01.md", "one")
    _write(tmp_path / "chapters" / "ch02.md", "two")
    _write(tmp_path / "drafts" / "ch03.md", "three")

    items = list(
        load_documents(tmp_path, include=["chapters/*"], exclude=["*ch02*"])
    )

    assert [item.path for item in items] == ["chapters/ch01.md"]


def test_custom_extensions_replace_defaults(tmp_path: Path) -> None:
    _write(tmp_path / "notes.md", "markdown")
    _write(tmp_path / "snippet.c", "int main(void) {}")

    items = list(load_documents(tmp_path, extensions=[".c"]))

    assert [item.path for item in items] == ["snippet.c"]


def test_single_file_root_is_loaded_regardless_of_extension(tmp_path: Path) -> None:
    target = tmp_path / "snippet.java"
    _write(target, "boolean readPassword = true;")

    items = list(load_documents(target))

    assert items == [Document(path="snippet.java", text="boolean readPassword = true;")]


def test_utf8_bom_is_stripped(tmp_path: Path) -> None:
    (tmp_path / "bom.md").write_bytes(b"\xef\xbb\xbfTitle\n")

    (document,) = list(load_documents(tmp_path))

    assert isinstance(document, Document)
    assert document.text == "Title\n"
    assert document.lines() == ["Title"]


def test_empty_directory_yields_nothing(tmp_path: Path) -> None:
    assert list(load_documents(tmp_path)) == []


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_unreadable_directory_is_reported_and_walk_continues(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write(tmp_path / "a.md", "first")
    _write(tmp_path / "locked" / "ch.md", "hidden")
    _write(tmp_path / "z.md", "last")
    real_scandir = os.scandir

    def guarded_scandir(path=".", *args, **kwargs):  # type: ignore[no-untyped-def]
        if Path(path).name == "locked":
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path, *args, **kwargs)

    monkeypatch.setattr(os, "scandir", guarded_scandir)

    items = list(load_documents(tmp_path))

    assert len(items) == 3
    assert items[0] == Document(path="a.md", text="first")
    assert isinstance(items[1], ReadError)
    assert items[1].path == "locked"
    assert "Permission denied" in items[1].reason
    assert items[2] == Document(path="z.md", text="last")


def test_skipped_directories_are_not_walked(tmp_path: Path) -> None:
    _write(tmp_path / "node_modules" / "pkg" / "README.md", "vendored")
    _write(tmp_path / "notes" / ".git" / "HEAD.md", "vcs")
    _write(tmp_path / "notes" / "ch01.md", "one")

    assert [item.path for item in load_documents(tmp_path)] == ["notes/ch01.md"]

"""Identifier extraction shared by the naming rules."""

from __future__ import annotations

import re

_TYPED_BOOLEAN = re.compile(r"\b(?:bool|boolean|Boolean)\s+([A-Za-z_]\w*)")
_ANNOTATED_BOOLEAN = re.compile(r"\b([A-Za-z_]\w*)\s*:\s*bool\b")
_LITERAL_BOOLEAN = re.compile(
    r"\b([A-Za-z_]\w*)\s*(?<![=!<>])=(?!=)\s*(?:true|false|True|False)\b"
)
_TYPE_KEYWORDS = frozenset({"bool", "boolean", "Boolean"})
_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")


def boolean_names(line: str) -> list[str]:
    """Return names declared or assigned as booleans on ``line``, in order of appearance."""
    matches: list[tuple[int, str]] = []
    for pattern in (_TYPED_BOOLEAN, _ANNOTATED_BOOLEAN, _LITERAL_BOOLEAN):
        matches.extend((match.start(1), match.group(1)) for match in pattern.finditer(line))

    seen: set[str] = set()
    names: list[str] = []
    for _, name in sorted(matches):
        if name in seen or name in _TYPE_KEYWORDS:
            continue
        seen.add(name)
        names.append(name)
    return names


def split_words(name: str) -> list[str]:
    """Split snake_case and camelCase identifiers into lowercase words."""
    words: list[str] = []
    for part in name.split("_"):
        words.extend(word.lower() for word in _WORD.findall(part))
    return words


def strip_prefix(words: list[str], prefixes: list[str]) -> tuple[list[str], bool]:
    if words and words[0] in prefixes:
        return (words[1:], True)
    return (words, False)

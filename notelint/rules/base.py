"""Base rule protocol and finding model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from notelint.loader import Document


@dataclass(frozen=True, slots=True)
class Finding:
    """A single style finding emitted by a rule."""

    rule_id: str
    path: str
    line: int | None
    message: str
    evidence: str = ""
    suggestion: str = ""


class Rule(Protocol):
    """Protocol for deterministic, side-effect free style rules."""

    rule_id: str

    def evaluate(self, document: Document) -> list[Finding]:
        """Evaluate a loaded document and return findings."""


def clip_line(content: str, max_len: int = 80) -> str:
    stripped = content.strip()
    if len(stripped) <= max_len:
        return stripped
    return stripped[: max_len - 3] + "..."

"""Ternary-overuse rule."""

from __future__ import annotations

import re

from notelint.config import LayoutConfig
from notelint.loader import Document
from notelint.rules.base import Finding, clip_line

_C_QUESTION = re.compile(r"\s\?\s")
_C_COLON = re.compile(r"\s:\s")
_PY_VALUE_CONTEXT = re.compile(r"(?:(?<![=!<>])=(?!=)|\breturn\b)(.*)")
_PY_CONDITIONAL = re.compile(r"\bif\b.*?\belse\b")


class TernaryOveruseRule:
    """Flags chained ternaries and single ternaries stretched over long lines."""

    rule_id = "ternary_overuse"

    def __init__(self, layout: LayoutConfig | None = None) -> None:
        self._layout = layout or LayoutConfig()

    def evaluate(self, document: Document) -> list[Finding]:
        findings: list[Finding] = []
        max_length = self._layout.max_ternary_length

        for line_no, line in enumerate(document.lines(), start=1):
            count = count_ternaries(line)
            if count == 0:
                continue

            length = len(line.strip())
            if count >= 2:
                message = f"{count} conditional expressions chained on one line."
            elif length > max_length:
                message = f"Ternary expression on a {length}-character line (limit {max_length})."
            else:
                continue

            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    path=document.path,
                    line=line_no,
                    message=message,
                    evidence=clip_line(line),
                    suggestion="Rewrite it as an if/else statement so each branch reads on its own.",
                )
            )
        return findings


def count_ternaries(line: str) -> int:
    count = 0
    if _C_COLON.search(line):
        count += len(_C_QUESTION.findall(line))

    stripped = line.lstrip()
    if stripped.startswith(("if ", "elif ", "#")):
        return count
    value_context = _PY_VALUE_CONTEXT.search(line)
    if value_context is not None:
        count += len(_PY_CONDITIONAL.findall(value_context.group(1)))
    return count

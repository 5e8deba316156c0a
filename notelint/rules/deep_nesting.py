"""Deep-nesting rule."""

from __future__ import annotations

import re

from notelint.config import LayoutConfig
from notelint.loader import Document
from notelint.rules.base import Finding, clip_line

_LIST_ITEM = re.compile(r"^\s*(?:[-*+]|\d+[.)])\s+\S")


class DeepNestingRule:
    """Flags code indented deeper than the configured nesting limit."""

    rule_id = "deep_nesting"

    def __init__(self, layout: LayoutConfig | None = None) -> None:
        self._layout = layout or LayoutConfig()

    def evaluate(self, document: Document) -> list[Finding]:
        findings: list[Finding] = []
        limit = self._layout.max_nesting
        in_deep_block = False

        for line_no, line in enumerate(document.lines(), start=1):
            # blank lines and Markdown list items neither open nor close a block
            if not line.strip() or _LIST_ITEM.match(line):
                continue
            depth = self._depth(line)
            if depth <= limit:
                in_deep_block = False
                continue
            # one finding per contiguous deep block
            if in_deep_block:
                continue
            in_deep_block = True
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    path=document.path,
                    line=line_no,
                    message=f"Code nested {depth} levels deep (limit {limit}).",
                    evidence=clip_line(line),
                    suggestion="Return early or extract the inner block into a helper.",
                )
            )
        return findings

    def _depth(self, line: str) -> int:
        width = self._layout.indent_width
        indent = line[: len(line) - len(line.lstrip(" \t"))]
        columns = indent.count("\t") * width + indent.count(" ")
        return columns // width

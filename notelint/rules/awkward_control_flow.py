"""Awkward control-flow rule."""

from __future__ import annotations

import re

from notelint.loader import Document
from notelint.rules.base import Finding, clip_line

PATTERNS = [
    (
        re.compile(r"\bgoto\s+[A-Za-z_]\w*\s*;"),
        "goto statement makes the flow hard to follow.",
        "Replace the jump with an early return or a structured loop.",
    ),
    (
        re.compile(r"\bdo\s*\{|^\s*do\s*$"),
        "do/while loop hides its exit condition at the bottom.",
        "Use a while loop so the condition is read before the body.",
    ),
]


class AwkwardControlFlowRule:
    """Finds goto statements and do/while loops in code snippets."""

    rule_id = "awkward_control_flow"

    def evaluate(self, document: Document) -> list[Finding]:
        findings: list[Finding] = []
        for line_no, line in enumerate(document.lines(), start=1):
            for pattern, message, suggestion in PATTERNS:
                if pattern.search(line) is None:
                    continue
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        path=document.path,
                        line=line_no,
                        message=message,
                        evidence=clip_line(line),
                        suggestion=suggestion,
                    )
                )
        return findings

"""Yoda-condition rule."""

from __future__ import annotations

import re

from notelint.loader import Document
from notelint.rules.base import Finding, clip_line

_LITERAL = (
    r"(?:-?\d+(?:\.\d+)?|\"[^\"]*\"|'[^']*'"
    r"|null|NULL|nullptr|nil|None|true|false|True|False)"
)
_YODA = re.compile(
    rf"\b(?:if|elif|while)\s*\(?\s*({_LITERAL})\s*(===|!==|==|!=|<=|>=|<|>)\s*[A-Za-z_]"
)


class YodaConditionRule:
    """Flags comparisons that put the constant on the left-hand side."""

    rule_id = "yoda_condition"

    def evaluate(self, document: Document) -> list[Finding]:
        findings: list[Finding] = []
        for line_no, line in enumerate(document.lines(), start=1):
            match = _YODA.search(line)
            if match is None:
                continue
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    path=document.path,
                    line=line_no,
                    message=(
                        f"Condition compares constant {match.group(1)} on the left "
                        f"of '{match.group(2)}'."
                    ),
                    evidence=clip_line(line),
                    suggestion=(
                        "Put the value being interrogated on the left and the more "
                        "stable value on the right."
                    ),
                )
            )
        return findings

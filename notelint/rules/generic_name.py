"""Generic variable-name rule."""

from __future__ import annotations

import re

from notelint.config import NamingConfig
from notelint.loader import Document
from notelint.rules.base import Finding, clip_line


class GenericNameRule:
    """Flags assignments to empty names like tmp or retval."""

    rule_id = "generic_name"

    def __init__(self, naming: NamingConfig | None = None) -> None:
        names = (naming or NamingConfig()).generic_names
        self._pattern: re.Pattern[str] | None = None
        if names:
            alternatives = "|".join(re.escape(name) for name in names)
            self._pattern = re.compile(rf"\b({alternatives})\s*(?<![=!<>])=(?!=)")

    def evaluate(self, document: Document) -> list[Finding]:
        findings: list[Finding] = []
        if self._pattern is None:
            return findings
        for line_no, line in enumerate(document.lines(), start=1):
            match = self._pattern.search(line)
            if match is None:
                continue
            name = match.group(1)
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    path=document.path,
                    line=line_no,
                    message=f"Generic name '{name}' says nothing about the value it holds.",
                    evidence=clip_line(line),
                    suggestion="Pick a name that describes the value's purpose or contents.",
                )
            )
        return findings

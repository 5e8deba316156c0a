"""Negated boolean-name rule."""

from __future__ import annotations

from notelint.config import NamingConfig
from notelint.loader import Document
from notelint.rules.base import Finding, clip_line
from notelint.rules.identifiers import boolean_names, split_words, strip_prefix


class NegatedBooleanRule:
    """Flags boolean names phrased as a negation, such as disable_ssl."""

    rule_id = "negated_boolean"

    def __init__(self, naming: NamingConfig | None = None) -> None:
        self._naming = naming or NamingConfig()

    def evaluate(self, document: Document) -> list[Finding]:
        negated = set(self._naming.negated_words)
        findings: list[Finding] = []

        for line_no, line in enumerate(document.lines(), start=1):
            for name in boolean_names(line):
                words, _ = strip_prefix(split_words(name), self._naming.boolean_prefixes)
                if not words or words[0] not in negated:
                    continue
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        path=document.path,
                        line=line_no,
                        message=f"Boolean '{name}' is phrased as a negation.",
                        evidence=clip_line(line),
                        suggestion=(
                            "Name the positive case (for example use_ssl instead of "
                            "disable_ssl) and invert the checks."
                        ),
                    )
                )
        return findings

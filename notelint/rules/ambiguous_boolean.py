"""Ambiguous boolean-name rule."""

from __future__ import annotations

from notelint.config import NamingConfig
from notelint.loader import Document
from notelint.rules.base import Finding, clip_line
from notelint.rules.identifiers import boolean_names, split_words, strip_prefix


class AmbiguousBooleanRule:
    """Flags boolean names that read like actions instead of yes/no questions."""

    rule_id = "ambiguous_boolean"

    def __init__(self, naming: NamingConfig | None = None) -> None:
        self._naming = naming or NamingConfig()

    def evaluate(self, document: Document) -> list[Finding]:
        prefixes = self._naming.boolean_prefixes
        ambiguous = set(self._naming.ambiguous_words)
        findings: list[Finding] = []

        for line_no, line in enumerate(document.lines(), start=1):
            for name in boolean_names(line):
                words, prefixed = strip_prefix(split_words(name), prefixes)
                if prefixed or not words:
                    continue
                hits = [word for word in words if word in ambiguous]
                if not hits:
                    continue
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        path=document.path,
                        line=line_no,
                        message=(
                            f"Boolean '{name}' is ambiguous: '{hits[0]}' could describe "
                            "an action rather than a state."
                        ),
                        evidence=clip_line(line),
                        suggestion=(
                            f"Prefix it with {'/'.join(prefixes)} so the true/false meaning "
                            "is obvious."
                        ),
                    )
                )
        return findings

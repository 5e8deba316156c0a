"""Rule evaluation across loaded documents."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from notelint.loader import Document, ReadError, load_documents
from notelint.rules.base import Finding, Rule

logger = logging.getLogger(__name__)

IO_RULE_ID = "io"


@dataclass(slots=True)
class DocumentReport:
    """Findings for a single document, in rule then line order."""

    path: str
    findings: list[Finding] = field(default_factory=list)


@dataclass(slots=True)
class LintResult:
    """Top-level output of one lint run."""

    documents: list[DocumentReport]
    rule_ids: list[str]

    @property
    def findings(self) -> list[Finding]:
        return [finding for report in self.documents for finding in report.findings]

    @property
    def total(self) -> int:
        return sum(len(report.findings) for report in self.documents)

    @property
    def exit_code(self) -> int:
        return 1 if self.total else 0

    def counts_by_rule(self) -> dict[str, int]:
        """Count findings per rule: active rules in registration order, then io."""
        counts = {rule_id: 0 for rule_id in self.rule_ids}
        for finding in self.findings:
            counts[finding.rule_id] = counts.get(finding.rule_id, 0) + 1
        return counts


def lint_document(document: Document, rules: list[Rule]) -> list[Finding]:
    """Apply every rule to ``document`` independently.

    A rule that raises is reported as one finding under its own id and does
    not stop the remaining rules.
    """
    findings: list[Finding] = []
    for rule in rules:
        try:
            # consume inside the guard: rules may return lazy iterables
            rule_findings = sorted(list(rule.evaluate(document)), key=_line_key)
        except Exception as exc:
            logger.error(
                "Rule %s failed on %s", rule.rule_id, document.path, exc_info=True
            )
            findings.append(
                Finding(
                    rule_id=rule.rule_id,
                    path=document.path,
                    line=None,
                    message=f"Rule failed: {exc.__class__.__name__}: {exc}",
                    suggestion="Report this as a notelint bug; other rules still ran.",
                )
            )
            continue
        findings.extend(rule_findings)
    return findings


def lint_documents(
    items: Iterable[Document | ReadError],
    rules: list[Rule],
    *,
    jobs: int = 1,
) -> LintResult:
    """Lint loaded documents, optionally on a thread pool, preserving input order."""
    if jobs < 1:
        raise ValueError(f"jobs must be >= 1, got {jobs}")

    def process(item: Document | ReadError) -> DocumentReport:
        if isinstance(item, ReadError):
            return DocumentReport(path=item.path, findings=[_read_error_finding(item)])
        return DocumentReport(path=item.path, findings=lint_document(item, rules))

    if jobs == 1:
        reports = [process(item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="notelint") as executor:
            reports = list(executor.map(process, items))

    result = LintResult(documents=reports, rule_ids=[rule.rule_id for rule in rules])
    logger.debug(
        "Linted %d document(s) with %d rule(s): %d finding(s)",
        len(reports),
        len(rules),
        result.total,
    )
    return result


def lint_path(
    root: Path,
    *,
    rules: list[Rule],
    jobs: int = 1,
    extensions: list[str] | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> LintResult:
    """Load every document under ``root`` and lint it.

    Raises ``RootNotFoundError`` when ``root`` does not exist.
    """
    items = load_documents(root, extensions=extensions, include=include, exclude=exclude)
    return lint_documents(items, rules, jobs=jobs)


def _read_error_finding(error: ReadError) -> Finding:
    return Finding(
        rule_id=IO_RULE_ID,
        path=error.path,
        line=None,
        message=f"Could not read: {error.reason}",
        suggestion="Save the file as UTF-8 text or exclude it.",
    )


def _line_key(finding: Finding) -> int:
    return finding.line if finding.line is not None else 0

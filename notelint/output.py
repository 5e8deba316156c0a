"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import Any

import click

from notelint import __version__
from notelint.engine import DocumentReport, LintResult
from notelint.rules.base import Finding


def render_text(result: LintResult) -> str:
    """Render findings per document followed by a per-rule summary."""
    lines: list[str] = []
    for report in result.documents:
        if not report.findings:
            continue
        lines.append(click.style(report.path, bold=True))
        for finding in report.findings:
            location = str(finding.line) if finding.line is not None else "-"
            lines.append(
                f"  {location}: "
                + click.style(f"[{finding.rule_id}]", fg="yellow")
                + f" {finding.message}"
            )
            if finding.evidence:
                lines.append(f"     evidence: {finding.evidence}")
            if finding.suggestion:
                lines.append(f"     follow-up: {finding.suggestion}")

    counts = result.counts_by_rule()
    flagged = {rule_id: count for rule_id, count in counts.items() if count}
    if flagged:
        lines.append(click.style("Summary:", bold=True))
        for rule_id, count in flagged.items():
            lines.append(f"- {rule_id}: {count}")

    affected = sum(1 for report in result.documents if report.findings)
    color = "red" if result.total else "green"
    lines.append(
        click.style(
            f"Total findings: {result.total} in {affected} of "
            f"{len(result.documents)} document(s)",
            fg=color,
            bold=True,
        )
    )
    return "\n".join(lines)


def render_json(result: LintResult, *, root: str) -> str:
    """Render stable JSON output for CI and automation."""
    return json.dumps(build_json_payload(result, root=root), sort_keys=True)


def build_json_payload(result: LintResult, *, root: str) -> dict[str, Any]:
    return {
        "documents": [_serialize_document(item) for item in result.documents],
        "findings": [_serialize_finding(item) for item in result.findings],
        "summary": {
            "by_rule": result.counts_by_rule(),
            "total": result.total,
        },
        "meta": {
            "generated_at": datetime.now(tz=UTC)
            .replace(microsecond=0)
            .isoformat()
            .replace("+00:00", "Z"),
            "root": root,
            "version": __version__,
        },
    }


def _serialize_document(report: DocumentReport) -> dict[str, Any]:
    return {
        "path": report.path,
        "findings": [_serialize_finding(item) for item in report.findings],
    }


def _serialize_finding(finding: Finding) -> dict[str, Any]:
    return {
        "rule_id": finding.rule_id,
        "path": finding.path,
        "line": finding.line,
        "message": finding.message,
        "evidence": finding.evidence,
        "suggestion": finding.suggestion,
    }

"""Reporter: aggregate findings and render them for people and tools."""

from __future__ import annotations

from typing import Any, Iterable

from dialoglint.linter.models import Finding, Severity, ValidationResult, format_path


def build_result(findings: Iterable[Finding], profile: str = "core") -> ValidationResult:
    """Count findings by severity, keeping their order."""
    ordered = tuple(findings)
    return ValidationResult(
        findings=ordered,
        error_count=sum(1 for f in ordered if f.severity is Severity.error),
        warning_count=sum(1 for f in ordered if f.severity is Severity.warning),
        profile=profile,
    )


def format_finding(finding: Finding) -> str:
    return f"{finding.severity.value}: {format_path(finding.path)} — {finding.message}"


def render_text(result: ValidationResult) -> str:
    """One line per finding: ``<severity>: <path> — <message>``."""
    return "\n".join(format_finding(f) for f in result.findings)


def to_records(result: ValidationResult) -> list[dict[str, Any]]:
    """Ordered, JSON-ready records for tooling."""
    return [
        {
            "ruleId": f.rule_id,
            "severity": f.severity.value,
            "path": list(f.path),
            "message": f.message,
            "category": f.category.value,
            "line": f.line,
            "column": f.column,
        }
        for f in result.findings
    ]


def summarize(result: ValidationResult) -> str:
    """Build a one-line human summary."""
    if not result.findings:
        return f"No issues found (profile: {result.profile})."

    parts = []
    if result.error_count:
        parts.append(f"{result.error_count} error(s)")
    if result.warning_count:
        parts.append(f"{result.warning_count} warning(s)")
    status = "passed" if result.passed else "failed"
    return f"Found {len(result.findings)} issue(s): {', '.join(parts)} — {status} (profile: {result.profile})."

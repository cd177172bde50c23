"""Tests for the reporter."""

from __future__ import annotations

from dialoglint.linter.models import Finding, FindingCategory, Severity
from dialoglint.linter.report import build_result, render_text, summarize, to_records


def _findings() -> list[Finding]:
    return [
        Finding(
            rule_id="question-required-fields",
            severity=Severity.error,
            path=("q1",),
            message="Question is missing required key(s): 'entity'.",
            line=1,
            column=1,
        ),
        Finding(
            rule_id="conditiongroup-defaultActions-recommended",
            severity=Severity.warning,
            path=("main", "actions", "cg1"),
            message="ConditionGroup has no 'defaultActions'.",
            line=9,
            column=7,
        ),
        Finding(
            rule_id="condition-requires-id",
            severity=Severity.error,
            path=("main", "actions", "cg1", "conditions", 0),
            message="Condition is missing required key 'id'.",
        ),
    ]


class TestBuildResult:
    def test_counts_by_severity(self) -> None:
        result = build_result(_findings())
        assert result.error_count == 2
        assert result.warning_count == 1
        assert result.passed is False

    def test_order_preserved(self) -> None:
        result = build_result(_findings())
        assert [f.rule_id for f in result.findings] == [
            "question-required-fields",
            "conditiongroup-defaultActions-recommended",
            "condition-requires-id",
        ]

    def test_empty_passes(self) -> None:
        result = build_result([], profile="init-prefix")
        assert result.passed is True
        assert result.error_count == 0
        assert result.profile == "init-prefix"

    def test_warnings_only_pass(self) -> None:
        result = build_result(_findings()[1:2])
        assert result.passed is True


class TestRenderText:
    def test_one_line_per_finding(self) -> None:
        text = render_text(build_result(_findings()))
        assert text.splitlines() == [
            "error: q1 — Question is missing required key(s): 'entity'.",
            "warning: main.actions.cg1 — ConditionGroup has no 'defaultActions'.",
            "error: main.actions.cg1.conditions[0] — Condition is missing required key 'id'.",
        ]

    def test_root_path(self) -> None:
        finding = Finding(rule_id="x", severity=Severity.error, path=(), message="m")
        assert render_text(build_result([finding])) == "error: <root> — m"

    def test_empty(self) -> None:
        assert render_text(build_result([])) == ""


class TestToRecords:
    def test_records(self) -> None:
        records = to_records(build_result(_findings()))
        assert len(records) == 3
        assert records[0] == {
            "ruleId": "question-required-fields",
            "severity": "error",
            "path": ["q1"],
            "message": "Question is missing required key(s): 'entity'.",
            "category": "rule_violation",
            "line": 1,
            "column": 1,
        }
        assert records[2]["path"] == ["main", "actions", "cg1", "conditions", 0]
        assert records[2]["line"] is None

    def test_internal_marker(self) -> None:
        finding = Finding(
            rule_id="broken",
            severity=Severity.error,
            category=FindingCategory.internal_rule_error,
            message="[internal] rule 'broken' failed",
        )
        assert to_records(build_result([finding]))[0]["category"] == "internal_rule_error"


class TestSummarize:
    def test_no_findings(self) -> None:
        assert summarize(build_result([])) == "No issues found (profile: core)."

    def test_with_findings(self) -> None:
        summary = summarize(build_result(_findings()))
        assert "3 issue(s)" in summary
        assert "2 error(s)" in summary
        assert "1 warning(s)" in summary
        assert "failed" in summary

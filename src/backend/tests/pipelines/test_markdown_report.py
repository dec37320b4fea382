from datetime import datetime, timezone

from common.rules_engine.models import Finding, RuleRunReport, Severity, count_by_rule, count_by_severity
from pipelines.markdown_report import parse_summary_counts, render_markdown, summary_counts
from pipelines.screens import run_ui_review


def _report(findings, screens, rule_ids):
    return RuleRunReport(
        run_id="run-1",
        generated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        screens=screens,
        rule_ids=rule_ids,
        findings=findings,
        totals_by_rule=count_by_rule(findings),
        totals_by_severity=count_by_severity(findings),
    )


def test_summary_counts_from_findings():
    findings = [
        Finding(rule_id="fitts-law", screen_id="A", element_ref="#x", severity=Severity.ERROR, message="m"),
        Finding(rule_id="fitts-law", screen_id="A", element_ref="#y", severity=Severity.ERROR, message="m"),
        Finding(rule_id="feedback", screen_id="B", severity=Severity.INFO, message="m"),
    ]
    report = _report(findings, ["A", "B", "C"], ["fitts-law", "feedback", "hicks-law"])
    assert summary_counts(report) == {
        "fitts-law": {"pass": 2, "info": 0, "warning": 0, "error": 2},
        "feedback": {"pass": 2, "info": 1, "warning": 0, "error": 0},
        "hicks-law": {"pass": 3, "info": 0, "warning": 0, "error": 0},
    }


def test_rendered_summary_round_trips(screens_root):
    report = run_ui_review(screens_root)
    markdown = render_markdown(report)
    assert parse_summary_counts(markdown) == summary_counts(report)


def test_render_groups_must_fix_and_suggested():
    findings = [
        Finding(
            rule_id="error-prevention",
            screen_id="SCR-SETTING-002-account",
            element_ref="#btn_delete",
            severity=Severity.ERROR,
            message="Destructive action '刪除帳號' has no confirmation",
            suggestion="Confirm first.",
        ),
        Finding(rule_id="cognitive-load", screen_id="SCR-SETTING-002-account", severity=Severity.WARNING, message="9 > 7"),
    ]
    markdown = render_markdown(_report(findings, ["SCR-SETTING-002-account"], ["cognitive-load", "error-prevention"]))
    must_fix = markdown.split("## Must fix", 1)[1].split("## Suggested fixes", 1)[0]
    suggested = markdown.split("## Suggested fixes", 1)[1]
    assert "#btn_delete" in must_fix and "(fix: Confirm first.)" in must_fix
    assert "9 > 7" in suggested and "#btn_delete" not in suggested
    assert "- error: 1" in markdown and "- warning: 1" in markdown


def test_empty_report_renders():
    markdown = render_markdown(_report([], ["A"], ["fitts-law"]))
    assert parse_summary_counts(markdown) == {"fitts-law": {"pass": 1, "info": 0, "warning": 0, "error": 0}}
    assert markdown.count("None.") == 2

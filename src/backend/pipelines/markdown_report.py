from __future__ import annotations

import re
from typing import Dict, List

from common.rules_engine.models import Finding, RuleRunReport, Severity, count_by_rule_and_severity

COUNT_COLUMNS = ("pass", "info", "warning", "error")

_TABLE_ROW = re.compile(r"^\|\s*`([^`]+)`\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*(\d+)\s*\|\s*$")


def summary_counts(report: RuleRunReport) -> Dict[str, Dict[str, int]]:
    """Per rule: screens with no finding ("pass") plus finding counts per severity."""
    by_rule = count_by_rule_and_severity(report.findings)
    out: Dict[str, Dict[str, int]] = {}
    for rule_id in report.rule_ids:
        flagged = {f.screen_id for f in report.findings if f.rule_id == rule_id}
        severities = by_rule.get(rule_id, {})
        out[rule_id] = {
            "pass": len([s for s in report.screens if s not in flagged]),
            "info": severities.get(Severity.INFO, 0),
            "warning": severities.get(Severity.WARNING, 0),
            "error": severities.get(Severity.ERROR, 0),
        }
    return out


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


def _finding_line(f: Finding) -> str:
    where = f"`{f.screen_id}`"
    if f.element_ref:
        where = f"{where} `{f.element_ref}`"
    line = f"- [{f.rule_id}] {where}: {f.message}"
    if f.suggestion:
        line = f"{line} (fix: {f.suggestion})"
    return line


def render_markdown(report: RuleRunReport) -> str:
    lines: List[str] = [
        "# UI Psychology Review",
        "",
        f"Generated at: {report.generated_at.isoformat()}",
        f"Run id: {report.run_id}",
        f"Screens: {len(report.screens)}",
        "",
        "## Summary",
        "",
        "| Rule | Pass | Info | Warning | Error |",
        "|---|---|---|---|---|",
    ]
    for rule_id, counts in summary_counts(report).items():
        cells = " | ".join(str(counts[c]) for c in COUNT_COLUMNS)
        lines.append(f"| `{_escape_cell(rule_id)}` | {cells} |")

    lines.append("")
    lines.append("## Totals")
    for severity in Severity:
        lines.append(f"- {severity.value}: {report.totals_by_severity.get(severity, 0)}")

    must_fix = [f for f in report.findings if f.severity == Severity.ERROR]
    suggested = [f for f in report.findings if f.severity != Severity.ERROR]

    lines.append("")
    lines.append("## Must fix")
    if must_fix:
        lines.extend(_finding_line(f) for f in must_fix)
    else:
        lines.append("None.")

    lines.append("")
    lines.append("## Suggested fixes")
    if suggested:
        lines.extend(_finding_line(f) for f in suggested)
    else:
        lines.append("None.")
    lines.append("")
    return "\n".join(lines)


def parse_summary_counts(markdown: str) -> Dict[str, Dict[str, int]]:
    """Read the summary table of a rendered report back into per-rule counts."""
    out: Dict[str, Dict[str, int]] = {}
    for line in markdown.splitlines():
        m = _TABLE_ROW.match(line)
        if not m:
            continue
        out[m.group(1)] = {col: int(m.group(i + 2)) for i, col in enumerate(COUNT_COLUMNS)}
    return out

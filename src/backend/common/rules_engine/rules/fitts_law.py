from __future__ import annotations

from typing import List

from ..config import FittsLawRuleConfig
from ..context import RuleContext, is_clickable
from ..models import Finding, Severity
from ..registry import register_rule
from ..rule import Rule


def _fmt(value: float) -> str:
    return f"{value:g}"


@register_rule
class FITTS_LAW(Rule):
    rule_id = "fitts-law"
    rule_title = "Touch targets are large enough to hit reliably"
    principle_reference = "Fitts' Law"
    config_model = FittsLawRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        findings: List[Finding] = []
        for el in ctx.elements():
            if not is_clickable(el):
                continue
            # No resolved geometry: nothing to assert either way.
            if el.width is None or el.height is None:
                continue
            smallest = min(el.width, el.height)
            if smallest < cfg.min_touch_target:
                findings.append(
                    self.finding(
                        ctx,
                        severity=Severity.ERROR,
                        element=el,
                        message=(
                            f"Touch target {_fmt(el.width)}x{_fmt(el.height)}px is below "
                            f"{_fmt(cfg.min_touch_target)}px"
                        ),
                        suggestion=f"Enlarge the hit area to at least {_fmt(cfg.min_touch_target)}px (padding or min-height).",
                    )
                )
        return findings

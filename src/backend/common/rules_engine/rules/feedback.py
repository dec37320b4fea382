from __future__ import annotations

from typing import List

from ..config import FeedbackRuleConfig
from ..context import RuleContext, is_loading_indicator, is_submit_control
from ..models import Finding, Severity
from ..registry import register_rule
from ..rule import Rule


@register_rule
class FEEDBACK(Rule):
    rule_id = "feedback"
    rule_title = "Submitting a form shows progress feedback"
    principle_reference = "Feedback / visibility of system status"
    config_model = FeedbackRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled or cfg.loading_handled_externally:
            return []

        elements = list(ctx.elements())
        if any(is_loading_indicator(el) for el in elements):
            return []

        findings: List[Finding] = []
        for form in (el for el in elements if el.tag == "form"):
            if any(is_submit_control(el) for el in form.descendants()):
                findings.append(
                    self.finding(
                        ctx,
                        severity=Severity.INFO,
                        element=form,
                        message="Form submits without a loading indicator",
                        suggestion="Show a spinner or disable the submit button while the request is in flight.",
                    )
                )
        return findings

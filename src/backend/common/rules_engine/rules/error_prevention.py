from __future__ import annotations

from typing import List

from ..config import ErrorPreventionRuleConfig
from ..context import RuleContext, accessible_text, contains_any, has_confirmation, is_clickable
from ..models import Finding, Severity
from ..registry import register_rule
from ..rule import Rule


@register_rule
class ERROR_PREVENTION(Rule):
    """Destructive actions ask for confirmation.

    Best-effort keyword match: "Remove ads" is flagged as well, and a destructive button
    labelled only with an icon is not.
    """

    rule_id = "error-prevention"
    rule_title = "Destructive actions require confirmation"
    principle_reference = "Error prevention"
    config_model = ErrorPreventionRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        findings: List[Finding] = []
        for el in ctx.elements():
            if not is_clickable(el):
                continue
            keyword = contains_any(accessible_text(el), cfg.dangerous_keywords)
            if keyword is None or has_confirmation(el):
                continue
            label = accessible_text(el)
            findings.append(
                self.finding(
                    ctx,
                    severity=Severity.ERROR,
                    element=el,
                    message=f"Destructive action '{label}' has no confirmation",
                    suggestion="Open a confirmation dialog (or offer undo) before performing the action.",
                )
            )
        return findings

from __future__ import annotations

from typing import List

from ..config import CognitiveLoadRuleConfig
from ..context import RuleContext, is_form_field, is_interactive, is_primary_action
from ..models import Finding, Severity
from ..registry import register_rule
from ..rule import Rule


@register_rule
class COGNITIVE_LOAD(Rule):
    rule_id = "cognitive-load"
    rule_title = "Screen keeps choices and inputs within working-memory limits"
    principle_reference = "Cognitive load (Miller's 7±2)"
    config_model = CognitiveLoadRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        primary = interactive = fields = 0
        for el in ctx.elements():
            if is_primary_action(el):
                primary += 1
            if is_interactive(el):
                interactive += 1
            if is_form_field(el):
                fields += 1

        findings: List[Finding] = []
        if primary > cfg.max_primary_buttons:
            findings.append(
                self.finding(
                    ctx,
                    severity=Severity.WARNING,
                    message=f"Too many primary actions: {primary} > {cfg.max_primary_buttons}",
                    suggestion="Keep one primary action per screen; demote the rest to secondary or text buttons.",
                )
            )
        if interactive > cfg.max_interactive_elements:
            findings.append(
                self.finding(
                    ctx,
                    severity=Severity.WARNING,
                    message=f"Too many interactive elements: {interactive} > {cfg.max_interactive_elements}",
                    suggestion="Group related controls or move secondary ones behind a menu or a second screen.",
                )
            )
        if fields > cfg.max_form_fields:
            findings.append(
                self.finding(
                    ctx,
                    severity=Severity.WARNING,
                    message=f"Too many form fields: {fields} > {cfg.max_form_fields}",
                    suggestion="Split the form into steps or defer optional fields.",
                )
            )
        return findings

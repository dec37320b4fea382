from __future__ import annotations

from typing import Dict, List, Optional

from ..config import PrerequisiteFlowRuleConfig
from ..context import RuleContext, contains_any
from ..models import Finding, Severity
from ..registry import register_rule
from ..rule import Rule


@register_rule
class PREREQUISITE_FLOW(Rule):
    """Restricted modules are reached only through the screens that establish their context.

    Screen ids are matched by case-insensitive substring. By default a screen matching a
    restricted pattern (TRAIN) may be entered from a gatekeeper screen (DASH) or from another
    screen of the same restricted module. `allowed_predecessors` replaces the gatekeeper list
    for a given restricted pattern.
    """

    rule_id = "prerequisite-flow"
    rule_title = "Dependent screens are reached through their prerequisite screens"
    principle_reference = "Prerequisite flow"
    config_model = PrerequisiteFlowRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled or ctx.navigation is None:
            return []

        findings: List[Finding] = []
        for edge in ctx.navigation.edges_from(ctx.screen_id):
            restricted = contains_any(edge.target, cfg.restricted_patterns)
            if restricted is None:
                continue
            if contains_any(edge.source, [restricted]):
                continue
            allowed = self._allowed_sources(cfg.allowed_predecessors, restricted)
            if allowed is None:
                allowed = cfg.gatekeeper_patterns
            if contains_any(edge.source, allowed):
                continue
            gate = " / ".join(allowed) or "its prerequisite screens"
            findings.append(
                Finding(
                    rule_id=self.rule_id,
                    screen_id=ctx.screen_id,
                    element_ref=edge.element_ref,
                    severity=Severity.WARNING,
                    message=f"{edge.source} links directly to {edge.target}, bypassing {gate}",
                    suggestion=f"Route users through {gate} before entering {restricted} screens.",
                )
            )
        return findings

    @staticmethod
    def _allowed_sources(allowed_predecessors: Dict[str, List[str]], restricted: str) -> Optional[List[str]]:
        for pattern, sources in allowed_predecessors.items():
            if pattern.lower() == restricted.lower():
                return sources
        return None

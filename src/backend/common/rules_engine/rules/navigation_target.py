from __future__ import annotations

import re
from typing import List, Optional, Set, Tuple

from ..config import NavigationTargetRuleConfig
from ..context import RuleContext, has_confirmation, is_close_control, is_settings_row, is_submit_control
from ..models import Element, Finding, Severity
from ..registry import register_rule
from ..rule import Rule

_VOID_ONCLICK = re.compile(r"^\s*(javascript:)?\s*void\s*\(\s*0\s*\)\s*;?\s*$", re.IGNORECASE)
_ACTION_ATTRS = (
    "data-action",
    "data-bs-toggle",
    "data-toggle",
    "data-bs-dismiss",
    "data-dismiss",
    "form",
    "disabled",
    "aria-disabled",
)

_WIRE_HINT = "Add onclick=\"location.href='TARGET.html'\" or a real href, or show an alert for unimplemented actions."
_BACK_HINT = "Close and back controls must navigate: add onclick=\"history.back()\" or point it at the parent screen."
_ROW_HINT = "Settings rows must open their sub-screen: add onclick=\"location.href='TARGET.html'\" or show an alert."

# (reason, severity, suggestion)
MissingTarget = Tuple[str, Severity, str]


def _missing_target(el: Element, form_members: Set[int], nav_prefixes: List[str]) -> Optional[MissingTarget]:
    onclick = el.attributes.get("onclick")
    if onclick is not None and not onclick.strip():
        return "has an empty onclick handler", Severity.WARNING, _WIRE_HINT
    if onclick is not None and _VOID_ONCLICK.match(onclick):
        if any(el.element_id.startswith(p) for p in nav_prefixes) or is_settings_row(el):
            return "is a navigation control whose onclick is void(0)", Severity.WARNING, _WIRE_HINT
        return None
    if el.tag == "a" and onclick is None:
        href = el.attributes.get("href")
        if href is not None and href.strip() in ("", "#"):
            return "links to '#' and has no navigation target", Severity.WARNING, _WIRE_HINT
        return None
    if el.tag == "button" and onclick is None:
        if id(el) in form_members and is_submit_control(el):
            return None
        if has_confirmation(el) or any(el.has_attr(a) for a in _ACTION_ATTRS):
            return None
        if is_close_control(el):
            return "is a close/exit button with no onclick handler", Severity.ERROR, _BACK_HINT
        if is_settings_row(el):
            return "is a settings row with no onclick handler", Severity.ERROR, _ROW_HINT
        return "is a button with no onclick handler", Severity.WARNING, _WIRE_HINT
    return None


@register_rule
class NAVIGATION_TARGET(Rule):
    rule_id = "navigation-target"
    rule_title = "Every clickable element leads somewhere"
    principle_reference = "Navigation integrity"
    config_model = NavigationTargetRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        elements = list(ctx.elements())
        form_members = {id(d) for el in elements if el.tag == "form" for d in el.descendants()}

        findings: List[Finding] = []
        for el in elements:
            missing = _missing_target(el, form_members, cfg.navigation_id_prefixes)
            if missing is None:
                continue
            reason, severity, suggestion = missing
            findings.append(
                self.finding(
                    ctx,
                    severity=severity,
                    element=el,
                    message=f"Element {el.ref} {reason}",
                    suggestion=suggestion,
                )
            )

        nav = ctx.navigation
        if cfg.check_dead_edges and nav is not None and nav.known_screens:
            known = set(nav.known_screens)
            for edge in nav.edges_from(ctx.screen_id):
                if edge.target in known:
                    continue
                findings.append(
                    Finding(
                        rule_id=self.rule_id,
                        screen_id=ctx.screen_id,
                        element_ref=edge.element_ref,
                        severity=Severity.ERROR,
                        message=f"Navigation target '{edge.target}' does not exist",
                        suggestion="Create the target screen or point the link at an existing one.",
                    )
                )
        return findings

from __future__ import annotations

from typing import List, Set

from ..config import HicksLawRuleConfig
from ..context import RuleContext, is_clickable, role
from ..models import Element, Finding, Severity
from ..registry import register_rule
from ..rule import Rule

_GROUP_ROLES = {"radiogroup", "menu", "listbox", "menubar"}
_OPTION_ROLES = {"radio", "menuitem", "menuitemradio", "menuitemcheckbox", "option"}
_NAV_CLASS_FRAGMENTS = ("bottom-nav", "bottom-navigation", "tab-bar", "tabbar", "bottomnav")


def _is_choice_group(el: Element) -> bool:
    return el.tag in ("select", "datalist") or role(el) in _GROUP_ROLES


def _options(group: Element) -> List[Element]:
    out: List[Element] = []
    for el in group.descendants():
        if el.tag == "option" or role(el) in _OPTION_ROLES:
            out.append(el)
        elif el.tag == "input" and el.attr("type").lower() == "radio":
            out.append(el)
    return out


def _is_bottom_nav(el: Element) -> bool:
    if role(el) == "tablist":
        return True
    if el.tag != "nav" and role(el) != "navigation":
        return False
    if any(el.class_contains(f) for f in _NAV_CLASS_FRAGMENTS):
        return True
    return "bottom" in el.attr("data-nav").lower() or el.attr("data-nav").lower() == "tabs"


def _nav_items(nav: Element) -> List[Element]:
    items = [el for el in nav.descendants() if role(el) == "tab"]
    if items:
        return items
    return [el for el in nav.descendants() if is_clickable(el)]


@register_rule
class HICKS_LAW(Rule):
    rule_id = "hicks-law"
    rule_title = "Choice sets stay small enough to decide quickly"
    principle_reference = "Hick's Law"
    config_model = HicksLawRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        findings: List[Finding] = []
        # A tablist inside a bottom nav belongs to the nav already counted.
        counted_navs: Set[int] = set()
        for el in ctx.elements():
            if _is_choice_group(el):
                count = len(_options(el))
                if count > cfg.max_menu_items:
                    findings.append(
                        self.finding(
                            ctx,
                            severity=Severity.WARNING,
                            element=el,
                            message=f"Too many options in one choice group: {count} > {cfg.max_menu_items}",
                            suggestion="Group options into categories, or add search/filtering.",
                        )
                    )
            if _is_bottom_nav(el) and id(el) not in counted_navs:
                counted_navs.update(id(d) for d in el.descendants())
                count = len(_nav_items(el))
                if count > cfg.max_bottom_nav_items:
                    findings.append(
                        self.finding(
                            ctx,
                            severity=Severity.WARNING,
                            element=el,
                            message=f"Too many navigation tabs: {count} > {cfg.max_bottom_nav_items}",
                            suggestion="Keep 3-5 destinations in bottom navigation; move the rest under a 'More' tab.",
                        )
                    )
        return findings

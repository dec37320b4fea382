from __future__ import annotations

from typing import List

from ..config import ProgressiveDisclosureRuleConfig
from ..context import RuleContext, accessible_text, is_clickable, is_progress_indicator, matches_any, role
from ..models import Element, Finding, Severity
from ..registry import register_rule
from ..rule import Rule

_PAGINATION_CLASS_FRAGMENTS = ("pagination", "load-more", "loadmore", "infinite")
_LOAD_MORE_TEXTS = {"load more", "show more", "more", "next", "載入更多", "顯示更多", "更多", "下一頁"}


def _list_items(el: Element) -> List[Element]:
    return [c for c in el.children if c.tag == "li" or role(c) == "listitem"]


def _is_list(el: Element) -> bool:
    return el.tag in ("ul", "ol") or role(el) == "list"


def _is_pagination_control(el: Element) -> bool:
    if any(el.class_contains(f) for f in _PAGINATION_CLASS_FRAGMENTS):
        return True
    if el.attr("aria-label").lower() == "pagination":
        return True
    return is_clickable(el) and accessible_text(el).lower() in _LOAD_MORE_TEXTS


@register_rule
class PROGRESSIVE_DISCLOSURE(Rule):
    rule_id = "progressive-disclosure"
    rule_title = "Information is revealed step by step"
    principle_reference = "Progressive disclosure"
    config_model = ProgressiveDisclosureRuleConfig

    def evaluate(self, ctx: RuleContext) -> List[Finding]:
        cfg = self.get_config(ctx)
        if not cfg.enabled:
            return []

        elements = list(ctx.elements())
        findings: List[Finding] = []

        if matches_any(ctx.screen_id, cfg.multi_step_patterns) and not any(
            is_progress_indicator(el) for el in elements
        ):
            findings.append(
                self.finding(
                    ctx,
                    severity=Severity.WARNING,
                    message="Multi-step screen has no progress indicator",
                    suggestion="Show the current step (e.g. 'Step 2 of 4' or a progress bar).",
                )
            )

        has_pagination = any(_is_pagination_control(el) for el in elements)
        if not has_pagination:
            for el in elements:
                if not _is_list(el):
                    continue
                count = len(_list_items(el))
                if count > cfg.max_list_items_without_pagination:
                    findings.append(
                        self.finding(
                            ctx,
                            severity=Severity.INFO,
                            element=el,
                            message=(
                                f"List shows {count} items without pagination: "
                                f"{count} > {cfg.max_list_items_without_pagination}"
                            ),
                            suggestion="Paginate the list or add a 'load more' control.",
                        )
                    )
        return findings

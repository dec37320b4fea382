from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Type

from .config import RuleConfigBase
from .context import RuleContext
from .models import Element, Finding, Severity


class Rule(ABC):
    rule_id: str
    rule_title: str
    principle_reference: str
    config_model: Type[RuleConfigBase]

    def __init__(self):
        if not getattr(self, "rule_id", None):
            raise ValueError("Rule must define rule_id")

    def get_config(self, ctx: RuleContext):
        return ctx.config.get_rule_config(self.rule_id, self.config_model)

    def finding(
        self,
        ctx: RuleContext,
        *,
        severity: Severity,
        message: str,
        suggestion: str = "",
        element: Optional[Element] = None,
    ) -> Finding:
        return Finding(
            rule_id=self.rule_id,
            screen_id=ctx.screen_id,
            element_ref=element.ref if element is not None else None,
            severity=severity,
            message=message,
            suggestion=suggestion,
        )

    @abstractmethod
    def evaluate(self, ctx: RuleContext) -> List[Finding]:  # pragma: no cover
        raise NotImplementedError

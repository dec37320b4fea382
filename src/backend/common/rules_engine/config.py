from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

T = TypeVar("T", bound=BaseModel)


class ConfigurationError(ValueError):
    """Rules configuration is unusable (unknown rule key, bad threshold value, unreadable file)."""


class RuleConfigBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    enabled: bool = True


class CognitiveLoadRuleConfig(RuleConfigBase):
    max_primary_buttons: int = 3
    max_interactive_elements: int = 15
    max_form_fields: int = 7


class FittsLawRuleConfig(RuleConfigBase):
    # Minimum of width/height, in CSS px (44px per iOS HIG; Material uses 48dp).
    min_touch_target: float = 44


class HicksLawRuleConfig(RuleConfigBase):
    max_menu_items: int = 7
    max_bottom_nav_items: int = 5


class ProgressiveDisclosureRuleConfig(RuleConfigBase):
    # Regexes (case-insensitive) matched against the screen id.
    multi_step_patterns: List[str] = Field(
        default_factory=lambda: [r"step[-_]?\d", r"wizard", r"onboard", r"checkout"]
    )
    max_list_items_without_pagination: int = 20

    @field_validator("multi_step_patterns")
    @classmethod
    def _patterns_compile(cls, value: List[str]) -> List[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern {pattern!r}: {exc}") from exc
        return value


class PrerequisiteFlowRuleConfig(RuleConfigBase):
    # Substring patterns (case-insensitive) matched against screen ids.
    restricted_patterns: List[str] = Field(default_factory=lambda: ["TRAIN"])
    gatekeeper_patterns: List[str] = Field(default_factory=lambda: ["DASH"])
    # Explicit variant: restricted pattern -> source patterns allowed to link into it.
    # When a restricted pattern has an entry here it replaces `gatekeeper_patterns` for that pattern.
    allowed_predecessors: Dict[str, List[str]] = Field(default_factory=dict)


class ErrorPreventionRuleConfig(RuleConfigBase):
    dangerous_keywords: List[str] = Field(
        default_factory=lambda: [
            "delete",
            "remove",
            "reset",
            "logout",
            "log out",
            "sign out",
            "刪除",
            "移除",
            "重設",
            "重置",
            "登出",
            "清除",
        ]
    )


class FeedbackRuleConfig(RuleConfigBase):
    loading_handled_externally: bool = False


class NavigationTargetRuleConfig(RuleConfigBase):
    # Element id prefixes that mark an element as a navigation control.
    navigation_id_prefixes: List[str] = Field(
        default_factory=lambda: ["cell_", "btn_", "lnk_", "nav_"]
    )
    # Only report edges whose target is missing from the corpus when the graph knows its screens.
    check_dead_edges: bool = True


class UIRulesConfig(BaseModel):
    """Configuration for all rules, keyed by rule id.

    Rules pull their typed config via `get_rule_config`. Omitted keys fall back to defaults.
    """

    model_config = ConfigDict(frozen=True)

    rules: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    def get_rule_config(
        self,
        rule_id: str,
        model: Type[T],
        default: Optional[T] = None,
    ) -> T:
        if rule_id not in self.rules:
            if default is not None:
                return default
            return model()  # type: ignore[call-arg]
        raw = self.rules.get(rule_id, {})
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid config for rule '{rule_id}': {exc}") from exc


def load_rules_config(path: Path) -> UIRulesConfig:
    """Load a rules config file (YAML or JSON).

    Accepts either `{"rules": {...}}` or the bare `{rule_id: {...}}` mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read rules config {path}: {exc}") from exc

    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc
    else:
        import yaml

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return UIRulesConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Rules config {path} must be a mapping.")
    rules = data.get("rules", data)
    if not isinstance(rules, dict) or not all(isinstance(v, dict) for v in rules.values()):
        raise ConfigurationError(f"Rules config {path} must map rule ids to objects.")
    return UIRulesConfig(rules=rules)

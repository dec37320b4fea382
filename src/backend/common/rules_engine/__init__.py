"""Source-agnostic UI review rules engine.

This package intentionally contains only domain logic:
- Rule inputs are parsed screen documents + a navigation graph + rules config.
- No HTML parsing, file discovery, or report rendering lives here.
"""

from .config import ConfigurationError, UIRulesConfig, load_rules_config
from .context import RuleContext
from .models import (
    Document,
    Element,
    Finding,
    NavigationEdge,
    NavigationGraph,
    RuleRunReport,
    Severity,
)
from .runner import RulesRunner

# Import built-in rules so they self-register with the global registry.
from . import rules as _builtin_rules  # noqa: F401

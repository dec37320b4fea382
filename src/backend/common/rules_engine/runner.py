from __future__ import annotations

import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from .config import ConfigurationError, UIRulesConfig
from .context import RuleContext
from .models import (
    Document,
    Finding,
    NavigationGraph,
    RuleRunReport,
    count_by_rule,
    count_by_severity,
)
from .registry import registry
from .rule import Rule

logger = logging.getLogger(__name__)


class RulesRunner:
    """Evaluates a fixed set of rules against screen documents.

    Config is validated once here; a bad config raises `ConfigurationError` before any
    document is looked at.
    """

    def __init__(self, config: Optional[UIRulesConfig] = None, rules: Optional[Iterable[Rule]] = None):
        self._config = config or UIRulesConfig()
        self._rules = list(rules) if rules is not None else registry.create_all()
        self._validate_config()
        self._active = [r for r in self._rules if self._config.get_rule_config(r.rule_id, r.config_model).enabled]

    @property
    def config(self) -> UIRulesConfig:
        return self._config

    @property
    def rule_ids(self) -> List[str]:
        return [r.rule_id for r in self._active]

    def _validate_config(self) -> None:
        known = {r.rule_id for r in self._rules}
        unknown = sorted(set(self._config.rules) - known)
        if unknown:
            raise ConfigurationError(f"Unknown rule id(s) in config: {', '.join(unknown)}")
        for rule in self._rules:
            self._config.get_rule_config(rule.rule_id, rule.config_model)

    def evaluate(self, document: Document, navigation: Optional[NavigationGraph] = None) -> List[Finding]:
        ctx = RuleContext(document=document, navigation=navigation, config=self._config)
        findings: List[Finding] = []
        for rule in self._active:
            found = rule.evaluate(ctx)
            if found:
                logger.debug("%s: %s produced %d finding(s)", document.screen_id, rule.rule_id, len(found))
            findings.extend(found)
        return findings

    def run(
        self,
        documents: Sequence[Document],
        navigation: Optional[NavigationGraph] = None,
        *,
        max_workers: Optional[int] = None,
    ) -> RuleRunReport:
        documents = list(documents)
        if max_workers is not None and max_workers > 1 and len(documents) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                per_document = list(pool.map(lambda d: self.evaluate(d, navigation), documents))
        else:
            per_document = [self.evaluate(d, navigation) for d in documents]

        findings = [f for batch in per_document for f in batch]
        logger.info(
            "Evaluated %d screen(s) against %d rule(s): %d finding(s)",
            len(documents),
            len(self._active),
            len(findings),
        )
        return RuleRunReport(
            run_id=str(uuid.uuid4()),
            generated_at=datetime.now(timezone.utc),
            screens=[d.screen_id for d in documents],
            rule_ids=self.rule_ids,
            findings=findings,
            totals_by_rule=count_by_rule(findings),
            totals_by_severity=count_by_severity(findings),
        )

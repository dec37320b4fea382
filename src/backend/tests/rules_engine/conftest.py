import os
import sys


# Ensure `src/backend` is on sys.path so imports like `import common...` work.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest

from adapters.html import document_from_html, navigation_graph_from_documents
from common.rules_engine.config import UIRulesConfig
from common.rules_engine.context import RuleContext
from common.rules_engine.models import Document, NavigationEdge, NavigationGraph


@pytest.fixture
def make_document():
    def _make(body: str, *, screen_id: str = "SCR-HOME-001-main") -> Document:
        html = f"<!DOCTYPE html><html><head><title>{screen_id}</title></head><body>{body}</body></html>"
        return document_from_html(html, screen_id)

    return _make


@pytest.fixture
def make_graph():
    def _make(*edges: tuple[str, str], known_screens=()) -> NavigationGraph:
        return NavigationGraph(
            edges=tuple(NavigationEdge(source=s, target=t, trigger="onclick") for s, t in edges),
            known_screens=tuple(known_screens),
        )

    return _make


@pytest.fixture
def graph_of():
    return navigation_graph_from_documents


@pytest.fixture
def make_ctx():
    def _make(
        *,
        document: Document,
        client_rules: dict | None = None,
        navigation: NavigationGraph | None = None,
    ) -> RuleContext:
        cfg = UIRulesConfig(rules=client_rules or {})
        return RuleContext(document=document, navigation=navigation, config=cfg)

    return _make

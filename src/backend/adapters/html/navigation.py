from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Iterable, List, Optional

from common.rules_engine.models import Document, NavigationEdge, NavigationGraph

EXTERNAL_PREFIXES = ("http://", "https://", "mailto:", "tel:", "javascript:", "data:", "//")

_ONCLICK_TARGET = re.compile(
    r"""(?:location\.href|window\.location(?:\.href)?|location)\s*=\s*['"]([^'"]+)['"]"""
    r"""|location\.(?:assign|replace)\(\s*['"]([^'"]+)['"]\s*\)""",
    re.IGNORECASE,
)


def screen_id_from_target(target: str) -> Optional[str]:
    """Map a link target ('../train/SCR-TRAIN-001-select.html?x=1#top') to a screen id."""
    target = (target or "").strip()
    if not target or target.startswith("#") or target.lower().startswith(EXTERNAL_PREFIXES):
        return None
    path = target.split("#", 1)[0].split("?", 1)[0]
    if not path:
        return None
    stem = PurePosixPath(path.replace("\\", "/")).stem
    return stem or None


def _onclick_targets(onclick: str) -> List[str]:
    out: List[str] = []
    for m in _ONCLICK_TARGET.finditer(onclick):
        out.append(m.group(1) or m.group(2))
    return out


def navigation_edges(document: Document) -> List[NavigationEdge]:
    """Outbound navigation edges of one screen, in document order."""
    edges: List[NavigationEdge] = []
    for el in document.elements():
        onclick = el.attr("onclick")
        for raw in _onclick_targets(onclick) if onclick else []:
            target = screen_id_from_target(raw)
            if target:
                edges.append(
                    NavigationEdge(source=document.screen_id, target=target, element_ref=el.ref, trigger="onclick")
                )
        if el.tag == "a" and el.has_attr("href"):
            target = screen_id_from_target(el.attr("href"))
            if target:
                edges.append(
                    NavigationEdge(source=document.screen_id, target=target, element_ref=el.ref, trigger="href")
                )
    return edges


def navigation_graph_from_documents(documents: Iterable[Document]) -> NavigationGraph:
    documents = list(documents)
    edges: List[NavigationEdge] = []
    for doc in documents:
        edges.extend(navigation_edges(doc))
    return NavigationGraph(edges=tuple(edges), known_screens=tuple(d.screen_id for d in documents))

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from adapters.html import document_from_file, navigation_graph_from_documents
from common.rules_engine.config import UIRulesConfig
from common.rules_engine.models import Document, NavigationGraph, RuleRunReport
from common.rules_engine.runner import RulesRunner

logger = logging.getLogger(__name__)

DEFAULT_EXCLUDE_PATTERNS = (
    "node_modules",
    "shared",
    "docs",
    "screenshots",
    "device-preview.html",
    "screen-template",
)


@dataclass(frozen=True)
class ScreenCorpus:
    root: Path
    documents: tuple[Document, ...] = ()
    navigation: NavigationGraph = field(default_factory=NavigationGraph)
    skipped: tuple[str, ...] = ()


def discover_screens(
    root: Path,
    *,
    scan_dirs: Optional[Sequence[str]] = None,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
) -> list[Path]:
    """Return screen files under `root`, sorted by relative path.

    With `scan_dirs`, only the top level of each listed directory (relative to root) is scanned;
    otherwise the whole tree is walked.
    """
    excludes = tuple(exclude_patterns)
    candidates: list[Path] = []
    if scan_dirs is None:
        candidates = [p for p in root.rglob("*.html") if p.is_file()]
    else:
        for rel in scan_dirs:
            directory = root / rel
            if not directory.is_dir():
                continue
            candidates.extend(p for p in directory.glob("*.html") if p.is_file())

    seen: set[Path] = set()
    out: list[Path] = []
    for path in sorted(candidates, key=lambda p: p.relative_to(root).as_posix()):
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        relative = path.relative_to(root).as_posix()
        if any(pattern in relative for pattern in excludes):
            continue
        out.append(path)
    return out


def load_screen_corpus(
    root: Path,
    *,
    scan_dirs: Optional[Sequence[str]] = None,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
) -> ScreenCorpus:
    documents: list[Document] = []
    skipped: list[str] = []
    for path in discover_screens(root, scan_dirs=scan_dirs, exclude_patterns=exclude_patterns):
        try:
            documents.append(document_from_file(path))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping unreadable screen %s: %s", path, exc)
            skipped.append(str(path))

    ids = [d.screen_id for d in documents]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        logger.warning("Duplicate screen ids (file stems): %s", ", ".join(duplicates))

    navigation = navigation_graph_from_documents(documents)
    missing = sorted(navigation.screens - set(ids))
    if missing:
        logger.info("Navigation targets outside the corpus: %s", ", ".join(missing))

    logger.info("Loaded %d screen(s) from %s", len(documents), root)
    return ScreenCorpus(
        root=root,
        documents=tuple(documents),
        navigation=navigation,
        skipped=tuple(skipped),
    )


def run_ui_review(
    root: Path,
    *,
    config: Optional[UIRulesConfig] = None,
    scan_dirs: Optional[Sequence[str]] = None,
    exclude_patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS,
    max_workers: Optional[int] = None,
) -> RuleRunReport:
    # Build the runner first so config errors surface before any file is read.
    runner = RulesRunner(config=config)
    corpus = load_screen_corpus(root, scan_dirs=scan_dirs, exclude_patterns=exclude_patterns)
    return runner.run(corpus.documents, corpus.navigation, max_workers=max_workers)

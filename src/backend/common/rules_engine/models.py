from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class Element(BaseModel):
    """One node of a parsed screen.

    `attributes` keys are lower-case. `text` is the normalised visible text of the element
    including its descendants; `own_text` is only the text directly inside it. `width`/`height`
    are resolved pixels, or None when the parser could not determine layout geometry.
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    ref: str = ""
    element_id: str = ""
    classes: Tuple[str, ...] = ()
    attributes: Dict[str, str] = Field(default_factory=dict)
    text: str = ""
    own_text: str = ""
    width: Optional[float] = None
    height: Optional[float] = None
    children: Tuple["Element", ...] = ()

    def attr(self, name: str, default: str = "") -> str:
        return self.attributes.get(name, default)

    def has_attr(self, name: str) -> bool:
        return name in self.attributes

    def has_class(self, token: str) -> bool:
        return token in self.classes

    def class_contains(self, fragment: str) -> bool:
        return any(fragment in c for c in self.classes)

    def iter(self) -> Iterator["Element"]:
        """Yield this element then all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

    def descendants(self) -> Iterator["Element"]:
        for child in self.children:
            yield from child.iter()


Element.model_rebuild()


class Document(BaseModel):
    model_config = ConfigDict(frozen=True)

    screen_id: str
    root: Element
    source_path: Optional[str] = None

    def elements(self) -> Iterator[Element]:
        return self.root.iter()

    def find_all(self, tag: str) -> List[Element]:
        return [el for el in self.elements() if el.tag == tag]


class NavigationEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    element_ref: Optional[str] = None
    trigger: str = ""


class NavigationGraph(BaseModel):
    """Multiset of navigation edges plus the set of known screens."""

    model_config = ConfigDict(frozen=True)

    edges: Tuple[NavigationEdge, ...] = ()
    known_screens: Tuple[str, ...] = ()

    @property
    def screens(self) -> set[str]:
        out = set(self.known_screens)
        for edge in self.edges:
            out.add(edge.source)
            out.add(edge.target)
        return out

    def edges_from(self, screen_id: str) -> List[NavigationEdge]:
        return [e for e in self.edges if e.source == screen_id]

    def edges_to(self, screen_id: str) -> List[NavigationEdge]:
        return [e for e in self.edges if e.target == screen_id]


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    rule_id: str
    screen_id: str
    element_ref: Optional[str] = None
    severity: Severity
    message: str
    suggestion: str = ""


class RuleRunReport(BaseModel):
    run_id: str
    generated_at: datetime

    screens: List[str] = Field(default_factory=list)
    rule_ids: List[str] = Field(default_factory=list)
    findings: List[Finding] = Field(default_factory=list)
    totals_by_rule: Dict[str, int] = Field(default_factory=dict)
    totals_by_severity: Dict[Severity, int] = Field(default_factory=dict)

    def findings_for(self, rule_id: str) -> List[Finding]:
        return [f for f in self.findings if f.rule_id == rule_id]


def count_by_rule(findings: List[Finding]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for f in findings:
        totals[f.rule_id] = totals.get(f.rule_id, 0) + 1
    return totals


def count_by_severity(findings: List[Finding]) -> Dict[Severity, int]:
    totals: Dict[Severity, int] = {}
    for f in findings:
        totals[f.severity] = totals.get(f.severity, 0) + 1
    return totals


def count_by_rule_and_severity(findings: List[Finding]) -> Dict[str, Dict[Severity, int]]:
    out: Dict[str, Dict[Severity, int]] = {}
    for f in findings:
        bucket = out.setdefault(f.rule_id, {})
        bucket[f.severity] = bucket.get(f.severity, 0) + 1
    return out

from __future__ import annotations

import re
from dataclasses import dataclass, field
from html.parser import HTMLParser
from pathlib import Path
from typing import Any, Optional

from common.rules_engine.models import Document, Element

VOID_TAGS = frozenset(
    {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param", "source", "track", "wbr"}
)
_SKIP_TEXT_TAGS = frozenset({"script", "style", "template"})

# Tailwind spacing scale: 1 unit = 0.25rem = 4px.
_TW_UNIT_PX = 4.0
_REM_PX = 16.0

_STYLE_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px|rem)?\s*$", re.IGNORECASE)
_TW_CLASS = re.compile(r"^(?P<prop>min-w|min-h|w|h|size)-(?P<value>\[[^\]]+\]|px|[0-9]+(?:\.5)?)$")
_WS = re.compile(r"\s+")


def _parse_length(value: str) -> Optional[float]:
    m = _STYLE_LENGTH.match(value or "")
    if not m:
        return None
    number = float(m.group(1))
    unit = (m.group(2) or "px").lower()
    return number * _REM_PX if unit == "rem" else number


def _parse_style(style: str) -> dict[str, str]:
    out: dict[str, str] = {}
    for decl in style.split(";"):
        if ":" not in decl:
            continue
        prop, _, value = decl.partition(":")
        out[prop.strip().lower()] = value.strip()
    return out


def _tailwind_length(value: str) -> Optional[float]:
    if value == "px":
        return 1.0
    if value.startswith("["):
        return _parse_length(value[1:-1])
    return float(value) * _TW_UNIT_PX


def _larger(a: Optional[float], b: Optional[float]) -> Optional[float]:
    if a is None:
        return b
    if b is None:
        return a
    return max(a, b)


def resolve_geometry(attributes: dict[str, str], classes: tuple[str, ...]) -> tuple[Optional[float], Optional[float]]:
    """Best-effort width/height in px from inline style, size attributes, then Tailwind classes.

    `min-width`/`min-height` raise an explicit size but do not resolve one on their own. Anything
    relative (%, auto, w-full) is unresolved and returned as None.
    """
    sizes: dict[str, Optional[float]] = {"w": None, "h": None, "min-w": None, "min-h": None}

    for cls in classes:
        m = _TW_CLASS.match(cls)
        if not m:
            continue
        length = _tailwind_length(m.group("value"))
        if m.group("prop") == "size":
            sizes["w"] = sizes["h"] = length
        else:
            sizes[m.group("prop")] = length

    for axis, attr in (("w", "width"), ("h", "height")):
        for name in (f"data-{attr}", attr):
            length = _parse_length(attributes.get(name, ""))
            if length is not None:
                sizes[axis] = length
                break

    style = _parse_style(attributes.get("style", ""))
    for key, prop in (("w", "width"), ("h", "height"), ("min-w", "min-width"), ("min-h", "min-height")):
        if prop in style:
            sizes[key] = _parse_length(style[prop])

    width = _larger(sizes["w"], sizes["min-w"]) if sizes["w"] is not None else None
    height = _larger(sizes["h"], sizes["min-h"]) if sizes["h"] is not None else None
    return width, height


@dataclass
class _Node:
    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)  # _Node or str


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = _Node(tag="#document")
        self._stack: list[_Node] = [self.root]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, Optional[str]]]) -> None:
        node = _Node(tag=tag.lower(), attributes={k.lower(): (v if v is not None else "") for k, v in attrs})
        self._stack[-1].children.append(node)
        if node.tag not in VOID_TAGS:
            self._stack.append(node)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, Optional[str]]]) -> None:
        node = _Node(tag=tag.lower(), attributes={k.lower(): (v if v is not None else "") for k, v in attrs})
        self._stack[-1].children.append(node)

    def handle_endtag(self, tag: str) -> None:
        tag = tag.lower()
        # Close up to the matching open tag; stray end tags are ignored.
        for idx in range(len(self._stack) - 1, 0, -1):
            if self._stack[idx].tag == tag:
                del self._stack[idx:]
                return

    def handle_data(self, data: str) -> None:
        if self._stack[-1].tag in _SKIP_TEXT_TAGS:
            return
        self._stack[-1].children.append(data)


class _Freezer:
    def __init__(self) -> None:
        self._index = 0

    def freeze(self, node: _Node) -> Element:
        index = self._index
        self._index += 1
        children: list[Element] = []
        text_parts: list[str] = []
        own_parts: list[str] = []
        for child in node.children:
            if isinstance(child, str):
                text_parts.append(child)
                own_parts.append(child)
            else:
                frozen = self.freeze(child)
                children.append(frozen)
                if frozen.text:
                    text_parts.append(frozen.text)

        element_id = node.attributes.get("id", "").strip()
        classes = tuple(node.attributes.get("class", "").split())
        width, height = resolve_geometry(node.attributes, classes)
        return Element(
            tag=node.tag,
            ref=_element_ref(node.tag, element_id, classes, index),
            element_id=element_id,
            classes=classes,
            attributes=node.attributes,
            text=_WS.sub(" ", " ".join(text_parts)).strip(),
            own_text=_WS.sub(" ", " ".join(own_parts)).strip(),
            width=width,
            height=height,
            children=tuple(children),
        )


def _element_ref(tag: str, element_id: str, classes: tuple[str, ...], index: int) -> str:
    if element_id:
        return f"#{element_id}"
    if classes:
        return f"{tag}.{classes[0]}[{index}]"
    return f"{tag}[{index}]"


def document_from_html(html: str, screen_id: str, *, source_path: Optional[str] = None) -> Document:
    """Parse mockup HTML into a read-only Document. Never raises on malformed markup."""
    builder = _TreeBuilder()
    builder.feed(html)
    builder.close()
    root = _Freezer().freeze(builder.root)
    return Document(screen_id=screen_id, root=root, source_path=source_path)


def document_from_file(path: Path, *, screen_id: Optional[str] = None) -> Document:
    html = path.read_text(encoding="utf-8")
    return document_from_html(html, screen_id or path.stem, source_path=str(path))

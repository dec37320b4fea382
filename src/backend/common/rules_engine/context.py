from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

from .config import UIRulesConfig
from .models import Document, Element, NavigationGraph

CLICKABLE_ROLES = frozenset({"button", "link", "tab", "menuitem"})
CLICKABLE_INPUT_TYPES = frozenset({"button", "submit", "reset", "image"})
NON_FIELD_INPUT_TYPES = frozenset({"hidden", "button", "submit", "reset", "image"})
FORM_FIELD_ROLES = frozenset({"textbox", "combobox", "switch", "checkbox", "radio", "slider", "searchbox"})

_CONFIRM_ATTRS = (
    "data-confirm",
    "confirm",
    "data-modal-target",
    "data-dialog",
    "data-target-modal",
)
_CONFIRM_ONCLICK_CALLS = ("confirm(", "showmodal", "openmodal", "showconfirm", "showdialog", "opendialog")

# SVG path data, compared lower-cased with whitespace collapsed.
_CLOSE_ICON_PATHS = ("m6 18l18 6", "m6 6l12 12", "m6 18l12-12", "m18 6l6 18", "m4 4l20 20", "m20 4l4 20")
_CLOSE_CLASS_WORDS = frozenset({"close", "dismiss", "exit", "cancel", "back", "return", "leave", "quit"})
_CLOSE_SYMBOLS = ("×", "✕", "✖", "╳")
_CLOSE_LABELS = frozenset({"close", "關閉", "離開"})
_CHEVRON_ICON_PATHS = (
    "m9 5l7 7-7 7",
    "m9 5 l7 7 -7 7",
    "m8.59 16.59l13.17 12 8.59 7.41",
    "m10 6l8.59 7.41 13.17 12l-4.58 4.59l10 18l6-6z",
)
_CHEVRON_CLASS_FRAGMENTS = ("chevron-right", "chevron_right", "arrow-right", "arrow_right", "icon-right")
_CHEVRON_SYMBOLS = ("›", "→", ">")


@dataclass(frozen=True)
class RuleContext:
    document: Document
    navigation: Optional[NavigationGraph] = None
    config: UIRulesConfig = field(default_factory=UIRulesConfig)

    @property
    def screen_id(self) -> str:
        return self.document.screen_id

    def elements(self) -> Iterable[Element]:
        return self.document.elements()


def input_type(el: Element) -> str:
    return el.attr("type", "text" if el.tag == "input" else "").strip().lower()


def role(el: Element) -> str:
    return el.attr("role").strip().lower()


def is_clickable(el: Element) -> bool:
    if el.tag == "a" and el.has_attr("href"):
        return True
    if el.tag == "button":
        return True
    if el.tag == "input" and input_type(el) in CLICKABLE_INPUT_TYPES:
        return True
    if el.has_attr("onclick"):
        return True
    return role(el) in CLICKABLE_ROLES


def is_form_field(el: Element) -> bool:
    if el.tag == "input":
        return input_type(el) not in NON_FIELD_INPUT_TYPES
    if el.tag in ("select", "textarea"):
        return True
    return role(el) in FORM_FIELD_ROLES


def is_interactive(el: Element) -> bool:
    return is_clickable(el) or is_form_field(el)


def is_submit_control(el: Element) -> bool:
    if el.tag == "button":
        # A <button> without a type attribute submits its form.
        return input_type(el) in ("", "submit")
    return el.tag == "input" and input_type(el) in ("submit", "image")


def is_primary_action(el: Element) -> bool:
    if el.attr("data-action").lower() == "primary" or el.attr("data-role").lower() == "primary":
        return True
    if el.has_class("primary") or any(c.startswith("btn-primary") for c in el.classes):
        return True
    return el.tag == "button" and input_type(el) == "submit"


def has_confirmation(el: Element) -> bool:
    """An explicit confirm attribute, a dialog/modal trigger, or an inline confirm call."""
    if any(el.has_attr(a) for a in _CONFIRM_ATTRS):
        return True
    toggle = (el.attr("data-bs-toggle") or el.attr("data-toggle")).lower()
    if toggle == "modal":
        return True
    if el.attr("aria-haspopup").lower() == "dialog":
        return True
    onclick = el.attr("onclick").lower().replace(" ", "")
    return any(call in onclick for call in _CONFIRM_ONCLICK_CALLS)


def is_loading_indicator(el: Element) -> bool:
    if role(el) == "progressbar" or el.has_attr("aria-busy") or el.has_attr("data-loading"):
        return True
    return any(el.class_contains(f) for f in ("spinner", "loading", "loader"))


def is_progress_indicator(el: Element) -> bool:
    if el.tag == "progress" or role(el) == "progressbar" or el.has_attr("aria-valuenow"):
        return True
    return any(el.class_contains(f) for f in ("progress", "stepper", "step-indicator"))


def label_text(el: Element) -> str:
    """Visible text of `el` without the text of clickable elements nested inside it."""
    if not el.children:
        return el.text
    parts = [el.own_text]
    for child in el.children:
        if not is_clickable(child):
            parts.append(label_text(child))
    return " ".join(p for p in parts if p).strip()


def accessible_text(el: Element) -> str:
    parts = [label_text(el), el.attr("aria-label"), el.attr("title")]
    if el.tag == "input":
        parts.append(el.attr("value"))
    return " ".join(p for p in parts if p).strip()


def _path_data(el: Element) -> str:
    return " ".join(el.attr("d").lower().split())


def _class_words(el: Element) -> Set[str]:
    return {word for cls in el.classes for word in re.split(r"[-_]", cls.lower()) if word}


def is_close_control(el: Element) -> bool:
    """Close/exit control: an X icon path, a close-like class word, an X symbol, or a close aria-label."""
    for node in el.iter():
        if any(p in _path_data(node) for p in _CLOSE_ICON_PATHS):
            return True
        if _class_words(node) & _CLOSE_CLASS_WORDS:
            return True
    if any(symbol in el.text for symbol in _CLOSE_SYMBOLS):
        return True
    return el.attr("aria-label").strip().lower() in _CLOSE_LABELS


def is_settings_row(el: Element) -> bool:
    """List row that leads to a sub-screen, recognised by its chevron-right affordance."""
    for node in el.iter():
        if any(p in _path_data(node) for p in _CHEVRON_ICON_PATHS):
            return True
        if any(node.class_contains(f) for f in _CHEVRON_CLASS_FRAGMENTS):
            return True
    if any(arrow in el.text for arrow in _CHEVRON_SYMBOLS):
        # An arrow glyph only counts on a row styled as pressable.
        return any("hover:" in c or "active:" in c for node in el.iter() for c in node.classes)
    return False


def matches_any(value: str, patterns: Iterable[str]) -> bool:
    """Case-insensitive regex search of any pattern in `value`."""
    return any(re.search(p, value, flags=re.IGNORECASE) for p in patterns)


def contains_any(value: str, needles: Iterable[str]) -> Optional[str]:
    """Return the first needle found in `value` (case-insensitive substring), if any."""
    lowered = value.lower()
    for needle in needles:
        if needle and needle.lower() in lowered:
            return needle
    return None

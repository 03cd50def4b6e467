"""Decides whether an element is a legal autofill target."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import Tag

from ..dom.nodes import (
    class_name,
    get_attribute,
    has_attribute,
    input_type,
    is_content_editable,
    role,
    tag_name,
    text_content,
)
from ..dom.page import DomPage
from .classifier import is_custom_widget

logger = logging.getLogger(__name__)

IGNORED_INPUT_TYPES = frozenset({"hidden", "submit", "button", "reset", "image"})
NATIVE_CONTROL_TAGS = frozenset({"input", "select", "textarea"})
INTERACTIVE_ROLES = frozenset({"button", "combobox", "textbox"})
CLICKABLE_CLASS_HINTS = ("click", "select", "button")
FORM_KEYWORDS = ("select", "choose", "pick", "upload", "attach", "date", "input", "field")


def is_fillable(page: DomPage, element: Optional[Tag]) -> bool:
    """Never raises: any unexpected read failure makes the element ineligible."""

    if element is None:
        return False
    try:
        return _is_fillable(page, element)
    except Exception:
        logger.debug("Fillability check failed for <%s>", element.name, exc_info=True)
        return False


def _is_fillable(page: DomPage, element: Tag) -> bool:
    if has_attribute(element, "disabled") or has_attribute(element, "readonly"):
        return False
    if get_attribute(element, "aria-disabled") == "true":
        return False
    if get_attribute(element, "aria-readonly") == "true":
        return False
    if not page.is_rendered(element):
        return False

    if is_custom_widget(element):
        return _has_interaction_signal(element)

    if tag_name(element) not in NATIVE_CONTROL_TAGS:
        return False
    return input_type(element) not in IGNORED_INPUT_TYPES


def _has_interaction_signal(element: Tag) -> bool:
    if tag_name(element) == "button" or role(element) in INTERACTIVE_ROLES:
        return True

    classes = class_name(element).lower()
    if any(hint in classes for hint in CLICKABLE_CLASS_HINTS):
        return True

    if is_content_editable(element):
        return True

    text = text_content(element).lower()
    aria_label = (get_attribute(element, "aria-label") or "").lower()
    return any(
        keyword in text or keyword in classes or keyword in aria_label
        for keyword in FORM_KEYWORDS
    )


def is_required(element: Tag) -> bool:
    return (
        has_attribute(element, "required")
        or has_attribute(element, "data-required")
        or get_attribute(element, "aria-required") == "true"
    )

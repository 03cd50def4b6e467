"""Maps an element to its :class:`FieldType`."""

from __future__ import annotations

import re

from bs4 import Tag

from ..core.models import FieldType
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

INPUT_TYPES = {
    "text": FieldType.TEXT,
    "email": FieldType.EMAIL,
    "password": FieldType.PASSWORD,
    "tel": FieldType.TEL,
    "url": FieldType.URL,
    "number": FieldType.NUMBER,
    "date": FieldType.DATE,
    "time": FieldType.TIME,
    "datetime-local": FieldType.DATETIME,
    "color": FieldType.COLOR,
    "range": FieldType.RANGE,
    "checkbox": FieldType.CHECKBOX,
    "radio": FieldType.RADIO,
    "file": FieldType.FILE,
}

CUSTOM_WIDGET_TAGS = frozenset({"button", "div"})
CUSTOM_WIDGET_ROLES = frozenset({"button", "combobox", "listbox", "textbox"})

DATE_KEYWORDS = ("date", "picker", "calendar")
UPLOAD_KEYWORDS = ("upload", "attach", "browse", "file")
SELECT_KEYWORDS = ("select", "choose", "dropdown")

_SLASH_DATE = re.compile(r"\b\d{1,2}/\d{1,2}/\d{4}\b")
_MONTH_NAME = re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)", re.IGNORECASE)
_ORDINAL_DAY = re.compile(r"\b\d{1,2}(st|nd|rd|th)\b")


def is_custom_widget(element: Tag) -> bool:
    """True for framework-rendered controls that are not native form elements."""

    return (
        tag_name(element) in CUSTOM_WIDGET_TAGS
        or role(element) in CUSTOM_WIDGET_ROLES
        or is_content_editable(element)
    )


def field_type(element: Tag) -> FieldType:
    name = tag_name(element)
    if name == "select":
        return FieldType.SELECT
    if name == "textarea":
        return FieldType.TEXTAREA

    element_role = role(element)
    if name == "button" or element_role == "button":
        return classify_interactive(element)

    if element_role in {"combobox", "listbox"}:
        return FieldType.SELECT
    if element_role == "textbox":
        return FieldType.TEXT

    if is_content_editable(element):
        return FieldType.TEXT

    return INPUT_TYPES.get(input_type(element), FieldType.TEXT)


def classify_interactive(element: Tag) -> FieldType:
    """Keyword classification for buttons; the first matching category wins."""

    text = text_content(element).lower()
    aria_label = (get_attribute(element, "aria-label") or "").lower()
    haystack = f"{class_name(element).lower()} {aria_label} {text}"

    if (
        any(keyword in haystack for keyword in DATE_KEYWORDS)
        or _SLASH_DATE.search(text)
        or _MONTH_NAME.search(text)
        or _ORDINAL_DAY.search(text)
    ):
        return FieldType.DATE

    if any(keyword in haystack for keyword in UPLOAD_KEYWORDS):
        return FieldType.FILE

    if (
        any(keyword in haystack for keyword in SELECT_KEYWORDS)
        or has_attribute(element, "aria-expanded")
        or get_attribute(element, "aria-haspopup") == "listbox"
    ):
        return FieldType.SELECT

    return FieldType.TEXT

"""Name, id and label resolution for detected controls."""

from __future__ import annotations

import re
import uuid
from typing import Optional

import soupsieve as sv
from bs4 import Tag

from ..core.models import FieldType
from ..dom.nodes import (
    collapse_whitespace,
    get_attribute,
    index_of,
    previous_element_sibling,
    tag_name,
    text_content,
)
from ..dom.page import DomPage
from .classifier import field_type

UNNAMED_FIELD = "Unnamed Field"
PARENT_TEXT_LIMIT = 100

_TRAILING_MARKERS = re.compile(r"[*:]+$")
_NON_ALNUM = re.compile(r"[^a-z0-9]")
_UNDERSCORES = re.compile(r"_+")
_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_WORD_START = re.compile(r"\b\w")


def clean_text(text: Optional[str]) -> str:
    if not text:
        return ""
    return _TRAILING_MARKERS.sub("", collapse_whitespace(text)).strip()


def normalize_label(label: str) -> str:
    slug = _NON_ALNUM.sub("_", label.lower())
    return _UNDERSCORES.sub("_", slug).strip("_")


def humanize(identifier: str) -> str:
    """``first_name`` / ``firstName`` -> ``First Name``."""

    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", re.sub(r"[_-]", " ", identifier)).lower()
    return _WORD_START.sub(lambda match: match.group(0).upper(), spaced)


def _without_own_text(container_text: str, own_text: str) -> str:
    return container_text.replace(own_text, "", 1) if own_text else container_text


def extract_label(page: DomPage, element: Tag, scope: Optional[Tag] = None) -> str:
    element_id = get_attribute(element, "id")
    if element_id:
        search_root = page.root if scope is None else scope
        for label in search_root.find_all("label"):
            if get_attribute(label, "for") == element_id:
                return clean_text(text_content(label))

    parent_label = sv.closest("label", element)
    if parent_label is not None:
        return clean_text(_without_own_text(text_content(parent_label), text_content(element)))
    return ""


def extract_contextual_info(element: Tag) -> str:
    for attribute in ("placeholder", "aria-label", "title"):
        text = clean_text(get_attribute(element, attribute))
        if text:
            return text

    parent = element.parent
    if parent is not None:
        sibling = previous_element_sibling(element)
        while sibling is not None and not text_content(sibling).strip():
            sibling = previous_element_sibling(sibling)
        if sibling is not None:
            return clean_text(text_content(sibling))

        parent_text = _without_own_text(text_content(parent), text_content(element)).strip()
        if parent_text and len(parent_text) < PARENT_TEXT_LIMIT:
            return clean_text(parent_text)

    identifier = get_attribute(element, "name") or get_attribute(element, "id")
    if identifier:
        return humanize(identifier)
    return UNNAMED_FIELD


def field_label(page: DomPage, element: Tag, scope: Optional[Tag] = None) -> str:
    return extract_label(page, element, scope) or extract_contextual_info(element)


def field_name(
    page: DomPage,
    element: Tag,
    scope: Optional[Tag] = None,
    kind: Optional[FieldType] = None,
) -> str:
    name = get_attribute(element, "name")
    if name:
        return name

    element_id = get_attribute(element, "id")
    if element_id:
        return element_id

    label = field_label(page, element, scope)
    if label and label != UNNAMED_FIELD:
        normalized = normalize_label(label)
        if normalized:
            return normalized

    data_name = get_attribute(element, "data-name") or get_attribute(element, "data-field")
    if data_name:
        return data_name

    kind = kind or field_type(element)
    search_root = page.root if scope is None else scope
    ordinal = index_of(element, search_root.find_all(tag_name(element)))
    return f"{kind.value}_field_{ordinal}"


def field_id(element: Tag) -> str:
    return (
        get_attribute(element, "id")
        or get_attribute(element, "name")
        or f"id_{uuid.uuid4().hex[:9]}"
    )

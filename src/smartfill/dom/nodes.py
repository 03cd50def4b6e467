"""Stateless helpers over bs4 tags (attribute, text and tree reads)."""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

_WHITESPACE = re.compile(r"\s+")


def tag_name(element: Tag) -> str:
    return (element.name or "").lower()


def get_attribute(element: Tag, name: str) -> Optional[str]:
    """Returns the attribute as a string, joining multi-valued attributes like ``class``."""

    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def has_attribute(element: Tag, name: str) -> bool:
    return name in element.attrs


def class_name(element: Tag) -> str:
    return get_attribute(element, "class") or ""


def role(element: Tag) -> Optional[str]:
    value = get_attribute(element, "role")
    return value.strip().lower() if value else None


def input_type(element: Tag) -> str:
    return (get_attribute(element, "type") or "").strip().lower()


def is_content_editable(element: Tag) -> bool:
    return (get_attribute(element, "contenteditable") or "").strip().lower() == "true"


def text_content(element: Tag) -> str:
    return element.get_text()


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def parent_element(element: Tag) -> Optional[Tag]:
    parent = element.parent
    if parent is None or isinstance(parent, BeautifulSoup):
        return None
    return parent


def previous_element_sibling(element: Tag) -> Optional[Tag]:
    return element.find_previous_sibling(True)


def next_element_sibling(element: Tag) -> Optional[Tag]:
    return element.find_next_sibling(True)


def index_of(element: Tag, candidates: Iterable[Tag]) -> int:
    """Identity-based ``indexOf``; bs4 tags compare structurally with ``==``."""

    for index, candidate in enumerate(candidates):
        if candidate is element:
            return index
    return -1


def find_by_id(scope: Tag, element_id: str) -> Optional[Tag]:
    if not element_id:
        return None
    return scope.find(attrs={"id": element_id})


def group_members(scope: Tag, name: str, kind: str) -> List[Tag]:
    """Inputs of ``kind`` (radio/checkbox) sharing ``name`` inside ``scope``."""

    return [
        candidate
        for candidate in scope.find_all("input")
        if get_attribute(candidate, "name") == name and input_type(candidate) == kind
    ]


def parse_inline_style(element: Tag) -> Dict[str, str]:
    declarations: Dict[str, str] = {}
    raw = get_attribute(element, "style") or ""
    for chunk in raw.split(";"):
        if ":" not in chunk:
            continue
        prop, value = chunk.split(":", 1)
        value = value.replace("!important", "").strip().lower()
        if prop.strip():
            declarations[prop.strip().lower()] = value
    return declarations

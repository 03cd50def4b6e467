"""Closed value sets for select, radio and checkbox fields."""

from __future__ import annotations

import json
import re
from typing import Iterable, List, Optional

import soupsieve as sv
from bs4 import Tag

from ..core.models import FieldType
from ..dom.nodes import (
    class_name,
    get_attribute,
    group_members,
    next_element_sibling,
    tag_name,
    text_content,
)
from ..dom.page import DomPage
from .classifier import field_type, is_custom_widget
from .selectors import (
    DROPDOWN_CONTAINER_SELECTOR,
    DROPDOWN_SCOPE_SELECTOR,
    OPTION_ITEM_SELECTOR,
    SIBLING_DROPDOWN_SELECTOR,
)

PLACEHOLDER_PATTERN = re.compile(r"^(select|choose|pick|click|tap|--)", re.IGNORECASE)
PLACEHOLDER_MAX_LENGTH = 50
_DELIMITERS = re.compile(r"[,;|]")

GENDER_OPTIONS = ["Male", "Female", "Other", "Prefer not to say"]
COUNTRY_OPTIONS = ["United States", "Canada", "United Kingdom", "Australia", "Germany", "France", "Other"]
STATE_OPTIONS = ["CA", "NY", "TX", "FL", "IL", "PA", "OH", "GA", "NC", "MI"]
BRAND_OPTIONS = ["Apple", "Samsung", "Google", "Microsoft", "Sony", "LG", "Other"]


def is_placeholder_text(text: str) -> bool:
    return bool(PLACEHOLDER_PATTERN.match(text)) or len(text) > PLACEHOLDER_MAX_LENGTH


def unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def extract_options(
    page: DomPage,
    element: Tag,
    container: Optional[Tag] = None,
    kind: Optional[FieldType] = None,
) -> List[str]:
    kind = kind or field_type(element)
    container = page.root if container is None else container

    if kind is FieldType.SELECT:
        if tag_name(element) != "select" and is_custom_widget(element):
            return custom_dropdown_options(page, element, container)
        if tag_name(element) == "select":
            return native_select_options(page, element)
        return []

    if kind.is_grouped:
        return group_options(element, container, kind)
    return []


def native_select_options(page: DomPage, select: Tag) -> List[str]:
    values = []
    for option in page.options(select):
        value = page.option_value(option)
        if not value or value == "undefined":
            continue
        if value == page.option_text(option) and is_placeholder_text(value):
            continue
        values.append(value)
    return unique(values)


def group_options(element: Tag, container: Tag, kind: FieldType) -> List[str]:
    name = get_attribute(element, "name")
    if name:
        members = group_members(container, name, kind.value)
        if members:
            return unique(
                get_attribute(member, "value") or get_attribute(member, "aria-label") or ""
                for member in members
            )

    if kind is FieldType.RADIO:
        radio_group = sv.closest('[role="radiogroup"]', element)
        if radio_group is not None:
            return unique(
                get_attribute(radio, "value") or ""
                for radio in sv.select('input[type="radio"]', radio_group)
            )
    return []


def _option_texts(items: Iterable[Tag]) -> List[str]:
    texts = []
    for item in items:
        text = (
            get_attribute(item, "data-value")
            or get_attribute(item, "value")
            or text_content(item).strip()
        )
        if text and not is_placeholder_text(text):
            texts.append(text)
    return texts


def _options_in(dropdown: Tag) -> List[str]:
    return _option_texts(sv.select(OPTION_ITEM_SELECTOR, dropdown))


def _parse_data_options(raw: str) -> List[str]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        parsed = None

    if isinstance(parsed, list):
        values = []
        for item in parsed:
            if isinstance(item, dict):
                value = item.get("value") or item.get("label")
            else:
                value = item
            if value is not None:
                values.append(str(value))
        return values

    return [chunk.strip() for chunk in _DELIMITERS.split(raw) if chunk.strip()]


def vocabulary_options(element: Tag) -> List[str]:
    classes = class_name(element).lower()
    aria_label = (get_attribute(element, "aria-label") or "").lower()
    text = text_content(element).lower()

    if "gender" in classes or "gender" in aria_label or "gender" in text:
        return list(GENDER_OPTIONS)
    if "country" in classes or "country" in aria_label:
        return list(COUNTRY_OPTIONS)
    if "state" in classes or "state" in aria_label:
        return list(STATE_OPTIONS)
    if "brand" in classes or "brand" in aria_label:
        return list(BRAND_OPTIONS)
    return []


def custom_dropdown_options(page: DomPage, element: Tag, container: Tag) -> List[str]:
    """Options of a framework dropdown, from the first source that yields any."""

    options: List[str] = []

    controls = get_attribute(element, "aria-controls")
    if controls:
        dropdown = page.get_element_by_id(controls)
        if dropdown is not None:
            options.extend(_options_in(dropdown))

    nearby = sv.closest(DROPDOWN_SCOPE_SELECTOR, element) or container
    for dropdown in sv.select(DROPDOWN_CONTAINER_SELECTOR, nearby):
        options.extend(_options_in(dropdown))

    sibling = next_element_sibling(element)
    while sibling is not None and not options:
        if sv.match(SIBLING_DROPDOWN_SELECTOR, sibling):
            options.extend(_options_in(sibling))
            break
        sibling = next_element_sibling(sibling)

    raw = get_attribute(element, "data-options")
    if raw:
        options.extend(_parse_data_options(raw))

    if not options:
        options.extend(vocabulary_options(element))

    return [option for option in unique(options) if not is_placeholder_text(option)]

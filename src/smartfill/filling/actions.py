"""Per-type write primitives; each raises ``WriteRejectedError`` when the control refuses."""

from __future__ import annotations

from typing import List, Optional, Sequence

import soupsieve as sv
from bs4 import Tag

from ..core.errors import WriteRejectedError
from ..core.models import FieldType, FieldValue
from ..dom.nodes import get_attribute, group_members, next_element_sibling, tag_name, text_content
from ..dom.page import DomPage
from .formatter import format_value

SYNTHETIC_EVENTS = ("input", "change", "blur", "keyup")
TRUTHY_STRINGS = frozenset({"true", "1", "yes"})


def trigger_events(page: DomPage, element: Tag) -> None:
    for event_type in SYNTHETIC_EVENTS:
        page.dispatch_event(element, event_type)


def as_text(value: FieldValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def as_bool(value: FieldValue) -> bool:
    if isinstance(value, bool):
        return value
    return as_text(value).strip().lower() in TRUTHY_STRINGS


def choice_label(page: DomPage, element: Tag) -> str:
    """Visible text for a radio/checkbox: ``<label for>``, enclosing label, next sibling,
    then its value and aria-label."""

    element_id = get_attribute(element, "id")
    if element_id:
        for candidate in page.root.find_all("label"):
            if get_attribute(candidate, "for") == element_id and text_content(candidate).strip():
                return text_content(candidate).strip()

    label = sv.closest("label", element)
    if label is not None and text_content(label).strip():
        return text_content(label).strip()

    sibling = next_element_sibling(element)
    if sibling is not None:
        text = text_content(sibling).strip()
        if text:
            return text

    return get_attribute(element, "value") or get_attribute(element, "aria-label") or ""


def _group(page: DomPage, element: Tag, kind: str) -> List[Tag]:
    name = get_attribute(element, "name")
    if not name:
        return [element]
    scope = sv.closest("form", element) or page.root
    return group_members(scope, name, kind) or [element]


def write_text(page: DomPage, element: Tag, kind: FieldType, value: FieldValue, name: str) -> None:
    page.focus(element)
    formatted = format_value(as_text(value), kind)
    page.set_value(element, formatted)
    trigger_events(page, element)
    if page.value(element) != formatted:
        raise WriteRejectedError(name, "value was not retained")


def write_select(page: DomPage, element: Tag, value: FieldValue, name: str) -> None:
    if tag_name(element) != "select":
        native = element.find("select")
        if native is None:
            raise WriteRejectedError(name, "custom dropdowns cannot be set directly")
        element = native

    page.focus(element)
    wanted = as_text(value)
    option = _match_option(page, page.options(element), wanted)
    if option is None:
        raise WriteRejectedError(name, f"no option matches '{wanted}'")

    chosen = page.option_value(option)
    page.set_value(element, chosen)
    trigger_events(page, element)
    if page.value(element) != chosen:
        raise WriteRejectedError(name, "selection was not retained")


def _match_option(page: DomPage, options: Sequence[Tag], wanted: str) -> Optional[Tag]:
    for option in options:
        if page.option_value(option) == wanted:
            return option
    for option in options:
        if page.option_text(option) == wanted:
            return option

    lowered = wanted.lower()
    for option in options:
        text = page.option_text(option).lower()
        if text and (lowered in text or text in lowered):
            return option
    return None


def write_radio(page: DomPage, element: Tag, value: FieldValue, name: str) -> None:
    wanted = as_text(value).strip().lower()
    radios = _group(page, element, "radio")

    chosen = None
    for radio in radios:
        label = choice_label(page, radio).lower()
        if label == wanted or (get_attribute(radio, "value") or "").lower() == wanted:
            chosen = radio
            break
    if chosen is None and wanted:
        for radio in radios:
            label = choice_label(page, radio).lower()
            if label and wanted in label:
                chosen = radio
                break
    if chosen is None:
        raise WriteRejectedError(name, f"no radio option matches '{as_text(value)}'")

    page.focus(chosen)
    page.set_checked(chosen, True)
    trigger_events(page, chosen)
    if not page.checked(chosen):
        raise WriteRejectedError(name, "radio selection was not retained")


def write_checkbox(page: DomPage, element: Tag, value: FieldValue, name: str) -> None:
    if isinstance(value, (list, tuple)):
        _write_checkbox_group(page, element, [as_text(item) for item in value], name)
        return

    page.focus(element)
    page.set_checked(element, as_bool(value))
    trigger_events(page, element)


def _write_checkbox_group(page: DomPage, element: Tag, wanted: List[str], name: str) -> None:
    boxes = _group(page, element, "checkbox")
    labels = [choice_label(page, box).lower() for box in boxes]
    matched = set()

    for requested in wanted:
        requested = requested.strip().lower()
        if not requested:
            continue
        exact = [
            index
            for index, box in enumerate(boxes)
            if labels[index] == requested or (get_attribute(box, "value") or "").lower() == requested
        ]
        if not exact:
            exact = [
                index
                for index, label in enumerate(labels)
                if label and (requested in label or label in requested)
            ]
        matched.update(exact)

    if not matched:
        raise WriteRejectedError(name, "no checkbox matches the requested values")

    for index, box in enumerate(boxes):
        page.focus(box)
        page.set_checked(box, index in matched)
        trigger_events(page, box)

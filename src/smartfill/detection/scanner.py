"""Builds :class:`FormField` records for one container and removes duplicates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from bs4 import Tag

from ..core.config import EngineConfig
from ..core.models import FieldType, FormField
from ..dom.nodes import class_name, get_attribute, text_content
from ..dom.page import DomPage
from .classifier import field_type, is_custom_widget
from .filter import is_fillable, is_required
from .identity import field_id, field_label, field_name
from .options import extract_options
from .selectors import FIELD_SELECTOR

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
PROMPT_WORDS = ("select", "choose")


@dataclass(slots=True)
class _Processed:
    key: str
    position: Optional[Position]


def dedup_key(element: Tag, kind: FieldType, name: str) -> str:
    base = (
        f"{kind.value}:{get_attribute(element, 'name') or name}:"
        f"{get_attribute(element, 'id') or ''}:{class_name(element)}"
    )
    if is_custom_widget(element):
        return f"{base}:{text_content(element).strip()}:{get_attribute(element, 'aria-label') or ''}"
    return base


def current_value(page: DomPage, element: Tag) -> str:
    if is_custom_widget(element):
        value_text = get_attribute(element, "aria-valuetext")
        if value_text:
            return value_text
        text = text_content(element).strip()
        if text and not any(word in text.lower() for word in PROMPT_WORDS):
            return text
        return ""
    return page.value(element)


@dataclass(slots=True)
class FieldScanner:
    """Runs filter, classifier, identity and option extraction over a container."""

    page: DomPage
    config: EngineConfig = field(default_factory=EngineConfig)
    scope: Optional[Tag] = None

    def scan(self, container: Optional[Tag] = None, elements: Optional[Iterable[Tag]] = None) -> List[FormField]:
        container = self.page.root if container is None else container
        candidates = list(elements) if elements is not None else self.page.select(FIELD_SELECTOR, container)

        fields: List[FormField] = []
        processed: List[_Processed] = []
        seen_groups: Dict[FieldType, Set[str]] = {FieldType.RADIO: set(), FieldType.CHECKBOX: set()}

        for element in candidates:
            try:
                built = self._scan_element(element, container, processed, seen_groups)
            except Exception:
                logger.debug("Skipping <%s> after a read failure", element.name, exc_info=True)
                continue
            if built is not None:
                fields.append(built)

        logger.debug("Scanned %d candidates into %d fields", len(candidates), len(fields))
        return fields

    def _scan_element(
        self,
        element: Tag,
        container: Tag,
        processed: List[_Processed],
        seen_groups: Dict[FieldType, Set[str]],
    ) -> Optional[FormField]:
        if not is_fillable(self.page, element):
            return None

        kind = field_type(element)
        identifier = field_id(element)
        name = field_name(self.page, element, self.scope, kind)

        key = dedup_key(element, kind, name)
        rect = self.page.bounding_rect(element)
        position = rect.center if rect is not None else None
        if self.is_duplicate(processed, key, position):
            return None
        processed.append(_Processed(key, position))

        if kind.is_grouped:
            group = get_attribute(element, "name")
            if not group or group in seen_groups[kind]:
                return None
            seen_groups[kind].add(group)
            name = group

        return FormField(
            id=identifier,
            name=name,
            type=kind,
            element=self.page.ref(element),
            current_value=current_value(self.page, element),
            label=field_label(self.page, element, self.scope),
            placeholder=get_attribute(element, "placeholder") or None,
            required=is_required(element),
            options=extract_options(self.page, element, container, kind),
        )

    def is_duplicate(self, processed: List[_Processed], key: str, position: Optional[Position]) -> bool:
        segments = key.split(":")
        for previous in processed:
            if previous.key == key:
                return True
            if position is None or previous.position is None:
                continue
            if not self._near(previous.position, position):
                continue
            matches = sum(
                1 for ours, theirs in zip(segments, previous.key.split(":")) if ours == theirs
            )
            if matches >= self.config.key_match_ratio * len(segments):
                return True
        return False

    def _near(self, first: Position, second: Position) -> bool:
        tolerance = self.config.position_tolerance
        return abs(first[0] - second[0]) < tolerance and abs(first[1] - second[1]) < tolerance

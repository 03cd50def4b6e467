"""Page model: a bs4 document plus the live state markup cannot hold."""

from __future__ import annotations

import copy
import itertools
import logging
import math
import weakref
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import soupsieve as sv
from bs4 import BeautifulSoup, Tag

from .nodes import (
    find_by_id,
    get_attribute,
    group_members,
    has_attribute,
    input_type,
    is_content_editable,
    parent_element,
    parse_inline_style,
    tag_name,
    text_content,
)

logger = logging.getLogger(__name__)

EventListener = Callable[["DomEvent"], None]
MutationCallback = Callable[[List["MutationRecord"]], None]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Tuple[int, int]:
        return (
            _round_half_up(self.x + self.width / 2),
            _round_half_up(self.y + self.height / 2),
        )


@dataclass(frozen=True, slots=True)
class ComputedStyle:
    display: Optional[str] = None
    visibility: Optional[str] = None


@dataclass(frozen=True)
class ElementRef:
    """Weak, non-owning handle to a node of a page the engine does not own."""

    node_id: int
    _node: "weakref.ReferenceType[Tag]" = field(compare=False, repr=False)
    _page: "weakref.ReferenceType[DomPage]" = field(compare=False, repr=False)

    @property
    def page(self) -> Optional["DomPage"]:
        return self._page()

    def resolve(self) -> Optional[Tag]:
        """Returns the node while it is still attached to its page, else ``None``."""

        page = self._page()
        node = self._node()
        if page is None or node is None:
            return None
        return node if page.contains(node) else None


@dataclass
class DomEvent:
    type: str
    target: Tag
    page: "DomPage"
    current_target: Optional[Tag] = None


@dataclass
class MutationRecord:
    target: Tag
    added: List[Tag] = field(default_factory=list)
    removed: List[Tag] = field(default_factory=list)


class MutationObserver:
    """Subscription to structural changes below ``root``."""

    def __init__(self, page: "DomPage", callback: MutationCallback, root: Tag) -> None:
        self._page = page
        self._callback = callback
        self.root = root
        self.connected = True

    def disconnect(self) -> None:
        if not self.connected:
            return
        self.connected = False
        self._page._detach_observer(self)

    def _deliver(self, records: List[MutationRecord]) -> None:
        if self.connected:
            self._callback(records)


@dataclass(slots=True)
class _NodeState:
    node_id: int
    node: "Optional[weakref.ReferenceType[Tag]]" = None
    value: Optional[str] = None
    checked: Optional[bool] = None
    rect: Optional[Rect] = None
    style: Optional[ComputedStyle] = None
    listeners: Dict[str, List[EventListener]] = field(default_factory=dict)


class DomPage:
    """Traversable element tree with control state, geometry, events and mutations."""

    def __init__(self, soup: BeautifulSoup, *, url: str = "about:blank") -> None:
        self.soup = soup
        self.url = url
        self.event_log: List[DomEvent] = []
        self._ids = itertools.count(1)
        self._nodes: Dict[int, _NodeState] = {}
        self._observers: List[MutationObserver] = []
        self._focused: Optional[ElementRef] = None

    @classmethod
    def from_html(cls, html: str, *, url: str = "about:blank") -> "DomPage":
        return cls(BeautifulSoup(html, "html.parser"), url=url)

    # ------------------------------------------------------------------
    # Tree access
    # ------------------------------------------------------------------
    @property
    def root(self) -> BeautifulSoup:
        return self.soup

    @property
    def body(self) -> Tag:
        return self.soup.body or self.soup

    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        return list(sv.select(selector, self.soup if scope is None else scope))

    def select_one(self, selector: str, scope: Optional[Tag] = None) -> Optional[Tag]:
        return sv.select_one(selector, self.soup if scope is None else scope)

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return find_by_id(self.soup, element_id)

    def contains(self, element: Tag) -> bool:
        if element is self.soup:
            return True
        return any(parent is self.soup for parent in element.parents)

    # ------------------------------------------------------------------
    # Node identity
    # ------------------------------------------------------------------
    def _state(self, element: Tag, *, create: bool = True) -> Optional[_NodeState]:
        key = id(element)
        state = self._nodes.get(key)
        if state is not None and state.node is not None and state.node() is element:
            return state
        if not create:
            return None

        nodes = self._nodes
        state = _NodeState(node_id=next(self._ids))

        def _discard(_ref: object) -> None:
            if nodes.get(key) is state:
                del nodes[key]

        state.node = weakref.ref(element, _discard)
        nodes[key] = state
        return state

    def ref(self, element: Tag) -> ElementRef:
        state = self._state(element)
        return ElementRef(state.node_id, state.node, weakref.ref(self))

    def node_id(self, element: Tag) -> int:
        return self._state(element).node_id

    # ------------------------------------------------------------------
    # Visibility and geometry
    # ------------------------------------------------------------------
    def set_style(self, element: Tag, style: ComputedStyle) -> None:
        self._state(element).style = style

    def _own_display(self, element: Tag) -> Optional[str]:
        state = self._state(element, create=False)
        if state is not None and state.style is not None and state.style.display:
            return state.style.display
        if has_attribute(element, "hidden"):
            return "none"
        return parse_inline_style(element).get("display")

    def _own_visibility(self, element: Tag) -> Optional[str]:
        state = self._state(element, create=False)
        if state is not None and state.style is not None and state.style.visibility:
            return state.style.visibility
        return parse_inline_style(element).get("visibility")

    def computed_style(self, element: Tag) -> ComputedStyle:
        visibility = "visible"
        node: Optional[Tag] = element
        while node is not None:
            own = self._own_visibility(node)
            if own and own != "inherit":
                visibility = own
                break
            node = parent_element(node)
        return ComputedStyle(display=self._own_display(element) or "inline", visibility=visibility)

    def is_rendered(self, element: Tag) -> bool:
        style = self.computed_style(element)
        if style.display == "none" or style.visibility in {"hidden", "collapse"}:
            return False
        ancestor = parent_element(element)
        while ancestor is not None:
            if self._own_display(ancestor) == "none":
                return False
            ancestor = parent_element(ancestor)
        return True

    def set_rect(self, element: Tag, rect: Rect) -> None:
        self._state(element).rect = rect

    def bounding_rect(self, element: Tag) -> Optional[Rect]:
        state = self._state(element, create=False)
        return state.rect if state is not None else None

    # ------------------------------------------------------------------
    # Control state
    # ------------------------------------------------------------------
    def options(self, select: Tag) -> List[Tag]:
        return list(select.find_all("option"))

    @staticmethod
    def option_value(option: Tag) -> str:
        value = get_attribute(option, "value")
        return value if value is not None else text_content(option).strip()

    @staticmethod
    def option_text(option: Tag) -> str:
        return " ".join(text_content(option).split())

    def value(self, element: Tag) -> str:
        state = self._state(element, create=False)
        stored = state.value if state is not None else None
        name = tag_name(element)

        if name == "select":
            options = self.options(element)
            if stored is not None:
                return stored
            for option in options:
                if has_attribute(option, "selected"):
                    return self.option_value(option)
            return self.option_value(options[0]) if options else ""

        if stored is not None:
            return stored
        if name == "textarea" or is_content_editable(element):
            return text_content(element)
        if name == "input":
            default = get_attribute(element, "value")
            if default is None and input_type(element) in {"checkbox", "radio"}:
                return "on"
            return default or ""
        return ""

    def set_value(self, element: Tag, value: str) -> None:
        if tag_name(element) == "select":
            values = [self.option_value(option) for option in self.options(element)]
            value = value if value in values else ""
        self._state(element).value = value

    def checked(self, element: Tag) -> bool:
        state = self._state(element, create=False)
        if state is not None and state.checked is not None:
            return state.checked
        return has_attribute(element, "checked")

    def set_checked(self, element: Tag, checked: bool) -> None:
        name = get_attribute(element, "name")
        if checked and input_type(element) == "radio" and name:
            scope = sv.closest("form", element) or self.soup
            for other in group_members(scope, name, "radio"):
                if other is not element:
                    self._state(other).checked = False
        self._state(element).checked = checked

    # ------------------------------------------------------------------
    # Focus and events
    # ------------------------------------------------------------------
    @property
    def active_element(self) -> Optional[Tag]:
        return self._focused.resolve() if self._focused is not None else None

    def focus(self, element: Tag) -> None:
        self._focused = self.ref(element)

    def add_event_listener(self, element: Tag, event_type: str, listener: EventListener) -> None:
        self._state(element).listeners.setdefault(event_type, []).append(listener)

    def dispatch_event(self, element: Tag, event_type: str) -> DomEvent:
        """Dispatches a bubbling event; listener errors are reported, not raised."""

        event = DomEvent(type=event_type, target=element, page=self)
        self.event_log.append(event)

        node: Optional[Tag] = element
        while node is not None:
            state = self._state(node, create=False)
            if state is not None:
                event.current_target = node
                for listener in list(state.listeners.get(event_type, ())):
                    try:
                        listener(event)
                    except Exception:
                        logger.warning("Listener for '%s' raised", event_type, exc_info=True)
            node = parent_element(node)
        return event

    def events_for(self, element: Tag) -> List[str]:
        return [event.type for event in self.event_log if event.target is element]

    # ------------------------------------------------------------------
    # Structural mutation
    # ------------------------------------------------------------------
    def observe(self, callback: MutationCallback, root: Optional[Tag] = None) -> MutationObserver:
        observer = MutationObserver(self, callback, self.soup if root is None else root)
        self._observers.append(observer)
        return observer

    def _detach_observer(self, observer: MutationObserver) -> None:
        self._observers = [item for item in self._observers if item is not observer]

    def _notify(self, record: MutationRecord) -> None:
        for observer in list(self._observers):
            target = record.target
            if target is observer.root or any(
                parent is observer.root for parent in target.parents
            ):
                observer._deliver([record])

    def append_html(self, parent: Tag, html: str) -> List[Tag]:
        fragment = BeautifulSoup(html, "html.parser")
        nodes = list(fragment.contents)
        added = [node for node in nodes if isinstance(node, Tag)]
        for node in nodes:
            parent.append(node.extract())
        self._notify(MutationRecord(target=parent, added=added))
        return added

    def remove(self, element: Tag) -> None:
        parent = element.parent or self.soup
        element.extract()
        self._notify(MutationRecord(target=parent, removed=[element]))

    def set_attribute(self, element: Tag, name: str, value: str) -> None:
        element[name] = value

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_html(self) -> str:
        """Serializes the document with live values written back into the markup."""

        snapshot = copy.copy(self.soup)
        originals = self.soup.find_all(True)
        copies = snapshot.find_all(True)

        for original, clone in zip(originals, copies):
            state = self._state(original, create=False)
            if state is None:
                continue
            name = tag_name(original)
            if name == "select" and state.value is not None:
                for option in clone.find_all("option"):
                    if self.option_value(option) == state.value:
                        option["selected"] = "selected"
                    elif option.has_attr("selected"):
                        del option["selected"]
            elif name == "input" and input_type(original) in {"checkbox", "radio"}:
                if state.checked is True:
                    clone["checked"] = "checked"
                elif state.checked is False and clone.has_attr("checked"):
                    del clone["checked"]
            elif state.value is not None:
                if name == "input":
                    clone["value"] = state.value
                elif name == "textarea" or is_content_editable(original):
                    clone.string = state.value
        return str(snapshot)

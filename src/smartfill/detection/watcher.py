"""Structural mutation watcher that signals when a re-scan is worthwhile."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import soupsieve as sv
from bs4 import Tag

from ..dom.page import DomPage, MutationObserver, MutationRecord
from .selectors import WATCHED_DESCENDANT_SELECTOR, WATCHED_NODE_SELECTOR

logger = logging.getLogger(__name__)

ChangeCallback = Callable[["DynamicWatcher"], None]


def is_form_change(node: Tag) -> bool:
    if not isinstance(node, Tag):
        return False
    return bool(
        sv.match(WATCHED_NODE_SELECTOR, node)
        or sv.select_one(WATCHED_DESCENDANT_SELECTOR, node) is not None
    )


class DynamicWatcher:
    """Observes ``root`` (the page body by default) for added form-shaped nodes."""

    def __init__(self, page: DomPage, root: Optional[Tag] = None) -> None:
        self.page = page
        self.root = page.body if root is None else root
        self.change_count = 0
        self._observer: Optional[MutationObserver] = None
        self._callbacks: List[ChangeCallback] = []

    @property
    def active(self) -> bool:
        return self._observer is not None and self._observer.connected

    def subscribe(self, callback: ChangeCallback) -> None:
        self._callbacks.append(callback)

    def start(self) -> None:
        if self.active:
            return
        self._observer = self.page.observe(self._on_mutations, self.root)

    def dispose(self) -> None:
        if self._observer is not None:
            self._observer.disconnect()
            self._observer = None
        self._callbacks.clear()

    def consume(self) -> bool:
        """Returns whether a change was signalled since the last call, and resets it."""

        changed = self.change_count > 0
        self.change_count = 0
        return changed

    def _on_mutations(self, records: List[MutationRecord]) -> None:
        if not any(is_form_change(node) for record in records for node in record.added):
            return
        self.change_count += 1
        logger.debug("Form structure changed on %s", self.page.url)
        for callback in list(self._callbacks):
            callback(self)


class WatcherRegistry:
    """Holds the single live watcher; a replacement disposes its predecessor first."""

    def __init__(self) -> None:
        self._active: Optional[DynamicWatcher] = None

    @property
    def active(self) -> Optional[DynamicWatcher]:
        return self._active

    def replace(self, watcher: DynamicWatcher) -> DynamicWatcher:
        self.dispose()
        watcher.start()
        self._active = watcher
        return watcher

    def dispose(self) -> None:
        if self._active is not None:
            self._active.dispose()
            self._active = None


watchers = WatcherRegistry()

"""Full-page detection across native forms, framework islands and loose controls."""

from __future__ import annotations

import logging
from typing import List, Optional

import soupsieve as sv
from bs4 import Tag

from ..core.config import EngineConfig
from ..core.models import DetectedForm, FormField, ScanResult
from ..core.scheduler import Scheduler, default_scheduler
from ..dom.nodes import tag_name
from ..dom.page import DomPage
from .filter import NATIVE_CONTROL_TAGS
from .scanner import FieldScanner
from .selectors import FRAMEWORK_MOUNT_SELECTOR, FRAMEWORK_SELECTOR, NATIVE_CONTROL_SELECTOR
from .watcher import DynamicWatcher, WatcherRegistry, watchers as default_watchers

logger = logging.getLogger(__name__)


def _outside_form(element: Tag) -> bool:
    return sv.closest("form", element) is None


def _wraps_native_control(element: Tag) -> bool:
    """Framework wrappers like ``.FormField`` are represented by the control inside them."""

    return (
        tag_name(element) not in NATIVE_CONTROL_TAGS
        and sv.select_one(NATIVE_CONTROL_SELECTOR, element) is not None
    )


class FormDetector:
    def __init__(
        self,
        page: DomPage,
        *,
        config: Optional[EngineConfig] = None,
        scheduler: Optional[Scheduler] = None,
        watchers: Optional[WatcherRegistry] = None,
    ) -> None:
        self.page = page
        self.config = config or EngineConfig()
        self.scheduler = scheduler or default_scheduler
        self.watchers = watchers if watchers is not None else default_watchers
        self.scanner = FieldScanner(page, self.config)

    async def wait_for_framework(self) -> bool:
        """Polls for a client framework mount point until the configured timeout."""

        started = self.scheduler.monotonic()
        while True:
            if self.page.select_one(FRAMEWORK_MOUNT_SELECTOR) is not None:
                return True
            if self.scheduler.monotonic() - started >= self.config.framework_wait_timeout:
                return False
            await self.scheduler.sleep(self.config.framework_poll_interval)

    async def detect(self, container: Optional[Tag] = None) -> ScanResult:
        root = self.page.root if container is None else container
        try:
            mounted = await self.wait_for_framework()
            logger.debug("Framework mount signal: %s", mounted)
            forms = self._collect(root)
        except Exception:
            logger.exception("Form detection failed on %s", self.page.url)
            return ScanResult(success=False)

        self.watchers.replace(DynamicWatcher(self.page))
        logger.info(
            "Detected %d form(s) with %d field(s) on %s",
            len(forms),
            sum(form.field_count for form in forms),
            self.page.url,
        )
        return ScanResult(success=True, forms=forms)

    def _collect(self, root: Tag) -> List[DetectedForm]:
        detected: List[DetectedForm] = []

        forms = [root] if tag_name(root) == "form" else self.page.select("form", root)
        for form in forms:
            fields = self.scanner.scan(form)
            detected.append(DetectedForm(element=self.page.ref(form), fields=fields))

        framework_fields = self._scan_loose(root, FRAMEWORK_SELECTOR, skip_wrappers=True)
        detected.append(DetectedForm(element=None, fields=framework_fields, synthetic=True))

        captured = {item.element.node_id for item in framework_fields}
        standalone = [
            item
            for item in self._scan_loose(root, NATIVE_CONTROL_SELECTOR)
            if item.element.node_id not in captured
        ]
        detected.append(DetectedForm(element=None, fields=standalone, synthetic=True))

        return [form for form in detected if form.fields]

    def _scan_loose(self, root: Tag, selector: str, *, skip_wrappers: bool = False) -> List[FormField]:
        elements = [
            element
            for element in self.page.select(selector, root)
            if _outside_form(element) and not (skip_wrappers and _wraps_native_control(element))
        ]
        return self.scanner.scan(self.page.body, elements)

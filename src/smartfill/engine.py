"""Public entry points: ``detect`` and ``fill``."""

from __future__ import annotations

from typing import Iterable, Optional

from bs4 import Tag

from .core.config import EngineConfig
from .core.errors import InvalidArgumentError
from .core.models import FillOutcome, FormField, ScanResult, ValueBag
from .core.scheduler import Scheduler
from .detection.aggregator import FormDetector
from .detection.watcher import WatcherRegistry
from .dom.page import DomPage
from .filling.executor import FillExecutor


async def detect(
    page: DomPage,
    container: Optional[Tag] = None,
    *,
    config: Optional[EngineConfig] = None,
    scheduler: Optional[Scheduler] = None,
    watchers: Optional[WatcherRegistry] = None,
) -> ScanResult:
    if page is None:
        raise InvalidArgumentError("page must not be None")
    detector = FormDetector(page, config=config, scheduler=scheduler, watchers=watchers)
    return await detector.detect(container)


async def fill(
    fields: Iterable[FormField],
    values: ValueBag,
    *,
    config: Optional[EngineConfig] = None,
    scheduler: Optional[Scheduler] = None,
) -> FillOutcome:
    executor = FillExecutor(config=config, scheduler=scheduler)
    return await executor.fill(fields, values)

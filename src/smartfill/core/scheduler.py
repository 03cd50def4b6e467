"""Clock and sleep abstraction for every cooperative suspension point."""

from __future__ import annotations

import asyncio
import time
from typing import Protocol


class Scheduler(Protocol):
    def monotonic(self) -> float:
        ...

    async def sleep(self, seconds: float) -> None:
        ...


class AsyncioScheduler:
    """Real-time scheduler backed by the running event loop."""

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(max(0.0, seconds))


default_scheduler = AsyncioScheduler()

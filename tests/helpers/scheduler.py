"""Deterministic scheduler: ``sleep`` advances a virtual clock instantly."""

from __future__ import annotations

from typing import List


class FakeScheduler:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

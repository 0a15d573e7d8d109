# signature/logic/clock.py
from __future__ import annotations
import time
from typing import Callable

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic milliseconds; arbitrary origin, consistent within the process."""
    return time.perf_counter() * 1000.0


class ManualClock:
    """Clock driven by hand. Used for headless capture and deterministic tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def set(self, value: float) -> None:
        self.now = float(value)

    def advance(self, delta: float) -> float:
        self.now += float(delta)
        return self.now

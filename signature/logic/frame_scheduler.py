# signature/logic/frame_scheduler.py
"""
Frame callback scheduling for replay animations.

A scheduler hands out revocable handles; the callback receives the frame time
in milliseconds.
"""
from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

FrameCallback = Callable[[float], None]


class FrameScheduler(ABC):
    @abstractmethod
    def request_frame(self, callback: FrameCallback) -> Any:
        """Run ``callback`` on the next frame; returns a handle for ``cancel_frame``."""

    @abstractmethod
    def cancel_frame(self, handle: Any) -> None:
        ...


class ManualFrameScheduler(FrameScheduler):
    """Frames are produced by calling ``tick``. Used headless and in tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = itertools.count(1)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: Any) -> None:
        self._pending.pop(handle, None)

    def tick(self, delta_ms: float = 16.0) -> int:
        """Advance time and run the callbacks due on this frame. Returns how many ran."""
        self.now += float(delta_ms)
        due, self._pending = self._pending, {}
        for cb in due.values():
            cb(self.now)
        return len(due)

    def run_until_idle(self, delta_ms: float = 16.0, max_frames: int = 100_000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            self.tick(delta_ms)
            frames += 1
        return frames

# signature/logic/pointer_source.py
"""
Pointer activity sources.

Each source turns a raw platform event into a PointerSample (logical location
relative to the surface plus a clock reading). Drawing logic never branches on
the event type; it only talks to a PointerSource.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from ..models.pointer_sample import PointerSample
from ..models.signature_enums import PointerKind
from .clock import Clock, monotonic_ms
from .surface import Bounds


@dataclass(frozen=True)
class MouseEvent:
    """Mouse-style event in logical client coordinates."""
    client_x: float
    client_y: float


@dataclass(frozen=True)
class Contact:
    client_x: float
    client_y: float


@dataclass(frozen=True)
class TouchEvent:
    """Touch-style event; ``touches`` holds the contacts still down."""
    touches: Sequence[Contact] = field(default_factory=tuple)


class PointerSource(ABC):
    kind: PointerKind

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or monotonic_ms

    @abstractmethod
    def client_position(self, event: Any) -> Optional[Tuple[float, float]]:
        """Client coordinates of the tracked pointer, None if the event has none."""

    def sample(self, event: Any, bounds: Bounds) -> Optional[PointerSample]:
        pos = self.client_position(event)
        if pos is None:
            return None
        return PointerSample(
            x=pos[0] - bounds.left,
            y=pos[1] - bounds.top,
            timestamp=self._clock(),
            kind=self.kind,
        )


class MousePointerSource(PointerSource):
    kind = PointerKind.MOUSE

    def client_position(self, event: Any) -> Optional[Tuple[float, float]]:
        x = getattr(event, "client_x", None)
        y = getattr(event, "client_y", None)
        if x is None or y is None:
            return None
        return float(x), float(y)


class TouchPointerSource(PointerSource):
    """Follows only the primary (first) contact of multi-touch events."""
    kind = PointerKind.TOUCH

    def client_position(self, event: Any) -> Optional[Tuple[float, float]]:
        touches = getattr(event, "touches", None) or ()
        if not touches:
            return None
        primary = touches[0]
        return float(primary.client_x), float(primary.client_y)

# signature/logic/capture_engine.py
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from ..models.point import Point
from ..models.pointer_sample import PointerSample
from ..models.signature_enums import CaptureState
from ..models.stroke import Stroke
from ..models.stroke_record import StrokeRecord
from .pointer_source import PointerSource
from .surface import DrawingSurface

logger = logging.getLogger(__name__)


@dataclass
class _Drawing:
    """Ephemeral state while the pointer is down; never part of the record."""
    stroke: Stroke

    @property
    def last_point(self) -> Point:
        return self.stroke.points[-1]


class CaptureEngine:
    """
    Turns live pointer input into a StrokeRecord and renders ink as it arrives.

    States: IDLE and DRAWING (with the in-progress stroke). Strokes with fewer
    than two points are dropped on release. The engine owns its record; callers
    get copies through ``get_record()``.
    """

    def __init__(self, surface: DrawingSurface, *, color: str = "#000000", width: float = 2.0,
                 id_factory: Optional[Callable[[], str]] = None) -> None:
        if width <= 0:
            raise ValueError(f"Stroke width must be positive, got {width!r}.")
        self._surface = surface
        self._color = color
        self._width = float(width)
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._strokes: List[Stroke] = []
        self._drawing: Optional[_Drawing] = None
        self._listeners: List[Callable[[], None]] = []

        surface.add_resize_listener(self._on_surface_resize)
        self._on_surface_resize()

    # ------------------------------------------------------------------ config
    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def color(self) -> str:
        return self._color

    @property
    def width(self) -> float:
        return self._width

    def set_color(self, color: str) -> None:
        """Applies to strokes started after this call."""
        self._color = color

    def set_width(self, width: float) -> None:
        """Applies to strokes started after this call."""
        if width <= 0:
            raise ValueError(f"Stroke width must be positive, got {width!r}.")
        self._width = float(width)

    # ------------------------------------------------------------------ state
    @property
    def state(self) -> CaptureState:
        return CaptureState.DRAWING if self._drawing else CaptureState.IDLE

    @property
    def stroke_count(self) -> int:
        return len(self._strokes)

    @property
    def has_signature(self) -> bool:
        return bool(self._strokes)

    def add_change_listener(self, listener: Callable[[], None]) -> None:
        """Called after a stroke is committed and after reset."""
        self._listeners.append(listener)

    def remove_change_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------ raw events
    def handle_down(self, source: PointerSource, event: Any) -> None:
        sample = source.sample(event, self._surface.bounding_box())
        if sample is not None:
            self.pointer_down(sample)

    def handle_move(self, source: PointerSource, event: Any) -> None:
        if self._drawing is None:
            return
        sample = source.sample(event, self._surface.bounding_box())
        if sample is not None:
            self.pointer_move(sample)

    def handle_up(self, source: PointerSource | None = None, event: Any = None) -> None:
        self.pointer_up()

    # ------------------------------------------------------------------ state machine
    def pointer_down(self, sample: PointerSample) -> None:
        if self._drawing is not None:
            return
        stroke = Stroke(
            id=self._id_factory(),
            color=self._color,
            width=self._width,
            points=[Point(sample.x, sample.y, sample.timestamp)],
        )
        self._drawing = _Drawing(stroke)

    def pointer_move(self, sample: PointerSample) -> None:
        drawing = self._drawing
        if drawing is None:
            return
        prev = drawing.last_point
        point = Point(sample.x, sample.y, sample.timestamp)
        drawing.stroke.points.append(point)
        if self._surface.is_available:
            self._surface.draw_segment(prev.x, prev.y, point.x, point.y,
                                       drawing.stroke.color, drawing.stroke.width)

    def pointer_up(self) -> None:
        drawing, self._drawing = self._drawing, None
        if drawing is None:
            return
        stroke = drawing.stroke
        if not stroke.is_complete:
            logger.debug("Discarding stroke %s with %d point(s)", stroke.id, len(stroke.points))
            return
        self._strokes.append(stroke)
        logger.debug("Committed stroke %s (%d points)", stroke.id, len(stroke.points))
        self.redraw()
        self._notify()

    def pointer_leave(self) -> None:
        self.pointer_up()

    # ------------------------------------------------------------------ public contract
    def reset(self) -> None:
        """Drop every stroke and all visible ink. Unsaved strokes are lost."""
        self._drawing = None
        self._strokes.clear()
        if self._surface.is_available:
            self._surface.clear()
        self._notify()

    def get_record(self) -> Optional[StrokeRecord]:
        """A copy of the completed strokes, or None when nothing is signed."""
        if not self._strokes:
            return None
        return StrokeRecord.of(self._strokes)

    # ------------------------------------------------------------------ rendering
    def redraw(self) -> None:
        surface = self._surface
        if not surface.is_available:
            return
        surface.clear()
        strokes = list(self._strokes)
        if self._drawing is not None:
            strokes.append(self._drawing.stroke)
        for stroke in strokes:
            surface.draw_polyline([(p.x, p.y) for p in stroke.points], stroke.color, stroke.width)

    def detach(self) -> None:
        self._surface.remove_resize_listener(self._on_surface_resize)

    def _on_surface_resize(self) -> None:
        if self._surface.sync_backing():
            self.redraw()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

# signature/logic/replay_engine.py
"""
Replay of a finished StrokeRecord: static rendering and bounded-duration
animation.

The animation flattens every point of every stroke into one timeline sorted by
timestamp (ties broken by stroke order, then point order), compresses it into
at most ``max_duration_ms`` of wall-clock time and, frame by frame, commits the
segments whose end point is due. Only pairs belonging to the same stroke are
connected. A commit cursor makes each segment drawn exactly once.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, List, NamedTuple, Optional

from ..models.signature_config import DEFAULT_MAX_REPLAY_MS
from ..models.stroke_record import StrokeRecord
from .frame_scheduler import FrameScheduler
from .surface import DrawingSurface
from .viewport import IDENTITY, Viewport, fit_record

logger = logging.getLogger(__name__)

_EPSILON_MS = 1e-6


class TimelineEntry(NamedTuple):
    x: float
    y: float
    timestamp: float
    color: str
    width: float
    stroke_id: str
    stroke_index: int
    point_index: int


def build_timeline(record: StrokeRecord) -> List[TimelineEntry]:
    """All points of the record in global timestamp order."""
    entries = [
        TimelineEntry(p.x, p.y, p.timestamp, s.color, s.width, s.id, si, pi)
        for si, s in enumerate(record.strokes)
        for pi, p in enumerate(s.points)
    ]
    entries.sort(key=lambda e: (e.timestamp, e.stroke_index, e.point_index))
    return entries


def replay_timing(first: float, last: float, max_duration_ms: float) -> tuple[float, float, float]:
    """(total_duration, animation_duration, speed_factor) for a timeline span."""
    total = last - first
    animation = min(total, max_duration_ms)
    speed = total / animation if animation > 0 else 1.0
    return total, animation, speed


@dataclass
class _Playback:
    """State kept across frames of one running replay."""
    record: StrokeRecord
    timeline: List[TimelineEntry]
    viewport: Viewport
    first: float
    last: float
    speed: float
    cursor: int = 0
    start_time: Optional[float] = None
    handle: Any = None
    cancelled: bool = False
    frames: int = 0
    segments: int = 0


class ReplayEngine:
    """Renders a StrokeRecord on a surface, statically or animated."""

    def __init__(self, surface: DrawingSurface, scheduler: FrameScheduler, *,
                 max_duration_ms: float = DEFAULT_MAX_REPLAY_MS,
                 fit_to_surface: bool = False, padding: float = 20.0) -> None:
        if max_duration_ms <= 0:
            raise ValueError(f"max_duration_ms must be positive, got {max_duration_ms!r}.")
        self._surface = surface
        self._scheduler = scheduler
        self._max_duration_ms = float(max_duration_ms)
        self._fit = fit_to_surface
        self._padding = float(padding)
        self._record: Optional[StrokeRecord] = None
        self._playback: Optional[_Playback] = None
        self._torn_down = False
        self._finished_listeners: List[Callable[[bool], None]] = []

        surface.add_resize_listener(self._on_surface_resize)
        surface.sync_backing()

    # ------------------------------------------------------------------ properties
    @property
    def is_playing(self) -> bool:
        return self._playback is not None

    @property
    def record(self) -> Optional[StrokeRecord]:
        return self._record

    def add_finished_listener(self, listener: Callable[[bool], None]) -> None:
        """``listener(completed)`` runs when a replay ends or is stopped."""
        self._finished_listeners.append(listener)

    # ------------------------------------------------------------------ static
    def render_static(self, record: Optional[StrokeRecord]) -> None:
        """
        Clear and draw every stroke at once. Safe on empty or None records and
        while a replay runs: the running replay is stopped first.
        """
        if self._playback is not None:
            self.stop()
        self._record = record
        surface = self._surface
        if self._torn_down or not surface.is_available:
            return
        surface.clear()
        if record is None or record.is_empty:
            return
        viewport = self._viewport_for(record)
        if viewport is None:
            logger.debug("render_static skipped: surface too small")
            return
        for stroke in record.strokes:
            if len(stroke.points) < 2:
                continue
            surface.draw_polyline([viewport.map(p.x, p.y) for p in stroke.points],
                                  stroke.color, viewport.width(stroke.width))

    # ------------------------------------------------------------------ animation
    def play(self, record: Optional[StrokeRecord]) -> bool:
        """
        Start an animated replay. Returns False when nothing was started
        (already playing, empty record, torn down, or the record played back
        instantly as a static render).
        """
        if self._torn_down or self._playback is not None:
            return False
        if record is None or record.is_empty:
            return False

        timeline = build_timeline(record)
        if len(timeline) < 2:
            self.render_static(record)
            return False

        first, last = timeline[0].timestamp, timeline[-1].timestamp
        total, animation, speed = replay_timing(first, last, self._max_duration_ms)
        if not math.isfinite(total) or total <= 0:
            # all points share one timestamp, or the timing is unusable
            self.render_static(record)
            return False

        if not self._surface.is_available:
            return False
        viewport = self._viewport_for(record)
        if viewport is None:
            logger.debug("play skipped: surface too small")
            return False

        self._record = record
        self._surface.clear()
        self._playback = _Playback(record=record, timeline=timeline, viewport=viewport,
                                   first=first, last=last, speed=speed)
        logger.debug("Replay started: %d points, %.1f ms -> %.1f ms (x%.2f)",
                     len(timeline), total, animation, speed)
        self._schedule(self._playback)
        return True

    def stop(self, *, final_render: bool = False) -> None:
        """Cancel a running replay and release its pending frame."""
        pb, self._playback = self._playback, None
        if pb is None:
            return
        pb.cancelled = True
        if pb.handle is not None:
            self._scheduler.cancel_frame(pb.handle)
            pb.handle = None
        if final_render:
            self.render_static(pb.record)
        self._notify_finished(False)

    def teardown(self) -> None:
        """Stop, detach from the surface and refuse further work."""
        self.stop()
        self._surface.remove_resize_listener(self._on_surface_resize)
        self._torn_down = True

    # ------------------------------------------------------------------ frame loop
    def _schedule(self, pb: _Playback) -> None:
        pb.handle = self._scheduler.request_frame(lambda now: self._on_frame(pb, now))

    def _on_frame(self, pb: _Playback, now: float) -> None:
        pb.handle = None
        if pb.cancelled or pb is not self._playback:
            return
        if not self._surface.is_available:
            self.stop()
            return
        if pb.start_time is None:
            pb.start_time = now
        pb.frames += 1

        signature_time = pb.first + (now - pb.start_time) * pb.speed
        self._commit_until(pb, signature_time)

        if signature_time + _EPSILON_MS >= pb.last:
            self._playback = None
            # exact final image regardless of frame timing
            self.render_static(pb.record)
            logger.debug("Replay finished after %d frame(s), %d segment(s)", pb.frames, pb.segments)
            self._notify_finished(True)
            return
        self._schedule(pb)

    def _commit_until(self, pb: _Playback, signature_time: float) -> None:
        timeline = pb.timeline
        vp = pb.viewport
        surface = self._surface
        while pb.cursor + 1 < len(timeline) and timeline[pb.cursor + 1].timestamp <= signature_time:
            a = timeline[pb.cursor]
            b = timeline[pb.cursor + 1]
            if a.stroke_index == b.stroke_index:
                x0, y0 = vp.map(a.x, a.y)
                x1, y1 = vp.map(b.x, b.y)
                surface.draw_segment(x0, y0, x1, y1, b.color, vp.width(b.width))
                pb.segments += 1
            pb.cursor += 1

    # ------------------------------------------------------------------ helpers
    def _viewport_for(self, record: StrokeRecord) -> Optional[Viewport]:
        if not self._fit:
            return IDENTITY
        return fit_record(record, self._surface.logical_size(), self._padding)

    def _on_surface_resize(self) -> None:
        if self._torn_down:
            return
        # never resume a partial animation after a resize
        self.stop()
        if self._surface.sync_backing():
            self.render_static(self._record)

    def _notify_finished(self, completed: bool) -> None:
        for listener in list(self._finished_listeners):
            listener(completed)

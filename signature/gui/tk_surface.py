# signature/gui/tk_surface.py
"""Tk adapters: canvas surface, frame scheduler and pointer bindings."""
from __future__ import annotations

import tkinter as tk
from typing import Any, Callable, Optional, Tuple

from ..logic.capture_engine import CaptureEngine
from ..logic.clock import Clock, monotonic_ms
from ..logic.frame_scheduler import FrameCallback, FrameScheduler
from ..logic.pointer_source import MouseEvent, MousePointerSource
from ..logic.surface import Bounds, DrawingSurface

_INK_TAG = "ink"
_BASE_DPI = 96.0


class TkCanvasSurface(DrawingSurface):
    """
    Surface over a tk.Canvas that fills its parent.

    Tk reports physical pixels; logical sizes are physical / pixel ratio.
    Resizes arrive through <Configure>, so notifications are push-based.
    """

    def __init__(self, canvas: tk.Canvas, *, device_pixel_ratio: Optional[float] = None) -> None:
        super().__init__()
        self._canvas = canvas
        self._dpr = device_pixel_ratio or self._detect_dpr(canvas)
        self._alive = True
        self._last_size: Tuple[int, int] = (0, 0)
        canvas.bind("<Configure>", self._on_configure, add="+")
        canvas.bind("<Destroy>", self._on_destroy, add="+")

    @staticmethod
    def _detect_dpr(canvas: tk.Canvas) -> float:
        try:
            return max(1.0, float(canvas.winfo_fpixels("1i")) / _BASE_DPI)
        except tk.TclError:
            return 1.0

    @property
    def canvas(self) -> tk.Canvas:
        return self._canvas

    # geometry
    def logical_size(self) -> Tuple[float, float]:
        if not self.is_available:
            return (0.0, 0.0)
        return (self._canvas.winfo_width() / self._dpr, self._canvas.winfo_height() / self._dpr)

    @property
    def device_pixel_ratio(self) -> float:
        return self._dpr

    def bounding_box(self) -> Bounds:
        w, h = self.logical_size()
        if not self.is_available:
            return Bounds(0.0, 0.0, w, h)
        return Bounds(self._canvas.winfo_rootx() / self._dpr, self._canvas.winfo_rooty() / self._dpr, w, h)

    @property
    def is_available(self) -> bool:
        if not self._alive:
            return False
        try:
            return bool(self._canvas.winfo_exists())
        except tk.TclError:
            return False

    # backing buffer
    def resize_backing(self, width_px: int, height_px: int) -> None:
        # The canvas already has the physical size; keep the scroll region in step
        self._canvas.configure(scrollregion=(0, 0, width_px, height_px))

    # drawing
    def clear(self) -> None:
        if self.is_available:
            self._canvas.delete(_INK_TAG)

    def draw_segment(self, x0: float, y0: float, x1: float, y1: float,
                     color: str, width: float) -> None:
        if not self.is_available:
            return
        s = self._scale
        self._canvas.create_line(
            x0 * s, y0 * s, x1 * s, y1 * s,
            fill=color,
            width=max(1.0, width * s),
            capstyle=tk.ROUND,
            joinstyle=tk.ROUND,
            tags=(_INK_TAG,),
        )

    # events
    def _on_configure(self, event: Any) -> None:
        size = (int(event.width), int(event.height))
        if size == self._last_size:
            return
        self._last_size = size
        self._notify_resize()

    def _on_destroy(self, event: Any) -> None:
        if event.widget is self._canvas:
            self._alive = False


class TkFrameScheduler(FrameScheduler):
    """Frames via ``widget.after``; Tk's event loop is the display's frame source."""

    def __init__(self, widget: tk.Misc, *, interval_ms: int = 16, clock: Clock = monotonic_ms) -> None:
        self._widget = widget
        self._interval_ms = max(1, int(interval_ms))
        self._clock = clock

    def request_frame(self, callback: FrameCallback) -> Any:
        return self._widget.after(self._interval_ms, lambda: callback(self._clock()))

    def cancel_frame(self, handle: Any) -> None:
        try:
            self._widget.after_cancel(handle)
        except tk.TclError:
            # interpreter already gone; owners cancel via ReplayEngine.teardown before destroy
            pass


def bind_pointer_events(surface: TkCanvasSurface, engine: CaptureEngine,
                        source: Optional[MousePointerSource] = None) -> Callable[[], None]:
    """
    Route Tk button-1 events into ``engine``. Returns an unbind function.

    The canvas must be owned by the caller: before Python 3.13
    ``Misc.unbind(seq, funcid)`` drops every script bound to ``seq``, not only
    the ones added here.

    Tk delivers touch input as emulated button-1 events, so one mouse source
    covers both.
    """
    canvas = surface.canvas
    src = source or MousePointerSource()
    dpr = surface.device_pixel_ratio

    def _event(e: Any) -> MouseEvent:
        return MouseEvent(client_x=e.x_root / dpr, client_y=e.y_root / dpr)

    bindings = {
        "<ButtonPress-1>": lambda e: engine.handle_down(src, _event(e)),
        "<B1-Motion>": lambda e: engine.handle_move(src, _event(e)),
        "<ButtonRelease-1>": lambda e: engine.handle_up(src, _event(e)),
        "<Leave>": lambda e: engine.pointer_leave(),
    }
    ids = {seq: canvas.bind(seq, fn, add="+") for seq, fn in bindings.items()}

    def unbind() -> None:
        for seq, funcid in ids.items():
            try:
                canvas.unbind(seq, funcid)
            except tk.TclError:
                pass

    return unbind

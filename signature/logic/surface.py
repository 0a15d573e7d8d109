# signature/logic/surface.py
"""
Drawing surfaces for signature ink.

A surface has a logical size (device-independent pixels) and a backing buffer
of ``logical * device_pixel_ratio`` physical pixels. Engines issue every
drawing call in logical coordinates; the surface applies the uniform scale
transform set via ``set_scale``. All ink is drawn with round caps and joins.

Concrete surfaces:
- PillowSurface: in-memory RGBA backing buffer (headless, pixel exact)
- TkCanvasSurface: a tkinter Canvas (interactive)
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw

from ..exceptions.errors import SurfaceError

logger = logging.getLogger(__name__)

ResizeListener = Callable[[], None]
Segment = Tuple[float, float, float, float, str, float]


@dataclass(frozen=True)
class Bounds:
    """Surface bounding box in logical client coordinates."""
    left: float
    top: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class DrawingSurface(ABC):
    """Abstract ink surface with push-based resize notifications."""

    def __init__(self) -> None:
        self._resize_listeners: List[ResizeListener] = []
        self._scale = 1.0

    # ---------------------------------------------------------------- geometry
    @abstractmethod
    def logical_size(self) -> Tuple[float, float]:
        ...

    @property
    @abstractmethod
    def device_pixel_ratio(self) -> float:
        ...

    @abstractmethod
    def bounding_box(self) -> Bounds:
        ...

    @property
    def is_available(self) -> bool:
        """False once the underlying widget/buffer is gone."""
        return True

    @property
    def scale(self) -> float:
        return self._scale

    # ---------------------------------------------------------------- backing buffer
    @abstractmethod
    def resize_backing(self, width_px: int, height_px: int) -> None:
        ...

    def set_scale(self, scale: float) -> None:
        """Replace the current transform with a uniform scale."""
        if scale <= 0:
            raise SurfaceError(f"Scale must be positive, got {scale!r}.")
        self._scale = float(scale)

    def sync_backing(self) -> bool:
        """
        Size the backing buffer to the logical size times the pixel ratio and
        install the matching scale. Returns False (and does nothing) when the
        surface is gone or has zero area.
        """
        if not self.is_available:
            logger.debug("sync_backing skipped: surface unavailable")
            return False
        w, h = self.logical_size()
        if w <= 0 or h <= 0:
            logger.debug("sync_backing skipped: zero-area surface %sx%s", w, h)
            return False
        dpr = self.device_pixel_ratio or 1.0
        self.resize_backing(round(w * dpr), round(h * dpr))
        self.set_scale(dpr)
        return True

    # ---------------------------------------------------------------- drawing
    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def draw_segment(self, x0: float, y0: float, x1: float, y1: float,
                     color: str, width: float) -> None:
        """Draw one round-capped line segment in logical coordinates."""

    def draw_polyline(self, points: Sequence[Tuple[float, float]], color: str, width: float) -> None:
        # Same primitive as incremental drawing, keeps redraws pixel-equivalent
        for (x0, y0), (x1, y1) in zip(points, points[1:]):
            self.draw_segment(x0, y0, x1, y1, color, width)

    # ---------------------------------------------------------------- resize notifications
    def add_resize_listener(self, listener: ResizeListener) -> None:
        if listener not in self._resize_listeners:
            self._resize_listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        if listener in self._resize_listeners:
            self._resize_listeners.remove(listener)

    def _notify_resize(self) -> None:
        for listener in list(self._resize_listeners):
            listener()


class PillowSurface(DrawingSurface):
    """
    Headless surface backed by a Pillow RGBA image.

    ``resize()`` plays the part of the parent container changing size and
    notifies listeners synchronously. ``display_list`` keeps every segment
    drawn since the last clear, in logical coordinates.
    """

    def __init__(self, width: float, height: float, *, device_pixel_ratio: float = 1.0,
                 origin: Tuple[float, float] = (0.0, 0.0),
                 background: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> None:
        super().__init__()
        self._size = (float(width), float(height))
        self._dpr = float(device_pixel_ratio)
        self._origin = origin
        self._background = background
        self._available = True
        self.display_list: List[Segment] = []
        self.image = Image.new("RGBA", (1, 1), background)
        self._draw = ImageDraw.Draw(self.image)

    # geometry
    def logical_size(self) -> Tuple[float, float]:
        return self._size

    @property
    def device_pixel_ratio(self) -> float:
        return self._dpr

    def bounding_box(self) -> Bounds:
        return Bounds(self._origin[0], self._origin[1], self._size[0], self._size[1])

    @property
    def is_available(self) -> bool:
        return self._available

    def resize(self, width: float, height: float, *, device_pixel_ratio: float | None = None) -> None:
        self._size = (float(width), float(height))
        if device_pixel_ratio is not None:
            self._dpr = float(device_pixel_ratio)
        self._notify_resize()

    def move_to(self, left: float, top: float) -> None:
        self._origin = (left, top)

    def destroy(self) -> None:
        self._available = False

    # backing buffer
    def resize_backing(self, width_px: int, height_px: int) -> None:
        # Resizing a backing buffer drops its content, like an HTML canvas
        self.image = Image.new("RGBA", (max(1, width_px), max(1, height_px)), self._background)
        self._draw = ImageDraw.Draw(self.image)
        self.display_list.clear()

    # drawing
    def clear(self) -> None:
        self._draw.rectangle((0, 0, self.image.width, self.image.height), fill=self._background)
        self.display_list.clear()

    def draw_segment(self, x0: float, y0: float, x1: float, y1: float,
                     color: str, width: float) -> None:
        if not self._available:
            return
        s = self._scale
        rgba = ImageColor.getcolor(color, "RGBA")
        w = max(1.0, width * s)
        p0 = (x0 * s, y0 * s)
        p1 = (x1 * s, y1 * s)
        self._draw.line([p0, p1], fill=rgba, width=max(1, round(w)))
        r = w / 2.0
        for cx, cy in (p0, p1):
            self._draw.ellipse((cx - r, cy - r, cx + r, cy + r), fill=rgba)
        self.display_list.append((x0, y0, x1, y1, color, width))

    # inspection
    def snapshot(self) -> Image.Image:
        return self.image.copy()

    def is_blank(self) -> bool:
        # only the background colour left
        return self.image.getcolors(1) is not None

# signature/logic/viewport.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from ..models.stroke_record import StrokeRecord


@dataclass(frozen=True)
class Viewport:
    """Uniform scale + offset mapping record coordinates onto a surface."""
    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def map(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.scale + self.offset_x, y * self.scale + self.offset_y

    def width(self, w: float) -> float:
        return w * self.scale


IDENTITY = Viewport()


def fit_record(record: StrokeRecord, size: Tuple[float, float], padding: float) -> Optional[Viewport]:
    """
    Center the record's bounding box in ``size`` keeping ``padding`` on every side.

    A zero extent counts as 1 so single-line signatures still scale. Returns None
    when the surface leaves no room inside the padding.
    """
    bounds = record.bounds()
    if bounds is None:
        return IDENTITY
    min_x, min_y, max_x, max_y = bounds
    sig_w = (max_x - min_x) or 1.0
    sig_h = (max_y - min_y) or 1.0
    avail_w = size[0] - padding * 2
    avail_h = size[1] - padding * 2
    if avail_w <= 0 or avail_h <= 0:
        return None
    scale = min(avail_w / sig_w, avail_h / sig_h)
    return Viewport(
        scale=scale,
        offset_x=(size[0] - sig_w * scale) / 2 - min_x * scale,
        offset_y=(size[1] - sig_h * scale) / 2 - min_y * scale,
    )

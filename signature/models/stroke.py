# signature/models/stroke.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from .point import Point

MIN_STROKE_POINTS = 2


@dataclass
class Stroke:
    """One pointer-down-to-pointer-up gesture."""
    id: str
    color: str
    width: float
    points: List[Point] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return len(self.points) >= MIN_STROKE_POINTS

    def copy(self) -> "Stroke":
        # Points are frozen, a shallow list copy is enough
        return Stroke(id=self.id, color=self.color, width=self.width, points=list(self.points))

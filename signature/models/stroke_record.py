# signature/models/stroke_record.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from .point import Point
from .stroke import Stroke, MIN_STROKE_POINTS
from ..exceptions.errors import StrokeRecordError


@dataclass(frozen=True)
class StrokeRecord:
    """
    The full signature: strokes in draw order.

    Immutable once built. Consumers that need to mutate strokes must work on
    `copy()`.
    """
    strokes: Tuple[Stroke, ...] = ()

    @classmethod
    def of(cls, strokes: Iterable[Stroke]) -> "StrokeRecord":
        return cls(tuple(s.copy() for s in strokes))

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self.strokes)

    @property
    def is_empty(self) -> bool:
        return not self.strokes

    def copy(self) -> "StrokeRecord":
        return StrokeRecord.of(self.strokes)

    def all_points(self) -> List[Point]:
        return [p for s in self.strokes for p in s.points]

    def bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) over all points, None without points."""
        pts = self.all_points()
        if not pts:
            return None
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return (min(xs), min(ys), max(xs), max(ys))

    def validate(self) -> "StrokeRecord":
        seen: set[str] = set()
        for s in self.strokes:
            if s.id in seen:
                raise StrokeRecordError(f"Duplicate stroke id '{s.id}'.")
            seen.add(s.id)
            if not s.width > 0:
                raise StrokeRecordError(f"Stroke '{s.id}' has non-positive width {s.width!r}.")
            if len(s.points) < MIN_STROKE_POINTS:
                raise StrokeRecordError(
                    f"Stroke '{s.id}' has {len(s.points)} point(s); at least {MIN_STROKE_POINTS} required."
                )
        return self

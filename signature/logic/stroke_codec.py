# signature/logic/stroke_codec.py
"""
Wire format of a StrokeRecord:

    [{"id": str, "color": str, "width": number,
      "points": [{"x": number, "y": number, "timestamp": number}, ...]}, ...]
"""
from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Optional

from ..exceptions.errors import StrokeRecordError
from ..models.point import Point
from ..models.stroke import Stroke
from ..models.stroke_record import StrokeRecord


def _number(value: Any, what: str) -> float:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StrokeRecordError(f"{what} must be a number, got {type(value).__name__}.")
    if not math.isfinite(value):
        raise StrokeRecordError(f"{what} must be finite, got {value!r}.")
    return value


def _text(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise StrokeRecordError(f"{what} must be a string, got {type(value).__name__}.")
    return value


def record_to_wire(record: Optional[StrokeRecord]) -> List[Dict[str, Any]]:
    if record is None:
        return []
    return [
        {
            "id": s.id,
            "color": s.color,
            "width": s.width,
            "points": [{"x": p.x, "y": p.y, "timestamp": p.timestamp} for p in s.points],
        }
        for s in record.strokes
    ]


def record_from_wire(data: Any) -> StrokeRecord:
    """Decode and validate; raises StrokeRecordError on malformed input."""
    if not isinstance(data, list):
        raise StrokeRecordError(f"Stroke record must be a list, got {type(data).__name__}.")
    strokes: List[Stroke] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise StrokeRecordError(f"Stroke #{i} must be an object.")
        for key in ("id", "color", "width", "points"):
            if key not in item:
                raise StrokeRecordError(f"Stroke #{i} is missing '{key}'.")
        raw_points = item["points"]
        if not isinstance(raw_points, list):
            raise StrokeRecordError(f"Stroke #{i} 'points' must be a list.")
        points = []
        for j, p in enumerate(raw_points):
            if not isinstance(p, dict):
                raise StrokeRecordError(f"Point #{j} of stroke #{i} must be an object.")
            try:
                points.append(Point(
                    x=_number(p["x"], "x"),
                    y=_number(p["y"], "y"),
                    timestamp=_number(p["timestamp"], "timestamp"),
                ))
            except KeyError as exc:
                raise StrokeRecordError(f"Point #{j} of stroke #{i} is missing {exc}.") from exc
        strokes.append(Stroke(
            id=_text(item["id"], "id"),
            color=_text(item["color"], "color"),
            width=_number(item["width"], "width"),
            points=points,
        ))
    return StrokeRecord(tuple(strokes)).validate()


def dumps(record: Optional[StrokeRecord]) -> str:
    try:
        return json.dumps(record_to_wire(record), ensure_ascii=False, allow_nan=False, separators=(",", ":"))
    except ValueError as exc:
        raise StrokeRecordError(f"Stroke record is not encodable: {exc}") from exc


def loads(text: str | bytes) -> StrokeRecord:
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise StrokeRecordError(f"Invalid stroke record JSON: {exc}") from exc
    return record_from_wire(data)

"""Stroke model tests."""
from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from signature.models.point import Point
from signature.models.stroke import Stroke
from signature.models.stroke_record import StrokeRecord


def test_record_of_copies_strokes() -> None:
    s = Stroke(id="a", color="#000", width=1.0, points=[Point(0, 0, 0), Point(1, 1, 1)])
    record = StrokeRecord.of([s])
    s.points.append(Point(2, 2, 2))
    assert len(record.strokes[0].points) == 2


def test_record_is_frozen() -> None:
    record = StrokeRecord()
    with pytest.raises(FrozenInstanceError):
        record.strokes = ()  # type: ignore[misc]


def test_bounds_and_points() -> None:
    record = StrokeRecord((
        Stroke(id="a", color="#000", width=1.0, points=[Point(5, 7, 0), Point(-1, 3, 1)]),
        Stroke(id="b", color="#000", width=1.0, points=[Point(10, 2, 2), Point(4, 4, 3)]),
    ))
    assert record.bounds() == (-1, 2, 10, 7)
    assert len(record.all_points()) == 4
    assert len(record) == 2
    assert StrokeRecord().bounds() is None


def test_stroke_completeness() -> None:
    assert not Stroke(id="a", color="#000", width=1.0, points=[Point(0, 0, 0)]).is_complete
    assert Stroke(id="a", color="#000", width=1.0, points=[Point(0, 0, 0), Point(0, 0, 1)]).is_complete

"""Wire format tests for stroke records."""
from __future__ import annotations

import json

import pytest

from signature.exceptions.errors import StrokeRecordError
from signature.logic import stroke_codec
from signature.models.point import Point
from signature.models.stroke import Stroke
from signature.models.stroke_record import StrokeRecord


def _record() -> StrokeRecord:
    return StrokeRecord((
        Stroke(id="a", color="#000000", width=2.0,
               points=[Point(1.5, 2.0, 0.0), Point(3.0, 4.25, 16.5)]),
        Stroke(id="b", color="rgb(0, 0, 255)", width=1.0,
               points=[Point(10.0, 10.0, 500.0), Point(12.0, 9.0, 520.0)]),
    ))


def test_wire_shape_is_exact() -> None:
    wire = stroke_codec.record_to_wire(_record())
    assert wire[0] == {
        "id": "a",
        "color": "#000000",
        "width": 2.0,
        "points": [{"x": 1.5, "y": 2.0, "timestamp": 0.0}, {"x": 3.0, "y": 4.25, "timestamp": 16.5}],
    }
    assert [s["id"] for s in wire] == ["a", "b"]


def test_json_round_trip_preserves_record() -> None:
    record = _record()
    assert stroke_codec.loads(stroke_codec.dumps(record)) == record


def test_integers_are_accepted() -> None:
    text = json.dumps([{"id": "x", "color": "black", "width": 3,
                        "points": [{"x": 0, "y": 0, "timestamp": 0}, {"x": 5, "y": 5, "timestamp": 10}]}])
    record = stroke_codec.loads(text)
    assert record.strokes[0].points[1] == Point(5, 5, 10)


def test_empty_list_is_empty_record() -> None:
    assert stroke_codec.loads("[]").is_empty
    assert stroke_codec.record_to_wire(None) == []


@pytest.mark.parametrize("payload", [
    "{}",
    "not json",
    '[1]',
    '[{"id": "a", "color": "#000", "width": 1}]',
    '[{"id": "a", "color": "#000", "width": true, "points": []}]',
    '[{"id": 5, "color": "#000", "width": 1, "points": []}]',
    '[{"id": "a", "color": "#000", "width": 1, "points": [{"x": 1, "y": 1}]}]',
    '[{"id": "a", "color": "#000", "width": 1, "points": [{"x": "1", "y": 1, "timestamp": 0}]}]',
])
def test_malformed_payloads_raise(payload: str) -> None:
    with pytest.raises(StrokeRecordError):
        stroke_codec.loads(payload)


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity"])
@pytest.mark.parametrize("field", ["x", "y", "timestamp"])
def test_non_finite_numbers_are_rejected(field: str, value: str) -> None:
    point = {"x": "9", "y": "9", "timestamp": "60"}
    point[field] = value
    payload = (
        '[{"id": "a", "color": "#000", "width": 1, "points": ['
        '{"x": 0, "y": 0, "timestamp": 0}, {"x": 5, "y": 5, "timestamp": 50}, '
        '{"x": %(x)s, "y": %(y)s, "timestamp": %(timestamp)s}]}]' % point
    )
    with pytest.raises(StrokeRecordError, match="finite"):
        stroke_codec.loads(payload)


def test_non_finite_width_is_rejected() -> None:
    payload = ('[{"id": "a", "color": "#000", "width": Infinity, "points": '
               '[{"x": 0, "y": 0, "timestamp": 0}, {"x": 1, "y": 1, "timestamp": 1}]}]')
    with pytest.raises(StrokeRecordError, match="finite"):
        stroke_codec.loads(payload)


def test_dumps_refuses_non_finite_values() -> None:
    record = StrokeRecord((
        Stroke(id="a", color="#000", width=1.0,
               points=[Point(0.0, 0.0, 0.0), Point(1.0, 1.0, float("nan"))]),
    ))
    with pytest.raises(StrokeRecordError):
        stroke_codec.dumps(record)


def test_invariants_checked_on_decode() -> None:
    one_point = [{"id": "a", "color": "#000", "width": 1, "points": [{"x": 1, "y": 1, "timestamp": 0}]}]
    with pytest.raises(StrokeRecordError, match="at least 2"):
        stroke_codec.record_from_wire(one_point)

    pts = [{"x": 1, "y": 1, "timestamp": 0}, {"x": 2, "y": 2, "timestamp": 1}]
    dup = [{"id": "a", "color": "#000", "width": 1, "points": pts},
           {"id": "a", "color": "#000", "width": 1, "points": pts}]
    with pytest.raises(StrokeRecordError, match="Duplicate"):
        stroke_codec.record_from_wire(dup)

    zero = [{"id": "a", "color": "#000", "width": 0, "points": pts}]
    with pytest.raises(StrokeRecordError, match="width"):
        stroke_codec.record_from_wire(zero)

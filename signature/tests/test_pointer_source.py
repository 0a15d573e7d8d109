"""Pointer sources unify mouse and touch input."""
from __future__ import annotations

from signature.logic.clock import ManualClock
from signature.logic.pointer_source import (
    Contact, MouseEvent, MousePointerSource, TouchEvent, TouchPointerSource,
)
from signature.logic.surface import Bounds
from signature.models.signature_enums import PointerKind


def test_mouse_sample_is_relative_to_bounds() -> None:
    src = MousePointerSource(clock=ManualClock(42))
    sample = src.sample(MouseEvent(120, 80), Bounds(100, 50, 300, 200))
    assert (sample.x, sample.y, sample.timestamp, sample.kind) == (20, 30, 42, PointerKind.MOUSE)


def test_touch_uses_primary_contact() -> None:
    src = TouchPointerSource(clock=ManualClock(7))
    sample = src.sample(TouchEvent([Contact(15, 25), Contact(99, 99)]), Bounds(5, 5, 100, 100))
    assert (sample.x, sample.y, sample.kind) == (10, 20, PointerKind.TOUCH)


def test_events_without_location_yield_nothing() -> None:
    bounds = Bounds(0, 0, 10, 10)
    assert TouchPointerSource().sample(TouchEvent([]), bounds) is None
    assert MousePointerSource().sample(object(), bounds) is None

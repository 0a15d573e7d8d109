# signature/models/point.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """
    A single sample of a stroke.

    x/y are logical pixels relative to the drawing surface (independent of
    the device pixel ratio). timestamp is monotonic milliseconds; only
    comparable within one capture session.
    """
    x: float
    y: float
    timestamp: float

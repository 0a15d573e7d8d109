# signature/models/pointer_sample.py
from __future__ import annotations
from dataclasses import dataclass

from .signature_enums import PointerKind


@dataclass(frozen=True)
class PointerSample:
    """A located pointer event: logical surface coordinates plus clock reading (ms)."""
    x: float
    y: float
    timestamp: float
    kind: PointerKind = PointerKind.MOUSE

# signature/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class CaptureState(str, Enum):
    """State of the capture engine's pointer state machine."""
    IDLE = "idle"
    DRAWING = "drawing"


class PointerKind(str, Enum):
    """Input family a pointer sample originated from."""
    MOUSE = "mouse"
    TOUCH = "touch"

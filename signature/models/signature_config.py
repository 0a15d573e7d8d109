# signature/models/signature_config.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any

DEFAULT_MAX_REPLAY_MS = 3000.0


@dataclass
class SignatureConfig:
    """
    Settings of the signature feature, read from the [Signature] config section.

    stroke_color/stroke_width apply to strokes created after they are set.
    """
    stroke_color: str = "#000000"
    stroke_width: float = 2.0
    max_replay_ms: float = DEFAULT_MAX_REPLAY_MS
    fit_padding: float = 20.0
    frame_interval_ms: int = 16

    @classmethod
    def from_config(cls, service: Any) -> "SignatureConfig":
        sec = service.signature
        return cls(
            stroke_color=str(sec.stroke_color),
            stroke_width=max(0.5, float(sec.stroke_width)),
            max_replay_ms=max(1.0, float(sec.max_replay_ms)),
            fit_padding=max(0.0, float(sec.fit_padding)),
            frame_interval_ms=max(1, int(sec.frame_interval_ms)),
        )

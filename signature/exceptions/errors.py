"""Signature feature exceptions."""
from __future__ import annotations


class SignatureError(Exception):
    """Base exception for the signature feature."""


class StrokeRecordError(SignatureError):
    """Raised when a stroke record violates its invariants or wire format."""


class SignatureMissingError(SignatureError):
    """Raised when a signature is required but nothing was signed."""


class SurfaceError(SignatureError):
    """Raised on misuse of a drawing surface."""

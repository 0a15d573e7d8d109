# signature/logic/signature_store.py
"""
Storage collaborators for stroke records.

The engines never persist anything; callers hand a finished record to a
SignatureSubmitter and get it back from a SignatureRetriever.
"""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

from cryptography.fernet import InvalidToken

from ..exceptions.errors import StrokeRecordError
from ..models.stroke_record import StrokeRecord
from . import stroke_codec
from .encryption import KeyRing

logger = logging.getLogger(__name__)


class SignatureSubmitter(Protocol):
    def submit(self, token: str, record: StrokeRecord) -> None: ...


class SignatureRetriever(Protocol):
    def fetch(self, token: str) -> Optional[StrokeRecord]: ...


class InMemorySignatureStore:
    """Keeps wire JSON per token in a dict."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def submit(self, token: str, record: StrokeRecord) -> None:
        self._items[token] = stroke_codec.dumps(record)

    def fetch(self, token: str) -> Optional[StrokeRecord]:
        raw = self._items.get(token)
        return stroke_codec.loads(raw) if raw is not None else None

    def delete(self, token: str) -> bool:
        return self._items.pop(token, None) is not None


class EncryptedFileSignatureStore:
    """
    One Fernet-encrypted file per token: {base_dir}/{sha256(token)}.sig.

    Tokens are hashed so arbitrary caller tokens never reach the file system.
    Unreadable files (foreign key, corrupt JSON) read back as None.
    """

    def __init__(self, base_dir: Path, key_ring: KeyRing) -> None:
        self._base_dir = Path(base_dir)
        self._base_dir.mkdir(parents=True, exist_ok=True)
        self._key_ring = key_ring

    def _sig_path(self, token: str) -> Path:
        digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
        return self._base_dir / f"{digest}.sig"

    def submit(self, token: str, record: StrokeRecord) -> None:
        payload = stroke_codec.dumps(record).encode("utf-8")
        self._sig_path(token).write_bytes(self._key_ring.encrypt(payload))

    def fetch(self, token: str) -> Optional[StrokeRecord]:
        p = self._sig_path(token)
        if not p.exists():
            return None
        try:
            payload = self._key_ring.decrypt(p.read_bytes())
            return stroke_codec.loads(payload)
        except InvalidToken:
            logger.warning("Cannot decrypt %s", p)
            return None
        except StrokeRecordError as exc:
            logger.warning("Stored record %s is malformed: %s", p, exc)
            return None

    def delete(self, token: str) -> bool:
        p = self._sig_path(token)
        if p.exists():
            p.unlink()
            return True
        return False

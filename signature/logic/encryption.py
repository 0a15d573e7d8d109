# signature/logic/encryption.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from cryptography.fernet import Fernet, InvalidToken

logger = logging.getLogger(__name__)


class KeyRing:
    """
    Fernet key ring persisted as JSON ``{"current": str, "legacy": [str, ...]}``.

    - the current key ENCRYPTS
    - current and legacy keys DECRYPT (in that order)
    The file is created with a fresh key on first use.
    """

    def __init__(self, key_file: Path) -> None:
        self._key_file = Path(key_file)
        self._ferns: List[Fernet] | None = None

    def _load(self) -> List[Fernet]:
        if self._ferns is not None:
            return self._ferns

        data: dict = {}
        if self._key_file.exists():
            try:
                data = json.loads(self._key_file.read_text(encoding="utf-8")) or {}
            except ValueError:
                logger.warning("Key ring %s is not valid JSON; creating a new key", self._key_file)
                data = {}

        cur_key = data.get("current")
        ring = data.get("legacy") or []
        if not isinstance(ring, list):
            ring = []

        # Create key if missing (one-time)
        if not cur_key:
            cur_key = Fernet.generate_key().decode("ascii")
            self._key_file.parent.mkdir(parents=True, exist_ok=True)
            self._key_file.write_text(json.dumps({"current": cur_key, "legacy": ring}), encoding="utf-8")

        ferns = [Fernet(cur_key.encode("ascii"))]
        for k in ring:
            try:
                ferns.append(Fernet(k.encode("ascii")))
            except (ValueError, AttributeError):
                # ignore malformed legacy entries
                logger.warning("Ignoring malformed legacy key in %s", self._key_file)
        self._ferns = ferns
        return ferns

    def rotate(self) -> None:
        """Make a new current key; the old one stays available for decryption."""
        ferns = self._load()
        data = json.loads(self._key_file.read_text(encoding="utf-8"))
        legacy = [data["current"], *(data.get("legacy") or [])]
        new_key = Fernet.generate_key().decode("ascii")
        self._key_file.write_text(json.dumps({"current": new_key, "legacy": legacy}), encoding="utf-8")
        self._ferns = [Fernet(new_key.encode("ascii")), *ferns]

    def encrypt(self, data: bytes) -> bytes:
        return self._load()[0].encrypt(data)

    def decrypt(self, token: bytes) -> bytes:
        """Try the current key first, then legacy keys. Raises InvalidToken."""
        for f in self._load():
            try:
                return f.decrypt(token)
            except InvalidToken:
                continue
        raise InvalidToken("Unable to decrypt signature token")

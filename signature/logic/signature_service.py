# signature/logic/signature_service.py
from __future__ import annotations

import hashlib
from typing import Any, Optional

from core.config.config_service import ConfigService
from ..exceptions.errors import SignatureMissingError
from ..models.signature_config import SignatureConfig
from ..models.stroke_record import StrokeRecord
from . import stroke_codec
from .encryption import KeyRing
from .signature_store import EncryptedFileSignatureStore, SignatureRetriever, SignatureSubmitter

_FEATURE_ID = "Signature"


class SignatureService:
    """
    Seam between the engines and storage collaborators (no UI).

    - submit(): hands a finished record plus the caller's token to the submitter
    - fetch():  returns a stored record for replay, None if there is none
    Both are recorded as feature/event entries when a logger is available.
    """

    def __init__(self, *, submitter: SignatureSubmitter, retriever: Optional[SignatureRetriever] = None,
                 config: Optional[SignatureConfig] = None, logger: Optional[Any] = None) -> None:
        self._submitter = submitter
        self._retriever = retriever if retriever is not None else submitter  # type: ignore[assignment]
        self._config = config or SignatureConfig()
        self._logger = logger

    @classmethod
    def from_config(cls, service: ConfigService, *, logger: Optional[Any] = None) -> "SignatureService":
        """Service over the encrypted file store configured in [Storage]."""
        store = EncryptedFileSignatureStore(service.storage.signatures_dir,
                                            KeyRing(service.storage.key_file))
        return cls(submitter=store, retriever=store,
                   config=SignatureConfig.from_config(service), logger=logger)

    @property
    def config(self) -> SignatureConfig:
        return self._config

    # -------- Submission -----------------------------------------------------
    def submit(self, token: str, record: Optional[StrokeRecord]) -> str:
        """
        Persist ``record`` under ``token``. Returns the SHA-256 of the wire JSON.
        Raises SignatureMissingError when nothing was signed.
        """
        if record is None or record.is_empty:
            raise SignatureMissingError("Please sign before submitting.")
        record = record.validate()
        digest = hashlib.sha256(stroke_codec.dumps(record).encode("utf-8")).hexdigest()
        self._submitter.submit(token, record)
        self._log("submit", token, f"{len(record)} stroke(s), sha256={digest}")
        return digest

    # -------- Retrieval ------------------------------------------------------
    def fetch(self, token: str) -> Optional[StrokeRecord]:
        record = self._retriever.fetch(token)
        self._log("fetch", token, "hit" if record is not None else "miss")
        return record

    def _log(self, event: str, token: str, message: str) -> None:
        if self._logger is None:
            return
        self._logger.log(feature=_FEATURE_ID, event=event,
                         reference_id=hashlib.sha256(token.encode("utf-8")).hexdigest()[:16],
                         message=message)

"""Signature service and storage collaborators."""
from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from signature.exceptions.errors import SignatureMissingError
from signature.logic.encryption import KeyRing
from signature.logic.signature_service import SignatureService
from signature.logic.signature_store import EncryptedFileSignatureStore, InMemorySignatureStore
from signature.models.point import Point
from signature.models.signature_config import SignatureConfig
from signature.models.stroke import Stroke
from signature.models.stroke_record import StrokeRecord


class FakeLogger:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def log(self, **kwargs) -> None:
        self.calls.append(kwargs)


def _record() -> StrokeRecord:
    return StrokeRecord((
        Stroke(id="a", color="#112233", width=2.5, points=[Point(1, 2, 0), Point(3, 4, 10), Point(5, 1, 25)]),
    ))


def test_submit_and_fetch_in_memory() -> None:
    store = InMemorySignatureStore()
    log = FakeLogger()
    service = SignatureService(submitter=store, logger=log)
    digest = service.submit("doc-1", _record())
    assert len(digest) == 64
    assert service.fetch("doc-1") == _record()
    assert service.fetch("other") is None
    assert [c["event"] for c in log.calls] == ["submit", "fetch", "fetch"]
    assert log.calls[-1]["message"] == "miss"
    assert all("doc-1" not in (c["reference_id"] or "") for c in log.calls)


@pytest.mark.parametrize("record", [None, StrokeRecord()])
def test_submit_without_signature_is_refused(record) -> None:
    store = InMemorySignatureStore()
    service = SignatureService(submitter=store)
    with pytest.raises(SignatureMissingError):
        service.submit("doc-1", record)
    assert store.fetch("doc-1") is None


def test_encrypted_store_round_trip(tmp_path: Path) -> None:
    store = EncryptedFileSignatureStore(tmp_path / "sigs", KeyRing(tmp_path / "keys.json"))
    assert store.fetch("doc-1") is None
    store.submit("doc-1", _record())
    files = list((tmp_path / "sigs").glob("*.sig"))
    assert len(files) == 1
    assert b"points" not in files[0].read_bytes()
    assert "doc-1" not in files[0].name
    assert store.fetch("doc-1") == _record()
    assert store.delete("doc-1")
    assert store.fetch("doc-1") is None


def test_foreign_key_reads_as_missing(tmp_path: Path) -> None:
    sigs = tmp_path / "sigs"
    EncryptedFileSignatureStore(sigs, KeyRing(tmp_path / "k1.json")).submit("t", _record())
    other = EncryptedFileSignatureStore(sigs, KeyRing(tmp_path / "k2.json"))
    assert other.fetch("t") is None


def test_rotated_key_still_decrypts(tmp_path: Path) -> None:
    ring = KeyRing(tmp_path / "keys.json")
    store = EncryptedFileSignatureStore(tmp_path / "sigs", ring)
    store.submit("old", _record())
    ring.rotate()
    store.submit("new", _record())
    reopened = EncryptedFileSignatureStore(tmp_path / "sigs", KeyRing(tmp_path / "keys.json"))
    assert reopened.fetch("old") == _record()
    assert reopened.fetch("new") == _record()


def test_from_config_uses_storage_section(tmp_path: Path) -> None:
    cfg = SimpleNamespace(
        signature=SimpleNamespace(stroke_color="#333333", stroke_width=4, max_replay_ms=1500,
                                  fit_padding=10, frame_interval_ms=20),
        storage=SimpleNamespace(signatures_dir=tmp_path / "sigs", key_file=tmp_path / "keys.json"),
    )
    service = SignatureService.from_config(cfg)  # type: ignore[arg-type]
    assert service.config == SignatureConfig("#333333", 4.0, 1500.0, 10.0, 20)
    service.submit("x", _record())
    assert service.fetch("x") == _record()
    assert (tmp_path / "keys.json").exists()

"""
core/tests/test_config_service.py

Layer precedence and typing of the configuration service.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import config_service as cs


@pytest.fixture
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(cs, "DEFAULTS_INI", tmp_path / "defaults.ini")
    monkeypatch.setattr(cs, "MACHINE_INI", tmp_path / "config.ini")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("APPDATA", str(tmp_path / "appdata"))
    for key in [k for k in os.environ if k.startswith(cs.ENV_PREFIX)]:
        monkeypatch.delenv(key)
    return tmp_path


def test_embedded_defaults_are_typed(isolated: Path) -> None:
    svc = cs.ConfigService(ensure_machine_config=False)
    assert svc.signature.stroke_color == "#000000"
    assert svc.signature.stroke_width == 2.0
    assert svc.signature.max_replay_ms == 3000.0
    assert svc.signature.frame_interval_ms == 16
    assert isinstance(svc.storage.signatures_dir, Path)
    assert svc.meta_source("Signature", "max_replay_ms") == {"layer": "code", "source": "embedded"}


def test_env_overrides_defaults(isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SIGPAD_SIGNATURE__MAX_REPLAY_MS", "1500")
    svc = cs.ConfigService(ensure_machine_config=False)
    assert svc.signature.max_replay_ms == 1500.0
    assert svc.meta_source("Signature", "max_replay_ms")["layer"] == "env"


def test_machine_ini_wins_over_env(isolated: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (isolated / "config.ini").write_text("[Signature]\nstroke_width = 4.5\n", encoding="utf-8")
    monkeypatch.setenv("SIGPAD_SIGNATURE__STROKE_WIDTH", "9")
    svc = cs.ConfigService(ensure_machine_config=False)
    assert svc.signature.stroke_width == 4.5
    assert svc.meta_source("Signature", "stroke_width")["layer"] == "machine"


def test_machine_config_is_created_from_defaults(isolated: Path) -> None:
    cs.ConfigService()
    text = (isolated / "config.ini").read_text(encoding="utf-8")
    assert "[Signature]" in text and "max_replay_ms = 3000" in text

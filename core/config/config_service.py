"""Typed, layered configuration loader with precedence handling."""
from __future__ import annotations

import os
import configparser
import shutil
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Tuple

# --------------------------------------------------------------------------- #
#  Paths & default definitions
# --------------------------------------------------------------------------- #

def _find_project_root() -> Path:
    here = Path(__file__).resolve()
    for parent in here.parents:
        if (parent / "core").is_dir() and (parent / "signature").is_dir():
            return parent
    return here.parent

PROJECT_ROOT = _find_project_root()
CONFIG_DIR = PROJECT_ROOT / "core" / "config"
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"
ENV_PREFIX = "SIGPAD_"


_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "Signature": {
        "stroke_color": "#000000",
        "stroke_width": "2.0",
        "max_replay_ms": "3000",
        "fit_padding": "20.0",
        "frame_interval_ms": "16",
    },
    "Storage": {
        "signatures_dir": (PROJECT_ROOT / "data" / "signatures").as_posix(),
        "key_file": (PROJECT_ROOT / "data" / "signatures" / "keyring.json").as_posix(),
    },
    "Logging": {
        "db_path": (PROJECT_ROOT / "databases" / "logs.db").as_posix(),
        "level": "INFO",
    },
}


# --------------------------------------------------------------------------- #
#  Datamodels
# --------------------------------------------------------------------------- #

@dataclass
class SignatureSection:
    stroke_color: str = "#000000"
    stroke_width: float = 2.0
    max_replay_ms: float = 3000.0
    fit_padding: float = 20.0
    frame_interval_ms: int = 16


@dataclass
class StorageSection:
    signatures_dir: Path
    key_file: Path


@dataclass
class LoggingSection:
    db_path: Path
    level: str = "INFO"


# --------------------------------------------------------------------------- #
#  Helpers
# --------------------------------------------------------------------------- #

def _ensure_machine_config() -> None:
    """Ensure config directory and machine config exist."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not MACHINE_INI.exists():
        if DEFAULTS_INI.exists():
            shutil.copy(DEFAULTS_INI, MACHINE_INI)
        else:
            parser = configparser.ConfigParser()
            parser.read_dict(_DEFAULTS)
            with MACHINE_INI.open("w", encoding="utf-8") as fh:
                parser.write(fh)


def _cp_to_dict(cp: configparser.ConfigParser) -> Dict[str, Dict[str, Any]]:
    data: Dict[str, Dict[str, Any]] = {}
    for section in cp.sections():
        data[section] = {k: v for k, v in cp.items(section)}
    return data


def _apply(target: Dict[str, Dict[str, Any]], source: Dict[str, Dict[str, Any]],
           layer: str, origin: str,
           sources: Dict[Tuple[str, str], Dict[str, str]]) -> None:
    for section, items in source.items():
        sec = target.setdefault(section, {})
        for key, value in items.items():
            sec[key] = value
            sources[(section, key)] = {"layer": layer, "source": origin}


def _cast(value: Any, typ: Any) -> Any:
    # field.type is a string under postponed annotations
    name = typ if isinstance(typ, str) else getattr(typ, "__name__", str(typ))
    if name == "Path":
        return Path(str(value)).expanduser()
    if name == "bool":
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in {"1", "true", "yes", "on"}
    if name == "int":
        return int(float(value))
    if name == "float":
        return float(value)
    if name == "str":
        return str(value)
    return typ(value)


def _build_dataclass(cls: type, data: Dict[str, Any]) -> Any:
    kwargs = {}
    for field in fields(cls):
        val = data.get(field.name, field.default)
        kwargs[field.name] = _cast(val, field.type)
    return cls(**kwargs)


def _env_overlays() -> Dict[str, Dict[str, Any]]:
    result: Dict[str, Dict[str, Any]] = {}
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        remainder = env_key[len(ENV_PREFIX):]
        parts = remainder.split("__", 1)
        if len(parts) != 2:
            continue
        section, key = parts
        section = section.title()
        key = key.lower()
        result.setdefault(section, {})[key] = value
    return result


def _user_config_path() -> Path:
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or (Path.home() / "AppData" / "Roaming")
        return Path(appdata) / "SigPad" / "config.ini"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "sigpad" / "config.ini"


# --------------------------------------------------------------------------- #
#  ConfigService
# --------------------------------------------------------------------------- #


class ConfigService:
    """Facade merging layered configuration with type safety."""

    def __init__(self, *, ensure_machine_config: bool = True) -> None:
        self._lock = RLock()
        if ensure_machine_config:
            try:
                _ensure_machine_config()
            except OSError:
                # read-only installs fall back to the remaining layers
                pass
        self.reload()

    # ------------------------------------------------------------------ #
    def reload(self) -> None:
        with self._lock:
            merged: Dict[str, Dict[str, Any]] = {}
            sources: Dict[Tuple[str, str], Dict[str, str]] = {}

            # Layer 0: embedded defaults
            _apply(merged, _DEFAULTS, "code", "embedded", sources)

            # Layer 1: defaults.ini
            if DEFAULTS_INI.exists():
                cp = configparser.ConfigParser()
                cp.read(DEFAULTS_INI, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "defaults.ini", str(DEFAULTS_INI), sources)

            # Layer 2: environment variables
            env = _env_overlays()
            _apply(merged, env, "env", "os.environ", sources)

            # Layer 3: machine config
            if MACHINE_INI.exists():
                cp = configparser.ConfigParser()
                cp.read(MACHINE_INI, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "machine", str(MACHINE_INI), sources)

            # Layer 4: user overrides
            user_ini = _user_config_path()
            if user_ini.exists():
                cp = configparser.ConfigParser()
                cp.read(user_ini, encoding="utf-8")
                _apply(merged, _cp_to_dict(cp), "user", str(user_ini), sources)

            self._sources = sources

            self.signature = _build_dataclass(SignatureSection, merged.get("Signature", {}))
            self.storage = _build_dataclass(StorageSection, merged.get("Storage", {}))
            self.logging = _build_dataclass(LoggingSection, merged.get("Logging", {}))

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        return self._sources.get((section, key))


# Global singleton
config_service = ConfigService()

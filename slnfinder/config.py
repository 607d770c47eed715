"""Search root configuration stored in ``appsettings.json``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict

CONFIG_FILENAME = "appsettings.json"
SETTINGS_SECTION = "SearchSettings"
ROOT_PATH_KEY = "RootPath"

logger = logging.getLogger(__name__)


class ConfigStatus(str, Enum):
    MISSING = "missing"
    INVALID = "invalid"
    LOADED = "loaded"


@dataclass
class Settings:
    root_path: str | None = None


@dataclass(slots=True)
class SettingsReadResult:
    status: ConfigStatus
    settings: Settings = field(default_factory=Settings)
    error: str | None = None


def default_config_path(base_dir: Path | str | None = None) -> Path:
    """Return the settings file inside *base_dir* (the working directory by default)."""
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    return base / CONFIG_FILENAME


def _read_raw(config_path: Path) -> Dict[str, Any]:
    raw = json.loads(config_path.read_text(encoding="utf-8-sig"))
    if not isinstance(raw, dict):
        raise ValueError("configuration root must be a JSON object")
    return raw


def read_settings(config_path: Path | str) -> SettingsReadResult:
    """Read the search settings, reporting whether the file was missing or invalid."""
    path = Path(config_path)
    if not path.exists():
        return SettingsReadResult(status=ConfigStatus.MISSING)
    try:
        raw = _read_raw(path)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable configuration %s: %s", path, exc)
        return SettingsReadResult(status=ConfigStatus.INVALID, error=str(exc))
    section = raw.get(SETTINGS_SECTION)
    root_path = None
    if isinstance(section, dict):
        value = section.get(ROOT_PATH_KEY)
        if isinstance(value, str) and value.strip():
            root_path = value
    return SettingsReadResult(status=ConfigStatus.LOADED, settings=Settings(root_path=root_path))


def load_settings(config_path: Path | str) -> Settings:
    return read_settings(config_path).settings


def resolve_root_path(settings: Settings, base_dir: Path | str | None = None) -> str:
    """Return the configured root, falling back to the working directory."""
    if settings.root_path and settings.root_path.strip():
        return settings.root_path
    return str(Path(base_dir) if base_dir is not None else Path.cwd())


def save_settings(settings: Settings, config_path: Path | str) -> None:
    path = Path(config_path)
    data: Dict[str, Any] = {}
    if path.exists():
        try:
            data = _read_raw(path)
        except (OSError, ValueError):
            data = {}
    section = data.get(SETTINGS_SECTION)
    if not isinstance(section, dict):
        section = {}
    if settings.root_path:
        section[ROOT_PATH_KEY] = settings.root_path
    else:
        section.pop(ROOT_PATH_KEY, None)
    data[SETTINGS_SECTION] = section
    # Encode before opening so an unencodable value leaves the file intact.
    payload = json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    logger.debug("Saved settings to %s", path)

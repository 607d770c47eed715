"""Logic helpers for the `slnfinder config` command."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..config import (
    Settings,
    SettingsReadResult,
    read_settings,
    save_settings,
)


@dataclass(slots=True)
class ConfigUpdateResult:
    root_path: str
    config_path: Path
    previous_root_path: str | None = None

    @property
    def changed(self) -> bool:
        return self.previous_root_path != self.root_path


def describe_root_path(config_path: Path | str) -> SettingsReadResult:
    """Return what the `config` command should report about the current root."""
    return read_settings(config_path)


def ensure_root_directory(path: str) -> bool:
    """Create *path* (and parents) when missing; return True if it was created."""
    if os.path.isdir(path):
        return False
    os.makedirs(path, exist_ok=True)
    return True


def apply_root_path(root_path: str, config_path: Path | str) -> ConfigUpdateResult:
    """Persist *root_path* as the search root."""
    path = Path(config_path)
    previous = read_settings(path).settings.root_path
    save_settings(Settings(root_path=root_path), path)
    return ConfigUpdateResult(
        root_path=root_path,
        config_path=path,
        previous_root_path=previous,
    )

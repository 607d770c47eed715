"""Solution cache persisted as a single JSON file."""

from __future__ import annotations

import json
import logging
import os
import re
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict

CACHE_FILENAME = "solutions-cache.json"


def _default_cache_dir() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(os.path.expanduser("~")) / ".slnfinder"


DEFAULT_CACHE_DIR = _default_cache_dir()
CACHE_DIR = DEFAULT_CACHE_DIR
_CACHE_DIR_OVERRIDE: ContextVar[Path | None] = ContextVar(
    "slnfinder_cache_dir_override",
    default=None,
)

logger = logging.getLogger(__name__)

_FRACTION_RE = re.compile(r"\.(\d+)(?=[+-]\d\d:\d\d$|$)")


@dataclass(slots=True)
class SolutionCache:
    """Result of the last full scan of a root directory."""

    last_scan: datetime
    root_path: str
    solutions: list[str] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return {
            "LastScan": self.last_scan.isoformat(),
            "RootPath": self.root_path,
            "Solutions": list(self.solutions),
        }

    @classmethod
    def from_json(cls, raw: object) -> "SolutionCache":
        if not isinstance(raw, dict):
            raise ValueError("cache root must be a JSON object")
        root_path = raw.get("RootPath")
        solutions = raw.get("Solutions")
        if not isinstance(root_path, str):
            raise ValueError("RootPath must be a string")
        if not isinstance(solutions, list) or not all(
            isinstance(item, str) for item in solutions
        ):
            raise ValueError("Solutions must be a list of strings")
        return cls(
            last_scan=_parse_timestamp(raw.get("LastScan")),
            root_path=root_path,
            solutions=list(solutions),
        )


class CacheStatus(str, Enum):
    MISSING = "missing"
    CORRUPT = "corrupt"
    LOADED = "loaded"


@dataclass(slots=True)
class CacheLoadResult:
    status: CacheStatus
    record: SolutionCache | None = None
    error: str | None = None


def _parse_timestamp(value: object) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("LastScan must be an ISO-8601 string")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    # .NET writes 7 fractional digits; fromisoformat before 3.11 takes only 3 or 6.
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _resolve_cache_dir() -> Path:
    override = _CACHE_DIR_OVERRIDE.get()
    return override if override is not None else CACHE_DIR


@contextmanager
def cache_dir_context(path: Path | str | None):
    """Temporarily override the cache directory for the current context."""

    if path is None:
        yield
        return
    dir_path = Path(path).expanduser().resolve()
    if dir_path.exists() and not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    token = _CACHE_DIR_OVERRIDE.set(dir_path)
    try:
        yield
    finally:
        _CACHE_DIR_OVERRIDE.reset(token)


def set_cache_dir(path: Path | str | None) -> None:
    global CACHE_DIR
    if path is None:
        CACHE_DIR = DEFAULT_CACHE_DIR
        return
    dir_path = Path(path).expanduser().resolve()
    if dir_path.exists() and not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    CACHE_DIR = dir_path


def cache_file_path() -> Path:
    """Return the absolute path to the solution cache file."""

    return _resolve_cache_dir() / CACHE_FILENAME


def read_cache(cache_path: Path | str | None = None) -> CacheLoadResult:
    """Load the cache file, telling a missing file apart from a corrupt one."""
    path = Path(cache_path) if cache_path is not None else cache_file_path()
    if not path.is_file():
        logger.debug("No solution cache at %s", path)
        return CacheLoadResult(status=CacheStatus.MISSING)
    try:
        raw = json.loads(path.read_text(encoding="utf-8-sig"))
        record = SolutionCache.from_json(raw)
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable solution cache %s: %s", path, exc)
        return CacheLoadResult(status=CacheStatus.CORRUPT, error=str(exc))
    logger.debug("Loaded %d cached solutions from %s", len(record.solutions), path)
    return CacheLoadResult(status=CacheStatus.LOADED, record=record)


def load_cache(cache_path: Path | str | None = None) -> SolutionCache | None:
    return read_cache(cache_path).record


def save_cache(record: SolutionCache, cache_path: Path | str | None = None) -> bool:
    """Overwrite the cache file with *record*; failures are logged, not raised."""
    path = Path(cache_path) if cache_path is not None else cache_file_path()
    try:
        payload = json.dumps(record.to_json(), ensure_ascii=False, indent=2).encode("utf-8")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("Failed to save solution cache to %s: %s", path, exc)
        return False
    logger.debug("Saved %d solutions to %s", len(record.solutions), path)
    return True

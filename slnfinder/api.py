"""Public Python API for slnfinder."""

from __future__ import annotations

from pathlib import Path

from .cache import SolutionCache, cache_dir_context, set_cache_dir
from .config import default_config_path, load_settings, resolve_root_path
from .search import normalize_mask
from .services.lookup_service import LookupRequest, LookupResponse, perform_lookup
from .services.scan_service import refresh_cache
from .text import Messages
from .utils import resolve_directory

__all__ = [
    "SolutionFinderError",
    "cache_dir_context",
    "find_solutions",
    "refresh",
    "set_cache_dir",
]


class SolutionFinderError(ValueError):
    """Raised when the slnfinder public API input is invalid."""


def _resolve_root(root: Path | str | None, config_path: Path | str | None) -> str:
    if root is None:
        settings = load_settings(config_path if config_path is not None else default_config_path())
        root = resolve_root_path(settings)
    try:
        resolve_directory(root)
    except (FileNotFoundError, NotADirectoryError) as exc:
        raise SolutionFinderError(Messages.ERROR_ROOT_MISSING.format(path=root)) from exc
    return str(root)


def find_solutions(
    mask: str,
    *,
    root: Path | str | None = None,
    config_path: Path | str | None = None,
    cache_path: Path | str | None = None,
    force_scan: bool = False,
) -> LookupResponse:
    """Return solutions whose name contains *mask*, using the cache when it matches.

    When *root* is omitted it is read from ``appsettings.json`` in the
    working directory (or *config_path*).
    """

    if normalize_mask(mask) is None:
        raise SolutionFinderError(Messages.ERROR_MASK_REQUIRED)
    root_path = _resolve_root(root, config_path)
    request = LookupRequest(
        root_path=root_path,
        mask=mask,
        cache_path=Path(cache_path) if cache_path is not None else None,
        force_scan=force_scan,
    )
    return perform_lookup(request)


def refresh(
    root: Path | str | None = None,
    *,
    config_path: Path | str | None = None,
    cache_path: Path | str | None = None,
) -> SolutionCache:
    """Rescan the root directory and overwrite the cache."""

    root_path = _resolve_root(root, config_path)
    return refresh_cache(root_path, cache_path)

"""slnfinder package initialization."""

from __future__ import annotations

__version__ = "0.1.0"

from .api import (
    SolutionFinderError,
    cache_dir_context,
    find_solutions,
    refresh,
    set_cache_dir,
)

__all__ = [
    "__version__",
    "SolutionFinderError",
    "cache_dir_context",
    "find_solutions",
    "get_version",
    "refresh",
    "set_cache_dir",
]


def get_version() -> str:
    """Return the current package version."""
    return __version__

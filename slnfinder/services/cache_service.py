"""Shared helpers for interacting with the cached solution list."""

from __future__ import annotations

from pathlib import Path

from ..cache import SolutionCache, load_cache


def is_same_root(record: SolutionCache, root_path: str) -> bool:
    """Return True if *record* was scanned from *root_path*, ignoring case."""

    return record.root_path.casefold() == root_path.casefold()


def load_cache_for_root(
    root_path: str,
    cache_path: Path | str | None = None,
) -> SolutionCache | None:
    """Load the cache when it exists and belongs to *root_path*, else None."""

    record = load_cache(cache_path)
    if record is None or not is_same_root(record, root_path):
        return None
    return record

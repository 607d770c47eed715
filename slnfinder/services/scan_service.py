"""Logic helpers for full solution scans (`slnfinder refresh`)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from ..cache import SolutionCache, save_cache
from ..utils import collect_solution_files

logger = logging.getLogger(__name__)


def full_scan(root_path: str) -> SolutionCache:
    """Scan *root_path* for solution files and return a fresh cache record.

    Enumeration errors degrade to an empty solution list.
    """
    solutions: list[str] = []
    try:
        solutions = sorted(set(collect_solution_files(root_path)))
    except OSError as exc:
        logger.warning("Solution scan of %s failed: %s", root_path, exc)
    logger.debug("Scan of %s found %d solutions", root_path, len(solutions))
    return SolutionCache(
        last_scan=datetime.now(timezone.utc),
        root_path=root_path,
        solutions=solutions,
    )


def refresh_cache(root_path: str, cache_path: Path | str | None = None) -> SolutionCache:
    """Run a full scan and persist it, returning the new record even if saving fails."""
    record = full_scan(root_path)
    save_cache(record, cache_path)
    return record

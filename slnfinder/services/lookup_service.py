"""Logic helpers for the `slnfinder search` command."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, ContextManager

from ..cache import SolutionCache
from ..search import normalize_mask, search_solutions
from ..text import Messages
from .cache_service import load_cache_for_root
from .scan_service import refresh_cache

logger = logging.getLogger(__name__)


class LookupSource(str, Enum):
    CACHE = "cache"
    SCAN = "scan"


@dataclass(slots=True)
class LookupRequest:
    root_path: str
    mask: str
    cache_path: Path | None = None
    force_scan: bool = False


@dataclass(slots=True)
class LookupResponse:
    root_path: str
    mask: str
    solutions: list[str]
    source: LookupSource
    record: SolutionCache


def perform_lookup(
    request: LookupRequest,
    *,
    on_cache: Callable[[SolutionCache], None] | None = None,
    scanning: Callable[[], ContextManager[object]] | None = None,
) -> LookupResponse:
    """Search the cache first and fall back to a full rescan when it has no match.

    *on_cache* is called before the cached record is searched; *scanning*
    returns a context manager wrapped around the rescan (a progress spinner
    in the CLI).
    """
    mask = normalize_mask(request.mask)
    if mask is None:
        raise ValueError(Messages.ERROR_MASK_REQUIRED)

    cached = None
    if not request.force_scan:
        cached = load_cache_for_root(request.root_path, request.cache_path)
    if cached is not None:
        if on_cache is not None:
            on_cache(cached)
        matches = search_solutions(cached, mask)
        if matches:
            return LookupResponse(
                root_path=request.root_path,
                mask=mask,
                solutions=matches,
                source=LookupSource.CACHE,
                record=cached,
            )
        logger.debug("No cached match for %r under %s; rescanning", mask, request.root_path)

    with (scanning() if scanning is not None else nullcontext()):
        record = refresh_cache(request.root_path, request.cache_path)
    return LookupResponse(
        root_path=request.root_path,
        mask=mask,
        solutions=search_solutions(record, mask),
        source=LookupSource.SCAN,
        record=record,
    )

"""Substring search over cached solution paths."""

from __future__ import annotations

import os
from typing import List

from .cache import SolutionCache
from .utils import is_solution_file, solution_stem

WILDCARD = "*"


def normalize_mask(mask: str | None) -> str | None:
    """Prepare a raw user mask for :func:`search_solutions`.

    Returns ``None`` for a blank mask. Masks ending with ``.sln``/``.slnx``
    are kept as-is; anything else is wrapped in ``*`` on both sides.
    """
    if mask is None or not mask.strip():
        return None
    mask = mask.strip()
    if is_solution_file(mask):
        return mask
    if not mask.startswith(WILDCARD):
        mask = WILDCARD + mask
    if not mask.endswith(WILDCARD):
        mask = mask + WILDCARD
    return mask


def search_solutions(record: SolutionCache, mask: str) -> List[str]:
    """Return cached paths whose name contains *mask*, sorted by full path.

    ``*`` characters are ignored and matching is case-insensitive. The file
    name is compared without its extension unless the mask itself ends with
    ``.sln``/``.slnx``; ``app.sln`` therefore also matches ``myapp.sln``.
    """
    needle = mask.replace(WILDCARD, "").lower()
    match_full_name = is_solution_file(needle)
    matches: List[str] = []
    for solution in record.solutions:
        if match_full_name:
            candidate = os.path.basename(solution)
        else:
            candidate = solution_stem(solution)
        if needle in candidate.lower():
            matches.append(solution)
    return sorted(matches)

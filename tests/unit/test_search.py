from __future__ import annotations

from datetime import datetime, timezone

import pytest

from slnfinder.cache import SolutionCache
from slnfinder.search import normalize_mask, search_solutions


def _record(*solutions: str) -> SolutionCache:
    return SolutionCache(
        last_scan=datetime.now(timezone.utc),
        root_path="/src",
        solutions=list(solutions),
    )


SAMPLE = _record(
    "/src/zeta/Zeta.Api.sln",
    "/src/alpha/Alpha.sln",
    "/src/alpha/tools/AlphaTools.slnx",
    "/src/beta/Beta.sln",
)


@pytest.mark.parametrize("mask", ["", "*", "**"])
def test_empty_mask_matches_everything_sorted(mask):
    assert search_solutions(SAMPLE, mask) == sorted(SAMPLE.solutions)


def test_results_are_a_sorted_subset():
    results = search_solutions(SAMPLE, "a")

    assert set(results) <= set(SAMPLE.solutions)
    assert results == sorted(results)


def test_search_is_case_insensitive_and_ignores_wildcards():
    assert search_solutions(SAMPLE, "ALPHA") == [
        "/src/alpha/Alpha.sln",
        "/src/alpha/tools/AlphaTools.slnx",
    ]
    assert search_solutions(SAMPLE, "*alpha*") == search_solutions(SAMPLE, "alpha")
    assert search_solutions(SAMPLE, "al*pha") == search_solutions(SAMPLE, "alpha")


def test_search_matches_file_name_not_directories():
    record = _record("/src/alpha/Other.sln", "/src/beta/Alpha.sln")

    assert search_solutions(record, "alpha") == ["/src/beta/Alpha.sln"]


def test_search_ignores_extension_for_plain_masks():
    assert search_solutions(SAMPLE, "sln") == []
    assert search_solutions(SAMPLE, "api") == ["/src/zeta/Zeta.Api.sln"]


def test_suffix_mask_matches_names_containing_it():
    record = _record("x/myapp.sln", "x/app.sln", "x/app.slnx", "x/other.sln")

    assert search_solutions(record, "app.sln") == ["x/app.sln", "x/app.slnx", "x/myapp.sln"]
    assert search_solutions(record, "APP.SLNX") == ["x/app.slnx"]


def test_normalize_mask_rejects_blank_values():
    assert normalize_mask(None) is None
    assert normalize_mask("") is None
    assert normalize_mask("   ") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("app", "*app*"),
        ("*app", "*app*"),
        ("app*", "*app*"),
        ("*app*", "*app*"),
        ("app.sln", "app.sln"),
        ("App.SLNX", "App.SLNX"),
        ("  app ", "*app*"),
    ],
)
def test_normalize_mask_wraps_plain_masks(raw, expected):
    assert normalize_mask(raw) == expected


def test_normalized_masks_search_like_raw_masks():
    for raw in ("alpha", "tools", "app.sln"):
        assert search_solutions(SAMPLE, normalize_mask(raw)) == search_solutions(SAMPLE, raw)

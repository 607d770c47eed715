import json
import os
import re
from datetime import datetime, timezone
from pathlib import Path

import pytest
from typer.testing import CliRunner

import slnfinder.cache as cache
from slnfinder.cache import SolutionCache
from slnfinder.cli import ExitCode, app
from slnfinder.services.system_service import LaunchError
from slnfinder.text import Messages


ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def flat(text: str) -> str:
    """Drop ANSI codes and whitespace so wrapped console lines compare cleanly."""
    return re.sub(r"\s+", "", strip_ansi(text))


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setattr(cache, "CACHE_DIR", tmp_path / "cache")
    return cwd


@pytest.fixture
def solutions_root(tmp_path, workspace):
    root = tmp_path / "code"
    for relative in ("billing/Billing.sln", "billing/Billing.Tests.slnx", "shop/Shop.sln"):
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("", encoding="utf-8")
    (workspace / "appsettings.json").write_text(
        json.dumps({"SearchSettings": {"RootPath": str(root)}}),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def launched(monkeypatch):
    calls: list[tuple[str, str]] = []
    monkeypatch.setattr("slnfinder.cli.open_solution", lambda path: calls.append(("solution", path)))

    def fake_folder(path):
        calls.append(("folder", path))
        return os.path.dirname(path)

    def fake_terminal(path):
        calls.append(("terminal", path))
        return os.path.dirname(path)

    monkeypatch.setattr("slnfinder.cli.open_folder", fake_folder)
    monkeypatch.setattr("slnfinder.cli.open_terminal", fake_terminal)
    return calls


def test_search_invalid_root_exits_4(tmp_path, workspace):
    missing = tmp_path / "missing"
    (workspace / "appsettings.json").write_text(
        json.dumps({"SearchSettings": {"RootPath": str(missing)}}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["search", "app"])

    assert result.exit_code == ExitCode.INVALID_ROOT
    assert flat(Messages.ERROR_ROOT_MISSING.format(path=missing)) in flat(result.output)


def test_search_blank_mask_exits_5(solutions_root):
    result = CliRunner().invoke(app, ["search", "  "])

    assert result.exit_code == ExitCode.MISSING_MASK
    assert Messages.ERROR_MASK_REQUIRED in strip_ansi(result.output)


def test_search_without_config_uses_working_directory(workspace):
    (workspace / "Local.sln").write_text("", encoding="utf-8")

    result = CliRunner().invoke(app, ["search", "local", "--format", "porcelain"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [str(Path.cwd() / "Local.sln")]


def test_search_no_match_exits_1(solutions_root):
    result = CliRunner().invoke(app, ["search", "nothing"])

    assert result.exit_code == ExitCode.NOT_FOUND
    assert Messages.ERROR_NO_SOLUTIONS in strip_ansi(result.output)


def test_search_porcelain_lists_sorted_paths(solutions_root):
    result = CliRunner().invoke(app, ["search", "billing", "--format", "porcelain"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        str(solutions_root / "billing" / "Billing.Tests.slnx"),
        str(solutions_root / "billing" / "Billing.sln"),
    ]


def test_search_porcelain_error_has_no_banner(tmp_path, workspace):
    (workspace / "appsettings.json").write_text(
        json.dumps({"SearchSettings": {"RootPath": str(tmp_path / "gone")}}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(app, ["search", "x", "--format", "porcelain"])

    assert result.exit_code == ExitCode.INVALID_ROOT
    assert Messages.APP_TITLE not in result.output


def test_unknown_command_is_treated_as_mask(solutions_root):
    result = CliRunner().invoke(app, ["shop", "--format", "porcelain"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [str(solutions_root / "shop" / "Shop.sln")]


def test_mask_resembling_a_command_is_searched(solutions_root):
    (solutions_root / "tools" / "Configs.sln").parent.mkdir()
    (solutions_root / "tools" / "Configs.sln").write_text("", encoding="utf-8")

    result = CliRunner().invoke(app, ["configs", "--format", "porcelain"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [str(solutions_root / "tools" / "Configs.sln")]


def test_search_single_match_opens_solution(solutions_root, launched):
    result = CliRunner().invoke(app, ["search", "shop"], input="1\n")

    assert result.exit_code == 0
    assert launched == [("solution", str(solutions_root / "shop" / "Shop.sln"))]
    output = strip_ansi(result.output)
    assert Messages.INFO_SINGLE_MATCH.format(name="Shop.sln") in output
    assert Messages.INFO_SOLUTION_OPENED.format(name="Shop.sln") in output


def test_search_reports_full_scan_then_cache(solutions_root, launched):
    runner = CliRunner()

    first = runner.invoke(app, ["search", "shop", "--action", "cancel"])
    second = runner.invoke(app, ["search", "shop", "--action", "cancel"])

    assert "Cache updated (3 solutions found)" in strip_ansi(first.output)
    assert "Searching the cache" in strip_ansi(second.output)
    assert "Cache updated" not in strip_ansi(second.output)
    assert launched == []


def test_search_multiple_matches_prompts_for_selection(solutions_root, launched):
    result = CliRunner().invoke(app, ["search", "billing"], input="2\n2\n")

    assert result.exit_code == 0
    output = strip_ansi(result.output)
    assert "(2 solutions found)" in output
    assert "Billing.Tests" in output
    assert Messages.CANCEL_OPTION in output
    selected = str(solutions_root / "billing" / "Billing.sln")
    assert launched == [("folder", selected)]


def test_search_selection_zero_cancels(solutions_root, launched):
    result = CliRunner().invoke(app, ["search", "billing"], input="0\n")

    assert result.exit_code == 0
    assert Messages.INFO_CANCELLED in strip_ansi(result.output)
    assert launched == []


def test_search_action_option_skips_prompt(solutions_root, launched):
    result = CliRunner().invoke(app, ["search", "shop", "-a", "terminal"])

    assert result.exit_code == 0
    assert launched == [("terminal", str(solutions_root / "shop" / "Shop.sln"))]


def test_search_launch_failure_exits_2(solutions_root, monkeypatch):
    def boom(path):
        raise LaunchError("no handler")

    monkeypatch.setattr("slnfinder.cli.open_solution", boom)

    result = CliRunner().invoke(app, ["search", "shop", "--action", "solution"])

    assert result.exit_code == ExitCode.LAUNCH_ERROR
    assert "no handler" in strip_ansi(result.output)


def test_search_rescans_when_cache_has_no_match(solutions_root, tmp_path):
    cache.save_cache(
        SolutionCache(
            last_scan=datetime(2024, 1, 1, tzinfo=timezone.utc),
            root_path=str(solutions_root),
            solutions=[str(solutions_root / "billing" / "Billing.sln")],
        )
    )

    result = CliRunner().invoke(app, ["search", "shop", "--format", "porcelain"])

    assert result.exit_code == 0
    assert result.output.splitlines() == [str(solutions_root / "shop" / "Shop.sln")]
    assert len(cache.load_cache().solutions) == 3


def test_search_rescan_flag_refreshes_stale_cache(solutions_root):
    runner = CliRunner()
    runner.invoke(app, ["search", "shop", "--format", "porcelain"])
    extra = solutions_root / "shop" / "Shop.Admin.sln"
    extra.write_text("", encoding="utf-8")

    stale = runner.invoke(app, ["search", "shop", "--format", "porcelain"])
    fresh = runner.invoke(app, ["search", "shop", "--format", "porcelain", "--rescan"])

    assert stale.output.splitlines() == [str(solutions_root / "shop" / "Shop.sln")]
    assert fresh.output.splitlines() == [
        str(extra),
        str(solutions_root / "shop" / "Shop.sln"),
    ]

"""Command line interface for slnfinder."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from enum import Enum, IntEnum
from pathlib import Path
from typing import Iterator, Mapping, Sequence

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table
from rich.text import Text
from typer.core import TyperGroup

from . import __version__
from .cache import SolutionCache
from .config import ConfigStatus, default_config_path, load_settings, resolve_root_path
from .output import configure_logging, format_status_icon
from .search import normalize_mask
from .services.config_service import (
    apply_root_path,
    describe_root_path,
    ensure_root_directory,
)
from .services.lookup_service import LookupRequest, LookupSource, perform_lookup
from .services.scan_service import refresh_cache
from .services.system_service import (
    LaunchError,
    SolutionAction,
    open_folder,
    open_solution,
    open_terminal,
)
from .text import Messages, Styles
from .utils import solution_stem

MIN_NAME_COLUMN = 30

console = Console()


class ExitCode(IntEnum):
    OK = 0
    NOT_FOUND = 1
    LAUNCH_ERROR = 2
    INVALID_ROOT = 4
    MISSING_MASK = 5


class ConfigExitCode(IntEnum):
    OK = 0
    CREATE_FAILED = 1
    WRITE_FAILED = 2


class DefaultSearchGroup(TyperGroup):
    """Treat unknown subcommands as search masks."""

    def resolve_command(
        self,
        ctx: click.Context,
        args: list[str],
    ) -> tuple[str | None, click.Command | None, list[str]]:
        original_args = list(args)
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError:
            if not original_args:
                raise
            token = original_args[0]
            if token.startswith("-"):
                raise
            command = self.get_command(ctx, "search")
            if command is None:
                raise
            return "search", command, original_args


app = typer.Typer(
    help=Messages.APP_HELP,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    cls=DefaultSearchGroup,
)


class SearchOutputFormat(str, Enum):
    rich = "rich"
    porcelain = "porcelain"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"slnfinder v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help=Messages.HELP_VERBOSE,
    ),
) -> None:
    """Global Typer callback for shared options."""
    configure_logging(verbose)


@app.command(help=Messages.HELP_SEARCH)
def search(
    mask: str = typer.Argument("", help=Messages.HELP_MASK, show_default=False),
    output_format: SearchOutputFormat = typer.Option(
        SearchOutputFormat.rich,
        "--format",
        help=Messages.HELP_SEARCH_FORMAT,
    ),
    action: SolutionAction | None = typer.Option(
        None,
        "--action",
        "-a",
        help=Messages.HELP_SEARCH_ACTION,
    ),
    rescan: bool = typer.Option(
        False,
        "--rescan",
        help=Messages.HELP_SEARCH_RESCAN,
    ),
) -> None:
    """Find solutions matching MASK and open the selected one."""
    interactive = output_format == SearchOutputFormat.rich
    if interactive:
        _print_banner()
    root_path = _configured_root_path()
    if not os.path.isdir(root_path):
        _report_error(Messages.ERROR_ROOT_MISSING.format(path=root_path), interactive)
        raise typer.Exit(code=ExitCode.INVALID_ROOT)
    if interactive:
        console.print(
            _styled(Messages.INFO_SEARCHING_IN.format(path=escape(root_path)), Styles.ACCENT)
        )

    if normalize_mask(mask) is None:
        _report_error(Messages.ERROR_MASK_REQUIRED, interactive)
        raise typer.Exit(code=ExitCode.MISSING_MASK)

    request = LookupRequest(root_path=root_path, mask=mask, force_scan=rescan)
    if interactive:
        response = perform_lookup(
            request,
            on_cache=_report_cache_search,
            scanning=lambda: _scan_status(Messages.INFO_FULL_SCAN),
        )
        if response.source == LookupSource.SCAN:
            _report_cache_updated(response.record)
    else:
        response = perform_lookup(request)

    if not response.solutions:
        _report_error(Messages.ERROR_NO_SOLUTIONS, interactive)
        raise typer.Exit(code=ExitCode.NOT_FOUND)

    if not interactive:
        for solution in response.solutions:
            typer.echo(solution)
        return

    selected = _select_solution(response.solutions)
    if selected is None:
        return
    chosen = action if action is not None else _prompt_action(selected)
    code = _run_action(chosen, selected)
    if code != ExitCode.OK:
        raise typer.Exit(code=code)


@app.command(help=Messages.HELP_REFRESH)
def refresh() -> None:
    """Rebuild the solution cache for the configured root."""
    _print_banner()
    root_path = _configured_root_path()
    if not os.path.isdir(root_path):
        console.print(
            _styled(Messages.ERROR_ROOT_MISSING.format(path=escape(root_path)), Styles.ERROR)
        )
        raise typer.Exit(code=ExitCode.INVALID_ROOT)

    console.print(
        _styled(Messages.INFO_REFRESH_RUNNING.format(path=escape(root_path)), Styles.ACCENT)
    )
    with _scan_status(Messages.INFO_FULL_SCAN):
        record = refresh_cache(root_path)

    console.print(f"{format_status_icon(True, console)} {Messages.INFO_REFRESH_DONE}")
    console.print(
        _styled(Messages.INFO_REFRESH_COUNT.format(count=len(record.solutions)), Styles.INFO)
    )
    console.print(
        _styled(Messages.INFO_REFRESH_DATE.format(date=_format_scan_date(record)), Styles.INFO)
    )


@app.command(help=Messages.HELP_CONFIG)
def config(
    root_path: str | None = typer.Argument(
        None,
        help=Messages.HELP_CONFIG_ROOT,
        show_default=False,
    ),
    create: bool | None = typer.Option(
        None,
        "--create/--no-create",
        help=Messages.HELP_CONFIG_CREATE,
        show_default=False,
    ),
    scan: bool | None = typer.Option(
        None,
        "--scan/--no-scan",
        help=Messages.HELP_CONFIG_SCAN,
        show_default=False,
    ),
) -> None:
    """Show or set the search root stored in ./appsettings.json."""
    _print_banner()
    config_path = default_config_path()

    if root_path is None or not root_path.strip():
        _show_root_path(config_path)
        return

    new_root = os.path.abspath(os.path.expanduser(root_path.strip()))
    if not os.path.isdir(new_root):
        should_create = create
        if should_create is None:
            should_create = typer.confirm(Messages.PROMPT_CREATE_DIRECTORY, default=True)
        if not should_create:
            console.print(_styled(Messages.INFO_CANCELLED, Styles.WARNING))
            return
        try:
            ensure_root_directory(new_root)
        except OSError as exc:
            console.print(
                _styled(
                    Messages.ERROR_CREATE_DIRECTORY.format(reason=escape(str(exc))),
                    Styles.ERROR,
                )
            )
            raise typer.Exit(code=ConfigExitCode.CREATE_FAILED)
        console.print(
            f"{format_status_icon(True, console)} "
            f"{Messages.INFO_DIRECTORY_CREATED.format(path=escape(new_root))}"
        )

    try:
        update = apply_root_path(new_root, config_path)
    except (OSError, ValueError) as exc:
        console.print(
            _styled(
                Messages.ERROR_CONFIG_WRITE.format(reason=escape(str(exc))),
                Styles.ERROR,
            )
        )
        raise typer.Exit(code=ConfigExitCode.WRITE_FAILED)
    message = Messages.INFO_ROOT_CONFIGURED if update.changed else Messages.INFO_ROOT_UNCHANGED
    console.print(f"{format_status_icon(True, console)} {message.format(path=escape(new_root))}")

    should_scan = scan
    if should_scan is None:
        should_scan = typer.confirm(Messages.PROMPT_SCAN_NOW, default=True)
    if should_scan:
        with _scan_status(Messages.INFO_SCANNING):
            record = refresh_cache(new_root)
        console.print(
            f"{format_status_icon(True, console)} "
            f"{Messages.INFO_CACHE_CREATED.format(count=len(record.solutions))}"
        )


def _show_root_path(config_path: Path) -> None:
    result = describe_root_path(config_path)
    if result.status == ConfigStatus.MISSING:
        console.print(_styled(Messages.INFO_CONFIG_MISSING, Styles.WARNING))
    elif result.status == ConfigStatus.INVALID:
        console.print(
            _styled(Messages.ERROR_CONFIG_READ.format(path=escape(str(config_path))), Styles.ERROR)
        )
    elif result.settings.root_path:
        console.print(
            _styled(
                Messages.INFO_CONFIG_CURRENT.format(path=escape(result.settings.root_path)),
                Styles.SUCCESS,
            )
        )
    else:
        console.print(_styled(Messages.INFO_CONFIG_UNSET, Styles.WARNING))
    console.print()
    console.print(_styled(escape(Messages.INFO_CONFIG_HINT), Styles.INFO))


def _configured_root_path() -> str:
    settings = load_settings(default_config_path())
    return resolve_root_path(settings)


def _report_cache_search(record: SolutionCache) -> None:
    console.print(
        _styled(
            Messages.INFO_SEARCHING_CACHE.format(date=_format_scan_date(record)),
            Styles.INFO,
        )
    )


def _report_cache_updated(record: SolutionCache) -> None:
    console.print(
        f"{format_status_icon(True, console)} "
        f"{Messages.INFO_CACHE_UPDATED.format(count=len(record.solutions))}"
    )


def _select_solution(files: Sequence[str]) -> str | None:
    if len(files) == 1:
        name = os.path.basename(files[0])
        console.print(_styled(Messages.INFO_SINGLE_MATCH.format(name=escape(name)), Styles.SUCCESS))
        return files[0]

    console.print(_styled(Messages.INFO_MATCH_COUNT.format(count=len(files)), Styles.INFO))
    _render_choices(files)
    choice = typer.prompt(
        Messages.PROMPT_SELECT_SOLUTION,
        type=click.IntRange(0, len(files)),
        default=1,
    )
    if choice == 0:
        console.print(_styled(Messages.INFO_CANCELLED, Styles.WARNING))
        return None
    return files[choice - 1]


def _render_choices(files: Sequence[str]) -> None:
    width = max(max(len(solution_stem(f)) for f in files) + 2, MIN_NAME_COLUMN)
    table = Table(show_header=True, header_style=Styles.TABLE_HEADER, box=None)
    table.add_column(Messages.TABLE_HEADER_INDEX, justify="right")
    table.add_column(Messages.TABLE_HEADER_NAME, min_width=width, no_wrap=True)
    table.add_column(Messages.TABLE_HEADER_FOLDER, style=Styles.INFO, overflow="fold")
    for idx, path in enumerate(files, start=1):
        table.add_row(
            str(idx),
            Text(solution_stem(path)),
            Text(os.path.dirname(path)),
        )
    table.add_row("0", Text(Messages.CANCEL_OPTION), "")
    console.print(table)


_ACTION_CHOICES: tuple[tuple[SolutionAction, str], ...] = (
    (SolutionAction.SOLUTION, Messages.ACTION_OPEN_SOLUTION),
    (SolutionAction.FOLDER, Messages.ACTION_OPEN_FOLDER),
    (SolutionAction.TERMINAL, Messages.ACTION_OPEN_TERMINAL),
    (SolutionAction.CANCEL, Messages.ACTION_CANCEL),
)


def _prompt_action(selected: str) -> SolutionAction:
    name = os.path.basename(selected)
    console.print(
        _styled(Messages.PROMPT_SELECT_ACTION.format(name=escape(name)), Styles.TITLE)
    )
    options: dict[str, SolutionAction] = {}
    for idx, (value, label) in enumerate(_ACTION_CHOICES, start=1):
        console.print(f"  {idx}. {label}")
        options[str(idx)] = value
        options[value.value] = value
    return _prompt_choice(
        Messages.PROMPT_ACTION_CHOICE,
        options,
        default="1",
        allowed=", ".join(str(i) for i in range(1, len(_ACTION_CHOICES) + 1)),
    )


def _prompt_choice(
    prompt: str,
    options: Mapping[str, SolutionAction],
    *,
    default: str,
    allowed: str,
) -> SolutionAction:
    while True:
        value = typer.prompt(prompt, default=default)
        cleaned = (value or "").strip().lower()
        if not cleaned:
            cleaned = default.lower()
        selection = options.get(cleaned)
        if selection:
            return selection
        console.print(
            _styled(
                Messages.ERROR_INVALID_CHOICE.format(value=escape(value), allowed=allowed),
                Styles.WARNING,
            )
        )


def _run_action(action: SolutionAction, selected: str) -> int:
    if action == SolutionAction.CANCEL:
        console.print(_styled(Messages.INFO_CANCELLED, Styles.WARNING))
        return ExitCode.OK
    if action == SolutionAction.FOLDER:
        try:
            directory = open_folder(selected)
        except LaunchError as exc:
            console.print(
                _styled(Messages.ERROR_OPEN_FOLDER.format(reason=escape(str(exc))), Styles.ERROR)
            )
            return ExitCode.LAUNCH_ERROR
        if directory:
            console.print(
                _styled(Messages.INFO_FOLDER_OPENED.format(path=escape(directory)), Styles.SUCCESS)
            )
        return ExitCode.OK
    if action == SolutionAction.TERMINAL:
        try:
            directory = open_terminal(selected)
        except LaunchError as exc:
            console.print(
                _styled(Messages.ERROR_OPEN_TERMINAL.format(reason=escape(str(exc))), Styles.ERROR)
            )
            return ExitCode.LAUNCH_ERROR
        if directory:
            console.print(
                _styled(Messages.INFO_TERMINAL_OPENED.format(path=escape(directory)), Styles.SUCCESS)
            )
        return ExitCode.OK
    try:
        open_solution(selected)
    except LaunchError as exc:
        console.print(
            _styled(Messages.ERROR_OPEN_SOLUTION.format(reason=escape(str(exc))), Styles.ERROR)
        )
        return ExitCode.LAUNCH_ERROR
    name = os.path.basename(selected)
    console.print(_styled(Messages.INFO_SOLUTION_OPENED.format(name=escape(name)), Styles.SUCCESS))
    return ExitCode.OK


@contextmanager
def _scan_status(message: str) -> Iterator[None]:
    with console.status(
        _styled(message, Styles.WARNING),
        spinner="dots",
        spinner_style=Styles.WARNING,
    ):
        yield


def _print_banner() -> None:
    console.print(
        Rule(_styled(Messages.APP_TITLE, Styles.WARNING), style=Styles.RULE)
    )


def _report_error(message: str, interactive: bool) -> None:
    if interactive:
        console.print(_styled(escape(message), Styles.ERROR))
    else:
        typer.echo(message, err=True)


def _format_scan_date(record: SolutionCache) -> str:
    return record.last_scan.astimezone().strftime(Messages.DATE_FORMAT)


def _styled(text: str, style: str) -> str:
    return f"[{style}]{text}[/{style}]"


def run(argv: list[str] | None = None) -> None:
    """Entry point wrapper allowing optional argument override."""
    args = list(argv) if argv is not None else sys.argv[1:]
    if argv is None:
        app()
    else:
        app(args=args)

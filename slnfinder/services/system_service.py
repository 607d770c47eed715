"""Logic helpers for opening solutions, folders and terminals."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from ..text import Messages

TERMINAL_FALLBACKS = ("x-terminal-emulator", "gnome-terminal", "konsole", "xterm")
WINDOWS_TERMINAL = "wt.exe"

logger = logging.getLogger(__name__)


class LaunchError(RuntimeError):
    """Raised when an external program cannot be started."""


class SolutionAction(str, Enum):
    SOLUTION = "solution"
    FOLDER = "folder"
    TERMINAL = "terminal"
    CANCEL = "cancel"


def find_command_on_path(command: str) -> Optional[str]:
    """Return the resolved path for *command* if present on PATH."""

    return shutil.which(command)


def is_windows_terminal_available() -> bool:
    """Check the WindowsApps alias folder, then PATH, for Windows Terminal."""
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        candidate = Path(local_app_data) / "Microsoft" / "WindowsApps" / WINDOWS_TERMINAL
        if candidate.is_file():
            return True
    return find_command_on_path(WINDOWS_TERMINAL) is not None


def resolve_open_command(target: str) -> Optional[Sequence[str]]:
    """Return the command opening *target* with its associated program."""
    if sys.platform == "darwin":
        return ("open", target)
    opener = find_command_on_path("xdg-open")
    if opener:
        return (opener, target)
    return None


def resolve_terminal_command(directory: str) -> Optional[Sequence[str]]:
    """Return the command opening a terminal; it runs with *directory* as cwd."""
    if os.name == "nt":
        if is_windows_terminal_available():
            return (WINDOWS_TERMINAL, "-w", "0", "nt", "-d", directory)
        return ("powershell.exe",)
    if sys.platform == "darwin":
        return ("open", "-a", "Terminal", directory)
    terminal = os.environ.get("TERMINAL")
    if terminal:
        return tuple(shlex.split(terminal))
    for candidate in TERMINAL_FALLBACKS:
        path = find_command_on_path(candidate)
        if path:
            return (path,)
    return None


def _spawn(command: Sequence[str], *, cwd: str | None = None) -> None:
    logger.debug("Launching %s (cwd=%s)", command, cwd)
    kwargs: dict[str, object] = {"cwd": cwd}
    if os.name == "nt":
        kwargs["creationflags"] = getattr(subprocess, "CREATE_NEW_CONSOLE", 0)
    else:
        kwargs["start_new_session"] = True
    try:
        subprocess.Popen(list(command), **kwargs)
    except OSError as exc:
        raise LaunchError(str(exc)) from exc


def _open_with_default_app(target: str) -> None:
    if os.name == "nt":
        try:
            os.startfile(target)  # type: ignore[attr-defined]
        except OSError as exc:
            raise LaunchError(str(exc)) from exc
        return
    command = resolve_open_command(target)
    if command is None:
        raise LaunchError(Messages.ERROR_NO_OPENER.format(path=target))
    _spawn(command)


def open_solution(path: str) -> None:
    """Open the solution with the program associated to its extension."""
    _open_with_default_app(path)


def open_folder(path: str) -> str | None:
    """Open the folder containing *path*; return the folder, or None if it has none."""
    directory = os.path.dirname(path)
    if not directory:
        return None
    _open_with_default_app(directory)
    return directory


def open_terminal(path: str) -> str | None:
    """Open a terminal in the folder containing *path*."""
    directory = os.path.dirname(path)
    if not directory:
        return None
    command = resolve_terminal_command(directory)
    if command is None:
        raise LaunchError(Messages.ERROR_NO_TERMINAL)
    _spawn(command, cwd=directory)
    return directory

"""Utility helpers for filesystem access and path handling."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

SOLUTION_EXTENSIONS: tuple[str, ...] = (".sln", ".slnx")


def resolve_directory(path: Path | str) -> Path:
    """Resolve and validate a user supplied directory path."""
    dir_path = Path(path).expanduser().resolve()
    if not dir_path.exists():
        raise FileNotFoundError(f"Directory does not exist: {dir_path}")
    if not dir_path.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {dir_path}")
    return dir_path


def is_solution_file(name: str) -> bool:
    return name.lower().endswith(SOLUTION_EXTENSIONS)


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def collect_solution_files(
    root: Path | str,
    extensions: Iterable[str] = SOLUTION_EXTENSIONS,
) -> List[str]:
    """Collect solution files under *root* recursively.

    Hidden entries are included. The first enumeration error (missing root,
    permission denied, directory removed mid-walk) is raised as ``OSError``.
    """

    suffixes = tuple(ext.lower() for ext in extensions)
    directory = os.path.abspath(os.fspath(root))
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory does not exist: {directory}")

    files: List[str] = []
    for dirpath, _dirnames, filenames in os.walk(directory, onerror=_raise_walk_error):
        for filename in filenames:
            if filename.lower().endswith(suffixes):
                files.append(os.path.join(dirpath, filename))
    return files


def solution_stem(path: str) -> str:
    """Return the file name of *path* without its extension."""
    return os.path.splitext(os.path.basename(path))[0]


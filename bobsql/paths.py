"""Inspecting command-line paths and finding source files."""

from __future__ import annotations

import enum
import os
import stat
from typing import Iterator


class PathType(enum.Enum):
    """What a path refers to."""

    NOT_EXIST = 0
    FILE = 1
    DIR = 2


def _extension(path: str) -> str:
    name = os.path.basename(path)
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def validate_path(path: str) -> PathType:
    """Classify an existing path on disk."""
    try:
        info = os.stat(path)
    except (OSError, ValueError):
        return PathType.NOT_EXIST
    return PathType.DIR if stat.S_ISDIR(info.st_mode) else PathType.FILE


def check_path(path: str) -> PathType:
    """Guess from its spelling whether a path, which may not exist yet, is a file or a folder."""
    if path == "":
        return PathType.NOT_EXIST
    if path in (".", ".."):
        return PathType.DIR
    if path.endswith("/"):
        return PathType.DIR
    if _extension(os.path.normpath(path)) != "":
        return PathType.FILE
    return PathType.DIR


def _walk(path: str) -> Iterator[str]:
    info = os.lstat(path)
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.normpath(os.path.join(path, name)))
    elif _extension(path) == ".bob":
        yield path


def find_bob_files(directory: str) -> list[str]:
    """Return every ``.bob`` file under ``directory`` in lexical walk order."""
    return list(_walk(directory))
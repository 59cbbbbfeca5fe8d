"""Terminal output helpers."""

from __future__ import annotations

import subprocess
import sys
from typing import NoReturn

from bobsql.errors import join_message

_RED = "\033[31m"
_RESET = "\033[0m"


def log(*args: object) -> None:
    """Print the arguments separated by spaces."""
    print(join_message(*args))


def success(*args: object) -> None:
    """Print a success line."""
    log("success: " + join_message(*args))


def fail(*args: object) -> NoReturn:
    """Print an error line in red and exit with status 1."""
    print(f"{_RED}error: {join_message(*args)}{_RESET}")
    raise SystemExit(1)


def clear() -> None:
    """Clear the terminal screen."""
    command = ["cmd", "/c", "cls"] if sys.platform.startswith("win") else ["clear"]
    try:
        subprocess.run(command, check=False)
    except OSError:
        pass
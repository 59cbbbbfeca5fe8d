"""Error type and message joining."""

from __future__ import annotations


def join_message(*args: object) -> str:
    """Join the parts of a message with single spaces."""
    return " ".join(str(arg) for arg in args)


class BobError(Exception):
    """An error in a query, a schema or the command line."""

    def __init__(self, *parts: object) -> None:
        super().__init__(join_message(*parts))
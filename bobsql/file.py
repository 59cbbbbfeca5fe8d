"""Source files read from disk."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from bobsql.errors import BobError


@dataclass
class SourceFile:
    """A file's path with its content, or the error met while reading it."""

    ref: str
    content: str = ""
    error: Optional[Exception] = None

    def text(self) -> str:
        """Return the content, raising if the file could not be read."""
        if self.error is not None:
            raise BobError("reading %s", self.ref) from self.error
        return self.content


def files_to_string(files: Iterable[SourceFile]) -> str:
    """Concatenate the content of all files, raising on the first unreadable one."""
    return "".join(source.text() for source in files)
"""Small text helpers shared by the parser and the SQL generators."""

from __future__ import annotations

import re
from typing import MutableMapping, TypeVar

V = TypeVar("V")

_INDENT = "  "
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_DECIMAL_FLOAT = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+"
)
_SPECIAL_FLOAT = re.compile(r"[+-]?(?:infinity|inf)|nan", re.IGNORECASE)


def format_quote(text: str) -> str:
    """Turn a leading and a trailing double quote into single quotes."""
    if len(text) >= 2 and text.startswith('"'):
        text = "'" + text[1:]
    if len(text) >= 2 and text.endswith('"'):
        text = text[:-1] + "'"
    return text


def indent(text: str, size: int = 1) -> str:
    """Prefix ``text`` with ``size`` levels of two-space indentation."""
    return _INDENT * size + text


def indent_lines(text: str, size: int = 1) -> str:
    """Indent every line of ``text`` by ``size`` levels."""
    prefix = _INDENT * size
    return "\n".join(prefix + line for line in text.split("\n"))


def is_string_start(text: str) -> bool:
    """Whether ``text`` opens a quoted string literal."""
    trimmed = text.strip()
    return len(trimmed) > 1 and trimmed[0] in "\"'"


def is_string_end(text: str) -> bool:
    """Whether ``text`` closes a quoted string with an unescaped quote."""
    trimmed = text.strip()
    if not trimmed or trimmed[-1] not in "\"'":
        return False
    body = trimmed[:-1]
    backslashes = len(body) - len(body.rstrip("\\"))
    return backslashes % 2 == 0


def _is_integer(text: str) -> bool:
    return bool(_INTEGER.fullmatch(text)) and _INT64_MIN <= int(text) <= _INT64_MAX


def _is_float(text: str) -> bool:
    if _SPECIAL_FLOAT.fullmatch(text):
        return True
    if _DECIMAL_FLOAT.fullmatch(text):
        return float(text) not in (float("inf"), float("-inf"))
    if _HEX_FLOAT.fullmatch(text):
        try:
            float.fromhex(text)
        except OverflowError:
            return False
        return True
    return False


def is_value(text: str) -> bool:
    """Whether ``text`` is a literal value: string, placeholder, number, boolean or null."""
    trimmed = text.strip()
    if not trimmed:
        return False
    if len(trimmed) > 1 and (
        (trimmed.startswith('"') and trimmed.endswith('"'))
        or (trimmed.startswith("'") and trimmed.endswith("'"))
    ):
        return True
    if text.startswith("?"):
        return True
    if _is_integer(trimmed) or _is_float(trimmed):
        return True
    return trimmed.lower() in ("true", "false", "null")


def pascal_to_snake_case(text: str) -> str:
    """Convert ``PascalCase`` to ``snake_case``, one underscore per capital."""
    return "".join(
        ("_" + char.lower()) if position > 0 and char.isupper() else char.lower()
        for position, char in enumerate(text)
    )


def starts_with_upper(text: str) -> bool:
    """Whether the first byte of ``text``, read as a character, is upper case."""
    if not text:
        return False
    return chr(text.encode("utf-8")[0]).isupper()


def prepend_item(mapping: MutableMapping[str, V], key: str, value: V) -> None:
    """Put ``key`` first in ``mapping``; an existing key keeps its place."""
    if key in mapping:
        mapping[key] = value
        return
    rest = list(mapping.items())
    mapping.clear()
    mapping[key] = value
    mapping.update(rest)
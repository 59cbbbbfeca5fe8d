"""Words of the schema language shared by every SQL dialect."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional


class _Word(str, enum.Enum):
    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


class Motor(_Word):
    """Supported database engines."""

    SQLITE = "sqlite"
    MARIADB = "mariadb"
    POSTGRESQL = "postgresql"


class Attribute(_Word):
    """Column attributes."""

    PRIMARY = "primary"
    INDEX = "index"
    AUTO_INCREMENT = "auto_increment"
    UNIQUE = "unique"
    OPTIONAL = "optional"
    DEFAULT = "="
    ISOLATED = "isolated"


class Operator(_Word):
    """Operators used in filters."""

    AND = "&&"
    ELSE = "||"
    LIKE = "like"
    EQUAL = "="
    BIGGER_THAN = ">"
    LOWER_THAN = "<"
    DIFFERENT = "!="
    IF = "if"
    OR = "or"
    AS = "as"
    GROUP = "group"


class ColumnType(_Word):
    """Column types of the schema language."""

    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"
    STRING8 = "string8"
    STRING16 = "string16"
    STRING32 = "string32"
    STRING64 = "string64"
    TEXT = "text"
    BLOB = "blob"
    DATE = "date"
    TIME = "time"
    ID = "id"
    CURRENT = "current"
    BOOLEAN = "boolean"


NOW = "@now"
CURRENT_DATE = "@date"
CURRENT_TIME = "@time"
UTC_TIMESTAMP = "@utc"
SYS_DATE = "@sysdate"

_FUNCTION_NAMES = ("avg", "sum", "min", "max", "count", "concat")
_OPERATOR_VALUES = frozenset(operator.value for operator in Operator)


@dataclass(frozen=True)
class Driver:
    """How one database engine spells types, attributes, functions and literals."""

    motor: Motor
    get_type: Callable[[str], str]
    get_attribute: Callable[[str], str]
    get_function: Callable[[str], str]
    get_literal: Callable[[str], str]


def replace_function(text: str, replacer: Optional[Callable[[str], str]]) -> str:
    """Rename aggregate functions in ``text`` and wrap the result in parentheses."""
    if replacer is None:
        return text
    for name in _FUNCTION_NAMES:
        replacement = replacer(name)
        if replacement:
            text = text.replace(name, replacement)
    return f"({text})" if text else ""


def has_function(text: str) -> bool:
    """Whether ``text`` contains a function call."""
    return "(" in text


def is_operator(text: str) -> bool:
    """Whether ``text`` is a filter operator."""
    return text in _OPERATOR_VALUES


def use_tag(tag: str) -> tuple[str, list[str]]:
    """Expand a shorthand type into its real type and implied attributes."""
    if tag == ColumnType.ID.value:
        return tag, [Attribute.PRIMARY.value, Attribute.AUTO_INCREMENT.value]
    if tag == ColumnType.CURRENT.value:
        return ColumnType.DATE.value, [Attribute.DEFAULT.value, NOW]
    return "", []
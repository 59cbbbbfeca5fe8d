"""Insert queries: building them from ``new`` blocks and generating INSERT statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bobsql.errors import BobError
from bobsql.lexer import Block
from bobsql.text import (
    format_quote,
    indent,
    indent_lines,
    is_string_end,
    is_string_start,
    pascal_to_snake_case,
    starts_with_upper,
)
from bobsql.vocabulary import Driver


@dataclass
class InsertQuery:
    """Rows of values to insert into a table."""

    table: str
    fields: List[str] = field(default_factory=list)
    values: List[List[str]] = field(default_factory=list)

    def to_query(self, driver: Optional[Driver] = None) -> str:
        """Return the INSERT statement; it reads the same for every dialect."""
        columns = indent("(" + ", ".join(self.fields) + ")")
        rows = indent_lines(",\n".join("(" + ", ".join(row) + ")" for row in self.values))
        return f"INSERT INTO `{self.table}`\n{columns}\nVALUES\n{rows}"


def _column_name(name: str) -> str:
    if starts_with_upper(name):
        return pascal_to_snake_case(name.replace(".", "_"))
    return name


def _bulk_row(words: List[str], limit: int) -> List[str]:
    row: List[str] = []
    pending: List[str] = []
    for position, word in enumerate(words):
        if position > limit:
            break
        if is_string_start(word):
            if is_string_end(word):
                pending = [word]
                row.append(format_quote(" ".join(pending)))
            else:
                pending.append(word)
            continue
        if is_string_end(word):
            pending.append(word)
            row.append(format_quote(" ".join(pending)))
            continue
        row.append(word)
    return row


def build_insert(block: Block) -> InsertQuery:
    """Build an insert query from a ``new`` block.

    With column names after the table name each line is a row of values;
    otherwise each line is a ``column: value`` pair of a single row.
    """
    if not block.actions:
        raise BobError(f"missing table name after '{block.command}'")
    query = InsertQuery(table=pascal_to_snake_case(block.actions[0]))
    columns = block.actions[1:]

    if columns:
        query.fields = [_column_name(name) for name in columns]
        for child in block.children:
            row = [] if isinstance(child, Block) else _bulk_row(list(child), len(columns))
            query.values.append(row)
        return query

    row: List[str] = []
    positions: Dict[str, int] = {}
    for child in block.children:
        if isinstance(child, Block):
            continue
        name = _column_name(child[0])
        if name.endswith(":"):
            name = name[:-1]
        value = format_quote(" ".join(child[1:]))
        if name in positions:
            row[positions[name]] = value
            continue
        positions[name] = len(row)
        query.fields.append(name)
        row.append(value)
    query.values.append(row)
    return query
"""Delete queries: building them from ``delete`` blocks and generating DELETE statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from bobsql.errors import BobError
from bobsql.lexer import Block, Command
from bobsql.text import (
    format_quote,
    is_string_end,
    is_string_start,
    is_value,
    pascal_to_snake_case,
)
from bobsql.vocabulary import Driver, Operator, is_operator

_FILTER_WORDS = frozenset({Operator.IF.value, Operator.OR.value, Operator.GROUP.value})
_LEFT = Command.LEFT_JOIN.value


@dataclass
class DeleteJoin:
    """A joined table noted in a delete block; deleting with joins is refused."""

    direction: str
    table: str
    on: str
    query: "DeleteQuery"


Selection = Union[List[str], "DeleteQuery"]


def _condition(tokens: Iterable[str], subject: str, comparator: str) -> List[str]:
    """Render the words of a filter after its subject."""
    parts: List[str] = []
    pending: Optional[str] = None
    for token in tokens:
        if pending is not None:
            pending += " " + token
            if is_string_end(token):
                parts.append(format_quote(pending))
                pending = None
            continue
        if is_string_start(token):
            if is_string_end(token):
                parts.append(format_quote(token))
            else:
                pending = token
            continue
        if is_operator(token):
            if token == Operator.ELSE.value:
                parts.append("\nOR")
            elif token == Operator.AND.value:
                parts.append("AND")
            parts.extend((subject, comparator))
            continue
        if is_value(token):
            parts.append(token)
    return parts


def _operations(table: str, filters: Iterable[List[str]]) -> List[str]:
    """Render the WHERE clause of a delete."""
    operations: List[str] = []
    first = True
    for position, words in enumerate(filters):
        if len(words) < 2:
            continue
        if len(words) < 3:
            raise BobError("incomplete filter:", " ".join(words))
        operator = words[0]
        subject = f"{table}.{words[1]}"
        comparator = words[2]
        if position == 0 or first:
            sentence = ["\nWHERE"]
            first = False
        else:
            sentence = ["\nOR" if operator == Operator.OR.value else "\nAND"]
        sentence.extend(_condition(words[2:], subject, comparator))
        operations.append(" ".join(sentence))
    return operations


@dataclass
class DeleteQuery:
    """A query removing the rows of a table that match its filters."""

    table: str
    alias: str = ""
    selected: Dict[str, Selection] = field(default_factory=dict)
    filters: List[List[str]] = field(default_factory=list)
    joins: Dict[str, DeleteJoin] = field(default_factory=dict)

    def to_query(self, driver: Optional[Driver] = None) -> str:
        """Return the DELETE statement; it reads the same for every dialect."""
        if self.joins:
            raise BobError("you cannot use joins at delete")
        query = f"DELETE FROM {self.table}"
        operations = _operations(self.table, self.filters)
        if operations:
            query += " " + " ".join(operations)
        return query


def build_delete(block: Block) -> DeleteQuery:
    """Build a delete query from a ``delete`` block."""
    if not block.actions:
        raise BobError(f"missing table name after '{block.command}'")
    query = DeleteQuery(table=pascal_to_snake_case(block.actions[0]))

    for child in block.children:
        if isinstance(child, Block):
            if child.action_is(Command.LEFT_JOIN, Command.LEFT_JOIN_ALIAS):
                join_query = build_delete(child)
                name = child.actions[0]
                on = child.actions[1] if len(child.actions) > 1 else "id"
                query.joins[name] = DeleteJoin(
                    _LEFT, pascal_to_snake_case(name), on, join_query
                )
            else:
                sub = build_delete(child)
                query.selected[sub.alias] = sub
            continue

        first = child[0]
        if first.endswith(":"):
            alias = first[:-1]
            if len(child) == 1:
                query.alias = alias
            else:
                query.selected[alias] = list(child[1:])
            continue

        if first in _FILTER_WORDS:
            query.filters.append(list(child))
            continue

        query.selected[first] = list(child[1:])

    return query
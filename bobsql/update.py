"""Update queries: building them from ``set`` blocks and generating UPDATE statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from bobsql.errors import BobError
from bobsql.lexer import Block, Command
from bobsql.text import (
    format_quote,
    indent,
    indent_lines,
    is_string_end,
    is_string_start,
    is_value,
    pascal_to_snake_case,
)
from bobsql.vocabulary import Driver, Motor, Operator, has_function, is_operator

_FILTER_WORDS = frozenset({Operator.IF.value, Operator.OR.value, Operator.GROUP.value})
_LEFT = Command.LEFT_JOIN.value


@dataclass
class UpdateJoin:
    """A joined table with the update that applies to it."""

    direction: str
    table: str
    on: str
    query: "UpdateQuery"


Assignment = Union[List[str], "UpdateQuery"]


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
                parts.append("OR")
            elif token == Operator.AND.value:
                parts.append("AND")
            parts.extend((subject, comparator))
            continue
        if is_value(token):
            parts.append(token)
    return parts


def _operations(queries: Iterable["UpdateQuery"]) -> List[str]:
    """Render the WHERE, GROUP BY and HAVING clauses of the given queries."""
    operations: List[str] = []
    grouped = False
    first_in_group = False
    for query in queries:
        for position, words in enumerate(query.filters):
            if len(words) < 2:
                raise BobError("incomplete filter:", " ".join(words))
            operator = words[0]
            subject = words[1]
            if operator == Operator.GROUP.value:
                sentence = ["\nGROUP BY", subject]
                grouped = True
                first_in_group = True
            else:
                if len(words) < 3:
                    raise BobError("incomplete filter:", " ".join(words))
                comparator = words[2]
                if position == 0 or first_in_group:
                    sentence = ["\nHAVING" if grouped else "\nWHERE"]
                    first_in_group = False
                else:
                    sentence = ["\nOR" if operator == Operator.OR.value else "\nAND"]
                sentence.extend(_condition(words[2:], subject, comparator))
            operations.append(" ".join(sentence))
    return operations


@dataclass
class UpdateQuery:
    """A query assigning new values to the rows of a table."""

    table: str
    alias: str = ""
    values: Dict[str, Assignment] = field(default_factory=dict)
    filters: List[List[str]] = field(default_factory=list)
    joins: Dict[str, UpdateJoin] = field(default_factory=dict)

    def _assignments(self, driver: Driver) -> List[str]:
        lines: List[str] = []
        for name, value in self.values.items():
            if isinstance(value, UpdateQuery):
                sub = indent_lines(value.to_query(driver))
                lines.append(indent_lines(f"(\n{sub}\n) as {name}"))
                continue
            words = list(value)
            if not words:
                continue
            if not has_function(words[0]):
                name = f"{name} = {format_quote(' '.join(words))}"
            lines.append(indent(name))
        return lines

    def _join_parts(
        self, driver: Driver
    ) -> Tuple[List[str], List[str], List["UpdateQuery"]]:
        """Return the join clauses, the joined assignments and the joined queries."""
        joins: List[str] = []
        assigned: List[str] = []
        queries: List[UpdateQuery] = []
        for join in self.joins.values():
            if join.direction != _LEFT:
                continue
            left_on = f"{self.table}.{join.table}_{join.on}"
            right_on = f"{join.table}.{join.on}"
            joins.append(f"LEFT JOIN {join.table} ON {left_on} = {right_on}")
            assigned.extend(join.query._assignments(driver))
            queries.append(join.query)
            sub_joins, sub_assigned, sub_queries = join.query._join_parts(driver)
            joins.extend(sub_joins)
            assigned.extend(sub_assigned)
            queries.extend(sub_queries)
        return joins, assigned, queries

    def to_query(self, driver: Driver) -> str:
        """Return the UPDATE statement in the layout the engine expects."""
        assigned = self._assignments(driver) or [indent("*")]
        joins, join_assigned, join_queries = self._join_parts(driver)
        assigned = [*assigned, *join_assigned]
        operations = _operations([*join_queries, self])

        joins_sentence = ""
        if driver.motor != Motor.SQLITE and joins:
            joins_sentence = "\n" + "\n".join(joins)
        operation_sentence = " ".join(operations)

        table = indent(self.table)
        values = ",\n".join(assigned)
        if driver.motor == Motor.POSTGRESQL:
            return f"UPDATE\n{table}\nSET\n{values} {joins_sentence} {operation_sentence}"
        return f"UPDATE\n{table} {joins_sentence} \nSET \n{values} {operation_sentence}"


def build_update(block: Block) -> UpdateQuery:
    """Build an update query from a ``set`` block."""
    if not block.actions:
        raise BobError(f"missing table name after '{block.command}'")
    query = UpdateQuery(table=pascal_to_snake_case(block.actions[0]))

    for child in block.children:
        if isinstance(child, Block):
            if child.action_is(Command.LEFT_JOIN, Command.LEFT_JOIN_ALIAS):
                join_query = build_update(child)
                name = child.actions[0]
                on = child.actions[1] if len(child.actions) > 1 else "id"
                query.joins[name] = UpdateJoin(
                    _LEFT, pascal_to_snake_case(name), on, join_query
                )
            else:
                sub = build_update(child)
                query.values[sub.alias] = sub
            continue

        first = child[0]
        if first.endswith(":"):
            alias = first[:-1]
            if len(child) == 1:
                query.alias = alias
            else:
                query.values[alias] = list(child[1:])
            continue

        if first in _FILTER_WORDS:
            query.filters.append(list(child))
            continue

        query.values[first] = list(child[1:])

    return query
"""Select queries: building them from ``get`` blocks and generating SELECT statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple, Union

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
from bobsql.vocabulary import Driver, Operator, has_function, is_operator, replace_function

_FILTER_WORDS = frozenset({Operator.IF.value, Operator.OR.value, Operator.GROUP.value})
_LEFT = Command.LEFT_JOIN.value


@dataclass
class Join:
    """A joined table with the query that selects from it."""

    direction: str
    table: str
    on: str
    query: "SelectQuery"


Selection = Union[List[str], "SelectQuery"]


def _singular(name: str) -> str:
    if len(name) > 2 and name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("s"):
        return name[:-1]
    return name


def _condition(tokens: Iterable[str], subject: str, comparator: str) -> List[str]:
    """Render the words of a filter after its subject."""
    parts: List[str] = []
    pending = None
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


def _operations(queries: Iterable["SelectQuery"]) -> List[str]:
    """Render the WHERE, GROUP BY and HAVING clauses of the given queries."""
    operations: List[str] = []
    grouped = False
    first_in_group = False
    for query in queries:
        for position, words in enumerate(query.filters):
            if len(words) < 2:
                continue
            operator = words[0]
            subject = f"{query.table}.{words[1]}"
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
class SelectQuery:
    """A query reading columns, computed values and subqueries from a table."""

    table: str
    alias: str = ""
    selected: Dict[str, Selection] = field(default_factory=dict)
    filters: List[List[str]] = field(default_factory=list)
    joins: Dict[str, Join] = field(default_factory=dict)

    def _selection(self, driver: Driver, name: str, words: List[str], is_join: bool) -> str:
        if len(words) == 1 and not has_function(words[0]):
            return f"{self.table}.{words[0]} as {name}"
        if name in ("*", "..."):
            return f"{self.table}.*"
        computed = replace_function(" ".join(words), driver.get_function)
        if computed:
            return f"{computed} as {name}"
        if has_function(name):
            return name
        if is_join:
            return f"{self.table}.{name} as {_singular(self.table)}_{name}"
        return f"{self.table}.{name} as {name}"

    def _selections(self, driver: Driver, is_join: bool) -> List[str]:
        lines: List[str] = []
        for name, value in self.selected.items():
            if isinstance(value, SelectQuery):
                sub = indent_lines(value.to_query(driver))
                if name == "":
                    raise BobError("you must set an alias in subquery")
                lines.append(indent_lines(f"(\n{sub}\n) as {name}"))
                continue
            lines.append(indent(self._selection(driver, name, list(value), is_join)))
        return lines

    def _join_parts(
        self, driver: Driver
    ) -> Tuple[List[str], List[str], List["SelectQuery"]]:
        """Return the join clauses, the joined selections and the joined queries."""
        joins: List[str] = []
        selected: List[str] = []
        queries: List[SelectQuery] = []
        for join in self.joins.values():
            if join.direction != _LEFT:
                continue
            left_on = f"{self.table}.{join.table}_{join.on}"
            right_on = f"{join.table}.{join.on}"
            joins.append(f"LEFT JOIN {join.table} ON {left_on} = {right_on}")
            selected.extend(join.query._selections(driver, is_join=True))
            queries.append(join.query)
            sub_joins, sub_selected, sub_queries = join.query._join_parts(driver)
            joins.extend(sub_joins)
            selected.extend(sub_selected)
            queries.extend(sub_queries)
        return joins, selected, queries

    def to_query(self, driver: Driver) -> str:
        """Return the SELECT statement."""
        selected = self._selections(driver, is_join=False) or ["*"]
        joins, join_selected, join_queries = self._join_parts(driver)
        selected = [*selected, *join_selected]

        query = "SELECT\n" + ",\n".join(selected) + " \nFROM " + self.table
        operations = _operations([*join_queries, self])

        if joins:
            query += "\n" + "\n".join(joins)
        if operations:
            query += " " + " ".join(operations)
        return query


def build_select(block: Block) -> SelectQuery:
    """Build a select query from a ``get`` block."""
    if not block.actions:
        raise BobError(f"missing table name after '{block.command}'")
    query = SelectQuery(table=pascal_to_snake_case(block.actions[0]))

    for child in block.children:
        if isinstance(child, Block):
            if child.action_is(Command.LEFT_JOIN, Command.LEFT_JOIN_ALIAS):
                join_query = build_select(child)
                name = child.actions[0]
                on = child.actions[1] if len(child.actions) > 1 else "id"
                query.joins[name] = Join(_LEFT, pascal_to_snake_case(name), on, join_query)
            else:
                sub = build_select(child)
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
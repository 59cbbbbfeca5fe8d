"""Turning action blocks into queries and SQL statements."""

from __future__ import annotations

from typing import Iterable, List, Union

from bobsql.delete import DeleteQuery, build_delete
from bobsql.insert import InsertQuery, build_insert
from bobsql.lexer import Block, Command
from bobsql.select import SelectQuery, build_select
from bobsql.update import UpdateQuery, build_update
from bobsql.vocabulary import Driver

Query = Union[SelectQuery, InsertQuery, UpdateQuery, DeleteQuery]

_BUILDERS = {
    Command.GET.value: build_select,
    Command.NEW.value: build_insert,
    Command.SET.value: build_update,
    Command.DELETE.value: build_delete,
}


def parse_actions(blocks: Iterable[Block]) -> List[Query]:
    """Build a query for every get, new, set and delete block; other blocks are skipped."""
    queries: List[Query] = []
    for block in blocks:
        builder = _BUILDERS.get(str(block.command))
        if builder is not None:
            queries.append(builder(block))
    return queries


def transpile_actions(driver: Driver, blocks: Iterable[Block]) -> str:
    """Return the SQL for every action, or an empty string if there are none."""
    statements = [query.to_query(driver) for query in parse_actions(blocks)]
    if not statements:
        return ""
    return ";\n\n".join(statements) + ";"
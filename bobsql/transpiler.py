"""Turning source text into CREATE statements and action queries for one engine."""

from __future__ import annotations

from typing import Tuple, Union

from bobsql.actions import transpile_actions as _actions_sql
from bobsql.dialects import get_driver
from bobsql.lexer import parse
from bobsql.tables import transpile_tables as _tables_sql
from bobsql.vocabulary import Motor


def transpile(motor: Union[Motor, str], source: str) -> Tuple[str, str]:
    """Return the table statements and the action statements for ``source``.

    Raises ``BobError`` for an unknown engine or an invalid schema or query.
    """
    driver = get_driver(motor)
    program = parse(source)
    return _tables_sql(driver, program.tables), _actions_sql(driver, program.actions)


def transpile_tables(motor: Union[Motor, str], source: str) -> str:
    """Return only the table statements for ``source``."""
    driver = get_driver(motor)
    return _tables_sql(driver, parse(source).tables)


def transpile_actions(motor: Union[Motor, str], source: str) -> str:
    """Return only the action statements for ``source``."""
    driver = get_driver(motor)
    return _actions_sql(driver, parse(source).actions)
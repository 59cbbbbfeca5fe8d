import pytest

from bobsql.dialects import get_driver
from bobsql.errors import BobError
from bobsql.lexer import Block, Command, parse
from bobsql.update import build_update


def _block(source):
    return parse(source).actions[0]


SIMPLE = 'set User {\n name "bob"\n if id = 1\n}'
JOINED = "set User {\n -> Role {\n  level 5\n }\n}"


def test_build_reads_values_and_filters():
    query = build_update(_block(SIMPLE))
    assert query.table == "user"
    assert query.values == {"name": ['"bob"']}
    assert query.filters == [["if", "id", "=", "1"]]


def test_sqlite_layout():
    sql = build_update(_block(SIMPLE)).to_query(get_driver("sqlite"))
    assert sql == "UPDATE\n  user  \nSET \n  name = 'bob' \nWHERE id = 1"


def test_postgresql_layout():
    sql = build_update(_block(SIMPLE)).to_query(get_driver("postgresql"))
    assert sql == "UPDATE\n  user\nSET\n  name = 'bob'  \nWHERE id = 1"


def test_mariadb_matches_sqlite_without_joins():
    query = build_update(_block(SIMPLE))
    assert query.to_query(get_driver("mariadb")) == query.to_query(get_driver("sqlite"))


def test_empty_values_fall_back_to_star():
    sql = build_update(_block("set User {\n}")).to_query(get_driver("sqlite"))
    assert sql.startswith("UPDATE\n")
    assert sql.splitlines()[-1].strip() == "*"


def test_join_clause_for_mariadb():
    query = build_update(_block(JOINED))
    assert query.joins["Role"].on == "id"
    sql = query.to_query(get_driver("mariadb"))
    assert "LEFT JOIN role ON user.role_id = role.id" in sql


def test_sqlite_drops_joins():
    sql = build_update(_block(JOINED)).to_query(get_driver("sqlite"))
    assert "LEFT JOIN" not in sql


def test_postgresql_keeps_joins():
    sql = build_update(_block(JOINED)).to_query(get_driver("postgresql"))
    assert sql.count("LEFT JOIN") == 1


def test_joined_values_are_assigned_in_every_dialect():
    query = build_update(_block(JOINED))
    for name in ("sqlite", "mariadb", "postgresql"):
        assert "level" in query.to_query(get_driver(name))


def test_group_then_having():
    source = "set User {\n group name\n if count > 1\n}"
    sql = build_update(_block(source)).to_query(get_driver("sqlite"))
    assert "\nGROUP BY name" in sql
    assert sql.index("\nGROUP BY") < sql.index("\nHAVING")
    assert "\nWHERE" not in sql


def test_function_value_keeps_name_only():
    sql = build_update(_block("set User {\n total sum(x)\n}")).to_query(get_driver("sqlite"))
    assert "total" in [line.strip() for line in sql.splitlines()]
    assert "sum(x)" not in sql


def test_value_without_words_is_skipped():
    sql = build_update(_block("set User {\n name\n}")).to_query(get_driver("sqlite"))
    assert "name" not in sql


def test_subquery_is_wrapped_with_alias():
    source = "set User {\n set Role {\n  r:\n }\n}"
    query = build_update(_block(source))
    assert query.values["r"].table == "role"
    assert ") as r" in query.to_query(get_driver("mariadb"))


def test_or_filter():
    source = "set User {\n name 1\n if id = 1\n or id = 2\n}"
    sql = build_update(_block(source)).to_query(get_driver("sqlite"))
    assert sql.count("\nOR") == 1
    assert sql.count("\nWHERE") == 1


def test_incomplete_filter_raises():
    query = build_update(_block("set User {\n if id\n}"))
    with pytest.raises(BobError):
        query.to_query(get_driver("sqlite"))


def test_missing_table_name_raises():
    with pytest.raises(BobError):
        build_update(Block(Command.SET))
import pytest

from bobsql.dialects import get_driver
from bobsql.errors import BobError
from bobsql.lexer import parse
from bobsql.tables import Index, Reference, parse_tables, transpile_tables


def _tables(source):
    return parse(source).tables


@pytest.fixture
def sqlite():
    return get_driver("sqlite")


@pytest.fixture
def mariadb():
    return get_driver("mariadb")


@pytest.fixture
def postgresql():
    return get_driver("postgresql")


def test_index_query():
    assert (
        Index("users", ["name", "age"]).to_query()
        == "CREATE INDEX idx_users_name_age ON users(name, age)"
    )


def test_empty_index_query():
    assert Index("users", []).to_query() == ""


def test_reference_query_cascades():
    assert (
        Reference("UserProfile", "id").to_query()
        == "FOREIGN KEY (user_profile_id) REFERENCES user_profile(id) ON DELETE CASCADE"
    )


def test_isolated_reference_does_not_cascade():
    query = Reference("Users", "id", isolated=True).to_query()
    assert "ON DELETE CASCADE" not in query
    assert query.endswith("REFERENCES users(id)")


def test_id_column_is_added_first():
    parsed = parse_tables(_tables("table Users {\n  name string\n}\n"))
    table = parsed["Users"]
    assert list(table.columns) == ["id", "name"]
    assert table.primary_keys == ["id"]
    assert table.columns["id"].is_primary_key
    assert table.columns["id"].is_auto_increment
    assert table.name == "users"


def test_simple_table_sqlite(sqlite):
    query = transpile_tables(sqlite, _tables("table Users {\n  name string\n}\n"))
    assert query == (
        "CREATE TABLE IF NOT EXISTS users (\n"
        "  id INTEGER PRIMARY KEY AUTOINCREMENT NOT NULL,\n"
        "  name TEXT NOT NULL\n"
        ");"
    )


def test_postgresql_omits_auto_increment(postgresql):
    query = transpile_tables(postgresql, _tables("table Users {\n  name string\n}\n"))
    assert "id SERIAL PRIMARY KEY NOT NULL" in query
    assert "AUTO" not in query


def test_optional_column_is_nullable(sqlite):
    query = transpile_tables(sqlite, _tables("table Users {\n  age int optional\n}\n"))
    assert "  age INTEGER\n" in query
    assert "age INTEGER NOT NULL" not in query


def test_required_table_has_no_if_not_exists(sqlite):
    query = transpile_tables(sqlite, _tables("table Users required {\n  name string\n}\n"))
    assert query.startswith("CREATE TABLE users (")
    assert "IF NOT EXISTS" not in query


def test_unique_and_index(sqlite):
    tables = _tables("table Users {\n  email string unique index\n}\n")
    table = parse_tables(tables)["Users"]
    assert table.uniques == ["email"]
    assert table.indexes == [Index("users", ["email"])]
    query = transpile_tables(sqlite, tables)
    assert "UNIQUE (email)" in query
    assert "CREATE INDEX idx_users_email ON users(email)" in query


def test_composite_primary_key_action(sqlite):
    tables = _tables("table Pairs {\n  a int\n  b int\n  .primary a b\n}\n")
    table = parse_tables(tables)["Pairs"]
    assert table.primary_keys == ["a", "b", "id"]
    query = transpile_tables(sqlite, tables)
    assert "PRIMARY KEY (a, b, id)" in query
    assert "id INTEGER PRIMARY KEY" not in query


def test_index_action(sqlite):
    tables = _tables("table Users {\n  a int\n  b int\n  .index a b\n}\n")
    table = parse_tables(tables)["Users"]
    assert table.indexes == [Index("users", ["a", "b"])]
    assert "a" not in [name for name in table.columns if name.startswith(".")]
    assert ".index" not in table.columns


def test_current_type_defaults_to_now(mariadb):
    tables = _tables("table Posts {\n  created current\n}\n")
    column = parse_tables(tables)["Posts"].columns["created"]
    assert column.type == "date"
    assert column.default == "@now"
    assert "created DATE NOT NULL DEFAULT NOW()" in transpile_tables(mariadb, tables)


def test_quoted_default_spanning_words(sqlite):
    tables = _tables('table Posts {\n  status string = "a b"\n}\n')
    column = parse_tables(tables)["Posts"].columns["status"]
    assert column.default == '"a b"'
    assert "DEFAULT 'a b'" in transpile_tables(sqlite, tables)


def test_plain_default(sqlite):
    tables = _tables("table Posts {\n  views int = 0\n}\n")
    column = parse_tables(tables)["Posts"].columns["views"]
    assert column.default == "0"
    assert "views INTEGER NOT NULL DEFAULT 0" in transpile_tables(sqlite, tables)


def test_reference_column_takes_referenced_type(sqlite):
    source = "table Users {\n  name string\n}\ntable Posts {\n  Users\n}\n"
    parsed = parse_tables(_tables(source))
    posts = parsed["Posts"]
    assert list(posts.columns) == ["id", "users_id"]
    assert posts.references == {"users_id": Reference("Users", "id", False, False)}
    assert posts.columns["users_id"].type == parsed["Users"].columns["id"].type
    query = transpile_tables(sqlite, _tables(source))
    assert "users_id INTEGER NOT NULL" in query
    assert "FOREIGN KEY (users_id) REFERENCES users(id) ON DELETE CASCADE" in query


def test_optional_reference(sqlite):
    source = "table Users {\n  name string\n}\ntable Posts {\n  Users id optional\n}\n"
    column = parse_tables(_tables(source))["Posts"].columns["users_id"]
    assert column.is_optional
    assert "users_id INTEGER NOT NULL" not in transpile_tables(sqlite, _tables(source))


def test_missing_referenced_table_raises():
    with pytest.raises(BobError, match="referenced table not found Authors"):
        parse_tables(_tables("table Posts {\n  Authors\n}\n"))


def test_missing_referenced_column_raises():
    source = "table Users {\n  name string\n}\ntable Posts {\n  Users string\n}\n"
    with pytest.raises(BobError, match="referenced column not found string in table Users"):
        parse_tables(_tables(source))


def test_nested_table_references_parent():
    source = "table Users {\n  name string\n  table Posts {\n    title string\n  }\n}\n"
    parsed = parse_tables(_tables(source))
    assert list(parsed) == ["Users", "usersPosts"]
    sub = parsed["usersPosts"]
    assert sub.name == "users_posts"
    assert list(sub.columns) == ["id", "title", "users_id"]
    assert sub.references["users_id"] == Reference("Users", "id", False, False)


def test_undefined_type_raises(sqlite):
    with pytest.raises(BobError, match="undefined type 'weird'"):
        transpile_tables(sqlite, _tables("table Users {\n  x weird\n}\n"))


def test_no_tables_gives_empty_string(sqlite):
    assert transpile_tables(sqlite, {}) == ""


def test_tables_joined_in_order(sqlite):
    source = "table Users {\n  name string\n}\ntable Posts {\n  title string\n}\n"
    query = transpile_tables(sqlite, _tables(source))
    assert query.count("CREATE TABLE") == 2
    assert query.endswith(";")
    assert query.index("users (") < query.index("posts (")
    assert ";\n\nCREATE TABLE IF NOT EXISTS posts" in query
# bobsql

`bobsql` turns a small, brace-based description language into SQL. A single
source describes both your tables and the queries you run against them, and
the output targets one of three engines: `sqlite`, `mariadb` or `postgresql`.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## The language

Tables are declared with `table`, queries with `get`, `new`, `set` and
`delete`. Lines starting with `#` are comments.

```
table User {
  name string unique
  email string64 index
  age int optional
  created current
}

table Post {
  title string
  body text
  User
}

get User {
  name
  email
  if age > 18
}

new User {
  name: "Ada"
  email: "ada@example.com"
}

set User {
  name "Grace"
  if id = 1
}

delete Post {
  if id = 3
}
```

Highlights:

- every table gets an `id` column unless one is declared;
- a column whose name starts with an upper-case letter (`User`) is a
  reference: it becomes `user_id` with a `FOREIGN KEY ... ON DELETE CASCADE`
  (add `isolated` to drop the cascade);
- attributes: `primary`, `unique`, `index`, `auto_increment`, `optional`,
  `= <default>`; defaults may use `@now`, `@date`, `@time`, `@utc`, `@sysdate`;
- `.index a b` and `.primary a b` declare composite indexes and keys (the
  leading `.` can be changed through `bobsql.config.configure(Config(...))`);
- types: `int`, `int8` … `int64`, `uint` … `uint64`, `float32`, `float64`,
  `string`, `string8` … `string64`, `text`, `blob`, `date`, `time`,
  `boolean`, plus the tags `id` and `current`;
- in `get`, nested `left Table column { ... }` (or `-> Table { ... }`) blocks
  produce `LEFT JOIN`s; `if`, `or` and `group` lines produce `WHERE`, `OR`,
  `GROUP BY` and `HAVING` clauses.

## Library use

```python
from bobsql.transpiler import transpile

tables, actions = transpile("sqlite", source)
```

`transpile` returns the `CREATE TABLE` statements and the action statements
as two strings; `transpile_tables` and `transpile_actions` produce just one
half. Errors in the source, such as an unknown type, a missing referenced
table or an unknown engine, raise `bobsql.errors.BobError`.

Lower-level pieces are available too:

- `bobsql.lexer.parse` turns source text into a `Program` of table and
  action blocks;
- `bobsql.tables.parse_tables` and `bobsql.tables.transpile_tables` work on
  table blocks;
- `bobsql.actions.parse_actions` builds `SelectQuery`, `InsertQuery`,
  `UpdateQuery` and `DeleteQuery` objects, each with a `to_query(driver)`
  method;
- `bobsql.dialects.get_driver` returns the `Driver` for an engine name.

## What it does not do

`bobsql` is a library only: it installs no command-line program and does not
write SQL files. To process `.bob` files, read them yourself and pass their
text to `transpile`; `bobsql.paths.find_bob_files` lists the `.bob` files
under a folder.
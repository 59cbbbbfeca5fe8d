"""How each supported database engine spells types, attributes, functions and literals."""

from __future__ import annotations

from typing import Callable, Mapping, Union

from bobsql.errors import BobError
from bobsql.vocabulary import (
    CURRENT_DATE,
    CURRENT_TIME,
    NOW,
    SYS_DATE,
    UTC_TIMESTAMP,
    Attribute,
    ColumnType,
    Driver,
    Motor,
)


def _lookup(table: Mapping[str, str]) -> Callable[[str], str]:
    def get(key: str) -> str:
        return table.get(str(key), "")

    return get


_CONCAT = "concat"

_MARIADB_TYPES = {
    ColumnType.ID.value: "INT",
    ColumnType.INT.value: "INT",
    ColumnType.INT8.value: "TINYINT",
    ColumnType.INT16.value: "SMALLINT",
    ColumnType.INT32.value: "INT",
    ColumnType.INT64.value: "BIGINT",
    ColumnType.UINT.value: "INT UNSIGNED",
    ColumnType.UINT8.value: "TINYINT UNSIGNED",
    ColumnType.UINT16.value: "SMALLINT UNSIGNED",
    ColumnType.UINT32.value: "INT UNSIGNED",
    ColumnType.UINT64.value: "BIGINT UNSIGNED",
    ColumnType.FLOAT32.value: "FLOAT",
    ColumnType.FLOAT64.value: "DOUBLE",
    ColumnType.STRING.value: "VARCHAR(255)",
    ColumnType.STRING8.value: "VARCHAR(8)",
    ColumnType.STRING16.value: "VARCHAR(16)",
    ColumnType.STRING32.value: "VARCHAR(32)",
    ColumnType.STRING64.value: "VARCHAR(64)",
    ColumnType.TEXT.value: "TEXT",
    ColumnType.BLOB.value: "BLOB",
    ColumnType.DATE.value: "DATE",
    ColumnType.TIME.value: "TIME",
    ColumnType.BOOLEAN.value: "BOOLEAN",
}

_MARIADB_ATTRIBUTES = {
    Attribute.AUTO_INCREMENT.value: "AUTO_INCREMENT",
    Attribute.OPTIONAL.value: "NOT NULL",
}

_MARIADB_FUNCTIONS = {_CONCAT: "CONCAT"}

_MARIADB_LITERALS = {
    NOW: "NOW()",
    CURRENT_DATE: "CURRENT_DATE",
    CURRENT_TIME: "CURRENT_TIME",
    UTC_TIMESTAMP: "UTC_TIMESTAMP()",
    SYS_DATE: "SYSDATE()",
}

_POSTGRESQL_TYPES = {
    ColumnType.INT.value: "INTEGER",
    ColumnType.INT8.value: "SMALLINT",
    ColumnType.INT16.value: "SMALLINT",
    ColumnType.INT32.value: "INTEGER",
    ColumnType.INT64.value: "BIGINT",
    ColumnType.UINT.value: "INTEGER",
    ColumnType.UINT8.value: "SMALLINT",
    ColumnType.UINT16.value: "INTEGER",
    ColumnType.UINT32.value: "BIGINT",
    ColumnType.UINT64.value: "NUMERIC",
    ColumnType.FLOAT32.value: "REAL",
    ColumnType.FLOAT64.value: "DOUBLE PRECISION",
    ColumnType.STRING.value: "VARCHAR(255)",
    ColumnType.STRING8.value: "VARCHAR(8)",
    ColumnType.STRING16.value: "VARCHAR(16)",
    ColumnType.STRING32.value: "VARCHAR(32)",
    ColumnType.STRING64.value: "VARCHAR(64)",
    ColumnType.TEXT.value: "TEXT",
    ColumnType.BLOB.value: "BYTEA",
    ColumnType.DATE.value: "DATE",
    ColumnType.TIME.value: "TIME",
    ColumnType.ID.value: "SERIAL",
    ColumnType.BOOLEAN.value: "BOOLEAN",
}

_POSTGRESQL_ATTRIBUTES = {Attribute.OPTIONAL.value: "NOT NULL"}

_POSTGRESQL_FUNCTIONS = {_CONCAT: "CONCAT"}

_POSTGRESQL_LITERALS = {
    NOW: "NOW()",
    CURRENT_DATE: "CURRENT_DATE",
    CURRENT_TIME: "CURRENT_TIME",
    UTC_TIMESTAMP: "CURRENT_TIMESTAMP AT TIME ZONE 'UTC'",
    SYS_DATE: "NOW()",
}

_SQLITE_TYPES = {
    **{
        kind.value: "INTEGER"
        for kind in (
            ColumnType.ID,
            ColumnType.INT,
            ColumnType.INT8,
            ColumnType.INT16,
            ColumnType.INT32,
            ColumnType.INT64,
            ColumnType.UINT,
            ColumnType.UINT8,
            ColumnType.UINT16,
            ColumnType.UINT32,
            ColumnType.UINT64,
            ColumnType.TIME,
        )
    },
    ColumnType.FLOAT32.value: "REAL",
    ColumnType.FLOAT64.value: "REAL",
    **{
        kind.value: "TEXT"
        for kind in (
            ColumnType.STRING,
            ColumnType.STRING8,
            ColumnType.STRING16,
            ColumnType.STRING32,
            ColumnType.STRING64,
            ColumnType.TEXT,
            ColumnType.DATE,
        )
    },
    ColumnType.BLOB.value: "BLOB",
    ColumnType.BOOLEAN.value: "BOOLEAN",
}

_SQLITE_ATTRIBUTES = {
    Attribute.AUTO_INCREMENT.value: "AUTOINCREMENT",
    Attribute.OPTIONAL.value: "NOT NULL",
}

_SQLITE_FUNCTIONS = {_CONCAT: "GROUP_CONCAT"}

_SQLITE_LITERALS = {
    NOW: "CURRENT_TIMESTAMP",
    UTC_TIMESTAMP: "CURRENT_TIMESTAMP",
    SYS_DATE: "CURRENT_TIMESTAMP",
    CURRENT_DATE: "CURRENT_DATE",
    CURRENT_TIME: "CURRENT_TIME",
}

_DRIVERS = {
    Motor.MARIADB.value: Driver(
        motor=Motor.MARIADB,
        get_type=_lookup(_MARIADB_TYPES),
        get_attribute=_lookup(_MARIADB_ATTRIBUTES),
        get_function=_lookup(_MARIADB_FUNCTIONS),
        get_literal=_lookup(_MARIADB_LITERALS),
    ),
    Motor.POSTGRESQL.value: Driver(
        motor=Motor.POSTGRESQL,
        get_type=_lookup(_POSTGRESQL_TYPES),
        get_attribute=_lookup(_POSTGRESQL_ATTRIBUTES),
        get_function=_lookup(_POSTGRESQL_FUNCTIONS),
        get_literal=_lookup(_POSTGRESQL_LITERALS),
    ),
    Motor.SQLITE.value: Driver(
        motor=Motor.SQLITE,
        get_type=_lookup(_SQLITE_TYPES),
        get_attribute=_lookup(_SQLITE_ATTRIBUTES),
        get_function=_lookup(_SQLITE_FUNCTIONS),
        get_literal=_lookup(_SQLITE_LITERALS),
    ),
}


def get_driver(motor: Union[Motor, str]) -> Driver:
    """Return the driver for ``motor``, raising ``BobError`` for an unknown engine."""
    name = str(motor)
    driver = _DRIVERS.get(name)
    if driver is None:
        raise BobError(
            "Unknown driver '%s'. Supported drivers: mariadb, postgresql, sqlite", name
        )
    return driver
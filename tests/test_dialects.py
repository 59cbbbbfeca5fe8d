import pytest

from bobsql.dialects import get_driver
from bobsql.errors import BobError
from bobsql.vocabulary import ColumnType, Motor, replace_function


ALL_MOTORS = [Motor.SQLITE, Motor.MARIADB, Motor.POSTGRESQL]


@pytest.mark.parametrize("motor", ALL_MOTORS)
def test_driver_motor_matches_request(motor):
    assert get_driver(motor).motor is motor


@pytest.mark.parametrize("name", ["sqlite", "mariadb", "postgresql"])
def test_driver_by_plain_name(name):
    assert get_driver(name).motor.value == name


def test_unknown_driver_raises():
    with pytest.raises(BobError) as info:
        get_driver("oracle")
    message = str(info.value)
    assert "Supported drivers: mariadb, postgresql, sqlite" in message
    assert message.endswith("oracle")


@pytest.mark.parametrize("motor", ALL_MOTORS)
@pytest.mark.parametrize(
    "kind", [kind for kind in ColumnType if kind is not ColumnType.CURRENT]
)
def test_every_real_type_is_known(motor, kind):
    assert get_driver(motor).get_type(kind.value) != ""
    assert get_driver(motor).get_type(kind.value).isupper() or "(" in get_driver(
        motor
    ).get_type(kind.value)


@pytest.mark.parametrize("motor", ALL_MOTORS)
def test_unknown_type_is_empty(motor):
    assert get_driver(motor).get_type("current") == ""
    assert get_driver(motor).get_type("nonsense") == ""


@pytest.mark.parametrize(
    "motor, kind, expected",
    [
        (Motor.MARIADB, "id", "INT"),
        (Motor.MARIADB, "uint64", "BIGINT UNSIGNED"),
        (Motor.MARIADB, "string", "VARCHAR(255)"),
        (Motor.MARIADB, "float64", "DOUBLE"),
        (Motor.POSTGRESQL, "id", "SERIAL"),
        (Motor.POSTGRESQL, "blob", "BYTEA"),
        (Motor.POSTGRESQL, "uint64", "NUMERIC"),
        (Motor.POSTGRESQL, "float64", "DOUBLE PRECISION"),
        (Motor.SQLITE, "id", "INTEGER"),
        (Motor.SQLITE, "date", "TEXT"),
        (Motor.SQLITE, "time", "INTEGER"),
        (Motor.SQLITE, "string16", "TEXT"),
    ],
)
def test_type_names(motor, kind, expected):
    assert get_driver(motor).get_type(kind) == expected


@pytest.mark.parametrize(
    "motor, expected",
    [
        (Motor.MARIADB, "AUTO_INCREMENT"),
        (Motor.SQLITE, "AUTOINCREMENT"),
        (Motor.POSTGRESQL, ""),
    ],
)
def test_auto_increment_attribute(motor, expected):
    assert get_driver(motor).get_attribute("auto_increment") == expected


@pytest.mark.parametrize("motor", ALL_MOTORS)
def test_optional_attribute_and_unknown(motor):
    driver = get_driver(motor)
    assert driver.get_attribute("optional") == "NOT NULL"
    assert driver.get_attribute("primary") == ""


@pytest.mark.parametrize(
    "motor, expected",
    [
        (Motor.MARIADB, "CONCAT"),
        (Motor.POSTGRESQL, "CONCAT"),
        (Motor.SQLITE, "GROUP_CONCAT"),
    ],
)
def test_concat_function(motor, expected):
    driver = get_driver(motor)
    assert driver.get_function("concat") == expected
    assert driver.get_function("avg") == ""


def test_sqlite_concat_replacement():
    driver = get_driver(Motor.SQLITE)
    assert replace_function("concat(name)", driver.get_function) == "(GROUP_CONCAT(name))"


@pytest.mark.parametrize(
    "motor, literal, expected",
    [
        (Motor.MARIADB, "@now", "NOW()"),
        (Motor.MARIADB, "@utc", "UTC_TIMESTAMP()"),
        (Motor.MARIADB, "@sysdate", "SYSDATE()"),
        (Motor.POSTGRESQL, "@utc", "CURRENT_TIMESTAMP AT TIME ZONE 'UTC'"),
        (Motor.POSTGRESQL, "@sysdate", "NOW()"),
        (Motor.SQLITE, "@now", "CURRENT_TIMESTAMP"),
        (Motor.SQLITE, "@utc", "CURRENT_TIMESTAMP"),
        (Motor.SQLITE, "@date", "CURRENT_DATE"),
        (Motor.SQLITE, "@time", "CURRENT_TIME"),
    ],
)
def test_literals(motor, literal, expected):
    assert get_driver(motor).get_literal(literal) == expected


@pytest.mark.parametrize("motor", ALL_MOTORS)
def test_unknown_literal_is_empty(motor):
    assert get_driver(motor).get_literal("@tomorrow") == ""
    assert get_driver(motor).get_literal("now") == ""
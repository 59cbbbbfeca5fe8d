"""Table definitions: parsing table blocks and generating CREATE TABLE statements."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from bobsql.config import use_config
from bobsql.errors import BobError
from bobsql.lexer import Block, Command, Instruction
from bobsql.text import (
    format_quote,
    indent,
    pascal_to_snake_case,
    prepend_item,
    starts_with_upper,
)
from bobsql.vocabulary import Attribute, ColumnType, Driver, use_tag


@dataclass
class Index:
    """An index over one or more columns of a table."""

    table_name: str
    columns: List[str] = field(default_factory=list)

    def to_query(self) -> str:
        """Return the CREATE INDEX statement, or an empty string without columns."""
        if not self.columns:
            return ""
        suffix = "_".join(self.columns)
        listed = ", ".join(self.columns)
        return f"CREATE INDEX idx_{self.table_name}_{suffix} ON {self.table_name}({listed})"


@dataclass
class Reference:
    """A foreign key to a column of another table."""

    table: str
    column: str
    isolated: bool = False
    optional: bool = False

    def to_query(self) -> str:
        """Return the FOREIGN KEY clause."""
        table_name = pascal_to_snake_case(self.table)
        column_name = f"{table_name}_{self.column}"
        clause = f"FOREIGN KEY ({column_name}) REFERENCES {table_name}({self.column})"
        if not self.isolated:
            clause += " ON DELETE CASCADE"
        return clause


@dataclass
class Column:
    """A column of a table."""

    type: str
    attributes: List[str] = field(default_factory=list)
    is_primary_key: bool = False
    is_auto_increment: bool = False
    is_optional: bool = False
    default: Optional[str] = None


@dataclass
class Table:
    """A parsed table with its columns, keys, indexes and references."""

    id: str
    name: str
    columns: Dict[str, Column] = field(default_factory=dict)
    indexes: List[Index] = field(default_factory=list)
    uniques: List[str] = field(default_factory=list)
    primary_keys: List[str] = field(default_factory=list)
    references: Dict[str, Reference] = field(default_factory=dict)
    required: bool = False

    def _column_sentence(
        self, driver: Driver, name: str, column: Column, single_primary: bool
    ) -> str:
        column_type = driver.get_type(column.type)
        if not column_type:
            raise BobError(f"undefined type '{column.type}'")

        sentence = f"{name} {column_type}"

        if single_primary and column.is_primary_key:
            sentence += " PRIMARY KEY"

        if column.is_auto_increment:
            attribute = driver.get_attribute(Attribute.AUTO_INCREMENT.value)
            if attribute:
                sentence += " " + attribute

        if not column.is_optional:
            attribute = driver.get_attribute(Attribute.OPTIONAL.value)
            if attribute:
                sentence += " " + attribute

        if column.default is not None:
            literal = driver.get_literal(column.default) or column.default
            sentence += f" DEFAULT {format_quote(literal)}"

        return indent(sentence)

    def to_query(self, driver: Driver) -> str:
        """Return the CREATE TABLE statement, followed by its index statements."""
        if_not_exists = "" if self.required else "IF NOT EXISTS "
        single_primary = len(self.primary_keys) == 1

        lines = [
            self._column_sentence(driver, name, column, single_primary)
            for name, column in self.columns.items()
        ]
        lines.extend(indent(reference.to_query()) for reference in self.references.values())

        if len(self.primary_keys) > 1:
            lines.append(indent(f"PRIMARY KEY ({', '.join(self.primary_keys)})"))

        if self.uniques:
            lines.append(indent(f"UNIQUE ({', '.join(self.uniques)})"))

        query = f"CREATE TABLE {if_not_exists}{self.name} (\n" + ",\n".join(lines) + "\n)"

        index_sentences = ";\n".join(index.to_query() for index in self.indexes)
        if index_sentences:
            query += ";\n\n" + index_sentences

        return query


def _read_default(attributes: List[str], position: int) -> tuple[str, int]:
    """Read the value after '=' at ``position``; return it and the new position."""
    first = attributes[position + 1]
    if not first.startswith('"'):
        return first, position + 1

    parts: List[str] = []
    for offset, word in enumerate(attributes[position + 1 :]):
        parts.append(word)
        if word.endswith("\\"):
            continue
        if word.endswith('"'):
            position += offset
            break
    return " ".join(parts), position


def _parse_column(
    table: Table, table_name: str, words: List[str], forced: bool = False
) -> None:
    column_name = words[0]
    is_reference = starts_with_upper(column_name)

    column_type = ""
    attributes: List[str] = []
    if len(words) > 1:
        column_type = words[1]
        attributes = list(words[2:])
    elif is_reference:
        column_type = ColumnType.ID.value

    if column_name.startswith(use_config().action_alias):
        action = column_name[1:]
        if action == Attribute.INDEX.value:
            table.indexes.append(Index(table_name, list(words[1:])))
        elif action == Attribute.PRIMARY.value:
            table.primary_keys.extend(words[1:])
        return

    is_optional = Attribute.OPTIONAL.value in attributes
    if is_reference:
        reference_name = pascal_to_snake_case(column_name + "_" + column_type)
        isolated = Attribute.ISOLATED.value in attributes
        table.references[reference_name] = Reference(
            column_name, column_type, isolated, is_optional
        )
        column_name = reference_name

    if column_type in (ColumnType.ID.value, ColumnType.CURRENT.value):
        tag_type, tag_attributes = use_tag(column_type)
        column_type = tag_type
        if not is_reference:
            attributes = tag_attributes

    is_auto_increment = False
    is_primary_key = False
    default: Optional[str] = None

    # Index-driven walk: a default value consumes the words after '='.
    position = 0
    while position < len(attributes):
        attribute = attributes[position]
        if attribute == Attribute.INDEX.value:
            table.indexes.append(Index(table_name, [column_name]))
        elif attribute == Attribute.UNIQUE.value:
            table.uniques.append(column_name)
        elif attribute == Attribute.AUTO_INCREMENT.value:
            is_auto_increment = True
        elif attribute == Attribute.PRIMARY.value:
            is_primary_key = True
            table.primary_keys.append(column_name)
        elif attribute == Attribute.OPTIONAL.value:
            is_optional = True
        elif attribute == Attribute.DEFAULT.value and len(attributes) > position + 1:
            default, position = _read_default(attributes, position)
        position += 1

    column = Column(
        type=column_type,
        attributes=attributes,
        is_primary_key=is_primary_key,
        is_auto_increment=is_auto_increment,
        is_optional=is_optional,
        default=default,
    )

    if forced:
        prepend_item(table.columns, column_name, column)
    else:
        table.columns[column_name] = column


def _reversed(tables: Dict[str, Table]) -> Dict[str, Table]:
    return dict(reversed(list(tables.items())))


def _parse_table(table_id: str, block: Block) -> Dict[str, Table]:
    found: Dict[str, Table] = {}
    table_name = pascal_to_snake_case(table_id)
    table = Table(id=table_id, name=table_name, required=block.action_has("required"))

    for child in block.children:
        if isinstance(child, Block):
            if block.command != Command.TABLE:
                continue
            if not child.actions:
                raise BobError("table without a name")
            sub_id = table_name + child.actions[0]
            sub_block = Block(
                child.command,
                list(child.actions),
                [*child.children, Instruction([table_id, ColumnType.ID.value])],
            )
            found.update(_reversed(_parse_table(sub_id, sub_block)))
        else:
            _parse_column(table, table_name, child)

    if "id" not in table.columns:
        _parse_column(
            table, table_id, Instruction(["id", ColumnType.ID.value]), forced=True
        )

    found[table_id] = table
    return _reversed(found)


def parse_tables(tables: Mapping[str, Block]) -> Dict[str, Table]:
    """Parse table blocks, nested tables included, and resolve their references."""
    parsed: Dict[str, Table] = {}
    for name, block in tables.items():
        parsed.update(_parse_table(name, block))

    for table in parsed.values():
        for column_name, reference in table.references.items():
            target = parsed.get(reference.table)
            if target is None:
                raise BobError("referenced table not found", reference.table)
            source = target.columns.get(reference.column)
            if source is None:
                raise BobError(
                    "referenced column not found",
                    reference.column,
                    "in table",
                    reference.table,
                )
            table.columns[column_name] = Column(
                type=source.type,
                attributes=source.attributes,
                is_optional=reference.optional,
            )

    return parsed


def transpile_tables(driver: Driver, tables: Mapping[str, Block]) -> str:
    """Return the CREATE statements for every table, or an empty string if there are none."""
    queries = [table.to_query(driver) for table in parse_tables(tables).values()]
    if not queries:
        return ""
    return ";\n\n".join(queries) + ";"
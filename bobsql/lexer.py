"""Splitting schema and query source into blocks and instructions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Union

from bobsql.errors import BobError


class Command(str, enum.Enum):
    """Keywords that open a block."""

    TABLE = "table"
    GET = "get"
    LEFT_JOIN = "left"
    LEFT_JOIN_ALIAS = "->"
    NEW = "new"
    SET = "set"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value

    def __format__(self, spec: str) -> str:
        return format(self.value, spec)


_COMMAND_VALUES = frozenset(command.value for command in Command)


def is_command(text: str) -> bool:
    """Whether ``text`` is a block keyword."""
    return text in _COMMAND_VALUES


class Instruction(list):
    """The words of one line inside a block."""


@dataclass
class Block:
    """A keyword, the words that follow it and the lines and blocks it holds."""

    command: str = ""
    actions: List[str] = field(default_factory=list)
    children: List[Union[Instruction, "Block"]] = field(default_factory=list)

    def append(self, item: Union[str, Instruction, "Block"]) -> None:
        """Add a word to the actions, or an instruction or block to the children."""
        if isinstance(item, (Instruction, Block)):
            self.children.append(item)
        elif isinstance(item, str):
            self.actions.append(item)

    def action_is(self, *commands: str) -> bool:
        """Whether the block's command is one of ``commands``."""
        return self.command in commands

    def action_has(self, action: str) -> bool:
        """Whether ``action`` is among the block's words."""
        return action in self.actions


def _copy_block(block: Block) -> Block:
    return Block(block.command, list(block.actions), list(block.children))


@dataclass
class Program:
    """Parsed source: table blocks by name in order of first definition, and action blocks."""

    tables: Dict[str, Block] = field(default_factory=dict)
    actions: List[Block] = field(default_factory=list)

    def append(self, block: Block) -> None:
        """File a top-level block as a table or an action."""
        if block.command == Command.TABLE:
            if not block.actions:
                raise BobError("table without a name")
            self.tables[block.actions[0]] = block
            return
        self.actions.append(block)


def _merge_last(pile: List[Block]) -> None:
    if len(pile) - 1 > 1:
        last = pile.pop()
        pile[-1].append(last)


def parse(query: str) -> Program:
    """Parse source text into a program."""
    pile: List[Block] = [Block()]
    program = Program()
    instruction = Instruction()
    at_actions = True
    depth = 0

    for line in query.split("\n"):
        if not line:
            continue

        commented = False
        for token in line.split():
            if token.startswith("#"):
                commented = True
                break

            if is_command(token):
                pile.append(Block(Command(token)))
                at_actions = True
                continue

            if token == "{":
                depth += 1
                at_actions = False
                continue

            if at_actions:
                pile[-1].append(token)
                continue

            if token.startswith("}"):
                depth -= 1
                if depth == 0:
                    program.append(_copy_block(pile[-1]))
                else:
                    _merge_last(pile)
                continue

            instruction.append(token)

        if commented:
            continue

        if instruction:
            pile[-1].append(instruction)
            instruction = Instruction()

    return program
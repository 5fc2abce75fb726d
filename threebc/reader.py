"""Reading source text into a machine's program, line by line."""

from __future__ import annotations

from typing import Callable, Optional, TextIO, TypeVar

from threebc.errors import ErrorCode, TbcError
from threebc.machine import Machine
from threebc.parser import SkipCounter
from threebc.syntax import parse_constant, parse_register
from threebc.tokens import split_columns

_T = TypeVar("_T")

_LINE_ENDS = ("", "\n", "\0")


def _checked(machine: Machine, action: Callable[[], _T]) -> _T:
    """Run an action, reporting any machine error through the machine."""
    try:
        return action()
    except TbcError as failure:
        raise machine.error(failure.code) from None


def read_line(
    machine: Machine, line: str, skip: Optional[SkipCounter] = None
) -> Optional[str]:
    """Compile the first row of a text into the machine's program.

    Returns the text after that row, or None when nothing is left.
    """
    columns, rest = _checked(machine, lambda: split_columns(line))
    if not columns:
        return rest

    text_reg, text_mem, text_val = columns

    reg = _checked(machine, lambda: parse_register(text_reg))
    if reg is None:
        raise machine.error(ErrorCode.INVALID_REGISTER)

    mem = _checked(machine, lambda: parse_constant(text_mem, skip))
    if mem is None:
        raise machine.error(ErrorCode.INVALID_ADDRESS)

    val = _checked(machine, lambda: parse_constant(text_val, skip))
    if val is None:
        raise machine.error(ErrorCode.INVALID_CONSTANT)

    _checked(machine, lambda: machine.program.add_line(reg, mem, val))
    return rest


class Reader:
    """Accumulates source characters and compiles each completed line."""

    def __init__(self, machine: Machine, skip: Optional[SkipCounter] = None) -> None:
        self.machine = machine
        self.skip = skip if skip is not None else SkipCounter()
        self._buffer: list[str] = []

    @property
    def pending(self) -> str:
        """Text read so far that does not yet form a complete line."""
        return "".join(self._buffer)

    def _compile(self, text: str) -> None:
        rest: Optional[str] = text
        while rest is not None:
            self.machine.program.last_line += 1
            rest = read_line(self.machine, rest, self.skip)

    def feed(self, character: str) -> bool:
        """Take one character ("" for end of input).

        Returns True when a line was compiled.
        """
        if character == "\r":
            return False
        if character == "" and not self._buffer:
            return False
        if character in _LINE_ENDS:
            text = "".join(self._buffer)
            self._buffer.clear()
            self._compile(text)
            return True
        self._buffer.append(character)
        return False

    def ticket(self, stream: TextIO) -> bool:
        """Read one character from a stream.

        Returns False once the stream is exhausted and nothing is pending.
        """
        character = stream.read(1)
        if character == "" and not self._buffer:
            return False
        self.feed(character)
        return True


def load_source(machine: Machine, text: str) -> None:
    """Compile a whole source text into the machine's program."""
    reader = Reader(machine)
    for character in text:
        reader.feed(character)
    reader.feed("")
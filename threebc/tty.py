"""Teletype streams: text output, number formatting and key input."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Optional

from threebc.errors import ErrorCode, TbcError


class StreamType(Enum):
    """Where a terminal sends or takes its text."""

    NONE = 0
    SILENT = 1
    ARDUINO_SERIAL = 2
    ARDUINO_FILE = 3
    COMPUTER_STD = 4
    COMPUTER_FILE = 5
    FUNCTION_CALL = 6
    CLONE_TTY = 7


class TtyFormat(IntEnum):
    """Number formats, numbered as the string registers."""

    STRB = 1
    STRO = 2
    STRI = 3
    STRX = 4
    STRC = 5


def format_value(fmt: int, value: int) -> str:
    """Render a value as the given register prints it."""
    fmt = TtyFormat(fmt)
    if fmt is TtyFormat.STRC:
        return chr(value & 0xFF)
    sign = "-" if value < 0 else ""
    value = abs(value)
    if fmt is TtyFormat.STRB:
        digits = format(value, "b")
    elif fmt is TtyFormat.STRO:
        digits = format(value, "o")
    elif fmt is TtyFormat.STRX:
        digits = format(value, "x")
    else:
        digits = str(value)
    return sign + digits


def parse_key(fmt: int, char: str) -> Optional[int]:
    """Decode one key press, or return None when it is not accepted."""
    fmt = TtyFormat(fmt)
    code = ord(char)
    if fmt is TtyFormat.STRB:
        if char in "Yy1":
            return 1
        if char in "Nn0":
            return 0
        return None
    if fmt is TtyFormat.STRC:
        return code if 0x20 <= code <= 0x7E else None
    if fmt is TtyFormat.STRI:
        return code - 0x30 if 0x30 <= code <= 0x39 else None
    if fmt is TtyFormat.STRO:
        return code - 0x30 if 0x30 <= code <= 0x37 else None
    code |= 0x20
    if 0x30 <= code <= 0x39:
        return code - 0x30
    if 0x61 <= code <= 0x66:
        return code - 0x61 + 0xA
    return None


@dataclass
class Tty:
    """A terminal: a stream, a callback or another terminal, by type."""

    type: StreamType = StreamType.NONE
    target: Any = None

    def write(self, text: str) -> None:
        """Send raw text to the terminal."""
        if self.type is StreamType.COMPUTER_STD:
            self.target.write(text)
        elif self.type is StreamType.CLONE_TTY:
            self.target.write(text)
        elif self.type is StreamType.FUNCTION_CALL:
            self.target(text)
        elif self.type is StreamType.NONE:
            raise TbcError(ErrorCode.NONE_TTY)

    def output(self, fmt: int, value: int) -> None:
        """Print a value in the given format."""
        self.write(format_value(fmt, value))

    def read(self, fmt: int) -> int:
        """Read keys until one is valid for the format and return its value."""
        if self.type is StreamType.CLONE_TTY:
            return self.target.read(fmt)
        if self.target is None or not hasattr(self.target, "read"):
            raise TbcError(ErrorCode.NONE_TTY)
        while True:
            char = self.target.read(1)
            if not char:
                raise EOFError("no more input on terminal")
            value = parse_key(fmt, char)
            if value is not None:
                return value
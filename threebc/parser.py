"""Literal parsing: numbers in any base, quoted characters, hashes and skips."""

from __future__ import annotations

from typing import Optional

from threebc.errors import ErrorCode, TbcError

SHRT_MAX = 32767
LONG_MIN = -(1 << 63)
LONG_MAX = (1 << 63) - 1

_ULONG_MASK = (1 << 64) - 1
_DIGITS = "0123456789"
_HASH_SEED = 5381
_SKIP_SEED = 15376

_BASES = {"x": 16, "i": 10, "d": 10, "o": 8, "b": 2}

_ESCAPES = {
    "0": 0x00,
    "a": 0x07,
    "b": 0x08,
    "t": 0x09,
    "n": 0x0A,
    "'": 0x27,
    "\\": 0x5C,
}


def _at(text: str, index: int) -> str:
    """Character at an index, or NUL past the end of the text."""
    return text[index] if index < len(text) else "\0"


def _is_digit(char: str) -> bool:
    return len(char) == 1 and char in _DIGITS


def _valid_digit(char: str, base: int) -> bool:
    return char.isascii() and char.isalnum() and int(char, 36) < base


def _strtol(text: str, base: int) -> tuple[int, int]:
    """Read a signed integer; return the value and where reading stopped.

    The end position is 0 when no digits were found.
    """
    pos = 0
    negative = False
    if text[:1] in ("+", "-"):
        negative = text[0] == "-"
        pos = 1
    if (
        base == 16
        and text[pos : pos + 2] in ("0x", "0X")
        and pos + 2 < len(text)
        and _valid_digit(text[pos + 2], 16)
    ):
        pos += 2
    start = pos
    while pos < len(text) and _valid_digit(text[pos], base):
        pos += 1
    if pos == start:
        return 0, 0
    value = int(text[start:pos], base)
    return (-value if negative else value), pos


def parse_number(string: str) -> Optional[int]:
    """Parse a number with an optional base prefix (0x, 0d, 0i, 0o, 0b).

    Returns None when the text does not start like a number.
    """
    if not string or (string[0] != "-" and not _is_digit(string[0])):
        return None

    decode = string
    if (
        _at(decode, 0) == "-"
        and _at(decode, 1) == "0"
        and not _is_digit(_at(decode, 2))
        and _at(decode, 2) != "\0"
    ):
        kind = decode[2].lower()
        decode = decode[:2] + decode[3:]
    elif (
        _at(decode, 0) == "0"
        and not _is_digit(_at(decode, 1))
        and _at(decode, 1) != "\0"
    ):
        kind = decode[1].lower()
        decode = decode[:1] + decode[2:]
    else:
        kind = "d"

    base = _BASES.get(kind)
    if base is None:
        raise TbcError(ErrorCode.NUMBER_WRONG_BASE)

    value, end = _strtol(decode, base)
    if end == 0:
        raise TbcError(ErrorCode.NUMBER_NO_DIGITS)
    if value < LONG_MIN:
        raise TbcError(ErrorCode.NUMBER_UNDERFLOW)
    if value > LONG_MAX:
        raise TbcError(ErrorCode.NUMBER_OVERFLOW)
    if end != len(decode):
        raise TbcError(ErrorCode.NUMBER_WRONG_BASE)
    return value


def parse_char(string: str) -> Optional[int]:
    """Parse a quoted character such as 'a' or '\\n'.

    Returns None when the text does not start with a quote.
    """
    if _at(string, 0) != "'":
        return None
    if _at(string, 2) != "'" and _at(string, 3) != "'":
        raise TbcError(ErrorCode.CHAR_SIZE)
    if _at(string, 3) != "'":
        return ord(_at(string, 1))
    if _at(string, 1) != "\\":
        raise TbcError(ErrorCode.CHAR_SIZE)
    escape = _ESCAPES.get(_at(string, 2))
    if escape is None:
        raise TbcError(ErrorCode.CHAR_SCAPE)
    return escape


def parse_hash(string: str) -> Optional[int]:
    """Hash a text starting with ':' into a number (djb2, line breaks ignored).

    Returns None when the text does not start with ':'.
    """
    if not string.startswith(":"):
        return None
    value = _HASH_SEED
    for byte in string.encode("utf-8"):
        if byte == 0x0A:
            continue
        char = byte - 0x100 if byte >= 0x80 else byte
        value = ((value << 5) + value + char) & _ULONG_MASK
    return value % SHRT_MAX


class SkipCounter:
    """Source of values for the 'skip' constant; each value is used twice."""

    def __init__(self) -> None:
        self._calls = 0

    def next(self) -> int:
        """Return the hash of "skip" followed by the pair count."""
        count = self._calls // 2
        self._calls += 1
        value = _SKIP_SEED
        while True:
            value = ((value << 5) + value + (count % 10) + ord("0")) & _ULONG_MASK
            count //= 10
            if count <= 0:
                break
        return value % SHRT_MAX
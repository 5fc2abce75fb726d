"""Recognition of register mnemonics and constant literals."""

from __future__ import annotations

from typing import Optional

from threebc.parser import (
    SkipCounter,
    parse_char,
    parse_hash,
    parse_number,
)

REGISTERS: dict[str, int] = {
    "aloc": 2,
    "back": 1,
    "call": 1,
    "fake": 2,
    "fcal": 2,
    "fgto": 2,
    "free": 1,
    "fret": 2,
    "goto": 1,
    "math": 1,
    "micr": 3,
    "mili": 4,
    "mode": 7,
    "moff": 3,
    "muse": 4,
    "nb02": 1,
    "nb08": 2,
    "nb10": 3,
    "nb16": 4,
    "ncal": 5,
    "ngto": 5,
    "nill": 0,
    "nret": 5,
    "pcal": 4,
    "pgto": 4,
    "pret": 4,
    "pull": 3,
    "push": 5,
    "real": 1,
    "seco": 5,
    "spin": 4,
    "strb": 1,
    "strc": 5,
    "stri": 3,
    "stro": 2,
    "strx": 4,
    "zcal": 3,
    "zgto": 3,
    "zret": 3,
}

NILL = 0
FULL = 1023

_default_skip = SkipCounter()


def _keyword(string: str) -> str:
    """First four characters, padded, with the lowercase bit forced on."""
    head = string[:4].ljust(4, "\0")
    return "".join(chr(ord(char) | 0x20) for char in head)


def parse_register(string: str) -> Optional[int]:
    """Return the opcode of the first column, or None if it is unknown."""
    value = parse_number(string)
    if value is not None:
        return value
    return REGISTERS.get(_keyword(string))


def parse_constant(
    string: Optional[str], skip: Optional[SkipCounter] = None
) -> Optional[int]:
    """Return the value of an address or value column, or None if invalid."""
    if string is None:
        return None

    value = parse_number(string)
    if value is not None:
        return value

    value = parse_hash(string)
    if value is not None:
        return value

    if len(string) < 3:
        return None

    value = parse_char(string)
    if value is not None:
        return value

    if len(string) < 4:
        return None

    keyword = _keyword(string)
    if keyword == "nill":
        return NILL
    if keyword == "skip":
        return (skip if skip is not None else _default_skip).next()
    if keyword == "full":
        return FULL
    return None
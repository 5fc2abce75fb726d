"""Splitting source text into rows and columns."""

from __future__ import annotations

from typing import Iterator, Optional

from threebc.errors import ErrorCode, TbcError

_BLANKS = "\t. "
_SEPARATORS = "\t,. "
_COMMENTS = "#;"
_COMMENT_STOP = ("\n", "\0", "\xff")


def _at(text: str, index: int) -> str:
    """Character at an index, or NUL past the end of the text."""
    return text[index] if index < len(text) else "\0"


def split_columns(line: str) -> tuple[tuple[str, ...], Optional[str]]:
    """Split the first row of a text into its columns.

    Returns the columns (three of them, or none for a blank row) and the
    text after the row, or None when the whole text was used.
    Raises TbcError when the row does not have exactly three columns.
    """
    columns: list[str] = []
    count = 0
    rest: Optional[str] = None
    pos = 0

    while True:
        while _at(line, pos) != "\0" and _at(line, pos) in _BLANKS:
            pos += 1
        char = _at(line, pos)

        if char == "\0" or char in _COMMENTS:
            while _at(line, pos) not in _COMMENT_STOP:
                pos += 1
            break

        if char == "\n" and _at(line, pos + 1) == "\0":
            break

        if char in ("\n", ","):
            rest = line[pos + 1 :]
            break

        count += 1
        start = pos

        if char == "'":
            while True:
                pos += 1
                if _at(line, pos) == "\\":
                    pos += 1
                if _at(line, pos) in ("'", "\0"):
                    break

        while _at(line, pos) != "\0" and _at(line, pos) not in _SEPARATORS:
            pos += 1

        if count <= 3:
            columns.append(line[start:pos])

        if _at(line, pos) not in ("\0", ","):
            pos += 1

        if _at(line, pos) == "\0":
            break

    if count not in (0, 3):
        raise TbcError(ErrorCode.COLUMNS)
    return tuple(columns), rest


def tokenize(text: str) -> Iterator[tuple[str, ...]]:
    """Yield the three columns of every non-blank row of a text."""
    rest: Optional[str] = text
    while rest is not None:
        columns, rest = split_columns(rest)
        if columns:
            yield columns
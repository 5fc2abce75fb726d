"""Program storage: punched-card lines, jump labels and the procedure stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from threebc.errors import ErrorCode, TbcError

NILL = 0
MODE = 7

_LABEL_MASK = 0xFF
_REGISTER_MASK = 0xFF
_ADDRESS_MASK = 0xFFFF
_CPU_MASK = 0xFF


def _to_data(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


@dataclass(frozen=True)
class Line:
    """One recorded instruction and the source line it came from."""

    reg: int
    address: int
    value: int
    line: int = 0


@dataclass(frozen=True)
class Label:
    """A jump target: the position of the next line and the mode in force."""

    label: int
    cpumode: int
    position: int


class Program:
    """Program memory of one machine, with its cursor and call stack."""

    def __init__(self) -> None:
        self.lines: list[Line] = []
        self.labels: dict[int, Label] = {}
        self.curr: Optional[int] = None
        self.last_line = 0
        self.last_cpu = 0
        self.label_target = NILL
        self.cpu_mode = 0
        self._stack: list[Optional[int]] = []

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    @property
    def current(self) -> Optional[Line]:
        """The line about to run, or None at the end of the program."""
        return None if self.curr is None else self.lines[self.curr]

    @property
    def depth(self) -> int:
        """Number of procedure calls waiting for a return."""
        return len(self._stack)

    def _error(self, code: ErrorCode) -> TbcError:
        if self.curr is not None and code.fatal:
            line = self.lines[self.curr].line
        else:
            line = self.last_line
        return TbcError(code, line)

    def add_line(self, reg: int, address: int, value: int) -> None:
        """Record a line; a line with only a value marks a label instead."""
        if reg == NILL and address == NILL and value != NILL:
            self.add_label(value)
            return

        if reg == MODE:
            self.last_cpu = value & _CPU_MASK

        self.lines.append(
            Line(
                reg=reg & _REGISTER_MASK,
                address=address & _ADDRESS_MASK,
                value=_to_data(value),
                line=self.last_line,
            )
        )
        if self.curr is None:
            self.curr = len(self.lines) - 1

    def add_label(self, label: int) -> Label:
        """Mark the point after the last recorded line as a jump target."""
        key = label & _LABEL_MASK
        if key in self.labels:
            raise self._error(ErrorCode.INVALID_LABEL)
        node = Label(label=key, cpumode=self.last_cpu, position=len(self.lines))
        self.labels[key] = node
        return node

    def find_label(self, label: int) -> Optional[Label]:
        """Return the label record, or None when it is not defined yet."""
        return self.labels.get(label & _LABEL_MASK)

    def push_procedure(self) -> None:
        """Remember the current position for a later return."""
        self._stack.append(self.curr)

    def pop_procedure(self) -> Optional[int]:
        """Return the position remembered by the latest call."""
        if not self._stack:
            raise self._error(ErrorCode.INVALID_RETURN)
        return self._stack.pop()

    def available(self) -> bool:
        """Tell whether a line can run now, taking a pending jump first."""
        target = self.label_target & _LABEL_MASK
        if target != NILL:
            node = self.find_label(target)
            if node is None or node.position >= len(self.lines):
                return False
            self.cpu_mode = node.cpumode
            self.curr = node.position
            self.label_target = NILL
            return True
        return self.curr is not None

    def advance(self) -> Line:
        """Return the current line and move the cursor to the next one."""
        if self.curr is None:
            raise self._error(ErrorCode.NULL_POINTER)
        line = self.lines[self.curr]
        following = self.curr + 1
        self.curr = following if following < len(self.lines) else None
        return line
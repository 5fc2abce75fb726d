"""Virtual machines and the hypervisor that owns them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from threebc.errors import ErrorCode, TbcError, format_error
from threebc.memory import Memory
from threebc.program import Program
from threebc.tty import StreamType, Tty


class MachineState(Enum):
    """States of the machine's finite state machine."""

    DEFAULT = 0
    READING = 1
    RUNNING = 2
    WAITING = 3
    IO_READ = 4
    IO_SEND = 5
    EXITING = 6
    STOPED = 7


class SleepMode(Enum):
    """How a pending sleep is measured."""

    NONE = 0
    REAL_TICK = 1
    FAKE_TICK = 2
    MICROSECONDS = 3
    MILLISECONDS = 4
    SECONDS = 5


def _to_aux(value: int) -> int:
    value &= 0xFFFFFFFFFFFFFFFF
    return value - 0x10000000000000000 if value & 0x8000000000000000 else value


@dataclass(eq=False)
class Machine:
    """One virtual machine: its program, memory, terminals and registers."""

    id: int = 0
    state: MachineState = MachineState.DEFAULT
    mem_aux: int = 0
    cpu_mode: int = 0
    error_code: Optional[int] = None
    sleep_mode: SleepMode = SleepMode.NONE
    sleep_period: int = 0
    sleep_called: int = 0
    tty_input: Tty = field(default_factory=Tty)
    tty_debug: Tty = field(default_factory=Tty)
    tty_output: Tty = field(default_factory=Tty)
    tty_source: Tty = field(default_factory=Tty)
    tty_keylog: Tty = field(default_factory=Tty)
    tty_error: Tty = field(default_factory=Tty)
    program: Program = field(default_factory=Program)
    memory: Memory = field(default_factory=Memory)

    def __post_init__(self) -> None:
        self.mem_aux = _to_aux(self.mem_aux)

    def __repr__(self) -> str:
        return f"Machine(id={self.id}, state={self.state.name})"

    def _error_line(self, code: ErrorCode | int) -> int:
        current = self.program.current
        if current is not None and int(code) >= ErrorCode.CPU_ZERO:
            return current.line
        return self.program.last_line

    def error(self, code: ErrorCode | int) -> TbcError:
        """Report an error on the error terminal.

        Fatal errors stop the machine and are raised; others are returned.
        """
        line = self._error_line(code)
        failure = TbcError(code, line, self.id)
        if self.tty_error.type is not StreamType.NONE:
            self.tty_error.write(format_error(code, line, self.id))
        self.error_code = int(code)
        if failure.fatal:
            self.state = MachineState.EXITING
            raise failure
        return failure


class Hypervisor:
    """Creates virtual machines and hands them out by id."""

    def __init__(self) -> None:
        self._machines: list[Machine] = []

    def __len__(self) -> int:
        return len(self._machines)

    def __iter__(self) -> Iterator[Machine]:
        return iter(list(self._machines))

    def new(self) -> Machine:
        """Create a machine whose id is the number of machines before it."""
        machine = Machine(id=len(self._machines))
        self._machines.append(machine)
        return machine

    def get(self, machine_id: int) -> Machine:
        """Return the machine with the given id."""
        if not 0 <= machine_id < len(self._machines):
            raise IndexError(f"no machine with id {machine_id}")
        return self._machines[machine_id]

    def all(self) -> list[Machine]:
        """Return every machine, ordered by id."""
        return list(self._machines)

    def kill_all(self) -> None:
        """Discard every machine; ids start from zero again."""
        self._machines.clear()
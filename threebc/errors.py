"""Error codes of the virtual machine and how they are reported."""

from __future__ import annotations

from enum import IntEnum

_HEADER = (
    "\n[3BC] CRITICAL ERROR ABORTED THE PROGRAM\n"
    "> MACHINE ID:\t{machine_id:08d}\n"
    "> ERROR LINE:\t{line:08d}\n"
    "> ERROR CODE:\t0x{code:06X}\n"
    "> DESCRIPTION: "
)

UNKNOWN_DESCRIPTION = "UNKNOWN ERROR"


class ErrorCode(IntEnum):
    """Every error the machine can raise, with its description."""

    description: str

    def __new__(cls, value: int, description: str) -> "ErrorCode":
        member = int.__new__(cls, value)
        member._value_ = value
        member.description = description
        return member

    SEGMENT_FAULT = (0x00000B, "SEGMENT FAULT")
    CPU_ZERO = (0x3BC000, "CPU MODE IS NOT DEFINED")
    CPU_RESERVED = (0x3BC001, "CPU MODE IS RESERVED")
    INVALID_REGISTER = (0x3BC002, "INVALID CPU REGISTER")
    INVALID_ADDRESS = (0x3BC003, "INVALID ADDRESS")
    INVALID_CONSTANT = (0x3BC004, "INVALID CONSTANT")
    INVALID_CPU_MODE = (0x3BC005, "INVALID CPU MODE")
    INVALID_LABEL = (0x3BC006, "INVALID LABEL")
    INVALID_RETURN = (0x3BC007, "INVALID PROCEDURE RETURN")
    PARAM_DUALITY = (0x3BC008, "DUALITY ADDRES WITH VALUE IS NOT ALLOWED")
    PARAM_REQUIRE_ANY = (0x3BC009, "VALUE OR ADDRESS IS REQUIRED")
    PARAM_REQUIRE_VALUE = (0x3BC00A, "VALUE IS REQUIRED")
    PARAM_REQUIRE_ADDRESS = (0x3BC00B, "ADDRESS IS REQUIRED")
    PARAM_BLOCKED_VALUE = (0x3BC00C, "VALUE IS NOT ALLOWED")
    PARAM_BLOCKED_ADDRESS = (0x3BC00D, "ADDRESS IS NOT ALLOWED")
    NUMBER_NO_DIGITS = (0x3BC00E, "NUMBER WHIOUT DIGITS")
    NUMBER_UNDERFLOW = (0x3BC00F, "NUMBER UNDERFLOW")
    NUMBER_OVERFLOW = (0x3BC010, "NUMBER OVERFLOW")
    NUMBER_WRONG_BASE = (0x3BC011, "NUMBER WRONG BASE")
    NUMBER_NEGATIVE = (0x3BC012, "NUMBER NEGATIVE IS NOT EXPECTED")
    NUMBER_ZERO = (0x3BC013, "NUMBER ZERO IS NOT EXPECTED")
    OUT_OF_MEMORY = (0x3BC014, "OUT OF MEMORY")
    NONE_TTY = (0x3BC015, "NONE TTY")
    UNSUPPORTED = (0x3BC016, "UNSUPPORTED FEATURE")
    MEMORY_CONFIG = (0x3BC017, "MEMORY CONFIG")
    OPEN_FILE = (0x3BC018, "CANNOT OPEN FILE")
    NULL_POINTER = (0x3BC019, "NULL POINTER")
    CHAR_SCAPE = (0x3BC01A, "INVALID CHARACTER ESCAPE")
    CHAR_SIZE = (0x3BC01B, "INVALID CHARACTER SIZE")
    COLUMNS = (0x3BC01C, "WRONG NUMBER OF COLUMNS")

    @property
    def fatal(self) -> bool:
        """True when the error terminates the machine."""
        return self >= ErrorCode.CPU_ZERO


def _description(code: int) -> str:
    try:
        return ErrorCode(code).description
    except ValueError:
        return UNKNOWN_DESCRIPTION


def format_error(code: int, line: int, machine_id: int) -> str:
    """Build the full report printed on the error terminal."""
    header = _HEADER.format(machine_id=machine_id, line=line, code=int(code))
    return f"{header}{_description(code)}\n"


class TbcError(Exception):
    """Raised when a machine reports an error."""

    def __init__(self, code: int, line: int = 0, machine_id: int = 0) -> None:
        self.code = code
        self.line = line
        self.machine_id = machine_id
        super().__init__(f"{_description(code)} (line {line})")

    @property
    def description(self) -> str:
        return _description(self.code)

    @property
    def fatal(self) -> bool:
        return int(self.code) >= ErrorCode.CPU_ZERO

    def report(self, machine_id: int | None = None) -> str:
        """Return the report text, optionally for another machine id."""
        if machine_id is None:
            machine_id = self.machine_id
        return format_error(self.code, self.line, machine_id)
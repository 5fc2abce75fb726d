# threebc

`threebc` holds the building blocks of a small virtual machine for the 3BC
language. 3BC is a low-level, punched-card style language in which every
line has exactly three columns: a **register** (the instruction), an
**address** and a **value**.

```
MODE NILL 2     # switch the CPU mode
STRC NILL 'H'   # print a character
STRC NILL 'i'
```

The package reads such source text into a machine's program. It also
provides the machine's memory, its terminals and its error reports.

| Module             | Contents                                                              |
|--------------------|-----------------------------------------------------------------------|
| `threebc.errors`   | `ErrorCode`, the `TbcError` exception and `format_error`              |
| `threebc.memory`   | `Memory`, a red-black tree of addressed cells, and `MemoryConfig`     |
| `threebc.program`  | `Program` of `Line`s, jump `Label`s and the procedure call stack      |
| `threebc.tty`      | `Tty`, `StreamType`, `TtyFormat`, `format_value` and `parse_key`      |
| `threebc.machine`  | `Machine`, `MachineState` and the `Hypervisor` that creates machines  |
| `threebc.parser`   | `parse_number`, `parse_char`, `parse_hash` and `SkipCounter`          |
| `threebc.syntax`   | `parse_register` and `parse_constant` for the three columns           |
| `threebc.tokens`   | `split_columns` and `tokenize` for raw source text                    |
| `threebc.reader`   | `read_line`, `load_source` and the character-fed `Reader`             |

## Loading a program

```python
from threebc.machine import Hypervisor
from threebc.reader import load_source

hypervisor = Hypervisor()
machine = hypervisor.new()          # ids count up from 0

load_source(machine, "MODE NILL 2\nSTRC NILL 'H'\nSTRC NILL 'i'\n")

for line in machine.program:
    print(line.reg, line.address, line.value, line.line)
```

You can separate several rows on one physical line with commas. Text after
`#` or `;` is a comment. A row with no register and no address but a
non-zero value, such as `NILL NILL :loop`, marks a label and does not
record a line. Defining the same label twice is an error.

`Reader` takes the source one character at a time. Call `feed` with each
character and `""` at end of input. Call `ticket` with a text stream to
read one character from it. Each completed line is compiled as soon as it
ends.

Use `tokenize` to split text into rows without compiling it:

```python
from threebc.tokens import tokenize

list(tokenize("MODE NILL 2, STRC NILL 'A'"))
# [('MODE', 'NILL', '2'), ('STRC', 'NILL', "'A'")]
```

## Literals

The address and value columns accept:

* decimal numbers, negative ones included: `42`, `-7`
* numbers with a base prefix: `0x1F`, `0o17`, `0b101`, `0d10`, `0i10`
* quoted characters, with the escapes `\0 \a \b \t \n \' \\`: `'A'`, `'\n'`
* names that start with a colon, hashed into a number: `:loop`
* the words `NILL` (0) and `FULL` (1023)
* the word `SKIP`, which gives a hashed number from a `SkipCounter`; each
  number is returned twice before the next one

Register names such as `MODE`, `STRC`, `GOTO` and `PUSH` are case
insensitive. Registers can also be written as numbers.

## Running a program

`Program` keeps a cursor over its lines:

* `available()` returns whether a line can run now. It first takes a pending jump to `label_target`.
* `advance()` returns the current line and moves to the next one.
* `push_procedure()` and `pop_procedure()` remember and restore positions.

## Memory

```python
from threebc.memory import Memory

memory = Memory()
memory.set(10, 42)
assert memory.get(10) == 42
assert memory.get(11) == 0        # untouched cells read as zero
memory.clear(10)
list(memory.addresses())          # allocated addresses, ascending
```

Values wrap to signed 32 bits. Addresses range from 0 to 65535.

## Terminals

A `Tty` sends its text according to its `StreamType`:

* `COMPUTER_STD` calls `write` on a stream.
* `FUNCTION_CALL` calls a function.
* `CLONE_TTY` forwards to another `Tty`.
* `SILENT` discards the text.
* `NONE` raises `TbcError`.

`Tty.output` prints a value in one of the `TtyFormat` formats: binary, octal, decimal, hex or character. `Tty.read` reads keys until one is valid for the format.

## Errors

Problems raise `TbcError` carrying an `ErrorCode`. Examples are a repeated label, a row with the wrong number of columns, or a number in an unknown base. `format_error` and `TbcError.report` produce the text of the error report.

`Machine.error` does the following:

* It writes the report to the machine's error terminal, unless that terminal is `NONE`.
* It records the code.
* For a fatal error, it sets the state to `EXITING` and raises the error.

## What this package does not do

The package does not execute instructions: no CPU modes or register behaviour run a loaded program. It has no command-line program to start a machine.
import pytest

from threebc.errors import ErrorCode, TbcError
from threebc.program import MODE, NILL, Label, Line, Program


def test_add_line_records_columns_and_line_number():
    program = Program()
    program.last_line = 4
    program.add_line(1, 2, 3)
    assert program.lines == [Line(reg=1, address=2, value=3, line=4)]
    assert program.curr == 0


def test_value_only_line_becomes_label():
    program = Program()
    program.add_line(9, 0, 1)
    program.add_line(NILL, NILL, 5)
    assert len(program) == 1
    assert program.find_label(5) == Label(label=5, cpumode=0, position=1)


def test_duplicate_label_raises():
    program = Program()
    program.add_label(5)
    with pytest.raises(TbcError) as info:
        program.add_label(5)
    assert info.value.code == ErrorCode.INVALID_LABEL


def test_labels_are_eight_bits_wide():
    program = Program()
    program.add_label(5)
    with pytest.raises(TbcError):
        program.add_label(5 + 256)
    assert program.find_label(5 + 256) is program.find_label(5)


def test_mode_line_sets_label_cpumode():
    program = Program()
    program.add_line(MODE, 0, 2)
    program.add_label(9)
    assert program.last_cpu == 2
    assert program.find_label(9).cpumode == 2


def test_advance_walks_lines_in_order():
    program = Program()
    for value in (10, 20, 30):
        program.add_line(1, 0, value)
    seen = []
    while program.available():
        seen.append(program.advance().value)
    assert seen == [10, 20, 30]
    assert program.current is None


def test_new_line_after_end_resumes():
    program = Program()
    program.add_line(1, 0, 1)
    program.advance()
    assert not program.available()
    program.add_line(1, 0, 2)
    assert program.available()
    assert program.advance().value == 2


def test_advance_without_line_raises():
    with pytest.raises(TbcError) as info:
        Program().advance()
    assert info.value.code == ErrorCode.NULL_POINTER


def test_jump_to_label():
    program = Program()
    program.add_line(MODE, 0, 3)
    program.add_line(NILL, NILL, 7)
    program.add_line(1, 0, 11)
    program.add_line(MODE, 0, 4)
    program.add_line(1, 0, 22)
    program.advance()
    program.advance()
    program.label_target = 7
    assert program.available()
    assert program.curr == 1
    assert program.cpu_mode == 3
    assert program.label_target == NILL
    assert program.advance().value == 11


def test_pending_label_waits():
    program = Program()
    program.add_line(1, 0, 1)
    program.label_target = 8
    assert not program.available()
    program.add_label(8)
    assert not program.available()
    program.add_line(1, 0, 2)
    assert program.available()
    assert program.current.value == 2


def test_procedure_stack_is_lifo():
    program = Program()
    for value in (1, 2, 3):
        program.add_line(1, 0, value)
    program.push_procedure()
    program.advance()
    program.push_procedure()
    assert program.depth == 2
    assert program.pop_procedure() == 1
    assert program.pop_procedure() == 0
    assert program.depth == 0


def test_return_without_call_raises():
    program = Program()
    program.last_line = 6
    with pytest.raises(TbcError) as info:
        program.pop_procedure()
    assert info.value.code == ErrorCode.INVALID_RETURN
    assert info.value.line == 6


def test_error_uses_current_line_number():
    program = Program()
    program.last_line = 12
    program.add_line(1, 0, 1)
    program.last_line = 40
    with pytest.raises(TbcError) as info:
        program.pop_procedure()
    assert info.value.line == 12
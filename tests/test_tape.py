import pytest

from simulator.errors import BoundaryViolation
from simulator.tape import Cell, Tape


@pytest.mark.parametrize("initial", [[], ["0"], ["0", "1", "1", "1", "0", "1", "1", "1", "0"]])
def test_new_tape_sequence_is_start_then_initial(initial):
    tape = Tape("_", "S", initial)
    assert tape.to_sequence() == ["S"] + initial
    assert tape.read() == "S"
    assert tape.position == 0


def test_empty_initial_materializes_only_start_cell():
    tape = Tape("_", "S")
    assert len(tape) == 1
    assert tape.last is tape.cursor


def test_write_returns_previous_symbol():
    tape = Tape("_", "_", ["0", "1", "0"])
    assert tape.write("1") == "_"
    assert tape.read() == "1"
    assert tape.write("0") == "1"
    assert tape.to_sequence() == ["0", "0", "1", "0"]


def test_read_and_write_never_materialize_cells():
    tape = Tape("_", "S", ["1"])
    tape.read()
    tape.write("x")
    assert len(tape) == 2


def test_step_right_walks_existing_cells_then_grows():
    tape = Tape("_", "S", ["0", "1"])
    assert tape.step_right() == "0"
    assert tape.step_right() == "1"
    assert len(tape) == 3
    assert tape.step_right() == "_"
    assert len(tape) == 4
    assert tape.position == 3
    assert tape.cursor is tape.last
    assert tape.to_sequence() == ["S", "0", "1", "_"]


def test_step_right_then_left_round_trip():
    tape = Tape("_", "S", ["0", "1", "1"])
    tape.step_right()
    tape.step_right()
    before = (tape.read(), tape.position)
    tape.step_right()
    assert tape.step_left() == before[0]
    assert tape.position == before[1]


def test_round_trip_past_last_cell_keeps_new_cell():
    tape = Tape("_", "S", ["1"])
    tape.step_right()
    tape.step_right()
    tape.step_left()
    assert tape.read() == "1"
    assert tape.step_right() == "_"
    assert len(tape) == 3


def test_step_left_at_start_cell_is_a_boundary_violation():
    tape = Tape("_", "S", ["1"])
    with pytest.raises(BoundaryViolation) as info:
        tape.step_left()
    assert info.value.position == 0
    assert tape.position == 0
    assert tape.read() == "S"


def test_step_left_after_returning_to_start():
    tape = Tape("_", "S", ["1"])
    tape.step_right()
    tape.step_left()
    with pytest.raises(BoundaryViolation):
        tape.step_left()


def test_to_sequence_leaves_cursor_in_place():
    tape = Tape("_", "S", ["0", "1", "0"])
    tape.step_right()
    tape.step_right()
    first = tape.to_sequence()
    second = tape.to_sequence()
    assert first == second
    assert tape.read() == "1"
    assert tape.position == 2
    assert len(tape) == 4


def test_iteration_matches_sequence():
    tape = Tape("_", "S", ["a", "b"])
    assert list(tape) == ["S", "a", "b"]


def test_str_marks_cursor():
    tape = Tape("_", "S", ["1"])
    assert str(tape) == "|> S <|  1  |"
    tape.step_right()
    assert str(tape) == "|  S  |> 1 <|"


def test_cell_indices_and_links():
    tape = Tape("_", "S", ["a", "b"])
    cells = tape.cells()
    assert [c.index for c in cells] == [0, 1, 2]
    assert cells[0].left is None
    assert cells[0].right is cells[1]
    assert cells[2].left is cells[1]
    assert cells[2].right is None


def test_right_link_does_not_keep_cell_alive():
    first = Cell("a")
    second = Cell("b", left=first)
    first.link_right(second)
    assert first.right is second
    del second
    assert first.right is None


def test_left_link_keeps_chain_alive():
    first = Cell("a")
    second = Cell("b", left=first)
    first.link_right(second)
    del first
    assert second.left.data == "a"

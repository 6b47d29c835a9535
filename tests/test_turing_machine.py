import io

import pytest
from rich.console import Console

from simulator.errors import BoundaryViolation, MachineError, UndefinedTransition
from simulator.tape import Tape
from simulator.turing_machine import Move, RunResult, Step, TuringMachine, run, run_and_snapshot


def flip_until_blank(state, symbol):
    if state != "scan":
        raise UndefinedTransition(state, symbol)
    if symbol == "_":
        return "done", symbol, None
    if symbol == "0":
        return "scan", "1", Move.RIGHT
    if symbol == "1":
        return "scan", "0", "R"
    raise UndefinedTransition(state, symbol)


def walk_left(state, symbol):
    return state, symbol, Move.LEFT


def test_run_returns_terminal_state():
    tape = Tape("_", "0", ["1", "1", "0"])
    assert run(flip_until_blank, "scan", {"done"}, tape) == "done"
    assert tape.to_sequence() == ["1", "0", "0", "1", "_"]


def test_terminal_start_state_halts_without_stepping():
    calls = []

    def transition(state, symbol):
        calls.append((state, symbol))
        return state, symbol, Move.RIGHT

    tape = Tape("_", "S", ["1"])
    machine = TuringMachine(transition, {"halt"})
    assert machine.run("halt", tape) == "halt"
    assert calls == []
    assert list(machine.trace("halt", tape)) == []


def test_trace_records_each_step():
    machine = TuringMachine(flip_until_blank, {"done"})
    steps = list(machine.trace("scan", Tape("_", "0", ["1"])))
    assert steps == [
        Step(0, "scan", "0", "1", Move.RIGHT, "scan"),
        Step(1, "scan", "1", "0", Move.RIGHT, "scan"),
        Step(2, "scan", "_", "_", Move.STAY, "done"),
    ]


def test_undefined_transition_is_raised_with_context():
    machine = TuringMachine(flip_until_blank, {"done"})
    tape = Tape("_", "0", ["x"])
    with pytest.raises(UndefinedTransition) as info:
        machine.run("scan", tape)
    error = info.value
    assert error.state == "scan"
    assert error.symbol == "x"
    assert error.position == 1
    assert error.step == 1


def test_boundary_violation_aborts_run():
    machine = TuringMachine(walk_left, {"never"})
    tape = Tape("_", "S", ["1", "1"])
    tape.step_right()
    with pytest.raises(BoundaryViolation) as info:
        machine.run("left", tape)
    assert info.value.state == "left"
    assert info.value.position == 0
    assert info.value.step == 1


def test_run_and_snapshot_on_halt():
    result = run_and_snapshot(flip_until_blank, "scan", {"done"}, Tape("_", "_", ["0", "1"]))
    assert isinstance(result, RunResult)
    assert result.halted
    assert result.state == "done"
    assert result.tape == ["_"] + ["0", "1"]
    assert result.steps == 1


def test_run_and_snapshot_reports_errors_as_results():
    machine = TuringMachine(walk_left, {"never"})
    result = machine.run_and_snapshot("left", Tape("_", "S", ["1"]))
    assert not result.halted
    assert isinstance(result.error, BoundaryViolation)
    assert result.state == "left"
    assert result.steps == 0
    assert result.tape == ["S", "1"]

    result = TuringMachine(flip_until_blank, {"done"}).run_and_snapshot("scan", Tape("_", "0", ["?"]))
    assert isinstance(result.error, UndefinedTransition)
    assert result.tape == ["1", "?"]
    assert result.steps == 1


def test_runs_are_deterministic():
    machine = TuringMachine(flip_until_blank, {"done"})
    first, second = Tape("_", "0", ["1", "0", "1"]), Tape("_", "0", ["1", "0", "1"])
    assert list(machine.trace("scan", first)) == list(machine.trace("scan", second))
    assert first.to_sequence() == second.to_sequence()


def test_run_until_end_builds_its_own_tape():
    machine = TuringMachine(flip_until_blank, {"done"})
    assert machine.run_until_end("scan", "_", "1", ["0"]) == ("done", ["0", "1", "_"])


def test_debug_run_prints_every_step():
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None)
    machine = TuringMachine(flip_until_blank, {"done"}, name="flipper")
    assert machine.debug_run("scan", Tape("_", "0"), console=console) == "done"
    output = buffer.getvalue()
    assert "flipper" in output
    assert "#0 scan read 0 wrote 1 move R -> scan" in output
    assert "|  1  |> _ <|" in output
    assert "Halted in done" in output


def test_machine_error_message_includes_context():
    error = BoundaryViolation("off the tape").annotate(state="q1", position=0, step=7)
    assert str(error) == "off the tape (state=q1, position=0, step=7)"
    assert isinstance(error, MachineError)


def test_annotate_keeps_values_set_by_raiser():
    error = UndefinedTransition("q", "1", position=3)
    error.annotate(state="other", position=9, step=2)
    assert error.state == "q"
    assert error.position == 3
    assert error.step == 2

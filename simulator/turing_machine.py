from dataclasses import dataclass
from enum import Enum

from rich.console import Console

from simulator.errors import MachineError
from simulator.tape import Tape


class Move(Enum):
    LEFT = "L"
    RIGHT = "R"
    STAY = "S"


@dataclass(frozen=True)
class Step:
    """One applied transition."""
    index: int
    state: object
    read: object
    write: object
    move: Move
    next_state: object


@dataclass
class RunResult:
    state: object
    tape: list
    steps: int
    error: MachineError = None

    @property
    def halted(self):
        """True when the run stopped in a terminal state."""
        return self.error is None


def format_step(record):
    return (f"#{record.index} {record.state} read {record.read!s} "
            f"wrote {record.write!s} move {record.move.value} -> {record.next_state}")


def print_step(console, record, tape):
    console.print(format_step(record), markup=False, highlight=False)
    console.print(str(tape), markup=False, highlight=False)


class TuringMachine:
    """Drives a transition function over a tape until a terminal state is reached.

    ``transition(state, symbol)`` must return ``(next_state, symbol_to_write, move)``
    where ``move`` is a :class:`Move` (or its letter) or ``None`` to stay put. It
    raises :class:`~simulator.errors.UndefinedTransition` for pairs it does not
    handle. The machine never inspects states beyond testing membership in
    ``terminal_states``.
    """

    def __init__(self, transition, terminal_states, name=None):
        self.transition = transition
        self.terminal_states = frozenset(terminal_states)
        self.name = name or getattr(transition, "__name__", type(transition).__name__)

    def is_terminal(self, state):
        return state in self.terminal_states

    def step(self, state, tape: Tape, index=0) -> Step:
        symbol = tape.read()
        try:
            next_state, new_symbol, move = self.transition(state, symbol)
        except MachineError as e:
            raise e.annotate(state=state, position=tape.position, step=index)

        move = Move.STAY if move is None else Move(move)
        tape.write(new_symbol)

        try:
            if move is Move.LEFT:
                tape.step_left()
            elif move is Move.RIGHT:
                tape.step_right()
        except MachineError as e:
            raise e.annotate(state=state, position=tape.position, step=index)

        return Step(index, state, symbol, new_symbol, move, next_state)

    def trace(self, start_state, tape: Tape):
        """Yield every step taken until the adopted state is terminal."""
        state = start_state
        index = 0
        while not self.is_terminal(state):
            record = self.step(state, tape, index)
            state = record.next_state
            index += 1
            yield record

    def run(self, start_state, tape: Tape):
        """Run to completion and return the terminal state.

        There is no step budget: a machine that never reaches a terminal state
        never returns.
        """
        state = start_state
        for record in self.trace(start_state, tape):
            state = record.next_state
        return state

    def run_and_snapshot(self, start_state, tape: Tape) -> RunResult:
        """Run to completion, returning the outcome and the tape contents.

        Machine errors are reported in ``RunResult.error`` rather than raised; in
        that case ``state`` is the state the machine was in when it failed.
        """
        state = start_state
        steps = 0
        error = None
        try:
            for record in self.trace(start_state, tape):
                state = record.next_state
                steps += 1
        except MachineError as e:
            error = e
        return RunResult(state, tape.to_sequence(), steps, error)

    def run_until_end(self, start_state, empty, start, initial=()):
        tape = Tape(empty, start, initial)
        end_state = self.run(start_state, tape)
        return end_state, tape.to_sequence()

    def debug_run(self, start_state, tape: Tape, console=None):
        """Like :meth:`run`, printing the tape and state after every step."""
        console = console or Console()
        console.print(f"[bold]{self.name}[/bold] start: {start_state}")
        console.print(str(tape), markup=False, highlight=False)
        state = start_state
        for record in self.trace(start_state, tape):
            state = record.next_state
            print_step(console, record, tape)
        console.print(f"[green]Halted in {state}[/green]")
        return state


def run(transition, initial_state, terminal_states, tape):
    return TuringMachine(transition, terminal_states).run(initial_state, tape)


def run_and_snapshot(transition, initial_state, terminal_states, tape):
    return TuringMachine(transition, terminal_states).run_and_snapshot(initial_state, tape)

"""Replace every ``1`` on the tape with ``0`` in a single left-to-right pass."""
from enum import Enum

from machines.exactly_two import Alphabet, parse_symbols
from simulator.tape import Tape
from simulator.transition_table import MachineDefinition, TransitionTable
from simulator.turing_machine import Move


class States(Enum):
    START = "start"
    STARTED = "started"
    VALID_END = "valid_end"

    def __str__(self):
        return self.name


A = Alphabet
S = States

TERMINAL_STATES = {S.VALID_END}
START = S.START
EMPTY = A.DELTA
START_SYMBOL = A.DELTA


def build_table():
    table = TransitionTable(list(States), list(Alphabet))
    for symbol in Alphabet:
        table.add_transition(S.START, symbol, symbol, Move.RIGHT, S.STARTED)
    table.add_transition(S.STARTED, A.ZERO, A.ZERO, Move.RIGHT, S.STARTED)
    table.add_transition(S.STARTED, A.ONE, A.ZERO, Move.RIGHT, S.STARTED)
    table.add_transition(S.STARTED, A.DELTA, A.DELTA, Move.STAY, S.VALID_END)
    return table


TABLE = build_table()
DEFINITION = MachineDefinition(
    name="replace_ones",
    table=TABLE,
    start=START,
    terminal=sorted(TERMINAL_STATES, key=lambda s: s.value),
    empty=EMPTY,
    start_symbol=START_SYMBOL,
    description="Replace every 1 with 0",
)
MACHINE = DEFINITION.machine()


def tape_from_input(text):
    return Tape(EMPTY, START_SYMBOL, parse_symbols(text))

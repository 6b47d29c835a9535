"""Accept inputs that contain exactly two ``1`` symbols."""
from enum import Enum

from simulator.errors import UndefinedTransition
from simulator.tape import Tape
from simulator.turing_machine import Move, TuringMachine


class Alphabet(Enum):
    DELTA = "_"
    ZERO = "0"
    ONE = "1"

    def __str__(self):
        return self.value


class States(Enum):
    START = "start"
    FOUND_NONE = "found_none"
    FOUND_FIRST = "found_first"
    FOUND_SECOND = "found_second"
    FOUND_MORE = "found_more"
    INVALID_END = "invalid_end"
    VALID_END = "valid_end"

    def __str__(self):
        return self.name


A = Alphabet
S = States

ACCEPT_STATES = {S.VALID_END}
REJECT_STATES = {S.FOUND_MORE, S.INVALID_END}
TERMINAL_STATES = ACCEPT_STATES | REJECT_STATES
START = S.START
EMPTY = A.DELTA
START_SYMBOL = A.DELTA

_COUNT_ONE = {
    S.FOUND_NONE: S.FOUND_FIRST,
    S.FOUND_FIRST: S.FOUND_SECOND,
    S.FOUND_SECOND: S.FOUND_MORE,
    S.FOUND_MORE: S.FOUND_MORE,
}


def transition(state, symbol):
    if state is S.START:
        return S.FOUND_NONE, symbol, Move.RIGHT

    if state not in _COUNT_ONE:
        raise UndefinedTransition(state, symbol, f"{state} is terminal and has no transitions")

    if symbol is A.ZERO:
        return state, symbol, Move.RIGHT
    if symbol is A.ONE:
        return _COUNT_ONE[state], symbol, Move.RIGHT
    if symbol is A.DELTA:
        if state is S.FOUND_SECOND:
            return S.VALID_END, symbol, None
        return S.INVALID_END, symbol, None

    raise UndefinedTransition(state, symbol)


MACHINE = TuringMachine(transition, TERMINAL_STATES, name="exactly_two")

_SYMBOLS = {a.value: a for a in Alphabet}


def parse_symbols(text):
    try:
        return [_SYMBOLS[c] for c in text.strip()]
    except KeyError as e:
        raise ValueError(f"Invalid symbol {e.args[0]!r}, expected one of {', '.join(_SYMBOLS)}") from None


def tape_from_input(text):
    return Tape(EMPTY, START_SYMBOL, parse_symbols(text))


def accepts(state):
    return state in ACCEPT_STATES

"""Decide whether ``k`` divides ``n``.

The tape starts as ``S _ 1^n _ 1^k _``. The machine repeatedly marks one ``1``
of the denominator and one ``1`` of the numerator until either runs out, then
writes its verdict after the input:

    ``S _ 1^n _ 1^k _ h _ 1``   if k divides n
    ``S _ 1^n _ 1^k _ h _ 0``   otherwise

``_`` is an empty cell, ``h`` the halt marker and ``S`` the start token.
"""
from enum import Enum

from simulator.errors import UndefinedTransition
from simulator.tape import Tape
from simulator.turing_machine import Move, TuringMachine


class Alphabet(Enum):
    START_TOKEN = "S"
    DELTA = "_"
    ZERO = "0"
    ONE = "1"
    MARKED_ONE = "!"
    HALT = "h"

    def __str__(self):
        return self.value


class States(Enum):
    START = "start"
    MOVING_TO_CENTER = "moving_to_center"
    CHECKING_DIV_BY_NULL = "checking_div_by_null"
    CYCLE_START = "cycle_start"
    CYCLE_END = "cycle_end"
    CHECKING_LEFTOVERS = "checking_leftovers"
    FOUND_LEFTOVERS = "found_leftovers"
    SEARCHING_DEN = "searching_den"
    SEARCHING_NUM = "searching_num"
    FOUND_1_IN_DENOMINATOR = "found_1_in_denominator"
    FOUND_1_IN_NUMERATOR = "found_1_in_numerator"
    NO_LEFTOVERS_P1 = "no_leftovers_p1"
    NO_LEFTOVERS_P2 = "no_leftovers_p2"
    LEFTOVER_P1 = "leftover_p1"
    LEFTOVER_P2 = "leftover_p2"
    DIVISIBLE_RETURN = "divisible_return"
    DIV_HALT = "div_halt"
    DIV_DELTA = "div_delta"
    DIV_OUTPUT = "div_output"
    NON_DIVISIBLE_RETURN = "non_divisible_return"
    NON_DIV_HALT = "non_div_halt"
    NON_DIV_DELTA = "non_div_delta"
    NON_DIV_OUTPUT = "non_div_output"
    DIV_BY_NULL = "div_by_null"
    INVALID_SYNTAX = "invalid_syntax"
    DONE = "done"

    def __str__(self):
        return self.name


A = Alphabet
S = States

# INVALID_SYNTAX is a designed sink for malformed input, not an error.
TERMINAL_STATES = {S.INVALID_SYNTAX, S.DIV_BY_NULL, S.DONE}
START = S.START
EMPTY = A.DELTA
START_SYMBOL = A.START_TOKEN

# Fixed epilogue: (next state, symbol to write, move)
_OUTPUT = {
    S.DIVISIBLE_RETURN: (S.DIV_HALT, None, Move.STAY),
    S.DIV_HALT: (S.DIV_DELTA, A.HALT, Move.RIGHT),
    S.DIV_DELTA: (S.DIV_OUTPUT, A.DELTA, Move.RIGHT),
    S.DIV_OUTPUT: (S.DONE, A.ONE, Move.RIGHT),
    S.NON_DIVISIBLE_RETURN: (S.NON_DIV_HALT, None, Move.STAY),
    S.NON_DIV_HALT: (S.NON_DIV_DELTA, A.HALT, Move.RIGHT),
    S.NON_DIV_DELTA: (S.NON_DIV_OUTPUT, A.DELTA, Move.RIGHT),
    S.NON_DIV_OUTPUT: (S.DONE, A.ZERO, Move.RIGHT),
}

# Unmark while walking right, switching state at the next delta
_UNMARK = {
    S.LEFTOVER_P1: S.LEFTOVER_P2,
    S.LEFTOVER_P2: S.NON_DIVISIBLE_RETURN,
    S.NO_LEFTOVERS_P1: S.NO_LEFTOVERS_P2,
    S.NO_LEFTOVERS_P2: S.DIVISIBLE_RETURN,
}


def transition(state, t):
    if state is S.START:
        if t is A.DELTA:
            return S.MOVING_TO_CENTER, t, Move.RIGHT
        return S.START, t, Move.RIGHT

    if state is S.MOVING_TO_CENTER:
        if t is A.ONE:
            return S.MOVING_TO_CENTER, t, Move.RIGHT
        if t is A.DELTA:
            return S.CHECKING_DIV_BY_NULL, t, Move.RIGHT
        return S.INVALID_SYNTAX, t, Move.STAY

    if state is S.CHECKING_DIV_BY_NULL:
        if t is A.DELTA:
            return S.DIV_BY_NULL, t, Move.STAY
        return S.CYCLE_START, t, Move.LEFT

    if state is S.CYCLE_START:
        return S.CHECKING_LEFTOVERS, t, Move.LEFT

    if state is S.CHECKING_LEFTOVERS:
        if t is A.DELTA:
            return S.NO_LEFTOVERS_P1, t, Move.RIGHT
        if t is A.ONE:
            return S.FOUND_LEFTOVERS, t, Move.RIGHT
        return S.CHECKING_LEFTOVERS, t, Move.LEFT

    if state is S.FOUND_LEFTOVERS:
        if t is A.DELTA:
            return S.SEARCHING_DEN, t, Move.RIGHT
        return S.FOUND_LEFTOVERS, t, Move.RIGHT

    if state is S.SEARCHING_DEN:
        if t is A.DELTA:
            return S.CYCLE_END, t, Move.LEFT
        if t is A.ONE:
            return S.FOUND_1_IN_DENOMINATOR, A.MARKED_ONE, Move.LEFT
        return S.SEARCHING_DEN, t, Move.RIGHT

    if state is S.FOUND_1_IN_DENOMINATOR:
        if t is A.DELTA:
            return S.SEARCHING_NUM, t, Move.LEFT
        return S.FOUND_1_IN_DENOMINATOR, t, Move.LEFT

    if state is S.SEARCHING_NUM:
        if t is A.DELTA:
            return S.LEFTOVER_P1, t, Move.RIGHT
        if t is A.ONE:
            return S.FOUND_1_IN_NUMERATOR, A.MARKED_ONE, Move.RIGHT
        return S.SEARCHING_NUM, t, Move.LEFT

    if state is S.FOUND_1_IN_NUMERATOR:
        if t is A.DELTA:
            return S.SEARCHING_DEN, t, Move.RIGHT
        return S.FOUND_1_IN_NUMERATOR, t, Move.RIGHT

    if state is S.CYCLE_END:
        if t is A.DELTA:
            return S.CYCLE_START, t, Move.STAY
        if t is A.MARKED_ONE:
            return S.CYCLE_END, A.ONE, Move.LEFT
        # every denominator 1 is marked at this point
        raise UndefinedTransition(state, t, "Unmarked symbol while closing a cycle")

    if state in _UNMARK:
        if t is A.DELTA:
            return _UNMARK[state], t, Move.RIGHT
        if t is A.MARKED_ONE:
            return state, A.ONE, Move.RIGHT
        return state, t, Move.RIGHT

    if state in _OUTPUT:
        next_state, write, move = _OUTPUT[state]
        return next_state, t if write is None else write, move

    raise UndefinedTransition(state, t)


MACHINE = TuringMachine(transition, TERMINAL_STATES, name="divisibility")


def initial_symbols(n, k):
    if n < 0 or k < 0:
        raise ValueError("n and k must be non-negative integers")
    return [A.DELTA] + [A.ONE] * n + [A.DELTA] + [A.ONE] * k + [A.DELTA]


def make_tape(n, k):
    return Tape(EMPTY, START_SYMBOL, initial_symbols(n, k))


def tape_from_input(text):
    """Build the tape from ``"n k"`` (comma separation is accepted too)."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError("Expected two integers: <n> <k>")
    try:
        n, k = (int(p) for p in parts)
    except ValueError:
        raise ValueError(f"Not a pair of integers: {text!r}") from None
    return make_tape(n, k)


def verdict(sequence):
    """Return True/False from the output written after ``h _``, or None if there is none."""
    for i in range(len(sequence) - 2):
        if sequence[i] is A.HALT and sequence[i + 1] is A.DELTA:
            return sequence[i + 2] is A.ONE
    return None

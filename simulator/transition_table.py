import hashlib
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import numpy as np

from simulator.errors import UndefinedTransition
from simulator.turing_machine import Move, TuringMachine

UNDEFINED_ROW = (-1, 0, -1)
DIRECTION_CODES = {Move.LEFT: 0, Move.RIGHT: 1, Move.STAY: 2}


def _label(value):
    if isinstance(value, Enum) and type(value).__str__ is Enum.__str__:
        return value.name
    return str(value)


class TransitionTable:
    """A transition function stored as an explicit (state, symbol) lookup."""

    def __init__(self, states, symbols):
        self.states = list(states)
        self.symbols = list(symbols)
        self.transitions = {}

    def add_transition(self, state, symbol, new_symbol, direction, new_state):
        if state not in self.states:
            raise ValueError(f"Unknown state: {state}")
        if symbol not in self.symbols or new_symbol not in self.symbols:
            raise ValueError(f"Unknown symbol in transition ({state}, {symbol}) -> {new_symbol}")
        if new_state not in self.states:
            raise ValueError(f"Unknown state: {new_state}")
        self.transitions[(state, symbol)] = (new_symbol, Move(direction), new_state)

    def __call__(self, state, symbol):
        key = (state, symbol)
        if key not in self.transitions:
            raise UndefinedTransition(state, symbol)
        new_symbol, direction, new_state = self.transitions[key]
        return new_state, new_symbol, direction

    def __contains__(self, key):
        return key in self.transitions

    def __len__(self):
        return len(self.transitions)

    def serialize(self):
        """Dense int32 array, one ``(symbol, direction, state)`` row per state/symbol pair."""
        rows = []
        for state in self.states:
            for symbol in self.symbols:
                key = (state, symbol)
                if key in self.transitions:
                    new_symbol, direction, new_state = self.transitions[key]
                    rows.append((
                        self.symbols.index(new_symbol),
                        DIRECTION_CODES[direction],
                        self.states.index(new_state),
                    ))
                else:
                    rows.append(UNDEFINED_ROW)
        return np.array(rows, dtype=np.int32).reshape(len(rows), 3)

    def to_rules(self):
        rules = []
        for (state, symbol), (new_symbol, direction, new_state) in self.transitions.items():
            rules.append([_label(state), _label(symbol), _label(new_symbol), direction.value, _label(new_state)])
        return rules

    def to_dict(self):
        return {
            "states": [_label(s) for s in self.states],
            "symbols": [_label(s) for s in self.symbols],
            "rules": self.to_rules(),
        }

    @classmethod
    def from_dict(cls, data):
        table = cls(data["states"], data["symbols"])
        for state, symbol, new_symbol, direction, new_state in data["rules"]:
            table.add_transition(state, symbol, new_symbol, direction, new_state)
        return table

    def ruleset_hash(self):
        """Hash the rules deterministically."""
        rules_json = json.dumps(sorted(self.to_rules()), sort_keys=True)
        return hashlib.sha256(rules_json.encode("utf-8")).hexdigest()


@dataclass
class MachineDefinition:
    """A transition table together with what is needed to run it."""
    name: str
    table: TransitionTable
    start: object
    terminal: list
    empty: object
    start_symbol: object
    description: str = ""
    extra: dict = field(default_factory=dict)

    def machine(self):
        return TuringMachine(self.table, self.terminal, name=self.name)

    def to_dict(self):
        data = {
            "name": self.name,
            "description": self.description,
            "start": _label(self.start),
            "terminal": [_label(s) for s in self.terminal],
            "empty": _label(self.empty),
            "start_symbol": _label(self.start_symbol),
        }
        data.update(self.table.to_dict())
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data):
        known = {"name", "description", "start", "terminal", "empty", "start_symbol", "states", "symbols", "rules"}
        missing = [k for k in ("start", "terminal", "empty", "states", "symbols", "rules") if k not in data]
        if missing:
            raise ValueError(f"Machine definition missing keys: {', '.join(missing)}")

        table = TransitionTable.from_dict(data)
        for state in [data["start"]] + list(data["terminal"]):
            if state not in table.states:
                raise ValueError(f"Unknown state: {state}")
        for symbol in (data["empty"], data.get("start_symbol", data["empty"])):
            if symbol not in table.symbols:
                raise ValueError(f"Unknown symbol: {symbol}")

        return cls(
            name=data.get("name", "unnamed"),
            table=table,
            start=data["start"],
            terminal=list(data["terminal"]),
            empty=data["empty"],
            start_symbol=data.get("start_symbol", data["empty"]),
            description=data.get("description", ""),
            extra={k: v for k, v in data.items() if k not in known},
        )


def load_definition(path):
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transition table not found at: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return MachineDefinition.from_dict(json.load(f))


def save_definition(definition, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(definition.to_dict(), f, indent=2)
    return path

import weakref

from simulator.errors import BoundaryViolation


class Cell:
    """One tape position.

    A cell keeps the cell on its left alive. The link to the right is a weak
    reference, so the chain is only owned from right to left.
    """

    __slots__ = ("data", "left", "index", "_right", "__weakref__")

    def __init__(self, data, left=None):
        self.data = data
        self.left = left
        self.index = 0 if left is None else left.index + 1
        self._right = None

    @property
    def right(self):
        if self._right is None:
            return None
        return self._right()

    def link_right(self, cell):
        self._right = weakref.ref(cell)


class Tape:
    """A tape bounded on the left by its start cell and growing to the right on demand."""

    def __init__(self, empty, start, initial=()):
        self.empty = empty
        first = Cell(start)
        self.last = first
        self.cursor = first
        for symbol in initial:
            self._append(symbol)

    def _append(self, symbol):
        cell = Cell(symbol, left=self.last)
        self.last.link_right(cell)
        self.last = cell
        return cell

    @property
    def position(self):
        return self.cursor.index

    def read(self):
        return self.cursor.data

    def write(self, value):
        previous = self.cursor.data
        self.cursor.data = value
        return previous

    def step_right(self):
        right = self.cursor.right
        if right is None:
            right = self._append(self.empty)
        self.cursor = right
        return self.cursor.data

    def step_left(self):
        left = self.cursor.left
        if left is None:
            raise BoundaryViolation("Cursor moved left of the start cell", position=self.cursor.index)
        self.cursor = left
        return self.cursor.data

    def cells(self):
        """Return every materialized cell, start cell first."""
        chain = []
        cell = self.last
        while cell is not None:
            chain.append(cell)
            cell = cell.left
        chain.reverse()
        return chain

    def to_sequence(self):
        """Snapshot of all symbols from the start cell to the last materialized cell."""
        return [cell.data for cell in self.cells()]

    def __iter__(self):
        return iter(self.to_sequence())

    def __len__(self):
        return self.last.index + 1

    def __str__(self):
        parts = []
        for cell in self.cells():
            if cell is self.cursor:
                parts.append(f"> {cell.data!s} <")
            else:
                parts.append(f"  {cell.data!s}  ")
        return "|" + "|".join(parts) + "|"

    def __repr__(self):
        return f"Tape(position={self.position}, cells={len(self)}, empty={self.empty!r})"

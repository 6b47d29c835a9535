class MachineError(Exception):
    """Base class for errors that stop a machine run.

    These describe a badly defined machine, not a transient fault, so a run
    that raises one is never retried.
    """

    def __init__(self, message, state=None, position=None, step=None):
        super().__init__(message)
        self.state = state
        self.position = position
        self.step = step

    def annotate(self, state=None, position=None, step=None):
        """Fill in run context the raiser did not know about."""
        if self.state is None:
            self.state = state
        if self.position is None:
            self.position = position
        if self.step is None:
            self.step = step
        return self

    def __str__(self):
        message = super().__str__()
        context = []
        if self.state is not None:
            context.append(f"state={self.state}")
        if self.position is not None:
            context.append(f"position={self.position}")
        if self.step is not None:
            context.append(f"step={self.step}")
        if context:
            return f"{message} ({', '.join(context)})"
        return message


class BoundaryViolation(MachineError):
    """The cursor tried to move left of the start cell."""


class UndefinedTransition(MachineError):
    """A transition was asked for a (state, symbol) pair it does not define."""

    def __init__(self, state, symbol, message=None, position=None, step=None):
        if message is None:
            message = f"No transition defined for ({state}, {symbol})"
        super().__init__(message, state=state, position=position, step=step)
        self.symbol = symbol

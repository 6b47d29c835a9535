# tools/simulate_table.py

import argparse
import sys

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.config_loader import DEFAULT_CONFIG
from logger.logger import JSONLogger
from simulator.errors import MachineError
from simulator.tape import Tape
from simulator.transition_table import load_definition

console = Console()


# === Bounded Simulation ===
def simulate_single(machine, start_state, tape, max_steps=0, on_step=None):
    """Run ``machine`` on ``tape`` for at most ``max_steps`` steps (0 = no limit).

    Returns ``(state, steps, halted, error)``. ``halted`` is only True when a
    terminal state was reached; running out of steps leaves it False with no error.
    ``on_step(record, tape)`` is called after every applied transition.
    """
    state = start_state
    steps = 0
    try:
        for record in machine.trace(start_state, tape):
            state = record.next_state
            steps += 1
            if on_step is not None:
                on_step(record, tape)
            if max_steps and steps >= max_steps and not machine.is_terminal(state):
                return state, steps, False, None
    except MachineError as e:
        return state, steps, False, e
    return state, steps, True, None


def make_entry(name, input_text, state, steps, halted, error, tape):
    return {
        "machine": name,
        "input": input_text,
        "final_state": str(state),
        "steps_taken": steps,
        "halted": halted,
        "error": None if error is None else f"{type(error).__name__}: {error}",
        "tape": [str(s) for s in tape.to_sequence()],
    }


def parse_input(text, symbols):
    """Split ``text`` into table symbols: on whitespace if present, else per character."""
    tokens = text.split() if any(c.isspace() for c in text.strip()) else list(text.strip())
    unknown = [t for t in tokens if t not in symbols]
    if unknown:
        raise ValueError(f"Unknown symbols {unknown}, table alphabet is {symbols}")
    return tokens


def simulate_table(table_path, inputs, max_steps=0, logger=None):
    definition = load_definition(table_path)
    machine = definition.machine()
    results = []

    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
    ) as progress:
        task = progress.add_task(f"[cyan]Simulating {definition.name}...", total=len(inputs))

        for input_text in inputs:
            tape = Tape(definition.empty, definition.start_symbol, parse_input(input_text, definition.table.symbols))
            state, steps, halted, error = simulate_single(machine, definition.start, tape, max_steps)
            entry = make_entry(definition.name, input_text, state, steps, halted, error, tape)
            results.append(entry)
            if logger is not None:
                logger.log_result(entry)
            progress.update(task, advance=1)

    return results


def print_results(results):
    for entry in results:
        color = "green" if entry["halted"] else "red"
        console.print(f"[{color}]{entry['machine']}[/{color}] {entry['input']!r} -> {entry['final_state']} "
                      f"after {entry['steps_taken']:,} steps")
        console.print("  " + " ".join(entry["tape"]), markup=False, highlight=False)
        if entry["error"]:
            console.print(f"  [red]{entry['error']}[/red]")


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run a JSON transition table on one or more inputs.")
    parser.add_argument("--table", required=True, help="Path to the transition table JSON file")
    parser.add_argument("--input", action="append", required=True, help="Tape input (repeatable)")
    parser.add_argument("--max_steps", type=int, default=0, help="Step budget per input (0 = unbounded)")
    parser.add_argument("--output", default=DEFAULT_CONFIG["output_directory"], help="Directory for JSON lines logs")
    parser.add_argument("--no_log", action="store_true", help="Do not write JSON lines logs")
    args = parser.parse_args(argv)

    logger = None if args.no_log else JSONLogger(args.output, DEFAULT_CONFIG["log_file_prefix"])
    results = simulate_table(args.table, args.input, max_steps=args.max_steps, logger=logger)
    print_results(results)
    return 0 if all(entry["halted"] for entry in results) else 1


if __name__ == "__main__":
    sys.exit(main())

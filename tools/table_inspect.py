import argparse

from rich.console import Console
from rich.table import Table

from simulator.transition_table import UNDEFINED_ROW, load_definition

console = Console()

DIRECTION_LETTERS = {0: "L", 1: "R", 2: "S"}


def compact_rows(table):
    """Yield ``(state, [action, ...])`` in compact ``<write><move><next>`` notation."""
    rules = table.serialize()
    width = len(table.symbols)
    for i, state in enumerate(table.states):
        actions = []
        for row in rules[i * width:(i + 1) * width]:
            if tuple(int(v) for v in row) == UNDEFINED_ROW:
                actions.append("---")
            else:
                write_symbol, dir_code, next_state = (int(v) for v in row)
                actions.append(f"{table.symbols[write_symbol]}{DIRECTION_LETTERS[dir_code]}{table.states[next_state]}")
        yield state, actions


def render_table(definition):
    table = definition.table
    terminal = set(definition.terminal)
    grid = Table(title=f"{definition.name} ({table.ruleset_hash()[:12]})", show_header=True, header_style="bold magenta")
    grid.add_column("State")
    for symbol in table.symbols:
        grid.add_column(str(symbol), justify="center")

    for state, actions in compact_rows(table):
        label = str(state)
        if state == definition.start:
            label = f"[cyan]{label}[/cyan] (start)"
        elif state in terminal:
            label = f"[green]{label}[/green] (halt)"
        grid.add_row(label, *actions)
    return grid


def latex_table(table):
    lines = [r"\begin{array}{c|" + "c" * len(table.symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join(f"\\text{{{s}}}" for s in table.symbols) + r" \\ \hline")
    for state, actions in compact_rows(table):
        lines.append(" & ".join([str(state)] + actions) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Transition Table Inspector")
    parser.add_argument("--table", required=True, help="Path to the transition table JSON file")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array")
    args = parser.parse_args(argv)

    definition = load_definition(args.table)
    if definition.description:
        console.print(f"[INFO] {definition.description}", markup=False)
    console.print(render_table(definition))
    if args.latex:
        console.print("\n=== LaTeX Table ===", markup=False)
        console.print(latex_table(definition.table), markup=False, highlight=False)


if __name__ == "__main__":
    main()

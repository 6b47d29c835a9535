# app.py

import argparse
import sys
from functools import partial
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm

from config.config_loader import load_config, save_config
from logger.logger import JSONLogger
from machines import divisibility, exactly_two, replace_ones
from simulator.transition_table import load_definition
from simulator.turing_machine import print_step
from tools.simulate_table import make_entry, print_results, simulate_single, simulate_table
from tools.table_inspect import latex_table, render_table

console = Console()

CONFIG_PATH = "config/runtime_config.json"

MACHINES = {
    "divisibility": divisibility,
    "exactly_two": exactly_two,
    "replace_ones": replace_ones,
}

INPUT_HINTS = {
    "divisibility": "Two integers n and k (e.g. 9 3)",
    "exactly_two": "A string of 0 and 1 (e.g. 00011)",
    "replace_ones": "A string of 0 and 1 (e.g. 00011)",
}


# === Utilities ===
def make_logger(config):
    if not config["log_runs"]:
        return None
    return JSONLogger(config["output_directory"], config["log_file_prefix"])


def run_example(name, input_text, config, logger=None, debug=False):
    """Run a built-in machine on ``input_text`` and return the logged entry."""
    module = MACHINES[name]
    tape = module.tape_from_input(input_text)

    on_step = None
    if debug:
        console.print(str(tape), markup=False, highlight=False)
        on_step = partial(print_step, console)
    state, steps, halted, error = simulate_single(
        module.MACHINE, module.START, tape, config["max_steps"], on_step=on_step
    )

    entry = make_entry(name, input_text, state, steps, halted, error, tape)
    if logger is not None:
        logger.log_result(entry)
    return entry


def show_entry(entry):
    print_results([entry])
    if entry["machine"] == "divisibility" and entry["halted"]:
        answer = divisibility.verdict([divisibility.Alphabet(s) for s in entry["tape"]])
        if answer is not None:
            console.print(f"[bold]{'Divisible' if answer else 'Not divisible'}[/bold]")
    elif entry["machine"] == "exactly_two" and entry["halted"]:
        accepted = entry["final_state"] == str(exactly_two.States.VALID_END)
        console.print(f"[bold]{'Accepted' if accepted else 'Rejected'}[/bold]")


def show_main_menu():
    console.print("\n[bold cyan]Tape Machine Simulator[/bold cyan]")
    console.print("[1] Run Example Machine")
    console.print("[2] Run Transition Table File")
    console.print("[3] Inspect Transition Table")
    console.print("[4] Edit Config")
    console.print("[5] Exit")


def handle_run_example(config, logger):
    console.print("\n[bold]Run Example Machine[/bold]")
    name = Prompt.ask("Machine", choices=list(MACHINES), default="divisibility")
    input_text = Prompt.ask(INPUT_HINTS[name])
    debug = Confirm.ask("Print every step?", default=config["debug"])

    try:
        entry = run_example(name, input_text, config, logger, debug=debug)
    except ValueError as e:
        console.print(f"[red]Invalid input: {e}[/red]")
        return
    show_entry(entry)


def detect_tables(config):
    tables_dir = Path(config["tables_directory"])
    if not tables_dir.exists():
        return []
    return sorted(tables_dir.glob("*.json"))


def choose_table(config):
    tables = detect_tables(config)
    if not tables:
        console.print(f"[red]No tables found in {config['tables_directory']}.[/red]")
        return None

    for idx, path in enumerate(tables):
        console.print(f"[{idx}] {path.stem}", markup=False)
    idx_choice = IntPrompt.ask("\nChoose a table by Index")
    if idx_choice < 0 or idx_choice >= len(tables):
        console.print("[red]Invalid choice.[/red]")
        return None
    return tables[idx_choice]


def handle_run_table(config, logger):
    console.print("\n[bold]Run Transition Table File[/bold]")
    path = choose_table(config)
    if path is None:
        return
    input_text = Prompt.ask("Tape input")
    try:
        results = simulate_table(path, [input_text], max_steps=config["max_steps"], logger=logger)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return
    print_results(results)


def handle_inspect(config):
    console.print("\n[bold]Inspect Transition Table[/bold]")
    path = choose_table(config)
    if path is None:
        return
    definition = load_definition(path)
    console.print(render_table(definition))
    if Confirm.ask("Print LaTeX?", default=False):
        console.print(latex_table(definition.table), markup=False, highlight=False)


def handle_edit_config(config):
    console.print("\n[bold]Edit Configuration[/bold]")

    max_steps = IntPrompt.ask("Max Steps (0 = unbounded)", default=config["max_steps"])
    debug = Confirm.ask("Print every step by default?", default=config["debug"])
    log_runs = Confirm.ask("Log runs?", default=config["log_runs"])
    output_directory = Prompt.ask("Log directory", default=config["output_directory"])

    config.update({
        "max_steps": max_steps,
        "debug": debug,
        "log_runs": log_runs,
        "output_directory": output_directory,
    })

    try:
        save_config(config, CONFIG_PATH)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Configuration not saved: {e}[/red]")
        return
    console.print("[green]Configuration updated successfully.[/green]")


def interactive_main(config):
    logger = make_logger(config)

    while True:
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5"], default="5")

        if choice == "1":
            handle_run_example(config, logger)
        elif choice == "2":
            handle_run_table(config, logger)
        elif choice == "3":
            handle_inspect(config)
        elif choice == "4":
            handle_edit_config(config)
            config = load_config(CONFIG_PATH, quiet=True)
            logger = make_logger(config)
        elif choice == "5":
            console.print("[bold green]Goodbye![/bold green]")
            break


# === CLI Mode for Automation ===
def cli_main(args, config):
    logger = make_logger(config)
    if args.max_steps is not None:
        config["max_steps"] = args.max_steps

    if args.table:
        results = simulate_table(args.table, [args.input], max_steps=config["max_steps"], logger=logger)
        print_results(results)
        return 0 if results[0]["halted"] else 1

    entry = run_example(args.machine, args.input, config, logger, debug=args.debug or config["debug"])
    show_entry(entry)
    return 0 if entry["halted"] else 1


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tape Machine Simulator")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path to runtime config JSON")
    parser.add_argument("--machine", choices=sorted(MACHINES), help="Run a built-in example machine")
    parser.add_argument("--table", help="Run a transition table JSON file")
    parser.add_argument("--input", help="Tape input for --machine or --table")
    parser.add_argument("--max_steps", type=int, help="Override the configured step budget (0 = unbounded)")
    parser.add_argument("--debug", action="store_true", help="Print the tape after every step")
    args = parser.parse_args(argv)

    config = load_config(args.config, quiet=True)

    if args.machine or args.table:
        if args.input is None:
            parser.error("--input is required with --machine or --table")
        try:
            return cli_main(args, config)
        except ValueError as e:
            console.print(f"[red]Invalid input: {e}[/red]")
            return 2

    interactive_main(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Typer CLI entrypoints."""

from __future__ import annotations

from typing import Annotated

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from impeval.config.settings import load_settings
from impeval.core.errors import ImpError
from impeval.core.state import State
from impeval.eval.fuel import check_monotone, least_fuel
from impeval.eval.result import Definite, Indeterminate
from impeval.eval.step import ceval_step
from impeval.logging_utils import configure_logging
from impeval.programs import Program, get_program, list_programs
from impeval.semantics.bigstep import check, from_run, fuel_of

app = typer.Typer(name="impeval", help="Fuel-bounded evaluator for the Imp language", add_completion=False)

INDETERMINATE_EXIT_CODE = 2

SetOption = Annotated[
    list[str] | None,
    typer.Option("--set", "-s", help="Initial binding NAME=VALUE (repeatable)."),
]


def _parse_bindings(values: list[str] | None) -> dict[str, int]:
    bindings: dict[str, int] = {}
    for raw in values or []:
        name, sep, value = raw.partition("=")
        name = name.strip()
        if not sep or not name:
            raise typer.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--set")
        try:
            bindings[name] = int(value.strip())
        except ValueError:
            raise typer.BadParameter(f"value for {name} is not an integer: {value!r}", param_hint="--set") from None
    return bindings


def _load_program(name: str, bindings: list[str] | None) -> tuple[Program, State]:
    try:
        program = get_program(name)
    except ImpError as exc:
        raise typer.BadParameter(str(exc), param_hint="NAME") from None
    overrides = _parse_bindings(bindings)
    return program, State.of({**program.initial.as_dict(), **overrides})


def _state_table(state: State) -> Table:
    table = Table()
    table.add_column("variable")
    table.add_column("value", justify="right")
    for name, value in state.bindings:
        table.add_row(name, str(value))
    return table


@app.command("programs")
def programs() -> None:
    """List the sample programs."""
    console = Console()
    table = Table(title="Sample programs")
    table.add_column("name", no_wrap=True)
    table.add_column("initial state", no_wrap=True)
    table.add_column("description")
    for program in list_programs():
        table.add_row(program.name, str(program.initial), program.description)
    console.print(table)


@app.command()
def run(
    name: Annotated[str, typer.Argument(help="Sample program name")],
    fuel: Annotated[int | None, typer.Option("--fuel", "-f", min=0, help="Recursion budget.")] = None,
    bindings: SetOption = None,
) -> None:
    """Run a sample program with a fixed budget."""
    configure_logging(profile="cli")
    settings = load_settings()
    program, initial = _load_program(name, bindings)
    budget = settings.default_fuel if fuel is None else fuel
    logger.info("run.start program={} fuel={} initial={}", program.name, budget, initial)

    console = Console()
    match ceval_step(initial, program.command, budget):
        case Definite(final):
            console.print(f"{program.name}: final state (fuel {budget})")
            console.print(_state_table(final))
        case Indeterminate():
            console.print(f"[yellow]indeterminate[/yellow]: {program.name} did not finish within fuel {budget}")
            raise typer.Exit(INDETERMINATE_EXIT_CODE)


@app.command("fuel")
def fuel_command(
    name: Annotated[str, typer.Argument(help="Sample program name")],
    limit: Annotated[int | None, typer.Option("--limit", "-l", min=1, help="Largest budget to try.")] = None,
    bindings: SetOption = None,
) -> None:
    """Find the least fuel that makes a sample program definite."""
    configure_logging(profile="cli")
    settings = load_settings()
    program, initial = _load_program(name, bindings)
    search_limit = settings.fuel_search_limit if limit is None else limit

    console = Console()
    least = least_fuel(initial, program.command, search_limit)
    if least is None:
        console.print(f"[yellow]indeterminate[/yellow]: {program.name} needs more than fuel {search_limit}")
        raise typer.Exit(INDETERMINATE_EXIT_CODE)
    console.print(f"{program.name}: least fuel {least}")


@app.command("check")
def check_command(
    name: Annotated[str, typer.Argument(help="Sample program name")],
    limit: Annotated[int | None, typer.Option("--limit", "-l", min=1, help="Largest budget to try.")] = None,
    bindings: SetOption = None,
) -> None:
    """Check monotonicity and agreement with the big-step semantics."""
    configure_logging(profile="cli")
    settings = load_settings()
    program, initial = _load_program(name, bindings)
    search_limit = settings.fuel_search_limit if limit is None else limit

    console = Console()
    least = least_fuel(initial, program.command, search_limit)
    ladder = {0, search_limit}
    step = 1
    while step < search_limit:
        ladder.add(step)
        step *= 2
    if least is not None:
        ladder.update({least - 1, least, least + 1})
        ladder.discard(search_limit + 1)

    try:
        check_monotone(initial, program.command, ladder)
    except ImpError as exc:
        logger.error("check.monotonicity program={} error={}", program.name, exc)
        console.print(f"[red]monotonicity violated:[/red] {exc}")
        raise typer.Exit(1) from None
    console.print(f"[green]monotone[/green] over {len(ladder)} budgets up to {search_limit}")

    if least is None:
        console.print(f"[yellow]indeterminate[/yellow]: {program.name} needs more than fuel {search_limit}")
        raise typer.Exit(INDETERMINATE_EXIT_CODE)

    try:
        derivation = from_run(initial, program.command, least)
        check(derivation)
    except ImpError as exc:
        logger.error("check.derivation program={} error={}", program.name, exc)
        console.print(f"[red]derivation rejected:[/red] {exc}")
        raise typer.Exit(1) from None

    replay = ceval_step(initial, program.command, fuel_of(derivation))
    if replay != Definite(derivation.final):
        console.print(f"[red]replay disagrees:[/red] {replay} vs {derivation.final}")
        raise typer.Exit(1)
    console.print(f"[green]agrees with big-step semantics[/green]: final state {derivation.final} at fuel {least}")


def main() -> None:
    app()

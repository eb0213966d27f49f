"""Typer CLI for workplan."""

from __future__ import annotations

import csv as csv_mod
import json
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from workplan.loader import load_csv, project_name_from_path
from workplan.logger import setup_logger
from workplan.models import RawTask, ResolvedTask
from workplan.resolver import build_dag, resolve_order
from workplan.scheduler import (
    PROJECT_TOTAL,
    project_span,
    resolve_schedule,
    resource_summary,
    validate_durations,
)

app = typer.Typer(
    name="workplan",
    help="Resolve task lists into working-day project schedules.",
    no_args_is_help=True,
)
console = Console()

FileArg = Annotated[Path, typer.Argument(help="Task CSV file (title,startDate,duration[,id,dependencies,resource])")]
VerboseOpt = Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log detail (-v, -vv)")]

EXPORT_HEADER = ["ID", "Task", "Resource", "Requested", "Start", "End", "Work days", "Calendar days"]


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


def _load(file: Path) -> list[RawTask]:
    """Read a task file, exiting with a red message on any problem."""
    if not file.exists():
        _fail(f"File not found: {file}")
    try:
        return load_csv(file)
    except (OSError, ValueError) as e:
        _fail(f"Error: {e}")


def _export_csv(resolved: list[ResolvedTask], path: str) -> None:
    with Path(path).open("w", newline="") as f:
        writer = csv_mod.writer(f)
        writer.writerow(EXPORT_HEADER)
        for r in resolved:
            writer.writerow([
                r.id,
                r.title,
                r.resource or "",
                r.start_date.isoformat(),
                r.effective_start.isoformat(),
                r.end_date.isoformat(),
                r.working_duration,
                r.calendar_duration,
            ])


def _summary_table(resolved: list[ResolvedTask]) -> Table:
    table = Table(title="Resources")
    table.add_column("Resource")
    table.add_column("First start")
    table.add_column("Last end")
    table.add_column("Work days", justify="right")
    table.add_column("Busy", justify="right")

    for row in resource_summary(resolved):
        is_total = row.name == PROJECT_TOTAL
        if is_total:
            table.add_section()
        table.add_row(
            escape(row.name),
            row.first_start.strftime("%a %b %d"),
            row.last_end.strftime("%a %b %d"),
            str(row.working_days),
            f"{row.utilization:.0%}",
            style="bold" if is_total else None,
        )
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def schedule(
    file: FileArg,
    as_json: Annotated[bool, typer.Option("--json", help="Print the schedule as JSON")] = False,
    csv: Annotated[Optional[str], typer.Option("--csv", help="Export schedule to CSV file")] = None,
    verbose: VerboseOpt = 0,
) -> None:
    """Resolve and display the schedule for a task file."""
    setup_logger(verbose)
    tasks = _load(file)
    if not tasks:
        if as_json:
            typer.echo("[]")
        else:
            console.print("No tasks to schedule.")
        return

    try:
        resolved = resolve_schedule(tasks)
    except ValueError as e:
        _fail(f"Error: {e}")

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in resolved], indent=2))
        return

    if csv:
        try:
            _export_csv(resolved, csv)
        except OSError as e:
            _fail(f"Error: {e}")
        console.print(f"[green]Exported {len(resolved)} tasks to {escape(csv)}[/green]")
        return

    table = Table(title=escape(project_name_from_path(file)))
    table.add_column("ID")
    table.add_column("Task")
    table.add_column("Resource")
    table.add_column("Requested")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Work days", justify="right")
    table.add_column("Calendar days", justify="right")

    for r in resolved:
        delayed = r.effective_start > r.start_date
        table.add_row(
            escape(r.id),
            escape(r.title),
            escape(r.resource) if r.resource else "-",
            r.start_date.strftime("%a %b %d"),
            r.effective_start.strftime("%a %b %d"),
            r.end_date.strftime("%a %b %d"),
            str(r.working_duration),
            str(r.calendar_duration),
            style="yellow" if delayed else None,
        )

    console.print(table)
    console.print(_summary_table(resolved))
    span = project_span(resolved)
    if span:
        first, last = span
        console.print(
            f"\n{len(resolved)} tasks, {first.isoformat()} to {last.isoformat()} "
            f"([bold]{(last - first).days + 1}[/bold] calendar days)"
        )


@app.command()
def check(file: FileArg, verbose: VerboseOpt = 0) -> None:
    """Validate a task file and print the processing order."""
    setup_logger(verbose)
    tasks = _load(file)
    if not tasks:
        console.print("No tasks to check.")
        return

    try:
        validate_durations(tasks)
        order = resolve_order(tasks)
    except ValueError as e:
        _fail(f"Error: {e}")

    console.print(f"[green]{len(tasks)} tasks OK.[/green] Processing order:")
    for n, i in enumerate(order, 1):
        console.print(f"  {n}. {escape(tasks[i].id)}")


@app.command()
def graph(file: FileArg) -> None:
    """Show each task's dependencies and dependants."""
    tasks = _load(file)
    if not tasks:
        console.print("No tasks to show.")
        return
    try:
        G = build_dag(tasks)
    except ValueError as e:
        _fail(f"Error: {e}")

    table = Table(title="Dependencies")
    table.add_column("ID")
    table.add_column("Depends on")
    table.add_column("Needed by")
    for task in tasks:
        table.add_row(
            escape(task.id),
            escape(", ".join(G.predecessors(task.id))) or "-",
            escape(", ".join(G.successors(task.id))) or "-",
        )
    console.print(table)


if __name__ == "__main__":
    app()

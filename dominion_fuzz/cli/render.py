"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..scoreboard import CaseTrace, RunSummary, SuiteHistory


def render_banner(title: str) -> RenderableType:
    return Panel(Text(title, justify="center", style="bold cyan"), box=box.DOUBLE, border_style="cyan")


def render_trace(trace: CaseTrace) -> RenderableType:
    """Return a panel listing every expectation of a retained case."""

    report = trace.report
    table = Table.grid(expand=True)
    table.add_column(justify="left")
    if report.error is not None:
        table.add_row(f"[bold red]TEST FAILED[/bold red]: {report.error}")
    for item in report.expectations:
        if item.passed:
            table.add_row(f"[green]TEST SUCCESSFULLY COMPLETED[/green]: {item.message}")
        else:
            table.add_row(
                f"[red]TEST FAILED[/red]: {item.message} "
                f"[dim](expected {item.expected}, got {item.actual})[/dim]"
            )
    for note in report.notes:
        table.add_row(f"[dim]{note}[/dim]")

    border = "green" if report.passed else "red"
    title = f"TEST Case #{trace.debug_index} (iteration {trace.iteration}, player {trace.player})"
    return Panel(table, title=title, border_style=border, box=box.ROUNDED)


def render_summary(summary: RunSummary) -> RenderableType:
    """Return the headline panel plus a breakdown of failed expectations."""

    style = "green" if summary.all_passed else "red"
    headline = Text(f"SUMMARY: {summary.headline()}", style=f"bold {style}", justify="center")
    components: list[RenderableType] = [headline]

    if summary.failure_counts:
        table = Table(box=box.SIMPLE, expand=True)
        table.add_column("Failed expectation", justify="left")
        table.add_column("Cases", justify="right")
        for message, count in summary.failure_counts.most_common():
            table.add_row(message, str(count))
        components.append(table)

    components.append(
        Text(
            f"{summary.generation_attempts} candidate state(s) generated for {summary.cases} case(s)",
            style="dim",
            justify="center",
        )
    )
    return Panel(Group(*components), border_style=style, box=box.ROUNDED)


def render_suite(history: SuiteHistory) -> RenderableType:
    """Return a table with one row per card plus a totals row."""

    table = Table(title="Random Test Suite", box=box.SIMPLE_HEAVY)
    table.add_column("Card", justify="left")
    table.add_column("Cases", justify="right")
    table.add_column("Passed", justify="right")
    table.add_column("Failed", justify="right")

    for run in history.runs:
        failed = f"[red]{run.failed}[/red]" if run.failed else "0"
        table.add_row(run.card, str(run.cases), str(run.passed), failed)

    totals = history.totals()
    table.add_section()
    table.add_row("[bold]Total[/bold]", str(totals.cases), str(totals.passed), str(totals.failed))
    return table


def render_card_list(rows: Sequence[tuple[str, int, int, bool]]) -> RenderableType:
    table = Table(title="Cards", box=box.SIMPLE)
    table.add_column("Card", justify="left")
    table.add_column("Id", justify="right")
    table.add_column("Cost", justify="right")
    table.add_column("Random test", justify="center")
    for name, card_id, cost, tested in rows:
        table.add_row(name, str(card_id), str(cost), "[green]yes[/green]" if tested else "[dim]-[/dim]")
    return table

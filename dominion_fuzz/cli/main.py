"""Typer entry-point wiring for the random-test CLI."""

from __future__ import annotations

import logging
import os
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from .. import harness
from ..cards import Card, cost_of
from ..generators import GenerationError
from ..scoreboard import RunSummary, SuiteHistory
from .render import render_banner, render_card_list, render_suite, render_summary, render_trace

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

LOG_LEVEL_ENV = "DOMINION_FUZZ_LOG_LEVEL"


def _configure_logging(level: str) -> None:
    """Route library logging through Rich at ``level``."""

    root_logger = logging.getLogger()
    if not any(isinstance(handler, RichHandler) for handler in root_logger.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(handler)
    try:
        root_logger.setLevel(level.upper())
    except ValueError:
        raise typer.BadParameter(f"unknown log level '{level}'", param_hint="--log-level") from None


def _build_config(
    seed: int,
    stream: int,
    iterations: Optional[int],
    max_debug: int,
    max_attempts: Optional[int],
) -> harness.HarnessConfig:
    try:
        return harness.HarnessConfig(
            seed=seed,
            stream=stream,
            iterations=iterations,
            max_debug=max_debug,
            max_attempts=max_attempts,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from None


def _run_one(card_harness: harness.CardHarness, config: harness.HarnessConfig) -> RunSummary:
    console.print(render_banner(card_harness.title))
    with Progress(
        TextColumn("[cyan]{task.description}[/cyan]"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress_bar:
        task_id = progress_bar.add_task(card_harness.card.label, total=None)

        def _advance(done: int, total: int) -> None:
            progress_bar.update(task_id, completed=done, total=total)

        try:
            summary = harness.run_card_test(card_harness, config, progress=_advance)
        except GenerationError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=2) from None
    for trace in summary.traces:
        console.print(render_trace(trace))
    console.print(render_summary(summary))
    return summary


SEED_OPTION = typer.Option(1542, help="Seed for the generator stream (non-zero).")
STREAM_OPTION = typer.Option(2, min=0, max=255, help="Generator stream to draw from.")
ITERATIONS_OPTION = typer.Option(None, min=0, help="Cases to generate (default: per-card count).")
MAX_DEBUG_OPTION = typer.Option(5, min=0, help="Extra cases shown after the first failure.")
MAX_ATTEMPTS_OPTION = typer.Option(
    None, min=1, help="Give up after this many rejected states per case (default: never)."
)
STRICT_OPTION = typer.Option(False, "--strict", help="Exit with status 1 when any case fails.")
LOG_LEVEL_OPTION = typer.Option(
    os.environ.get(LOG_LEVEL_ENV, "WARNING"), help="Log level for the harness loggers."
)


@app.command()
def run(
    card: str = typer.Argument(..., help="Card to test, e.g. smithy or council_room."),
    seed: int = SEED_OPTION,
    stream: int = STREAM_OPTION,
    iterations: Optional[int] = ITERATIONS_OPTION,
    max_debug: int = MAX_DEBUG_OPTION,
    max_attempts: Optional[int] = MAX_ATTEMPTS_OPTION,
    strict: bool = STRICT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
) -> None:
    """Run the random test for a single card."""

    _configure_logging(log_level)
    try:
        card_harness = harness.get_harness(card)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="CARD") from None
    config = _build_config(seed, stream, iterations, max_debug, max_attempts)

    summary = _run_one(card_harness, config)
    if strict and not summary.all_passed:
        raise typer.Exit(code=1)


@app.command()
def suite(
    seed: int = SEED_OPTION,
    stream: int = STREAM_OPTION,
    iterations: Optional[int] = ITERATIONS_OPTION,
    max_debug: int = MAX_DEBUG_OPTION,
    max_attempts: Optional[int] = MAX_ATTEMPTS_OPTION,
    strict: bool = STRICT_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
) -> None:
    """Run the random test for every registered card."""

    _configure_logging(log_level)
    config = _build_config(seed, stream, iterations, max_debug, max_attempts)

    history = SuiteHistory()
    for card_harness in harness.HARNESSES.values():
        history.record(_run_one(card_harness, config))
    console.print(render_suite(history))

    if strict and history.failing_cards():
        raise typer.Exit(code=1)


@app.command()
def cards() -> None:
    """List card identifiers, costs and which cards have a random test."""

    rows = [(card.label, int(card), cost_of(card), card in harness.HARNESSES) for card in Card]
    console.print(render_card_list(rows))


def main() -> None:
    """Entry-point for ``python -m dominion_fuzz.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()

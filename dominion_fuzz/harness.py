"""Driver loop that runs a card's generate -> apply -> check cycle."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Final

from . import checkers, generators, rngs
from .cards import Card, parse_card
from .scoreboard import CaseTrace, RunSummary

__all__ = [
    "HarnessConfig",
    "CardHarness",
    "DebugWindow",
    "HARNESSES",
    "get_harness",
    "run_card_test",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HarnessConfig:
    """Runtime configuration for a single random-test run."""

    seed: int = 1542
    stream: int = 2
    iterations: int | None = None
    max_debug: int = 5
    max_attempts: int | None = None

    def __post_init__(self) -> None:
        if self.seed == 0:
            raise ValueError("seed must be non-zero")
        if self.iterations is not None and self.iterations < 0:
            raise ValueError("iterations must not be negative")
        if self.max_debug < 0:
            raise ValueError("max_debug must not be negative")
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ValueError("max_attempts must be positive")


@dataclass(frozen=True, slots=True)
class CardHarness:
    """Generator and checker pair for one card."""

    card: Card
    generate: generators.CaseGenerator
    check: checkers.Checker
    default_iterations: int

    @property
    def key(self) -> str:
        return self.card.name.lower()

    @property
    def title(self) -> str:
        return f"Random Testing - {self.card.label}"


HARNESSES: Final[dict[Card, CardHarness]] = {
    Card.ADVENTURER: CardHarness(
        Card.ADVENTURER, generators.generate_adventurer_case, checkers.check_adventurer, 10000
    ),
    Card.SMITHY: CardHarness(
        Card.SMITHY, generators.generate_smithy_case, checkers.check_smithy, 10000
    ),
    Card.VILLAGE: CardHarness(
        Card.VILLAGE, generators.generate_village_case, checkers.check_village, 10000
    ),
    Card.COUNCIL_ROOM: CardHarness(
        Card.COUNCIL_ROOM,
        generators.generate_council_room_case,
        checkers.check_council_room,
        30,
    ),
}


def get_harness(name: str | Card) -> CardHarness:
    """Return the harness registered for ``name``."""

    card = name if isinstance(name, Card) else parse_card(name)
    try:
        return HARNESSES[card]
    except KeyError:
        raise ValueError(f"no random test registered for {card.label}") from None


@dataclass(slots=True)
class DebugWindow:
    """Verbose-output window that opens once, on the first failing case.

    The failing case that opens the window is shown, followed by cases until
    ``max_debug`` more have been shown. The window never reopens.
    """

    max_debug: int
    shown: int = 0
    active: bool = field(default=False, init=False)

    def observe(self, passed: bool) -> bool:
        """Update the window for a finished case and return whether to show it."""

        if not passed and self.shown == 0:
            self.active = True
        if not self.active:
            return False
        self.shown += 1
        if self.shown > self.max_debug:
            self.active = False
        return True


ProgressHook = Callable[[int, int], None]


def _log_trace(trace: CaseTrace) -> None:
    logger.debug("TEST case #%d (iteration %d, player %d)", trace.debug_index, trace.iteration, trace.player)
    report = trace.report
    if report.error is not None:
        logger.debug("TEST FAILED: %s", report.error)
    for item in report.expectations:
        status = "TEST SUCCESSFULLY COMPLETED" if item.passed else "TEST FAILED"
        logger.debug("%s: %s", status, item.message)
    for note in report.notes:
        logger.debug("%s", note)


def run_card_test(
    harness: CardHarness | Card | str,
    config: HarnessConfig | None = None,
    *,
    progress: ProgressHook | None = None,
) -> RunSummary:
    """Run the random test for one card and return its summary."""

    if not isinstance(harness, CardHarness):
        harness = get_harness(harness)
    config = config or HarnessConfig()
    iterations = harness.default_iterations if config.iterations is None else config.iterations

    rng = rngs.seeded(config.seed, config.stream)
    summary = RunSummary(card=harness.key, seed=config.seed)
    window = DebugWindow(max_debug=config.max_debug)
    logger.info("%s: %d iteration(s), seed %d, stream %d", harness.title, iterations, config.seed, config.stream)

    for iteration in range(iterations):
        case = harness.generate(rng, config.max_attempts)
        report = harness.check(case.state, case.player, case.hand_pos, rng)
        summary.record(report, case.attempts)

        if window.observe(report.passed):
            trace = CaseTrace(
                debug_index=window.shown - 1,
                iteration=iteration,
                player=case.player,
                hand_pos=case.hand_pos,
                report=report,
            )
            summary.traces.append(trace)
            _log_trace(trace)

        if progress is not None:
            progress(iteration + 1, iterations)

    logger.info("SUMMARY: %s", summary.headline())
    return summary

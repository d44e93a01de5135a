"""Helpers for tallying random-test runs across one or more cards."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Sequence

from .checkers import CheckReport

__all__ = ["CaseTrace", "RunSummary", "SuiteTotals", "SuiteHistory"]


@dataclass(frozen=True, slots=True)
class CaseTrace:
    """A case retained for verbose output while the debug window was open."""

    debug_index: int
    iteration: int
    player: int
    hand_pos: int
    report: CheckReport


@dataclass(slots=True)
class RunSummary:
    """Pass/fail tallies collected while testing a single card."""

    card: str
    seed: int
    cases: int = 0
    passed: int = 0
    failed: int = 0
    generation_attempts: int = 0
    failure_counts: Counter[str] = field(default_factory=Counter)
    traces: list[CaseTrace] = field(default_factory=list)

    def record(self, report: CheckReport, attempts: int) -> None:
        """Count ``report`` as one generated case."""

        self.cases += 1
        self.generation_attempts += attempts
        if report.passed:
            self.passed += 1
            return
        self.failed += 1
        if report.error is not None:
            self.failure_counts[report.error.split(":", 1)[0]] += 1
        for item in report.failures():
            self.failure_counts[item.message] += 1

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def headline(self) -> str:
        return f"Generated {self.cases} cases, {self.passed} passed, {self.failed} failed"


@dataclass(frozen=True, slots=True)
class SuiteTotals:
    """Aggregate counts over every recorded run."""

    cards: int
    cases: int
    passed: int
    failed: int


@dataclass(slots=True)
class SuiteHistory:
    """Mutable tracker that accumulates per-card summaries for a suite."""

    runs: list[RunSummary] = field(default_factory=list)

    def record(self, summary: RunSummary) -> None:
        if any(run.card == summary.card for run in self.runs):
            raise ValueError(f"card '{summary.card}' already recorded")
        self.runs.append(summary)

    def failing_cards(self) -> Sequence[str]:
        return [run.card for run in self.runs if not run.all_passed]

    def totals(self) -> SuiteTotals:
        """Return the summed counts across all recorded runs."""

        return SuiteTotals(
            cards=len(self.runs),
            cases=sum(run.cases for run in self.runs),
            passed=sum(run.passed for run in self.runs),
            failed=sum(run.failed for run in self.runs),
        )

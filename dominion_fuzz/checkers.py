"""Invariant checks run against a before/after pair of game-state snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from .cards import Card, card_name, is_treasure
from .rngs import StreamRandom
from .rules import RulesError, card_effect
from .state import GameState

__all__ = [
    "Expectation",
    "CheckReport",
    "Checker",
    "expect",
    "check_adventurer",
    "check_smithy",
    "check_village",
    "check_council_room",
]


@dataclass(frozen=True, slots=True)
class Expectation:
    """One compared value: ``message`` holds when ``actual == expected``."""

    message: str
    expected: object
    actual: object

    @property
    def passed(self) -> bool:
        return self.actual == self.expected


@dataclass(slots=True)
class CheckReport:
    """Ordered expectations and diagnostic notes gathered for one case."""

    expectations: list[Expectation] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.error is None and all(item.passed for item in self.expectations)

    def failures(self) -> list[Expectation]:
        return [item for item in self.expectations if not item.passed]

    def note(self, message: str) -> None:
        self.notes.append(message)


Checker = Callable[[GameState, int, int, StreamRandom], CheckReport]


def expect(report: CheckReport, actual: object, expected: object, message: str) -> bool:
    """Record whether ``actual`` equals ``expected`` and return the outcome."""

    item = Expectation(message=message, expected=expected, actual=actual)
    report.expectations.append(item)
    return item.passed


def _apply(card: Card, post: GameState, hand_pos: int, rng: StreamRandom, report: CheckReport) -> bool:
    try:
        card_effect(card, 0, 0, 0, post, hand_pos, rng)
    except (RulesError, IndexError) as exc:
        report.error = f"{type(exc).__name__}: {exc}"
        return False
    return True


def _expect_hand_delta(report: CheckReport, pre: GameState, post: GameState, player: int, delta: int) -> None:
    if delta == 0:
        message = "no card should be added to hand"
    else:
        message = f"{delta} card(s) should be added to hand"
    expect(report, int(post.hand_count[player]), int(pre.hand_count[player]) + delta, message)
    report.note(f"{int(post.hand_count[player] - pre.hand_count[player])} card(s) were added to hand")


def _expect_total(report: CheckReport, pre: GameState, post: GameState, player: int, *, include_played: bool) -> None:
    pre_total = pre.player_total(player, include_played=include_played)
    post_total = post.player_total(player, include_played=include_played)
    expect(report, post_total, pre_total, "player's total card count should remain unchanged")
    report.note(f"expected total card count: {pre_total}; actual total card count: {post_total}")


def _expect_played(report: CheckReport, pre: GameState, post: GameState, card: Card) -> None:
    expect(report, post.played_card_count, pre.played_card_count + 1, "1 card should be added to the played pile")
    top = int(post.played_cards[pre.played_card_count])
    expect(report, top, int(card), f"the new played card should be {card.label.lower()}")
    report.note(f"new played card is {card_name(top)}")


def _expect_others_untouched(report: CheckReport, pre: GameState, post: GameState, player: int) -> None:
    untouched = all(
        pre.same_player_zones(post, other) for other in range(pre.num_players) if other != player
    )
    expect(report, untouched, True, "other players' cards should be unchanged")


def check_adventurer(post: GameState, player: int, hand_pos: int, rng: StreamRandom) -> CheckReport:
    """Play adventurer and check that exactly two treasures reached the hand."""

    pre = post.copy()
    report = CheckReport()
    if not _apply(Card.ADVENTURER, post, hand_pos, rng, report):
        return report

    _expect_hand_delta(report, pre, post, player, 2)
    _expect_total(report, pre, post, player, include_played=False)

    count = int(post.hand_count[player])
    first = int(post.hand[player, count - 2])
    second = int(post.hand[player, count - 1])
    expect(report, is_treasure(first), True, "first card added should be a treasure card")
    report.note(f"first card added to hand is {card_name(first)}")
    expect(report, is_treasure(second), True, "second card added should be a treasure card")
    report.note(f"second card added to hand is {card_name(second)}")

    _expect_others_untouched(report, pre, post, player)
    return report


def check_smithy(post: GameState, player: int, hand_pos: int, rng: StreamRandom) -> CheckReport:
    """Play smithy: three cards drawn, smithy itself moved to the played pile."""

    pre = post.copy()
    report = CheckReport()
    if not _apply(Card.SMITHY, post, hand_pos, rng, report):
        return report

    _expect_hand_delta(report, pre, post, player, 2)
    _expect_total(report, pre, post, player, include_played=True)
    _expect_played(report, pre, post, Card.SMITHY)
    _expect_others_untouched(report, pre, post, player)
    return report


def check_village(post: GameState, player: int, hand_pos: int, rng: StreamRandom) -> CheckReport:
    pre = post.copy()
    report = CheckReport()
    if not _apply(Card.VILLAGE, post, hand_pos, rng, report):
        return report

    _expect_hand_delta(report, pre, post, player, 0)
    _expect_played(report, pre, post, Card.VILLAGE)
    _expect_total(report, pre, post, player, include_played=True)
    expect(report, post.num_actions, pre.num_actions + 2, "2 actions should be added")
    report.note(f"actions went from {pre.num_actions} to {post.num_actions}")
    _expect_others_untouched(report, pre, post, player)
    return report


def check_council_room(post: GameState, player: int, hand_pos: int, rng: StreamRandom) -> CheckReport:
    """Play council room: four cards and a buy for the player, one card for each other seat."""

    pre = post.copy()
    report = CheckReport()
    if not _apply(Card.COUNCIL_ROOM, post, hand_pos, rng, report):
        return report

    _expect_hand_delta(report, pre, post, player, 3)
    _expect_total(report, pre, post, player, include_played=True)
    _expect_played(report, pre, post, Card.COUNCIL_ROOM)
    expect(report, post.num_buys, pre.num_buys + 1, "1 buy should be added")

    for other in range(pre.num_players):
        if other == player:
            continue
        drawn = 1 if pre.player_total(other) - int(pre.hand_count[other]) > 0 else 0
        expect(
            report,
            int(post.hand_count[other]),
            int(pre.hand_count[other]) + drawn,
            f"player {other} should draw {drawn} card(s)",
        )
        expect(
            report,
            post.player_total(other),
            pre.player_total(other),
            f"player {other} total card count should remain unchanged",
        )
    return report

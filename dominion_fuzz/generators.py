"""Random game-state generators that satisfy each card's precondition.

Every generator starts from a record whose bytes are uniform noise, then forces
the handful of fields the card under test reads or writes into valid ranges.
Candidates that miss the card's precondition are thrown away and regenerated.
The rest of the record stays garbage on purpose.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .cards import TREASURE_RANGE_UPPER, Card, is_treasure
from .rngs import MODULUS, StreamRandom
from .state import MAX_DECK, MAX_HAND, MAX_PLAYERS, GameState

__all__ = [
    "GeneratedCase",
    "GenerationError",
    "CaseGenerator",
    "randomize_state",
    "generate_adventurer_case",
    "generate_smithy_case",
    "generate_village_case",
    "generate_council_room_case",
]


class GenerationError(RuntimeError):
    """Raised when no acceptable state is found within the attempt limit."""


@dataclass(slots=True)
class GeneratedCase:
    """A generated state together with where the card under test sits."""

    state: GameState
    player: int
    hand_pos: int
    attempts: int


CaseGenerator = Callable[[StreamRandom, "int | None"], GeneratedCase]


def _noise_source(rng: StreamRandom) -> np.random.Generator:
    return np.random.default_rng(rng.randint(MODULUS))


def randomize_state(rng: StreamRandom, *, hand_headroom: int, min_hand: int = 0) -> tuple[GameState, int]:
    """Return a noise-filled state and the seat whose turn it is.

    The acting player's hand, deck and discard counts are forced into range, with
    ``hand_headroom`` free slots left in the hand for cards the effect may add. The
    live deck and discard slots hold card ids drawn from ``[0, treasure_map]``.
    """

    state = GameState()
    state.randomize(_noise_source(rng))

    num_players = rng.randint(MAX_PLAYERS - 1) + 2
    player = rng.randint(num_players)
    state.num_players = num_players
    state.whose_turn = player

    state.deck_count[player] = rng.randint(MAX_DECK)
    state.discard_count[player] = rng.randint(MAX_DECK - int(state.deck_count[player]))
    span = MAX_HAND - hand_headroom - min_hand
    state.hand_count[player] = rng.randint(span) + min_hand

    state.played_card_count = rng.randint(MAX_DECK - 1)
    state.num_actions = rng.randint(MAX_HAND)
    state.num_buys = rng.randint(MAX_HAND)
    state.coins = rng.randint(MAX_HAND)

    for j in range(int(state.deck_count[player])):
        state.deck[player, j] = rng.randint(TREASURE_RANGE_UPPER)
    for j in range(int(state.discard_count[player])):
        state.discard[player, j] = rng.randint(TREASURE_RANGE_UPPER)
    return state, player


def _cards_available(state: GameState, player: int) -> int:
    return int(state.deck_count[player] + state.discard_count[player])


def _place_card(state: GameState, player: int, card: Card, rng: StreamRandom) -> int:
    hand_pos = rng.randint(int(state.hand_count[player]))
    state.hand[player, hand_pos] = card
    return hand_pos


def _check_budget(attempts: int, max_attempts: int | None, card: Card) -> None:
    if max_attempts is not None and attempts > max_attempts:
        raise GenerationError(f"no valid {card.label} state after {max_attempts} attempt(s)")


def generate_adventurer_case(rng: StreamRandom, max_attempts: int | None = None) -> GeneratedCase:
    """Return a state with at least two treasures across deck and discard."""

    attempts = 0
    while True:
        attempts += 1
        _check_budget(attempts, max_attempts, Card.ADVENTURER)
        state, player = randomize_state(rng, hand_headroom=3)
        if _cards_available(state, player) < 2:
            continue
        treasures = sum(
            1 for card in state.live_deck(player) + state.live_discard(player) if is_treasure(card)
        )
        if treasures < 2:
            continue
        return GeneratedCase(state=state, player=player, hand_pos=0, attempts=attempts)


def _generate_with_card(
    rng: StreamRandom,
    max_attempts: int | None,
    card: Card,
    *,
    draws: int,
    prepare: Callable[[GameState, int, StreamRandom], None] | None = None,
) -> GeneratedCase:
    attempts = 0
    while True:
        attempts += 1
        _check_budget(attempts, max_attempts, card)
        state, player = randomize_state(rng, hand_headroom=draws, min_hand=1)
        if _cards_available(state, player) < draws:
            continue
        if prepare is not None:
            prepare(state, player, rng)
        hand_pos = _place_card(state, player, card, rng)
        return GeneratedCase(state=state, player=player, hand_pos=hand_pos, attempts=attempts)


def generate_smithy_case(rng: StreamRandom, max_attempts: int | None = None) -> GeneratedCase:
    """Return a state with three cards to draw and a smithy in hand."""

    return _generate_with_card(rng, max_attempts, Card.SMITHY, draws=3)


def generate_village_case(rng: StreamRandom, max_attempts: int | None = None) -> GeneratedCase:
    """Return a state with a card to draw and a village in hand."""

    return _generate_with_card(rng, max_attempts, Card.VILLAGE, draws=1)


def _prepare_opponents(state: GameState, player: int, rng: StreamRandom) -> None:
    # Every other seat draws one card, so their counts must be usable.
    for other in range(state.num_players):
        if other == player:
            continue
        state.deck_count[other] = rng.randint(MAX_DECK)
        state.discard_count[other] = rng.randint(MAX_DECK - int(state.deck_count[other]))
        state.hand_count[other] = rng.randint(MAX_HAND - 1)


def generate_council_room_case(rng: StreamRandom, max_attempts: int | None = None) -> GeneratedCase:
    """Return a state with four cards to draw and a council room in hand."""

    return _generate_with_card(
        rng, max_attempts, Card.COUNCIL_ROOM, draws=4, prepare=_prepare_opponents
    )

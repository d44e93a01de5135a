"""Card-effect rules for the subset of the Dominion engine under test."""

from __future__ import annotations

import logging
from typing import Callable, Final

from .cards import Card, is_treasure
from .rngs import StreamRandom
from .state import MAX_DECK, MAX_HAND, GameState

__all__ = [
    "RulesError",
    "IllegalDraw",
    "UnsupportedCard",
    "shuffle",
    "draw_card",
    "discard_card",
    "card_effect",
    "SUPPORTED_CARDS",
]

logger = logging.getLogger(__name__)


class RulesError(RuntimeError):
    """Base class for rule violations raised by the engine."""


class IllegalDraw(RulesError):
    """Raised when a draw cannot be completed."""


class UnsupportedCard(RulesError):
    """Raised when ``card_effect`` is asked to play a card it does not implement."""


def shuffle(player: int, state: GameState, rng: StreamRandom) -> bool:
    """Shuffle ``player``'s deck in place; return ``False`` if it is empty.

    The deck is sorted first so the result depends only on its contents and the
    generator state, not on the order cards were added.
    """

    count = int(state.deck_count[player])
    if count < 1:
        return False
    remaining = sorted(int(card) for card in state.deck[player, :count])
    shuffled: list[int] = []
    while remaining:
        shuffled.append(remaining.pop(rng.randint(len(remaining))))
    state.deck[player, :count] = shuffled
    return True


def draw_card(player: int, state: GameState, rng: StreamRandom) -> int | None:
    """Move the top card of ``player``'s deck into their hand.

    An empty deck is refilled from the discard pile and shuffled first. Returns the
    drawn card, or ``None`` when neither pile holds a card.
    """

    if state.hand_count[player] >= MAX_HAND:
        raise IllegalDraw(f"player {player} hand is full")

    if state.deck_count[player] <= 0:
        discard_count = int(state.discard_count[player])
        if discard_count > MAX_DECK:
            raise IllegalDraw(f"player {player} discard count {discard_count} exceeds deck size")
        state.deck[player, :discard_count] = state.discard[player, :discard_count]
        state.discard[player, :discard_count] = -1
        state.deck_count[player] = discard_count
        state.discard_count[player] = 0
        shuffle(player, state, rng)
        if state.deck_count[player] <= 0:
            return None

    top = int(state.deck_count[player]) - 1
    card = int(state.deck[player, top])
    state.hand[player, state.hand_count[player]] = card
    state.hand_count[player] += 1
    state.deck_count[player] -= 1
    return card


def discard_card(hand_pos: int, player: int, state: GameState, trashed: bool = False) -> None:
    """Remove the card at ``hand_pos`` from ``player``'s hand.

    Unless ``trashed`` is set the card is added to the played pile. The gap left in
    the hand is filled with the last card in hand.
    """

    count = int(state.hand_count[player])
    if not 0 <= hand_pos < count:
        raise IndexError(f"hand position {hand_pos} outside hand of {count} card(s)")

    if not trashed:
        state.played_cards[state.played_card_count] = state.hand[player, hand_pos]
        state.played_card_count += 1

    last = count - 1
    state.hand[player, hand_pos] = state.hand[player, last]
    state.hand[player, last] = -1
    state.hand_count[player] = last


def _adventurer(state: GameState, player: int, hand_pos: int, rng: StreamRandom) -> int:
    drawn_treasure = 0
    revealed: list[int] = []
    while drawn_treasure < 2:
        card = draw_card(player, state, rng)
        if card is None:
            raise IllegalDraw(f"player {player} ran out of cards after {drawn_treasure} treasure(s)")
        if is_treasure(card):
            drawn_treasure += 1
        else:
            state.hand_count[player] -= 1
            revealed.append(card)

    for card in reversed(revealed):
        state.discard[player, state.discard_count[player]] = card
        state.discard_count[player] += 1
    return 0


def _smithy(state: GameState, player: int, hand_pos: int, rng: StreamRandom) -> int:
    for _ in range(3):
        draw_card(player, state, rng)
    discard_card(hand_pos, player, state)
    return 0


def _village(state: GameState, player: int, hand_pos: int, rng: StreamRandom) -> int:
    draw_card(player, state, rng)
    state.num_actions += 2
    discard_card(hand_pos, player, state)
    return 0


def _council_room(state: GameState, player: int, hand_pos: int, rng: StreamRandom) -> int:
    for _ in range(4):
        draw_card(player, state, rng)
    state.num_buys += 1
    for other in range(state.num_players):
        if other != player:
            draw_card(other, state, rng)
    discard_card(hand_pos, player, state)
    return 0


EffectFn = Callable[[GameState, int, int, StreamRandom], int]

_EFFECTS: Final[dict[Card, EffectFn]] = {
    Card.ADVENTURER: _adventurer,
    Card.SMITHY: _smithy,
    Card.VILLAGE: _village,
    Card.COUNCIL_ROOM: _council_room,
}

SUPPORTED_CARDS: Final[tuple[Card, ...]] = tuple(_EFFECTS)


def card_effect(
    card: int,
    choice1: int,
    choice2: int,
    choice3: int,
    state: GameState,
    hand_pos: int,
    rng: StreamRandom,
) -> int:
    """Resolve ``card`` for the player whose turn it is and return the coin bonus.

    The choice arguments are accepted for cards that take decisions; none of the
    implemented cards use them.
    """

    try:
        effect = _EFFECTS[Card(card)]
    except (KeyError, ValueError):
        raise UnsupportedCard(f"no effect implemented for card {card}") from None

    player = state.whose_turn
    logger.debug("playing %s for player %d at hand position %d", Card(card).label, player, hand_pos)
    return effect(state, player, hand_pos, rng)

from __future__ import annotations

import pytest

from dominion_fuzz import rngs, rules, state
from dominion_fuzz.cards import Card


def _rng() -> rngs.StreamRandom:
    return rngs.seeded(1542, 2)


def _state_with(
    player: int = 0,
    *,
    hand: list[int] | None = None,
    deck: list[int] | None = None,
    discard: list[int] | None = None,
    num_players: int = 2,
) -> state.GameState:
    game_state = state.new_game_state(num_players)
    game_state.whose_turn = player
    for zone, counts, cards in (
        ("hand", "hand_count", hand or []),
        ("deck", "deck_count", deck or []),
        ("discard", "discard_count", discard or []),
    ):
        getattr(game_state, zone)[player, : len(cards)] = cards
        getattr(game_state, counts)[player] = len(cards)
    return game_state


def test_draw_card_takes_top_of_deck() -> None:
    game_state = _state_with(deck=[Card.COPPER, Card.SILVER, Card.GOLD])

    drawn = rules.draw_card(0, game_state, _rng())

    assert drawn == Card.GOLD
    assert game_state.live_hand(0) == [Card.GOLD]
    assert game_state.live_deck(0) == [Card.COPPER, Card.SILVER]


def test_draw_card_reshuffles_discard_into_empty_deck() -> None:
    game_state = _state_with(discard=[Card.ESTATE, Card.DUCHY, Card.PROVINCE])

    drawn = rules.draw_card(0, game_state, _rng())

    assert drawn in (Card.ESTATE, Card.DUCHY, Card.PROVINCE)
    assert game_state.discard_count[0] == 0
    assert game_state.deck_count[0] == 2
    assert sorted(game_state.live_deck(0) + game_state.live_hand(0)) == [1, 2, 3]


def test_draw_card_returns_none_without_cards() -> None:
    game_state = _state_with(hand=[Card.SMITHY])

    assert rules.draw_card(0, game_state, _rng()) is None
    assert game_state.hand_count[0] == 1


def test_draw_card_rejects_full_hand() -> None:
    game_state = _state_with(deck=[Card.COPPER])
    game_state.hand_count[0] = state.MAX_HAND

    with pytest.raises(rules.IllegalDraw):
        rules.draw_card(0, game_state, _rng())


def test_shuffle_keeps_cards_and_is_seeded() -> None:
    cards = list(range(20))
    first = _state_with(deck=cards)
    second = _state_with(deck=list(reversed(cards)))

    assert rules.shuffle(0, first, _rng())
    assert rules.shuffle(0, second, _rng())

    assert sorted(first.live_deck(0)) == cards
    assert first.live_deck(0) == second.live_deck(0)
    assert not rules.shuffle(0, _state_with(), _rng())


def test_discard_card_moves_card_to_played_and_fills_gap() -> None:
    game_state = _state_with(hand=[Card.SMITHY, Card.COPPER, Card.SILVER])

    rules.discard_card(0, 0, game_state)

    assert game_state.live_hand(0) == [Card.SILVER, Card.COPPER]
    assert game_state.hand[0, 2] == -1
    assert game_state.live_played() == [Card.SMITHY]


def test_discard_card_trashed_skips_played_pile() -> None:
    game_state = _state_with(hand=[Card.COPPER, Card.FEAST])

    rules.discard_card(1, 0, game_state, trashed=True)

    assert game_state.live_hand(0) == [Card.COPPER]
    assert game_state.played_card_count == 0


def test_discard_card_rejects_bad_position() -> None:
    game_state = _state_with(hand=[Card.COPPER])
    with pytest.raises(IndexError):
        rules.discard_card(3, 0, game_state)


def test_adventurer_keeps_two_treasures_and_discards_the_rest() -> None:
    game_state = _state_with(deck=[Card.COPPER, Card.ESTATE, Card.SILVER, Card.DUCHY])

    bonus = rules.card_effect(Card.ADVENTURER, 0, 0, 0, game_state, 0, _rng())

    assert bonus == 0
    assert game_state.live_hand(0) == [Card.SILVER, Card.COPPER]
    assert game_state.live_discard(0) == [Card.ESTATE, Card.DUCHY]
    assert game_state.deck_count[0] == 0
    assert game_state.played_card_count == 0


def test_adventurer_raises_when_treasure_runs_out() -> None:
    game_state = _state_with(deck=[Card.ESTATE, Card.GOLD, Card.DUCHY])

    with pytest.raises(rules.IllegalDraw):
        rules.card_effect(Card.ADVENTURER, 0, 0, 0, game_state, 0, _rng())


def test_smithy_draws_three_and_plays_itself() -> None:
    game_state = _state_with(
        hand=[Card.SMITHY],
        deck=[Card.ESTATE, Card.COPPER, Card.SILVER, Card.GOLD],
    )

    rules.card_effect(Card.SMITHY, 0, 0, 0, game_state, 0, _rng())

    assert game_state.live_hand(0) == [Card.COPPER, Card.GOLD, Card.SILVER]
    assert game_state.live_deck(0) == [Card.ESTATE]
    assert game_state.live_played() == [Card.SMITHY]


def test_village_draws_one_and_adds_actions() -> None:
    game_state = _state_with(hand=[Card.COPPER, Card.VILLAGE], deck=[Card.GOLD])
    game_state.num_actions = 1

    rules.card_effect(Card.VILLAGE, 0, 0, 0, game_state, 1, _rng())

    assert game_state.live_hand(0) == [Card.COPPER, Card.GOLD]
    assert game_state.num_actions == 3
    assert game_state.live_played() == [Card.VILLAGE]


def test_council_room_feeds_every_other_player() -> None:
    game_state = _state_with(
        player=1,
        hand=[Card.COUNCIL_ROOM],
        deck=[Card.COPPER] * 5,
        num_players=3,
    )
    game_state.deck[0, :2] = [Card.ESTATE, Card.GOLD]
    game_state.deck_count[0] = 2
    game_state.num_buys = 1

    rules.card_effect(Card.COUNCIL_ROOM, 0, 0, 0, game_state, 0, _rng())

    assert game_state.hand_count[1] == 4
    assert game_state.deck_count[1] == 1
    assert game_state.num_buys == 2
    assert game_state.live_hand(0) == [Card.GOLD]
    assert game_state.hand_count[2] == 0
    assert game_state.live_played() == [Card.COUNCIL_ROOM]


@pytest.mark.parametrize("card", [Card.FEAST, Card.GREAT_HALL, 99])
def test_card_effect_rejects_unimplemented_cards(card: int) -> None:
    game_state = _state_with(hand=[Card.COPPER], deck=[Card.COPPER])
    with pytest.raises(rules.UnsupportedCard):
        rules.card_effect(card, 0, 0, 0, game_state, 0, _rng())

from __future__ import annotations

import numpy as np
import pytest

from dominion_fuzz import generators, rngs, state
from dominion_fuzz.cards import Card, TREASURE_RANGE_UPPER, is_treasure


def _assert_active_counts_valid(case: generators.GeneratedCase) -> None:
    game_state = case.state
    player = case.player
    assert 2 <= game_state.num_players <= state.MAX_PLAYERS
    assert game_state.whose_turn == player < game_state.num_players
    assert 0 <= game_state.deck_count[player] < state.MAX_DECK
    assert 0 <= game_state.discard_count[player]
    assert game_state.deck_count[player] + game_state.discard_count[player] < state.MAX_DECK
    assert 0 <= game_state.played_card_count < state.MAX_DECK - 1
    for card in game_state.live_deck(player) + game_state.live_discard(player):
        assert 0 <= card < TREASURE_RANGE_UPPER


def test_adventurer_case_has_two_treasures_to_draw() -> None:
    rng = rngs.seeded(1542, 2)
    for _ in range(25):
        case = generators.generate_adventurer_case(rng)
        _assert_active_counts_valid(case)
        player = case.player
        pool = case.state.live_deck(player) + case.state.live_discard(player)
        assert sum(1 for card in pool if is_treasure(card)) >= 2
        assert case.state.hand_count[player] <= state.MAX_HAND - 4
        assert case.attempts >= 1


@pytest.mark.parametrize(
    ("generate", "card", "draws"),
    [
        (generators.generate_smithy_case, Card.SMITHY, 3),
        (generators.generate_village_case, Card.VILLAGE, 1),
        (generators.generate_council_room_case, Card.COUNCIL_ROOM, 4),
    ],
)
def test_card_cases_place_card_in_hand(generate: generators.CaseGenerator, card: Card, draws: int) -> None:
    rng = rngs.seeded(99, 2)
    for _ in range(25):
        case = generate(rng, None)
        _assert_active_counts_valid(case)
        game_state = case.state
        player = case.player
        assert 1 <= game_state.hand_count[player] <= state.MAX_HAND - draws
        assert 0 <= case.hand_pos < game_state.hand_count[player]
        assert game_state.hand[player, case.hand_pos] == card
        assert game_state.deck_count[player] + game_state.discard_count[player] >= draws


def test_council_room_case_sanitizes_other_seats() -> None:
    rng = rngs.seeded(5, 2)
    for _ in range(25):
        case = generators.generate_council_room_case(rng)
        game_state = case.state
        for other in range(game_state.num_players):
            if other == case.player:
                continue
            assert 0 <= game_state.hand_count[other] < state.MAX_HAND - 1
            assert 0 <= game_state.deck_count[other] < state.MAX_DECK
            assert 0 <= game_state.discard_count[other]
            assert game_state.deck_count[other] + game_state.discard_count[other] < state.MAX_DECK


def test_generation_is_reproducible_from_seed() -> None:
    first = generators.generate_smithy_case(rngs.seeded(1542, 2))
    second = generators.generate_smithy_case(rngs.seeded(1542, 2))

    assert first.player == second.player
    assert first.hand_pos == second.hand_pos
    assert np.array_equal(first.state.hand, second.state.hand)
    assert np.array_equal(first.state.deck, second.state.deck)
    assert first.state.num_actions == second.state.num_actions


def test_irrelevant_fields_stay_randomized() -> None:
    case = generators.generate_village_case(rngs.seeded(1542, 2))

    assert case.state.supply_count.any()
    assert case.state.embargo_tokens.any()


def test_max_attempts_raises_generation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _empty_state(rng: rngs.StreamRandom, *, hand_headroom: int, min_hand: int = 0) -> tuple[state.GameState, int]:
        game_state = state.new_game_state(2)
        game_state.hand_count[0] = max(min_hand, 1)
        return game_state, 0

    monkeypatch.setattr(generators, "randomize_state", _empty_state)

    with pytest.raises(generators.GenerationError):
        generators.generate_adventurer_case(rngs.seeded(1, 2), max_attempts=3)
    with pytest.raises(generators.GenerationError):
        generators.generate_smithy_case(rngs.seeded(1, 2), max_attempts=3)

"""Game state record shared by the rules engine and the test harness."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Final

import numpy as np

from .cards import TREASURE_RANGE_UPPER

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from numpy.typing import NDArray

    Int32Array = NDArray[np.int32]
else:
    Int32Array = np.ndarray

MAX_PLAYERS: Final[int] = 4
MAX_HAND: Final[int] = 500
MAX_DECK: Final[int] = 500

SCALAR_FIELDS: Final[tuple[str, ...]] = (
    "num_players",
    "outpost_played",
    "outpost_turn",
    "whose_turn",
    "phase",
    "num_actions",
    "coins",
    "num_buys",
    "played_card_count",
)


def _zeros(*shape: int) -> Int32Array:
    return np.zeros(shape, dtype=np.int32)


@dataclass(slots=True)
class GameState:
    """Fixed-size game record with per-player hand, deck and discard zones.

    Counts are tracked separately from the zone arrays: only the first
    ``hand_count[p]`` slots of ``hand[p]`` are live, and likewise for the deck,
    discard and played piles. Slots past the count may hold anything.
    """

    num_players: int = 0
    supply_count: Int32Array = field(default_factory=lambda: _zeros(TREASURE_RANGE_UPPER))
    embargo_tokens: Int32Array = field(default_factory=lambda: _zeros(TREASURE_RANGE_UPPER))
    outpost_played: int = 0
    outpost_turn: int = 0
    whose_turn: int = 0
    phase: int = 0
    num_actions: int = 0
    coins: int = 0
    num_buys: int = 0
    hand: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS, MAX_HAND))
    hand_count: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS))
    deck: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS, MAX_DECK))
    deck_count: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS))
    discard: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS, MAX_DECK))
    discard_count: Int32Array = field(default_factory=lambda: _zeros(MAX_PLAYERS))
    played_cards: Int32Array = field(default_factory=lambda: _zeros(MAX_DECK))
    played_card_count: int = 0

    def copy(self) -> "GameState":
        """Return an independent snapshot of every field."""

        values = {}
        for entry in fields(self):
            value = getattr(self, entry.name)
            values[entry.name] = value.copy() if isinstance(value, np.ndarray) else value
        return GameState(**values)

    def arrays(self) -> list[Int32Array]:
        """Return the array-valued fields in declaration order."""

        return [
            getattr(self, entry.name)
            for entry in fields(self)
            if entry.name not in SCALAR_FIELDS
        ]

    def randomize(self, noise: np.random.Generator) -> None:
        """Overwrite every byte of the record with uniform random bytes."""

        for array in self.arrays():
            raw = array.reshape(-1).view(np.uint8)
            raw[:] = noise.integers(0, 256, size=raw.size, dtype=np.uint8)
        for name in SCALAR_FIELDS:
            setattr(
                self,
                name,
                int(noise.integers(np.iinfo(np.int32).min, np.iinfo(np.int32).max, endpoint=True)),
            )

    def live_hand(self, player: int) -> list[int]:
        return [int(card) for card in self.hand[player, : self.hand_count[player]]]

    def live_deck(self, player: int) -> list[int]:
        return [int(card) for card in self.deck[player, : self.deck_count[player]]]

    def live_discard(self, player: int) -> list[int]:
        return [int(card) for card in self.discard[player, : self.discard_count[player]]]

    def live_played(self) -> list[int]:
        return [int(card) for card in self.played_cards[: self.played_card_count]]

    def player_total(self, player: int, *, include_played: bool = False) -> int:
        """Return hand + deck + discard counts, optionally plus the played pile."""

        total = int(self.hand_count[player]) + int(self.deck_count[player]) + int(self.discard_count[player])
        if include_played:
            total += self.played_card_count
        return total

    def same_player_zones(self, other: "GameState", player: int) -> bool:
        """Return ``True`` when ``player``'s counts and live zones match between snapshots."""

        for zone, counts in (("hand", "hand_count"), ("deck", "deck_count"), ("discard", "discard_count")):
            mine = int(getattr(self, counts)[player])
            theirs = int(getattr(other, counts)[player])
            if mine != theirs:
                return False
            if not np.array_equal(getattr(self, zone)[player, :mine], getattr(other, zone)[player, :theirs]):
                return False
        return True


def new_game_state(num_players: int) -> GameState:
    """Return a zeroed record seating ``num_players`` players."""

    if not 2 <= num_players <= MAX_PLAYERS:
        raise ValueError(f"num_players must be between 2 and {MAX_PLAYERS}")
    return GameState(num_players=num_players)

"""Card identifiers and static card data for the Dominion engine."""

from __future__ import annotations

from enum import IntEnum
from typing import Final


class Card(IntEnum):
    """Card identifiers in engine order."""

    CURSE = 0
    ESTATE = 1
    DUCHY = 2
    PROVINCE = 3
    COPPER = 4
    SILVER = 5
    GOLD = 6
    ADVENTURER = 7
    COUNCIL_ROOM = 8
    FEAST = 9
    GARDENS = 10
    MINE = 11
    REMODEL = 12
    SMITHY = 13
    VILLAGE = 14
    BARON = 15
    GREAT_HALL = 16
    MINION = 17
    STEWARD = 18
    TRIBUTE = 19
    AMBASSADOR = 20
    CUTPURSE = 21
    EMBARGO = 22
    OUTPOST = 23
    SALVAGER = 24
    SEA_HAG = 25
    TREASURE_MAP = 26

    @property
    def label(self) -> str:
        """Return the printed card name, e.g. ``Council Room``."""

        return self.name.replace("_", " ").title()


CARD_COUNT: Final[int] = len(Card)
# Generators draw card ids uniformly from ``[0, TREASURE_RANGE_UPPER)``.
TREASURE_RANGE_UPPER: Final[int] = Card.TREASURE_MAP + 1

COSTS: Final[dict[Card, int]] = {
    Card.CURSE: 0,
    Card.ESTATE: 2,
    Card.DUCHY: 5,
    Card.PROVINCE: 8,
    Card.COPPER: 0,
    Card.SILVER: 3,
    Card.GOLD: 6,
    Card.ADVENTURER: 6,
    Card.COUNCIL_ROOM: 5,
    Card.FEAST: 4,
    Card.GARDENS: 4,
    Card.MINE: 5,
    Card.REMODEL: 4,
    Card.SMITHY: 4,
    Card.VILLAGE: 3,
    Card.BARON: 4,
    Card.GREAT_HALL: 3,
    Card.MINION: 5,
    Card.STEWARD: 3,
    Card.TRIBUTE: 5,
    Card.AMBASSADOR: 3,
    Card.CUTPURSE: 4,
    Card.EMBARGO: 2,
    Card.OUTPOST: 5,
    Card.SALVAGER: 4,
    Card.SEA_HAG: 4,
    Card.TREASURE_MAP: 4,
}


def cost_of(card: int) -> int:
    """Return the coin cost of ``card``; unknown ids raise ``ValueError``."""

    return COSTS[Card(card)]


def is_treasure(card_id: int) -> bool:
    """Return ``True`` for copper, silver and gold.

    Accepts any integer, including the garbage values found in fuzzed piles.
    """

    return Card.COPPER <= card_id <= Card.GOLD


def card_name(card_id: int) -> str:
    """Return a display name, falling back to ``#<id>`` for invalid ids."""

    try:
        return Card(card_id).label
    except ValueError:
        return f"#{card_id}"


def parse_card(name: str) -> Card:
    """Resolve ``council_room``, ``council-room`` or ``Council Room`` to a card."""

    key = name.strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return Card[key]
    except KeyError:
        raise ValueError(f"unknown card '{name}'") from None

"""Random-input test harness for Dominion card effects."""

from . import cards, checkers, generators, harness, rngs, rules, scoreboard, state

__all__ = [
    "cards",
    "checkers",
    "generators",
    "harness",
    "rngs",
    "rules",
    "scoreboard",
    "state",
]

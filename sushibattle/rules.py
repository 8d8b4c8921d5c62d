"""Core rule constants for the sushi card battle."""

from __future__ import annotations

# Card tiers, weakest first.
TIER_COMMON = "common"
TIER_RARE = "rare"
TIER_LEGENDARY = "legendary"

TIERS: tuple[str, ...] = (TIER_COMMON, TIER_RARE, TIER_LEGENDARY)

TIER_BONUS: dict[str, int] = {
    TIER_COMMON: 0,
    TIER_RARE: 1,
    TIER_LEGENDARY: 2,
}

# Card types, in the order used for tie-breaks and round-robin picks.
TYPE_ATTACK = "attack"
TYPE_DEFENSE = "defense"
TYPE_HEALING = "healing"

CARD_TYPES: tuple[str, ...] = (TYPE_ATTACK, TYPE_DEFENSE, TYPE_HEALING)

# Maps each type to the single type it beats.
TYPE_ADVANTAGE: dict[str, str] = {
    TYPE_ATTACK: TYPE_HEALING,
    TYPE_HEALING: TYPE_DEFENSE,
    TYPE_DEFENSE: TYPE_ATTACK,
}

# Maps each type to the type that beats it under TYPE_ADVANTAGE.
COUNTER_TYPE: dict[str, str] = {beaten: winner for winner, beaten in TYPE_ADVANTAGE.items()}

HAND_SIZE = 10
CARDS_PER_ROUND = 2
DRAFT_CHOICES = 2

# Player and opponent side labels used in results and events.
SIDE_PLAYER = "player"
SIDE_OPPONENT = "opponent"
RESULT_TIE = "tie"

if set(TYPE_ADVANTAGE) != set(CARD_TYPES) or set(TYPE_ADVANTAGE.values()) != set(CARD_TYPES):
    raise ValueError("Type advantage must be a cycle over every card type")

__all__ = [
    "CARDS_PER_ROUND",
    "CARD_TYPES",
    "COUNTER_TYPE",
    "DRAFT_CHOICES",
    "HAND_SIZE",
    "RESULT_TIE",
    "SIDE_OPPONENT",
    "SIDE_PLAYER",
    "TIERS",
    "TIER_BONUS",
    "TIER_COMMON",
    "TIER_LEGENDARY",
    "TIER_RARE",
    "TYPE_ADVANTAGE",
    "TYPE_ATTACK",
    "TYPE_DEFENSE",
    "TYPE_HEALING",
]

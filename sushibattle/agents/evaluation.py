"""Shared heuristics for the opponent agents."""
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .. import rules
from ..cards import card_power, tier_bonus
from ..catalog import Card, CardTuple

TENDENCY_MIN_CARDS = 2
CROWDED_TYPE_COUNT = 4
CROWDED_TYPE_PENALTY = 2
MISSING_TYPE_BONUS = 1
COUNTER_BONUS = 3


def analyze_tendency(played: Sequence[Card]) -> Optional[str]:
    """Return the type the player has played most, or None with too little data.

    Ties resolve to the earliest type in attack, defense, healing order.
    """

    if len(played) < TENDENCY_MIN_CARDS:
        return None

    counts = {card_type: 0 for card_type in rules.CARD_TYPES}
    for card in played:
        if card.type in counts:
            counts[card.type] += 1

    best_type = rules.TYPE_ATTACK
    best_count = 0
    for card_type, count in counts.items():
        if count > best_count:
            best_type, best_count = card_type, count
    return best_type


def counter_type(card_type: str) -> str:
    """Return the type that beats ``card_type`` in the advantage cycle."""

    return rules.COUNTER_TYPE.get(card_type, rules.TYPE_ATTACK)


def evaluate_card(card: Card, opponent_type: Optional[str] = None) -> int:
    """Situational value of a card.

    Tier counts twice: once inside card power and once as a standalone bonus.
    Standalone helper for callers scoring cards against a known opponent type;
    the built-in agents rank by ``card_power`` and ``draft_score``.
    """

    score = card_power(card)
    if opponent_type is not None and counter_type(opponent_type) == card.type:
        score += COUNTER_BONUS
    return score + tier_bonus(card)


def draft_score(card: Card, own_hand: Iterable[Card]) -> int:
    same_type = sum(1 for held in own_hand if held.type == card.type)
    score = card_power(card)
    if same_type >= CROWDED_TYPE_COUNT:
        score -= CROWDED_TYPE_PENALTY
    if same_type == 0:
        score += MISSING_TYPE_BONUS
    return score


def rank_by_power(cards: Iterable[Card]) -> CardTuple:
    """Sort strongest first; equal power keeps hand order."""

    return tuple(sorted(cards, key=card_power, reverse=True))


__all__ = [
    "analyze_tendency",
    "counter_type",
    "draft_score",
    "evaluate_card",
    "rank_by_power",
]

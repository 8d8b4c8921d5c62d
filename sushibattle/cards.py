"""Card-versus-card resolution and card strength metrics."""
from __future__ import annotations

import enum

from . import rules
from .catalog import Card


class Outcome(str, enum.Enum):
    """Result of comparing a first card against a second card."""

    FIRST = "first"
    SECOND = "second"
    TIE = "tie"

    def inverted(self) -> "Outcome":
        if self is Outcome.FIRST:
            return Outcome.SECOND
        if self is Outcome.SECOND:
            return Outcome.FIRST
        return Outcome.TIE


def primary_stat(card: Card) -> int:
    """Return the stat selected by the card's type.

    Unknown types fall back to the attack stat.
    """

    if card.type == rules.TYPE_DEFENSE:
        return card.defense
    if card.type == rules.TYPE_HEALING:
        return card.healing
    return card.attack


def tier_bonus(card: Card) -> int:
    return rules.TIER_BONUS.get(card.tier, 0)


def card_power(card: Card) -> int:
    """Primary stat plus tier bonus, used by the opponent heuristics."""

    return primary_stat(card) + tier_bonus(card)


def beats(attacker_type: str, defender_type: str) -> bool:
    """Return True if ``attacker_type`` holds the type advantage."""

    return rules.TYPE_ADVANTAGE.get(attacker_type) == defender_type


def compare(first: Card, second: Card) -> Outcome:
    """Resolve one matchup.

    Differing types: the advantaged side wins when its primary stat is at
    least the other's, otherwise the disadvantaged side wins. Same types (or
    types outside the advantage cycle) compare primary stats directly.
    """

    first_stat = primary_stat(first)
    second_stat = primary_stat(second)

    if first.type != second.type:
        if beats(first.type, second.type):
            return Outcome.FIRST if first_stat >= second_stat else Outcome.SECOND
        if beats(second.type, first.type):
            return Outcome.SECOND if second_stat >= first_stat else Outcome.FIRST

    if first_stat > second_stat:
        return Outcome.FIRST
    if second_stat > first_stat:
        return Outcome.SECOND
    return Outcome.TIE


__all__ = [
    "Outcome",
    "beats",
    "card_power",
    "compare",
    "primary_stat",
    "tier_bonus",
]

"""Agent that counters the player's favourite card type."""
from __future__ import annotations

from typing import Optional, Sequence

from ..cards import card_power
from ..catalog import Card, CardTuple
from .base import Agent, check_hand
from .evaluation import analyze_tendency, counter_type


class StrategicAgent(Agent):
    """Prefer cards of the type that beats the player's tendency, then power."""

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:
        check_hand(self.name, hand, count)
        return select_strategic(hand, count, analyze_tendency(player_played))


def select_strategic(hand: Sequence[Card], count: int, tendency: Optional[str]) -> CardTuple:
    target = counter_type(tendency) if tendency is not None else None

    def _key(card: Card) -> tuple[int, int]:
        return (0 if card.type == target else 1, -card_power(card))

    return tuple(sorted(hand, key=_key)[: max(count, 0)])


__all__ = ["StrategicAgent", "select_strategic"]

"""Agent that spreads its picks across card types."""
from __future__ import annotations

from typing import List, Sequence

from .. import rules
from ..catalog import Card, CardTuple
from .base import Agent, check_hand
from .evaluation import rank_by_power


class BalancedAgent(Agent):
    """Round-robin over attack, defense and healing, strongest card of each.

    When a type runs dry the remaining slots are backfilled with the
    strongest unpicked cards.
    """

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:
        del player_played  # unused
        check_hand(self.name, hand, count)
        return select_balanced(hand, count)


def select_balanced(hand: Sequence[Card], count: int) -> CardTuple:
    by_type = {
        card_type: list(rank_by_power(card for card in hand if card.type == card_type))
        for card_type in rules.CARD_TYPES
    }

    selected: List[Card] = []
    type_index = 0
    while len(selected) < count:
        pool = by_type[rules.CARD_TYPES[type_index % len(rules.CARD_TYPES)]]
        if pool:
            selected.append(pool.pop(0))
        type_index += 1
        if type_index > count * len(rules.CARD_TYPES):
            break

    if len(selected) < count:
        taken = {card.id for card in selected}
        for card in rank_by_power(card for card in hand if card.id not in taken):
            if len(selected) >= count:
                break
            selected.append(card)

    return tuple(selected)


__all__ = ["BalancedAgent", "select_balanced"]

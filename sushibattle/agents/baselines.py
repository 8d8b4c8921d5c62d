"""Baseline agent implementations."""
from __future__ import annotations

import random
from typing import Optional, Sequence

from ..catalog import Card, CardTuple
from .base import Agent, check_hand, ensure_from_hand
from .evaluation import rank_by_power


class FirstCardsAgent(Agent):
    """Deterministic agent that plays the leading cards of its hand."""

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:  # noqa: D401
        del player_played  # unused
        check_hand(self.name, hand, count)
        return tuple(hand[: max(count, 0)])

    def select_draft_card(self, choices: Sequence[Card], own_hand: Sequence[Card] = ()) -> Optional[int]:
        return 0 if choices else None


class RandomAgent(Agent):
    """Agent that samples uniformly from its hand."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random(seed)

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:
        del player_played  # unused
        check_hand(self.name, hand, count)
        picks = self._rng.sample(list(hand), min(max(count, 0), len(hand)))
        return ensure_from_hand(picks, hand)

    def select_draft_card(self, choices: Sequence[Card], own_hand: Sequence[Card] = ()) -> Optional[int]:
        if not choices:
            return None
        return self._rng.randrange(len(choices))


class GreedyAgent(Agent):
    """Agent that always plays its highest-power cards."""

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:
        del player_played  # unused
        check_hand(self.name, hand, count)
        return rank_by_power(hand)[: max(count, 0)]


__all__ = ["FirstCardsAgent", "GreedyAgent", "RandomAgent"]

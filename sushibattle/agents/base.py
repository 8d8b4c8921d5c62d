"""Agent abstractions for the sushi battle opponent."""
from __future__ import annotations

import abc
from typing import Iterable, Optional, Sequence

from ..catalog import Card, CardTuple
from ..exceptions import NoCardsAvailableError
from .evaluation import draft_score


class Agent(abc.ABC):
    """Base class for policies that pick cards from a hand."""

    def __call__(self, hand: Sequence[Card], count: int) -> CardTuple:
        return self.select_cards(hand, count)

    @abc.abstractmethod
    def select_cards(
        self,
        hand: Sequence[Card],
        count: int,
        player_played: Sequence[Card] = (),
    ) -> CardTuple:
        """Return up to ``count`` distinct cards from ``hand`` to play this round.

        Args:
            hand: The agent's current hand.
            count: Number of cards wanted.
            player_played: Cards the human has played so far, oldest first.

        Returns:
            The chosen cards in play order.
        """

    def select_draft_card(self, choices: Sequence[Card], own_hand: Sequence[Card] = ()) -> Optional[int]:
        """Return the index of the draft candidate to keep."""

        ranked = rank_draft_choices(choices, own_hand)
        if not ranked:
            return None
        return ranked[0]

    @property
    def name(self) -> str:
        return self.__class__.__name__


def rank_draft_choices(choices: Sequence[Card], own_hand: Sequence[Card]) -> list[int]:
    # Best first; equal scores keep candidate order.
    return sorted(range(len(choices)), key=lambda i: draft_score(choices[i], own_hand), reverse=True)


def check_hand(agent: str, hand: Sequence[Card], count: int) -> None:
    if count > 0 and not hand:
        raise NoCardsAvailableError(f"{agent} received no cards to choose from")


def ensure_from_hand(selection: Iterable[Card], hand: Sequence[Card]) -> CardTuple:
    """Validate that every chosen card is distinct and held, raising otherwise."""

    chosen = tuple(selection)
    ids = [card.id for card in chosen]
    if len(set(ids)) != len(ids):
        raise ValueError("Agent selected the same card twice")
    held = {card.id for card in hand}
    if any(card_id not in held for card_id in ids):
        raise ValueError("Agent selected a card outside its hand")
    return chosen


__all__ = ["Agent", "check_hand", "ensure_from_hand", "rank_draft_choices"]

"""Draw and discard piles used during the draft."""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional

from . import rules
from .catalog import Card, CardTuple

logger = logging.getLogger(__name__)


class Deck:
    """Owns the shared draw pile and discard pile.

    Draws are taken from the end of the draw pile. Cards handed back with
    :meth:`return_to_top` go to the opposite end, so they come up last.
    """

    def __init__(self, cards: Iterable[Card], rng: Optional[random.Random] = None) -> None:
        self._all: CardTuple = tuple(cards)
        self._rng = rng or random.Random()
        self._draw: List[Card] = []
        self._discard: List[Card] = []
        self.reset()

    @property
    def draw_pile(self) -> CardTuple:
        return tuple(self._draw)

    @property
    def discard_pile(self) -> CardTuple:
        return tuple(self._discard)

    @property
    def remaining(self) -> int:
        """Cards still obtainable through :meth:`draw`."""
        return len(self._draw) + len(self._discard)

    @property
    def size(self) -> int:
        return len(self._all)

    def reset(self) -> None:
        self._draw = list(self._all)
        self._discard = []
        self.shuffle()

    def shuffle(self) -> None:
        # Fisher-Yates, drawing indices from the injected generator.
        pile = self._draw
        for i in range(len(pile) - 1, 0, -1):
            j = self._rng.randint(0, i)
            pile[i], pile[j] = pile[j], pile[i]

    def draw(self) -> Optional[Card]:
        """Return the next card, or ``None`` once both piles are empty."""

        if not self._draw:
            if not self._discard:
                return None
            logger.debug("Draw pile empty; reshuffling %d discarded cards", len(self._discard))
            self._draw = self._discard
            self._discard = []
            self.shuffle()
        return self._draw.pop()

    def draw_many(self, count: int) -> CardTuple:
        drawn: List[Card] = []
        for _ in range(count):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return tuple(drawn)

    def draw_choice(self) -> CardTuple:
        """Draw the pair of candidates offered on a draft turn."""
        return self.draw_many(rules.DRAFT_CHOICES)

    def discard(self, card: Card) -> None:
        self._discard.append(card)

    def return_to_top(self, card: Card) -> None:
        self._draw.insert(0, card)


__all__ = ["Deck"]

"""Pre-battle draft: both sides build their hands from a shared deck."""
from __future__ import annotations

import enum
import logging
from typing import List, Optional

from . import rules
from .agents.base import Agent
from .cards import card_power
from .catalog import Card, CardTuple
from .deck import Deck
from .events import DraftCardSelected, DraftChoicePresented, DraftComplete, EventBus

logger = logging.getLogger(__name__)


class DraftPhase(str, enum.Enum):
    IDLE = "idle"
    PRESENTING = "presenting"
    COMPLETE = "complete"


class DraftEngine:
    """Drives the two-card draft until both hands are full.

    Each turn the player keeps one of two presented cards. The opponent then
    weighs the declined card against a fresh draw and keeps one; the other
    goes back to the deck. Once the player's hand is full the opponent is
    topped up straight from the deck.
    """

    def __init__(
        self,
        deck: Deck,
        *,
        bus: Optional[EventBus] = None,
        hand_size: int = rules.HAND_SIZE,
        opponent: Optional[Agent] = None,
    ) -> None:
        self.deck = deck
        self.bus = bus or EventBus()
        self.hand_size = hand_size
        self.opponent = opponent
        self.phase = DraftPhase.IDLE
        self._player: List[Card] = []
        self._opponent: List[Card] = []
        self._choices: CardTuple = ()

    @property
    def player_hand(self) -> CardTuple:
        return tuple(self._player)

    @property
    def opponent_hand(self) -> CardTuple:
        return tuple(self._opponent)

    @property
    def current_choices(self) -> CardTuple:
        return self._choices

    @property
    def remaining_count(self) -> int:
        return self.hand_size - len(self._player)

    @property
    def is_complete(self) -> bool:
        return self.phase is DraftPhase.COMPLETE

    def start(self) -> CardTuple:
        """Reset the deck and hands, then present the first choice."""

        self._player = []
        self._opponent = []
        self._choices = ()
        self.deck.reset()
        self.phase = DraftPhase.PRESENTING
        logger.debug("Draft started with %d cards in the deck", self.deck.remaining)
        return self.present_next()

    def present_next(self) -> CardTuple:
        """Draw the next pair of candidates, completing the draft when done."""

        if self.phase is not DraftPhase.PRESENTING:
            return ()
        if self._choices:
            return self._choices
        if len(self._player) >= self.hand_size:
            self._complete()
            return ()

        choices = self.deck.draw_choice()
        if len(choices) < rules.DRAFT_CHOICES:
            for card in choices:
                self.deck.return_to_top(card)
            logger.info("Deck ran short with %d cards drafted; ending draft early", len(self._player))
            self._complete()
            return ()

        self._choices = choices
        self.bus.emit(DraftChoicePresented(choices=choices, remaining=self.remaining_count))
        return choices

    def select_card(self, choice_index: int) -> bool:
        """Keep one presented card for the player. Returns False when rejected."""

        if self.phase is not DraftPhase.PRESENTING or len(self._choices) < rules.DRAFT_CHOICES:
            logger.debug("Draft selection rejected in phase %s", self.phase.value)
            return False
        if not (0 <= choice_index < len(self._choices)):
            logger.debug("Draft choice index %d out of range", choice_index)
            return False

        selected = self._choices[choice_index]
        declined = self._choices[1 - choice_index]
        self._player.append(selected)
        self._choices = ()
        self._opponent_pick(declined)

        self.bus.emit(DraftCardSelected(card=selected, total=len(self._player)))
        self.present_next()
        return True

    def _opponent_pick(self, declined: Card) -> None:
        drawn = self.deck.draw()
        if drawn is None:
            self._opponent.append(declined)
            return

        if self.opponent is not None:
            keep_declined = self.opponent.select_draft_card((declined, drawn), self.opponent_hand) == 0
        else:
            keep_declined = card_power(declined) > card_power(drawn)

        if keep_declined:
            self._opponent.append(declined)
            self.deck.return_to_top(drawn)
        else:
            self._opponent.append(drawn)
            self.deck.discard(declined)

    def _complete(self) -> None:
        while len(self._opponent) < self.hand_size:
            card = self.deck.draw()
            if card is None:
                break
            self._opponent.append(card)

        self.phase = DraftPhase.COMPLETE
        logger.debug(
            "Draft complete: player %d cards, opponent %d cards",
            len(self._player),
            len(self._opponent),
        )
        self.bus.emit(DraftComplete(player_hand=self.player_hand, opponent_hand=self.opponent_hand))


__all__ = ["DraftEngine", "DraftPhase"]

"""Kenzo, the scripted opponent, with difficulty-dependent play."""
from __future__ import annotations

import enum
import logging
import random
from typing import Optional, Sequence

from ..catalog import Card, CardTuple
from ..exceptions import InvalidDifficultyError
from .balanced import select_balanced
from .base import Agent, check_hand, ensure_from_hand, rank_draft_choices
from .evaluation import analyze_tendency
from .strategic import select_strategic

logger = logging.getLogger(__name__)

# Probability that normal difficulty plays the strategic line instead of the balanced one.
NORMAL_STRATEGIC_RATE = 0.5
# Probability that easy difficulty keeps the weaker draft candidate.
EASY_DRAFT_BLUNDER_RATE = 0.3


class Difficulty(str, enum.Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "str | Difficulty") -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise InvalidDifficultyError(str(value)) from exc


class KenzoAgent(Agent):
    """Opponent policy dispatching on difficulty.

    easy plays random cards, hard always plays the strategic line, and
    normal flips a coin each round between strategic and balanced play.
    """

    def __init__(
        self,
        difficulty: "str | Difficulty" = Difficulty.NORMAL,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.difficulty = Difficulty.parse(difficulty)
        self._rng = rng or random.Random(seed)

    def set_difficulty(self, difficulty: "str | Difficulty") -> None:
        self.difficulty = Difficulty.parse(difficulty)

    def select_cards(self, hand: Sequence[Card], count: int, player_played: Sequence[Card] = ()) -> CardTuple:
        check_hand(self.name, hand, count)
        tendency = analyze_tendency(player_played)

        if self.difficulty is Difficulty.EASY:
            picks = self._rng.sample(list(hand), min(max(count, 0), len(hand)))
            return ensure_from_hand(picks, hand)
        if self.difficulty is Difficulty.HARD:
            return select_strategic(hand, count, tendency)

        if self._rng.random() < NORMAL_STRATEGIC_RATE:
            logger.debug("Normal difficulty: strategic line (tendency=%s)", tendency)
            return select_strategic(hand, count, tendency)
        logger.debug("Normal difficulty: balanced line")
        return select_balanced(hand, count)

    def select_draft_card(self, choices: Sequence[Card], own_hand: Sequence[Card] = ()) -> Optional[int]:
        if not choices:
            return None
        if len(choices) == 1:
            return 0

        ranked = rank_draft_choices(choices, own_hand)
        if self.difficulty is Difficulty.EASY and self._rng.random() < EASY_DRAFT_BLUNDER_RATE:
            return ranked[-1]
        return ranked[0]

    @property
    def name(self) -> str:
        return f"Kenzo ({self.difficulty.value})"


__all__ = ["Difficulty", "KenzoAgent"]

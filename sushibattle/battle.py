"""Round-based battle between the drafted hands."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from . import rules
from .agents.base import Agent, ensure_from_hand
from .agents.baselines import GreedyAgent
from .cards import Outcome, compare
from .catalog import Card, CardTuple
from .events import BattleReady, BattleResolved, EventBus, GameEnded, PlayerCardSelected, RoundEnded, RoundStarted

logger = logging.getLogger(__name__)

_ROUND_VOICES = ("kenzoRound1", "kenzoRound2", "kenzoRound3")
FINAL_ROUND_VOICE = "kenzoFinalRound"


class BattlePhase(str, enum.Enum):
    SELECTION = "selection"
    BATTLE = "battle"
    RESULT = "result"
    GAMEOVER = "gameover"


@dataclass(frozen=True)
class BattleConfig:
    cards_per_round: int = rules.CARDS_PER_ROUND
    # Feed the player's play history to the opponent so it can counter it.
    counter_player_tendency: bool = False


@dataclass(frozen=True)
class Comparison:
    player_card: Card
    opponent_card: Card
    outcome: Outcome

    @property
    def winner(self) -> str:
        return _side_for(self.outcome)


@dataclass(frozen=True)
class BattleResult:
    comparisons: Tuple[Comparison, ...]
    player_round_score: int
    opponent_round_score: int
    round_winner: str
    total_player_score: int
    total_opponent_score: int


@dataclass(frozen=True)
class GameOutcome:
    winner: str
    player_score: int
    opponent_score: int
    is_flawless: bool
    rounds_played: int


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of a battle."""

    player_score: int
    opponent_score: int
    current_round: int
    phase: BattlePhase
    player_hand: CardTuple
    opponent_hand: CardTuple
    player_selection: CardTuple
    opponent_selection: CardTuple

    @property
    def is_over(self) -> bool:
        return self.phase is BattlePhase.GAMEOVER


class BattleEngine:
    """State machine for selection -> battle -> result rounds until game over.

    Player entry points return ``False`` (or ``None``) and leave state
    untouched when called in the wrong phase or with a bad index.
    """

    def __init__(
        self,
        opponent: Optional[Agent] = None,
        *,
        bus: Optional[EventBus] = None,
        config: Optional[BattleConfig] = None,
    ) -> None:
        self.opponent = opponent or GreedyAgent()
        self.bus = bus or EventBus()
        self.config = config or BattleConfig()

        self.player_score = 0
        self.opponent_score = 0
        self.current_round = 1
        self.phase = BattlePhase.SELECTION
        self.max_rounds = rules.HAND_SIZE // self.config.cards_per_round
        self.outcome: Optional[GameOutcome] = None
        self._active = False
        self._player_hand: List[Card] = []
        self._opponent_hand: List[Card] = []
        self._player_selection: List[Card] = []
        self._opponent_selection: CardTuple = ()
        self._player_played: List[Card] = []

    @property
    def cards_per_round(self) -> int:
        return self.config.cards_per_round

    @property
    def player_hand(self) -> CardTuple:
        return tuple(self._player_hand)

    @property
    def opponent_hand(self) -> CardTuple:
        return tuple(self._opponent_hand)

    @property
    def player_selection(self) -> CardTuple:
        return tuple(self._player_selection)

    @property
    def opponent_selection(self) -> CardTuple:
        return self._opponent_selection

    @property
    def player_played(self) -> CardTuple:
        return tuple(self._player_played)

    @property
    def is_over(self) -> bool:
        return self.phase is BattlePhase.GAMEOVER

    def initialize(self, player_hand: Sequence[Card], opponent_hand: Sequence[Card]) -> None:
        """Start a fresh battle with the drafted hands."""

        self._player_hand = list(player_hand)
        self._opponent_hand = list(opponent_hand)
        self._player_selection = []
        self._opponent_selection = ()
        self._player_played = []
        self.player_score = 0
        self.opponent_score = 0
        self.current_round = 1
        self.max_rounds = max(1, len(self._player_hand) // self.cards_per_round)
        self.outcome = None
        self._active = True
        self.phase = BattlePhase.SELECTION
        logger.debug(
            "Battle initialized: %d player cards, %d opponent cards",
            len(self._player_hand),
            len(self._opponent_hand),
        )
        self._announce_round()

    def select_player_card(self, hand_index: int) -> bool:
        if not self._active or self.phase is not BattlePhase.SELECTION:
            return False
        if len(self._player_selection) >= self.cards_per_round:
            return False
        if not (0 <= hand_index < len(self._player_hand)):
            logger.debug("Hand index %d out of range", hand_index)
            return False

        card = self._player_hand[hand_index]
        if any(selected.id == card.id for selected in self._player_selection):
            logger.debug("Card %s already selected", card.id)
            return False

        self._player_selection.append(card)
        ready = len(self._player_selection) >= self.cards_per_round
        if ready:
            self._prepare_opponent_selection()

        self.bus.emit(PlayerCardSelected(card=card, count=len(self._player_selection)))
        if ready:
            self.bus.emit(BattleReady(player_selection=self.player_selection, opponent_selection=self._opponent_selection))
        return True

    def deselect_player_card(self, selection_index: int) -> bool:
        if not self._active or self.phase is not BattlePhase.SELECTION:
            return False
        if not (0 <= selection_index < len(self._player_selection)):
            return False
        del self._player_selection[selection_index]
        return True

    def can_select_more(self) -> bool:
        return (
            self._active
            and self.phase is BattlePhase.SELECTION
            and len(self._player_selection) < self.cards_per_round
        )

    def can_battle(self) -> bool:
        return self.phase is BattlePhase.BATTLE

    def execute_battle(self) -> Optional[BattleResult]:
        """Resolve the selected pairs in order and score the round."""

        if self.phase is not BattlePhase.BATTLE:
            return None

        comparisons: List[Comparison] = []
        player_round = 0
        opponent_round = 0
        for player_card, opponent_card in zip(self._player_selection, self._opponent_selection):
            outcome = compare(player_card, opponent_card)
            comparisons.append(Comparison(player_card, opponent_card, outcome))
            if outcome is Outcome.FIRST:
                player_round += 1
            elif outcome is Outcome.SECOND:
                opponent_round += 1

        if player_round > opponent_round:
            round_winner = rules.SIDE_PLAYER
            self.player_score += 1
        elif opponent_round > player_round:
            round_winner = rules.SIDE_OPPONENT
            self.opponent_score += 1
        else:
            round_winner = rules.RESULT_TIE

        self.phase = BattlePhase.RESULT
        result = BattleResult(
            comparisons=tuple(comparisons),
            player_round_score=player_round,
            opponent_round_score=opponent_round,
            round_winner=round_winner,
            total_player_score=self.player_score,
            total_opponent_score=self.opponent_score,
        )
        logger.debug(
            "Round %d: %s (%d-%d), total %d-%d",
            self.current_round,
            round_winner,
            player_round,
            opponent_round,
            self.player_score,
            self.opponent_score,
        )
        self.bus.emit(BattleResolved(result=result))
        return result

    def end_round(self) -> bool:
        """Discard the played cards and move on.

        Returns True when a new round has started, False when rejected or
        when the game ended.
        """

        if self.phase is not BattlePhase.RESULT:
            return False

        self._player_played.extend(self._player_selection)
        self._player_hand = _without(self._player_hand, self._player_selection)
        self._opponent_hand = _without(self._opponent_hand, self._opponent_selection)
        self._player_selection = []
        self._opponent_selection = ()

        if self.check_game_end():
            return False

        self.current_round += 1
        self.phase = BattlePhase.SELECTION
        self.bus.emit(RoundEnded(next_round=self.current_round))
        self._announce_round()
        return True

    def check_game_end(self) -> bool:
        """End the game on hand exhaustion or an uncatchable lead."""

        if self.is_over:
            return True

        if len(self._player_hand) < self.cards_per_round or len(self._opponent_hand) < self.cards_per_round:
            logger.debug("Hands exhausted after round %d", self.current_round)
            self.end_game()
            return True

        remaining_rounds = len(self._player_hand) // self.cards_per_round
        score_diff = abs(self.player_score - self.opponent_score)
        if score_diff > remaining_rounds:
            logger.debug("Lead of %d exceeds %d remaining rounds", score_diff, remaining_rounds)
            self.end_game()
            return True

        return False

    def end_game(self) -> GameOutcome:
        self._active = False
        self.phase = BattlePhase.GAMEOVER

        if self.player_score > self.opponent_score:
            winner = rules.SIDE_PLAYER
        elif self.opponent_score > self.player_score:
            winner = rules.SIDE_OPPONENT
        else:
            winner = rules.RESULT_TIE

        is_flawless = (winner == rules.SIDE_PLAYER and self.opponent_score == 0) or (
            winner == rules.SIDE_OPPONENT and self.player_score == 0
        )
        self.outcome = GameOutcome(
            winner=winner,
            player_score=self.player_score,
            opponent_score=self.opponent_score,
            is_flawless=is_flawless,
            rounds_played=self.current_round,
        )
        logger.info(
            "Game over after %d rounds: %s wins %d-%d%s",
            self.current_round,
            winner,
            self.player_score,
            self.opponent_score,
            " (flawless)" if is_flawless else "",
        )
        self.bus.emit(GameEnded(outcome=self.outcome))
        return self.outcome

    def get_state(self) -> GameState:
        return GameState(
            player_score=self.player_score,
            opponent_score=self.opponent_score,
            current_round=self.current_round,
            phase=self.phase,
            player_hand=self.player_hand,
            opponent_hand=self.opponent_hand,
            player_selection=self.player_selection,
            opponent_selection=self.opponent_selection,
        )

    def round_voice(self) -> str:
        if self.current_round >= self.max_rounds or self.current_round > len(_ROUND_VOICES):
            return FINAL_ROUND_VOICE
        return _ROUND_VOICES[self.current_round - 1]

    def _prepare_opponent_selection(self) -> None:
        played = self.player_played if self.config.counter_player_tendency else ()
        picks = self.opponent.select_cards(self.opponent_hand, self.cards_per_round, played)
        self._opponent_selection = ensure_from_hand(picks, self._opponent_hand)
        self.phase = BattlePhase.BATTLE

    def _announce_round(self) -> None:
        self.bus.emit(RoundStarted(round_number=self.current_round, voice=self.round_voice()))


def _without(hand: Sequence[Card], played: Sequence[Card]) -> List[Card]:
    played_ids = {card.id for card in played}
    return [card for card in hand if card.id not in played_ids]


def _side_for(outcome: Outcome) -> str:
    if outcome is Outcome.FIRST:
        return rules.SIDE_PLAYER
    if outcome is Outcome.SECOND:
        return rules.SIDE_OPPONENT
    return rules.RESULT_TIE


__all__ = [
    "BattleConfig",
    "BattleEngine",
    "BattlePhase",
    "BattleResult",
    "Comparison",
    "GameOutcome",
    "GameState",
    "FINAL_ROUND_VOICE",
]

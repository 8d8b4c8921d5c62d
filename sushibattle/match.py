"""A full match: the draft followed by the battle against Kenzo."""
from __future__ import annotations

import logging
import random
from typing import Optional

from . import rules
from .agents.base import Agent
from .agents.baselines import GreedyAgent
from .agents.kenzo import KenzoAgent
from .agents.reactions import FLAWLESS_REACTION, Reaction, generate_reaction
from .battle import BattleEngine, BattleResult, GameState
from .catalog import Catalog, CardTuple, default_catalog, load_catalog
from .config import GameConfig
from .deck import Deck
from .draft import DraftEngine
from .events import BattleResolved, DraftComplete, EventBus, GameEnded

logger = logging.getLogger(__name__)

STAGE_DRAFT = "draft"
STAGE_BATTLE = "battle"
STAGE_GAMEOVER = "gameover"


class Match:
    """Wires the draft and battle engines to one event bus and one seed.

    The completed draft hands its hands to the battle engine. Every player
    input is forwarded to the engine that owns the current stage. Kenzo plays
    his highest-power cards unless ``config.adaptive_opponent`` is set.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        config: Optional[GameConfig] = None,
        *,
        seed: Optional[int] = None,
        opponent: Optional[Agent] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or GameConfig()
        if catalog is None:
            catalog = load_catalog(self.config.catalog_path) if self.config.catalog_path else default_catalog()
        self.catalog = catalog
        self.seed = seed
        self._rng = random.Random(seed)

        self.bus = bus or EventBus()
        opponent_rng = self._child_rng()
        self.deck = Deck(self.catalog.cards, rng=self._child_rng())
        if opponent is None:
            if self.config.adaptive_opponent:
                opponent = KenzoAgent(self.config.difficulty, rng=opponent_rng)
            else:
                opponent = GreedyAgent()
        self.opponent = opponent
        self.draft = DraftEngine(self.deck, bus=self.bus, hand_size=self.config.hand_size)
        self.battle = BattleEngine(self.opponent, bus=self.bus, config=self.config.battle)
        self.stage = STAGE_DRAFT
        self.last_reaction: Optional[Reaction] = None
        self._reaction_rng = self._child_rng()

        self.bus.subscribe(DraftComplete, self._on_draft_complete)
        self.bus.subscribe(BattleResolved, self._on_battle_resolved)
        self.bus.subscribe(GameEnded, self._on_game_ended)

    def start(self) -> CardTuple:
        logger.debug("Starting match (seed=%s, difficulty=%s)", self.seed, self.config.difficulty)
        self.stage = STAGE_DRAFT
        self.last_reaction = None
        return self.draft.start()

    def select_draft_card(self, choice_index: int) -> bool:
        if self.stage != STAGE_DRAFT:
            return False
        return self.draft.select_card(choice_index)

    def select_player_card(self, hand_index: int) -> bool:
        if self.stage != STAGE_BATTLE:
            return False
        return self.battle.select_player_card(hand_index)

    def deselect_player_card(self, selection_index: int) -> bool:
        if self.stage != STAGE_BATTLE:
            return False
        return self.battle.deselect_player_card(selection_index)

    def execute_battle(self) -> Optional[BattleResult]:
        if self.stage != STAGE_BATTLE:
            return None
        return self.battle.execute_battle()

    def end_round(self) -> bool:
        if self.stage != STAGE_BATTLE:
            return False
        return self.battle.end_round()

    def game_state(self) -> GameState:
        return self.battle.get_state()

    @property
    def is_over(self) -> bool:
        return self.stage == STAGE_GAMEOVER

    def _child_rng(self) -> random.Random:
        return random.Random(self._rng.getrandbits(64))

    def _on_draft_complete(self, event: DraftComplete) -> None:
        self.stage = STAGE_BATTLE
        self.battle.initialize(event.player_hand, event.opponent_hand)
        cards_per_round = self.config.cards_per_round
        if len(event.player_hand) < cards_per_round or len(event.opponent_hand) < cards_per_round:
            self.battle.check_game_end()

    def _on_battle_resolved(self, event: BattleResolved) -> None:
        self.last_reaction = generate_reaction(event.result.round_winner, rng=self._reaction_rng)

    def _on_game_ended(self, event: GameEnded) -> None:
        self.stage = STAGE_GAMEOVER
        if event.outcome.is_flawless and event.outcome.winner == rules.SIDE_PLAYER:
            self.last_reaction = FLAWLESS_REACTION


__all__ = ["Match", "STAGE_BATTLE", "STAGE_DRAFT", "STAGE_GAMEOVER"]

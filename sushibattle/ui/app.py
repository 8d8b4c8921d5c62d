"""FastAPI application exposing a match to the browser front end."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, replace
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ..agents.kenzo import Difficulty
from ..battle import BattlePhase, BattleResult, GameOutcome
from ..catalog import Card, Catalog
from ..config import GameConfig
from ..match import Match

logger = logging.getLogger(__name__)


@dataclass
class SessionStore:
    """In-memory holder for the current match."""

    match: Optional[Match] = None
    last_result: Optional[BattleResult] = None

    def require_match(self) -> Match:
        if self.match is None:
            raise HTTPException(status_code=404, detail="No active game")
        return self.match


class NewGameRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    seed: Optional[int] = None
    difficulty: Difficulty = Difficulty.NORMAL
    adaptive_opponent: Optional[bool] = Field(default=None, alias="adaptiveOpponent")


class DraftChoicePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    choice_index: int = Field(alias="choiceIndex")


class HandIndexPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    hand_index: int = Field(alias="handIndex")


class SelectionIndexPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)
    selection_index: int = Field(alias="selectionIndex")


def create_app(config: Optional[GameConfig] = None, catalog: Optional[Catalog] = None) -> FastAPI:
    store = SessionStore()
    base_config = config or GameConfig()
    app = FastAPI(title="Kenzo's Sushi Battlegrounds", version="0.1.0")

    @app.post("/api/new-game")
    def api_new_game(request: NewGameRequest) -> dict:
        seed = request.seed if request.seed is not None else secrets.randbits(32)
        game_config = replace(base_config, difficulty=request.difficulty.value)
        if request.adaptive_opponent is not None:
            game_config = replace(game_config, adaptive_opponent=request.adaptive_opponent)
        store.match = Match(catalog, game_config, seed=seed)
        store.last_result = None
        store.match.start()
        logger.info("New game started (seed=%d, difficulty=%s)", seed, request.difficulty.value)
        return _serialize(store)

    @app.get("/api/state")
    def api_state() -> dict:
        store.require_match()
        return _serialize(store)

    @app.post("/api/draft/select")
    def api_draft_select(payload: DraftChoicePayload) -> dict:
        match = store.require_match()
        if not match.select_draft_card(payload.choice_index):
            raise HTTPException(status_code=400, detail="Illegal draft choice")
        return _serialize(store)

    @app.post("/api/battle/select")
    def api_battle_select(payload: HandIndexPayload) -> dict:
        match = store.require_match()
        if not match.select_player_card(payload.hand_index):
            raise HTTPException(status_code=400, detail="Illegal card selection")
        return _serialize(store)

    @app.post("/api/battle/deselect")
    def api_battle_deselect(payload: SelectionIndexPayload) -> dict:
        match = store.require_match()
        if not match.deselect_player_card(payload.selection_index):
            raise HTTPException(status_code=400, detail="Illegal deselection")
        return _serialize(store)

    @app.post("/api/battle/execute")
    def api_battle_execute() -> dict:
        match = store.require_match()
        result = match.execute_battle()
        if result is None:
            raise HTTPException(status_code=400, detail="Battle not ready")
        store.last_result = result
        return _serialize(store)

    @app.post("/api/battle/end-round")
    def api_battle_end_round() -> dict:
        match = store.require_match()
        if match.battle.phase is not BattlePhase.RESULT:
            raise HTTPException(status_code=400, detail="Round not finished")
        match.end_round()
        store.last_result = None
        return _serialize(store)

    return app


def _serialize(store: SessionStore) -> dict:
    match = store.require_match()
    draft = match.draft
    battle = match.battle
    state = battle.get_state()
    return {
        "seed": match.seed,
        "stage": match.stage,
        "difficulty": match.config.difficulty,
        "adaptiveOpponent": match.config.adaptive_opponent,
        "draft": {
            "choices": [_card_view(card) for card in draft.current_choices],
            "remaining": draft.remaining_count,
            "playerHand": [_card_view(card) for card in draft.player_hand],
        },
        "battle": {
            "phase": state.phase.value,
            "round": state.current_round,
            "playerScore": state.player_score,
            "opponentScore": state.opponent_score,
            "playerHand": [_card_view(card) for card in state.player_hand],
            "opponentHandSize": len(state.opponent_hand),
            "playerSelection": [_card_view(card) for card in state.player_selection],
            "opponentSelection": [_card_view(card) for card in state.opponent_selection],
            "canSelectMore": battle.can_select_more(),
            "canBattle": battle.can_battle(),
            "lastResult": _result_view(store.last_result),
        },
        "outcome": _outcome_view(battle.outcome),
        "reaction": (
            {"emote": match.last_reaction.emote, "voice": match.last_reaction.voice}
            if match.last_reaction is not None
            else None
        ),
    }


def _card_view(card: Card) -> dict:
    return {
        "id": card.id,
        "name": card.name,
        "tier": card.tier,
        "type": card.type,
        "attack": card.attack,
        "defense": card.defense,
        "healing": card.healing,
    }


def _result_view(result: Optional[BattleResult]) -> Optional[dict]:
    if result is None:
        return None
    comparisons: List[dict] = [
        {
            "playerCard": _card_view(comparison.player_card),
            "opponentCard": _card_view(comparison.opponent_card),
            "winner": comparison.winner,
        }
        for comparison in result.comparisons
    ]
    return {
        "comparisons": comparisons,
        "playerRoundScore": result.player_round_score,
        "opponentRoundScore": result.opponent_round_score,
        "roundWinner": result.round_winner,
        "totalPlayerScore": result.total_player_score,
        "totalOpponentScore": result.total_opponent_score,
    }


def _outcome_view(outcome: Optional[GameOutcome]) -> Optional[dict]:
    if outcome is None:
        return None
    return {
        "winner": outcome.winner,
        "playerScore": outcome.player_score,
        "opponentScore": outcome.opponent_score,
        "isFlawless": outcome.is_flawless,
        "roundsPlayed": outcome.rounds_played,
    }


__all__ = ["create_app"]

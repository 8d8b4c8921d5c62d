"""Batch simulation entry point."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .agents.base import Agent
from .agents.baselines import FirstCardsAgent
from .battle import BattlePhase, BattleResult, GameOutcome
from .catalog import Catalog, CardTuple
from .config import GameConfig
from .match import Match


@dataclass
class SimulationConfig:
    seed: int
    games: int = 1
    game: Optional[GameConfig] = None
    player: Optional[Agent] = None
    opponent: Optional[Agent] = None
    catalog: Optional[Catalog] = None


@dataclass(frozen=True)
class MatchRecord:
    """Everything that happened in one simulated match."""

    index: int
    seed: int
    player_hand: CardTuple
    opponent_hand: CardTuple
    rounds: Tuple[BattleResult, ...]
    outcome: GameOutcome


def new_match(seed: int, config: Optional[SimulationConfig] = None) -> Match:
    """Create and start a match using the deterministic seed."""

    config = config or SimulationConfig(seed=seed)
    match = Match(config.catalog, config.game, seed=seed, opponent=config.opponent)
    match.start()
    return match


def run(config: SimulationConfig) -> Iterator[MatchRecord]:
    """Play one or more headless matches.

    The player side defaults to a deterministic policy (first draft choice,
    leading hand cards). Seeds advance by one per game, so re-running the
    same config yields identical records.
    """

    if config.games < 1:
        raise ValueError("Number of games must be at least 1")

    player = config.player or FirstCardsAgent()
    for offset in range(config.games):
        game_seed = config.seed + offset
        match = new_match(game_seed, config)
        yield play_match(match, player, index=offset)


def play_match(match: Match, player: Agent, *, index: int = 0) -> MatchRecord:
    """Drive a started match to game over with ``player`` making every choice."""

    _play_draft(match, player)
    player_hand = match.battle.player_hand
    opponent_hand = match.battle.opponent_hand

    rounds: List[BattleResult] = []
    while not match.is_over:
        _select_round(match, player)
        result = match.execute_battle()
        if result is None:
            raise RuntimeError("Battle could not be executed after selection")
        rounds.append(result)
        match.end_round()

    outcome = match.battle.outcome
    if outcome is None:
        raise RuntimeError("Match ended without a recorded outcome")
    return MatchRecord(
        index=index,
        seed=match.seed if match.seed is not None else 0,
        player_hand=player_hand,
        opponent_hand=opponent_hand,
        rounds=tuple(rounds),
        outcome=outcome,
    )


def _play_draft(match: Match, player: Agent) -> None:
    draft = match.draft
    while not draft.is_complete:
        choice = player.select_draft_card(draft.current_choices, draft.player_hand)
        if choice is None or not match.select_draft_card(choice):
            raise RuntimeError("Player agent made an invalid draft choice")


def _select_round(match: Match, player: Agent) -> None:
    battle = match.battle
    if battle.phase is not BattlePhase.SELECTION:
        raise RuntimeError(f"Expected selection phase, found {battle.phase.value}")

    hand = battle.player_hand
    picks = player.select_cards(hand, battle.cards_per_round, ())
    ids = [card.id for card in hand]
    for card in picks:
        if not match.select_player_card(ids.index(card.id)):
            raise RuntimeError(f"Player agent selection of {card.id} was rejected")


__all__ = [
    "MatchRecord",
    "SimulationConfig",
    "new_match",
    "play_match",
    "run",
]

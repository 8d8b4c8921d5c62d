"""Series runner for bulk evaluation of player policies against Kenzo."""
from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, Sequence

from . import rules
from .agents import BalancedAgent, FirstCardsAgent, GreedyAgent, RandomAgent, StrategicAgent
from .agents.base import Agent
from .agents.kenzo import Difficulty
from .config import GameConfig
from .logging_config import setup_logging
from .simulate import MatchRecord, SimulationConfig, run


@dataclass
class SeriesSummary:
    """Aggregated statistics for a series of matches."""

    games: int
    wins: tuple[int, int]
    ties: int
    flawless: int
    average_scores: tuple[float, float]
    average_rounds: float


@dataclass
class SeriesResult:
    summary: SeriesSummary
    records: list[MatchRecord]


_AGENT_LOOKUP: Dict[str, Callable[[int], Agent]] = {
    "first": lambda seed: FirstCardsAgent(),
    "random": lambda seed: RandomAgent(seed=seed),
    "greedy": lambda seed: GreedyAgent(),
    "balanced": lambda seed: BalancedAgent(),
    "strategic": lambda seed: StrategicAgent(),
}


def play_series(games: int, seed: int, player: Agent, game: GameConfig) -> SeriesResult:
    records = list(run(SimulationConfig(seed=seed, games=games, game=game, player=player)))
    return SeriesResult(summary=summarize(records), records=records)


def summarize(records: Sequence[MatchRecord]) -> SeriesSummary:
    if not records:
        raise ValueError("Cannot summarize an empty series")

    games = len(records)
    player_wins = sum(1 for r in records if r.outcome.winner == rules.SIDE_PLAYER)
    opponent_wins = sum(1 for r in records if r.outcome.winner == rules.SIDE_OPPONENT)
    return SeriesSummary(
        games=games,
        wins=(player_wins, opponent_wins),
        ties=games - player_wins - opponent_wins,
        flawless=sum(1 for r in records if r.outcome.is_flawless),
        average_scores=(
            sum(r.outcome.player_score for r in records) / games,
            sum(r.outcome.opponent_score for r in records) / games,
        ),
        average_rounds=sum(len(r.rounds) for r in records) / games,
    )


def export_json(path: Path, records: Sequence[MatchRecord]) -> None:
    payload = [
        {
            "index": r.index,
            "seed": r.seed,
            "winner": r.outcome.winner,
            "scores": [r.outcome.player_score, r.outcome.opponent_score],
            "flawless": r.outcome.is_flawless,
            "playerHand": [card.id for card in r.player_hand],
            "opponentHand": [card.id for card in r.opponent_hand],
            "rounds": [
                {
                    "winner": result.round_winner,
                    "pairs": [
                        [c.player_card.id, c.opponent_card.id, c.winner] for c in result.comparisons
                    ],
                }
                for result in r.rounds
            ],
        }
        for r in records
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _agent_from_name(name: str, seed: int) -> Agent:
    try:
        factory = _AGENT_LOOKUP[name]
    except KeyError as exc:
        raise ValueError(f"Unknown agent '{name}'") from exc
    return factory(seed)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play a series of matches against Kenzo")
    parser.add_argument(
        "player",
        nargs="?",
        default="greedy",
        help=f"Player policy ({', '.join(sorted(_AGENT_LOOKUP))})",
    )
    parser.add_argument("--games", type=int, default=1000, help="Number of matches to play")
    parser.add_argument("--seed", type=int, default=2025, help="Base seed for the series")
    parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.NORMAL.value,
        help="Kenzo's difficulty",
    )
    parser.add_argument("--counter-tendency", action="store_true", help="Let Kenzo counter the player's habits")
    parser.add_argument("--adaptive", action="store_true", help="Let Kenzo choose battle cards by difficulty")
    parser.add_argument("--config", type=Path, help="YAML file with game settings")
    parser.add_argument("--json", type=Path, help="Path to write per-match telemetry as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> SeriesResult:
    args = _parse_args(argv)
    setup_logging(args.log_level, format_json=args.log_json)

    base = GameConfig.from_yaml(args.config) if args.config else GameConfig.from_env()
    game = replace(
        base,
        difficulty=args.difficulty,
        counter_player_tendency=args.counter_tendency or base.counter_player_tendency,
        adaptive_opponent=args.adaptive or base.adaptive_opponent,
    )
    player = _agent_from_name(args.player, args.seed)

    result = play_series(args.games, args.seed, player, game)
    _print_summary(result.summary, label=args.player, difficulty=args.difficulty)

    if args.json:
        export_json(args.json, result.records)
        print(f"Wrote JSON telemetry to {args.json}")
    return result


def _print_summary(summary: SeriesSummary, *, label: str, difficulty: str) -> None:
    print(
        f"Games: {summary.games}\n"
        f"Wins: {label}={summary.wins[0]} kenzo[{difficulty}]={summary.wins[1]} Ties={summary.ties}\n"
        f"Flawless: {summary.flawless}\n"
        f"Average scores: {label}={summary.average_scores[0]:.2f} kenzo={summary.average_scores[1]:.2f}\n"
        f"Average rounds: {summary.average_rounds:.2f}"
    )


__all__ = ["SeriesResult", "SeriesSummary", "export_json", "main", "play_series", "summarize"]


if __name__ == "__main__":  # pragma: no cover - CLI support
    main()

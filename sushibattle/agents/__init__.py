"""Opponent agents and their shared heuristics."""

from .balanced import BalancedAgent
from .base import Agent, ensure_from_hand
from .baselines import FirstCardsAgent, GreedyAgent, RandomAgent
from .evaluation import analyze_tendency, counter_type, draft_score, evaluate_card
from .kenzo import Difficulty, KenzoAgent
from .reactions import Reaction, generate_reaction
from .strategic import StrategicAgent

__all__ = [
    "Agent",
    "ensure_from_hand",
    "BalancedAgent",
    "FirstCardsAgent",
    "GreedyAgent",
    "RandomAgent",
    "StrategicAgent",
    "Difficulty",
    "KenzoAgent",
    "Reaction",
    "generate_reaction",
    "analyze_tendency",
    "counter_type",
    "draft_score",
    "evaluate_card",
]

"""Draft and battle core for Kenzo's Sushi Battlegrounds."""

from . import agents, battle, cards, catalog, config, deck, draft, events, match, rules, simulate

__all__ = [
    "agents",
    "battle",
    "cards",
    "catalog",
    "config",
    "deck",
    "draft",
    "events",
    "match",
    "rules",
    "simulate",
]

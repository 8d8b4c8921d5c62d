"""Immutable card definitions and the catalog loader."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple

import yaml

from . import rules
from .exceptions import (
    CatalogError,
    DuplicateCardError,
    InvalidCardTypeError,
    InvalidTierError,
    UnknownCardError,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "cards.yaml"

_REQUIRED_FIELDS = ("id", "name", "tier", "type", "attack", "defense", "healing")

CardTuple = Tuple["Card", ...]


@dataclass(frozen=True)
class Card:
    """A single playable sushi card.

    Only the tier and stats are checked here. The catalog loader rejects
    unknown types; hand-built cards may carry one and compare on attack.
    """

    id: str
    name: str
    tier: str
    type: str
    attack: int
    defense: int
    healing: int

    def __post_init__(self) -> None:
        if self.tier not in rules.TIERS:
            raise InvalidTierError(self.tier)
        for stat in (self.attack, self.defense, self.healing):
            if stat < 0:
                raise CatalogError(f"Card {self.id} has a negative stat")

    @property
    def total_stats(self) -> int:
        return self.attack + self.defense + self.healing


class Catalog:
    """Read-only collection of every card available to a match."""

    def __init__(self, cards: Iterable[Card]) -> None:
        ordered = tuple(cards)
        index: dict[str, Card] = {}
        for card in ordered:
            if card.id in index:
                raise DuplicateCardError(card.id)
            index[card.id] = card
        self._cards: CardTuple = ordered
        self._index = index

    @property
    def cards(self) -> CardTuple:
        return self._cards

    def get(self, card_id: str) -> Card:
        try:
            return self._index[card_id]
        except KeyError as exc:
            raise UnknownCardError(card_id) from exc

    def by_type(self, card_type: str) -> CardTuple:
        return tuple(card for card in self._cards if card.type == card_type)

    def by_tier(self, tier: str) -> CardTuple:
        return tuple(card for card in self._cards if card.tier == tier)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._index

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Catalog({len(self._cards)} cards)"


def card_from_mapping(data: Mapping[str, Any]) -> Card:
    """Build a validated card from a raw catalog entry."""

    missing = [name for name in _REQUIRED_FIELDS if name not in data]
    if missing:
        raise CatalogError(f"Catalog entry {data.get('id', '?')} is missing {', '.join(missing)}")

    card_type = str(data["type"])
    if card_type not in rules.CARD_TYPES:
        raise InvalidCardTypeError(card_type)

    try:
        attack, defense, healing = (int(data[name]) for name in ("attack", "defense", "healing"))
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Catalog entry {data['id']} has a non-integer stat") from exc

    return Card(
        id=str(data["id"]),
        name=str(data["name"]),
        tier=str(data["tier"]),
        type=card_type,
        attack=attack,
        defense=defense,
        healing=healing,
    )


def load_catalog(path: Optional[str | Path] = None) -> Catalog:
    """Load a catalog from YAML, defaulting to the bundled card list."""

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    with open(catalog_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, Mapping) or not isinstance(data.get("cards"), list):
        raise CatalogError(f"{catalog_path} must define a top-level 'cards' list")

    catalog = Catalog(card_from_mapping(entry) for entry in data["cards"])
    logger.debug("Loaded %d cards from %s", len(catalog), catalog_path)
    return catalog


_default: Optional[Catalog] = None


def default_catalog() -> Catalog:
    """Return the bundled catalog, loading it once per process."""

    global _default
    if _default is None:
        _default = load_catalog()
    return _default


__all__ = [
    "Card",
    "CardTuple",
    "Catalog",
    "DEFAULT_CATALOG_PATH",
    "card_from_mapping",
    "default_catalog",
    "load_catalog",
]

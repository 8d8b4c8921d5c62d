"""Custom exception classes for the sushi battle core."""

from __future__ import annotations


class SushiBattleError(Exception):
    """Base exception for all sushi battle errors."""


class CatalogError(SushiBattleError):
    """Raised when card catalog data is malformed."""


class DuplicateCardError(CatalogError):
    """Raised when two catalog entries share an id."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Duplicate card id: {card_id}")


class InvalidTierError(CatalogError):
    """Raised when a card references an unknown tier."""

    def __init__(self, tier: str) -> None:
        self.tier = tier
        super().__init__(f"Unknown card tier: {tier}")


class InvalidCardTypeError(CatalogError):
    """Raised when a catalog entry references an unknown card type."""

    def __init__(self, card_type: str) -> None:
        self.card_type = card_type
        super().__init__(f"Unknown card type: {card_type}")


class UnknownCardError(CatalogError, KeyError):
    """Raised when looking up a card id that is not in the catalog."""

    def __init__(self, card_id: str) -> None:
        self.card_id = card_id
        super().__init__(f"Unknown card id: {card_id}")


class InvalidDifficultyError(SushiBattleError, ValueError):
    """Raised when an unknown AI difficulty is requested."""

    def __init__(self, difficulty: str) -> None:
        self.difficulty = difficulty
        super().__init__(f"Unknown difficulty: {difficulty}. Use easy, normal or hard.")


class NoCardsAvailableError(SushiBattleError, RuntimeError):
    """Raised when an agent is asked to choose from an empty hand."""


class ConfigError(SushiBattleError):
    """Raised when game configuration values are invalid."""


__all__ = [
    "CatalogError",
    "ConfigError",
    "DuplicateCardError",
    "InvalidCardTypeError",
    "InvalidDifficultyError",
    "InvalidTierError",
    "NoCardsAvailableError",
    "SushiBattleError",
    "UnknownCardError",
]

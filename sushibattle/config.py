"""Game configuration loaded from defaults, YAML files or the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from . import rules
from .agents.kenzo import Difficulty
from .battle import BattleConfig
from .exceptions import ConfigError, InvalidDifficultyError

ENV_PREFIX = "SUSHIBATTLE_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class GameConfig:
    """Settings for a single match."""

    hand_size: int = rules.HAND_SIZE
    cards_per_round: int = rules.CARDS_PER_ROUND
    difficulty: str = Difficulty.NORMAL.value
    counter_player_tendency: bool = False
    # Let Kenzo pick battle cards by difficulty instead of highest power first.
    adaptive_opponent: bool = False
    catalog_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.cards_per_round < 1:
            raise ConfigError("cards_per_round must be at least 1")
        if self.hand_size < self.cards_per_round:
            raise ConfigError("hand_size must hold at least one round of cards")
        try:
            Difficulty.parse(self.difficulty)
        except InvalidDifficultyError as exc:
            raise ConfigError(str(exc)) from exc

    @property
    def battle(self) -> BattleConfig:
        return BattleConfig(
            cards_per_round=self.cards_per_round,
            counter_player_tendency=self.counter_player_tendency,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GameConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, Mapping):
            raise ConfigError(f"{path} must contain a mapping")
        return cls.from_mapping(data)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> GameConfig:
        """Build configuration from ``SUSHIBATTLE_*`` variables."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            data[f.name] = _coerce(f.name, raw, f.type)
        return cls(**data)


def _coerce(name: str, raw: str, annotation: Any) -> Any:
    kind = str(annotation)
    if kind == "int":
        try:
            return int(raw)
        except ValueError as exc:
            raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if kind == "bool":
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise ConfigError(f"{name} must be a boolean, got {raw!r}")
    return raw


__all__ = ["ENV_PREFIX", "GameConfig"]

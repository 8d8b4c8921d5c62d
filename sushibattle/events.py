"""Typed events emitted by the draft and battle engines."""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, DefaultDict, List, Type, TypeVar

from .catalog import Card, CardTuple

if TYPE_CHECKING:
    from .battle import BattleResult, GameOutcome

logger = logging.getLogger(__name__)


class Event:
    """Marker base class for engine events."""


@dataclass(frozen=True)
class RoundStarted(Event):
    round_number: int
    voice: str


@dataclass(frozen=True)
class DraftChoicePresented(Event):
    choices: CardTuple
    remaining: int


@dataclass(frozen=True)
class DraftCardSelected(Event):
    card: Card
    total: int


@dataclass(frozen=True)
class DraftComplete(Event):
    player_hand: CardTuple
    opponent_hand: CardTuple


@dataclass(frozen=True)
class PlayerCardSelected(Event):
    card: Card
    count: int


@dataclass(frozen=True)
class BattleReady(Event):
    player_selection: CardTuple
    opponent_selection: CardTuple


@dataclass(frozen=True)
class BattleResolved(Event):
    result: "BattleResult"


@dataclass(frozen=True)
class RoundEnded(Event):
    next_round: int


@dataclass(frozen=True)
class GameEnded(Event):
    outcome: "GameOutcome"


E = TypeVar("E", bound=Event)
Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe hub.

    Handlers for an event type run in subscription order, on the caller's
    thread, after the emitting engine has finished its state change.
    Subscribing to :class:`Event` receives every event.
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[type, List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        self._handlers[event_type].append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def emit(self, event: Event) -> None:
        targets = list(self._handlers.get(type(event), ()))
        targets += self._handlers.get(Event, ())
        for handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, type(event).__name__)
                raise


__all__ = [
    "BattleReady",
    "BattleResolved",
    "DraftCardSelected",
    "DraftChoicePresented",
    "DraftComplete",
    "Event",
    "EventBus",
    "GameEnded",
    "PlayerCardSelected",
    "RoundEnded",
    "RoundStarted",
]

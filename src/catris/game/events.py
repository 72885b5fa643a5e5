"""Events published by the game engine.

Renderers, audio and score displays subscribe to an `EventBus`. Delivery is
synchronous but fire-and-forget: an observer that raises is logged and skipped,
and never affects the engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Type

from .grid import Position
from .pieces import TetrominoType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEvent:
    pass


@dataclass(frozen=True)
class StateChanged(GameEvent):
    reason: str


@dataclass(frozen=True)
class PieceLocked(GameEvent):
    kind: TetrominoType
    position: Position


@dataclass(frozen=True)
class LinesCleared(GameEvent):
    count: int
    rows: Tuple[int, ...]


@dataclass(frozen=True)
class ScoreChanged(GameEvent):
    score: int


@dataclass(frozen=True)
class GameOver(GameEvent):
    score: int
    reason: str


Observer = Callable[[GameEvent], None]


class EventBus:
    def __init__(self) -> None:
        self._observers: Dict[Optional[Type[GameEvent]], List[Observer]] = {}

    def subscribe(self, callback: Observer, event_type: Optional[Type[GameEvent]] = None) -> Callable[[], None]:
        """Register `callback` for one event type, or for every event when None.

        Returns a function that removes the subscription.
        """
        self._observers.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._observers.get(event_type, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def publish(self, event: GameEvent) -> None:
        callbacks = list(self._observers.get(type(event), [])) + list(self._observers.get(None, []))
        for callback in callbacks:
            try:
                callback(event)
            except Exception:
                logger.exception("observer %r failed on %s", callback, type(event).__name__)

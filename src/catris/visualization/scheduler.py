from __future__ import annotations

import itertools
from typing import Callable, Dict

import pygame

from catris.game import TimerHandle


class PygameScheduler:
    """Gravity timers backed by `pygame.time.set_timer`.

    All timers share one user event type, so only one interval runs at a time;
    a new schedule replaces the previous one. Each schedule tags its events with
    a fresh `gen` id, and events still queued for a cancelled timer are dropped
    by `dispatch`.
    """

    def __init__(self) -> None:
        self.event_type = pygame.event.custom_type()
        self._generations = itertools.count(1)
        self._callbacks: Dict[int, Callable[[], None]] = {}

    def schedule_interval(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        gen = next(self._generations)
        event = pygame.event.Event(self.event_type, gen=gen)
        self._callbacks.clear()
        self._callbacks[gen] = callback
        pygame.time.set_timer(event, int(interval_ms))

        def _cancel() -> None:
            self._callbacks.pop(gen, None)
            # set_timer keys on the event type: only stop it if no newer timer replaced it
            if not self._callbacks:
                pygame.time.set_timer(self.event_type, 0)

        return TimerHandle(_cancel)

    def dispatch(self, event: pygame.event.Event) -> bool:
        if event.type != self.event_type:
            return False
        callback = self._callbacks.get(getattr(event, "gen", None))
        if callback is None:
            return False
        callback()
        return True

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol


Callback = Callable[[], None]


class TimerHandle:
    """Cancelable handle to a repeating timer. Cancelling twice is harmless."""

    def __init__(self, on_cancel: Optional[Callback] = None) -> None:
        self._on_cancel = on_cancel
        self.active = True

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._on_cancel is not None:
            self._on_cancel()


class Scheduler(Protocol):
    def schedule_interval(self, interval_ms: int, callback: Callback) -> TimerHandle:
        ...


@dataclass
class _Interval:
    interval_ms: int
    callback: Callback
    next_due: int
    handle: TimerHandle = field(default_factory=TimerHandle)


class ManualScheduler:
    """Virtual-time scheduler: nothing fires until `advance` is called."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._timers: List[_Interval] = []

    def schedule_interval(self, interval_ms: int, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        timer = _Interval(interval_ms=int(interval_ms), callback=callback, next_due=self.now_ms + int(interval_ms))

        def _remove() -> None:
            if timer in self._timers:
                self._timers.remove(timer)

        timer.handle = TimerHandle(_remove)
        self._timers.append(timer)
        return timer.handle

    @property
    def pending(self) -> int:
        return sum(1 for t in self._timers if t.handle.active)

    def advance(self, ms: int) -> int:
        """Move virtual time forward, firing due callbacks in order. Returns the fire count."""
        target = self.now_ms + int(ms)
        fired = 0
        while True:
            due = [t for t in self._timers if t.handle.active and t.next_due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due)
            self.now_ms = timer.next_due
            timer.next_due += timer.interval_ms
            timer.callback()
            fired += 1
        self.now_ms = target
        return fired

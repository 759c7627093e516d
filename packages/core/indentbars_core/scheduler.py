"""Cooperative timers fired from the host's own event loop."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(eq=False)
class TimerHandle:
    when: float
    callback: Callable[..., Any]
    args: tuple[Any, ...] = ()
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class CooperativeScheduler:
    """Timers that only run when the host calls :meth:`run_due`.

    Nothing here starts threads; callbacks execute on the caller's thread.
    """

    clock: Callable[[], float] = time.monotonic
    _timers: list[TimerHandle] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        handle = TimerHandle(when=self.clock() + max(0.0, delay), callback=callback, args=args)
        self._timers.append(handle)
        return handle

    def retarget(self, handle: TimerHandle, delay: float, *args: Any) -> TimerHandle:
        """Move a pending timer to a new fire time with new arguments."""
        if not handle.active:
            return self.call_later(delay, handle.callback, *args)
        handle.when = self.clock() + max(0.0, delay)
        handle.args = args
        return handle

    def pending(self) -> list[TimerHandle]:
        self._timers = [t for t in self._timers if t.active]
        return list(self._timers)

    def next_due(self) -> float | None:
        pending = self.pending()
        if not pending:
            return None
        return min(t.when for t in pending)

    def run_due(self, now: float | None = None) -> int:
        now = self.clock() if now is None else now
        due = sorted((t for t in self.pending() if t.when <= now), key=lambda t: t.when)
        for handle in due:
            if not handle.active:
                continue
            handle.fired = True
            handle.callback(*handle.args)
        self._timers = [t for t in self._timers if t.active]
        return len(due)

    def cancel_all(self) -> None:
        for handle in self._timers:
            handle.cancel()
        self._timers.clear()

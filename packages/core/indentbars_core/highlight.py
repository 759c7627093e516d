"""Current-depth highlight tracking with a single debounced update."""

from __future__ import annotations

from enum import Enum

from .depth import DepthCalculator
from .logging_setup import get_logger
from .scheduler import CooperativeScheduler, TimerHandle
from .styles import StyleRegistry

INVALID_DEPTH = -1

_log = get_logger("highlight")


class HighlightState(str, Enum):
    IDLE = "Idle"
    PENDING_UPDATE = "PendingUpdate"


class HighlightController:
    def __init__(
        self,
        registry: StyleRegistry,
        calc: DepthCalculator,
        scheduler: CooperativeScheduler,
        delay: float = 0.075,
    ) -> None:
        self.registry = registry
        self.calc = calc
        self.scheduler = scheduler
        self.delay = max(0.0, float(delay))
        self.state = HighlightState.IDLE
        self.applied_depth = INVALID_DEPTH
        self.target_depth = INVALID_DEPTH
        self._timer: TimerHandle | None = None

    @property
    def pending_timer(self) -> TimerHandle | None:
        if self._timer is not None and self._timer.active:
            return self._timer
        return None

    def on_cursor_move(self, width: int) -> int:
        """Track the caret's indentation ``width``; returns the targeted depth."""
        depth = self.calc.depth_on_bar(width)
        if depth == self.target_depth:
            return depth
        self.target_depth = depth

        if self.delay == 0:
            self.apply(depth)
            return depth

        timer = self.pending_timer
        if timer is None:
            self._timer = self.scheduler.call_later(self.delay, self._fire, depth)
        else:
            self._timer = self.scheduler.retarget(timer, self.delay, depth)
        self.state = HighlightState.PENDING_UPDATE
        return depth

    def _fire(self, depth: int) -> None:
        self._timer = None
        self.apply(depth)

    def apply(self, depth: int) -> None:
        """Swap every style's override to ``depth``; depth 0 only removes it."""
        for style in self.registry:
            style.overlay = None
            if depth > 0:
                style.overlay = self.registry.make_overlay(style, depth)
        self.applied_depth = depth
        self.target_depth = depth
        self.state = HighlightState.IDLE
        _log.debug("highlight applied depth=%s", depth, extra={"event": "highlight_applied"})

    def force_refresh(self) -> None:
        """Make the next cursor event reapply the highlight with fresh resources."""
        self.applied_depth = INVALID_DEPTH
        self.target_depth = INVALID_DEPTH

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self.state = HighlightState.IDLE

    def clear(self) -> None:
        self.cancel()
        for style in self.registry:
            style.overlay = None
        self.force_refresh()

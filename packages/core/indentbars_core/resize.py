"""Stipple regeneration on font or window geometry changes."""

from __future__ import annotations

from indentbars_renderer.models import CellMetrics

from .highlight import HighlightController
from .logging_setup import get_logger
from .styles import StyleRegistry

_log = get_logger("resize")


class ResizeCoordinator:
    def __init__(self, registry: StyleRegistry, controller: HighlightController | None = None) -> None:
        self.registry = registry
        self.controller = controller
        self._geometry: tuple[int, int, int] | None = None
        if registry.metrics is not None:
            m = registry.metrics
            self._geometry = (m.char_width, m.char_height, m.rotation)

    def on_resize(self, metrics: CellMetrics) -> bool:
        """Rebuild stipples when cell size or rotation changed; returns whether it did."""
        if metrics.char_width <= 0 or metrics.char_height <= 0:
            _log.warning(
                "ignoring degenerate cell metrics %sx%s",
                metrics.char_width,
                metrics.char_height,
                extra={"event": "resize_ignored"},
            )
            return False
        geometry = (metrics.char_width, metrics.char_height, metrics.rotation)
        if geometry == self._geometry:
            return False
        self._geometry = geometry
        self.registry.resize_all(*geometry)
        if self.controller is not None:
            self.controller.force_refresh()
        return True

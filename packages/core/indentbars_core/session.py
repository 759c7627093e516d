"""Per-buffer bar session wiring styles, drawing, highlight and resize."""

from __future__ import annotations

from typing import Union

from indentbars_renderer.colors import ColorContext, context_from_theme
from indentbars_renderer.models import AppearanceTheme, CellMetrics, Decoration, HighlightOverlay
from indentbars_renderer.themes import get_theme

from .config import IndentBarsConfig, resolve_style_config, validate_config
from .depth import DepthCalculator, DepthHook, guess_spacing, leading_width
from .draw import LineRenderer, RegionRenderer, is_blank
from .highlight import HighlightController
from .host import EditorHost
from .logging_setup import get_logger
from .resize import ResizeCoordinator
from .scheduler import CooperativeScheduler
from .styles import StyleRegistry

_log = get_logger("session")


class IndentBarsSession:
    def __init__(
        self,
        host: EditorHost,
        config: IndentBarsConfig | None = None,
        scheduler: CooperativeScheduler | None = None,
        depth_hook: DepthHook | None = None,
    ) -> None:
        self.host = host
        self.config = config or IndentBarsConfig()
        self.scheduler = scheduler or CooperativeScheduler()
        self.depth_hook = depth_hook
        self.active = False
        self.registry: StyleRegistry | None = None
        self.calc: DepthCalculator | None = None
        self.region: RegionRenderer | None = None
        self.highlight: HighlightController | None = None
        self.resizer: ResizeCoordinator | None = None

    def _color_context(self, theme: Union[str, AppearanceTheme, None] = None) -> ColorContext:
        cfg = self.config
        if not isinstance(theme, AppearanceTheme):
            theme = get_theme(theme or cfg.theme)
        return context_from_theme(theme, cfg.unspecified_fg, cfg.unspecified_bg)

    def setup(self) -> None:
        if self.active:
            return
        cfg = validate_config(self.config)
        spacing = guess_spacing(self.host.language, self.host.tab_width, cfg.spacing_override)
        offset = cfg.starting_column if cfg.starting_column is not None else 0
        calc = DepthCalculator(spacing=spacing, offset=offset, hook=self.depth_hook)

        registry = StyleRegistry(
            self._color_context(),
            metrics=self.host.metrics(),
            prefer_character=cfg.prefer_character,
            glyph=cfg.no_stipple_char,
            prefetch_depths=cfg.prefetch_depths,
        )
        registry.initialize(cfg.style)
        for tag, overrides in cfg.alt_styles.items():
            registry.initialize(resolve_style_config(overrides, cfg.style), tag)

        lines = LineRenderer(registry, calc, tab_width=self.host.tab_width, expand_tabs=cfg.expand_tabs)
        self.calc = calc
        self.registry = registry
        self.region = RegionRenderer(lines, display_on_blank_lines=cfg.display_on_blank_lines)
        self.highlight = HighlightController(registry, calc, self.scheduler, delay=cfg.depth_update_delay)
        self.resizer = ResizeCoordinator(registry, self.highlight)
        self.active = True
        _log.info(
            "bars set up spacing=%s offset=%s character_mode=%s styles=%s",
            spacing,
            offset,
            registry.character_mode,
            len(registry),
            extra={"event": "setup"},
        )

    def teardown(self) -> None:
        if not self.active:
            return
        if self.highlight is not None:
            self.highlight.clear()
        if self.registry is not None:
            self.registry.clear()
        self.host.apply([])
        self.active = False
        _log.info("bars torn down", extra={"event": "teardown"})

    def reset(self) -> None:
        self.teardown()
        self.setup()

    def _require(self) -> None:
        if not self.active:
            raise RuntimeError("session is not set up")

    @property
    def overlays(self) -> list[HighlightOverlay]:
        if self.registry is None:
            return []
        return [s.overlay for s in self.registry if s.overlay is not None]

    def render(
        self,
        first_line: int = 0,
        last_line: int | None = None,
        style: str | None = None,
        alt_style: str | None = None,
        switch_after: Union[int, str, None] = None,
    ) -> list[Decoration]:
        self._require()
        assert self.registry is not None and self.region is not None
        if last_line is None:
            last_line = self.host.line_count() - 1
        decorations = self.region.render(
            self.host,
            first_line,
            last_line,
            self.registry.get(style),
            alt_style=self.registry.get(alt_style) if alt_style else None,
            switch_after=switch_after,
        )
        self.host.apply(decorations)
        return decorations

    def cursor_width(self) -> int:
        self._require()
        assert self.region is not None
        line = self.host.cursor_line()
        text = self.region.line_text(self.host, line)
        if self.config.display_on_blank_lines and is_blank(text):
            return self.region.context_width(self.host, line)
        return leading_width(text, self.host.tab_width)

    def on_cursor_move(self) -> int:
        self._require()
        assert self.highlight is not None
        return self.highlight.on_cursor_move(self.cursor_width())

    def on_resize(self, metrics: CellMetrics | None = None) -> bool:
        self._require()
        assert self.resizer is not None
        return self.resizer.on_resize(metrics or self.host.metrics())

    def on_theme_change(self, theme: Union[str, AppearanceTheme, None] = None) -> None:
        self._require()
        assert self.registry is not None and self.highlight is not None
        if isinstance(theme, str):
            self.config.theme = theme
        self.registry.refresh_colors(self._color_context(theme))
        self.highlight.force_refresh()

    def run_timers(self, now: float | None = None) -> int:
        return self.scheduler.run_due(now)

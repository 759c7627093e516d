"""Live bar styles: resolved colors, stipples and per-depth faces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from indentbars_renderer.colors import (
    ColorContext,
    ResolvedColors,
    get_color,
    resolve_depth_palette,
    resolve_highlight_background,
    resolve_highlight_palette,
    resolve_main_color,
)
from indentbars_renderer.models import BarFace, Bitmap, CellMetrics, Color, HighlightOverlay
from indentbars_renderer.stipple import build_stipple

from .config import StyleConfig
from .logging_setup import get_logger

DEFAULT_TAG = "default"

_log = get_logger("styles")


@dataclass(eq=False)
class Style:
    tag: str
    config: StyleConfig
    colors: ResolvedColors
    bitmap: Bitmap | None = None
    highlight_bitmap: Bitmap | None = None
    faces: list[BarFace] = field(default_factory=list)
    overlay: HighlightOverlay | None = None

    def color_for(self, depth: int, highlight: bool = False) -> Color:
        return get_color(self.colors, depth, highlight)


def resolve_colors(config: StyleConfig, ctx: ColorContext) -> ResolvedColors:
    main = resolve_main_color(config.color, ctx, tint=config.tint, tint_blend=config.tint_blend)
    palette = resolve_depth_palette(config.depth_palette, ctx, main)
    return ResolvedColors(
        main=main,
        depth_palette=palette,
        highlight=resolve_highlight_palette(config.highlight, ctx, main, palette),
        highlight_background=resolve_highlight_background(config.highlight, ctx),
    )


class StyleRegistry:
    """Owns every live style for one session.

    Bitmaps are immutable; resizing swaps the reference held by each face so
    faces handed out earlier keep their identity.
    """

    def __init__(
        self,
        ctx: ColorContext,
        metrics: CellMetrics | None = None,
        prefer_character: bool = False,
        glyph: str = "│",
        prefetch_depths: int = 8,
    ) -> None:
        self.ctx = ctx
        self.metrics = metrics
        self.glyph = glyph
        self.prefetch_depths = max(1, prefetch_depths)
        self.character_mode = prefer_character or metrics is None or not metrics.supports_stipple
        if not self.character_mode and (metrics.char_width <= 0 or metrics.char_height <= 0):
            _log.warning(
                "degenerate cell metrics %sx%s, using glyphs",
                metrics.char_width,
                metrics.char_height,
                extra={"event": "stipple_unavailable"},
            )
            self.character_mode = True
        self._styles: dict[str, Style] = {}

    def __iter__(self) -> Iterator[Style]:
        return iter(list(self._styles.values()))

    def __len__(self) -> int:
        return len(self._styles)

    def __contains__(self, tag: object) -> bool:
        return tag in self._styles

    def get(self, tag: str | None = None) -> Style:
        return self._styles[tag or DEFAULT_TAG]

    def _geometry(self) -> tuple[int, int, int] | None:
        if self.character_mode or self.metrics is None:
            return None
        return self.metrics.char_width, self.metrics.char_height, self.metrics.rotation

    def _build_bitmaps(self, style: Style, geometry: tuple[int, int, int] | None) -> None:
        if geometry is None:
            style.bitmap = None
            style.highlight_bitmap = None
            return
        w, h, rot = geometry
        style.bitmap = build_stipple(w, h, rot, style.config.pattern)
        highlight = style.config.highlight
        if highlight is not None and highlight.has_geometry():
            style.highlight_bitmap = build_stipple(w, h, rot, highlight.pattern_over(style.config.pattern))
        else:
            style.highlight_bitmap = None

    def initialize(self, config: StyleConfig, tag: str | None = None) -> Style:
        tag = tag or DEFAULT_TAG
        style = Style(tag=tag, config=config, colors=resolve_colors(config, self.ctx))
        self._build_bitmaps(style, self._geometry())
        self._styles[tag] = style
        for depth in range(1, self.prefetch_depths + 1):
            self.face_for(style, depth)
        _log.debug(
            "style initialized tag=%s character_mode=%s",
            tag,
            self.character_mode,
            extra={"event": "style_initialized"},
        )
        return style

    def _new_face(self, style: Style, depth: int) -> BarFace:
        return BarFace(
            depth=depth,
            foreground=style.color_for(depth),
            stipple=style.bitmap,
            glyph=self.glyph if self.character_mode else None,
            tag=style.tag,
        )

    def face_for(self, style: Style, depth: int) -> BarFace:
        if depth < 1:
            raise ValueError("depth is 1-based")
        faces = style.faces
        if depth > len(faces):
            target = max(depth, 2 * len(faces))
            for d in range(len(faces) + 1, target + 1):
                faces.append(self._new_face(style, d))
        return faces[depth - 1]

    def make_overlay(self, style: Style, depth: int) -> HighlightOverlay | None:
        highlight = style.config.highlight
        if highlight is None or depth < 1:
            return None
        return HighlightOverlay(
            depth=depth,
            face=self.face_for(style, depth),
            foreground=style.color_for(depth, highlight=True),
            background=style.colors.highlight_background,
            stipple=style.highlight_bitmap,
        )

    def resize_all(self, w: int, h: int, rot: int) -> None:
        if self.metrics is not None:
            self.metrics = CellMetrics(
                char_width=w,
                char_height=h,
                window_left=rot,
                supports_stipple=self.metrics.supports_stipple,
            )
        else:
            self.metrics = CellMetrics(char_width=w, char_height=h, window_left=rot)
        geometry = self._geometry()
        for style in self:
            self._build_bitmaps(style, geometry)
            for face in style.faces:
                face.stipple = style.bitmap
        _log.info("stipples rebuilt w=%s h=%s rot=%s", w, h, rot, extra={"event": "resize"})

    def refresh_colors(self, ctx: ColorContext) -> None:
        """Recolor every style from ``ctx``; nothing changes if any style fails to resolve."""
        resolved = [(style, resolve_colors(style.config, ctx)) for style in self]
        self.ctx = ctx
        for style, colors in resolved:
            style.colors = colors
            for face in style.faces:
                face.foreground = style.color_for(face.depth)
        _log.debug("style colors refreshed", extra={"event": "colors_refreshed"})

    def clear(self) -> None:
        self._styles.clear()

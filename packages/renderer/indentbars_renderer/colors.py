"""Color parsing, blending and palette resolution for bar styles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Mapping, Union

from PIL import ImageColor

from .errors import ConfigError
from .models import Appearance, AppearanceTheme, Color, ColorConfig, HighlightConfig, PaletteConfig

Palette = tuple[Color, ...]
HighlightColors = Union[Palette, Color, None]


@dataclass(frozen=True)
class ColorContext:
    background: Color
    foreground: Color
    appearances: Mapping[str, Appearance]


@dataclass(frozen=True)
class ResolvedColors:
    main: Color
    depth_palette: Palette | None = None
    highlight: HighlightColors = None
    highlight_background: Color | None = None


def parse_color(value: str) -> Color:
    try:
        rgb = ImageColor.getrgb(value)
    except (ValueError, AttributeError) as exc:
        raise ConfigError(f"Unknown color: {value!r}") from exc
    return Color(*rgb[:3])


def blend(c1: Color, c2: Color, factor: float) -> Color:
    """Linear mix, ``factor`` of ``c1`` and ``1 - factor`` of ``c2``."""
    if not 0.0 <= factor <= 1.0:
        raise ConfigError(f"blend factor must lie in [0, 1], got {factor!r}")

    def mix(a: int, b: int) -> int:
        return int(round(factor * a + (1.0 - factor) * b))

    return Color(mix(c1.r, c2.r), mix(c1.g, c2.g), mix(c1.b, c2.b))


def context_from_theme(
    theme: AppearanceTheme,
    unspecified_fg: str = "white",
    unspecified_bg: str = "black",
) -> ColorContext:
    background = parse_color(theme.background or unspecified_bg)
    foreground = parse_color(theme.foreground or unspecified_fg)
    return ColorContext(background=background, foreground=foreground, appearances=theme.by_name())


def lookup_color(ref: str, ctx: ColorContext, face_bg: bool = False) -> Color:
    """Resolve an appearance name or a color literal."""
    appearance = ctx.appearances.get(ref)
    if appearance is not None:
        value = appearance.background if face_bg else appearance.foreground
        if value is None:
            return ctx.background if face_bg else ctx.foreground
        return parse_color(value)
    return parse_color(ref)


def resolve_main_color(
    cfg: ColorConfig,
    ctx: ColorContext,
    blend_override: float | None = None,
    tint: str | None = None,
    tint_blend: float | None = None,
) -> Color:
    main = lookup_color(cfg.ref, ctx, cfg.face_bg)
    if tint is not None and tint_blend is not None:
        main = blend(lookup_color(tint, ctx), main, tint_blend)
    factor = blend_override if blend_override is not None else cfg.blend
    if factor is not None:
        main = blend(main, ctx.background, factor)
    return main


def _palette_from_regexp(regexp: str, ctx: ColorContext, face_bg: bool) -> list[Color]:
    try:
        pattern = re.compile(regexp)
    except re.error as exc:
        raise ConfigError(f"Invalid palette regexp {regexp!r}: {exc}") from exc

    numbered: list[tuple[int, str]] = []
    for name in ctx.appearances:
        match = pattern.search(name)
        if not match or not match.groups():
            continue
        try:
            numbered.append((int(match.group(1)), name))
        except (TypeError, ValueError):
            continue
    numbered.sort()
    return [lookup_color(name, ctx, face_bg) for _n, name in numbered]


def _palette_from_list(colors: tuple[str, ...], ctx: ColorContext, face_bg: bool) -> list[Color]:
    return [lookup_color(ref, ctx, face_bg) for ref in colors]


def resolve_depth_palette(cfg: PaletteConfig | None, ctx: ColorContext, main: Color | None = None) -> Palette | None:
    if cfg is None:
        return None
    if cfg.colors is not None:
        colors = _palette_from_list(cfg.colors, ctx, cfg.face_bg)
    elif cfg.regexp is not None:
        colors = _palette_from_regexp(cfg.regexp, ctx, cfg.face_bg)
    else:
        return None
    if not colors:
        raise ConfigError("depth palette resolved to no colors")
    if cfg.blend is not None:
        toward = main if main is not None else ctx.background
        colors = [blend(c, toward, cfg.blend) for c in colors]
    return tuple(colors)


def resolve_highlight_palette(
    cfg: HighlightConfig | None,
    ctx: ColorContext,
    main: Color,
    palette: Palette | None = None,
) -> HighlightColors:
    """Highlight colors: a per-depth palette, a single color, or None.

    A highlight color with a blend factor is mixed into every entry of the
    base palette (the explicit highlight palette, else the depth palette).
    """
    if cfg is None:
        return None
    base = palette
    if cfg.palette is not None:
        base = tuple(_palette_from_list(cfg.palette, ctx, cfg.face_bg))

    if cfg.ref is not None:
        color = lookup_color(cfg.ref, ctx, cfg.face_bg)
        if cfg.blend is None:
            return color
        if base:
            return tuple(blend(color, p, cfg.blend) for p in base)
        return blend(color, main, cfg.blend)

    if cfg.palette is not None:
        if cfg.blend is None:
            return base
        return tuple(blend(p, main, cfg.blend) for p in base or ())
    return None


def resolve_highlight_background(cfg: HighlightConfig | None, ctx: ColorContext) -> Color | None:
    if cfg is None or cfg.background is None:
        return None
    return lookup_color(cfg.background, ctx, face_bg=True)


def get_color(colors: ResolvedColors, depth: int, use_highlight: bool = False) -> Color:
    if depth < 1:
        raise ValueError("depth is 1-based")
    if use_highlight and colors.highlight is not None:
        if isinstance(colors.highlight, Color):
            return colors.highlight
        return colors.highlight[(depth - 1) % len(colors.highlight)]
    if colors.depth_palette:
        return colors.depth_palette[(depth - 1) % len(colors.depth_palette)]
    return colors.main

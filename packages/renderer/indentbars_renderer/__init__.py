"""Renderer package for indentation bar stipples, colors and previews."""

from .colors import (
    ColorContext,
    ResolvedColors,
    blend,
    context_from_theme,
    get_color,
    lookup_color,
    parse_color,
    resolve_depth_palette,
    resolve_highlight_background,
    resolve_highlight_palette,
    resolve_main_color,
)
from .errors import ConfigError, IndentBarsError, SpanOutOfRange
from .models import (
    BarFace,
    Bitmap,
    CellMetrics,
    Color,
    ColorConfig,
    DisplayDecoration,
    FaceDecoration,
    HighlightConfig,
    HighlightOverlay,
    PaletteConfig,
    PatternConfig,
    Segment,
)
from .preview import render_ansi, render_image
from .stipple import build_stipple, rotate_row
from .themes import DEFAULT_THEME_NAME, get_theme, list_themes

__all__ = [
    "BarFace",
    "Bitmap",
    "CellMetrics",
    "Color",
    "ColorConfig",
    "ColorContext",
    "ConfigError",
    "DEFAULT_THEME_NAME",
    "DisplayDecoration",
    "FaceDecoration",
    "HighlightConfig",
    "HighlightOverlay",
    "IndentBarsError",
    "PaletteConfig",
    "PatternConfig",
    "ResolvedColors",
    "Segment",
    "SpanOutOfRange",
    "blend",
    "build_stipple",
    "context_from_theme",
    "get_color",
    "get_theme",
    "list_themes",
    "lookup_color",
    "parse_color",
    "render_ansi",
    "render_image",
    "resolve_depth_palette",
    "resolve_highlight_background",
    "resolve_highlight_palette",
    "resolve_main_color",
    "rotate_row",
]

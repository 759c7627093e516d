"""Core bar services: settings, depth, styles, drawing, highlight and resize."""

from .config import IndentBarsConfig, Inherit, StyleConfig, StyleOverrides, config_from_mapping, resolve_style_config
from .depth import DepthCalculator, depth_on_bar, guess_spacing, indent_depth, leading_width
from .draw import ALWAYS, LineRenderer, RegionRenderer, RenderRequest
from .highlight import HighlightController, HighlightState
from .host import EditorHost, MemoryBuffer
from .resize import ResizeCoordinator
from .scheduler import CooperativeScheduler, TimerHandle
from .session import IndentBarsSession
from .styles import Style, StyleRegistry

__all__ = [
    "ALWAYS",
    "CooperativeScheduler",
    "DepthCalculator",
    "EditorHost",
    "HighlightController",
    "HighlightState",
    "IndentBarsConfig",
    "IndentBarsSession",
    "Inherit",
    "LineRenderer",
    "MemoryBuffer",
    "RegionRenderer",
    "RenderRequest",
    "ResizeCoordinator",
    "Style",
    "StyleConfig",
    "StyleOverrides",
    "StyleRegistry",
    "TimerHandle",
    "config_from_mapping",
    "depth_on_bar",
    "guess_spacing",
    "indent_depth",
    "leading_width",
    "resolve_style_config",
]

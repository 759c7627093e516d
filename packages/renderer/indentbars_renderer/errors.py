"""Error types shared by the renderer and core packages."""

from __future__ import annotations


class IndentBarsError(Exception):
    """Base class for indentation bar errors."""


class ConfigError(IndentBarsError, ValueError):
    """Raised when a configuration value cannot be resolved."""


class SpanOutOfRange(IndentBarsError, IndexError):
    """Raised when a render request points outside the buffer text."""

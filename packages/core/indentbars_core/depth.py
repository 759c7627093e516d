"""Indentation depth from leading whitespace width."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

DepthHook = Callable[[int], int]

DEFAULT_SPACING = 4

# Indentation unit per content type, used when the host has no better guess.
LANGUAGE_SPACING: dict[str, int] = {
    "python": 4,
    "java": 4,
    "rust": 4,
    "c": 4,
    "cpp": 4,
    "csharp": 4,
    "go": 8,
    "javascript": 2,
    "typescript": 2,
    "json": 2,
    "yaml": 2,
    "html": 2,
    "css": 2,
    "lua": 2,
    "ruby": 2,
    "lisp": 2,
    "elisp": 2,
    "scheme": 2,
    "makefile": 8,
}


def leading_width(text: str, tab_width: int = 8) -> int:
    """Display columns of ``text``'s leading blanks, tabs advancing to the next stop."""
    col = 0
    for ch in text:
        if ch == " ":
            col += 1
        elif ch == "\t":
            col += tab_width - (col % tab_width)
        else:
            break
    return col


def guess_spacing(language: str | None, tab_width: int = 8, override: int | None = None) -> int:
    if override:
        return override
    if language:
        spacing = LANGUAGE_SPACING.get(language.lower())
        if spacing is not None:
            return spacing
    return DEFAULT_SPACING if tab_width <= 0 else min(DEFAULT_SPACING, tab_width)


def indent_depth(width: int, spacing: int, offset: int = 0, hook: DepthHook | None = None) -> int:
    if spacing < 1:
        raise ValueError("spacing must be positive")
    if width <= offset:
        depth = 0
    else:
        depth = (width - offset - 1) // spacing + 1
    if hook is not None:
        return hook(depth)
    return depth


def depth_on_bar(width: int, spacing: int, offset: int = 0, hook: DepthHook | None = None) -> int:
    """Like :func:`indent_depth`, plus one when ``width`` sits exactly on a bar column."""
    depth = indent_depth(width, spacing, offset, hook)
    if width == offset + depth * spacing:
        return depth + 1
    return depth


@dataclass(frozen=True)
class DepthCalculator:
    spacing: int = DEFAULT_SPACING
    offset: int = 0
    hook: DepthHook | None = None

    def depth(self, width: int) -> int:
        return indent_depth(width, self.spacing, self.offset, self.hook)

    def depth_on_bar(self, width: int) -> int:
        return depth_on_bar(width, self.spacing, self.offset, self.hook)

    def bar_column(self, bar: int) -> int:
        return self.offset + (bar - 1) * self.spacing

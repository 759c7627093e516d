"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import ConfigError


def check_fraction(name: str, value: float | None, low: float = 0.0, high: float = 1.0) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    if not low <= float(value) <= high:
        raise ConfigError(f"{name} must lie in [{low}, {high}], got {value!r}")


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Appearance:
    """A named editor face. Unset attributes fall back to the frame colors."""

    name: str
    foreground: str | None = None
    background: str | None = None


@dataclass(frozen=True)
class AppearanceTheme:
    name: str
    background: str
    foreground: str
    appearances: tuple[Appearance, ...]

    def by_name(self) -> dict[str, Appearance]:
        return {a.name: a for a in self.appearances}


@dataclass(frozen=True)
class PatternConfig:
    width_frac: float = 0.4
    pad_frac: float = 0.1
    pattern: str = "."
    zigzag: float | None = None

    def validate(self) -> PatternConfig:
        check_fraction("width_frac", self.width_frac)
        check_fraction("pad_frac", self.pad_frac)
        check_fraction("zigzag", self.zigzag, -1.0, 1.0)
        if not isinstance(self.pattern, str) or not self.pattern:
            raise ConfigError("pattern must be a non-empty string")
        return self


@dataclass(frozen=True)
class ColorConfig:
    ref: str = "highlight"
    face_bg: bool = True
    blend: float | None = 0.4

    def validate(self) -> ColorConfig:
        if not self.ref:
            raise ConfigError("color reference must not be empty")
        check_fraction("color blend", self.blend)
        return self


@dataclass(frozen=True)
class PaletteConfig:
    """Per-depth colors, either enumerated from appearance names or listed."""

    regexp: str | None = r"outline-(\d+)"
    colors: tuple[str, ...] | None = None
    face_bg: bool = False
    blend: float | None = 1.0

    def validate(self) -> PaletteConfig:
        if self.regexp is None and self.colors is None:
            raise ConfigError("depth palette needs a regexp or a list of colors")
        if self.colors is not None and len(self.colors) == 0:
            raise ConfigError("depth palette color list is empty")
        check_fraction("depth palette blend", self.blend)
        return self


@dataclass(frozen=True)
class HighlightConfig:
    """Current-depth highlight. Geometry fields left as None reuse the bar pattern."""

    ref: str | None = "highlight"
    face_bg: bool = False
    blend: float | None = 0.8
    palette: tuple[str, ...] | None = None
    background: str | None = None
    width_frac: float | None = None
    pad_frac: float | None = None
    pattern: str | None = None
    zigzag: float | None = None

    def validate(self) -> HighlightConfig:
        check_fraction("highlight blend", self.blend)
        check_fraction("highlight width_frac", self.width_frac)
        check_fraction("highlight pad_frac", self.pad_frac)
        check_fraction("highlight zigzag", self.zigzag, -1.0, 1.0)
        if self.palette is not None and len(self.palette) == 0:
            raise ConfigError("highlight palette is empty")
        if self.pattern is not None and not self.pattern:
            raise ConfigError("highlight pattern must not be empty")
        return self

    def has_geometry(self) -> bool:
        return any(v is not None for v in (self.width_frac, self.pad_frac, self.pattern, self.zigzag))

    def pattern_over(self, base: PatternConfig) -> PatternConfig:
        return PatternConfig(
            width_frac=base.width_frac if self.width_frac is None else self.width_frac,
            pad_frac=base.pad_frac if self.pad_frac is None else self.pad_frac,
            pattern=base.pattern if self.pattern is None else self.pattern,
            zigzag=base.zigzag if self.zigzag is None else self.zigzag,
        )


@dataclass(frozen=True)
class Bitmap:
    """One repeat unit of a stipple, rows packed LSB-first."""

    width: int
    height: int
    bytes: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Bitmap dimensions must be positive")
        if len(self.bytes) != self.height * self.row_bytes:
            raise ValueError(
                f"Bitmap of {self.width}x{self.height} needs {self.height * self.row_bytes} bytes, got {len(self.bytes)}"
            )

    @property
    def row_bytes(self) -> int:
        return (self.width + 7) // 8

    def row(self, y: int) -> int:
        start = y * self.row_bytes
        return int.from_bytes(self.bytes[start : start + self.row_bytes], "little")

    def pixel(self, x: int, y: int) -> bool:
        return bool((self.row(y) >> x) & 1)


@dataclass(frozen=True)
class CellMetrics:
    char_width: int
    char_height: int
    window_left: int = 0
    supports_stipple: bool = True

    @property
    def rotation(self) -> int:
        if self.char_width <= 0:
            return 0
        return self.window_left % self.char_width


@dataclass(eq=False)
class BarFace:
    """Per-depth visual resource. Identity is stable across resizes."""

    depth: int
    foreground: Color
    stipple: Bitmap | None = None
    glyph: str | None = None
    tag: str | None = None


@dataclass(eq=False)
class HighlightOverlay:
    depth: int
    face: BarFace
    foreground: Color | None
    background: Color | None
    stipple: Bitmap | None


@dataclass(frozen=True)
class Segment:
    text: str
    face: BarFace | None = None


@dataclass(frozen=True)
class FaceDecoration:
    start: int
    end: int
    face: BarFace


@dataclass(frozen=True)
class DisplayDecoration:
    start: int
    end: int
    segments: tuple[Segment, ...]

    @property
    def text(self) -> str:
        return "".join(s.text for s in self.segments)


Decoration = Union[FaceDecoration, DisplayDecoration]

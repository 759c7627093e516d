"""Bar settings schema, merge helpers and style inheritance."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

from indentbars_renderer.errors import ConfigError
from indentbars_renderer.models import ColorConfig, HighlightConfig, PaletteConfig, PatternConfig, check_fraction
from indentbars_renderer.themes import DEFAULT_THEME_NAME


class _Unset:
    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Inherit:
    """Partial settings merged over the parent style's value for one field."""

    values: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class StyleConfig:
    color: ColorConfig = field(default_factory=ColorConfig)
    depth_palette: PaletteConfig | None = field(default_factory=PaletteConfig)
    highlight: HighlightConfig | None = field(default_factory=HighlightConfig)
    pattern: PatternConfig = field(default_factory=PatternConfig)
    tint: str | None = None
    tint_blend: float | None = None

    def validate(self) -> StyleConfig:
        self.color.validate()
        self.pattern.validate()
        if self.depth_palette is not None:
            self.depth_palette.validate()
        if self.highlight is not None:
            self.highlight.validate()
        if (self.tint is None) != (self.tint_blend is None):
            raise ConfigError("tint and tint_blend must be set together")
        check_fraction("tint_blend", self.tint_blend)
        return self


@dataclass(frozen=True)
class StyleOverrides:
    """A style whose unset fields come from a parent style."""

    color: Any = UNSET
    depth_palette: Any = UNSET
    highlight: Any = UNSET
    pattern: Any = UNSET
    tint: Any = UNSET
    tint_blend: Any = UNSET


@dataclass
class IndentBarsConfig:
    style: StyleConfig = field(default_factory=StyleConfig)
    alt_styles: dict[str, StyleOverrides] = field(default_factory=dict)
    theme: str = DEFAULT_THEME_NAME
    spacing_override: int | None = None
    starting_column: int | None = None
    expand_tabs: bool = True
    display_on_blank_lines: bool = True
    prefer_character: bool = False
    no_stipple_char: str = "│"
    depth_update_delay: float = 0.075
    prefetch_depths: int = 8
    unspecified_fg: str = "white"
    unspecified_bg: str = "black"


_SECTION_TYPES: dict[str, type] = {
    "color": ColorConfig,
    "depth_palette": PaletteConfig,
    "highlight": HighlightConfig,
    "pattern": PatternConfig,
}
_TUPLE_KEYS = {"colors", "palette"}
_INHERIT_WORDS = {"inherit", "unspecified"}


def _merge(dataclass_type, raw: dict[str, Any], base=None):
    base = base if base is not None else dataclass_type()
    known = {f.name for f in fields(dataclass_type)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown {dataclass_type.__name__} keys: {', '.join(unknown)}")
    values = {}
    for k, v in raw.items():
        if k in _TUPLE_KEYS and isinstance(v, (list, tuple)):
            v = tuple(v)
        values[k] = v
    return replace(base, **values)


def resolve_style_config(child: StyleOverrides, parent: StyleConfig) -> StyleConfig:
    """Field-by-field override of ``parent`` by ``child``."""
    values: dict[str, Any] = {}
    for f in fields(StyleConfig):
        own = getattr(child, f.name)
        inherited = getattr(parent, f.name)
        if own is UNSET:
            values[f.name] = inherited
        elif isinstance(own, Inherit):
            section = _SECTION_TYPES.get(f.name)
            if section is None:
                raise ConfigError(f"Field {f.name!r} cannot inherit partially")
            values[f.name] = _merge(section, own.values, inherited)
        else:
            values[f.name] = own
    return StyleConfig(**values).validate()


def _section(name: str, value: Any, allow_none: bool) -> Any:
    if value is None:
        if not allow_none:
            raise ConfigError(f"{name} cannot be disabled")
        return None
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return _merge(_SECTION_TYPES[name], value)


def _style_from_mapping(raw: dict[str, Any]) -> StyleConfig:
    values: dict[str, Any] = {}
    for key, value in raw.items():
        if key in _SECTION_TYPES:
            values[key] = _section(key, value, allow_none=key in ("depth_palette", "highlight"))
        elif key in ("tint", "tint_blend"):
            values[key] = value
        else:
            raise ConfigError(f"Unknown style key: {key}")
    return StyleConfig(**values).validate()


def _override_field(key: str, value: Any) -> Any:
    if isinstance(value, str) and value in _INHERIT_WORDS:
        return UNSET
    if key not in _SECTION_TYPES:
        return value
    if isinstance(value, dict) and value.get("inherit"):
        partial = {k: v for k, v in value.items() if k != "inherit"}
        return Inherit(values=partial)
    return _section(key, value, allow_none=key in ("depth_palette", "highlight"))


def _overrides_from_mapping(raw: dict[str, Any]) -> StyleOverrides:
    known = {f.name for f in fields(StyleOverrides)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown style keys: {', '.join(unknown)}")
    return StyleOverrides(**{k: _override_field(k, v) for k, v in raw.items()})


def validate_config(cfg: IndentBarsConfig) -> IndentBarsConfig:
    cfg.style.validate()
    for tag, overrides in cfg.alt_styles.items():
        try:
            resolve_style_config(overrides, cfg.style)
        except ConfigError as exc:
            raise ConfigError(f"style {tag!r}: {exc}") from exc
    if cfg.spacing_override is not None and (not isinstance(cfg.spacing_override, int) or cfg.spacing_override < 1):
        raise ConfigError("spacing_override must be a positive integer")
    if cfg.starting_column is not None and (not isinstance(cfg.starting_column, int) or cfg.starting_column < 0):
        raise ConfigError("starting_column must be a non-negative integer")
    delay = cfg.depth_update_delay
    if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
        raise ConfigError(f"depth_update_delay must be a non-negative number, got {delay!r}")
    if not isinstance(cfg.no_stipple_char, str) or len(cfg.no_stipple_char) != 1:
        raise ConfigError("no_stipple_char must be a single character")
    prefetch = cfg.prefetch_depths
    if isinstance(prefetch, bool) or not isinstance(prefetch, int) or prefetch < 1:
        raise ConfigError(f"prefetch_depths must be a positive integer, got {prefetch!r}")
    return cfg


def config_from_mapping(raw: dict[str, Any] | None = None) -> IndentBarsConfig:
    """Build a validated config from plain data, defaults filling the gaps."""
    data = dict(raw or {})
    cfg = IndentBarsConfig()

    if "style" in data:
        cfg.style = _style_from_mapping(dict(data.pop("style") or {}))
    if "alt_styles" in data:
        cfg.alt_styles = {
            str(tag): _overrides_from_mapping(dict(entry or {}))
            for tag, entry in (data.pop("alt_styles") or {}).items()
        }
    for k, v in data.items():
        if not hasattr(cfg, k):
            raise ConfigError(f"Unknown setting: {k}")
        setattr(cfg, k, v)

    return validate_config(cfg)

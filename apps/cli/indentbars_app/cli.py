"""CLI entrypoints for stipple dumps, palette inspection and file previews."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from indentbars_core import IndentBarsSession, MemoryBuffer, config_from_mapping
from indentbars_core.logging_setup import configure_logging
from indentbars_core.styles import resolve_colors
from indentbars_renderer import (
    CellMetrics,
    ConfigError,
    PatternConfig,
    build_stipple,
    context_from_theme,
    get_theme,
    list_themes,
    render_ansi,
    render_image,
)
from indentbars_renderer.stipple import bitmap_ascii


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _style_mapping(args: argparse.Namespace) -> dict[str, Any]:
    pattern: dict[str, Any] = {}
    for key in ("width_frac", "pad_frac", "pattern", "zigzag"):
        value = getattr(args, key, None)
        if value is not None:
            pattern[key] = value
    return {"pattern": pattern} if pattern else {}


def cmd_stipple(args: argparse.Namespace) -> int:
    pattern = PatternConfig(
        width_frac=args.width_frac,
        pad_frac=args.pad_frac,
        pattern=args.pattern,
        zigzag=args.zigzag,
    ).validate()
    bitmap = build_stipple(args.width, args.height, args.rot, pattern)
    _print_json(
        {
            "width": bitmap.width,
            "height": bitmap.height,
            "rotation": args.rot % args.width,
            "bytes_hex": bitmap.bytes.hex().upper(),
            "rows": bitmap_ascii(bitmap),
        }
    )
    return 0


def cmd_palette(args: argparse.Namespace) -> int:
    cfg = config_from_mapping({"theme": args.theme})
    ctx = context_from_theme(get_theme(cfg.theme), cfg.unspecified_fg, cfg.unspecified_bg)
    colors = resolve_colors(cfg.style, ctx)
    highlight = colors.highlight
    if isinstance(highlight, tuple):
        highlight_hex: object = [c.hex for c in highlight]
    else:
        highlight_hex = highlight.hex if highlight is not None else None
    _print_json(
        {
            "theme": get_theme(cfg.theme).name,
            "background": ctx.background.hex,
            "main": colors.main.hex,
            "depth_palette": [c.hex for c in colors.depth_palette or ()],
            "highlight": highlight_hex,
        }
    )
    return 0


def cmd_themes(_args: argparse.Namespace) -> int:
    _print_json(list_themes())
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    path = Path(args.file)
    text = path.read_text(encoding="utf-8")
    settings: dict[str, Any] = {
        "theme": args.theme,
        "prefer_character": args.character,
        "display_on_blank_lines": not args.no_blank_lines,
        "depth_update_delay": 0.0,
    }
    if args.spacing:
        settings["spacing_override"] = args.spacing
    style = _style_mapping(args)
    if style:
        settings["style"] = style
    cfg = config_from_mapping(settings)

    metrics = CellMetrics(
        char_width=args.char_width,
        char_height=args.char_height,
        window_left=args.window_left,
        supports_stipple=bool(args.png) and not args.character,
    )
    buffer = MemoryBuffer(text=text, tab_width=args.tab_width, language=args.language, cell=metrics)
    session = IndentBarsSession(buffer, cfg)
    session.setup()
    decorations = session.render()
    if args.cursor_line is not None:
        buffer.cursor = max(0, min(args.cursor_line, buffer.line_count() - 1))
        session.on_cursor_move()

    if args.png:
        ctx = session.registry.ctx
        image = render_image(
            text,
            decorations,
            metrics,
            background=ctx.background,
            foreground=ctx.foreground,
            overlays=session.overlays,
            tab_width=args.tab_width,
        )
        out = Path(args.png).expanduser().resolve()
        image.save(out, format="PNG")
        _print_json({"png": str(out), "size": list(image.size), "decorations": len(decorations)})
    else:
        sys.stdout.write(render_ansi(text, decorations, session.overlays, tab_width=args.tab_width) + "\n")
    session.teardown()
    return 0


def _add_pattern_args(cmd: argparse.ArgumentParser, defaults: bool) -> None:
    base = PatternConfig()
    cmd.add_argument("--width-frac", dest="width_frac", type=float, default=base.width_frac if defaults else None)
    cmd.add_argument("--pad-frac", dest="pad_frac", type=float, default=base.pad_frac if defaults else None)
    cmd.add_argument("--pattern", default=base.pattern if defaults else None, help="Fill pattern; blanks leave gaps")
    cmd.add_argument("--zigzag", type=float, default=None, help="Signed zigzag fraction of the cell width")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="indentbars", description="Indentation bar stipples and previews")
    parser.add_argument("--log-file", default=None, help="Optional JSON log file")
    parser.add_argument("--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    stipple_cmd = sub.add_parser("stipple", help="Print the stipple bitmap for one cell")
    stipple_cmd.add_argument("--width", type=int, default=10, help="Cell width in pixels")
    stipple_cmd.add_argument("--height", type=int, default=20, help="Cell height in pixels")
    stipple_cmd.add_argument("--rot", type=int, default=0, help="Window pixel offset to align the tile with")
    _add_pattern_args(stipple_cmd, defaults=True)
    stipple_cmd.set_defaults(func=cmd_stipple)

    palette_cmd = sub.add_parser("palette", help="Print resolved bar colors for a theme")
    palette_cmd.add_argument("--theme", default=None, choices=list_themes())
    palette_cmd.set_defaults(func=cmd_palette)

    themes_cmd = sub.add_parser("themes", help="List built-in themes")
    themes_cmd.set_defaults(func=cmd_themes)

    preview_cmd = sub.add_parser("preview", help="Render a file with indentation bars")
    preview_cmd.add_argument("file")
    preview_cmd.add_argument("--theme", default=None, choices=list_themes())
    preview_cmd.add_argument("--language", default=None, help="Content type used to guess the spacing")
    preview_cmd.add_argument("--spacing", type=int, default=None)
    preview_cmd.add_argument("--tab-width", dest="tab_width", type=int, default=8)
    preview_cmd.add_argument("--cursor-line", dest="cursor_line", type=int, default=None)
    preview_cmd.add_argument("--character", action="store_true", help="Draw glyphs instead of stipples")
    preview_cmd.add_argument("--no-blank-lines", dest="no_blank_lines", action="store_true")
    preview_cmd.add_argument("--png", default=None, help="Write a stipple preview image instead of ANSI text")
    preview_cmd.add_argument("--char-width", dest="char_width", type=int, default=10)
    preview_cmd.add_argument("--char-height", dest="char_height", type=int, default=20)
    preview_cmd.add_argument("--window-left", dest="window_left", type=int, default=0)
    _add_pattern_args(preview_cmd, defaults=False)
    preview_cmd.set_defaults(func=cmd_preview)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=Path(args.log_file) if args.log_file else None,
        console=args.verbose,
    )
    try:
        return int(args.func(args))
    except ConfigError as exc:
        print(f"indentbars: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())

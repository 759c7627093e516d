"""Offline previews of decorated text: ANSI for terminals, Pillow images for stipples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .models import BarFace, Bitmap, CellMetrics, Color, Decoration, DisplayDecoration, FaceDecoration, HighlightOverlay

RESET = "\x1b[0m"


@dataclass(frozen=True)
class Cell:
    char: str
    face: BarFace | None = None
    stippled: bool = False


def _fg(color: Color) -> str:
    return f"\x1b[38;2;{color.r};{color.g};{color.b}m"


def _bg(color: Color) -> str:
    return f"\x1b[48;2;{color.r};{color.g};{color.b}m"


def display_cells(text: str, decorations: Iterable[Decoration], tab_width: int = 8) -> list[list[Cell]]:
    """Lay ``text`` out in rows of cells as the decorations would display it."""
    face_at: dict[int, BarFace] = {}
    display_at: dict[int, DisplayDecoration] = {}
    for deco in decorations:
        if isinstance(deco, FaceDecoration):
            for pos in range(deco.start, deco.end):
                face_at[pos] = deco.face
        else:
            display_at[deco.start] = deco

    rows: list[list[Cell]] = [[]]
    i = 0
    while i < len(text):
        display = display_at.get(i)
        if display is not None:
            for segment in display.segments:
                stippled = segment.face is not None and segment.face.glyph is None
                for ch in segment.text:
                    if ch == "\n":
                        rows.append([])
                    else:
                        rows[-1].append(Cell(ch, segment.face, stippled))
            i = max(display.end, i + 1)
            continue

        ch = text[i]
        if ch == "\n":
            rows.append([])
        elif ch == "\t":
            width = tab_width - (len(rows[-1]) % tab_width)
            face = face_at.get(i)
            rows[-1].extend(Cell(" ", face, face is not None) for _ in range(width))
        else:
            face = face_at.get(i)
            rows[-1].append(Cell(ch, face, face is not None))
        i += 1
    return rows


def _overlay_map(overlays: Iterable[HighlightOverlay]) -> dict[int, HighlightOverlay]:
    return {id(o.face): o for o in overlays}


def render_ansi(
    text: str,
    decorations: Iterable[Decoration],
    overlays: Iterable[HighlightOverlay] = (),
    tab_width: int = 8,
    stipple_glyph: str = "▏",
) -> str:
    """Render decorated text with 24-bit colors; stippled cells show ``stipple_glyph``."""
    by_face = _overlay_map(overlays)
    lines: list[str] = []
    for row in display_cells(text, decorations, tab_width):
        out: list[str] = []
        for cell in row:
            if cell.face is None:
                out.append(cell.char)
                continue
            overlay = by_face.get(id(cell.face))
            color = overlay.foreground if overlay is not None and overlay.foreground else cell.face.foreground
            prefix = _fg(color)
            if overlay is not None and overlay.background is not None:
                prefix += _bg(overlay.background)
            char = cell.char
            if cell.stippled and char == " ":
                char = stipple_glyph
            out.append(f"{prefix}{char}{RESET}")
        lines.append("".join(out))
    return "\n".join(lines)


def stipple_mask(bitmap: Bitmap, rotation: int = 0) -> np.ndarray:
    """Boolean ``(height, width)`` mask of a cell, undoing the tile rotation."""
    packed = np.frombuffer(bitmap.bytes, dtype=np.uint8).reshape(bitmap.height, bitmap.row_bytes)
    bits = np.unpackbits(packed, axis=1, bitorder="little")[:, : bitmap.width].astype(bool)
    if rotation:
        bits = np.roll(bits, -(rotation % bitmap.width), axis=1)
    return bits


def _font():
    try:
        return ImageFont.truetype("DejaVuSansMono.ttf", 14)
    except OSError:
        return ImageFont.load_default()


def render_image(
    text: str,
    decorations: Iterable[Decoration],
    metrics: CellMetrics,
    background: Color,
    foreground: Color,
    overlays: Iterable[HighlightOverlay] = (),
    tab_width: int = 8,
) -> Image.Image:
    """Paint decorated text cell by cell, stipples drawn from their bitmaps."""
    w, h = metrics.char_width, metrics.char_height
    rows = display_cells(text, decorations, tab_width)
    cols = max((len(r) for r in rows), default=0)
    image = Image.new("RGB", (max(1, cols * w), max(1, len(rows) * h)), background.as_tuple())
    draw = ImageDraw.Draw(image)
    font = _font()
    by_face = _overlay_map(overlays)
    masks: dict[int, Image.Image] = {}

    for y, row in enumerate(rows):
        for x, cell in enumerate(row):
            x0, y0 = x * w, y * h
            if cell.face is None:
                if not cell.char.isspace():
                    draw.text((x0, y0), cell.char, font=font, fill=foreground.as_tuple())
                continue

            overlay = by_face.get(id(cell.face))
            color = cell.face.foreground
            bitmap = cell.face.stipple
            if overlay is not None:
                if overlay.background is not None:
                    draw.rectangle((x0, y0, x0 + w - 1, y0 + h - 1), fill=overlay.background.as_tuple())
                color = overlay.foreground or color
                bitmap = overlay.stipple or bitmap

            if cell.stippled and bitmap is not None:
                mask = masks.get(id(bitmap))
                if mask is None:
                    bits = stipple_mask(bitmap, metrics.rotation)
                    mask = Image.fromarray((bits * 255).astype(np.uint8))
                    masks[id(bitmap)] = mask
                image.paste(color.as_tuple(), (x0, y0, x0 + bitmap.width, y0 + bitmap.height), mask)
                if not cell.char.isspace():
                    draw.text((x0, y0), cell.char, font=font, fill=foreground.as_tuple())
            elif cell.face.glyph is not None and cell.char == cell.face.glyph:
                mid = x0 + w // 2
                draw.line((mid, y0, mid, y0 + h - 1), fill=color.as_tuple(), width=max(1, w // 8))
            elif not cell.char.isspace():
                draw.text((x0, y0), cell.char, font=font, fill=color.as_tuple())
    return image

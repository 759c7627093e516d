"""Stipple bitmap synthesis for indentation bars."""

from __future__ import annotations

import numpy as np

from .models import Bitmap, PatternConfig


def rotate_row(x: int, w: int, rot: int) -> int:
    """Rotate a ``w``-bit row left by ``rot`` bits with wraparound."""
    if w <= 0:
        raise ValueError("Row width must be positive")
    rot %= w
    mask = (1 << w) - 1
    x &= mask
    if rot == 0:
        return x
    return ((x << rot) | (x >> (w - rot))) & mask


def pattern_rows(pattern: str, h: int) -> list[str]:
    """Stretch (or sample) ``pattern`` over ``h`` pixel rows."""
    if not pattern:
        raise ValueError("Pattern must not be empty")
    n = len(pattern)
    return [pattern[r * n // h] for r in range(h)]


def row_shifts(pattern: str, h: int, w: int, pad_frac: float, zigzag: float | None) -> list[int | None]:
    """Left shift of the bar for each row, ``None`` for blank rows.

    The zigzag offset keeps its sign through a run of identical fill
    characters and flips whenever the fill character changes.
    """
    pad = round(w * pad_frac)
    zz = 0
    if zigzag:
        zz = round(w * abs(zigzag))
        if zigzag < 0:
            zz = -zz

    shifts: list[int | None] = []
    last_fill: str | None = None
    offset = zz
    for ch in pattern_rows(pattern, h):
        if ch == " ":
            shifts.append(None)
            continue
        if last_fill is not None and ch != last_fill:
            offset = -offset
        last_fill = ch
        shifts.append(pad + offset)
    return shifts


def bar_row(w: int, width_frac: float, shift: int) -> int:
    bar_width = max(1, round(w * width_frac))
    run = (1 << bar_width) - 1
    value = run << shift if shift >= 0 else run >> -shift
    return value & ((1 << w) - 1)


def pack_rows(rows: list[int], w: int) -> bytes:
    row_bytes = (w + 7) // 8
    if not rows:
        return b""
    bits = np.array(
        [[(x >> i) & 1 for i in range(row_bytes * 8)] for x in rows],
        dtype=np.uint8,
    )
    return np.packbits(bits, axis=1, bitorder="little").tobytes()


def build_stipple(w: int, h: int, rot: int, pattern: PatternConfig) -> Bitmap:
    if w <= 0 or h <= 0:
        raise ValueError("Cell dimensions must be positive")
    rot %= w
    rows: list[int] = []
    for shift in row_shifts(pattern.pattern, h, w, pattern.pad_frac, pattern.zigzag):
        if shift is None:
            rows.append(0)
            continue
        rows.append(rotate_row(bar_row(w, pattern.width_frac, shift), w, rot))
    return Bitmap(width=w, height=h, bytes=pack_rows(rows, w))


def bitmap_ascii(bitmap: Bitmap, on: str = "#", off: str = ".") -> list[str]:
    return [
        "".join(on if bitmap.pixel(x, y) else off for x in range(bitmap.width))
        for y in range(bitmap.height)
    ]

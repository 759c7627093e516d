"""Host editor interface and an in-memory buffer implementing it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from indentbars_renderer.models import CellMetrics, Decoration


class EditorHost(Protocol):
    text: str
    tab_width: int
    language: str | None

    def line_count(self) -> int: ...

    def line_span(self, n: int) -> tuple[int, int]: ...

    def cursor_line(self) -> int: ...

    def metrics(self) -> CellMetrics: ...

    def apply(self, decorations: list[Decoration]) -> None: ...


def _line_spans(text: str) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    start = 0
    while True:
        newline = text.find("\n", start)
        if newline < 0:
            spans.append((start, len(text)))
            return spans
        spans.append((start, newline))
        start = newline + 1


@dataclass
class MemoryBuffer:
    """Plain-text buffer with decorations kept beside the text, never in it."""

    text: str
    tab_width: int = 8
    language: str | None = None
    cursor: int = 0
    cell: CellMetrics = field(default_factory=lambda: CellMetrics(char_width=10, char_height=20))
    decorations: list[Decoration] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._spans = _line_spans(self.text)

    def set_text(self, text: str) -> None:
        self.text = text
        self._spans = _line_spans(text)
        self.decorations.clear()

    def line_count(self) -> int:
        return len(self._spans)

    def line_span(self, n: int) -> tuple[int, int]:
        return self._spans[n]

    def cursor_line(self) -> int:
        return self.cursor

    def metrics(self) -> CellMetrics:
        return self.cell

    def apply(self, decorations: list[Decoration]) -> None:
        self.decorations = list(decorations)

    def clear(self) -> None:
        self.decorations = []

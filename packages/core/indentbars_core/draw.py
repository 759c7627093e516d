"""Bar placement on lines and visible regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from indentbars_renderer.errors import SpanOutOfRange
from indentbars_renderer.models import BarFace, Decoration, DisplayDecoration, FaceDecoration, Segment

from .depth import DepthCalculator, leading_width
from .logging_setup import get_logger
from .styles import Style, StyleRegistry

if TYPE_CHECKING:
    from .host import EditorHost

ALWAYS = "always"

_log = get_logger("draw")


@dataclass(frozen=True)
class RenderRequest:
    """Draw bars ``first_bar``..``nbars`` on the line ``text[start:end]``."""

    start: int
    end: int
    nbars: int
    style: Style
    first_bar: int = 1
    alt_style: Style | None = None
    switch_after: Union[int, str, None] = None
    invent: bool = False


def _segments(width: int, marks: list[tuple[int, BarFace]]) -> list[Segment]:
    segments: list[Segment] = []
    cursor = 0
    for rel, face in marks:
        if rel > cursor:
            segments.append(Segment(" " * (rel - cursor)))
        segments.append(Segment(face.glyph or " ", face))
        cursor = rel + 1
    if width > cursor:
        segments.append(Segment(" " * (width - cursor)))
    return segments


class LineRenderer:
    def __init__(
        self,
        registry: StyleRegistry,
        calc: DepthCalculator,
        tab_width: int = 8,
        expand_tabs: bool = True,
    ) -> None:
        self.registry = registry
        self.calc = calc
        self.tab_width = max(1, tab_width)
        self.expand_tabs = expand_tabs

    def _face(self, request: RenderRequest, bar: int) -> BarFace:
        style = request.style
        if request.alt_style is not None:
            switch = request.switch_after
            if switch == ALWAYS or (isinstance(switch, int) and bar > switch):
                style = request.alt_style
        return self.registry.face_for(style, bar)

    def draw_line(self, text: str, request: RenderRequest) -> list[Decoration]:
        if not 0 <= request.start <= request.end <= len(text):
            raise SpanOutOfRange(f"span {request.start}..{request.end} outside text of length {len(text)}")
        out: list[Decoration] = []
        bar = max(1, request.first_bar)
        col = 0
        pos = request.start

        while pos < request.end and bar <= request.nbars:
            ch = text[pos]
            if ch == " ":
                width = 1
            elif ch == "\t":
                width = self.tab_width - (col % self.tab_width)
            else:
                break
            cell_end = col + width
            marks: list[tuple[int, BarFace]] = []
            while bar <= request.nbars and self.calc.bar_column(bar) < cell_end:
                bar_col = self.calc.bar_column(bar)
                if bar_col >= col:
                    marks.append((bar_col - col, self._face(request, bar)))
                bar += 1

            if marks:
                if ch == "\t":
                    if self.expand_tabs:
                        out.append(DisplayDecoration(pos, pos + 1, tuple(_segments(width, marks))))
                else:
                    face = marks[0][1]
                    if face.glyph:
                        out.append(DisplayDecoration(pos, pos + 1, (Segment(face.glyph, face),)))
                    else:
                        out.append(FaceDecoration(pos, pos + 1, face))
            col = cell_end
            pos += 1

        # a CRLF line keeps its "\r" inside the span
        at_eol = pos == request.end or (pos == request.end - 1 and text[pos] == "\r")
        if request.invent and bar <= request.nbars and at_eol:
            invented = self._invent(text, request, bar, col, pos)
            if invented is not None:
                out.append(invented)
        return out

    def _invent(self, text: str, request: RenderRequest, bar: int, col: int, pos: int) -> DisplayDecoration | None:
        """Display the remaining bars on the line terminator at ``pos``."""
        if text.startswith("\r\n", pos):
            end = pos + 2
        elif text.startswith("\n", pos):
            end = pos + 1
        else:
            return None
        marks: list[tuple[int, BarFace]] = []
        for b in range(bar, request.nbars + 1):
            bar_col = self.calc.bar_column(b)
            if bar_col >= col:
                marks.append((bar_col - col, self._face(request, b)))
        if not marks:
            return None
        segments = _segments(marks[-1][0] + 1, marks)
        segments.append(Segment("\n"))
        return DisplayDecoration(pos, end, tuple(segments))


def is_blank(line: str) -> bool:
    return not line.strip(" \t\r")


class RegionRenderer:
    """Renders a run of visible lines, giving blank lines their context depth."""

    def __init__(self, lines: LineRenderer, display_on_blank_lines: bool = True) -> None:
        self.lines = lines
        self.display_on_blank_lines = display_on_blank_lines

    @property
    def calc(self) -> DepthCalculator:
        return self.lines.calc

    def line_text(self, host: EditorHost, n: int) -> str:
        start, end = host.line_span(n)
        return host.text[start:end]

    def line_depth(self, host: EditorHost, n: int) -> int:
        return self.calc.depth(leading_width(self.line_text(host, n), self.lines.tab_width))

    def blank_run(self, host: EditorHost, n: int) -> tuple[int, int]:
        first = n
        while first > 0 and is_blank(self.line_text(host, first - 1)):
            first -= 1
        last = n
        count = host.line_count()
        while last + 1 < count and is_blank(self.line_text(host, last + 1)):
            last += 1
        return first, last

    def context_depth(self, host: EditorHost, n: int) -> int | None:
        """Depth shared by the blank run around line ``n``.

        Runs touching the start or the end of the document have no context.
        """
        first, last = self.blank_run(host, n)
        if first == 0 or last + 1 >= host.line_count():
            return None
        return max(self.line_depth(host, first - 1), self.line_depth(host, last + 1))

    def context_width(self, host: EditorHost, n: int) -> int:
        """Leading width of the deeper neighbour of the blank run around ``n``."""
        first, last = self.blank_run(host, n)
        widths = []
        for m in (first - 1, last + 1):
            if 0 <= m < host.line_count():
                widths.append(leading_width(self.line_text(host, m), self.lines.tab_width))
        return max(widths, default=0)

    def render(
        self,
        host: EditorHost,
        first: int,
        last: int,
        style: Style,
        alt_style: Style | None = None,
        switch_after: Union[int, str, None] = None,
    ) -> list[Decoration]:
        out: list[Decoration] = []
        text = host.text
        last = min(last, host.line_count() - 1)
        n = max(0, first)
        while n <= last:
            start, end = host.line_span(n)
            line = text[start:end]
            if self.display_on_blank_lines and is_blank(line):
                _run_first, run_last = self.blank_run(host, n)
                depth = self.context_depth(host, n)
                stop = min(run_last, last)
                if depth:
                    for m in range(n, stop + 1):
                        m_start, m_end = host.line_span(m)
                        request = RenderRequest(
                            m_start, m_end, depth, style, alt_style=alt_style, switch_after=switch_after, invent=True
                        )
                        out.extend(self._draw(text, request, m))
                n = stop + 1
                continue

            depth = self.calc.depth(leading_width(line, self.lines.tab_width))
            if depth > 0:
                request = RenderRequest(start, end, depth, style, alt_style=alt_style, switch_after=switch_after)
                out.extend(self._draw(text, request, n))
            n += 1
        return out

    def _draw(self, text: str, request: RenderRequest, line_no: int) -> list[Decoration]:
        try:
            return self.lines.draw_line(text, request)
        except SpanOutOfRange as exc:
            _log.debug("line %s skipped: %s", line_no, exc, extra={"event": "line_skipped"})
            return []

from __future__ import annotations

from chartbox.box import Box


CHAR_WIDTH = 6
LINE_HEIGHT = 10


class RecordingRenderer:
    """Renderer double with fixed-width glyphs that records every call."""

    def __init__(self, width: int = 400, height: int = 300) -> None:
        self.width = width
        self.height = height
        self.dpi = 72.0
        self.calls: list[tuple] = []

    def _record(self, *call) -> None:
        self.calls.append(call)

    def get_dpi(self) -> float:
        return self.dpi

    def set_dpi(self, dpi: float) -> None:
        self.dpi = dpi

    def set_stroke_color(self, color) -> None:
        self._record("stroke_color", color)

    def set_stroke_width(self, width: float) -> None:
        self._record("stroke_width", width)

    def set_fill_color(self, color) -> None:
        self._record("fill_color", color)

    def set_font(self, family: str) -> None:
        self._record("font", family)

    def set_font_size(self, size: float) -> None:
        self._record("font_size", size)

    def set_font_color(self, color) -> None:
        self._record("font_color", color)

    def move_to(self, x: int, y: int) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: int, y: int) -> None:
        self._record("line_to", x, y)

    def close(self) -> None:
        self._record("close")

    def circle(self, radius: float, x: int, y: int) -> None:
        self._record("circle", radius, x, y)

    def stroke(self) -> None:
        self._record("stroke")

    def fill(self) -> None:
        self._record("fill")

    def fill_stroke(self) -> None:
        self._record("fill_stroke")

    def text(self, body: str, x: int, y: int) -> None:
        self._record("text", body, x, y)

    def measure_text(self, body: str) -> Box:
        return Box(top=0, left=0, right=CHAR_WIDTH * len(body), bottom=LINE_HEIGHT)

    def save(self, sink) -> None:
        sink.write(b"fake")

    def named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Protocol, Sequence

from chartbox.errors import ChartConfigError


RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

TRANSPARENT: RGBA = (0, 0, 0, 0)


def parse_color(value: str | Sequence[int]) -> RGBA:
    """Accept ``#RRGGBB``/``#RRGGBBAA`` strings or 3/4-item integer sequences."""
    if isinstance(value, str):
        if not _HEX_COLOR.match(value):
            raise ChartConfigError(f"color must be a hex color (#RRGGBB or #RRGGBBAA): {value!r}")
        r = int(value[1:3], 16)
        g = int(value[3:5], 16)
        b = int(value[5:7], 16)
        a = int(value[7:9], 16) if len(value) == 9 else 255
        return (r, g, b, a)
    items = tuple(int(v) for v in value)
    if len(items) == 3:
        items = items + (255,)
    if len(items) != 4 or any(v < 0 or v > 255 for v in items):
        raise ChartConfigError(f"color must have 3 or 4 channels in [0, 255]: {value!r}")
    return items  # type: ignore[return-value]


def series_color(index: int, colors: Sequence[RGBA]) -> RGBA:
    if not colors:
        raise ValueError("palette has no series colors")
    return colors[index % len(colors)]


class ColorPalette(Protocol):
    def background_color(self) -> RGBA:
        ...

    def background_stroke_color(self) -> RGBA:
        ...

    def canvas_color(self) -> RGBA:
        ...

    def canvas_stroke_color(self) -> RGBA:
        ...

    def axis_stroke_color(self) -> RGBA:
        ...

    def text_color(self) -> RGBA:
        ...

    def series_color(self, index: int) -> RGBA:
        ...


@dataclass(frozen=True)
class Palette:
    background: RGBA
    background_stroke: RGBA
    canvas: RGBA
    canvas_stroke: RGBA
    axis_stroke: RGBA
    text: RGBA
    series: tuple[RGBA, ...]

    def background_color(self) -> RGBA:
        return self.background

    def background_stroke_color(self) -> RGBA:
        return self.background_stroke

    def canvas_color(self) -> RGBA:
        return self.canvas

    def canvas_stroke_color(self) -> RGBA:
        return self.canvas_stroke

    def axis_stroke_color(self) -> RGBA:
        return self.axis_stroke

    def text_color(self) -> RGBA:
        return self.text

    def series_color(self, index: int) -> RGBA:
        return series_color(index, self.series)


DEFAULT_PALETTE = Palette(
    background=(255, 255, 255, 255),
    background_stroke=(255, 255, 255, 255),
    canvas=(255, 255, 255, 255),
    canvas_stroke=(255, 255, 255, 255),
    axis_stroke=(51, 51, 51, 255),
    text=(51, 51, 51, 255),
    series=(
        (0, 116, 217, 255),
        (0, 217, 101, 255),
        (217, 0, 116, 255),
        (217, 210, 0, 255),
        (217, 101, 0, 255),
        (0, 217, 210, 255),
        (106, 195, 203, 255),
        (42, 190, 137, 255),
    ),
)

DARK_PALETTE = Palette(
    background=(12, 16, 23, 255),
    background_stroke=(60, 67, 78, 255),
    canvas=(20, 26, 36, 255),
    canvas_stroke=(60, 67, 78, 255),
    axis_stroke=(124, 138, 156, 255),
    text=(208, 218, 232, 255),
    series=(
        (62, 149, 255, 255),
        (255, 165, 0, 255),
        (110, 169, 255, 255),
        (186, 201, 220, 255),
        (225, 85, 120, 255),
        (90, 205, 140, 255),
    ),
)

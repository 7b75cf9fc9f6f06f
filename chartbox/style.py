from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Literal

from chartbox.box import Padding, merge_padding
from chartbox.palette import RGBA, TRANSPARENT

if TYPE_CHECKING:
    from chartbox.renderer import Renderer


TextHorizontalAlign = Literal["left", "center", "right"]
TextVerticalAlign = Literal["top", "middle", "bottom"]
TextWrap = Literal["none", "word", "rune"]

DEFAULT_FONT_SIZE = 10.0
DEFAULT_STROKE_WIDTH = 1.0
DEFAULT_LINE_SPACING = 2


@dataclass(frozen=True)
class Style:
    """Visual properties where ``None`` means "inherit from the defaults"."""

    show: bool | None = None
    padding: Padding | None = None

    stroke_color: RGBA | None = None
    stroke_width: float | None = None
    fill_color: RGBA | None = None

    font_family: str | None = None
    font_size: float | None = None
    font_color: RGBA | None = None

    text_horizontal_align: TextHorizontalAlign | None = None
    text_vertical_align: TextVerticalAlign | None = None
    text_wrap: TextWrap | None = None
    text_line_spacing: int | None = None

    def is_shown(self) -> bool:
        return bool(self.show)

    def get_stroke_color(self, default: RGBA = TRANSPARENT) -> RGBA:
        return default if self.stroke_color is None else self.stroke_color

    def get_stroke_width(self, default: float = DEFAULT_STROKE_WIDTH) -> float:
        return default if self.stroke_width is None else self.stroke_width

    def get_fill_color(self, default: RGBA = TRANSPARENT) -> RGBA:
        return default if self.fill_color is None else self.fill_color

    def get_font_size(self, default: float = DEFAULT_FONT_SIZE) -> float:
        return default if self.font_size is None else self.font_size

    def get_font_color(self, default: RGBA = TRANSPARENT) -> RGBA:
        return default if self.font_color is None else self.font_color

    def get_padding(self) -> Padding:
        return self.padding if self.padding is not None else Padding()

    def write_to_renderer(self, r: "Renderer") -> None:
        self.write_stroke_to_renderer(r)
        r.set_fill_color(self.get_fill_color())
        self.write_text_to_renderer(r)

    def write_stroke_to_renderer(self, r: "Renderer") -> None:
        r.set_stroke_color(self.get_stroke_color())
        r.set_stroke_width(self.get_stroke_width())

    def write_text_to_renderer(self, r: "Renderer") -> None:
        if self.font_family is not None:
            r.set_font(self.font_family)
        r.set_font_color(self.get_font_color())
        r.set_font_size(self.get_font_size())


def merge_style(specific: Style | None, defaults: Style | None) -> Style:
    """Field-by-field fallback: any field unset on ``specific`` takes the default's value."""
    if specific is None:
        return defaults if defaults is not None else Style()
    if defaults is None:
        return specific
    merged = {}
    for f in fields(Style):
        if f.name == "padding":
            continue
        value = getattr(specific, f.name)
        merged[f.name] = getattr(defaults, f.name) if value is None else value
    merged["padding"] = merge_padding(specific.padding, defaults.padding)
    return Style(**merged)


def style_show(**overrides) -> Style:
    return replace(Style(show=True), **overrides)

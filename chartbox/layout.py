from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Callable, Sequence

from chartbox import defaults as d
from chartbox.box import Box
from chartbox.draw import draw_box, draw_line, draw_text
from chartbox.errors import ChartConfigError, RendererError
from chartbox.formatting import ValueFormatter, float_value_formatter
from chartbox.palette import DEFAULT_PALETTE, ColorPalette
from chartbox.ranges import ContinuousRange
from chartbox.raster.draw_text import DEFAULT_FONT_FAMILY, load_font
from chartbox.renderer import Renderer, RendererProvider
from chartbox.style import Style, merge_style
from chartbox.ticks import Tick, generate_ticks, ticks_within_range


LOGGER = logging.getLogger(__name__)

Element = Callable[[Renderer, Box, Style], None]
Footprint = Callable[[Renderer, Box, Sequence[Tick]], Box]


@dataclass
class Axis:
    """Axis configuration: visibility/style plus optional range and tick overrides."""

    style: Style = field(default_factory=Style)
    range: ContinuousRange | None = None
    ticks: list[Tick] | None = None
    value_formatter: ValueFormatter | None = None

    def formatter(self) -> ValueFormatter:
        return self.value_formatter or float_value_formatter

    def tick_values(self) -> list[float] | None:
        if not self.ticks:
            return None
        return [t.value for t in self.ticks]

    def get_ticks(self, r: Renderer, rng: ContinuousRange, defaults: Style, *, vertical: bool) -> list[Tick]:
        if self.ticks:
            return ticks_within_range(self.ticks, rng)
        return generate_ticks(r, rng, merge_style(self.style, defaults), self.formatter(), vertical=vertical)


@dataclass
class AxisSide:
    """One side of the canvas taking part in box resolution."""

    style: Style
    range: ContinuousRange | None = None
    axis: Axis | None = None
    vertical: bool = False
    ticks: list[Tick] = field(default_factory=list)

    def is_shown(self) -> bool:
        return self.style.is_shown()


@dataclass(frozen=True)
class CanvasLayout:
    box: Box
    x_range: ContinuousRange | None
    y_range: ContinuousRange
    x_ticks: list[Tick]
    y_ticks: list[Tick]


def resolve_default_font(font_family: str | None) -> str:
    """Return the font family to render with, failing fast if the default cannot load."""
    if font_family is not None:
        return font_family
    load_font(DEFAULT_FONT_FAMILY, d.DEFAULT_AXIS_FONT_SIZE)
    return DEFAULT_FONT_FAMILY


def create_renderer(provider: RendererProvider, width: int, height: int) -> Renderer:
    try:
        return provider(width, height)
    except RendererError:
        raise
    except (ValueError, TypeError, OSError) as exc:
        raise RendererError(f"unable to create a {width}x{height} renderer: {exc}") from exc


def require_marks(marks: Sequence[object], noun: str) -> None:
    if len(marks) == 0:
        raise ChartConfigError(f"please provide at least one {noun}")


@dataclass(frozen=True)
class ChartFrame:
    """Per-render chart chrome shared by every chart type.

    Holds the resolved size, palette and font of a chart and owns the style
    defaults plus the background/canvas/y-axis/title/element drawing passes.
    """

    width: int
    height: int
    palette: ColorPalette = DEFAULT_PALETTE
    font_family: str = DEFAULT_FONT_FAMILY
    title: str = ""
    title_style: Style = field(default_factory=Style)
    background: Style = field(default_factory=Style)
    canvas: Style = field(default_factory=Style)

    def bounds(self) -> Box:
        """Chart bounds less the background padding; the canvas never leaves it."""
        padding = self.background.get_padding()
        pad = d.DEFAULT_BACKGROUND_PADDING
        return Box(
            top=padding.top_or(pad.top or 0),
            left=padding.left_or(pad.left or 0),
            right=self.width - padding.right_or(pad.right or 0),
            bottom=self.height - padding.bottom_or(pad.bottom or 0),
        ).normalized()

    def title_font_size(self) -> float:
        return d.title_font_size(self.width, self.height)

    def background_defaults(self) -> Style:
        return Style(
            fill_color=self.palette.background_color(),
            stroke_color=self.palette.background_stroke_color(),
            stroke_width=d.DEFAULT_BACKGROUND_STROKE_WIDTH,
        )

    def canvas_defaults(self) -> Style:
        return Style(
            fill_color=self.palette.canvas_color(),
            stroke_color=self.palette.canvas_stroke_color(),
            stroke_width=d.DEFAULT_CANVAS_STROKE_WIDTH,
        )

    def axes_defaults(self) -> Style:
        return Style(
            stroke_color=self.palette.axis_stroke_color(),
            stroke_width=d.DEFAULT_AXIS_LINE_WIDTH,
            font_family=self.font_family,
            font_size=d.DEFAULT_AXIS_FONT_SIZE,
            font_color=self.palette.text_color(),
            text_horizontal_align="center",
            text_vertical_align="top",
            text_wrap="word",
        )

    def series_defaults(self, index: int) -> Style:
        color = self.palette.series_color(index)
        return Style(
            stroke_color=color,
            stroke_width=d.DEFAULT_SERIES_STROKE_WIDTH,
            fill_color=color,
        )

    def title_defaults(self) -> Style:
        return Style(
            font_color=self.palette.text_color(),
            font_family=self.font_family,
            font_size=self.title_font_size(),
            text_horizontal_align="center",
            text_vertical_align="top",
            text_wrap="word",
        )

    def element_defaults(self) -> Style:
        return Style(font_family=self.font_family)

    def draw_background(self, r: Renderer) -> None:
        draw_box(
            r,
            Box(right=self.width, bottom=self.height),
            merge_style(self.background, self.background_defaults()),
        )

    def draw_canvas(self, r: Renderer, canvas_box: Box) -> None:
        draw_box(r, canvas_box, merge_style(self.canvas, self.canvas_defaults()))

    def draw_y_axis(self, r: Renderer, canvas_box: Box, axis: Axis, yr: ContinuousRange, ticks: Sequence[Tick]) -> None:
        if not axis.style.is_shown():
            return
        axis_style = merge_style(axis.style, self.axes_defaults())
        draw_line(r, canvas_box.right, canvas_box.top, canvas_box.right, canvas_box.bottom, axis_style)
        draw_line(
            r,
            canvas_box.right,
            canvas_box.bottom,
            canvas_box.right + d.DEFAULT_HORIZONTAL_TICK_WIDTH,
            canvas_box.bottom,
            axis_style,
        )
        for tick in ticks:
            ty = canvas_box.bottom - yr.translate(tick.value)
            draw_line(r, canvas_box.right, ty, canvas_box.right + d.DEFAULT_HORIZONTAL_TICK_WIDTH, ty, axis_style)
            axis_style.write_text_to_renderer(r)
            tb = r.measure_text(tick.label)
            draw_text(r, tick.label, canvas_box.right + d.DEFAULT_Y_AXIS_MARGIN, ty + (tb.height >> 1), axis_style)

    def draw_title(self, r: Renderer) -> None:
        if not self.title or not self.title_style.is_shown():
            return
        style = merge_style(self.title_style, self.title_defaults())
        style.write_text_to_renderer(r)
        tb = r.measure_text(self.title)
        title_x = (self.width >> 1) - (tb.width >> 1)
        title_y = style.get_padding().top_or(d.DEFAULT_TITLE_TOP) + tb.height
        r.text(self.title, title_x, title_y)

    def draw_elements(self, r: Renderer, canvas_box: Box, elements: Sequence[Element]) -> None:
        element_style = self.element_defaults()
        for element in elements:
            element(r, canvas_box, element_style)


def measure_y_axis(r: Renderer, canvas_box: Box, yr: ContinuousRange, style: Style, ticks: Sequence[Tick]) -> Box:
    """Footprint of a right-hand y axis: its line, tick marks and tick labels."""
    tx = canvas_box.right + d.DEFAULT_Y_AXIS_MARGIN
    style.write_text_to_renderer(r)
    top = canvas_box.top
    bottom = canvas_box.bottom
    right = canvas_box.right + d.DEFAULT_HORIZONTAL_TICK_WIDTH
    for tick in ticks:
        ly = canvas_box.bottom - yr.translate(tick.value)
        tb = r.measure_text(tick.label)
        half = tb.height >> 1
        right = max(right, tx + tb.width)
        top = min(top, ly - half)
        bottom = max(bottom, ly + half)
    return Box(top=top, left=canvas_box.right, right=right, bottom=bottom)


def _apply_domains(box: Box, x: AxisSide | None, y: AxisSide) -> None:
    if x is not None and x.range is not None:
        x.range.set_domain(box.width)
    if y.range is not None:
        y.range.set_domain(box.height)


def _provisional_pass(r: Renderer, frame: ChartFrame, base_box: Box, x: AxisSide | None, y: AxisSide) -> None:
    _apply_domains(base_box, x, y)
    axes_defaults = frame.axes_defaults()
    if y.is_shown() and y.axis is not None and y.range is not None:
        y.ticks = y.axis.get_ticks(r, y.range, axes_defaults, vertical=True)
    if x is not None and x.is_shown() and x.axis is not None and x.range is not None:
        x.ticks = x.axis.get_ticks(r, x.range, axes_defaults, vertical=False)


def _grow_and_constrain(
    r: Renderer,
    frame: ChartFrame,
    base_box: Box,
    x: AxisSide | None,
    y: AxisSide,
    x_footprint: Footprint | None,
) -> Box:
    shown_x = x is not None and x.is_shown()
    if not shown_x and not y.is_shown():
        return base_box
    outer = base_box.clone()
    if shown_x and x is not None and x_footprint is not None:
        outer = outer.grow(x_footprint(r, base_box, x.ticks))
    if y.is_shown() and y.range is not None:
        y_style = merge_style(y.style, frame.axes_defaults())
        outer = outer.grow(measure_y_axis(r, base_box, y.range, y_style, y.ticks))
    return base_box.outer_constrain(frame.bounds(), outer)


def resolve_canvas_layout(
    r: Renderer,
    frame: ChartFrame,
    *,
    y: AxisSide,
    x: AxisSide | None = None,
    x_footprint: Footprint | None = None,
) -> CanvasLayout:
    """Size the plotting box so axis labels fit, in exactly two passes.

    Pass one puts provisional domains on the padded chart bounds and computes
    ticks for visible axes; the axis footprints grow the box, which is then
    constrained back inside the bounds. Pass two re-applies the domains
    against the resolved box. Ticks from pass one are kept. The passes are
    not iterated to convergence.
    """
    base_box = frame.bounds()
    _provisional_pass(r, frame, base_box, x, y)
    canvas_box = _grow_and_constrain(r, frame, base_box, x, y, x_footprint)
    _apply_domains(canvas_box, x, y)
    LOGGER.debug(
        "canvas box resolved to %s (y range [%s, %s], %d y ticks, %d x ticks)",
        canvas_box,
        y.range.min if y.range else None,
        y.range.max if y.range else None,
        len(y.ticks),
        len(x.ticks) if x is not None else 0,
    )
    assert y.range is not None
    return CanvasLayout(
        box=canvas_box,
        x_range=x.range if x is not None else None,
        y_range=y.range,
        x_ticks=list(x.ticks) if x is not None else [],
        y_ticks=list(y.ticks),
    )

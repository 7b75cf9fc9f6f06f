from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
import io
import logging
from typing import BinaryIO, Sequence

from chartbox import defaults as d
from chartbox.box import Box
from chartbox.draw import draw_circle, draw_line, draw_text
from chartbox.formatting import format_value
from chartbox.layout import (
    Axis,
    AxisSide,
    CanvasLayout,
    ChartFrame,
    Element,
    create_renderer,
    require_marks,
    resolve_canvas_layout,
    resolve_default_font,
)
from chartbox.palette import DEFAULT_PALETTE, ColorPalette
from chartbox.ranges import ContinuousRange, resolve_range
from chartbox.renderer import PNG, DEFAULT_DPI, Renderer, RendererProvider
from chartbox.style import Style, merge_style
from chartbox.text import measure_lines, wrap_fit
from chartbox.ticks import Tick
from chartbox.value import Value


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BubbleValue:
    value: Value
    x: float
    y: float


@dataclass(frozen=True)
class Bubble:
    """A bubble resolved onto the canvas."""

    x: int
    y: int
    radius: float
    is_set: bool = True


def bubble_radius(magnitude: float, scale: float) -> float:
    return max(0.0, float(magnitude) * float(scale))


def place_bubble(
    point: BubbleValue,
    canvas_box: Box,
    xr: ContinuousRange,
    yr: ContinuousRange,
    scale: float,
) -> Bubble:
    # Pixel rows grow downward while the value axis grows upward.
    return Bubble(
        x=canvas_box.left + xr.translate(point.x),
        y=canvas_box.bottom - yr.translate(point.y),
        radius=bubble_radius(point.value.value, scale),
        is_set=point.value.value >= 0,
    )


def layout_bubbles(
    points: Sequence[BubbleValue],
    canvas_box: Box,
    xr: ContinuousRange,
    yr: ContinuousRange,
    scale: float,
) -> list[Bubble]:
    return [place_bubble(point, canvas_box, xr, yr, scale) for point in points]


def bubble_label_anchor(bubble: Bubble, label_box: Box) -> tuple[int, int]:
    """Left edge and baseline of a value label hung below its bubble."""
    return (
        bubble.x - (label_box.width >> 1),
        bubble.y + label_box.height + int(bubble.radius),
    )


@dataclass
class BubbleChart:
    """Scatter of circles whose radius is proportional to each point's value."""

    bubbles: list[BubbleValue] = field(default_factory=list)
    title: str = ""
    title_style: Style = field(default_factory=Style)
    color_palette: ColorPalette | None = None

    width: int | None = None
    height: int | None = None
    dpi: float | None = None
    bubble_scale: float | None = None

    background: Style = field(default_factory=Style)
    canvas: Style = field(default_factory=Style)

    x_axis: Axis = field(default_factory=Axis)
    y_axis: Axis = field(default_factory=Axis)

    font: str | None = None
    elements: list[Element] = field(default_factory=list)

    def get_width(self) -> int:
        return self.width or d.DEFAULT_CHART_WIDTH

    def get_height(self) -> int:
        return self.height or d.DEFAULT_CHART_HEIGHT

    def get_dpi(self) -> float:
        return self.dpi or DEFAULT_DPI

    def get_bubble_scale(self) -> float:
        return self.bubble_scale or d.DEFAULT_BUBBLE_SCALE

    def get_color_palette(self) -> ColorPalette:
        return self.color_palette if self.color_palette is not None else DEFAULT_PALETTE

    def x_range(self) -> ContinuousRange:
        return resolve_range(self.x_axis.range, self.x_axis.tick_values(), (b.x for b in self.bubbles))

    def y_range(self) -> ContinuousRange:
        return resolve_range(self.y_axis.range, self.y_axis.tick_values(), (b.y for b in self.bubbles))

    def render(self, provider: RendererProvider, sink: BinaryIO) -> None:
        require_marks(self.bubbles, "bubble")
        r = create_renderer(provider, self.get_width(), self.get_height())
        font_family = resolve_default_font(self.font)
        r.set_dpi(self.get_dpi())

        frame = ChartFrame(
            width=self.get_width(),
            height=self.get_height(),
            palette=self.get_color_palette(),
            font_family=font_family,
            title=self.title,
            title_style=self.title_style,
            background=self.background,
            canvas=self.canvas,
        )
        frame.draw_background(r)

        y_side = AxisSide(style=self.y_axis.style, range=self.y_range(), axis=self.y_axis, vertical=True)
        x_side = AxisSide(style=self.x_axis.style, range=self.x_range(), axis=self.x_axis)
        layout = resolve_canvas_layout(
            r,
            frame,
            y=y_side,
            x=x_side,
            x_footprint=partial(self._x_axis_footprint, frame, x_side),
        )

        frame.draw_canvas(r, layout.box)
        self._draw_bubbles(r, frame, layout)
        self._draw_x_axis(r, frame, layout)
        frame.draw_y_axis(r, layout.box, self.y_axis, layout.y_range, layout.y_ticks)
        frame.draw_title(r)
        frame.draw_elements(r, layout.box, self.elements)

        r.save(sink)

    def render_bytes(self, provider: RendererProvider = PNG) -> bytes:
        buf = io.BytesIO()
        self.render(provider, buf)
        return buf.getvalue()

    def _x_axis_footprint(
        self,
        frame: ChartFrame,
        x_side: AxisSide,
        r: Renderer,
        canvas_box: Box,
        ticks: Sequence[Tick],
    ) -> Box:
        axis_style = merge_style(self.x_axis.style, frame.axes_defaults())

        # Shrink toward the tightest wrapped point label.
        x_axis_height = d.DEFAULT_VERTICAL_TICK_HEIGHT
        for bubble in self.bubbles:
            if not bubble.value.label:
                continue
            label_box = Box(
                top=canvas_box.bottom + d.DEFAULT_X_AXIS_MARGIN,
                left=canvas_box.left,
                right=canvas_box.left + d.DEFAULT_BAR_WIDTH,
                bottom=frame.height,
            )
            lines = wrap_fit(r, bubble.value.label, label_box.width, axis_style)
            lines_box = measure_lines(r, lines, axis_style)
            x_axis_height = min(lines_box.height + 2 * d.DEFAULT_X_AXIS_MARGIN, x_axis_height)

        left = canvas_box.left
        right = canvas_box.right
        bottom = canvas_box.bottom + x_axis_height
        if x_side.range is not None and ticks:
            axis_style.write_text_to_renderer(r)
            for tick in ticks:
                tx = canvas_box.left + x_side.range.translate(tick.value)
                tb = r.measure_text(tick.label)
                left = min(left, tx - (tb.width >> 1))
                right = max(right, tx + tb.width - (tb.width >> 1))
                bottom = max(bottom, canvas_box.bottom + d.DEFAULT_X_AXIS_MARGIN + tb.height)
        return Box(top=canvas_box.top, left=left, right=right, bottom=bottom)

    def _draw_bubbles(self, r: Renderer, frame: ChartFrame, layout: CanvasLayout) -> None:
        assert layout.x_range is not None
        bubbles = layout_bubbles(self.bubbles, layout.box, layout.x_range, layout.y_range, self.get_bubble_scale())
        label_defaults = frame.axes_defaults()
        for index, (point, bubble) in enumerate(zip(self.bubbles, bubbles)):
            if bubble.is_set:
                draw_circle(r, bubble.x, bubble.y, bubble.radius, merge_style(point.value.style, frame.series_defaults(index)))

            label_style = merge_style(point.value.style, label_defaults)
            text = format_value(point.value.value)
            label_style.write_text_to_renderer(r)
            tx, ty = bubble_label_anchor(bubble, r.measure_text(text))
            draw_text(r, text, tx, ty, label_style)
        LOGGER.debug("placed %d bubbles (scale %s)", len(bubbles), self.get_bubble_scale())

    def _draw_x_axis(self, r: Renderer, frame: ChartFrame, layout: CanvasLayout) -> None:
        if not self.x_axis.style.is_shown() or layout.x_range is None:
            return
        box = layout.box
        axis_style = merge_style(self.x_axis.style, frame.axes_defaults())
        draw_line(r, box.left, box.bottom, box.right, box.bottom, axis_style)
        draw_line(r, box.left, box.bottom, box.left, box.bottom + d.DEFAULT_VERTICAL_TICK_HEIGHT, axis_style)
        for tick in layout.x_ticks:
            tx = box.left + layout.x_range.translate(tick.value)
            draw_line(r, tx, box.bottom, tx, box.bottom + d.DEFAULT_VERTICAL_TICK_HEIGHT, axis_style)
            axis_style.write_text_to_renderer(r)
            tb = r.measure_text(tick.label)
            draw_text(r, tick.label, tx - (tb.width >> 1), box.bottom + d.DEFAULT_X_AXIS_MARGIN + tb.height, axis_style)

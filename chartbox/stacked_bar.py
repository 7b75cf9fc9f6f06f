from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
import io
import logging
import math
from typing import BinaryIO, Sequence

from chartbox import defaults as d
from chartbox.box import Box
from chartbox.draw import draw_box, draw_line
from chartbox.errors import ChartConfigError
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
from chartbox.text import draw_text_within, measure_lines, wrap_fit
from chartbox.ticks import Tick
from chartbox.value import Value


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackedBarValue:
    """One bar: a name and the segments stacked bottom-up in order."""

    name: str = ""
    width: int | None = None
    values: tuple[Value, ...] = ()

    def get_width(self) -> int:
        return self.width or d.DEFAULT_STACKED_BAR_VALUE_WIDTH


@dataclass(frozen=True)
class BarGeometry:
    width: int
    spacing: int
    max_segments: int
    bar_count: int
    negotiated: bool = False

    @property
    def total(self) -> int:
        return total_bar_width(self.width, self.spacing, self.max_segments, self.bar_count)


def max_segment_count(bars: Sequence[StackedBarValue]) -> int:
    return max((len(bar.values) for bar in bars), default=0)


def total_bar_width(bar_width: int, spacing: int, max_segments: int, bar_count: int) -> int:
    return (bar_width * max_segments + spacing) * bar_count


def effective_bar_spacing(canvas_width: int, bar_count: int, max_segments: int, bar_width: int, spacing: int) -> int:
    if total_bar_width(bar_width, spacing, max_segments, bar_count) <= canvas_width:
        return spacing
    slots = bar_count * max_segments
    less_bar_widths = max(0, canvas_width - slots * bar_width)
    return int(math.ceil(less_bar_widths / slots))


def effective_bar_width(canvas_width: int, bar_count: int, max_segments: int, bar_width: int, spacing: int) -> int:
    if total_bar_width(bar_width, spacing, max_segments, bar_count) <= canvas_width:
        return bar_width
    slots = bar_count * max_segments
    less_spacings = max(0, canvas_width - bar_count - spacing)
    return int(math.ceil(less_spacings / slots))


def negotiate_bar_geometry(
    canvas_width: int,
    bar_count: int,
    max_segments: int,
    bar_width: int,
    spacing: int,
) -> BarGeometry:
    """Shrink spacing, then width, until the bars fit ``canvas_width``.

    Defaults are kept whenever ``(bar_width * max_segments + spacing) * bar_count``
    already fits. Once either value is shrunk, rounding slack is trimmed from
    the width (then the spacing) so the bars never exceed the canvas.
    """
    if bar_count <= 0 or max_segments <= 0:
        raise ChartConfigError("bar geometry needs at least one bar with at least one segment")
    canvas_width = max(0, canvas_width)

    eff_spacing = effective_bar_spacing(canvas_width, bar_count, max_segments, bar_width, spacing)
    eff_width = effective_bar_width(canvas_width, bar_count, max_segments, bar_width, eff_spacing)
    negotiated = total_bar_width(bar_width, spacing, max_segments, bar_count) > canvas_width

    if negotiated:
        slots = bar_count * max_segments
        if eff_width * slots + eff_spacing * bar_count > canvas_width:
            eff_width = max(0, (canvas_width - eff_spacing * bar_count) // slots)
        if eff_width * slots + eff_spacing * bar_count > canvas_width:
            eff_spacing = max(0, (canvas_width - eff_width * slots) // bar_count)

    return BarGeometry(
        width=eff_width,
        spacing=eff_spacing,
        max_segments=max_segments,
        bar_count=bar_count,
        negotiated=negotiated,
    )


def bar_slots(
    bars: Sequence[StackedBarValue],
    left: int,
    geometry: BarGeometry,
    configured_bar_width: int,
) -> list[tuple[int, int]]:
    """Horizontal (left, right) extent of every bar, in input order.

    The cursor advances by width + spacing + (segments // 2) * configured width.
    """
    slots: list[tuple[int, int]] = []
    cursor = left
    for bar in bars:
        slots.append((cursor, cursor + geometry.width))
        cursor += geometry.width + geometry.spacing + (len(bar.values) // 2) * configured_bar_width
    return slots


def layout_stacked_bars(
    bars: Sequence[StackedBarValue],
    canvas_box: Box,
    yr: ContinuousRange,
    geometry: BarGeometry,
    configured_bar_width: int,
    baseline_offset: int = d.DEFAULT_STACK_BASELINE_OFFSET,
) -> list[list[Box]]:
    """Segment rectangles per bar, stacked upward from just above the canvas bottom."""
    out: list[list[Box]] = []
    for bar, (left, right) in zip(bars, bar_slots(bars, canvas_box.left, geometry, configured_bar_width)):
        rects: list[Box] = []
        bottom = max(canvas_box.top, canvas_box.bottom - baseline_offset)
        for segment in bar.values:
            extent = max(0, yr.translate(segment.value))
            top = max(canvas_box.top, bottom - extent)
            rects.append(Box(top=top, left=left, right=right, bottom=bottom))
            bottom = top
        out.append(rects)
    return out


@dataclass
class StackedBarChart:
    """Bars built from stacked value segments, sized to fit the canvas width."""

    bars: list[StackedBarValue] = field(default_factory=list)
    title: str = ""
    title_style: Style = field(default_factory=Style)
    color_palette: ColorPalette | None = None

    width: int | None = None
    height: int | None = None
    dpi: float | None = None

    bar_width: int | None = None
    bar_spacing: int | None = None

    background: Style = field(default_factory=Style)
    canvas: Style = field(default_factory=Style)

    x_axis: Style = field(default_factory=Style)
    y_axis: Axis = field(default_factory=Axis)

    font: str | None = None
    elements: list[Element] = field(default_factory=list)

    def get_width(self) -> int:
        return self.width or d.DEFAULT_CHART_WIDTH

    def get_height(self) -> int:
        return self.height or d.DEFAULT_CHART_HEIGHT

    def get_dpi(self) -> float:
        return self.dpi or DEFAULT_DPI

    def get_bar_width(self) -> int:
        return self.bar_width or d.DEFAULT_BAR_WIDTH

    def get_bar_spacing(self) -> int:
        return self.bar_spacing or d.DEFAULT_BAR_SPACING

    def configured_bar_width(self) -> int:
        return self.bar_width or 0

    def get_color_palette(self) -> ColorPalette:
        return self.color_palette if self.color_palette is not None else DEFAULT_PALETTE

    def validate(self) -> None:
        require_marks(self.bars, "bar")
        if max_segment_count(self.bars) == 0:
            raise ChartConfigError("please provide at least one bar value")
        if self.bar_width is not None and self.bar_width < 0:
            raise ChartConfigError("bar_width must be >= 0")
        if self.bar_spacing is not None and self.bar_spacing < 0:
            raise ChartConfigError("bar_spacing must be >= 0")

    def y_range(self) -> ContinuousRange:
        values = (segment.value for bar in self.bars for segment in bar.values)
        return resolve_range(self.y_axis.range, self.y_axis.tick_values(), values)

    def geometry(self, canvas_box: Box) -> BarGeometry:
        return negotiate_bar_geometry(
            canvas_box.width,
            len(self.bars),
            max_segment_count(self.bars),
            self.get_bar_width(),
            self.get_bar_spacing(),
        )

    def render(self, provider: RendererProvider, sink: BinaryIO) -> None:
        self.validate()
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
        x_side = AxisSide(style=self.x_axis)
        layout = resolve_canvas_layout(
            r,
            frame,
            y=y_side,
            x=x_side,
            x_footprint=partial(self._x_axis_footprint, frame),
        )

        frame.draw_canvas(r, layout.box)
        geometry = self.geometry(layout.box)
        LOGGER.debug(
            "bar geometry: width=%d spacing=%d total=%d negotiated=%s",
            geometry.width,
            geometry.spacing,
            geometry.total,
            geometry.negotiated,
        )
        self._draw_bars(r, frame, layout, geometry)
        self._draw_x_axis(r, frame, layout, geometry)
        frame.draw_y_axis(r, layout.box, self.y_axis, layout.y_range, layout.y_ticks)
        frame.draw_title(r)
        frame.draw_elements(r, layout.box, self.elements)

        r.save(sink)

    def render_bytes(self, provider: RendererProvider = PNG) -> bytes:
        buf = io.BytesIO()
        self.render(provider, buf)
        return buf.getvalue()

    def name_label_width(self, bar: StackedBarValue) -> int:
        """Width a bar name wraps within, both when measured and when drawn."""
        return bar.get_width() * len(bar.values) + self.get_bar_spacing()

    def _x_axis_footprint(self, frame: ChartFrame, r: Renderer, canvas_box: Box, ticks: Sequence[Tick]) -> Box:
        axis_style = merge_style(self.x_axis, frame.axes_defaults())

        # Grow to the tallest wrapped bar name.
        x_axis_height = d.DEFAULT_VERTICAL_TICK_HEIGHT
        for bar in self.bars:
            if not bar.name:
                continue
            lines = wrap_fit(r, bar.name, self.name_label_width(bar), axis_style)
            lines_box = measure_lines(r, lines, axis_style)
            x_axis_height = max(lines_box.height + 2 * d.DEFAULT_X_AXIS_MARGIN, x_axis_height)

        total = self.geometry(canvas_box).total
        return Box(
            top=canvas_box.top,
            left=canvas_box.left,
            right=canvas_box.left + total,
            bottom=canvas_box.bottom + x_axis_height,
        )

    def _draw_bars(self, r: Renderer, frame: ChartFrame, layout: CanvasLayout, geometry: BarGeometry) -> None:
        stacks = layout_stacked_bars(self.bars, layout.box, layout.y_range, geometry, self.configured_bar_width())
        for bar, rects in zip(self.bars, stacks):
            for index, (segment, rect) in enumerate(zip(bar.values, rects)):
                draw_box(r, rect, merge_style(segment.style, frame.series_defaults(index)))

    def _draw_x_axis(self, r: Renderer, frame: ChartFrame, layout: CanvasLayout, geometry: BarGeometry) -> None:
        if not self.x_axis.is_shown():
            return
        box = layout.box
        axis_style = merge_style(self.x_axis, frame.axes_defaults())
        draw_line(r, box.left, box.bottom, box.right, box.bottom, axis_style)
        draw_line(r, box.left, box.bottom, box.left, box.bottom + d.DEFAULT_VERTICAL_TICK_HEIGHT, axis_style)

        label_style = merge_style(Style(text_horizontal_align="center"), axis_style)
        for bar, (left, right) in zip(self.bars, bar_slots(self.bars, box.left, geometry, self.configured_bar_width())):
            if bar.name:
                label_box = Box(
                    top=box.bottom + d.DEFAULT_X_AXIS_MARGIN,
                    left=left,
                    right=left + self.name_label_width(bar),
                    bottom=frame.height,
                )
                draw_text_within(r, bar.name, label_box, label_style)
            draw_line(r, right, box.bottom, right, box.bottom + d.DEFAULT_VERTICAL_TICK_HEIGHT, axis_style)

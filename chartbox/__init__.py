from .box import Box, Padding
from .bubble import Bubble, BubbleChart, BubbleValue, layout_bubbles
from .config import chart_from_dict, load_chart
from .errors import ChartConfigError, ChartError, FontLoadError, OutputWriteError, RendererError
from .formatting import float_value_formatter, percent_value_formatter
from .layout import Axis, resolve_canvas_layout
from .palette import DARK_PALETTE, DEFAULT_PALETTE, Palette, parse_color
from .ranges import ContinuousRange
from .renderer import PNG, RasterRenderer, Renderer, RendererProvider, renderer_provider
from .stacked_bar import BarGeometry, StackedBarChart, StackedBarValue, layout_stacked_bars, negotiate_bar_geometry
from .style import Style, merge_style, style_show
from .ticks import Tick, generate_ticks
from .value import Value

__all__ = [
    "Axis",
    "BarGeometry",
    "Box",
    "Bubble",
    "BubbleChart",
    "BubbleValue",
    "ChartConfigError",
    "ChartError",
    "ContinuousRange",
    "DARK_PALETTE",
    "DEFAULT_PALETTE",
    "FontLoadError",
    "OutputWriteError",
    "PNG",
    "Padding",
    "Palette",
    "RasterRenderer",
    "Renderer",
    "RendererError",
    "RendererProvider",
    "StackedBarChart",
    "StackedBarValue",
    "Style",
    "Tick",
    "Value",
    "chart_from_dict",
    "float_value_formatter",
    "generate_ticks",
    "layout_bubbles",
    "layout_stacked_bars",
    "load_chart",
    "merge_style",
    "negotiate_bar_geometry",
    "parse_color",
    "percent_value_formatter",
    "renderer_provider",
    "resolve_canvas_layout",
    "style_show",
]

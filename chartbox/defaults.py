from __future__ import annotations

from chartbox.box import Padding


DEFAULT_CHART_WIDTH = 1024
DEFAULT_CHART_HEIGHT = 400
DEFAULT_BACKGROUND_PADDING = Padding(top=20, left=20, right=10, bottom=50)

DEFAULT_TITLE_TOP = 10
DEFAULT_AXIS_FONT_SIZE = 10.0
DEFAULT_AXIS_LINE_WIDTH = 1.0
DEFAULT_CANVAS_STROKE_WIDTH = 0.0
DEFAULT_BACKGROUND_STROKE_WIDTH = 0.0
DEFAULT_SERIES_STROKE_WIDTH = 3.0
DEFAULT_STACK_BASELINE_OFFSET = 1

DEFAULT_X_AXIS_MARGIN = 10
DEFAULT_Y_AXIS_MARGIN = 10
DEFAULT_VERTICAL_TICK_HEIGHT = 5
DEFAULT_HORIZONTAL_TICK_WIDTH = 5

DEFAULT_BUBBLE_SCALE = 1.0
DEFAULT_BAR_WIDTH = 50
DEFAULT_BAR_SPACING = 50
DEFAULT_STACKED_BAR_VALUE_WIDTH = 50


def title_font_size(width: int, height: int) -> float:
    effective = min(width, height)
    if effective >= 2048:
        return 48.0
    if effective >= 1024:
        return 24.0
    if effective >= 512:
        return 18.0
    if effective >= 256:
        return 12.0
    return 10.0

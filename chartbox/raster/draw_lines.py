from __future__ import annotations

from typing import Sequence

import numpy as np

from chartbox.palette import RGBA
from chartbox.raster.canvas import draw_hline, draw_vline, fill_rect


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[int, int]], color: RGBA, width: int = 1) -> None:
    if len(points) < 2 or width <= 0:
        return
    for (x0, y0), (x1, y1) in zip(points[:-1], points[1:]):
        draw_line_segment(dst, int(x0), int(y0), int(x1), int(y1), color=color, width=width)


def draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int = 1) -> None:
    # Axis-aligned segments are the common case (axes, ticks, box edges).
    if x0 == x1 or y0 == y1:
        _draw_straight(dst, x0, y0, x1, y1, color, width)
        return

    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_straight(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    if width == 1:
        if y0 == y1:
            draw_hline(dst, x0, x1, y0, color)
        else:
            draw_vline(dst, x0, y0, y1, color)
        return
    lo = width // 2
    hi = width - lo - 1
    if y0 == y1:
        fill_rect(dst, min(x0, x1) - lo, y0 - lo, max(x0, x1) + hi, y0 + hi, color)
    else:
        fill_rect(dst, x0 - lo, min(y0, y1) - lo, x0 + hi, max(y0, y1) + hi, color)


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    lo = width // 2
    hi = width - lo - 1
    fill_rect(dst, x - lo, y - lo, x + hi, y + hi, color)

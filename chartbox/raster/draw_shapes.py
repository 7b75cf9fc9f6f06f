from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from chartbox.palette import RGBA
from chartbox.raster.canvas import blend_mask


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[int, int]], color: RGBA) -> None:
    if len(points) < 3 or color[3] == 0:
        return
    xs = [int(p[0]) for p in points]
    ys = [int(p[1]) for p in points]
    x0, y0 = min(xs), min(ys)
    w = max(xs) - x0 + 1
    h = max(ys) - y0 + 1
    image = Image.new("L", (w, h), 0)
    ImageDraw.Draw(image).polygon([(x - x0, y - y0) for x, y in zip(xs, ys)], fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)


def draw_circle(
    dst: np.ndarray,
    cx: int,
    cy: int,
    radius: float,
    *,
    fill: RGBA | None = None,
    stroke: RGBA | None = None,
    stroke_width: int = 1,
) -> None:
    if radius < 0:
        return
    pad = max(1, stroke_width)
    extent = int(math.ceil(radius)) + pad
    # Only the part of the bounding square that lands on the canvas gets a mask.
    x0 = max(0, int(cx) - extent)
    y0 = max(0, int(cy) - extent)
    x1 = min(dst.shape[1], int(cx) + extent + 1)
    y1 = min(dst.shape[0], int(cy) + extent + 1)
    if x1 <= x0 or y1 <= y0:
        return
    size = (x1 - x0, y1 - y0)
    ox = int(cx) - x0
    oy = int(cy) - y0
    bounds = [ox - radius, oy - radius, ox + radius, oy + radius]
    if fill is not None and fill[3] > 0:
        mask = Image.new("L", size, 0)
        ImageDraw.Draw(mask).ellipse(bounds, fill=255)
        blend_mask(dst, x0, y0, np.asarray(mask, dtype=np.uint8), fill)
    if stroke is not None and stroke[3] > 0 and stroke_width > 0:
        mask = Image.new("L", size, 0)
        ImageDraw.Draw(mask).ellipse(bounds, outline=255, width=stroke_width)
        blend_mask(dst, x0, y0, np.asarray(mask, dtype=np.uint8), stroke)

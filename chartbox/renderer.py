from __future__ import annotations

from dataclasses import dataclass, field
import io
import logging
from typing import BinaryIO, Callable, Protocol

import numpy as np
from PIL import Image

from chartbox.box import Box
from chartbox.errors import OutputWriteError, RendererError
from chartbox.palette import RGBA, TRANSPARENT
from chartbox.raster import draw_circle, draw_polyline, draw_text, fill_polygon, new_canvas, text_size
from chartbox.raster.draw_text import DEFAULT_FONT_FAMILY


LOGGER = logging.getLogger(__name__)

DEFAULT_DPI = 92.0
SUPPORTED_FORMATS = ("PNG", "BMP", "TIFF", "WEBP")


class Renderer(Protocol):
    """Drawing surface the layout engine issues commands to."""

    def get_dpi(self) -> float:
        ...

    def set_dpi(self, dpi: float) -> None:
        ...

    def set_stroke_color(self, color: RGBA) -> None:
        ...

    def set_stroke_width(self, width: float) -> None:
        ...

    def set_fill_color(self, color: RGBA) -> None:
        ...

    def set_font(self, family: str) -> None:
        ...

    def set_font_size(self, size: float) -> None:
        ...

    def set_font_color(self, color: RGBA) -> None:
        ...

    def move_to(self, x: int, y: int) -> None:
        ...

    def line_to(self, x: int, y: int) -> None:
        ...

    def close(self) -> None:
        ...

    def circle(self, radius: float, x: int, y: int) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...

    def fill_stroke(self) -> None:
        ...

    def text(self, body: str, x: int, y: int) -> None:
        ...

    def measure_text(self, body: str) -> Box:
        ...

    def save(self, sink: BinaryIO) -> None:
        ...


RendererProvider = Callable[[int, int], Renderer]


@dataclass(frozen=True)
class _Circle:
    radius: float
    x: int
    y: int


@dataclass
class RasterRenderer:
    """numpy-backed RGBA renderer that encodes through Pillow on ``save``."""

    width: int
    height: int
    image_format: str = "PNG"
    dpi: float = DEFAULT_DPI

    stroke_color: RGBA = TRANSPARENT
    stroke_width: float = 0.0
    fill_color: RGBA = TRANSPARENT
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = 10.0
    font_color: RGBA = TRANSPARENT

    _canvas: np.ndarray | None = None
    _paths: list[list[tuple[int, int]]] = field(default_factory=list)
    _closed: list[bool] = field(default_factory=list)
    _circles: list[_Circle] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise RendererError(f"invalid canvas size {self.width}x{self.height}; width and height must be > 0")
        fmt = self.image_format.upper()
        if fmt not in SUPPORTED_FORMATS:
            raise RendererError(f"unsupported image format: {self.image_format}")
        self.image_format = fmt
        self._canvas = new_canvas(self.width, self.height)

    @property
    def canvas(self) -> np.ndarray:
        assert self._canvas is not None
        return self._canvas

    def get_dpi(self) -> float:
        return self.dpi

    def set_dpi(self, dpi: float) -> None:
        if dpi <= 0:
            raise ValueError("dpi must be > 0")
        self.dpi = float(dpi)

    def set_stroke_color(self, color: RGBA) -> None:
        self.stroke_color = color

    def set_stroke_width(self, width: float) -> None:
        self.stroke_width = float(width)

    def set_fill_color(self, color: RGBA) -> None:
        self.fill_color = color

    def set_font(self, family: str) -> None:
        self.font_family = family

    def set_font_size(self, size: float) -> None:
        self.font_size = float(size)

    def set_font_color(self, color: RGBA) -> None:
        self.font_color = color

    def font_size_px(self) -> float:
        return self.font_size * self.dpi / 72.0

    def move_to(self, x: int, y: int) -> None:
        self._paths.append([(int(x), int(y))])
        self._closed.append(False)

    def line_to(self, x: int, y: int) -> None:
        if not self._paths:
            self.move_to(x, y)
            return
        self._paths[-1].append((int(x), int(y)))

    def close(self) -> None:
        if self._closed:
            self._closed[-1] = True

    def circle(self, radius: float, x: int, y: int) -> None:
        self._circles.append(_Circle(radius=float(radius), x=int(x), y=int(y)))

    def stroke(self) -> None:
        self._paint(fill=False, stroke=True)

    def fill(self) -> None:
        self._paint(fill=True, stroke=False)

    def fill_stroke(self) -> None:
        self._paint(fill=True, stroke=True)

    def _stroke_px(self) -> int:
        if self.stroke_width <= 0:
            return 0
        return max(1, int(round(self.stroke_width)))

    def _paint(self, *, fill: bool, stroke: bool) -> None:
        width = self._stroke_px()
        for points, closed in zip(self._paths, self._closed):
            if fill:
                fill_polygon(self.canvas, points, self.fill_color)
            if stroke and width > 0:
                outline = points + [points[0]] if closed and len(points) > 2 else points
                draw_polyline(self.canvas, outline, self.stroke_color, width=width)
        for c in self._circles:
            draw_circle(
                self.canvas,
                c.x,
                c.y,
                c.radius,
                fill=self.fill_color if fill else None,
                stroke=self.stroke_color if stroke and width > 0 else None,
                stroke_width=width,
            )
        self._paths.clear()
        self._closed.clear()
        self._circles.clear()

    def text(self, body: str, x: int, y: int) -> None:
        """Draw ``body`` with its baseline at ``y`` and its left edge at ``x``."""
        if not body:
            return
        _, h = text_size(body, font_family=self.font_family, font_size_px=self.font_size_px())
        draw_text(
            self.canvas,
            int(x),
            int(y) - h,
            body,
            self.font_color,
            font_family=self.font_family,
            font_size_px=self.font_size_px(),
        )

    def measure_text(self, body: str) -> Box:
        w, h = text_size(body, font_family=self.font_family, font_size_px=self.font_size_px())
        return Box(top=0, left=0, right=w, bottom=h)

    def encode(self) -> bytes:
        buf = io.BytesIO()
        Image.fromarray(self.canvas).save(buf, format=self.image_format)
        return buf.getvalue()

    def save(self, sink: BinaryIO) -> None:
        data = self.encode()
        try:
            sink.write(data)
        except OSError as exc:
            raise OutputWriteError(f"failed to write {len(data)} encoded bytes: {exc}") from exc
        LOGGER.info("wrote %d bytes of %s output", len(data), self.image_format)


def renderer_provider(image_format: str = "PNG") -> RendererProvider:
    fmt = image_format.upper()
    if fmt not in SUPPORTED_FORMATS:
        raise RendererError(f"unsupported image format: {image_format}")

    def provide(width: int, height: int) -> RasterRenderer:
        return RasterRenderer(width=width, height=height, image_format=fmt)

    return provide


PNG = renderer_provider("PNG")

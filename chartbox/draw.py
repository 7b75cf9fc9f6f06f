from __future__ import annotations

from chartbox.box import Box
from chartbox.renderer import Renderer
from chartbox.style import Style


def draw_box(r: Renderer, box: Box, style: Style) -> None:
    style.write_to_renderer(r)
    r.move_to(box.left, box.top)
    r.line_to(box.right, box.top)
    r.line_to(box.right, box.bottom)
    r.line_to(box.left, box.bottom)
    r.line_to(box.left, box.top)
    r.close()
    r.fill_stroke()


def draw_circle(r: Renderer, x: int, y: int, radius: float, style: Style) -> None:
    style.write_to_renderer(r)
    r.circle(radius, x, y)
    r.fill_stroke()


def draw_text(r: Renderer, text: str, x: int, y: int, style: Style) -> None:
    style.write_text_to_renderer(r)
    r.text(text, x, y)


def draw_line(r: Renderer, x0: int, y0: int, x1: int, y1: int, style: Style) -> None:
    style.write_stroke_to_renderer(r)
    r.move_to(x0, y0)
    r.line_to(x1, y1)
    r.stroke()

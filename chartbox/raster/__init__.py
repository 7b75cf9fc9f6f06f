from .canvas import blend_mask, draw_hline, draw_pixel, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_line_segment, draw_polyline
from .draw_shapes import draw_circle, fill_polygon
from .draw_text import draw_text, line_height, load_font, text_size

__all__ = [
    "blend_mask",
    "draw_circle",
    "draw_hline",
    "draw_line_segment",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_polygon",
    "fill_rect",
    "line_height",
    "load_font",
    "new_canvas",
    "text_size",
]

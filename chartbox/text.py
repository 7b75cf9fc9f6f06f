from __future__ import annotations

from chartbox.box import Box
from chartbox.renderer import Renderer
from chartbox.style import DEFAULT_LINE_SPACING, Style


def wrap_fit(r: Renderer, value: str, width: int, style: Style) -> list[str]:
    """Break ``value`` into lines no wider than ``width`` under the style's font."""
    style.write_text_to_renderer(r)
    wrap = style.text_wrap or "word"
    if wrap == "none":
        return [value]
    if wrap == "rune":
        return _wrap_runes(r, value, width)

    lines: list[str] = []
    for paragraph in value.split("\n"):
        line = ""
        for word in paragraph.split():
            candidate = word if not line else f"{line} {word}"
            if r.measure_text(candidate).width <= width:
                line = candidate
                continue
            if line:
                lines.append(line)
            if r.measure_text(word).width <= width:
                line = word
                continue
            pieces = _wrap_runes(r, word, width)
            lines.extend(pieces[:-1])
            line = pieces[-1]
        lines.append(line)
    return lines


def _wrap_runes(r: Renderer, value: str, width: int) -> list[str]:
    lines: list[str] = []
    line = ""
    for ch in value:
        if ch == "\n":
            lines.append(line)
            line = ""
            continue
        candidate = line + ch
        if line and r.measure_text(candidate).width > width:
            lines.append(line)
            line = ch
        else:
            line = candidate
    lines.append(line)
    return lines


def measure_lines(r: Renderer, lines: list[str], style: Style) -> Box:
    style.write_text_to_renderer(r)
    spacing = style.text_line_spacing if style.text_line_spacing is not None else DEFAULT_LINE_SPACING
    width = 0
    height = 0
    for index, line in enumerate(lines):
        tb = r.measure_text(line)
        width = max(width, tb.width)
        height += tb.height
        if index > 0:
            height += spacing
    return Box(top=0, left=0, right=width, bottom=height)


def draw_text_within(r: Renderer, value: str, box: Box, style: Style) -> None:
    lines = wrap_fit(r, value, box.width, style)
    lines_box = measure_lines(r, lines, style)
    spacing = style.text_line_spacing if style.text_line_spacing is not None else DEFAULT_LINE_SPACING

    valign = style.text_vertical_align or "top"
    if valign == "middle":
        y = box.top + (box.height - lines_box.height) // 2
    elif valign == "bottom":
        y = box.bottom - lines_box.height
    else:
        y = box.top

    halign = style.text_horizontal_align or "left"
    for line in lines:
        tb = r.measure_text(line)
        if halign == "center":
            x = box.left + (box.width - tb.width) // 2
        elif halign == "right":
            x = box.right - tb.width
        else:
            x = box.left
        y += tb.height
        r.text(line, x, y)
        y += spacing

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Mapping

from chartbox.box import Padding
from chartbox.bubble import BubbleChart, BubbleValue
from chartbox.errors import ChartConfigError
from chartbox.formatting import ValueFormatter, float_value_formatter, percent_value_formatter
from chartbox.layout import Axis
from chartbox.palette import DARK_PALETTE, DEFAULT_PALETTE, Palette, parse_color
from chartbox.ranges import ContinuousRange
from chartbox.stacked_bar import StackedBarChart, StackedBarValue
from chartbox.style import Style
from chartbox.ticks import Tick
from chartbox.value import Value


Chart = BubbleChart | StackedBarChart

PALETTES: dict[str, Palette] = {"light": DEFAULT_PALETTE, "dark": DARK_PALETTE}
FORMATTERS: dict[str, ValueFormatter] = {"float": float_value_formatter, "percent": percent_value_formatter}

_CHART_KEYS = {
    "type",
    "title",
    "title_style",
    "palette",
    "width",
    "height",
    "dpi",
    "background",
    "canvas",
    "x_axis",
    "y_axis",
    "font",
}
_BUBBLE_KEYS = _CHART_KEYS | {"bubbles", "bubble_scale"}
_STACKED_BAR_KEYS = _CHART_KEYS | {"bars", "bar_width", "bar_spacing"}
_STYLE_KEYS = {
    "show",
    "padding",
    "stroke_color",
    "stroke_width",
    "fill_color",
    "font_family",
    "font_size",
    "font_color",
    "text_horizontal_align",
    "text_vertical_align",
    "text_wrap",
    "text_line_spacing",
}
_PADDING_KEYS = {"top", "left", "right", "bottom"}
_AXIS_KEYS = {"style", "range", "ticks", "formatter"}
_RANGE_KEYS = {"min", "max"}
_TICK_KEYS = {"value", "label"}
_VALUE_KEYS = {"value", "label", "style"}
_BUBBLE_VALUE_KEYS = {"value", "x", "y"}
_BAR_KEYS = {"name", "width", "values"}

_ALIGN_H = ("left", "center", "right")
_ALIGN_V = ("top", "middle", "bottom")
_WRAPS = ("none", "word", "rune")


def _mapping(raw: Any, where: str, allowed: set[str]) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ChartConfigError(f"`{where}` must be an object")
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ChartConfigError(f"Unknown key in `{where}`: {unknown[0]}")
    return raw


def _list(raw: Any, where: str) -> list[Any]:
    if not isinstance(raw, list):
        raise ChartConfigError(f"`{where}` must be a list")
    return raw


def _number(raw: Any, where: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ChartConfigError(f"`{where}` must be a number")
    value = float(raw)
    if not math.isfinite(value):
        raise ChartConfigError(f"`{where}` must be a finite number")
    return value


def _int(raw: Any, where: str, *, minimum: int | None = None) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ChartConfigError(f"`{where}` must be an integer")
    if minimum is not None and raw < minimum:
        raise ChartConfigError(f"`{where}` must be >= {minimum}")
    return raw


def _positive(raw: Any, where: str) -> float:
    value = _number(raw, where)
    if value <= 0:
        raise ChartConfigError(f"`{where}` must be a positive number")
    return value


def _str(raw: Any, where: str) -> str:
    if not isinstance(raw, str):
        raise ChartConfigError(f"`{where}` must be a string")
    return raw


def _choice(raw: Any, where: str, choices: tuple[str, ...]) -> str:
    value = _str(raw, where)
    if value not in choices:
        raise ChartConfigError(f"`{where}` must be one of {', '.join(choices)}")
    return value


def parse_padding(raw: Any, where: str = "padding") -> Padding:
    raw = _mapping(raw, where, _PADDING_KEYS)
    return Padding(**{key: _int(raw[key], f"{where}.{key}") for key in raw})


def parse_style(raw: Any, where: str = "style") -> Style:
    if raw is None:
        return Style()
    raw = _mapping(raw, where, _STYLE_KEYS)
    out: dict[str, Any] = {}
    for key, value in raw.items():
        path = f"{where}.{key}"
        if key == "show":
            if not isinstance(value, bool):
                raise ChartConfigError(f"`{path}` must be true or false")
            out[key] = value
        elif key == "padding":
            out[key] = parse_padding(value, path)
        elif key in ("stroke_color", "fill_color", "font_color"):
            out[key] = parse_color(_str(value, path))
        elif key == "stroke_width":
            out[key] = max(0.0, _number(value, path))
        elif key == "font_size":
            out[key] = _positive(value, path)
        elif key == "font_family":
            if not _str(value, path).strip():
                raise ChartConfigError(f"`{path}` must be a non-empty string")
            out[key] = value
        elif key == "text_horizontal_align":
            out[key] = _choice(value, path, _ALIGN_H)
        elif key == "text_vertical_align":
            out[key] = _choice(value, path, _ALIGN_V)
        elif key == "text_wrap":
            out[key] = _choice(value, path, _WRAPS)
        elif key == "text_line_spacing":
            out[key] = _int(value, path, minimum=0)
    return Style(**out)


def parse_range(raw: Any, where: str = "range") -> ContinuousRange:
    raw = _mapping(raw, where, _RANGE_KEYS)
    if "min" not in raw or "max" not in raw:
        raise ChartConfigError(f"`{where}` needs both `min` and `max`")
    lo = _number(raw["min"], f"{where}.min")
    hi = _number(raw["max"], f"{where}.max")
    if lo > hi:
        raise ChartConfigError(f"`{where}.min` must not exceed `{where}.max`")
    return ContinuousRange(min=lo, max=hi)


def parse_axis(raw: Any, where: str) -> Axis:
    if raw is None:
        return Axis()
    raw = _mapping(raw, where, _AXIS_KEYS)
    formatter = None
    if "formatter" in raw:
        formatter = FORMATTERS[_choice(raw["formatter"], f"{where}.formatter", tuple(FORMATTERS))]
    ticks = None
    if "ticks" in raw:
        ticks = []
        for i, item in enumerate(_list(raw["ticks"], f"{where}.ticks")):
            path = f"{where}.ticks[{i}]"
            item = _mapping(item, path, _TICK_KEYS)
            value = _number(item.get("value"), f"{path}.value")
            label = _str(item["label"], f"{path}.label") if "label" in item else (formatter or float_value_formatter)(value)
            ticks.append(Tick(value=value, label=label))
    return Axis(
        style=parse_style(raw.get("style"), f"{where}.style"),
        range=parse_range(raw["range"], f"{where}.range") if "range" in raw else None,
        ticks=ticks,
        value_formatter=formatter,
    )


def parse_value(raw: Any, where: str) -> Value:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return Value(value=float(raw))
    raw = _mapping(raw, where, _VALUE_KEYS)
    return Value(
        value=_number(raw.get("value"), f"{where}.value"),
        label=_str(raw.get("label", ""), f"{where}.label"),
        style=parse_style(raw.get("style"), f"{where}.style"),
    )


def parse_bubble(raw: Any, where: str) -> BubbleValue:
    raw = _mapping(raw, where, _BUBBLE_VALUE_KEYS)
    return BubbleValue(
        value=parse_value(raw.get("value"), f"{where}.value"),
        x=_number(raw.get("x"), f"{where}.x"),
        y=_number(raw.get("y"), f"{where}.y"),
    )


def parse_bar(raw: Any, where: str) -> StackedBarValue:
    raw = _mapping(raw, where, _BAR_KEYS)
    values = _list(raw.get("values", []), f"{where}.values")
    return StackedBarValue(
        name=_str(raw.get("name", ""), f"{where}.name"),
        width=_int(raw["width"], f"{where}.width", minimum=0) if "width" in raw else None,
        values=tuple(parse_value(v, f"{where}.values[{i}]") for i, v in enumerate(values)),
    )


def _common(raw: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {
        "title": _str(raw.get("title", ""), "title"),
        "title_style": parse_style(raw.get("title_style"), "title_style"),
        "background": parse_style(raw.get("background"), "background"),
        "canvas": parse_style(raw.get("canvas"), "canvas"),
        "y_axis": parse_axis(raw.get("y_axis"), "y_axis"),
    }
    if "palette" in raw:
        out["color_palette"] = PALETTES[_choice(raw["palette"], "palette", tuple(PALETTES))]
    if "width" in raw:
        out["width"] = _int(raw["width"], "width", minimum=1)
    if "height" in raw:
        out["height"] = _int(raw["height"], "height", minimum=1)
    if "dpi" in raw:
        out["dpi"] = _positive(raw["dpi"], "dpi")
    if "font" in raw:
        out["font"] = _str(raw["font"], "font")
    return out


def chart_from_dict(raw: Mapping[str, Any]) -> Chart:
    """Build a chart from a JSON-shaped mapping; unknown keys are rejected."""
    if not isinstance(raw, Mapping):
        raise ChartConfigError("chart config must be an object")
    chart_type = raw.get("type")
    if chart_type == "bubble":
        raw = _mapping(raw, "chart", _BUBBLE_KEYS)
        kwargs = _common(raw)
        kwargs["x_axis"] = parse_axis(raw.get("x_axis"), "x_axis")
        kwargs["bubbles"] = [parse_bubble(b, f"bubbles[{i}]") for i, b in enumerate(_list(raw.get("bubbles", []), "bubbles"))]
        if "bubble_scale" in raw:
            scale = _number(raw["bubble_scale"], "bubble_scale")
            if scale < 0:
                raise ChartConfigError("`bubble_scale` must be >= 0")
            kwargs["bubble_scale"] = scale
        return BubbleChart(**kwargs)
    if chart_type == "stacked_bar":
        raw = _mapping(raw, "chart", _STACKED_BAR_KEYS)
        kwargs = _common(raw)
        kwargs["x_axis"] = parse_style(raw.get("x_axis"), "x_axis")
        kwargs["bars"] = [parse_bar(b, f"bars[{i}]") for i, b in enumerate(_list(raw.get("bars", []), "bars"))]
        if "bar_width" in raw:
            kwargs["bar_width"] = _int(raw["bar_width"], "bar_width", minimum=0)
        if "bar_spacing" in raw:
            kwargs["bar_spacing"] = _int(raw["bar_spacing"], "bar_spacing", minimum=0)
        return StackedBarChart(**kwargs)
    raise ChartConfigError(f"unsupported chart type: {chart_type!r} (expected bubble or stacked_bar)")


def load_chart(path: str | Path) -> Chart:
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ChartConfigError(f"{path}: invalid JSON: {exc}") from exc
    except OSError as exc:
        raise ChartConfigError(f"{path}: cannot read chart config: {exc}") from exc
    return chart_from_dict(raw)

from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
from typing import Callable


ValueFormatter = Callable[[float], str]


def float_value_formatter(value: float) -> str:
    return f"{float(value):.2f}"


def percent_value_formatter(value: float) -> str:
    return f"{float(value) * 100.0:.0f}%"


def format_value(value: float, *, decimals: int = 6) -> str:
    """Shortest readable decimal text for a magnitude (``2.55``, ``1``, ``-0.5``)."""
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e6 or abs_v < 10.0 ** (-decimals)):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Trim only the fractional part so integers like 30 keep their zeros.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out

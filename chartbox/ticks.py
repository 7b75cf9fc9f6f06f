from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from chartbox.formatting import ValueFormatter, float_value_formatter
from chartbox.ranges import ContinuousRange
from chartbox.renderer import Renderer
from chartbox.style import Style


MIN_TICK_HORIZONTAL_SPACING = 20
MIN_TICK_VERTICAL_SPACING = 20
TICK_COUNT_SANITY_CHECK = 1 << 10


@dataclass(frozen=True)
class Tick:
    value: float
    label: str


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Snap floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def generate_ticks(
    r: Renderer,
    rng: ContinuousRange,
    style: Style,
    formatter: ValueFormatter | None = None,
    *,
    vertical: bool,
) -> list[Tick]:
    """Ascending ticks covering ``rng``, spaced so their labels do not collide.

    The label of the range minimum is measured to size one tick slot; the
    domain holds ``floor(domain / slot)`` slots. Both range endpoints are
    always emitted.
    """
    vf = formatter or float_value_formatter
    lo, hi = float(rng.min), float(rng.max)
    if lo > hi:
        lo, hi = hi, lo

    style.write_text_to_renderer(r)
    label_box = r.measure_text(vf(lo))
    if vertical:
        slot = label_box.height + MIN_TICK_VERTICAL_SPACING
    else:
        slot = label_box.width + MIN_TICK_HORIZONTAL_SPACING

    if lo == hi:
        return [Tick(value=lo, label=vf(lo))]

    domain = float(rng.domain or 0)
    target = int(math.floor(domain / max(1, slot)))
    target = min(target, TICK_COUNT_SANITY_CHECK)

    ticks = [Tick(value=lo, label=vf(lo))]
    if target >= 2:
        values = generate_nice_ticks(lo, hi, target)
        step = float(abs(values[1] - values[0])) if values.size > 1 else hi - lo
        margin = step * 0.5
        for v in values.tolist():
            if v - lo < margin or hi - v < margin:
                continue
            ticks.append(Tick(value=float(v), label=vf(float(v))))
    ticks.append(Tick(value=hi, label=vf(hi)))
    return ticks


def ticks_within_range(ticks: Sequence[Tick], rng: ContinuousRange) -> list[Tick]:
    lo, hi = min(rng.min, rng.max), max(rng.min, rng.max)
    return sorted((t for t in ticks if lo <= t.value <= hi), key=lambda t: t.value)


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))

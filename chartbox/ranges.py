from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterable, Sequence

from chartbox.errors import ChartConfigError


@dataclass
class ContinuousRange:
    """Linear value-to-pixel mapping over a fixed domain length."""

    min: float = 0.0
    max: float = 0.0
    domain: int | None = None

    @property
    def delta(self) -> float:
        return self.max - self.min

    def is_zero(self) -> bool:
        return self.delta == 0

    def set_domain(self, length: int) -> "ContinuousRange":
        if length < 0:
            raise ValueError("range domain must be >= 0")
        self.domain = int(length)
        return self

    def translate(self, value: float) -> int:
        if self.domain is None:
            raise ValueError("range domain is not set; call set_domain() first")
        delta = self.delta
        if delta == 0:
            return 0
        return int(math.ceil(((value - self.min) / delta) * self.domain))

    def copy(self) -> "ContinuousRange":
        return ContinuousRange(min=self.min, max=self.max, domain=self.domain)


def correct_degenerate_range(rng: ContinuousRange) -> ContinuousRange:
    """Give a single-valued range a visible span anchored at zero."""
    if not rng.is_zero():
        return rng
    value = rng.max
    if value > 0:
        rng.min = 0.0
    elif value < 0:
        rng.max = 0.0
    else:
        rng.min = 0.0
        rng.max = 0.5
    return rng


def resolve_range(
    explicit: ContinuousRange | None,
    tick_values: Sequence[float] | None,
    values: Iterable[float],
) -> ContinuousRange:
    """Pick the axis range: explicit span, then explicit ticks, then the data extent.

    Only ranges derived from ticks or data are corrected for degeneracy; an
    explicit range is used as given. The returned range is always a fresh
    object so a render never mutates caller configuration.
    """
    if explicit is not None and not explicit.is_zero():
        return ContinuousRange(min=float(explicit.min), max=float(explicit.max))

    if tick_values:
        rng = ContinuousRange(min=float(min(tick_values)), max=float(max(tick_values)))
        return correct_degenerate_range(rng)

    lo = math.inf
    hi = -math.inf
    for value in values:
        v = float(value)
        lo = min(lo, v)
        hi = max(hi, v)
    if lo > hi:
        raise ChartConfigError("cannot compute an axis range without values")
    return correct_degenerate_range(ContinuousRange(min=lo, max=hi))

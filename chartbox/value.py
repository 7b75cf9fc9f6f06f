from __future__ import annotations

from dataclasses import dataclass, field

from chartbox.style import Style


@dataclass(frozen=True)
class Value:
    """A magnitude with its display label and an optional style override."""

    value: float
    label: str = ""
    style: Style = field(default_factory=Style)

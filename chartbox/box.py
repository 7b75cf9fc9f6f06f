from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Padding:
    """Per-side spacing; a side left as ``None`` falls back to the caller's default."""

    top: int | None = None
    left: int | None = None
    right: int | None = None
    bottom: int | None = None

    def top_or(self, default: int) -> int:
        return default if self.top is None else self.top

    def left_or(self, default: int) -> int:
        return default if self.left is None else self.left

    def right_or(self, default: int) -> int:
        return default if self.right is None else self.right

    def bottom_or(self, default: int) -> int:
        return default if self.bottom is None else self.bottom


def merge_padding(specific: Padding | None, defaults: Padding | None) -> Padding | None:
    if specific is None:
        return defaults
    if defaults is None:
        return specific
    return Padding(
        top=specific.top if specific.top is not None else defaults.top,
        left=specific.left if specific.left is not None else defaults.left,
        right=specific.right if specific.right is not None else defaults.right,
        bottom=specific.bottom if specific.bottom is not None else defaults.bottom,
    )


@dataclass(frozen=True)
class Box:
    """Axis-aligned pixel rectangle; rows grow downward."""

    top: int = 0
    left: int = 0
    right: int = 0
    bottom: int = 0

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[int, int]:
        return (self.left + self.width // 2, self.top + self.height // 2)

    def is_zero(self) -> bool:
        return self.top == 0 and self.left == 0 and self.right == 0 and self.bottom == 0

    def clone(self) -> "Box":
        return Box(top=self.top, left=self.left, right=self.right, bottom=self.bottom)

    def shift(self, dx: int = 0, dy: int = 0) -> "Box":
        return Box(top=self.top + dy, left=self.left + dx, right=self.right + dx, bottom=self.bottom + dy)

    def grow(self, other: "Box") -> "Box":
        """Smallest box containing both ``self`` and ``other``."""
        return Box(
            top=min(self.top, other.top),
            left=min(self.left, other.left),
            right=max(self.right, other.right),
            bottom=max(self.bottom, other.bottom),
        )

    def outer_constrain(self, bounds: "Box", other: "Box") -> "Box":
        """Pull each side inward by however far ``other`` overflows ``bounds``.

        ``other`` is the footprint of this box plus everything hung off its
        edges (axes, tick labels). Sides that already fit are left alone.
        """
        top = self.top
        left = self.left
        right = self.right
        bottom = self.bottom
        if other.top < bounds.top:
            top += bounds.top - other.top
        if other.left < bounds.left:
            left += bounds.left - other.left
        if other.right > bounds.right:
            right -= other.right - bounds.right
        if other.bottom > bounds.bottom:
            bottom -= other.bottom - bounds.bottom
        return Box(top=top, left=left, right=right, bottom=bottom).normalized()

    def normalized(self) -> "Box":
        # Collapse inverted sides onto their midpoint so width/height stay >= 0.
        top, bottom = self.top, self.bottom
        left, right = self.left, self.right
        if bottom < top:
            mid = (top + bottom) // 2
            top, bottom = mid, mid
        if right < left:
            mid = (left + right) // 2
            left, right = mid, mid
        return Box(top=top, left=left, right=right, bottom=bottom)

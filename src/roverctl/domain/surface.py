"""Surface — the bounded plateau rovers travel across.

The lower-left corner is fixed at the coordinate origin; only the
upper-right corner is supplied by the instruction set.

INVARIANT: A constructed Surface has ``upper_x >= 0`` and ``upper_y >= 0``
and never changes afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field

LOWER_BOUND_X = 0
LOWER_BOUND_Y = 0


class UpperBoundsError(ValueError):
    """Raised when an upper bound lies below the fixed lower bound."""

    def __init__(self, coordinate: str, value: int, lower_bound: int) -> None:
        self.coordinate = coordinate
        self.value = value
        self.lower_bound = lower_bound
        super().__init__(
            f"the upper bound {value} for coordinate {coordinate} "
            f"must be greater than or equal to {lower_bound}"
        )


@dataclass(frozen=True)
class Surface:
    """Axis-aligned rectangle spanning ``[0, upper_x] x [0, upper_y]``."""

    upper_x: int
    upper_y: int
    lower_x: int = field(default=LOWER_BOUND_X, init=False)
    lower_y: int = field(default=LOWER_BOUND_Y, init=False)

    def __post_init__(self) -> None:
        if self.upper_x < self.lower_x:
            raise UpperBoundsError("x", self.upper_x, self.lower_x)
        if self.upper_y < self.lower_y:
            raise UpperBoundsError("y", self.upper_y, self.lower_y)

    @classmethod
    def create(cls, upper_x: int, upper_y: int) -> Surface:
        """Build a surface with the given upper-right corner.

        Raises:
            UpperBoundsError: Either bound is negative (x is checked first).
        """
        return cls(upper_x=upper_x, upper_y=upper_y)

    def contains(self, x: int, y: int) -> bool:
        """Whether ``(x, y)`` lies on the surface, edges inclusive."""
        return self.lower_x <= x <= self.upper_x and self.lower_y <= y <= self.upper_y

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        return not self.contains(x, y)

    def __str__(self) -> str:
        return (
            f"Surface | lower-bounds [{self.lower_x},{self.lower_y}]"
            f" - upper-bounds [{self.upper_x},{self.upper_y}]"
        )

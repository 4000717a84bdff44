"""Rover — a mutable position and heading on a surface."""

from __future__ import annotations

from dataclasses import dataclass

from roverctl.domain.travel import Heading, Transition


@dataclass
class Rover:
    """A rover placed by one instruction pair.

    ``rover_id`` is the 0-based index of its pair within the input and is
    only used to attribute errors.  ``apply()`` never checks bounds; the
    runner re-checks the surface after every step.
    """

    rover_id: int
    x: int
    y: int
    heading: Heading

    def apply(self, dx: int, dy: int, heading: Heading) -> None:
        """Translate by ``(dx, dy)`` and face *heading*."""
        self.x += dx
        self.y += dy
        self.heading = heading

    def apply_transition(self, transition: Transition) -> None:
        self.apply(transition.dx, transition.dy, transition.heading)

    def render(self) -> str:
        """Resting state as ``"X Y H"``, e.g. ``"2 4 W"``."""
        return f"{self.x} {self.y} {self.heading.value}"

    def __str__(self) -> str:
        return self.render()

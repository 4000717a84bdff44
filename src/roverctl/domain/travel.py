"""Heading and command vocabulary plus the transition table.

Headings and commands are single-character instructions.  ``travel()``
maps a (heading, command) pair onto a unit displacement and the heading
the rover faces afterwards:

- Turning never moves the rover.
- ``L`` rotates counter-clockwise (N -> W -> S -> E -> N).
- ``R`` rotates clockwise (N -> E -> S -> W -> N).
- ``M`` steps one unit along the current heading.
"""

from __future__ import annotations

from enum import StrEnum
from typing import NamedTuple


class Heading(StrEnum):
    """Compass heading of a rover."""

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"
    UNKNOWN = "_"


class Command(StrEnum):
    """Single-character movement instruction."""

    LEFT = "L"
    RIGHT = "R"
    MOVE = "M"
    UNKNOWN = "_"


class Transition(NamedTuple):
    """Displacement and resulting heading for one command."""

    dx: int
    dy: int
    heading: Heading


class ParseHeadingError(ValueError):
    """Raised when a token is not one of N, E, S, W."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"'{token}' is not a valid direction")


class ParseCommandError(ValueError):
    """Raised when a token is not one of L, R, M."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"'{token}' is not a valid move")


_HEADINGS: dict[str, Heading] = {h.value: h for h in Heading if h is not Heading.UNKNOWN}
_COMMANDS: dict[str, Command] = {c.value: c for c in Command if c is not Command.UNKNOWN}


def parse_heading(token: str) -> Heading:
    """Parse a one-character heading token.

    Raises:
        ParseHeadingError: *token* is not exactly one of ``N E S W``.
    """
    heading = _HEADINGS.get(token) if len(token) == 1 else None
    if heading is None:
        raise ParseHeadingError(token)
    return heading


def parse_command(token: str) -> Command:
    """Parse a one-character command token.

    Raises:
        ParseCommandError: *token* is not exactly one of ``L R M``.
    """
    command = _COMMANDS.get(token) if len(token) == 1 else None
    if command is None:
        raise ParseCommandError(token)
    return command


def travel(heading: Heading, command: Command) -> Transition:
    """Return the displacement and new heading for *command* from *heading*.

    Pairs involving an UNKNOWN sentinel leave the rover where it is.

    Examples:
        >>> travel(Heading.NORTH, Command.LEFT)
        Transition(dx=0, dy=0, heading=<Heading.WEST: 'W'>)
        >>> travel(Heading.EAST, Command.MOVE)
        Transition(dx=1, dy=0, heading=<Heading.EAST: 'E'>)
    """
    match heading, command:
        case Heading.NORTH, Command.LEFT:
            return Transition(0, 0, Heading.WEST)
        case Heading.NORTH, Command.RIGHT:
            return Transition(0, 0, Heading.EAST)
        case Heading.NORTH, Command.MOVE:
            return Transition(0, 1, Heading.NORTH)
        case Heading.EAST, Command.LEFT:
            return Transition(0, 0, Heading.NORTH)
        case Heading.EAST, Command.RIGHT:
            return Transition(0, 0, Heading.SOUTH)
        case Heading.EAST, Command.MOVE:
            return Transition(1, 0, Heading.EAST)
        case Heading.SOUTH, Command.LEFT:
            return Transition(0, 0, Heading.EAST)
        case Heading.SOUTH, Command.RIGHT:
            return Transition(0, 0, Heading.WEST)
        case Heading.SOUTH, Command.MOVE:
            return Transition(0, -1, Heading.SOUTH)
        case Heading.WEST, Command.LEFT:
            return Transition(0, 0, Heading.SOUTH)
        case Heading.WEST, Command.RIGHT:
            return Transition(0, 0, Heading.NORTH)
        case Heading.WEST, Command.MOVE:
            return Transition(-1, 0, Heading.WEST)
        case _:
            return Transition(0, 0, heading)

"""RunError — the tagged union of every way an instruction set can fail.

Each variant is a frozen pydantic model discriminated by ``kind`` and
carries exactly the context needed to pinpoint the failing token without
re-parsing the input.  Errors are values: the runner returns them next to
the output already produced, it never raises them.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

# A surface line plus at least one (placement, commands) pair.
MINIMUM_INPUT_LINES = 3
# Only two-dimensional surfaces are supported.
SURFACE_DIMENSIONS = 2
# x, y, heading.
ROVER_INSTRUCTION_LENGTH = 3


class _RunErrorBase(BaseModel):
    model_config = {"frozen": True}

    @property
    def message(self) -> str:
        raise NotImplementedError

    def detail(self) -> dict[str, Any]:
        """Structured fields without the ``kind`` tag."""
        return self.model_dump(exclude={"kind"})

    def __str__(self) -> str:
        return self.message


# --- Input shape ---


class TooFewLines(_RunErrorBase):
    kind: Literal["TooFewLines"] = "TooFewLines"
    lines: int

    @property
    def message(self) -> str:
        return (
            f"the input should have at least {MINIMUM_INPUT_LINES} lines"
            f" - {self.lines} lines were detected"
        )


class EvenLineCount(_RunErrorBase):
    """A surface takes one line and every rover two, so valid input is 2n + 1 lines."""

    kind: Literal["EvenLineCount"] = "EvenLineCount"
    lines: int

    @property
    def message(self) -> str:
        return (
            "the input should have an odd number of lines"
            f" - {self.lines} lines were detected"
        )


# --- Surface ---


class SurfaceDimensionMismatch(_RunErrorBase):
    kind: Literal["SurfaceDimensionMismatch"] = "SurfaceDimensionMismatch"
    dimensions: int
    surface: str

    @property
    def message(self) -> str:
        return (
            f"surface '{self.surface}' does not have the required number of surface"
            f" dimensions - expected {SURFACE_DIMENSIONS} dimensions"
            f" - detected {self.dimensions} instead"
        )


class SurfaceBoundaryParse(_RunErrorBase):
    kind: Literal["SurfaceBoundaryParse"] = "SurfaceBoundaryParse"
    coordinate: str
    boundary: str

    @property
    def message(self) -> str:
        return (
            f"{self.coordinate} coordinate boundary '{self.boundary}'"
            " cannot be transformed into an int"
        )


class SurfaceBoundsInvalid(_RunErrorBase):
    """Wraps the surface's own ``UpperBoundsError``."""

    kind: Literal["SurfaceBoundsInvalid"] = "SurfaceBoundsInvalid"
    coordinate: str
    value: int
    lower_bound: int

    @property
    def message(self) -> str:
        return (
            f"unable to create new surface: the upper bound {self.value} for coordinate"
            f" {self.coordinate} must be greater than or equal to {self.lower_bound}"
        )


# --- Rovers ---


class RobotInstructionLength(_RunErrorBase):
    kind: Literal["RobotInstructionLength"] = "RobotInstructionLength"
    rover_id: int
    instructions: str
    tokens: int

    @property
    def message(self) -> str:
        return (
            f"'{self.instructions}' for robot ID {self.rover_id} does not have the required"
            f" number of instructions - expected {ROVER_INSTRUCTION_LENGTH}"
            f" - detected {self.tokens} instead"
        )


class RobotCoordinateParse(_RunErrorBase):
    kind: Literal["RobotCoordinateParse"] = "RobotCoordinateParse"
    rover_id: int
    coordinate: str
    position: str

    @property
    def message(self) -> str:
        return (
            f"robot ID {self.rover_id}'s {self.coordinate}-coordinate '{self.position}'"
            " cannot be transformed into an int"
        )


class RobotDirectionParse(_RunErrorBase):
    kind: Literal["RobotDirectionParse"] = "RobotDirectionParse"
    rover_id: int
    direction: str

    @property
    def message(self) -> str:
        return (
            f"unable to parse robot ID {self.rover_id}'s direction:"
            f" '{self.direction}' is not a valid direction"
        )


class RobotOutOfBounds(_RunErrorBase):
    """Initial placement or a post-move position outside the surface."""

    kind: Literal["RobotOutOfBounds"] = "RobotOutOfBounds"
    rover_id: int
    x: int
    y: int

    @property
    def message(self) -> str:
        return f"robot ID {self.rover_id} has moved out of bounds - X: {self.x} Y: {self.y}"


class RobotMovementParse(_RunErrorBase):
    kind: Literal["RobotMovementParse"] = "RobotMovementParse"
    rover_id: int
    movement: str

    @property
    def message(self) -> str:
        return (
            f"unable to parse robot ID {self.rover_id}'s movement:"
            f" '{self.movement}' is not a valid move"
        )


RunError = Annotated[
    TooFewLines
    | EvenLineCount
    | SurfaceDimensionMismatch
    | SurfaceBoundaryParse
    | SurfaceBoundsInvalid
    | RobotInstructionLength
    | RobotCoordinateParse
    | RobotDirectionParse
    | RobotOutOfBounds
    | RobotMovementParse,
    Field(discriminator="kind"),
]

RUN_ERROR_TYPES: tuple[type[_RunErrorBase], ...] = (
    TooFewLines,
    EvenLineCount,
    SurfaceDimensionMismatch,
    SurfaceBoundaryParse,
    SurfaceBoundsInvalid,
    RobotInstructionLength,
    RobotCoordinateParse,
    RobotDirectionParse,
    RobotOutOfBounds,
    RobotMovementParse,
)


def is_run_error(value: object) -> bool:
    """Whether *value* is one of the RunError variants."""
    return isinstance(value, RUN_ERROR_TYPES)

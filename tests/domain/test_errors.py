"""Tests for the RunError tagged union."""

import json

import pytest
from pydantic import BaseModel

from roverctl.domain.errors import (
    RUN_ERROR_TYPES,
    EvenLineCount,
    RobotCoordinateParse,
    RobotDirectionParse,
    RobotInstructionLength,
    RobotMovementParse,
    RobotOutOfBounds,
    RunError,
    SurfaceBoundaryParse,
    SurfaceBoundsInvalid,
    SurfaceDimensionMismatch,
    TooFewLines,
    is_run_error,
)

EXAMPLES = [
    (TooFewLines(lines=2), "at least 3 lines - 2 lines"),
    (EvenLineCount(lines=4), "odd number of lines - 4 lines"),
    (SurfaceDimensionMismatch(dimensions=3, surface="5 5 3"), "surface '5 5 3'"),
    (SurfaceBoundaryParse(coordinate="x", boundary="E"), "x coordinate boundary 'E'"),
    (
        SurfaceBoundsInvalid(coordinate="y", value=-1, lower_bound=0),
        "upper bound -1 for coordinate y",
    ),
    (
        RobotInstructionLength(rover_id=1, instructions="1 2", tokens=2),
        "expected 3 - detected 2",
    ),
    (
        RobotCoordinateParse(rover_id=0, coordinate="y", position="B"),
        "robot ID 0's y-coordinate 'B'",
    ),
    (RobotDirectionParse(rover_id=2, direction="Q"), "'Q' is not a valid direction"),
    (RobotOutOfBounds(rover_id=1, x=5, y=6), "robot ID 1 has moved out of bounds - X: 5 Y: 6"),
    (RobotMovementParse(rover_id=0, movement="X"), "'X' is not a valid move"),
]


@pytest.mark.parametrize(
    "error,fragment",
    EXAMPLES,
    ids=[type(e).__name__ for e, _ in EXAMPLES],
)
def test_message(error: BaseModel, fragment: str) -> None:
    assert fragment in error.message  # type: ignore[attr-defined]
    assert str(error) == error.message  # type: ignore[attr-defined]


def test_every_kind_covered() -> None:
    assert {type(e) for e, _ in EXAMPLES} == set(RUN_ERROR_TYPES)


@pytest.mark.parametrize("error", [e for e, _ in EXAMPLES], ids=lambda e: type(e).__name__)
def test_kind_matches_class_name(error: BaseModel) -> None:
    assert error.kind == type(error).__name__  # type: ignore[attr-defined]


def test_detail_excludes_kind() -> None:
    err = RobotOutOfBounds(rover_id=1, x=-1, y=0)
    assert err.detail() == {"rover_id": 1, "x": -1, "y": 0}


def test_frozen() -> None:
    err = TooFewLines(lines=1)
    with pytest.raises(Exception):
        err.lines = 5  # type: ignore[misc]


def test_discriminated_union_round_trip() -> None:
    class Holder(BaseModel):
        error: RunError

    original = Holder(error=RobotMovementParse(rover_id=4, movement="Z"))
    restored = Holder.model_validate(json.loads(original.model_dump_json()))
    assert isinstance(restored.error, RobotMovementParse)
    assert restored.error == original.error


def test_is_run_error() -> None:
    assert is_run_error(TooFewLines(lines=0))
    assert not is_run_error("1 3 N")
    assert not is_run_error(ValueError("nope"))

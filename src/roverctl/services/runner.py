"""Runner — turn an instruction set into the rovers' resting positions.

Pipeline: SPLIT → SHAPE CHECK → SURFACE → (BUILD ROVER → GUIDE ROVER)* → RESPOND

Instruction sets are newline delimited::

    5 5          <- line 0: upper-right corner of the surface
    1 2 N        <- placement: x, y, heading
    LMLMLMLMM    <- commands replayed one character at a time
    3 3 E        <- further (placement, commands) pairs ...
    MMRMMRMRRM

INVARIANT: A run stops at the first failure and reports the positions of
every rover that finished *before* the failing one, together with the
error.  The failing rover contributes nothing, even if some of its
commands succeeded.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from roverctl.domain.errors import (
    MINIMUM_INPUT_LINES,
    ROVER_INSTRUCTION_LENGTH,
    SURFACE_DIMENSIONS,
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
from roverctl.domain.rover import Rover
from roverctl.domain.surface import Surface, UpperBoundsError
from roverctl.domain.travel import (
    ParseCommandError,
    ParseHeadingError,
    parse_command,
    parse_heading,
    travel,
)
from roverctl.services.result import ServiceError, ServiceResult
from roverctl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from roverctl.config.models import RunnerConfig

logger = logging.getLogger(__name__)

# Optional sign, then ASCII digits only.
_INTEGER = re.compile(r"[+-]?[0-9]+")


class RunOutcome(BaseModel):
    """Resting positions of completed rovers plus the first error, if any."""

    model_config = {"frozen": True}

    positions: list[str] = Field(default_factory=list)
    error: RunError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output(self) -> str:
        """Positions joined by newline, no trailing newline."""
        return "\n".join(self.positions)


# ---------------------------------------------------------------------------
# Parsing steps — each returns its product or a RunError value
# ---------------------------------------------------------------------------


def split_lines(text: str) -> list[str]:
    """Split an instruction set into lines after trimming the whole text."""
    return text.strip().split("\n")


def parse_int(token: str) -> int:
    """Parse a decimal integer token.

    Stricter than ``int()``: digit separators and non-ASCII digits are
    rejected with ValueError.
    """
    if _INTEGER.fullmatch(token) is None:
        raise ValueError(f"{token!r} is not an integer")
    return int(token)


def _check_shape(lines: list[str]) -> RunError | None:
    if len(lines) < MINIMUM_INPUT_LINES:
        return TooFewLines(lines=len(lines))
    if len(lines) % 2 == 0:
        return EvenLineCount(lines=len(lines))
    return None


def build_surface(line: str) -> Surface | RunError:
    """Build the surface from its ``"<upper_x> <upper_y>"`` line."""
    bounds = line.split()
    if len(bounds) != SURFACE_DIMENSIONS:
        return SurfaceDimensionMismatch(dimensions=len(bounds), surface=line.strip())
    parsed: list[int] = []
    for coordinate, token in zip(("x", "y"), bounds, strict=True):
        try:
            parsed.append(parse_int(token))
        except ValueError:
            return SurfaceBoundaryParse(coordinate=coordinate, boundary=token)
    try:
        return Surface.create(*parsed)
    except UpperBoundsError as exc:
        return SurfaceBoundsInvalid(
            coordinate=exc.coordinate,
            value=exc.value,
            lower_bound=exc.lower_bound,
        )


def build_rover(rover_id: int, line: str, surface: Surface) -> Rover | RunError:
    """Place a rover from its ``"<x> <y> <heading>"`` line.

    The rover only exists once both the format and the bounds check pass.
    """
    config = line.split()
    if len(config) != ROVER_INSTRUCTION_LENGTH:
        return RobotInstructionLength(
            rover_id=rover_id,
            instructions=line.strip(),
            tokens=len(config),
        )
    coords: list[int] = []
    for coordinate, token in zip(("x", "y"), config[:2], strict=True):
        try:
            coords.append(parse_int(token))
        except ValueError:
            return RobotCoordinateParse(rover_id=rover_id, coordinate=coordinate, position=token)
    try:
        heading = parse_heading(config[2])
    except ParseHeadingError:
        return RobotDirectionParse(rover_id=rover_id, direction=config[2])
    x, y = coords
    if surface.is_out_of_bounds(x, y):
        return RobotOutOfBounds(rover_id=rover_id, x=x, y=y)
    return Rover(rover_id=rover_id, x=x, y=y, heading=heading)


def guide_rover(rover: Rover, commands: str, surface: Surface) -> str | RunError:
    """Replay *commands* through *rover*, checking bounds after every step.

    Returns the rendered resting position.
    """
    for char in commands.strip():
        try:
            command = parse_command(char)
        except ParseCommandError:
            return RobotMovementParse(rover_id=rover.rover_id, movement=char)
        rover.apply_transition(travel(rover.heading, command))
        if surface.is_out_of_bounds(rover.x, rover.y):
            return RobotOutOfBounds(rover_id=rover.rover_id, x=rover.x, y=rover.y)
    return rover.render()


def _run_pair(rover_id: int, placement: str, commands: str, surface: Surface) -> str | RunError:
    with trace_span(f"rover.{rover_id}") as span:
        rover = build_rover(rover_id, placement, surface)
        if not isinstance(rover, Rover):
            return rover
        result = guide_rover(rover, commands, surface)
        if span is not None:
            span.record(commands=len(commands.strip()), ok=not is_run_error(result))
        return result


def _pairs(lines: list[str]) -> list[tuple[int, str, str]]:
    instructions = lines[1:]
    return [
        (i // 2, instructions[i], instructions[i + 1]) for i in range(0, len(instructions) - 1, 2)
    ]


def _collect(results: list[str | RunError]) -> RunOutcome:
    """Truncate *results* at the first error (lowest rover id)."""
    positions: list[str] = []
    for result in results:
        if not isinstance(result, str):
            return RunOutcome(positions=positions, error=result)
        positions.append(result)
    return RunOutcome(positions=positions)


def _run_parallel(
    pairs: list[tuple[int, str, str]],
    surface: Surface,
    max_workers: int | None,
) -> RunOutcome:
    """Fork-join over rovers; the lowest failing index wins.

    Rovers only share the read-only surface, so they can be guided
    concurrently.  Futures after the first failure are cancelled.
    """
    results: list[str | RunError] = []
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="rover") as pool:
        futures: list[Future[str | RunError]] = [
            pool.submit(_run_pair, rover_id, placement, commands, surface)
            for rover_id, placement, commands in pairs
        ]
        for index, future in enumerate(futures):
            result = future.result()
            results.append(result)
            if is_run_error(result):
                for pending in futures[index + 1 :]:
                    pending.cancel()
                break
    return _collect(results)


def run(text: str, *, parallel: bool = False, max_workers: int | None = None) -> RunOutcome:
    """Run an instruction set and return the resting positions.

    Never raises for malformed input: every failure comes back as
    ``RunOutcome.error`` next to the positions of earlier rovers.

    Args:
        text: The full instruction set.
        parallel: Guide rovers on a thread pool instead of one by one.
            The outcome is identical to a sequential run.
        max_workers: Thread pool size for parallel runs.
    """
    lines = split_lines(text)
    shape_error = _check_shape(lines)
    if shape_error is not None:
        return RunOutcome(error=shape_error)

    surface = build_surface(lines[0])
    if not isinstance(surface, Surface):
        return RunOutcome(error=surface)

    pairs = _pairs(lines)
    if parallel:
        return _run_parallel(pairs, surface, max_workers)

    positions: list[str] = []
    for rover_id, placement, commands in pairs:
        result = _run_pair(rover_id, placement, commands, surface)
        if not isinstance(result, str):
            return RunOutcome(positions=positions, error=result)
        positions.append(result)
    return RunOutcome(positions=positions)


# ---------------------------------------------------------------------------
# Built-in example scenarios
# ---------------------------------------------------------------------------

DEMO_SCENARIOS: list[dict[str, Any]] = [
    {
        "name": "single rover",
        "input": "5 5\n0 0 N\nMMMMMRMMMMM",
        "expects_error": False,
    },
    {
        "name": "multiple rovers",
        "input": "5 5\n0 0 N\nMMMMMRMMMMM\n0 0 N\nMMMMMRMMMMM",
        "expects_error": False,
    },
    {
        "name": "second rover leaves the surface",
        "input": "5 5\n0 0 N\nMMMMMRMMMMM\n5 5 N\nMMMMM",
        "expects_error": True,
    },
]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class RunnerService:
    """Runs instruction sets and wraps the outcome in a ServiceResult."""

    def __init__(self, config: RunnerConfig | None = None) -> None:
        self._parallel = config.parallel if config else False
        self._max_workers = config.max_workers if config else None

    @traced
    def run(self, text: str, *, source: str = "<input>") -> ServiceResult:
        """Run *text* and report positions (partial on failure) plus any error."""
        logger.debug("run.start source=%s parallel=%s", source, self._parallel)
        outcome = run(text, parallel=self._parallel, max_workers=self._max_workers)
        data = _outcome_data(outcome)

        if outcome.error is not None:
            logger.info(
                "run.failed source=%s kind=%s completed=%d",
                source,
                outcome.error.kind,
                len(outcome.positions),
            )
            return ServiceResult(
                ok=False,
                op="run",
                data=data,
                error=ServiceError(
                    code=outcome.error.kind,
                    message=outcome.error.message,
                    detail=outcome.error.detail(),
                ),
            )

        logger.debug("run.complete source=%s rovers=%d", source, len(outcome.positions))
        return ServiceResult(ok=True, op="run", data=data)

    @traced
    def demo(self) -> ServiceResult:
        """Run the built-in example scenarios.

        The last scenario is expected to fail; the demo itself only fails
        if a scenario does not behave as expected.
        """
        scenarios: list[dict[str, Any]] = []
        mismatched: list[str] = []
        for scenario in DEMO_SCENARIOS:
            with trace_span(f"scenario.{scenario['name']}"):
                outcome = run(
                    scenario["input"],
                    parallel=self._parallel,
                    max_workers=self._max_workers,
                )
            if outcome.ok == scenario["expects_error"]:
                mismatched.append(scenario["name"])
            scenarios.append(
                {
                    "name": scenario["name"],
                    "input": scenario["input"],
                    "output": outcome.output,
                    "error": outcome.error.message if outcome.error else None,
                }
            )

        data = {"scenarios": scenarios, "count": len(scenarios)}
        if mismatched:
            return ServiceResult(
                ok=False,
                op="demo",
                data=data,
                error=ServiceError(
                    code="DEMO_MISMATCH",
                    message=f"{len(mismatched)} scenario(s) did not behave as expected",
                    detail={"scenarios": mismatched},
                ),
            )
        return ServiceResult(ok=True, op="demo", data=data)


def _outcome_data(outcome: RunOutcome) -> dict[str, Any]:
    return {
        "output": outcome.output,
        "positions": list(outcome.positions),
        "rovers": len(outcome.positions),
    }

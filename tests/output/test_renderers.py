"""Tests for operation-specific Rich renderers."""

from roverctl.output.renderers import _OP_RENDERERS, render_partial, render_quiet, render_result
from roverctl.services.result import ServiceError, ServiceResult


def _run_data(*positions: str) -> dict[str, object]:
    return {"output": "\n".join(positions), "positions": list(positions), "rovers": len(positions)}


def _run_ok(*positions: str) -> ServiceResult:
    return ServiceResult(ok=True, op="run", data=_run_data(*positions))


def _run_err(*positions: str) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="run",
        data=_run_data(*positions),
        error=ServiceError(
            code="RobotOutOfBounds",
            message="robot ID 1 has moved out of bounds - X: 6 Y: 3",
            detail={"rover_id": 1, "x": 6, "y": 3},
        ),
    )


class TestRunRenderer:
    def test_positions_table(self) -> None:
        output = render_result(_run_ok("1 3 N", "5 1 E"))
        assert "OK" in output
        assert "run" in output
        assert "rovers: 2" in output
        assert "Heading" in output
        assert "E" in output

    def test_no_rovers(self) -> None:
        output = render_result(_run_ok())
        assert "rovers: 0" in output
        assert "Heading" not in output

    def test_verbose_meta(self) -> None:
        telemetry = {
            "name": "RunnerService.run",
            "duration_ms": 1.5,
            "children": [{"name": "rover.0", "duration_ms": 0.2, "annotations": {"commands": 9}}],
        }
        result = _run_ok("1 3 N").model_copy(update={"meta": {"telemetry": telemetry}})
        output = render_result(result, verbose=True)
        assert "meta:" in output
        assert "RunnerService.run" in output
        assert "rover.0" in output
        assert "commands=9" in output

    def test_meta_hidden_without_verbose(self) -> None:
        result = _run_ok("1 3 N").model_copy(update={"meta": {"telemetry": {"name": "x"}}})
        assert "meta:" not in render_result(result)


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_run_err("1 3 N"))
        assert "ERROR" in output
        assert "moved out of bounds" in output
        assert "code:" not in output

    def test_verbose_shows_code_and_detail(self) -> None:
        output = render_result(_run_err(), verbose=True)
        assert "code: RobotOutOfBounds" in output
        assert "detail:" in output
        assert "rover_id: 1" in output

    def test_missing_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="run"))


class TestPartial:
    def test_renders_completed_positions(self) -> None:
        output = render_partial(_run_err("1 3 N"))
        assert "PARTIAL" in output
        assert "Heading" in output

    def test_empty_when_nothing_completed(self) -> None:
        assert render_partial(_run_err()) == ""


class TestDemoRenderer:
    def test_scenarios_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="demo",
            data={
                "scenarios": [
                    {"name": "single rover", "input": "5 5", "output": "5 5 E", "error": None},
                    {"name": "leaves", "input": "5 5", "output": "", "error": "out of bounds"},
                ],
                "count": 2,
            },
        )
        output = render_result(result, width=200)
        assert "single rover" in output
        assert "5 5 E" in output
        assert "out of bounds" in output


class TestQuiet:
    def test_run_is_bare_positions(self) -> None:
        assert render_quiet(_run_ok("1 3 N", "5 1 E")) == "1 3 N\n5 1 E"

    def test_error(self) -> None:
        output = render_quiet(_run_err())
        assert output.startswith("ERROR: run")
        assert "moved out of bounds" in output

    def test_demo(self) -> None:
        result = ServiceResult(
            ok=True,
            op="demo",
            data={"scenarios": [{"output": "5 5 E"}, {"output": "1 1 N"}]},
        )
        assert render_quiet(result) == "5 5 E\n1 1 N"


def test_every_op_has_a_renderer() -> None:
    assert set(_OP_RENDERERS) == {"run", "demo"}

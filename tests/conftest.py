"""Shared pytest fixtures and test helpers for roverctl tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from roverctl.services.telemetry import _current_span, disable_telemetry

EXAMPLE_INPUT = "5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM"
EXAMPLE_OUTPUT = "1 3 N\n5 1 E"

BORDER_INPUT = "5 5\n0 0 N\nMMMMMRMMMMMRMMMMMRMMMMMR"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory so no roverctl.toml leaks in."""
    monkeypatch.delenv("ROVERCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """``--verbose`` CLI invocations enable telemetry; switch it off again."""
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """CLI invocations reconfigure logging; restore root logger state afterwards."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    rover = logging.getLogger("roverctl")
    rover_level = rover.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    rover.setLevel(rover_level)


@pytest.fixture
def instructions_file(tmp_path: Path) -> Path:
    """The canonical two-rover example written to disk."""
    path = tmp_path / "instructions.txt"
    path.write_text(EXAMPLE_INPUT + "\n", encoding="utf-8")
    return path

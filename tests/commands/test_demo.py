"""Tests for the demo command."""

from __future__ import annotations

import json

from click.testing import CliRunner

from roverctl.cli import cli


def test_demo_rich(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["demo"])
    assert result.exit_code == 0
    assert "single rover" in result.stdout
    assert "moved out of bounds" in result.stdout


def test_demo_quiet(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-q", "demo"])
    assert result.exit_code == 0
    assert result.stdout.startswith("5 5 E\n")


def test_demo_json(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--json", "demo"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["op"] == "demo"
    assert payload["data"]["count"] == 3
    assert payload["data"]["scenarios"][2]["error"] is not None


def test_demo_parallel(cli_runner: CliRunner) -> None:
    sequential = cli_runner.invoke(cli, ["-q", "demo"])
    parallel = cli_runner.invoke(cli, ["--parallel", "-q", "demo"])
    assert parallel.exit_code == 0
    assert parallel.stdout == sequential.stdout

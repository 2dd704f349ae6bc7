"""Tests for the ``demo`` command and the demo module it drives."""

from __future__ import annotations

import json
from pathlib import Path

import anyio
import pytest
from click.testing import CliRunner

from mediatorkit.cli import cli
from mediatorkit.demo import run_demo


class TestRunDemo:
    def test_response_and_sequential_deliveries(self) -> None:
        result = anyio.run(run_demo, "World")
        assert result.response == "Hello, World!"
        assert result.deliveries == ["[H1] Hello, World!", "[H2] Hello, World!"]

    def test_pipeline_lines_wrap_the_handler(self) -> None:
        result = anyio.run(run_demo, "World")
        assert len(result.pipeline) == 2
        assert result.pipeline[0] == "[timing] before HelloRequest"
        assert result.pipeline[1].startswith("[timing] after HelloRequest (")


@pytest.mark.usefixtures("project_root")
class TestDemoCommand:
    def test_human_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["demo", "Alice"])
        assert result.exit_code == 0, result.output
        assert "Response: Hello, Alice!" in result.output
        assert "[timing] before HelloRequest" in result.output
        assert result.output.index("[timing] before") < result.output.index("[timing] after")
        assert result.output.index("[timing] after") < result.output.index("Response:")
        assert result.output.index("[H1]") < result.output.index("[H2]")

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "demo"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["response"] == "Hello, World!"
        assert len(payload["deliveries"]) == 2
        assert len(payload["pipeline"]) == 2

    def test_respects_project_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "mediatorkit.toml").write_text("[registry]\nstrict = false\n")
        result = cli_runner.invoke(cli, ["demo"])
        assert result.exit_code == 0, result.output

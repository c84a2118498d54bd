"""
End-to-end tests for the immutable-record CLI.

These run real (tiny) benchmark workloads through typer's CliRunner and verify
that the commands wire configuration, orchestration and reporting together.
"""

from __future__ import annotations

import json

from typer.testing import CliRunner

from immutable_record.main import app

runner = CliRunner()
QUIET_ENV = {"LOG_LEVEL": "ERROR"}
SMALL_COUNT = "20"


class TestInfoAndList:
    """Commands that only read configuration or the registry."""

    def test_info_shows_effective_settings(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "type_checking=True" in result.output

    def test_info_reflects_disable_types(self):
        result = runner.invoke(app, ["info"], env={"DISABLE_TYPES": "1"})
        assert result.exit_code == 0
        assert "type_checking=False" in result.output

    def test_list_names_every_workload(self):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        for name in ("dict", "pmap", "record", "record_defaults", "record_types", "record_update"):
            assert name in result.output


class TestBench:
    """Benchmark command."""

    def test_bench_json_output(self):
        result = runner.invoke(
            app,
            ["bench", "-w", "record", "-w", "record_types", "-n", SMALL_COUNT, "--json"],
            env=QUIET_ENV,
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert [r["workload"] for r in payload] == ["record", "record_types"]
        assert all(r["operations"] == int(SMALL_COUNT) for r in payload)

    def test_bench_table_output(self):
        result = runner.invoke(app, ["bench", "-w", "dict", "-n", SMALL_COUNT], env=QUIET_ENV)

        assert result.exit_code == 0, result.output
        assert "immutable-record Benchmarks" in result.output
        assert "dict" in result.output

    def test_bench_unknown_workload_exits_with_usage_error(self):
        result = runner.invoke(app, ["bench", "-w", "nope"], env=QUIET_ENV)
        assert result.exit_code == 2

    def test_bench_disable_types_is_reported(self):
        result = runner.invoke(
            app,
            ["bench", "-w", "record_types", "-n", SMALL_COUNT, "--disable-types", "--json"],
            env=QUIET_ENV,
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert "disabled" in payload[0]["notes"]

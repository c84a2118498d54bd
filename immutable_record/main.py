from __future__ import annotations

import json
import sys
from typing import List, Optional

import typer

from immutable_record.config import get_settings
from immutable_record.orchestrator import available_workloads, run_workloads
from immutable_record.reporter import print_results
from immutable_record.utils.logging import configure_logging

app = typer.Typer(help="immutable-record benchmark CLI.")


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"type_checking={settings.type_checking} | log_level={settings.log_level} | "
        f"count={settings.bench_count} runs={settings.bench_runs}"
    )


@app.command("list")
def list_workloads() -> None:
    """
    List available benchmark workloads.
    """
    typer.echo("Available workloads: " + ", ".join(available_workloads()))


@app.command()
def bench(
    workload: List[str] = typer.Option(
        ["all"],
        "--workload",
        "-w",
        help="Workload to run; repeatable (e.g., record, record_types, all).",
    ),
    count: Optional[int] = typer.Option(
        None,
        "--count",
        "-n",
        help="Operations per run (default from settings).",
    ),
    runs: Optional[int] = typer.Option(
        None,
        "--runs",
        help="Measurement runs per workload (default from settings).",
    ),
    warmup: bool = typer.Option(False, "--warmup", help="Run each workload once before measuring."),
    persist: bool = typer.Option(False, "--persist/--no-persist", help="Write results/ JSON files."),
    trace_memory: bool = typer.Option(
        False, "--trace-memory", help="Track Python allocations with tracemalloc."
    ),
    disable_types: bool = typer.Option(
        False, "--disable-types", help="UNSAFE: build record types without type checking."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of a table."),
) -> None:
    """
    Run benchmark workloads and report throughput.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    unknown = [name for name in workload if name != "all" and name not in available_workloads()]
    if unknown:
        typer.echo(f"Unknown workload(s): {', '.join(unknown)}", err=True)
        raise typer.Exit(code=2)

    type_checking = False if disable_types else None
    results = run_workloads(
        workload_names=workload,
        count=count,
        runs=runs,
        warmup=warmup,
        persist=persist,
        type_checking=type_checking,
        trace_memory=trace_memory,
    )
    if as_json:
        typer.echo(json.dumps(results, indent=2))
    else:
        print_results(results)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()

from __future__ import annotations

import platform
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table


def _is_aggregated(result: Dict[str, Any]) -> bool:
    return isinstance(result.get("runs"), int) and result["runs"] > 1


def _throughput(result: Dict[str, Any]) -> float:
    value = result.get("throughput_ops_per_sec", 0.0)
    if isinstance(value, dict):
        return value["median"]
    return value or 0.0


def _format_bytes(value: Optional[int]) -> str:
    if not value:
        return "N/A"
    return f"{value / (1024 * 1024):.2f}"


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render benchmark results as a rich table, best throughput first.

    Aggregated rows (runs > 1) show median ± stddev duration and median
    throughput; single runs show the raw measurement.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    title = (
        "immutable-record Benchmarks\n"
        f"[dim]{platform.python_implementation()} {platform.python_version()}[/dim]"
    )
    table = Table(
        title=title,
        box=box.ROUNDED,
        caption="Sorted by Throughput (descending)",
    )

    table.add_column("Workload", style="cyan", no_wrap=True)
    table.add_column("Ops", justify="right", style="magenta")
    table.add_column("Runs", justify="right", style="blue")
    table.add_column("Duration (s)\n[dim](Median ± StdDev)[/dim]", justify="right", style="green")
    table.add_column("Throughput (ops/s)", justify="right", style="bold green")
    table.add_column("Peak Traced (MB)", justify="right", style="yellow")
    table.add_column("Notes", style="dim")

    for res in sorted(results, key=_throughput, reverse=True):
        workload = res.get("workload", "Unknown")
        ops = f"{res.get('operations', 0):,}"

        if _is_aggregated(res):
            runs = str(res["runs"])
            duration = res["duration_seconds"]
            duration_str = f"{duration['median']:.4f} ± {duration['stddev']:.4f}"
            traced = res.get("peak_traced_bytes", {}).get("median")
        else:
            runs = "1"
            duration_str = f"{res.get('duration_seconds', 0.0):.4f}"
            traced = res.get("peak_traced_bytes")

        if res.get("error"):
            notes = f"[red]{res['error']}[/red]"
        else:
            notes = res.get("notes") or ""
        table.add_row(
            workload,
            ops,
            runs,
            duration_str,
            f"{_throughput(res):,.2f}",
            _format_bytes(traced),
            notes,
        )

    console.print(table)


__all__ = ["print_results"]

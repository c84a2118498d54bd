"""
Orchestrator for running benchmark workloads, profiling execution, and persisting results.

Usage (example from CLI):
    from immutable_record.orchestrator import run_workloads

    results = run_workloads(workload_names=["record", "record_types"], count=100_000)
    print(results)

Outputs are saved to `results/` when persistence is requested:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import statistics
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from immutable_record.config import get_settings
from immutable_record.utils.logging import get_logger
from immutable_record.utils.profiler import ProfileStats, profile_block
from immutable_record.workloads import (
    BenchmarkWorkload,
    DefaultsWorkload,
    DictWorkload,
    NamedTupleWorkload,
    PMapWorkload,
    RecordWorkload,
    TypedWorkload,
    UpdateWorkload,
    WorkloadResult,
)

log = get_logger(__name__)


def _round_float(value: float, decimals: int = 2) -> float:
    return round(value, decimals)


def _round_stats(stats: dict, decimals: int = 2) -> dict:
    return {k: _round_float(v, decimals) if isinstance(v, float) else v for k, v in stats.items()}


def _summary(values: List[float]) -> dict:
    return {
        "median": statistics.median(values),
        "mean": statistics.mean(values),
        "stddev": statistics.stdev(values) if len(values) > 1 else 0.0,
        "min": min(values),
        "max": max(values),
    }


def _aggregate_runs(run_results: List[dict]) -> dict:
    """
    Aggregate multiple runs into a statistical summary.

    Returns median, mean, stddev, min and max for duration and throughput, plus
    CPU and peak traced memory when the profiler captured them.
    """
    durations = [r["duration_seconds"] for r in run_results]
    throughputs = [r["throughput_ops_per_sec"] for r in run_results]
    cpu_percents = [r["cpu_percent"] for r in run_results if r.get("cpu_percent")]
    traced = [r["peak_traced_bytes"] for r in run_results if r.get("peak_traced_bytes")]

    aggregated = {
        "duration_seconds": _round_stats(_summary(durations), decimals=4),
        "throughput_ops_per_sec": _round_stats(_summary(throughputs)),
        "operations": run_results[0]["operations"],
    }
    if cpu_percents:
        aggregated["cpu_percent"] = _round_stats(_summary(cpu_percents), decimals=1)
    if traced:
        aggregated["peak_traced_bytes"] = {k: int(v) for k, v in _summary(traced).items()}
    return aggregated


def _workload_factories(type_checking: bool) -> Dict[str, Callable[[], BenchmarkWorkload]]:
    """Registry of available workloads."""
    return {
        "dict": lambda: DictWorkload(type_checking),
        "pmap": lambda: PMapWorkload(type_checking),
        "namedtuple": lambda: NamedTupleWorkload(type_checking),
        "record": lambda: RecordWorkload(type_checking),
        "record_defaults": lambda: DefaultsWorkload(type_checking),
        "record_types": lambda: TypedWorkload(type_checking),
        "record_update": lambda: UpdateWorkload(type_checking),
    }


def available_workloads() -> List[str]:
    """List available workload names."""
    return sorted(_workload_factories(True).keys())


def _resolve_workload(name: str, type_checking: bool) -> BenchmarkWorkload:
    factories = _workload_factories(type_checking)
    if name not in factories:
        raise ValueError(f"Unknown workload '{name}'. Available: {', '.join(sorted(factories))}")
    return factories[name]()


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def _profiled_execute(workload: BenchmarkWorkload, count: int, trace_memory: bool) -> dict:
    log.debug(f"[WORKLOAD START] {workload.name}", extra={"workload": workload.name})
    with profile_block(workload.name, enable_tracemalloc=trace_memory) as stats:
        try:
            result = workload.execute(count)
        except Exception as exc:  # noqa: BLE001 - recorded in the result, run continues
            log.exception(f"[WORKLOAD FAILED] {workload.name}", extra={"workload": workload.name})
            result = WorkloadResult(error=str(exc), operations=0, duration_seconds=0.0)

    return _merge_result(result, stats)


def _merge_result(result: WorkloadResult, stats: ProfileStats) -> dict:
    """
    Merge a workload result with profiler stats.

    The workload's own timing excludes setup, so it wins over the profiler's
    wall clock; memory and CPU always come from the profiler.
    """
    merged = dict(result)
    merged.setdefault("operations", 0)
    if not merged.get("duration_seconds"):
        merged["duration_seconds"] = stats.duration_seconds
    merged.setdefault(
        "throughput_ops_per_sec",
        merged["operations"] / merged["duration_seconds"] if merged["duration_seconds"] else 0.0,
    )
    merged["duration_seconds"] = _round_float(merged["duration_seconds"], 4)
    merged["throughput_ops_per_sec"] = _round_float(merged["throughput_ops_per_sec"])
    merged["peak_rss_bytes"] = stats.peak_rss_bytes
    merged["peak_traced_bytes"] = stats.peak_traced_bytes
    merged["cpu_percent"] = _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None
    merged["profile"] = {
        "label": stats.label,
        "duration_seconds": _round_float(stats.duration_seconds, 4),
        "retained_bytes": stats.retained_bytes,
    }
    return merged


def run_workloads(
    workload_names: Optional[Iterable[str]] = None,
    count: Optional[int] = None,
    results_dir: Path | str = "results",
    persist: bool = False,
    warmup: bool = False,
    runs: Optional[int] = None,
    type_checking: Optional[bool] = None,
    trace_memory: bool = False,
) -> List[dict]:
    """
    Run one or more workloads and optionally persist the results.

    Parameters
    ----------
    workload_names : iterable[str] | None
        Workload names to execute. If None or containing "all", executes all available.
    count : int | None
        Operations per run. Defaults to settings.bench_count.
    results_dir : Path | str
        Directory to store JSON artifacts.
    persist : bool
        Whether to write results to disk.
    warmup : bool
        Whether to run each workload once before measurement.
    runs : int | None
        Measurement runs per workload. Defaults to settings.bench_runs.
    type_checking : bool | None
        Passed to the record workloads; None uses settings.
    trace_memory : bool
        Enable tracemalloc during measurement (slower, reports allocations).

    Returns
    -------
    List[dict]
        One result per workload; aggregated statistics when runs > 1.
    """
    settings = get_settings()
    effective_count = count or settings.bench_count
    effective_runs = runs or settings.bench_runs
    checking = settings.type_checking if type_checking is None else type_checking

    names = list(workload_names) if workload_names is not None else ["all"]
    if "all" in names:
        names = available_workloads()

    results: List[dict] = []
    for name in names:
        log.info(f"[WORKLOAD] {name}", extra={"workload": name, "count": effective_count})

        if warmup:
            _resolve_workload(name, checking).execute(effective_count)

        run_results: List[dict] = []
        for run_num in range(1, effective_runs + 1):
            workload = _resolve_workload(name, checking)
            result = _profiled_execute(workload, effective_count, trace_memory)
            result["workload"] = name
            result["count"] = effective_count
            result["run"] = run_num
            run_results.append(result)
            log.info(
                f"[RUN {run_num}/{effective_runs}] Completed {name}",
                extra={
                    "workload": name,
                    "run": run_num,
                    "duration": result.get("duration_seconds"),
                    "throughput_ops": result.get("throughput_ops_per_sec"),
                },
            )

        failed = [r for r in run_results if r.get("error")]
        if effective_runs > 1 and not failed:
            aggregated = _aggregate_runs(run_results)
            aggregated["workload"] = name
            aggregated["count"] = effective_count
            aggregated["runs"] = effective_runs
            aggregated["individual_runs"] = run_results
            results.append(aggregated)
        else:
            results.extend(run_results)

    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "count": effective_count,
        "type_checking": checking,
        "workloads": names,
        "results": results,
    }

    if persist:
        _persist_results(payload, Path(results_dir))

    return results


__all__ = [
    "available_workloads",
    "run_workloads",
]

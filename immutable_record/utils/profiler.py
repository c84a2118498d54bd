"""
Profiling utilities for the immutable-record benchmark harness.

Measures what the benchmark workloads care about:
- Wall-clock time (perf_counter)
- CPU usage (psutil)
- Peak RSS via a background sampling thread (psutil)
- Python allocations (tracemalloc): peak and net bytes retained by the block

Usage examples:
    from immutable_record.utils.profiler import profile_block

    with profile_block("record_types") as stats:
        for _ in range(100_000):
            Point(x=1, y=2)

    print(stats.duration_seconds, stats.peak_traced_bytes, stats.retained_bytes)
"""

from __future__ import annotations

import contextlib
import threading
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Any, Callable, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    peak_rss_bytes: Optional[int] = field(default=None)
    peak_traced_bytes: Optional[int] = field(default=None)
    retained_bytes: Optional[int] = field(default=None)
    cpu_percent: Optional[float] = field(default=None)
    extra: dict[str, Any] = field(default_factory=dict)


class _RssSampler(threading.Thread):
    """Polls the process RSS until stopped, keeping the maximum seen."""

    def __init__(self, process: psutil.Process, interval_seconds: float) -> None:
        super().__init__(daemon=True)
        self._process = process
        self._interval = interval_seconds
        self._stop_event = threading.Event()
        self.peak = process.memory_info().rss

    def run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.peak = max(self.peak, self._process.memory_info().rss)
            except psutil.Error:
                return
            self._stop_event.wait(timeout=self._interval)

    def stop(self) -> int:
        self._stop_event.set()
        self.join(timeout=1.0)
        return self.peak


@contextlib.contextmanager
def profile_block(
    label: str, sample_interval_ms: int = 50, enable_tracemalloc: bool = True
) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    sample_interval_ms : int
        Interval in milliseconds for RSS sampling.
    enable_tracemalloc : bool
        Whether to track Python-level allocations. Slows the block down
        noticeably; disable it when only timing matters.

    Notes
    -----
    tracemalloc is only stopped on exit if this block started it.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()

    started_tracing = False
    traced_before = 0
    if enable_tracemalloc:
        if not tracemalloc.is_tracing():
            tracemalloc.start()
            started_tracing = True
        tracemalloc.reset_peak()
        traced_before, _ = tracemalloc.get_traced_memory()

    process.cpu_percent(interval=None)
    sampler = _RssSampler(process, sample_interval_ms / 1000.0)
    sampler.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.peak_rss_bytes = sampler.stop()
        stats.cpu_percent = process.cpu_percent(interval=None)

        if enable_tracemalloc and tracemalloc.is_tracing():
            current, peak = tracemalloc.get_traced_memory()
            stats.peak_traced_bytes = max(peak - traced_before, 0)
            stats.retained_bytes = current - traced_before
            if started_tracing:
                tracemalloc.stop()


def profile_function(
    label: Optional[str] = None,
    sample_interval_ms: int = 50,
    enable_tracemalloc: bool = True,
) -> Callable[[Callable[..., Any]], Callable[..., ProfileStats]]:
    """
    Decorator to profile a function call and return ProfileStats.

    The wrapped function's own return value is stored in ``stats.extra["result"]``.

    Example
    -------
        @profile_function("record-update")
        def run():
            ...

        stats = run()
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., ProfileStats]:
        def wrapper(*args: Any, **kwargs: Any) -> ProfileStats:
            tag = label or func.__name__
            with profile_block(
                tag, sample_interval_ms=sample_interval_ms, enable_tracemalloc=enable_tracemalloc
            ) as stats:
                stats.extra["result"] = func(*args, **kwargs)
            return stats

        wrapper.__name__ = func.__name__
        wrapper.__doc__ = func.__doc__
        return wrapper

    return decorator


__all__ = ["ProfileStats", "profile_block", "profile_function"]

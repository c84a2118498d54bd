from time import sleep

from immutable_record.utils import profiler


def test_profile_block_measures_time():
    with profiler.profile_block("sleep") as stats:
        sleep(0.05)
    assert stats.duration_seconds >= 0.05
    assert stats.end_ts > stats.start_ts
    assert stats.peak_rss_bytes and stats.peak_rss_bytes > 0
    assert isinstance(stats.cpu_percent, float)


def test_profile_block_tracks_python_allocations():
    with profiler.profile_block("alloc", enable_tracemalloc=True) as stats:
        payload = [bytes(1024) for _ in range(256)]
    assert len(payload) == 256
    assert stats.peak_traced_bytes is not None
    assert stats.peak_traced_bytes >= 256 * 1024


def test_profile_block_without_tracemalloc():
    with profiler.profile_block("plain", enable_tracemalloc=False) as stats:
        pass
    assert stats.peak_traced_bytes is None
    assert stats.retained_bytes is None


def test_profile_function_returns_stats_and_result():
    @profiler.profile_function("adder")
    def add(a, b):
        return a + b

    stats = add(2, 3)

    assert stats.label == "adder"
    assert stats.extra["result"] == 5

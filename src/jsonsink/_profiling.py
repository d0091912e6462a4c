"""
Opt-in hot path profiling.

Set JSONSINK_PROFILE in the environment (and run without -O) to record call
counts and timings for the scanner and writer hot paths. Without it the
context manager does nothing.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "JSONSINK_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one instrumented function."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


_hot_path_stats: dict[str, HotPathStats] = {}


class _RecordingContext:
    """Times the wrapped block and adds it to the named HotPathStats."""

    def __init__(self, func_name: str, chars: int = 0) -> None:
        self.func_name = func_name
        self.chars = chars
        self.start_time = 0

    def __enter__(self) -> "_RecordingContext":
        self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter_ns() - self.start_time
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.chars)


class _NullContext:
    __slots__ = ()

    def __enter__(self) -> "_NullContext":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


_NULL_CONTEXT = _NullContext()


def profile(func_name: str, chars: int = 0) -> _RecordingContext | _NullContext:
    """Returns a context manager timing func_name when profiling is enabled."""
    if PROFILE_HOT_PATHS:
        return _RecordingContext(func_name, chars)
    return _NULL_CONTEXT


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a copy of the statistics recorded so far."""
    return _hot_path_stats.copy()


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()

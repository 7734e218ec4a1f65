# oscitrace/utils/logging.py
"""
Console reporting for runs: wall-clock timers, process memory and a
single-line step counter used when tqdm is not wanted.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Optional
import time
from contextlib import contextmanager

import psutil

StepCallback = Callable[..., None]


class Timer:
    """
    Wall-clock timer, used directly or as a context manager.

    The tracker stores `elapsed` in trajectory metadata; the CLI wraps the
    integration in `timeit` to print it.
    """

    def __init__(self, name: str = "Timer", verbose: bool = True):
        self.name = name
        self.verbose = verbose
        self._t0: Optional[float] = None
        self._t1: Optional[float] = None

    def start(self) -> "Timer":
        self._t0 = time.perf_counter()
        self._t1 = None
        return self

    def stop(self) -> float:
        """Freeze the timer; returns seconds since `start`."""
        if self._t0 is None:
            raise RuntimeError(f"{self.name}: stop() called before start()")
        self._t1 = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        if self._t0 is None:
            return 0.0
        return (self._t1 if self._t1 is not None else time.perf_counter()) - self._t0

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
        if self.verbose and exc_type is None:
            print(f"⏱️  {self.name}: {self.elapsed:.6f}s")


@contextmanager
def timeit(name: str = "Operation", verbose: bool = True):
    """
    Time a block and print the result on success.

    >>> with timeit("Integration"):
    ...     trajectory = tracker.track(state)
    """
    with Timer(name, verbose=verbose) as timer:
        yield timer


def memory_info() -> Dict[str, float]:
    """Resident/virtual size of this process and free system memory, in MB."""
    mb = 1024.0 ** 2
    proc = psutil.Process().memory_info()
    system = psutil.virtual_memory()
    return {
        "rss_mb": proc.rss / mb,
        "vms_mb": proc.vms / mb,
        "available_mb": system.available / mb,
        "percent_used": float(system.percent),
    }


def create_progress_callback(name: str = "Progress", update_every: int = 100) -> StepCallback:
    """
    Build `callback(step, total, **extra)` that rewrites one console line
    every `update_every` steps and finishes the line at `step == total`.
    """
    t0 = time.perf_counter()

    def callback(step: int, total: int, **extra: Any) -> None:
        if step != total and step % update_every:
            return
        parts = [f"{name}: {step}/{total} ({100.0 * step / max(1, total):.1f}%)"]
        dt = time.perf_counter() - t0
        if dt > 0 and step:
            parts.append(f"{step / dt:.0f} steps/s")
        parts.extend(f"{key}={value}" for key, value in extra.items())
        print("\r" + ", ".join(parts), end="\n" if step == total else "", flush=True)

    return callback

from __future__ import annotations

from collections import Counter
from typing import Dict, Optional
import time


class Metrics:
    """Operation counter plus wall-clock stopwatch for one algorithm run.

    Algorithms call ``start()`` before doing any work, ``increment(name)`` on
    every counted unit of work, and ``stop()`` once done.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.counts: Counter = Counter()
        self._start_ns: Optional[int] = None
        self._stop_ns: Optional[int] = None

    def start(self) -> None:
        self._start_ns = time.perf_counter_ns()
        self._stop_ns = None

    def stop(self) -> None:
        self._stop_ns = time.perf_counter_ns()

    def increment(self, name: str, by: int = 1) -> None:
        self.counts[name] += by

    @property
    def counter(self) -> int:
        return sum(self.counts.values())

    @property
    def elapsed_ns(self) -> int:
        if self._start_ns is None:
            return 0
        end = self._stop_ns if self._stop_ns is not None else time.perf_counter_ns()
        return end - self._start_ns

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1e6

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "operations": self.counter,
            "counts": dict(self.counts),
            "elapsed_ms": self.elapsed_ms,
        }

    def __repr__(self) -> str:
        return f"Metrics(name={self.name!r}, operations={self.counter}, elapsed_ms={self.elapsed_ms:.3f})"

"""Per-run evaluation bookkeeping.

The collector is owned by exactly one run and updated by its sample cache;
callers only ever see the frozen :class:`RunStatistics` snapshot.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class RunStatistics:
    """Evaluation counts and wall-clock time of one exploration run."""

    evaluated_count: int = 0
    operational_count: int = 0
    oracle_invocations: int = 0
    cache_hits: int = 0
    elapsed_s: float = 0.0
    partial: bool = False

    @property
    def non_operational_count(self) -> int:
        return self.evaluated_count - self.operational_count

    @property
    def operational_fraction(self) -> float:
        """Share of evaluated points that are operational; 0.0 if none were evaluated."""
        if self.evaluated_count == 0:
            return 0.0
        return self.operational_count / self.evaluated_count

    def as_row(self) -> dict[str, int | float | bool]:
        return {
            "evaluated_count": self.evaluated_count,
            "operational_count": self.operational_count,
            "non_operational_count": self.non_operational_count,
            "operational_fraction": self.operational_fraction,
            "oracle_invocations": self.oracle_invocations,
            "cache_hits": self.cache_hits,
            "elapsed_s": self.elapsed_s,
            "partial": self.partial,
        }


class StatisticsCollector:
    """Thread-safe accumulator behind :class:`RunStatistics`."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._evaluated = 0
        self._operational = 0
        self._invocations = 0
        self._cache_hits = 0
        self._started_at: float | None = None
        self._stopped_at: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()
        self._stopped_at = None

    def stop(self) -> None:
        if self._started_at is not None and self._stopped_at is None:
            self._stopped_at = time.perf_counter()

    def record_evaluation(self, operational: bool, invocations: int) -> None:
        with self._lock:
            self._evaluated += 1
            self._invocations += invocations
            if operational:
                self._operational += 1

    def record_cache_hit(self) -> None:
        with self._lock:
            self._cache_hits += 1

    @property
    def evaluated_count(self) -> int:
        return self._evaluated

    def elapsed_s(self) -> float:
        if self._started_at is None:
            return 0.0
        end = self._stopped_at if self._stopped_at is not None else time.perf_counter()
        return end - self._started_at

    def snapshot(self, partial: bool = False) -> RunStatistics:
        with self._lock:
            return RunStatistics(
                evaluated_count=self._evaluated,
                operational_count=self._operational,
                oracle_invocations=self._invocations,
                cache_hits=self._cache_hits,
                elapsed_s=self.elapsed_s(),
                partial=partial,
            )

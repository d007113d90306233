"""Per-run memo of oracle verdicts.

Each distinct point triggers at most one oracle call per run, including under
concurrent access: the first caller for a point claims it under the lock and
evaluates outside it, later callers wait on the claim.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from operational_domain.domain.errors import BudgetExceeded, OracleFailure
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.sample import Sample
from operational_domain.domain.space import ParameterSpace, Point, SimulationParameters
from operational_domain.exploration.stats import StatisticsCollector


@dataclass
class _PendingEvaluation:
    done: threading.Event = field(default_factory=threading.Event)
    sample: Sample | None = None
    error: OracleFailure | None = None


class SampleCache:
    """Lookup-or-evaluate store for one exploration run."""

    def __init__(
        self,
        space: ParameterSpace,
        oracle: Oracle,
        gate_spec: GateSpec,
        parameters: SimulationParameters,
        stats: StatisticsCollector,
        max_evaluations: int | None = None,
    ) -> None:
        self.space = space
        self.oracle = oracle
        self.gate_spec = gate_spec
        self.parameters = parameters
        self.stats = stats
        self.max_evaluations = max_evaluations
        self._lock = threading.Lock()
        self._samples: dict[Point, Sample] = {}
        self._pending: dict[Point, _PendingEvaluation] = {}

    def __contains__(self, point: object) -> bool:
        return point in self._samples

    def __len__(self) -> int:
        return len(self._samples)

    def peek(self, point: Point) -> Sample | None:
        """Return the cached sample for ``point`` without ever evaluating it."""
        return self._samples.get(point)

    def samples(self) -> dict[Point, Sample]:
        """Copy of all samples in insertion (evaluation-completion) order."""
        with self._lock:
            return dict(self._samples)

    def budget_exhausted(self) -> bool:
        if self.max_evaluations is None:
            return False
        with self._lock:
            return len(self._samples) + len(self._pending) >= self.max_evaluations

    def lookup_or_evaluate(self, point: Point) -> Sample:
        """Return the sample for ``point``, calling the oracle only on first access.

        Raises :exc:`BudgetExceeded` if a new evaluation would exceed the
        budget and :exc:`OracleFailure` if the oracle raises.
        """
        with self._lock:
            cached = self._samples.get(point)
            if cached is not None:
                self.stats.record_cache_hit()
                return cached
            pending = self._pending.get(point)
            owner = pending is None
            if pending is None:
                in_use = len(self._samples) + len(self._pending)
                if self.max_evaluations is not None and in_use >= self.max_evaluations:
                    raise BudgetExceeded(point, self.max_evaluations)
                pending = _PendingEvaluation()
                self._pending[point] = pending

        if not owner:
            pending.done.wait()
            if pending.error is not None:
                raise pending.error
            if pending.sample is None:
                return self.lookup_or_evaluate(point)
            self.stats.record_cache_hit()
            return pending.sample

        values = self.space.values(point)
        try:
            simulation = self.space.apply(point, self.parameters)
        except Exception:
            self._release(point, pending)
            raise
        try:
            response = self.oracle.evaluate(point, self.gate_spec, simulation)
        except Exception as exc:
            failure = OracleFailure(point, values)
            failure.__cause__ = exc
            self._release(point, pending, failure)
            raise failure from exc

        sample = Sample(
            point=point, values=values, verdict=response.verdict, metrics=response.metrics
        )
        with self._lock:
            self._samples[point] = sample
            del self._pending[point]
        self.stats.record_evaluation(sample.operational, response.invocations)
        pending.sample = sample
        pending.done.set()
        return sample

    def _release(
        self, point: Point, pending: _PendingEvaluation, error: OracleFailure | None = None
    ) -> None:
        """Drop the claim on ``point`` and wake waiters without caching a sample."""
        with self._lock:
            del self._pending[point]
        pending.error = error
        pending.done.set()

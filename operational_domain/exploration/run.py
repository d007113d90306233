"""Run harness shared by all explorers: cache, collector, timing, result assembly."""

from __future__ import annotations

import logging
from random import Random
from types import TracebackType

from operational_domain.config.types import ExplorationConfig
from operational_domain.domain.errors import OracleFailure
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.space import ParameterSpace, Point, SimulationParameters
from operational_domain.exploration.cache import SampleCache
from operational_domain.exploration.result import (
    DomainResult,
    ExplorationStrategy,
    TerminationReason,
)
from operational_domain.exploration.stats import StatisticsCollector

logger = logging.getLogger(__name__)


class ExplorationRun:
    """Owns the cache and statistics of exactly one exploration run.

    Use as a context manager so elapsed time covers the whole run even when
    the oracle fails.
    """

    def __init__(
        self,
        strategy: ExplorationStrategy,
        space: ParameterSpace,
        oracle: Oracle,
        gate_spec: GateSpec,
        parameters: SimulationParameters,
        config: ExplorationConfig,
    ) -> None:
        self.strategy = strategy
        self.space = space
        self.config = config
        self.stats = StatisticsCollector()
        self.cache = SampleCache(
            space=space,
            oracle=oracle,
            gate_spec=gate_spec,
            parameters=parameters,
            stats=self.stats,
            max_evaluations=config.max_evaluations,
        )

    def __enter__(self) -> ExplorationRun:
        self.stats.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stats.stop()
        if isinstance(exc, OracleFailure) and exc.partial_result is None:
            exc.partial_result = self.result(TerminationReason.ORACLE_FAILURE)

    def random_points(self) -> list[Point]:
        """Draw ``config.random_samples`` uniform grid points (repeats allowed)."""
        rng = Random(self.config.rng_seed)
        return [self.space.random_point(rng) for _ in range(self.config.random_samples)]

    def result(
        self,
        termination: TerminationReason,
        contours: tuple[tuple[Point, ...], ...] = (),
        operational_area_estimate: float | None = None,
    ) -> DomainResult:
        partial = termination is not TerminationReason.COMPLETED
        statistics = self.stats.snapshot(partial=partial)
        logger.info(
            "%s finished (%s): %d evaluated, %d operational, %d oracle calls, %.3fs",
            self.strategy.value,
            termination.value,
            statistics.evaluated_count,
            statistics.operational_count,
            statistics.oracle_invocations,
            statistics.elapsed_s,
        )
        return DomainResult(
            space=self.space,
            strategy=self.strategy,
            samples=self.cache.samples(),
            statistics=statistics,
            termination=termination,
            contours=contours,
            operational_area_estimate=operational_area_estimate,
        )

"""Reference strategies: exhaustive grid search and uniform random sampling."""

from __future__ import annotations

from collections.abc import Iterable

from operational_domain.config.types import ExplorationConfig
from operational_domain.domain.errors import BudgetExceeded
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.space import ParameterSpace, Point, SimulationParameters
from operational_domain.exploration.result import (
    DomainResult,
    ExplorationStrategy,
    TerminationReason,
)
from operational_domain.exploration.run import ExplorationRun


def _evaluate_all(run: ExplorationRun, points: Iterable[Point]) -> DomainResult:
    try:
        for point in points:
            run.cache.lookup_or_evaluate(point)
    except BudgetExceeded:
        return run.result(TerminationReason.EVALUATION_BUDGET)
    return run.result(TerminationReason.COMPLETED)


def grid_search(
    space: ParameterSpace,
    oracle: Oracle,
    gate_spec: GateSpec,
    parameters: SimulationParameters,
    config: ExplorationConfig | None = None,
) -> DomainResult:
    """Evaluate every grid point in row-major order."""
    config = config or ExplorationConfig()
    with ExplorationRun(
        ExplorationStrategy.GRID_SEARCH, space, oracle, gate_spec, parameters, config
    ) as run:
        return _evaluate_all(run, space.iter_points())


def random_sampling(
    space: ParameterSpace,
    oracle: Oracle,
    gate_spec: GateSpec,
    parameters: SimulationParameters,
    config: ExplorationConfig | None = None,
) -> DomainResult:
    """Evaluate ``config.random_samples`` uniformly drawn points (duplicates are cache hits)."""
    config = config or ExplorationConfig()
    if config.random_samples < 1:
        raise ValueError("random sampling needs random_samples >= 1")
    with ExplorationRun(
        ExplorationStrategy.RANDOM_SAMPLING, space, oracle, gate_spec, parameters, config
    ) as run:
        return _evaluate_all(run, run.random_points())

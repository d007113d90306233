"""Flood-fill explorer: breadth-first growth of the operational region.

Every operational point enqueues its in-grid 2K-neighbours; non-operational
points are recorded as the boundary ring but never propagate. The number of
evaluations is bounded by the region plus its boundary, not the full grid.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

from operational_domain.config.types import ExplorationConfig
from operational_domain.domain.errors import BudgetExceeded
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.sample import Sample
from operational_domain.domain.space import ParameterSpace, Point, SimulationParameters
from operational_domain.exploration.result import (
    DomainResult,
    ExplorationStrategy,
    TerminationReason,
)
from operational_domain.exploration.run import ExplorationRun

logger = logging.getLogger(__name__)


class _Frontier:
    """FIFO of points still to visit; each point is enqueued at most once."""

    def __init__(self, space: ParameterSpace) -> None:
        self.space = space
        self._queue: deque[Point] = deque()
        self._seen: set[Point] = set()

    def __bool__(self) -> bool:
        return bool(self._queue)

    def push(self, point: Point) -> None:
        if point not in self._seen:
            self._seen.add(point)
            self._queue.append(point)

    def pop(self) -> Point:
        return self._queue.popleft()

    def expand(self, sample: Sample) -> None:
        if sample.operational:
            for neighbor in self.space.neighbors(sample.point):
                self.push(neighbor)


def flood_fill(
    space: ParameterSpace,
    oracle: Oracle,
    gate_spec: GateSpec,
    parameters: SimulationParameters,
    seeds: Iterable[Point] = (),
    config: ExplorationConfig | None = None,
) -> DomainResult:
    """Explore the operational region reachable from ``seeds``.

    Seeds are the explicit points followed by ``config.random_samples``
    uniformly drawn ones; out-of-grid seeds are skipped. Returns a partial
    result (``EVALUATION_BUDGET``) when the budget stops the fill early.
    """
    config = config or ExplorationConfig()
    seeds = [tuple(seed) for seed in seeds]
    if not seeds and config.random_samples == 0:
        raise ValueError("flood fill needs at least one seed or random_samples > 0")

    with ExplorationRun(
        ExplorationStrategy.FLOOD_FILL, space, oracle, gate_spec, parameters, config
    ) as run:
        frontier = _Frontier(space)
        for seed in [*seeds, *run.random_points()]:
            if not space.contains(seed):
                logger.debug("skipping out-of-grid seed %s", seed)
                continue
            frontier.push(seed)

        if config.max_workers > 1:
            exhausted = _fill_parallel(run, frontier, config.max_workers)
        else:
            exhausted = _fill_serial(run, frontier)

        if exhausted:
            return run.result(TerminationReason.EVALUATION_BUDGET)
        return run.result(TerminationReason.COMPLETED)


def _fill_serial(run: ExplorationRun, frontier: _Frontier) -> bool:
    while frontier:
        point = frontier.pop()
        try:
            sample = run.cache.lookup_or_evaluate(point)
        except BudgetExceeded:
            return True
        frontier.expand(sample)
    return False


def _fill_parallel(run: ExplorationRun, frontier: _Frontier, max_workers: int) -> bool:
    """Evaluate up to ``max_workers`` frontier points concurrently.

    The visit order depends on completion order; the operational set does not.
    """
    exhausted = False
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        in_flight: dict[Future[Sample], Point] = {}
        while (frontier and not exhausted) or in_flight:
            while frontier and not exhausted and len(in_flight) < max_workers:
                point = frontier.pop()
                in_flight[pool.submit(run.cache.lookup_or_evaluate, point)] = point
            done, _ = wait(in_flight, return_when=FIRST_COMPLETED)
            for future in done:
                del in_flight[future]
                try:
                    sample = future.result()
                except BudgetExceeded:
                    exhausted = True
                    continue
                frontier.expand(sample)
    return exhausted

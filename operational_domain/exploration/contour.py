"""Contour-tracing explorer: walk the operational/non-operational boundary.

Only defined on two-dimensional spaces. Dimension 0 is treated as x
(growing east), dimension 1 as y (growing north).

Anchor: from an operational seed, march west until the first
non-operational point or the grid edge. The last operational point starts
the contour, the point west of it is the initial backtrack.

Tracing uses the Moore-neighbour rule. Around the current contour point the
eight neighbours are scanned clockwise (W, NW, N, NE, E, SE, S, SW), starting
just after the backtrack cell. The tracer moves to the first operational
neighbour and the cell examined right before it becomes the new backtrack.
Cells outside the grid count as non-operational and are never evaluated.

Closure: the contour is closed once a (contour point, backtrack) state
repeats. Every other stop (iteration cap, evaluation budget, grid edge when
``close_along_grid_edge`` is off) yields a partial result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from operational_domain.config.types import ExplorationConfig
from operational_domain.domain.errors import BudgetExceeded, InvalidSeed, UnsupportedSpace
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.space import ParameterSpace, Point, SimulationParameters
from operational_domain.exploration.result import (
    DomainResult,
    ExplorationStrategy,
    TerminationReason,
)
from operational_domain.exploration.run import ExplorationRun

logger = logging.getLogger(__name__)

CLOCKWISE_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 0),  # W
    (-1, 1),  # NW
    (0, 1),  # N
    (1, 1),  # NE
    (1, 0),  # E
    (1, -1),  # SE
    (0, -1),  # S
    (-1, -1),  # SW
)
"""Moore neighbourhood in clockwise order, starting west."""


def _offset(point: Point, delta: tuple[int, int]) -> Point:
    return (point[0] + delta[0], point[1] + delta[1])


class _ContourTracer:
    """Traces contours one after another, sharing the run's sample cache."""

    def __init__(self, run: ExplorationRun) -> None:
        self.run = run
        self.space = run.space
        self.config = run.config
        self.contours: list[tuple[Point, ...]] = []
        self._traced: set[Point] = set()
        self._current: list[Point] = []

    def is_operational(self, point: Point) -> bool:
        if not self.space.contains(point):
            return False
        return self.run.cache.lookup_or_evaluate(point).operational

    def find_anchor(self, seed: Point) -> tuple[Point, Point]:
        """Return (last operational, first non-operational) marching west from ``seed``."""
        current = seed
        while True:
            west = _offset(current, CLOCKWISE_OFFSETS[0])
            if not self.is_operational(west):
                return current, west
            current = west

    def next_step(self, current: Point, backtrack: Point) -> tuple[Point, Point] | None:
        """Scan clockwise from ``backtrack``; None when ``current`` is isolated."""
        delta = (backtrack[0] - current[0], backtrack[1] - current[1])
        first = CLOCKWISE_OFFSETS.index(delta)
        previous = backtrack
        for k in range(1, len(CLOCKWISE_OFFSETS)):
            candidate = _offset(current, CLOCKWISE_OFFSETS[(first + k) % len(CLOCKWISE_OFFSETS)])
            if self.is_operational(candidate):
                return candidate, previous
            previous = candidate
        return None

    def _stops_at_edge(self, point: Point) -> bool:
        return not self.config.close_along_grid_edge and self.space.on_edge(point)

    def trace(self, start: Point, backtrack: Point) -> TerminationReason:
        self._current = [start]
        on_contour = {start}
        seen_states = {(start, backtrack)}
        current = start
        try:
            if self._stops_at_edge(start):
                return TerminationReason.GRID_EDGE
            for _ in range(self.config.max_iterations):
                step = self.next_step(current, backtrack)
                if step is None:
                    return TerminationReason.COMPLETED
                current, backtrack = step
                if (current, backtrack) in seen_states:
                    return TerminationReason.COMPLETED
                seen_states.add((current, backtrack))
                if current not in on_contour:
                    on_contour.add(current)
                    self._current.append(current)
                if self._stops_at_edge(current):
                    return TerminationReason.GRID_EDGE
            return TerminationReason.ITERATION_CAP
        finally:
            self.flush()

    def flush(self) -> None:
        """Record the contour traced so far, complete or not."""
        if self._current:
            self.contours.append(tuple(self._current))
            self._traced.update(self._current)
            self._current = []

    def trace_all(self, seeds: Iterable[Point]) -> TerminationReason:
        for seed in seeds:
            start, backtrack = self.find_anchor(seed)
            if start in self._traced:
                logger.debug("seed %s lies in an already traced region", seed)
                continue
            termination = self.trace(start, backtrack)
            if termination is not TerminationReason.COMPLETED:
                logger.info("contour from %s stopped early: %s", start, termination.value)
                return termination
        return TerminationReason.COMPLETED

    def estimate_area(self, stride: int) -> float:
        """Contour size plus the operational share of a coarse interior lattice.

        The interior of a row is everything strictly between its leftmost and
        rightmost contour points; every ``stride``-th lattice point is evaluated.
        """
        boundary = set(self._traced)
        spans: dict[int, tuple[int, int]] = {}
        for x, y in boundary:
            low, high = spans.get(y, (x, x))
            spans[y] = (min(low, x), max(high, x))
        interior = [
            (x, y)
            for y, (low, high) in sorted(spans.items())
            for x in range(low + 1, high)
            if (x, y) not in boundary
        ]
        lattice = [p for p in interior if p[0] % stride == 0 and p[1] % stride == 0]
        operational = sum(1 for p in lattice if self.is_operational(p))
        fraction = operational / len(lattice) if lattice else 1.0
        return len(boundary) + fraction * len(interior)


def _operational_seeds(run: ExplorationRun, seeds: list[Point]) -> list[Point]:
    """Validate explicit seeds, then add operational random samples."""
    result: list[Point] = []
    for seed in seeds:
        if not run.space.contains(seed):
            raise InvalidSeed("contour seed lies outside the grid", seed)
        if not run.cache.lookup_or_evaluate(seed).operational:
            raise InvalidSeed("contour seed is not operational", seed)
        result.append(seed)
    for point in run.random_points():
        if run.cache.lookup_or_evaluate(point).operational:
            result.append(point)
    return result


def contour_tracing(
    space: ParameterSpace,
    oracle: Oracle,
    gate_spec: GateSpec,
    parameters: SimulationParameters,
    seeds: Iterable[Point] = (),
    config: ExplorationConfig | None = None,
) -> DomainResult:
    """Characterize the boundary of the operational region(s) around ``seeds``.

    Explicit seeds must be in-grid and operational (:exc:`InvalidSeed`).
    ``config.random_samples`` adds random start points; non-operational ones
    are recorded but not traced, and finding none operational is a valid,
    complete, empty result.
    """
    config = config or ExplorationConfig()
    if space.ndim != 2:
        raise UnsupportedSpace(f"contour tracing needs 2 dimensions, got {space.ndim}")
    seeds = [tuple(seed) for seed in seeds]
    if not seeds and config.random_samples == 0:
        raise ValueError("contour tracing needs at least one seed or random_samples > 0")

    with ExplorationRun(
        ExplorationStrategy.CONTOUR_TRACING, space, oracle, gate_spec, parameters, config
    ) as run:
        tracer = _ContourTracer(run)
        area: float | None = None
        try:
            termination = tracer.trace_all(_operational_seeds(run, seeds))
            if (
                termination is TerminationReason.COMPLETED
                and config.interior_stride > 0
                and tracer.contours
            ):
                area = tracer.estimate_area(config.interior_stride)
        except BudgetExceeded:
            termination = TerminationReason.EVALUATION_BUDGET
        return run.result(
            termination, contours=tuple(tracer.contours), operational_area_estimate=area
        )

"""Result container returned by every exploration strategy."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from operational_domain.domain.sample import Sample
from operational_domain.domain.space import ParameterSpace, Point
from operational_domain.exploration.stats import RunStatistics


class ExplorationStrategy(Enum):
    """Which explorer produced a domain."""

    FLOOD_FILL = "flood_fill"
    CONTOUR_TRACING = "contour_tracing"
    GRID_SEARCH = "grid_search"
    RANDOM_SAMPLING = "random_sampling"


class TerminationReason(Enum):
    """Why a run stopped; anything but COMPLETED means the domain is partial."""

    COMPLETED = "completed"
    EVALUATION_BUDGET = "evaluation_budget"
    ITERATION_CAP = "iteration_cap"
    GRID_EDGE = "grid_edge"
    ORACLE_FAILURE = "oracle_failure"


@dataclass(frozen=True)
class DomainResult:
    """Samples of one run keyed by point, in visitation order."""

    space: ParameterSpace
    strategy: ExplorationStrategy
    samples: dict[Point, Sample]
    statistics: RunStatistics
    termination: TerminationReason = TerminationReason.COMPLETED
    contours: tuple[tuple[Point, ...], ...] = ()
    operational_area_estimate: float | None = None

    @property
    def partial(self) -> bool:
        return self.termination is not TerminationReason.COMPLETED

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples.values())

    def __contains__(self, point: object) -> bool:
        return point in self.samples

    def visit_order(self) -> tuple[Point, ...]:
        return tuple(self.samples)

    def operational_points(self) -> set[Point]:
        return {p for p, s in self.samples.items() if s.operational}

    def non_operational_points(self) -> set[Point]:
        return {p for p, s in self.samples.items() if not s.operational}

"""Exploration engine: sample cache, statistics, and the four strategies."""

from operational_domain.exploration.cache import SampleCache
from operational_domain.exploration.contour import CLOCKWISE_OFFSETS, contour_tracing
from operational_domain.exploration.flood_fill import flood_fill
from operational_domain.exploration.result import (
    DomainResult,
    ExplorationStrategy,
    TerminationReason,
)
from operational_domain.exploration.run import ExplorationRun
from operational_domain.exploration.sampling import grid_search, random_sampling
from operational_domain.exploration.stats import RunStatistics, StatisticsCollector

__all__ = [
    "CLOCKWISE_OFFSETS",
    "DomainResult",
    "ExplorationRun",
    "ExplorationStrategy",
    "RunStatistics",
    "SampleCache",
    "StatisticsCollector",
    "TerminationReason",
    "contour_tracing",
    "flood_fill",
    "grid_search",
    "random_sampling",
]

"""Verdicts and the immutable per-point samples recorded by a run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from operational_domain.domain.space import Point


class Verdict(Enum):
    """Operational status of a parameter point."""

    OPERATIONAL = "operational"
    NON_OPERATIONAL = "non_operational"

    @classmethod
    def from_bool(cls, operational: bool) -> Verdict:
        return cls.OPERATIONAL if operational else cls.NON_OPERATIONAL


@dataclass(frozen=True)
class Sample:
    """One evaluated grid point. Created once per point per run."""

    point: Point
    values: tuple[float, ...]
    verdict: Verdict
    metrics: Mapping[str, object] = field(default_factory=dict, compare=False)

    @property
    def operational(self) -> bool:
        return self.verdict is Verdict.OPERATIONAL

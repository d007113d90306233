"""Oracle seam: the expensive operational-status decision, injected by callers.

The engine never knows which physics model sits behind an oracle. Anything
with an ``evaluate(point, gate_spec, parameters)`` method returning an
:class:`OracleResponse` will do; :class:`PredicateOracle` adapts plain
callables for analytic models and tests.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol

from operational_domain.domain.sample import Verdict
from operational_domain.domain.space import Point, SimulationParameters

if TYPE_CHECKING:
    from operational_domain.domain.gates import GateSpec


@dataclass(frozen=True)
class OracleResponse:
    """Verdict for one point plus the number of simulator calls it cost."""

    verdict: Verdict
    metrics: Mapping[str, object] = field(default_factory=dict, compare=False)
    invocations: int = 1

    def __post_init__(self) -> None:
        if self.invocations < 1:
            raise ValueError("invocations must be >= 1")
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))


class Oracle(Protocol):
    """Decides the operational status of one parameter point."""

    def evaluate(
        self, point: Point, gate_spec: GateSpec, parameters: SimulationParameters
    ) -> OracleResponse: ...


PredicateResult = bool | OracleResponse


class PredicateOracle:
    """Wrap ``predicate(parameters) -> bool | OracleResponse`` as an :class:`Oracle`.

    The predicate sees the fully applied :class:`SimulationParameters`. A bare
    boolean counts as a single simulator invocation.
    """

    def __init__(self, predicate: Callable[[SimulationParameters], PredicateResult]) -> None:
        self._predicate = predicate

    def evaluate(
        self, point: Point, gate_spec: GateSpec, parameters: SimulationParameters
    ) -> OracleResponse:
        result = self._predicate(parameters)
        if isinstance(result, OracleResponse):
            return result
        return OracleResponse(verdict=Verdict.from_bool(bool(result)))

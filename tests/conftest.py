"""Shared fixtures: small grids, analytic oracles and a call-counting oracle."""

from __future__ import annotations

import threading
import time
from collections import Counter
from collections.abc import Callable

import pytest

from operational_domain.domain.gates import GateSpec, resolve_gate
from operational_domain.domain.oracle import OracleResponse, PredicateOracle
from operational_domain.domain.sample import Verdict
from operational_domain.domain.space import (
    ParameterSpace,
    Point,
    SimulationParameters,
    SweepParameter,
)


class CountingOracle:
    """Predicate oracle that records how often each point was evaluated."""

    def __init__(
        self,
        predicate: Callable[[SimulationParameters], bool],
        delay_s: float = 0.0,
        fail_at: Point | None = None,
    ) -> None:
        self.predicate = predicate
        self.delay_s = delay_s
        self.fail_at = fail_at
        self.calls: Counter[Point] = Counter()
        self._lock = threading.Lock()

    def evaluate(
        self, point: Point, gate_spec: GateSpec, parameters: SimulationParameters
    ) -> OracleResponse:
        with self._lock:
            self.calls[point] += 1
        if self.delay_s:
            time.sleep(self.delay_s)
        if point == self.fail_at:
            raise RuntimeError(f"simulator crashed at {point}")
        return OracleResponse(verdict=Verdict.from_bool(self.predicate(parameters)))


def product_below(limit: float) -> Callable[[SimulationParameters], bool]:
    return lambda p: p.epsilon_r * p.lambda_tf <= limit


@pytest.fixture
def grid_3x3() -> ParameterSpace:
    """epsilon_r x lambda_tf over {1.0, 1.5, 2.0}."""
    return ParameterSpace.from_bounds(
        [
            (SweepParameter.EPSILON_R, 1.0, 2.0, 0.5),
            (SweepParameter.LAMBDA_TF, 1.0, 2.0, 0.5),
        ]
    )


@pytest.fixture
def grid_5x5() -> ParameterSpace:
    return ParameterSpace.from_bounds(
        [
            (SweepParameter.EPSILON_R, 1.0, 5.0, 1.0),
            (SweepParameter.LAMBDA_TF, 1.0, 5.0, 1.0),
        ]
    )


@pytest.fixture
def gate_spec() -> GateSpec:
    return resolve_gate("or_1")


@pytest.fixture
def params() -> SimulationParameters:
    return SimulationParameters()


@pytest.fixture
def product_oracle() -> PredicateOracle:
    """Operational iff epsilon_r * lambda_tf <= 2.25."""
    return PredicateOracle(product_below(2.25))


@pytest.fixture
def make_counting_oracle() -> Callable[..., CountingOracle]:
    def _make(limit: float = 2.25, **kwargs: object) -> CountingOracle:
        return CountingOracle(product_below(limit), **kwargs)  # type: ignore[arg-type]

    return _make

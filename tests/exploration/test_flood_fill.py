"""Tests for exploration/flood_fill.py."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from operational_domain.config.types import ExplorationConfig
from operational_domain.domain.errors import OracleFailure
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.oracle import PredicateOracle
from operational_domain.domain.space import ParameterSpace, SimulationParameters
from operational_domain.exploration.flood_fill import flood_fill
from operational_domain.exploration.result import ExplorationStrategy, TerminationReason
from operational_domain.exploration.sampling import grid_search

OPERATIONAL_3X3 = {(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (2, 0)}


class TestFloodFillScenario:
    def test_matches_exhaustive_search(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        exhaustive = grid_search(grid_3x3, product_oracle, gate_spec, params)
        result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
        # 1.5 * 1.5 == 2.25 sits exactly on the limit, so six points qualify.
        assert exhaustive.operational_points() == OPERATIONAL_3X3
        assert result.operational_points() == OPERATIONAL_3X3
        assert result.non_operational_points() == {(1, 2), (2, 1)}
        assert result.strategy is ExplorationStrategy.FLOOD_FILL
        assert result.termination is TerminationReason.COMPLETED
        assert not result.partial

    def test_counts_are_consistent(
        self,
        grid_3x3: ParameterSpace,
        make_counting_oracle: Callable[..., object],
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        oracle = make_counting_oracle()
        result = flood_fill(grid_3x3, oracle, gate_spec, params, seeds=[(0, 0)])
        stats = result.statistics
        assert stats.evaluated_count == len(result) == len(oracle.calls)
        assert stats.operational_count + stats.non_operational_count == stats.evaluated_count
        assert stats.oracle_invocations >= stats.evaluated_count
        assert max(oracle.calls.values()) == 1
        assert (2, 2) not in result

    def test_seed_is_visited_first(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(1, 1)])
        assert result.visit_order()[0] == (1, 1)


class TestFloodFillProperties:
    def test_idempotent_from_any_operational_point(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        first = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
        for seed in first.operational_points():
            again = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[seed])
            assert again.operational_points() == first.operational_points()

    def test_non_operational_seed_yields_empty_domain(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(2, 2)])
        assert result.operational_points() == set()
        assert result.visit_order() == ((2, 2),)
        assert result.termination is TerminationReason.COMPLETED

    def test_out_of_grid_seeds_are_skipped(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        result = flood_fill(
            grid_3x3, product_oracle, gate_spec, params, seeds=[(5, 5), (-1, 0), (0, 0)]
        )
        assert result.operational_points() == OPERATIONAL_3X3

    def test_budget_of_one_returns_only_seed(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        result = flood_fill(
            grid_3x3,
            product_oracle,
            gate_spec,
            params,
            seeds=[(0, 0)],
            config=ExplorationConfig(max_evaluations=1),
        )
        assert result.visit_order() == ((0, 0),)
        assert result.termination is TerminationReason.EVALUATION_BUDGET
        assert result.partial
        assert result.statistics.partial

    def test_random_seeds_are_reproducible(
        self,
        grid_5x5: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        oracle = PredicateOracle(lambda p: p.epsilon_r + p.lambda_tf <= 6.0)
        config = ExplorationConfig(random_samples=10, rng_seed=42)
        first = flood_fill(grid_5x5, oracle, gate_spec, params, config=config)
        second = flood_fill(grid_5x5, oracle, gate_spec, params, config=config)
        assert first.visit_order() == second.visit_order()

    def test_needs_a_seed(
        self,
        grid_3x3: ParameterSpace,
        product_oracle: PredicateOracle,
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        with pytest.raises(ValueError, match="seed"):
            flood_fill(grid_3x3, product_oracle, gate_spec, params)

    def test_three_dimensional_space(self, gate_spec: GateSpec) -> None:
        from operational_domain.domain.space import SweepParameter

        space = ParameterSpace.from_bounds(
            [
                (SweepParameter.EPSILON_R, 1.0, 3.0, 1.0),
                (SweepParameter.LAMBDA_TF, 1.0, 3.0, 1.0),
                (SweepParameter.MU_MINUS, -0.3, -0.1, 0.1),
            ]
        )
        oracle = PredicateOracle(lambda p: p.epsilon_r <= 2.0 and p.mu_minus < -0.15)
        result = flood_fill(space, oracle, gate_spec, SimulationParameters(), seeds=[(0, 0, 0)])
        exhaustive = grid_search(space, oracle, gate_spec, SimulationParameters())
        assert result.operational_points() == exhaustive.operational_points()
        assert len(result.operational_points()) == 2 * 3 * 2


class TestFloodFillParallel:
    def test_same_domain_as_serial(
        self,
        grid_5x5: ParameterSpace,
        make_counting_oracle: Callable[..., object],
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        serial = flood_fill(
            grid_5x5, make_counting_oracle(limit=8.0), gate_spec, params, seeds=[(0, 0)]
        )
        oracle = make_counting_oracle(limit=8.0, delay_s=0.002)
        parallel = flood_fill(
            grid_5x5,
            oracle,
            gate_spec,
            params,
            seeds=[(0, 0)],
            config=ExplorationConfig(max_workers=4),
        )
        assert parallel.operational_points() == serial.operational_points()
        assert set(parallel.visit_order()) == set(serial.visit_order())
        assert max(oracle.calls.values()) == 1


class TestFloodFillFailure:
    def test_oracle_failure_carries_partial_result(
        self,
        grid_3x3: ParameterSpace,
        make_counting_oracle: Callable[..., object],
        gate_spec: GateSpec,
        params: SimulationParameters,
    ) -> None:
        oracle = make_counting_oracle(fail_at=(1, 1))
        with pytest.raises(OracleFailure) as excinfo:
            flood_fill(grid_3x3, oracle, gate_spec, params, seeds=[(0, 0)])
        partial = excinfo.value.partial_result
        assert partial is not None
        assert partial.termination is TerminationReason.ORACLE_FAILURE
        assert partial.partial
        assert (0, 0) in partial
        assert (1, 1) not in partial
        assert isinstance(excinfo.value.__cause__, RuntimeError)

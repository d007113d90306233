"""Tests for exploration/cache.py and exploration/stats.py."""

from __future__ import annotations

from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import pytest

from operational_domain.domain.errors import BudgetExceeded, OracleFailure
from operational_domain.domain.gates import GateSpec
from operational_domain.domain.space import ParameterSpace, SimulationParameters
from operational_domain.exploration.cache import SampleCache
from operational_domain.exploration.stats import RunStatistics, StatisticsCollector


def _make_cache(
    space: ParameterSpace,
    oracle: object,
    gate_spec: GateSpec,
    params: SimulationParameters,
    max_evaluations: int | None = None,
) -> SampleCache:
    return SampleCache(
        space=space,
        oracle=oracle,
        gate_spec=gate_spec,
        parameters=params,
        stats=StatisticsCollector(),
        max_evaluations=max_evaluations,
    )


class TestSampleCache:
    def test_oracle_called_once_per_point(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        oracle = make_counting_oracle()
        cache = _make_cache(grid_3x3, oracle, gate_spec, params)
        first = cache.lookup_or_evaluate((1, 1))
        second = cache.lookup_or_evaluate((1, 1))
        assert first is second
        assert oracle.calls[(1, 1)] == 1
        stats = cache.stats.snapshot()
        assert stats.evaluated_count == 1
        assert stats.cache_hits == 1

    def test_sample_carries_physical_values(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        cache = _make_cache(grid_3x3, make_counting_oracle(), gate_spec, params)
        sample = cache.lookup_or_evaluate((1, 1))
        assert sample.values == (1.5, 1.5)
        assert sample.operational
        assert not cache.lookup_or_evaluate((2, 1)).operational

    def test_concurrent_lookups_share_one_evaluation(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        oracle = make_counting_oracle(delay_s=0.01)
        cache = _make_cache(grid_3x3, oracle, gate_spec, params)
        points = [(i % 3, (i // 3) % 3) for i in range(36)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            samples = list(pool.map(cache.lookup_or_evaluate, points))
        assert len(samples) == 36
        assert len(cache) == 9
        assert set(oracle.calls.values()) == {1}
        assert cache.stats.snapshot().evaluated_count == 9

    def test_budget_caps_distinct_evaluations(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        cache = _make_cache(grid_3x3, make_counting_oracle(), gate_spec, params, max_evaluations=2)
        cache.lookup_or_evaluate((0, 0))
        cache.lookup_or_evaluate((0, 1))
        assert cache.budget_exhausted()
        # Cached points stay reachable once the budget is spent.
        assert cache.lookup_or_evaluate((0, 0)).operational
        with pytest.raises(BudgetExceeded) as excinfo:
            cache.lookup_or_evaluate((2, 2))
        assert excinfo.value.limit == 2
        assert (2, 2) not in cache

    def test_oracle_error_is_wrapped(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        cache = _make_cache(
            grid_3x3, make_counting_oracle(fail_at=(1, 0)), gate_spec, params
        )
        with pytest.raises(OracleFailure) as excinfo:
            cache.lookup_or_evaluate((1, 0))
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert excinfo.value.point == (1, 0)
        assert excinfo.value.values == (1.5, 1.0)
        assert (1, 0) not in cache
        assert cache.stats.snapshot().evaluated_count == 0

    def test_peek_never_evaluates(
        self,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        oracle = make_counting_oracle()
        cache = _make_cache(grid_3x3, oracle, gate_spec, params)
        assert cache.peek((0, 0)) is None
        assert not oracle.calls

    def test_parameter_error_is_not_an_oracle_failure(
        self,
        monkeypatch: pytest.MonkeyPatch,
        grid_3x3: ParameterSpace,
        gate_spec: GateSpec,
        params: SimulationParameters,
        make_counting_oracle: Callable[..., object],
    ) -> None:
        def reject(self: ParameterSpace, point: object, parameters: object) -> None:
            raise ValueError("epsilon_r must be > 0")

        oracle = make_counting_oracle()
        cache = _make_cache(grid_3x3, oracle, gate_spec, params)
        monkeypatch.setattr(ParameterSpace, "apply", reject)
        with pytest.raises(ValueError, match="epsilon_r") as excinfo:
            cache.lookup_or_evaluate((0, 0))
        assert not isinstance(excinfo.value, OracleFailure)
        assert not oracle.calls
        monkeypatch.undo()
        # The claim on the point is released, so a later lookup evaluates it.
        assert cache.lookup_or_evaluate((0, 0)).operational
        assert oracle.calls[(0, 0)] == 1


class TestStatistics:
    def test_fraction_is_zero_without_evaluations(self) -> None:
        stats = RunStatistics()
        assert stats.operational_fraction == 0.0
        assert stats.non_operational_count == 0

    def test_counts_add_up(self) -> None:
        collector = StatisticsCollector()
        collector.start()
        collector.record_evaluation(True, 1)
        collector.record_evaluation(True, 3)
        collector.record_evaluation(False, 1)
        collector.record_cache_hit()
        collector.stop()
        stats = collector.snapshot(partial=True)
        assert stats.evaluated_count == 3
        assert stats.operational_count == 2
        assert stats.non_operational_count == 1
        assert stats.oracle_invocations == 5
        assert stats.cache_hits == 1
        assert stats.operational_fraction == pytest.approx(2 / 3)
        assert stats.partial
        assert stats.elapsed_s >= 0.0

    def test_elapsed_is_frozen_after_stop(self) -> None:
        collector = StatisticsCollector()
        assert collector.elapsed_s() == 0.0
        collector.start()
        collector.stop()
        assert collector.elapsed_s() == collector.elapsed_s()

    def test_as_row_keys(self) -> None:
        row = RunStatistics(evaluated_count=4, operational_count=1).as_row()
        assert row["operational_fraction"] == 0.25
        assert row["non_operational_count"] == 3

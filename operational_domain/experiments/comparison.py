"""Old-vs-new parameter comparison over a folder of gate layouts.

For every mu value and every discovered gate the driver computes critical
temperatures under both physical parameter sets, explores the operational
domain with contour tracing and flood fill, persists the domains as CSV and
adds one row per (gate, mu) to an :class:`ExperimentTable`.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from operational_domain.config.types import ComparisonConfig, OperationalCondition
from operational_domain.domain.gates import GateSpec, discover_gates
from operational_domain.domain.oracle import Oracle
from operational_domain.domain.space import SimulationParameters
from operational_domain.exploration.contour import contour_tracing
from operational_domain.exploration.flood_fill import flood_fill
from operational_domain.exploration.result import DomainResult, ExplorationStrategy
from operational_domain.io.paths import (
    critical_temperature_path,
    domain_figure_path,
    experiment_summary_path,
    operational_domain_path,
)
from operational_domain.io.schemas import EXPERIMENT_SCHEMA, EXPERIMENT_SCHEMA_VERSION
from operational_domain.io.writer import write_critical_temperature, write_operational_domain

logger = logging.getLogger(__name__)

OracleFactory = Callable[[object, GateSpec, SimulationParameters, OperationalCondition], Oracle]
LayoutLoader = Callable[[Path], object]


@dataclass(frozen=True)
class CriticalTemperatureReport:
    """Critical temperature (K) and energy gap (meV) of one layout."""

    temperature_k: float
    energy_gap_mev: float


CriticalTemperatureService = Callable[
    [object, GateSpec, SimulationParameters], CriticalTemperatureReport
]

_STRATEGY_COLUMNS = {
    ExplorationStrategy.CONTOUR_TRACING: "ct",
    ExplorationStrategy.FLOOD_FILL: "ff",
}


class ExperimentTable:
    """Caller-owned collection of per-(gate, mu) comparison rows."""

    def __init__(self) -> None:
        self._rows: list[dict[str, object]] = []

    def __len__(self) -> int:
        return len(self._rows)

    @property
    def rows(self) -> list[dict[str, object]]:
        return [dict(row) for row in self._rows]

    def add_row(
        self,
        gate: str,
        mu: float,
        domains: dict[ExplorationStrategy, DomainResult],
        old_report: CriticalTemperatureReport | None = None,
        new_report: CriticalTemperatureReport | None = None,
    ) -> dict[str, object]:
        """Append one row; missing critical-temperature reports become nulls."""
        missing = set(_STRATEGY_COLUMNS) - set(domains)
        if missing:
            names = ", ".join(sorted(strategy.value for strategy in missing))
            raise ValueError(f"row is missing domains for: {names}")
        row: dict[str, object] = {
            "schema_version": EXPERIMENT_SCHEMA_VERSION,
            "gate": gate,
            "mu": mu,
            "critical_temperature_old_k": old_report.temperature_k if old_report else None,
            "energy_gap_old_mev": old_report.energy_gap_mev if old_report else None,
            "critical_temperature_new_k": new_report.temperature_k if new_report else None,
            "energy_gap_new_mev": new_report.energy_gap_mev if new_report else None,
        }
        for strategy, prefix in _STRATEGY_COLUMNS.items():
            stats = domains[strategy].statistics
            row[f"{prefix}_samples"] = stats.evaluated_count
            row[f"{prefix}_operational_fraction"] = stats.operational_fraction
            row[f"{prefix}_oracle_invocations"] = stats.oracle_invocations
            row[f"{prefix}_elapsed_s"] = stats.elapsed_s
            row[f"{prefix}_partial"] = stats.partial
        self._rows.append(row)
        return row

    def to_table(self) -> pa.Table:
        return pa.Table.from_pylist(self._rows, schema=EXPERIMENT_SCHEMA)

    def save(self, path: Path) -> Path:
        """Write the table as Parquet to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pq.write_table(self.to_table(), path)
        return path


def _format_temperature(report: CriticalTemperatureReport | None) -> str:
    if report is None or math.isnan(report.temperature_k):
        return "n/a"
    return f"{report.temperature_k:.2f} K"


def run_comparison(
    config: ComparisonConfig,
    oracle_factory: OracleFactory,
    layout_loader: LayoutLoader,
    critical_temperature: CriticalTemperatureService | None = None,
    table: ExperimentTable | None = None,
) -> ExperimentTable:
    """Run the comparison for every mu and gate in ``config``.

    The oracle is always built from the "old" parameters; the "new" set only
    feeds the critical-temperature service. Returns ``table`` (a fresh one
    if not given) after persisting it under ``config.out_dir``.
    """
    table = table if table is not None else ExperimentTable()
    out_dir = Path(config.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    space = config.parameter_space()
    gates = discover_gates(config.gates_dir)
    if not gates:
        logger.warning("no gate layouts found in %s", config.gates_dir)

    for mu in config.mus:
        old_params = config.old_parameters(mu)
        new_params = config.new_parameters(mu)
        for gate_spec, layout_path in gates:
            layout = layout_loader(layout_path)

            old_report: CriticalTemperatureReport | None = None
            new_report: CriticalTemperatureReport | None = None
            if critical_temperature is not None:
                old_report = critical_temperature(layout, gate_spec, old_params)
                new_report = critical_temperature(layout, gate_spec, new_params)
                write_critical_temperature(
                    critical_temperature_path(out_dir, mu, gate_spec.name),
                    old_report.temperature_k,
                    new_report.temperature_k,
                )

            oracle = oracle_factory(layout, gate_spec, old_params, config.operational_condition)
            domains = {
                ExplorationStrategy.CONTOUR_TRACING: contour_tracing(
                    space, oracle, gate_spec, old_params, config=config.contour_config()
                ),
                ExplorationStrategy.FLOOD_FILL: flood_fill(
                    space, oracle, gate_spec, old_params, config=config.flood_fill_config()
                ),
            }
            for strategy, result in domains.items():
                write_operational_domain(
                    result,
                    operational_domain_path(out_dir, strategy, mu, gate_spec.name),
                    config.write,
                )
                if config.plot:
                    from operational_domain.viz.render import render_operational_domain

                    render_operational_domain(
                        result,
                        domain_figure_path(out_dir, strategy, mu, gate_spec.name),
                        title=f"{gate_spec.name} ({strategy.value}, mu={mu:.2f})",
                    )

            table.add_row(gate_spec.name, mu, domains, old_report, new_report)
            logger.info(
                "%s mu=%.2f: T_c old=%s new=%s, ct %d samples, ff %d samples",
                gate_spec.name,
                mu,
                _format_temperature(old_report),
                _format_temperature(new_report),
                domains[ExplorationStrategy.CONTOUR_TRACING].statistics.evaluated_count,
                domains[ExplorationStrategy.FLOOD_FILL].statistics.evaluated_count,
            )

    table.save(experiment_summary_path(out_dir))
    return table

"""Experiments layer: old-vs-new comparison driver and its CLI."""

from operational_domain.experiments.comparison import (
    CriticalTemperatureReport,
    ExperimentTable,
    run_comparison,
)

__all__ = [
    "CriticalTemperatureReport",
    "ExperimentTable",
    "run_comparison",
]

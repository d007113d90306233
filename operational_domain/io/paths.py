"""Path construction helpers for experiment output directories.

Centralises the file naming conventions used by the comparison driver.
"""

from __future__ import annotations

from pathlib import Path

from operational_domain.exploration.result import ExplorationStrategy


def domains_dir(out_dir: Path) -> Path:
    """Return path to the operational-domain CSV subdirectory."""
    return out_dir / "domains"


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def figures_dir(out_dir: Path) -> Path:
    """Return path to the figures subdirectory within an output directory."""
    return out_dir / "figures"


def operational_domain_path(
    out_dir: Path, strategy: ExplorationStrategy, mu: float, gate: str
) -> Path:
    """Return path to one gate's operational-domain CSV for a strategy and mu."""
    return domains_dir(out_dir) / f"operational_domain_{strategy.value}_{mu:.2f}_{gate}.csv"


def critical_temperature_path(out_dir: Path, mu: float, gate: str) -> Path:
    """Return path to one gate's old-vs-new critical-temperature CSV."""
    return domains_dir(out_dir) / f"critical_temperature_{mu:.2f}_{gate}.csv"


def domain_figure_path(
    out_dir: Path, strategy: ExplorationStrategy, mu: float, gate: str
) -> Path:
    """Return path to the rendered operational-domain figure."""
    return figures_dir(out_dir) / f"operational_domain_{strategy.value}_{mu:.2f}_{gate}.pdf"


def experiment_summary_path(out_dir: Path) -> Path:
    """Return path to the experiment summary Parquet file."""
    return logs_dir(out_dir) / "experiment_summary.parquet"

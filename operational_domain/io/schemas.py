"""Arrow schemas and column-name constants for exploration artifacts.

Every table the driver persists (domain CSVs, critical-temperature CSVs,
the experiment summary) is declared here so that writers and readers share
one column contract.
"""

from __future__ import annotations

import pyarrow as pa

from operational_domain.domain.space import ParameterSpace

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

EXPERIMENT_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Operational-domain CSV
# ---------------------------------------------------------------------------

OPERATIONAL_STATUS_COLUMN = "operational status"


def domain_schema(space: ParameterSpace) -> pa.Schema:
    """One float column per swept dimension plus the verdict tag column."""
    return pa.schema(
        [(label, pa.float64()) for label in space.labels]
        + [(OPERATIONAL_STATUS_COLUMN, pa.string())]
    )


# ---------------------------------------------------------------------------
# Critical-temperature CSV
# ---------------------------------------------------------------------------

CRITICAL_TEMPERATURE_SCHEMA = pa.schema(
    [
        ("Critical Temperature (Old)", pa.float64()),
        ("Critical Temperature (New)", pa.float64()),
    ]
)

# ---------------------------------------------------------------------------
# Experiment summary (one row per gate and mu value)
# ---------------------------------------------------------------------------

STRATEGY_PREFIXES = ("ct", "ff")
"""Column prefixes: ct = contour tracing, ff = flood fill."""

EXPERIMENT_SCHEMA = pa.schema(
    [
        ("schema_version", pa.int64()),
        ("gate", pa.string()),
        ("mu", pa.float64()),
        ("critical_temperature_old_k", pa.float64()),
        ("energy_gap_old_mev", pa.float64()),
        ("critical_temperature_new_k", pa.float64()),
        ("energy_gap_new_mev", pa.float64()),
    ]
    + [
        field
        for prefix in STRATEGY_PREFIXES
        for field in (
            (f"{prefix}_samples", pa.int64()),
            (f"{prefix}_operational_fraction", pa.float64()),
            (f"{prefix}_oracle_invocations", pa.int64()),
            (f"{prefix}_elapsed_s", pa.float64()),
            (f"{prefix}_partial", pa.bool_()),
        )
    ]
)

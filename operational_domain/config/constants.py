"""Centralized defaults for operational-domain exploration runs.

Magic numbers shared between the engine, the experiment driver and the CLI
are defined here. Consuming modules should import from this module rather
than defining their own inline literals.
"""

from __future__ import annotations

LEVEL_TOLERANCE = 1e-9
"""Slack added to ``(max - min) / step`` before flooring, absorbs float error."""

DEFAULT_SWEEP_MIN = 1.0
"""Default lower bound of each swept dimension."""

DEFAULT_SWEEP_MAX = 10.0
"""Default upper bound of each swept dimension."""

DEFAULT_SWEEP_STEP = 0.05
"""Default step of each swept dimension."""

DEFAULT_SIM_BASE = 3
"""Number of charge states the oracle's simulator considers."""

DEFAULT_MU_MINUS = -0.32
"""Default mu_minus value (eV) of the outer sweep."""

OLD_EPSILON_R = 5.6
"""Relative permittivity of the legacy ("old") parameter set."""

OLD_LAMBDA_TF = 5.0
"""Thomas-Fermi screening length (nm) of the legacy parameter set."""

NEW_EPSILON_R = 4.1
"""Relative permittivity of the revised ("new") parameter set."""

NEW_LAMBDA_TF = 1.8
"""Thomas-Fermi screening length (nm) of the revised parameter set."""

CONTOUR_RANDOM_SAMPLES = 100
"""Random start samples used by the driver for contour tracing."""

FLOOD_FILL_RANDOM_SAMPLES = 250
"""Random start samples used by the driver for flood fill."""

MAX_CONTOUR_ITERATIONS = 100_000
"""Safety cap on tracer moves per contour."""

OPERATIONAL_TAG = "1"
"""Default CSV tag for operational samples."""

NON_OPERATIONAL_TAG = "0"
"""Default CSV tag for non-operational samples."""

LAYOUT_SUFFIX = ".sqd"
"""File suffix of gate layouts discovered by the driver."""

"""Configuration layer: constants and typed config dataclasses."""

from operational_domain.config.constants import (
    CONTOUR_RANDOM_SAMPLES,
    DEFAULT_MU_MINUS,
    DEFAULT_SIM_BASE,
    FLOOD_FILL_RANDOM_SAMPLES,
    MAX_CONTOUR_ITERATIONS,
    NEW_EPSILON_R,
    NEW_LAMBDA_TF,
    NON_OPERATIONAL_TAG,
    OLD_EPSILON_R,
    OLD_LAMBDA_TF,
    OPERATIONAL_TAG,
)
from operational_domain.config.types import (
    ComparisonConfig,
    ExplorationConfig,
    OperationalCondition,
    SampleWritingMode,
    WriteConfig,
    default_sweep,
)

__all__ = [
    "CONTOUR_RANDOM_SAMPLES",
    "ComparisonConfig",
    "DEFAULT_MU_MINUS",
    "DEFAULT_SIM_BASE",
    "ExplorationConfig",
    "FLOOD_FILL_RANDOM_SAMPLES",
    "MAX_CONTOUR_ITERATIONS",
    "NEW_EPSILON_R",
    "NEW_LAMBDA_TF",
    "NON_OPERATIONAL_TAG",
    "OLD_EPSILON_R",
    "OLD_LAMBDA_TF",
    "OPERATIONAL_TAG",
    "OperationalCondition",
    "SampleWritingMode",
    "WriteConfig",
    "default_sweep",
]

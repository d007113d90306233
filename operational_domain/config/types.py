"""Configuration dataclasses for exploration runs, writers and the driver.

All frozen dataclasses that parameterise a single exploration run, the
domain CSV writer, and the old-vs-new comparison experiment live here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from operational_domain.config.constants import (
    CONTOUR_RANDOM_SAMPLES,
    DEFAULT_MU_MINUS,
    DEFAULT_SIM_BASE,
    DEFAULT_SWEEP_MAX,
    DEFAULT_SWEEP_MIN,
    DEFAULT_SWEEP_STEP,
    FLOOD_FILL_RANDOM_SAMPLES,
    MAX_CONTOUR_ITERATIONS,
    NEW_EPSILON_R,
    NEW_LAMBDA_TF,
    NON_OPERATIONAL_TAG,
    OLD_EPSILON_R,
    OLD_LAMBDA_TF,
    OPERATIONAL_TAG,
)

if TYPE_CHECKING:
    from operational_domain.domain.space import Dimension, ParameterSpace, SimulationParameters

__all__ = [
    "ComparisonConfig",
    "ExplorationConfig",
    "OperationalCondition",
    "SampleWritingMode",
    "WriteConfig",
    "default_sweep",
]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OperationalCondition(Enum):
    """How the oracle treats kinks in the output charge configuration."""

    REJECT_KINKS = "reject_kinks"
    TOLERATE_KINKS = "tolerate_kinks"


class SampleWritingMode(Enum):
    """Which samples of a domain the CSV writer emits."""

    ALL_SAMPLES = "all_samples"
    OPERATIONAL_ONLY = "operational_only"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExplorationConfig:
    """Knobs shared by all exploration strategies.

    ``max_evaluations`` caps distinct oracle evaluations (``None`` = unbounded),
    ``max_iterations`` caps tracer moves per contour, ``random_samples`` adds
    uniformly drawn start points, ``max_workers > 1`` enables the flood-fill
    worker pool and ``interior_stride > 0`` turns on coarse interior sampling
    after contour tracing.
    """

    max_evaluations: int | None = None
    max_iterations: int = MAX_CONTOUR_ITERATIONS
    random_samples: int = 0
    rng_seed: int = 0
    max_workers: int = 1
    close_along_grid_edge: bool = True
    interior_stride: int = 0

    def __post_init__(self) -> None:
        if self.max_evaluations is not None and self.max_evaluations < 1:
            raise ValueError("max_evaluations must be >= 1 or None")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if self.random_samples < 0:
            raise ValueError("random_samples must be >= 0")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.interior_stride < 0:
            raise ValueError("interior_stride must be >= 0")


@dataclass(frozen=True)
class WriteConfig:
    """Tags and sample selection for the operational-domain CSV writer."""

    operational_tag: str = OPERATIONAL_TAG
    non_operational_tag: str = NON_OPERATIONAL_TAG
    writing_mode: SampleWritingMode = SampleWritingMode.ALL_SAMPLES

    def __post_init__(self) -> None:
        if not self.operational_tag:
            raise ValueError("operational_tag must not be empty")
        if not self.non_operational_tag:
            raise ValueError("non_operational_tag must not be empty")
        if self.operational_tag == self.non_operational_tag:
            raise ValueError("operational_tag and non_operational_tag must differ")


def default_sweep() -> tuple[Dimension, ...]:
    """epsilon_r x lambda_tf, each 1.0..10.0 in steps of 0.05."""
    from operational_domain.domain.space import Dimension, SweepParameter

    return (
        Dimension(
            SweepParameter.EPSILON_R, DEFAULT_SWEEP_MIN, DEFAULT_SWEEP_MAX, DEFAULT_SWEEP_STEP
        ),
        Dimension(
            SweepParameter.LAMBDA_TF, DEFAULT_SWEEP_MIN, DEFAULT_SWEEP_MAX, DEFAULT_SWEEP_STEP
        ),
    )


@dataclass(frozen=True)
class ComparisonConfig:
    """Settings for the old-vs-new parameter comparison over a gate folder."""

    gates_dir: Path = Path("gates")
    out_dir: Path = Path("data")
    mus: tuple[float, ...] = (DEFAULT_MU_MINUS,)
    sweep: tuple[Dimension, ...] = field(default_factory=default_sweep)
    base: int = DEFAULT_SIM_BASE
    old_epsilon_r: float = OLD_EPSILON_R
    old_lambda_tf: float = OLD_LAMBDA_TF
    new_epsilon_r: float = NEW_EPSILON_R
    new_lambda_tf: float = NEW_LAMBDA_TF
    operational_condition: OperationalCondition = OperationalCondition.TOLERATE_KINKS
    contour_random_samples: int = CONTOUR_RANDOM_SAMPLES
    flood_fill_random_samples: int = FLOOD_FILL_RANDOM_SAMPLES
    max_evaluations: int | None = None
    max_workers: int = 1
    rng_seed: int = 0
    write: WriteConfig = field(default_factory=WriteConfig)
    plot: bool = False

    def __post_init__(self) -> None:
        if not self.mus:
            raise ValueError("mus must not be empty")
        if self.base not in (2, 3):
            raise ValueError("base must be 2 or 3")
        if self.contour_random_samples < 1:
            raise ValueError("contour_random_samples must be >= 1")
        if self.flood_fill_random_samples < 1:
            raise ValueError("flood_fill_random_samples must be >= 1")
        if len(self.sweep) != 2:
            raise ValueError(
                f"sweep must span exactly 2 dimensions for contour tracing, got {len(self.sweep)}"
            )
        # Validates the sweep eagerly (InvalidDimension is a ValueError).
        self.parameter_space()
        self.contour_config()
        self.flood_fill_config()

    def parameter_space(self) -> ParameterSpace:
        from operational_domain.domain.space import ParameterSpace

        return ParameterSpace(self.sweep)

    def old_parameters(self, mu: float) -> SimulationParameters:
        from operational_domain.domain.space import SimulationParameters

        return SimulationParameters(
            base=self.base,
            mu_minus=mu,
            epsilon_r=self.old_epsilon_r,
            lambda_tf=self.old_lambda_tf,
        )

    def new_parameters(self, mu: float) -> SimulationParameters:
        from operational_domain.domain.space import SimulationParameters

        return SimulationParameters(
            base=self.base,
            mu_minus=mu,
            epsilon_r=self.new_epsilon_r,
            lambda_tf=self.new_lambda_tf,
        )

    def contour_config(self) -> ExplorationConfig:
        return ExplorationConfig(
            max_evaluations=self.max_evaluations,
            random_samples=self.contour_random_samples,
            rng_seed=self.rng_seed,
        )

    def flood_fill_config(self) -> ExplorationConfig:
        return ExplorationConfig(
            max_evaluations=self.max_evaluations,
            random_samples=self.flood_fill_random_samples,
            rng_seed=self.rng_seed,
            max_workers=self.max_workers,
        )

"""Discretized parameter space swept by the explorers.

A ``Point`` is a tuple of level indices, one per dimension. It maps to
physical values via ``value = min + index * step``; the explorers only ever
handle indices, the oracle only ever sees values.
"""

from __future__ import annotations

import itertools
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from enum import Enum
from random import Random
from typing import TypeAlias

from operational_domain.config.constants import (
    DEFAULT_MU_MINUS,
    DEFAULT_SIM_BASE,
    LEVEL_TOLERANCE,
    OLD_EPSILON_R,
    OLD_LAMBDA_TF,
)
from operational_domain.domain.errors import InvalidDimension, InvalidSeed

Point: TypeAlias = tuple[int, ...]
"""Level indices of a grid point, one entry per dimension."""


class SweepParameter(Enum):
    """Physical parameter a dimension sweeps; values double as column labels."""

    EPSILON_R = "epsilon_r"
    LAMBDA_TF = "lambda_tf"
    MU_MINUS = "mu_minus"


# Swept values must satisfy SimulationParameters' positivity checks.
_POSITIVE_PARAMETERS = frozenset({SweepParameter.EPSILON_R, SweepParameter.LAMBDA_TF})


@dataclass(frozen=True)
class SimulationParameters:
    """Physical constants handed to the oracle for one evaluation."""

    base: int = DEFAULT_SIM_BASE
    mu_minus: float = DEFAULT_MU_MINUS
    epsilon_r: float = OLD_EPSILON_R
    lambda_tf: float = OLD_LAMBDA_TF

    def __post_init__(self) -> None:
        if self.base not in (2, 3):
            raise ValueError("base must be 2 or 3")
        if not self.epsilon_r > 0.0:
            raise ValueError("epsilon_r must be > 0")
        if not self.lambda_tf > 0.0:
            raise ValueError("lambda_tf must be > 0")


def validate_bounds(
    min_value: float, max_value: float, step: float, dimension_index: int | None = None
) -> None:
    """Raise :exc:`InvalidDimension` unless ``step > 0`` and ``min <= max``."""
    if not all(math.isfinite(v) for v in (min_value, max_value, step)):
        raise InvalidDimension("min, max and step must be finite", dimension_index)
    if step <= 0.0:
        raise InvalidDimension(f"step must be > 0, got {step}", dimension_index)
    if min_value > max_value:
        raise InvalidDimension(
            f"min must be <= max, got min={min_value} max={max_value}", dimension_index
        )


@dataclass(frozen=True)
class Dimension:
    """One swept axis: ``parameter`` from ``min`` to ``max`` in ``step`` increments."""

    parameter: SweepParameter
    min: float
    max: float
    step: float

    def __post_init__(self) -> None:
        validate_bounds(self.min, self.max, self.step)

    @property
    def levels(self) -> int:
        return int(math.floor((self.max - self.min) / self.step + LEVEL_TOLERANCE)) + 1

    @property
    def label(self) -> str:
        return self.parameter.value

    def value(self, index: int) -> float:
        return self.min + index * self.step

    def index_of(self, value: float) -> int | None:
        """Return the level index closest to ``value``, or None if off-grid."""
        index = round((value - self.min) / self.step)
        if not 0 <= index < self.levels:
            return None
        if abs(self.value(index) - value) > self.step / 2:
            return None
        return index


@dataclass(frozen=True)
class ParameterSpace:
    """Ordered sequence of 1..K dimensions forming a regular grid."""

    dimensions: tuple[Dimension, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimensions", tuple(self.dimensions))
        if not self.dimensions:
            raise InvalidDimension("parameter space needs at least one dimension")
        seen: set[SweepParameter] = set()
        for index, dimension in enumerate(self.dimensions):
            if dimension.parameter in seen:
                raise InvalidDimension(
                    f"parameter {dimension.label} is swept twice", dimension_index=index
                )
            seen.add(dimension.parameter)
            if dimension.parameter in _POSITIVE_PARAMETERS and not dimension.min > 0.0:
                raise InvalidDimension(
                    f"{dimension.label} must stay > 0, got min={dimension.min}",
                    dimension_index=index,
                )

    @classmethod
    def from_bounds(
        cls, bounds: Iterable[tuple[SweepParameter, float, float, float]]
    ) -> ParameterSpace:
        """Build a space from ``(parameter, min, max, step)`` tuples.

        Validation errors carry the offending dimension index.
        """
        dimensions: list[Dimension] = []
        for index, (parameter, min_value, max_value, step) in enumerate(bounds):
            validate_bounds(min_value, max_value, step, dimension_index=index)
            dimensions.append(Dimension(parameter, min_value, max_value, step))
        return cls(tuple(dimensions))

    @property
    def ndim(self) -> int:
        return len(self.dimensions)

    @property
    def shape(self) -> tuple[int, ...]:
        return tuple(d.levels for d in self.dimensions)

    @property
    def size(self) -> int:
        return math.prod(self.shape)

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(d.label for d in self.dimensions)

    def contains(self, point: Sequence[int]) -> bool:
        if len(point) != self.ndim:
            return False
        return all(0 <= i < n for i, n in zip(point, self.shape, strict=True))

    def on_edge(self, point: Point) -> bool:
        """True if ``point`` lies on the outermost level of any dimension."""
        return any(i in (0, n - 1) for i, n in zip(point, self.shape, strict=True))

    def values(self, point: Point) -> tuple[float, ...]:
        return tuple(d.value(i) for d, i in zip(self.dimensions, point, strict=True))

    def point_at(self, values: Sequence[float]) -> Point:
        """Map physical values to the nearest grid point.

        Raises :exc:`InvalidSeed` when the values fall outside the grid.
        """
        if len(values) != self.ndim:
            raise InvalidSeed(f"expected {self.ndim} values, got {len(values)}")
        indices: list[int] = []
        for dimension, value in zip(self.dimensions, values, strict=True):
            index = dimension.index_of(value)
            if index is None:
                raise InvalidSeed(f"{dimension.label}={value} lies outside the grid")
            indices.append(index)
        return tuple(indices)

    def neighbors(self, point: Point) -> list[Point]:
        """Return in-grid 2K-neighbours: per dimension, lower then upper."""
        result: list[Point] = []
        for axis, levels in enumerate(self.shape):
            for delta in (-1, 1):
                index = point[axis] + delta
                if 0 <= index < levels:
                    result.append(point[:axis] + (index,) + point[axis + 1 :])
        return result

    def iter_points(self) -> Iterator[Point]:
        """Yield every grid point in row-major order (last dimension fastest)."""
        return itertools.product(*(range(n) for n in self.shape))

    def random_point(self, rng: Random) -> Point:
        return tuple(rng.randrange(n) for n in self.shape)

    def apply(self, point: Point, parameters: SimulationParameters) -> SimulationParameters:
        """Return ``parameters`` with every swept value taken from ``point``."""
        swept = {
            d.parameter.value: value
            for d, value in zip(self.dimensions, self.values(point), strict=True)
        }
        return replace(parameters, **swept)

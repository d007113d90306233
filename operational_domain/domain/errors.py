"""Exception hierarchy raised by the exploration engine and gate catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from operational_domain.exploration.result import DomainResult


class ExplorationError(Exception):
    """Base class for every error raised by this package."""


class InvalidDimension(ExplorationError, ValueError):
    """A sweep dimension has ``step <= 0`` or ``min > max``."""

    def __init__(self, message: str, dimension_index: int | None = None) -> None:
        if dimension_index is not None:
            message = f"dimension {dimension_index}: {message}"
        super().__init__(message)
        self.dimension_index = dimension_index


class UnsupportedSpace(ExplorationError, ValueError):
    """The parameter space has a shape the requested strategy cannot handle."""


class InvalidSeed(ExplorationError, ValueError):
    """A seed is outside the grid or not operational where it must be."""

    def __init__(self, message: str, point: tuple[int, ...] | None = None) -> None:
        if point is not None:
            message = f"{message} (point={point})"
        super().__init__(message)
        self.point = point


class BudgetExceeded(ExplorationError):
    """Evaluating ``point`` would exceed the run's evaluation budget.

    Raised by the sample cache only; explorers turn it into a partial result.
    """

    def __init__(self, point: tuple[int, ...], limit: int) -> None:
        super().__init__(f"evaluation budget of {limit} exhausted before point {point}")
        self.point = point
        self.limit = limit


class OracleFailure(ExplorationError):
    """The oracle raised while evaluating ``point``.

    The oracle's exception is chained as ``__cause__``. Explorers attach the
    domain computed so far as ``partial_result`` before re-raising.
    """

    def __init__(self, point: tuple[int, ...], values: tuple[float, ...]) -> None:
        super().__init__(f"oracle failed at point {point} (values={values})")
        self.point = point
        self.values = values
        self.partial_result: DomainResult | None = None


class UnknownGateType(ExplorationError, ValueError):
    """A gate name does not resolve to a catalog entry."""

    def __init__(self, gate_type: str) -> None:
        super().__init__(f"Unknown gate type: {gate_type}")
        self.gate_type = gate_type

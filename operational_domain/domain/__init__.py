"""Domain layer: parameter space, samples, oracle seam, gate catalog, errors."""

from operational_domain.domain.errors import (
    BudgetExceeded,
    ExplorationError,
    InvalidDimension,
    InvalidSeed,
    OracleFailure,
    UnknownGateType,
    UnsupportedSpace,
)
from operational_domain.domain.gates import (
    GATE_CATALOG,
    GateSpec,
    TruthTable,
    discover_gates,
    gate_type_from_name,
    resolve_gate,
)
from operational_domain.domain.oracle import Oracle, OracleResponse, PredicateOracle
from operational_domain.domain.sample import Sample, Verdict
from operational_domain.domain.space import (
    Dimension,
    ParameterSpace,
    Point,
    SimulationParameters,
    SweepParameter,
)

__all__ = [
    "BudgetExceeded",
    "Dimension",
    "ExplorationError",
    "GATE_CATALOG",
    "GateSpec",
    "InvalidDimension",
    "InvalidSeed",
    "Oracle",
    "OracleFailure",
    "OracleResponse",
    "ParameterSpace",
    "Point",
    "PredicateOracle",
    "Sample",
    "SimulationParameters",
    "SweepParameter",
    "TruthTable",
    "UnknownGateType",
    "UnsupportedSpace",
    "Verdict",
    "discover_gates",
    "gate_type_from_name",
    "resolve_gate",
]

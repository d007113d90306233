"""Gate catalog: truth-table specifications resolved from gate names.

Gate layouts are named ``<type>_<variant>`` (``or_1``, ``wire2_long``); the
prefix before the first underscore selects the logic function.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from operational_domain.config.constants import LAYOUT_SUFFIX
from operational_domain.domain.errors import UnknownGateType


@dataclass(frozen=True)
class TruthTable:
    """Single-output truth table stored as a binary string, MSB first.

    Bit ``bits[-1 - i]`` is the output for input assignment index ``i``.
    """

    num_vars: int
    bits: str

    def __post_init__(self) -> None:
        if self.num_vars < 0:
            raise ValueError("num_vars must be >= 0")
        if len(self.bits) != 2**self.num_vars:
            raise ValueError(
                f"truth table over {self.num_vars} variables needs {2**self.num_vars} bits"
            )
        if set(self.bits) - {"0", "1"}:
            raise ValueError("truth table bits must be '0' or '1'")

    @classmethod
    def from_binary_string(cls, bits: str) -> TruthTable:
        num_vars = (len(bits) - 1).bit_length()
        return cls(num_vars=num_vars, bits=bits)

    def output(self, assignment: int) -> bool:
        if not 0 <= assignment < len(self.bits):
            raise ValueError(f"assignment must be in [0, {len(self.bits)})")
        return self.bits[-1 - assignment] == "1"


@dataclass(frozen=True)
class GateSpec:
    """Named logic specification; multi-output gates carry several tables."""

    name: str
    truth_tables: tuple[TruthTable, ...]

    @property
    def gate_type(self) -> str:
        return gate_type_from_name(self.name)


# Majority in the QCA-style input ordering used by the gate layouts.
_MAJ_QCA_STYLE = "00101011"

GATE_CATALOG: dict[str, tuple[TruthTable, ...]] = {
    "or": (TruthTable.from_binary_string("1110"),),
    "wire": (TruthTable.from_binary_string("10"),),
    "not": (TruthTable.from_binary_string("01"),),
    "wire2": (
        TruthTable.from_binary_string("1100"),
        TruthTable.from_binary_string("1010"),
    ),
    "maj": (TruthTable.from_binary_string(_MAJ_QCA_STYLE),),
}


def gate_type_from_name(name: str) -> str:
    """Return the catalog key for a gate name (prefix before the first ``_``)."""
    return name.split("_", 1)[0]


def resolve_gate(name: str) -> GateSpec:
    """Resolve ``name`` to a :class:`GateSpec`; raises :exc:`UnknownGateType`."""
    gate_type = gate_type_from_name(name)
    tables = GATE_CATALOG.get(gate_type)
    if tables is None:
        raise UnknownGateType(gate_type)
    return GateSpec(name=name, truth_tables=tables)


def discover_gates(folder: Path, suffix: str = LAYOUT_SUFFIX) -> list[tuple[GateSpec, Path]]:
    """List layout files in ``folder`` with their resolved gate specs, sorted by name."""
    folder = Path(folder)
    if not folder.is_dir():
        raise FileNotFoundError(f"gate folder not found: {folder}")
    entries: list[tuple[GateSpec, Path]] = []
    for path in sorted(folder.iterdir()):
        if not path.is_file() or path.suffix != suffix:
            continue
        entries.append((resolve_gate(path.stem), path))
    return entries

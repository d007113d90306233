"""CSV persistence for operational domains and critical-temperature pairs."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.csv as pacsv

from operational_domain.config.types import SampleWritingMode, WriteConfig
from operational_domain.exploration.result import DomainResult
from operational_domain.io.schemas import (
    CRITICAL_TEMPERATURE_SCHEMA,
    OPERATIONAL_STATUS_COLUMN,
    domain_schema,
)


def domain_table(result: DomainResult, config: WriteConfig | None = None) -> pa.Table:
    """Build one row per sample in visitation order: dimension values + verdict tag."""
    config = config or WriteConfig()
    schema = domain_schema(result.space)
    columns: dict[str, list[float | str]] = {name: [] for name in schema.names}
    for sample in result:
        if not sample.operational and config.writing_mode is SampleWritingMode.OPERATIONAL_ONLY:
            continue
        for label, value in zip(result.space.labels, sample.values, strict=True):
            columns[label].append(value)
        columns[OPERATIONAL_STATUS_COLUMN].append(
            config.operational_tag if sample.operational else config.non_operational_tag
        )
    return pa.Table.from_pydict(columns, schema=schema)


def write_operational_domain(
    result: DomainResult, path: Path, config: WriteConfig | None = None
) -> Path:
    """Write ``result`` as CSV to ``path`` (parent directories are created)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    pacsv.write_csv(domain_table(result, config), path)
    return path


def read_operational_domain(path: Path) -> pa.Table:
    """Read a domain CSV back, keeping the verdict tags as strings."""
    return pacsv.read_csv(
        path,
        convert_options=pacsv.ConvertOptions(
            column_types={OPERATIONAL_STATUS_COLUMN: pa.string()}
        ),
    )


def write_critical_temperature(path: Path, old_k: float, new_k: float) -> Path:
    """Write the old-vs-new critical temperature pair of one gate as CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pylist(
        [dict(zip(CRITICAL_TEMPERATURE_SCHEMA.names, (old_k, new_k), strict=True))],
        schema=CRITICAL_TEMPERATURE_SCHEMA,
    )
    pacsv.write_csv(table, path)
    return path

"""Persistence layer: Arrow schemas, output paths and CSV writers."""

from operational_domain.io.writer import (
    domain_table,
    read_operational_domain,
    write_critical_temperature,
    write_operational_domain,
)

__all__ = [
    "domain_table",
    "read_operational_domain",
    "write_critical_temperature",
    "write_operational_domain",
]

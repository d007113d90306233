"""CLI entrypoint for the old-vs-new operational-domain comparison.

Oracle physics, layout parsing and the critical-temperature model live
outside this package; the CLI receives them as importable ``module:attr``
references and hands them to :func:`run_comparison`.
"""

from __future__ import annotations

import argparse
import importlib
import json
import logging
from pathlib import Path

from operational_domain.config.constants import (
    CONTOUR_RANDOM_SAMPLES,
    DEFAULT_MU_MINUS,
    DEFAULT_SIM_BASE,
    FLOOD_FILL_RANDOM_SAMPLES,
)
from operational_domain.config.types import (
    ComparisonConfig,
    OperationalCondition,
    SampleWritingMode,
    WriteConfig,
    default_sweep,
)
from operational_domain.domain.space import Dimension, SweepParameter
from operational_domain.experiments.comparison import run_comparison

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


def _parse_sweep_parameter(raw: str) -> SweepParameter:
    try:
        return SweepParameter(raw.strip().lower())
    except ValueError as exc:
        valid = ", ".join(p.value for p in SweepParameter)
        raise ValueError(f"sweep parameter must be one of {valid}") from exc


def _parse_sweep(raw_sweep: str) -> tuple[Dimension, ...]:
    """Parse comma-delimited ``PARAM:MIN:MAX:STEP`` entries."""
    parts = [part.strip() for part in raw_sweep.split(",") if part.strip()]
    if not parts:
        raise ValueError("sweep must not be empty")

    dimensions: list[Dimension] = []
    for part in parts:
        tokens = part.split(":")
        if len(tokens) != 4:
            raise ValueError("sweep entries must use PARAM:MIN:MAX:STEP format")
        name, min_raw, max_raw, step_raw = tokens
        try:
            bounds = (float(min_raw), float(max_raw), float(step_raw))
        except ValueError as exc:
            raise ValueError("sweep bounds must be numbers") from exc
        dimensions.append(Dimension(_parse_sweep_parameter(name), *bounds))
    return tuple(dimensions)


def _parse_float_csv(raw_values: str, label: str) -> tuple[float, ...]:
    """Parse comma-delimited floats."""
    parts = [part.strip() for part in raw_values.split(",") if part.strip()]
    if not parts:
        raise ValueError(f"{label} must not be empty")
    try:
        return tuple(float(part) for part in parts)
    except ValueError as exc:
        raise ValueError(f"{label} must contain numbers") from exc


def _parse_operational_condition(raw: str) -> OperationalCondition:
    try:
        return OperationalCondition(raw)
    except ValueError as exc:
        valid = ", ".join(c.value for c in OperationalCondition)
        raise ValueError(f"operational-condition must be one of {valid}") from exc


def _parse_writing_mode(raw: str) -> SampleWritingMode:
    try:
        return SampleWritingMode(raw)
    except ValueError as exc:
        valid = ", ".join(m.value for m in SampleWritingMode)
        raise ValueError(f"writing-mode must be one of {valid}") from exc


def _import_ref(ref: str, label: str) -> object:
    """Resolve a ``package.module:attribute`` reference."""
    module_name, sep, attr_path = ref.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"{label} must use module:attribute format, got {ref!r}")
    try:
        target: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise ValueError(f"{label}: cannot import {module_name}") from exc
    for attr in attr_path.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise ValueError(f"{label}: {module_name} has no attribute {attr_path}") from exc
    if not callable(target):
        raise ValueError(f"{label}: {ref} is not callable")
    return target


def _load_layout_path(path: Path) -> Path:
    """Default layout loader: hand the layout file path to the oracle factory."""
    return path


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_str(raw: object, key: str) -> str:
    """Coerce raw value to str; list values (e.g. mus, sweep) are comma-joined."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a string-coercible value")
    if isinstance(raw, (list, tuple)):
        return ",".join(_coerce_str(item, key) for item in raw)
    if isinstance(raw, (str, Path, int, float)):
        return str(raw)
    raise ValueError(f"{key} must be a string-coercible value")


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _get_bool(cli_val: bool | None, key: str, file_cfg: dict[str, object], default: bool) -> bool:
    """CLI > file > default resolution for boolean flags."""
    return _coerce_bool(_get_val(cli_val, key, file_cfg, default), key)


def _get_int(cli_val: int | None, key: str, file_cfg: dict[str, object], default: int) -> int:
    """CLI > file > default resolution for integer values."""
    return _coerce_int(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_int(
    cli_val: int | None, key: str, file_cfg: dict[str, object]
) -> int | None:
    """Like ``_get_int`` but unset values stay None."""
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_int(raw, key)


def _get_str(cli_val: str | None, key: str, file_cfg: dict[str, object], default: str) -> str:
    """CLI > file > default resolution for string values."""
    return _coerce_str(_get_val(cli_val, key, file_cfg, default), key)


def _get_optional_str(
    cli_val: str | None, key: str, file_cfg: dict[str, object]
) -> str | None:
    """Like ``_get_str`` but unset values stay None."""
    raw = _get_val(cli_val, key, file_cfg, None)
    return None if raw is None else _coerce_str(raw, key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Compare operational domains under old and new physical parameters"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--gates-dir", type=Path, default=None)
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument(
        "--oracle", type=str, default=None, help="module:attr of the oracle factory"
    )
    parser.add_argument(
        "--layout-loader", type=str, default=None, help="module:attr of the layout loader"
    )
    parser.add_argument(
        "--critical-temperature",
        type=str,
        default=None,
        help="module:attr of the critical-temperature service",
    )
    parser.add_argument(
        "--sweep",
        type=str,
        default=None,
        help="comma-separated PARAM:MIN:MAX:STEP entries",
    )
    parser.add_argument(
        "--mus",
        type=str,
        default=None,
        help="comma-separated mu_minus values (write --mus=-0.32,... for negatives)",
    )
    parser.add_argument("--base", type=int, default=None)
    parser.add_argument(
        "--operational-condition",
        type=str,
        choices=[c.value for c in OperationalCondition],
        default=None,
    )
    parser.add_argument("--contour-samples", type=int, default=None)
    parser.add_argument("--flood-fill-samples", type=int, default=None)
    parser.add_argument("--max-evaluations", type=int, default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--writing-mode",
        type=str,
        choices=[m.value for m in SampleWritingMode],
        default=None,
    )
    parser.add_argument("--plot", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--verbose", action=argparse.BooleanOptionalAction, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for the comparison run.

    Supports ``--config path/to/config.json`` for reproducibility. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    verbose = _get_bool(args.verbose, "verbose", file_cfg, False)
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        oracle_ref = _get_optional_str(args.oracle, "oracle", file_cfg)
        if oracle_ref is None:
            parser.error("an oracle factory is required (--oracle module:attr)")
        oracle_factory = _import_ref(oracle_ref, "oracle")
        loader_ref = _get_optional_str(args.layout_loader, "layout_loader", file_cfg)
        layout_loader = (
            _import_ref(loader_ref, "layout-loader") if loader_ref else _load_layout_path
        )
        ct_ref = _get_optional_str(args.critical_temperature, "critical_temperature", file_cfg)
        critical_temperature = _import_ref(ct_ref, "critical-temperature") if ct_ref else None

        sweep_raw = _get_optional_str(args.sweep, "sweep", file_cfg)
        sweep = _parse_sweep(sweep_raw) if sweep_raw is not None else default_sweep()
        mus = _parse_float_csv(
            _get_str(args.mus, "mus", file_cfg, str(DEFAULT_MU_MINUS)), "mus"
        )
        write = WriteConfig(
            writing_mode=_parse_writing_mode(
                _get_str(
                    args.writing_mode,
                    "writing_mode",
                    file_cfg,
                    SampleWritingMode.ALL_SAMPLES.value,
                )
            )
        )
        config = ComparisonConfig(
            gates_dir=Path(_get_str(args.gates_dir, "gates_dir", file_cfg, "gates")),
            out_dir=Path(_get_str(args.out_dir, "out_dir", file_cfg, "data")),
            mus=mus,
            sweep=sweep,
            base=_get_int(args.base, "base", file_cfg, DEFAULT_SIM_BASE),
            operational_condition=_parse_operational_condition(
                _get_str(
                    args.operational_condition,
                    "operational_condition",
                    file_cfg,
                    OperationalCondition.TOLERATE_KINKS.value,
                )
            ),
            contour_random_samples=_get_int(
                args.contour_samples, "contour_samples", file_cfg, CONTOUR_RANDOM_SAMPLES
            ),
            flood_fill_random_samples=_get_int(
                args.flood_fill_samples,
                "flood_fill_samples",
                file_cfg,
                FLOOD_FILL_RANDOM_SAMPLES,
            ),
            max_evaluations=_get_optional_int(args.max_evaluations, "max_evaluations", file_cfg),
            max_workers=_get_int(args.workers, "workers", file_cfg, 1),
            rng_seed=_get_int(args.seed, "seed", file_cfg, 0),
            write=write,
            plot=_get_bool(args.plot, "plot", file_cfg, False),
        )
    except ValueError as exc:
        parser.error(str(exc))

    table = run_comparison(
        config,
        oracle_factory,
        layout_loader,
        critical_temperature=critical_temperature,
    )
    rows = table.rows
    summary = {
        "gates": sorted({str(row["gate"]) for row in rows}),
        "mus": list(config.mus),
        "rows": len(rows),
        "contour_samples": sum(int(row["ct_samples"]) for row in rows),
        "flood_fill_samples": sum(int(row["ff_samples"]) for row in rows),
        "partial_runs": sum(bool(row["ct_partial"]) + bool(row["ff_partial"]) for row in rows),
        "out_dir": str(config.out_dir),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()

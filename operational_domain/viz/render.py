"""Heatmap figures of two-dimensional operational domains.

Operational samples are drawn in the operational colour, non-operational
ones in the boundary colour, unvisited grid cells stay blank. Traced
contours are overlaid as lines.
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import numpy as np

from operational_domain.domain.errors import UnsupportedSpace
from operational_domain.exploration.result import DomainResult

logger = logging.getLogger(__name__)

OPERATIONAL_COLOR = "#2a9d8f"
NON_OPERATIONAL_COLOR = "#e76f51"
UNVISITED_COLOR = "#f0f0f0"
CONTOUR_COLOR = "#264653"


def build_verdict_matrix(result: DomainResult) -> np.ndarray:
    """Return an array shaped (levels of dim 1, levels of dim 0).

    Cells hold 1.0 for operational, 0.0 for non-operational and NaN when
    the point was never sampled.
    """
    if result.space.ndim != 2:
        raise UnsupportedSpace(f"can only render 2-D domains, got {result.space.ndim}-D")
    width, height = result.space.shape
    matrix = np.full((height, width), np.nan)
    for sample in result:
        x, y = sample.point
        matrix[y, x] = 1.0 if sample.operational else 0.0
    return matrix


def plot_domain_panel(ax: plt.Axes, result: DomainResult, title: str | None = None) -> None:
    """Draw one domain heatmap (plus contours) on *ax*."""
    matrix = build_verdict_matrix(result)
    dim_x, dim_y = result.space.dimensions
    cmap = mcolors.ListedColormap([NON_OPERATIONAL_COLOR, OPERATIONAL_COLOR]).with_extremes(
        bad=UNVISITED_COLOR
    )
    extent = (
        dim_x.min - dim_x.step / 2,
        dim_x.value(dim_x.levels - 1) + dim_x.step / 2,
        dim_y.min - dim_y.step / 2,
        dim_y.value(dim_y.levels - 1) + dim_y.step / 2,
    )
    ax.imshow(
        np.ma.masked_invalid(matrix),
        origin="lower",
        aspect="auto",
        cmap=cmap,
        vmin=0.0,
        vmax=1.0,
        extent=extent,
        interpolation="nearest",
    )
    for contour in result.contours:
        if len(contour) < 2:
            continue
        xs = [dim_x.value(p[0]) for p in (*contour, contour[0])]
        ys = [dim_y.value(p[1]) for p in (*contour, contour[0])]
        ax.plot(xs, ys, color=CONTOUR_COLOR, linewidth=1.0)

    ax.set_xlabel(dim_x.label)
    ax.set_ylabel(dim_y.label)
    stats = result.statistics
    subtitle = (
        f"{stats.evaluated_count} samples, {stats.operational_fraction:.1%} operational"
        + (" (partial)" if result.partial else "")
    )
    ax.set_title(f"{title}\n{subtitle}" if title else subtitle)


def render_operational_domain(
    result: DomainResult, out_path: Path, title: str | None = None
) -> Path:
    """Save a standalone figure of ``result`` to ``out_path``."""
    fig, ax = plt.subplots(figsize=(5, 4))
    plot_domain_panel(ax, result, title or result.strategy.value.replace("_", " "))
    fig.tight_layout()
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    logger.info("saved domain figure %s", out_path)
    return out_path


def render_comparison(
    results: list[DomainResult], out_path: Path, titles: list[str] | None = None
) -> Path:
    """Save a 1xN panel figure, one panel per domain (e.g. contour vs flood fill)."""
    if not results:
        raise ValueError("render_comparison needs at least one result")
    if titles is not None and len(titles) != len(results):
        raise ValueError("titles must match results")
    fig, axes = plt.subplots(
        1, len(results), figsize=(5 * len(results), 4), squeeze=False, constrained_layout=True
    )
    for index, (ax, result) in enumerate(zip(axes[0], results, strict=True)):
        title = titles[index] if titles is not None else result.strategy.value.replace("_", " ")
        plot_domain_panel(ax, result, title)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    logger.info("saved comparison figure %s", out_path)
    return out_path

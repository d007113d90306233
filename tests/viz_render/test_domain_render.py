"""Tests for viz/render.py."""

from __future__ import annotations

import math
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.colors as mcolors  # noqa: E402
import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from operational_domain.domain.errors import UnsupportedSpace  # noqa: E402
from operational_domain.domain.gates import GateSpec  # noqa: E402
from operational_domain.domain.oracle import PredicateOracle  # noqa: E402
from operational_domain.domain.space import (  # noqa: E402
    ParameterSpace,
    SimulationParameters,
    SweepParameter,
)
from operational_domain.exploration.contour import contour_tracing  # noqa: E402
from operational_domain.exploration.flood_fill import flood_fill  # noqa: E402
from operational_domain.viz.render import (  # noqa: E402
    UNVISITED_COLOR,
    build_verdict_matrix,
    plot_domain_panel,
    render_comparison,
    render_operational_domain,
)


def test_matrix_marks_unvisited_as_nan(
    grid_3x3: ParameterSpace,
    product_oracle: PredicateOracle,
    gate_spec: GateSpec,
    params: SimulationParameters,
) -> None:
    result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
    matrix = build_verdict_matrix(result)
    assert matrix.shape == (3, 3)
    # Rows follow dimension 1, columns dimension 0.
    assert matrix[0, 2] == 1.0
    assert matrix[1, 2] == 0.0
    assert math.isnan(matrix[2, 2])


def test_matrix_rejects_non_2d(
    product_oracle: PredicateOracle, gate_spec: GateSpec, params: SimulationParameters
) -> None:
    line = ParameterSpace.from_bounds([(SweepParameter.EPSILON_R, 1.0, 2.0, 0.5)])
    result = flood_fill(line, product_oracle, gate_spec, params, seeds=[(0,)])
    with pytest.raises(UnsupportedSpace):
        build_verdict_matrix(result)


@pytest.mark.filterwarnings("error::PendingDeprecationWarning")
def test_panel_colormap_marks_unvisited_cells(
    grid_3x3: ParameterSpace,
    product_oracle: PredicateOracle,
    gate_spec: GateSpec,
    params: SimulationParameters,
) -> None:
    result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
    fig, ax = plt.subplots()
    try:
        plot_domain_panel(ax, result, title="or_1")
        cmap = ax.images[0].get_cmap()
        assert mcolors.same_color(cmap.get_bad(), UNVISITED_COLOR)
    finally:
        plt.close(fig)


def test_render_single_domain(
    tmp_path: Path,
    grid_3x3: ParameterSpace,
    product_oracle: PredicateOracle,
    gate_spec: GateSpec,
    params: SimulationParameters,
) -> None:
    result = contour_tracing(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
    path = render_operational_domain(result, tmp_path / "figs" / "domain.png", title="or_1")
    assert path.exists()
    assert path.stat().st_size > 0


def test_render_comparison_panels(
    tmp_path: Path,
    grid_3x3: ParameterSpace,
    product_oracle: PredicateOracle,
    gate_spec: GateSpec,
    params: SimulationParameters,
) -> None:
    results = [
        contour_tracing(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)]),
        flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)]),
    ]
    path = render_comparison(results, tmp_path / "comparison.png")
    assert path.exists()


def test_render_comparison_validates_titles(
    tmp_path: Path,
    grid_3x3: ParameterSpace,
    product_oracle: PredicateOracle,
    gate_spec: GateSpec,
    params: SimulationParameters,
) -> None:
    result = flood_fill(grid_3x3, product_oracle, gate_spec, params, seeds=[(0, 0)])
    with pytest.raises(ValueError, match="titles"):
        render_comparison([result], tmp_path / "x.png", titles=["a", "b"])
    with pytest.raises(ValueError):
        render_comparison([], tmp_path / "x.png")

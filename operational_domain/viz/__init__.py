"""Visualization layer: operational-domain heatmaps."""

from operational_domain.viz.render import (
    build_verdict_matrix,
    plot_domain_panel,
    render_comparison,
    render_operational_domain,
)

__all__ = [
    "build_verdict_matrix",
    "plot_domain_panel",
    "render_comparison",
    "render_operational_domain",
]

"""
Visualization module for severity index charts.
"""

from .chart_spec import (
    build_chart,
    resolve_band_labels,
    resolve_legend_labels,
    resolve_band_colors,
    resolve_categories,
    resolve_category_labels,
)
from .renderers import render_chart, render_matplotlib, render_plotly

__all__ = [
    'build_chart',
    'resolve_band_labels',
    'resolve_legend_labels',
    'resolve_band_colors',
    'resolve_categories',
    'resolve_category_labels',
    'render_chart',
    'render_matplotlib',
    'render_plotly',
]

"""
Models module for Index Chart.

Contains enums, chart configuration and chart description data models.
"""

from .data_models import (
    Band,
    IndexType,
    Geometry,
    ChartConfig,
    AxisSpec,
    SeriesSpec,
    ChartDescription,
    IndexChartResult,
    validate_index_max,
)

__all__ = [
    'Band',
    'IndexType',
    'Geometry',
    'ChartConfig',
    'AxisSpec',
    'SeriesSpec',
    'ChartDescription',
    'IndexChartResult',
    'validate_index_max',
]

"""
Index Chart - weighted severity-index charts for survey microdata.

This package turns record-level survey data into per-group severity
distributions and draws them as:
- Stacked horizontal bar charts (one bar per group, one segment per band)
- Line charts (one line per group across the severity bands)

for 4-band indices (1-4) and 5-band indices with a "4+" overflow band,
with MSNI-style numbered labels or generic LSG labels.
"""

__version__ = "1.0.0"
__author__ = "Index Chart Team"

# Core imports
from .core.config import *
from .core.exceptions import IndexChartError, InvalidConfigError, WeightMismatchError
from .core.utils import format_percent, setup_logging, validate_columns

# Models
from .models import (
    Band,
    IndexType,
    Geometry,
    ChartConfig,
    AxisSpec,
    SeriesSpec,
    ChartDescription,
    IndexChartResult,
)

# Aggregation
from .aggregation import BandAggregator, aggregate_bands, summarize_bands

# Visualization
from .visualization import build_chart, render_chart, render_matplotlib, render_plotly

# Reports
from .reports import export_pdf

# Pipeline
from .pipeline import IndexChartPipeline, index_chart

__all__ = [
    # Core
    'IndexChartError',
    'InvalidConfigError',
    'WeightMismatchError',
    'format_percent',
    'setup_logging',
    'validate_columns',

    # Models
    'Band',
    'IndexType',
    'Geometry',
    'ChartConfig',
    'AxisSpec',
    'SeriesSpec',
    'ChartDescription',
    'IndexChartResult',

    # Aggregation
    'BandAggregator',
    'aggregate_bands',
    'summarize_bands',

    # Visualization
    'build_chart',
    'render_chart',
    'render_matplotlib',
    'render_plotly',

    # Reports
    'export_pdf',

    # Pipeline
    'IndexChartPipeline',
    'index_chart',

    # Metadata
    '__version__',
]

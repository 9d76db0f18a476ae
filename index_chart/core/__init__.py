"""
Core module for Index Chart.

Contains configuration, exceptions and base utilities.
"""

from index_chart.core.config import *
from index_chart.core.exceptions import IndexChartError, InvalidConfigError, WeightMismatchError
from index_chart.core.utils import validate_columns, is_missing, format_percent, setup_logging

__all__ = [
    # Exceptions
    'IndexChartError',
    'InvalidConfigError',
    'WeightMismatchError',
    # Utils
    'validate_columns',
    'is_missing',
    'format_percent',
    'setup_logging',
]

"""
Pipeline module for Index Chart.

Contains the one-call ``index_chart()`` entry point and its configurable
pipeline class.
"""

from .orchestrator import IndexChartPipeline, index_chart

__all__ = [
    'IndexChartPipeline',
    'index_chart',
]

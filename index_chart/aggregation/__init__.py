"""
Aggregation module for Index Chart.

Provides the weighted band aggregator that turns record-level severity
scores into per-group, per-band percentages.
"""

from .band_aggregator import (
    BandAggregator,
    aggregate_bands,
    summarize_bands,
    resolve_weights,
)

__all__ = [
    'BandAggregator',
    'aggregate_bands',
    'summarize_bands',
    'resolve_weights',
]

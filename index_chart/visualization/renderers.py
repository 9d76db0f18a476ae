"""
Renderers for severity chart descriptions.

Two backends draw the same ``ChartDescription``:

    render_matplotlib()  static figure (seaborn "whitegrid" style) used for
                         PDF export and notebooks.
    render_plotly()      interactive ``go.Figure`` for dashboards, using the
                         'plotly_white' template.

Neither backend makes any severity-specific decision: colours, labels,
ordering and orientation all come from the description.

Design Pattern:
    1. Size the figure from the number of groups.
    2. Draw series in the order given (bar: stack order, line: group order).
    3. Apply category / band tick labels and the percent value axis.
    4. Order the legend by ``description.legend_order``.
"""

import logging

import numpy as np
import plotly.graph_objects as go
import seaborn as sns
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from ..core.config import (
    PDF_WIDTH_IN, FIGURE_HEIGHT_PER_GROUP, MIN_FIGURE_HEIGHT, LINE_WIDTH, BAR_HEIGHT,
    PLOTLY_TEMPLATE, PLOTLY_HEIGHT_PER_GROUP, PLOTLY_MIN_HEIGHT,
    RENDER_BACKENDS, DEFAULT_RENDER_BACKEND,
)
from ..core.exceptions import InvalidConfigError
from ..core.utils import format_percent
from ..models.data_models import Band, ChartDescription

logger = logging.getLogger(__name__)


def _key_value(key):
    return key.value if isinstance(key, Band) else key


def figure_height(description: ChartDescription) -> float:
    """On-screen figure height in inches, growing with the number of groups."""
    return max(MIN_FIGURE_HEIGHT, description.n_groups * FIGURE_HEIGHT_PER_GROUP)


# ============================================================================
# MATPLOTLIB
# ============================================================================

def _percent_formatter():
    return FuncFormatter(lambda value, _: format_percent(value))


def _ordered_legend(ax, handles_by_key, legend_order):
    handles = [handles_by_key[k] for k in legend_order if k in handles_by_key]
    if handles:
        ax.legend(handles=handles, labels=[h.get_label() for h in handles],
                  frameon=False, loc='center left', bbox_to_anchor=(1.0, 0.5))


def _draw_stacked_bars(ax, description: ChartDescription):
    positions = np.arange(description.n_groups)
    left = np.zeros(description.n_groups)
    handles = {}

    for series in description.series:
        widths = np.asarray(series.y, dtype=float)
        container = ax.barh(positions, widths, left=left, height=BAR_HEIGHT,
                            color=series.color, label=series.label)
        handles[series.key] = container
        # NaN segments draw nothing; later segments start after the last drawn one
        left = left + np.nan_to_num(widths)

    ax.set_yticks(positions)
    ax.set_yticklabels(description.category_axis.tick_labels)
    ax.xaxis.set_major_formatter(_percent_formatter())
    ax.grid(axis='y', visible=False)
    _ordered_legend(ax, handles, description.legend_order)


def _draw_lines(ax, description: ChartDescription):
    positions = np.arange(len(description.bands))
    handles = {}

    for series in description.series:
        (line,) = ax.plot(positions, np.asarray(series.y, dtype=float),
                          color=series.color, linewidth=LINE_WIDTH, label=series.label)
        handles[series.key] = line

    ax.set_xticks(positions)
    ax.set_xticklabels(description.category_axis.tick_labels)
    ax.yaxis.set_major_formatter(_percent_formatter())
    _ordered_legend(ax, handles, description.legend_order)


def render_matplotlib(description: ChartDescription, figsize=None) -> Figure:
    """
    Draw a description as a matplotlib figure.

    The figure is created through ``matplotlib.figure.Figure`` rather than
    ``pyplot`` so rendering never touches global figure state; callers own
    the returned object.

    Args:
        description: Chart to draw.
        figsize: Optional ``(width, height)`` in inches.

    Returns:
        matplotlib.figure.Figure
    """
    if figsize is None:
        figsize = (PDF_WIDTH_IN, figure_height(description))

    with sns.axes_style("whitegrid"):
        fig = Figure(figsize=figsize)
        ax = fig.add_subplot(111)

    if description.is_bar:
        _draw_stacked_bars(ax, description)
    else:
        _draw_lines(ax, description)

    ax.set_xlabel("")
    ax.set_ylabel("")
    sns.despine(ax=ax, left=True, bottom=True)
    fig.tight_layout()

    logger.info(f"[Render] matplotlib {description.geometry.value} chart, {description.n_groups} groups")
    return fig


# ============================================================================
# PLOTLY
# ============================================================================

def render_plotly(description: ChartDescription) -> go.Figure:
    """
    Draw a description as an interactive Plotly figure.

    Bars are added in stack order with ``barmode='stack'`` and the legend is
    reversed so it lists the most severe band first, matching
    ``description.legend_order``.
    """
    fig = go.Figure()
    # Positional keys keep distinct groups apart even when their text matches
    positions = list(range(description.n_groups))

    if description.is_bar:
        for series in description.series:
            fig.add_trace(go.Bar(
                x=list(series.y),
                y=positions,
                orientation='h',
                name=series.label,
                marker_color=series.color,
                hovertemplate='%{x:.1f}%<extra>' + series.label + '</extra>',
            ))
        fig.update_layout(barmode='stack', legend=dict(traceorder='reversed'))
        fig.update_xaxes(ticksuffix='%', tickformat='.0f', title_text='')
        fig.update_yaxes(
            tickmode='array',
            tickvals=positions,
            ticktext=list(description.category_axis.tick_labels),
            title_text='',
        )
        height = max(PLOTLY_MIN_HEIGHT, description.n_groups * PLOTLY_HEIGHT_PER_GROUP)
    else:
        band_keys = [_key_value(b) for b in description.bands]
        for series in description.series:
            fig.add_trace(go.Scatter(
                x=band_keys,
                y=list(series.y),
                mode='lines',
                name=series.label,
                line=dict(color=series.color, width=LINE_WIDTH),
                hovertemplate='%{y:.1f}%<extra>' + series.label + '</extra>',
            ))
        fig.update_xaxes(
            tickmode='array',
            tickvals=band_keys,
            ticktext=list(description.category_axis.tick_labels),
            title_text='',
        )
        fig.update_yaxes(ticksuffix='%', tickformat='.0f', title_text='')
        height = PLOTLY_MIN_HEIGHT

    fig.update_layout(
        template=PLOTLY_TEMPLATE,
        height=height,
        legend_title_text=description.legend_title,
        margin=dict(l=40, r=20, t=20, b=40),
    )

    logger.info(f"[Render] plotly {description.geometry.value} chart, {description.n_groups} groups")
    return fig


def render_chart(description: ChartDescription, backend: str = DEFAULT_RENDER_BACKEND):
    """Dispatch to the requested backend ('matplotlib' or 'plotly')."""
    if backend == "matplotlib":
        return render_matplotlib(description)
    if backend == "plotly":
        return render_plotly(description)
    raise InvalidConfigError(f"backend must be one of {RENDER_BACKENDS}, got {backend!r}")

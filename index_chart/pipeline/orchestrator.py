"""
Pipeline Orchestrator - one-call severity chart generation.

Wires the weighted band aggregator, the chart spec builder, a renderer and
(optionally) the PDF exporter into a single sequential flow:

::

    [record-level DataFrame]
         |
         v
    aggregate()  --> long frame (group, band, percent)
         |
         v
    describe()   --> ChartDescription (labels, colours, ordering, geometry)
         |
         v
    render()     --> matplotlib Figure / Plotly go.Figure
         |
         v
    export()     --> <plot_name>.pdf   (only when print_plot=True)

Each step is a pure function of its inputs except ``export``, which is the
only step that writes to disk and is skipped unless explicitly requested.
"""

import logging
from typing import Optional, Sequence

import pandas as pd

from ..aggregation.band_aggregator import BandAggregator, WeightingFunction
from ..core.config import (
    DEFAULT_GROUP_COL, DEFAULT_INDEX_COL, DEFAULT_INDEX_MAX, DEFAULT_INDEX_TYPE,
    DEFAULT_PLOT_NAME, DEFAULT_RENDER_BACKEND,
)
from ..models.data_models import ChartConfig, ChartDescription, IndexChartResult
from ..reports.export import export_pdf
from ..visualization.chart_spec import build_chart
from ..visualization.renderers import render_chart

logger = logging.getLogger(__name__)


class IndexChartPipeline:
    """
    Configured aggregation -> description -> figure -> PDF flow.

    Typical usage
    -------------
    ::

        pipe = IndexChartPipeline(group="pop_group", index="msni", index_max=5)
        result = pipe.run(df)                     # IndexChartResult
        pipe.export(result.figure, height=result.n_groups)

    Attributes:
        aggregator (BandAggregator): Bound aggregation options.
        config (ChartConfig): Chart options.
        backend (str): 'matplotlib' or 'plotly'.
    """

    def __init__(self, group: str = DEFAULT_GROUP_COL, index: str = DEFAULT_INDEX_COL,
                 index_max: int = DEFAULT_INDEX_MAX, index_type: str = DEFAULT_INDEX_TYPE,
                 group_order: Optional[Sequence] = None, group_labels: Optional[Sequence[str]] = None,
                 weighting_function: Optional[WeightingFunction] = None, bar_graph: bool = True,
                 plot_name: str = DEFAULT_PLOT_NAME, path=None,
                 backend: str = DEFAULT_RENDER_BACKEND):
        self.config = ChartConfig.from_options(
            index_max=index_max,
            index_type=index_type,
            bar_graph=bar_graph,
            group_order=group_order,
            group_labels=group_labels,
        )
        self.aggregator = BandAggregator(group=group, index=index, index_max=index_max,
                                         weighting_function=weighting_function)
        self.plot_name = plot_name
        self.path = path
        self.backend = backend

    @property
    def group(self) -> str:
        return self.aggregator.group

    def aggregate(self, df: pd.DataFrame) -> pd.DataFrame:
        return self.aggregator.aggregate(df)

    def describe(self, data: pd.DataFrame) -> ChartDescription:
        return build_chart(data, self.config, group=self.group)

    def render(self, description: ChartDescription):
        return render_chart(description, backend=self.backend)

    def export(self, figure, height: float):
        return export_pdf(figure, plot_name=self.plot_name, path=self.path, height=height)

    def count_groups(self, data: pd.DataFrame) -> int:
        """Distinct groups among non-missing records (sets the PDF height)."""
        return int(data[self.group].nunique(dropna=False))

    def run(self, df: pd.DataFrame, print_plot: bool = False) -> IndexChartResult:
        """
        Run every step and return the collected outputs.

        Args:
            df: Record-level data.
            print_plot: Write ``<plot_name>.pdf`` after rendering.

        Returns:
            IndexChartResult
        """
        data = self.aggregate(df)
        description = self.describe(data)
        figure = self.render(description)
        n_groups = self.count_groups(data)

        output_path = None
        if print_plot:
            output_path = self.export(figure, height=n_groups)

        return IndexChartResult(
            data=data,
            description=description,
            figure=figure,
            output_path=output_path,
            n_groups=n_groups,
        )


def index_chart(df: pd.DataFrame,
                group: str = DEFAULT_GROUP_COL,
                group_order: Optional[Sequence] = None,
                group_labels: Optional[Sequence[str]] = None,
                index: str = DEFAULT_INDEX_COL,
                index_max: int = DEFAULT_INDEX_MAX,
                index_type: str = DEFAULT_INDEX_TYPE,
                weighting_function: Optional[WeightingFunction] = None,
                bar_graph: bool = True,
                print_plot: bool = False,
                plot_name: str = DEFAULT_PLOT_NAME,
                path=None,
                backend: str = DEFAULT_RENDER_BACKEND) -> IndexChartResult:
    """
    Create a chart of severity scores for MSNI or other indices, stacked bar or line.

    Args:
        df: Record-level survey data.
        group: Column to group data by, e.g. population type.
        group_order: Values to order groups by; alphabetical when None.
            Groups not listed are left out of the chart.
        group_labels: Display labels for the ordered groups.
        index: Column holding the scoring index.
        index_max: Maximum value the index can take, 4 or 5.
        index_type: "msni" for numbered labels; anything else ("lsg", ...)
            uses the generic labels.
        weighting_function: ``records -> weights`` used to weight the data.
        bar_graph: Stacked bar chart when True, line chart when False.
        print_plot: Save the chart as ``<plot_name>.pdf``.
        plot_name: File name for the saved chart.
        path: Directory for the saved chart; current directory when None.
        backend: 'matplotlib' (default, required for PDF export) or 'plotly'.

    Returns:
        IndexChartResult: aggregated data, description, figure and PDF path.
    """
    logger.info(f"[Pipeline] index_chart: group='{group}', index='{index}', "
                f"index_max={index_max}, bar_graph={bar_graph}")
    pipeline = IndexChartPipeline(
        group=group,
        index=index,
        index_max=index_max,
        index_type=index_type,
        group_order=group_order,
        group_labels=group_labels,
        weighting_function=weighting_function,
        bar_graph=bar_graph,
        plot_name=plot_name,
        path=path,
        backend=backend,
    )
    return pipeline.run(df, print_plot=print_plot)

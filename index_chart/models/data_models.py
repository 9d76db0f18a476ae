"""
Data models for severity index charts.

This module defines the **schema layer** for the index chart package.  The
aggregation step itself works on ``pandas.DataFrame`` columns (for speed and
because the group / index column names are only known at call time); the
types here describe the configuration going in and the chart description
coming out.

Type overview
-------------
::

    Band
        Ordered severity band of the index: "1".."4" plus the "4+"
        overflow band used by 5-band indices.

    IndexType
        Which label set to use.  ``msni`` gets numbered labels; ``lsg`` and
        any unrecognised value fall back to the generic label set.

    Geometry
        Stacked horizontal bar or multi-series line.

    ChartConfig
        Caller-owned, read-only chart options.

    AxisSpec / SeriesSpec / ChartDescription
        Renderer-agnostic description of the chart produced by
        ``visualization.chart_spec.build_chart``.

    IndexChartResult
        Container returned by the one-call pipeline: aggregated data,
        description, rendered figure and (optional) export path.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..core.config import SUPPORTED_INDEX_MAX, DEFAULT_INDEX_MAX
from ..core.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


# ============================================================================
# ENUMS
# ============================================================================

class Band(str, Enum):
    """
    Ordered severity band.

    Members compare equal to their string values, so a ``band`` column in
    the aggregated frame can hold either ``Band`` members or plain strings.
    Definition order is the severity order (low to high).
    """
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FOUR_PLUS = "4+"

    @property
    def rank(self) -> int:
        """Position of the band in severity order (0 = least severe)."""
        return list(Band).index(self)

    @property
    def is_overflow(self) -> bool:
        return self is Band.FOUR_PLUS

    @classmethod
    def for_index_max(cls, index_max: int) -> Tuple['Band', ...]:
        """Bands emitted for an index topping out at ``index_max`` (low to high)."""
        validate_index_max(index_max)
        if index_max == 5:
            return tuple(cls)
        return tuple(b for b in cls if not b.is_overflow)


class IndexType(Enum):
    """
    Label set selector.

    Only ``"msni"`` has its own labels.  ``"lsg"`` and every unrecognised
    string resolve to the generic set; ``from_value`` never raises.
    """
    MSNI = "msni"
    LSG = "lsg"
    OTHER = "other"

    @classmethod
    def from_value(cls, value) -> 'IndexType':
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        logger.debug(f"[Models] Unrecognised index_type {value!r}, using generic labels")
        return cls.OTHER

    @property
    def uses_numbered_labels(self) -> bool:
        return self is IndexType.MSNI


class Geometry(Enum):
    """Chart shape."""
    BAR = "bar"
    LINE = "line"

    @classmethod
    def from_value(cls, value) -> 'Geometry':
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigError(
                f"geometry must be one of {[g.value for g in cls]}, got {value!r}"
            ) from None

    @classmethod
    def from_bar_graph(cls, bar_graph: bool) -> 'Geometry':
        return cls.BAR if bar_graph else cls.LINE


def validate_index_max(index_max) -> int:
    """Return ``index_max`` if supported, otherwise raise ``InvalidConfigError``."""
    if isinstance(index_max, bool) or index_max not in SUPPORTED_INDEX_MAX:
        raise InvalidConfigError(
            f"index_max must be one of {SUPPORTED_INDEX_MAX}, got {index_max!r}"
        )
    return int(index_max)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass(frozen=True)
class ChartConfig:
    """
    Chart options.

    Attributes:
        index_max: Maximum index value, 4 or 5.  5 adds the "4+" band.
        index_type: Label set (``IndexType`` or its string value).
        geometry: ``Geometry.BAR`` or ``Geometry.LINE`` (or their values).
        group_order: Explicit category order.  Groups not listed are dropped.
        group_labels: Display labels applied positionally to the resolved
            categories.
    """
    index_max: int = DEFAULT_INDEX_MAX
    index_type: IndexType = IndexType.MSNI
    geometry: Geometry = Geometry.BAR
    group_order: Optional[Tuple[Any, ...]] = None
    group_labels: Optional[Tuple[str, ...]] = None

    def __post_init__(self):
        validate_index_max(self.index_max)
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'index_type', IndexType.from_value(self.index_type))
        object.__setattr__(self, 'geometry', Geometry.from_value(self.geometry))
        if self.group_order is not None:
            object.__setattr__(self, 'group_order', tuple(self.group_order))
        if self.group_labels is not None:
            object.__setattr__(self, 'group_labels', tuple(self.group_labels))

    @classmethod
    def from_options(cls, index_max=DEFAULT_INDEX_MAX, index_type="msni", bar_graph=True,
                     group_order=None, group_labels=None) -> 'ChartConfig':
        """Build a config from the loose keyword options of ``index_chart()``."""
        return cls(
            index_max=index_max,
            index_type=IndexType.from_value(index_type),
            geometry=Geometry.from_bar_graph(bar_graph),
            group_order=group_order,
            group_labels=group_labels,
        )

    @property
    def bands(self) -> Tuple[Band, ...]:
        return Band.for_index_max(self.index_max)


# ============================================================================
# CHART DESCRIPTION
# ============================================================================

@dataclass(frozen=True)
class AxisSpec:
    """One axis of the chart.

    ``values`` are the raw category / band keys in display order and
    ``tick_labels`` the text shown for each of them.  ``tick_format`` is set
    on value axes only.
    """
    role: str                                  # "category", "band" or "value"
    values: Tuple[Any, ...] = ()
    tick_labels: Tuple[str, ...] = ()
    tick_format: Optional[str] = None          # "percent" for value axes
    title: str = ""


@dataclass(frozen=True)
class SeriesSpec:
    """A single drawable series: one bar segment layer or one line."""
    key: Any                                   # Band (bar) or group value (line)
    label: str                                 # Legend text
    color: str                                 # Hex colour
    x: Tuple[Any, ...]                         # Category / band keys
    y: Tuple[float, ...]                       # Percent values (NaN allowed)


@dataclass(frozen=True)
class ChartDescription:
    """
    Renderer-agnostic description of a severity chart.

    Bar charts have one series per band, listed in stacking order (band 1
    nearest the origin).  Line charts have one series per group, listed in
    category order.  ``legend_order`` lists series keys in the order the
    legend shows them.
    """
    geometry: Geometry
    orientation: str                           # "horizontal" or "vertical"
    group_col: str
    categories: Tuple[Any, ...]
    category_labels: Tuple[str, ...]
    bands: Tuple[Band, ...]
    band_labels: Dict[Band, str]
    band_colors: Dict[Band, str]
    series: Tuple[SeriesSpec, ...]
    legend_order: Tuple[Any, ...]
    category_axis: AxisSpec
    value_axis: AxisSpec
    legend_title: str = ""

    @property
    def is_bar(self) -> bool:
        return self.geometry is Geometry.BAR

    @property
    def is_horizontal(self) -> bool:
        return self.orientation == "horizontal"

    @property
    def n_groups(self) -> int:
        return len(self.categories)

    def series_by_key(self, key) -> SeriesSpec:
        for series in self.series:
            if series.key == key:
                return series
        raise KeyError(key)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-Python view, e.g. for JSON serialisation."""
        return {
            'geometry': self.geometry.value,
            'orientation': self.orientation,
            'group_col': self.group_col,
            'categories': list(self.categories),
            'category_labels': list(self.category_labels),
            'bands': [b.value for b in self.bands],
            'band_labels': {b.value: label for b, label in self.band_labels.items()},
            'band_colors': {b.value: color for b, color in self.band_colors.items()},
            'series': [
                {
                    'key': s.key.value if isinstance(s.key, Band) else s.key,
                    'label': s.label,
                    'color': s.color,
                    'x': [v.value if isinstance(v, Band) else v for v in s.x],
                    'y': list(s.y),
                }
                for s in self.series
            ],
            'legend_order': [k.value if isinstance(k, Band) else k for k in self.legend_order],
            'legend_title': self.legend_title,
        }


# ============================================================================
# PIPELINE RESULT
# ============================================================================

@dataclass
class IndexChartResult:
    """Container for everything produced by one ``index_chart()`` call.

    Attributes:
        data: Long-format aggregated frame (group, band, percent).
        description: Renderer-agnostic chart description.
        figure: Rendered figure (matplotlib ``Figure`` or Plotly ``go.Figure``).
        output_path: Path of the exported PDF, or None when not exported.
        n_groups: Number of distinct groups among non-missing records.
    """
    data: pd.DataFrame
    description: ChartDescription
    figure: Any = None
    output_path: Optional[Any] = None
    n_groups: int = 0

    @property
    def exported(self) -> bool:
        return self.output_path is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': self.data.to_dict(orient='records'),
            'description': self.description.to_dict(),
            'output_path': str(self.output_path) if self.output_path else None,
            'n_groups': self.n_groups,
        }

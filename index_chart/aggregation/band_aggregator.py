"""
Weighted Band Aggregator.

Turns per-respondent records into per-group, per-band weighted percentages
of an ordinal severity index.

Algorithm:
    1. Validate ``index_max`` (4 or 5) and the group / index column names.
    2. Drop records whose index value is missing.  This happens before any
       weight is resolved so excluded rows never reach a denominator.
    3. Resolve weights: all ones, or a single call of the caller's weighting
       function on the filtered frame (one weight per row, positional).
    4. For every group (missing group labels form their own group):

           band b in 1..4 : 100 * sum(w where v == b) / sum(w)
           band "4+"      :       sum(w where v >  4) / sum(w)

       The overflow band is deliberately left unscaled (a 0-1 fraction),
       which is what the charts have always shown.  In 4-band mode it is
       computed and then discarded, so scores above 4 still count in the
       denominator but in no emitted band.
    5. Return a long-format frame ``[group, band, percent]`` sorted by group
       then band.

A group whose weights sum to zero gets NaN percentages (0 / 0) and a logged
warning rather than an exception; the renderer shows a gap.
"""

import logging
from typing import Callable, Optional, Sequence

import numpy as np
import pandas as pd

from ..core.config import (
    DEFAULT_GROUP_COL, DEFAULT_INDEX_COL, DEFAULT_INDEX_MAX, WEIGHT_COL,
    BAND_COL, PERCENT_COL, EXACT_BAND_SCORES, OVERFLOW_THRESHOLD, PERCENT_SCALE,
)
from ..core.exceptions import WeightMismatchError
from ..core.utils import validate_columns
from ..models.data_models import Band, validate_index_max

logger = logging.getLogger(__name__)

WeightingFunction = Callable[[pd.DataFrame], Sequence[float]]


def resolve_weights(records: pd.DataFrame,
                    weighting_function: Optional[WeightingFunction] = None) -> np.ndarray:
    """
    Return one float weight per row of ``records``.

    Args:
        records: Already filtered records (no missing index values).
        weighting_function: Called exactly once with ``records``.  When None,
            every record weighs 1.

    Raises:
        WeightMismatchError: If the function returns a different number of
            weights than there are records.
    """
    if weighting_function is None:
        return np.ones(len(records), dtype=float)

    weights = np.asarray(weighting_function(records), dtype=float).ravel()
    if len(weights) != len(records):
        raise WeightMismatchError(expected=len(records), received=len(weights))
    return weights


def aggregate_bands(df: pd.DataFrame,
                    group: str = DEFAULT_GROUP_COL,
                    index: str = DEFAULT_INDEX_COL,
                    index_max: int = DEFAULT_INDEX_MAX,
                    weighting_function: Optional[WeightingFunction] = None) -> pd.DataFrame:
    """
    Compute weighted band percentages for every group.

    Args:
        df: Record-level data.  Never modified.
        group: Column holding the group label.
        index: Column holding the severity score.
        index_max: 4 or 5.  5 adds the "4+" overflow band to the output.
        weighting_function: Optional ``records -> weights`` callable.

    Returns:
        pd.DataFrame: Columns ``[group, "band", "percent"]``, one row per
        group per retained band.  ``band`` holds the band value strings
        ("1".."4", "4+").

    Raises:
        InvalidConfigError: ``index_max`` not in (4, 5) or a column is missing.
        WeightMismatchError: Weighting function returned the wrong length.
    """
    validate_index_max(index_max)
    validate_columns(df, [group, index])

    records = df.loc[df[index].notna()].copy()
    dropped = len(df) - len(records)
    if dropped:
        logger.debug(f"[Aggregator] Excluded {dropped} records with missing '{index}'")

    records[WEIGHT_COL] = resolve_weights(records, weighting_function)

    values = pd.to_numeric(records[index], errors='coerce')
    weights = records[WEIGHT_COL]

    # Weighted indicator columns: one per band, the row's weight where the
    # score falls in that band and 0 otherwise.
    indicators = pd.DataFrame(index=records.index)
    for score in EXACT_BAND_SCORES:
        indicators[str(score)] = weights.where(values == score, 0.0)
    indicators[Band.FOUR_PLUS.value] = weights.where(values > OVERFLOW_THRESHOLD, 0.0)
    indicators[WEIGHT_COL] = weights
    indicators[group] = records[group]

    sums = indicators.groupby(group, dropna=False, sort=True, observed=True).sum()
    totals = sums.pop(WEIGHT_COL)

    zero_weight = totals[totals == 0].index.tolist()
    if zero_weight:
        logger.warning(
            f"[Aggregator] Groups with zero total weight produce NaN percentages: {zero_weight}"
        )

    # Zero totals become NaN so 0 / 0 yields NaN rather than raising
    shares = sums.div(totals.replace(0, np.nan), axis=0)
    exact_cols = [str(score) for score in EXACT_BAND_SCORES]
    shares[exact_cols] = shares[exact_cols] * PERCENT_SCALE

    bands = [b.value for b in Band.for_index_max(index_max)]
    shares = shares[bands]

    data = (
        shares.reset_index()
        .melt(id_vars=group, var_name=BAND_COL, value_name=PERCENT_COL)
    )
    data[BAND_COL] = pd.Categorical(data[BAND_COL], categories=bands, ordered=True)
    data = data.sort_values([group, BAND_COL], kind='stable', na_position='last')
    data[BAND_COL] = data[BAND_COL].astype(str)
    data = data.reset_index(drop=True)

    logger.info(
        f"[Aggregator] {records[group].nunique(dropna=False)} groups x {len(bands)} bands "
        f"from {len(records)} records"
    )
    return data


def summarize_bands(data: pd.DataFrame, group: str = DEFAULT_GROUP_COL) -> pd.DataFrame:
    """
    Pivot aggregated rows to one row per group with a ``total`` column.

    The total is the plain sum of the emitted percentages, so it reflects the
    inherited scale asymmetry of the "4+" band and the missing mass of
    scores above 4 in 4-band mode.
    """
    validate_columns(data, [group, BAND_COL, PERCENT_COL])
    # pivot (not pivot_table) so NaN percentages survive
    wide = data.pivot(index=group, columns=BAND_COL, values=PERCENT_COL)
    ordered = [b.value for b in Band if b.value in wide.columns]
    wide = wide[ordered]
    wide['total'] = wide.sum(axis=1, min_count=1)
    wide.columns.name = None
    return wide


class BandAggregator:
    """
    Reusable aggregator bound to a set of column names and options.

    Usage:
        >>> agg = BandAggregator(group='pop_group', index='msni', index_max=5)
        >>> data = agg.aggregate(df)
        >>> agg.summarize(data)

    Attributes:
        group (str): Group column name.
        index (str): Index column name.
        index_max (int): 4 or 5, validated on construction.
        weighting_function (callable, optional): ``records -> weights``.
    """

    def __init__(self, group: str = DEFAULT_GROUP_COL, index: str = DEFAULT_INDEX_COL,
                 index_max: int = DEFAULT_INDEX_MAX,
                 weighting_function: Optional[WeightingFunction] = None):
        self.group = group
        self.index = index
        self.index_max = validate_index_max(index_max)
        self.weighting_function = weighting_function

    @property
    def bands(self):
        return Band.for_index_max(self.index_max)

    def aggregate(self, df: pd.DataFrame) -> pd.DataFrame:
        return aggregate_bands(df, group=self.group, index=self.index,
                               index_max=self.index_max,
                               weighting_function=self.weighting_function)

    def summarize(self, data: pd.DataFrame) -> pd.DataFrame:
        return summarize_bands(data, group=self.group)

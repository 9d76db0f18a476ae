"""
Unit tests for the chart spec builder and chart models.

Covers:
- Band label, legend and colour resolution
- Category ordering (alphabetical, group_order, missing group)
- Positional group labels and mismatch warnings
- Bar and line chart descriptions
- ChartConfig validation
"""

import unittest
from pathlib import Path
import sys
import math

import numpy as np
import pandas as pd
from pandas.testing import assert_frame_equal

sys.path.insert(0, str(Path(__file__).parent.parent))

from index_chart.aggregation import aggregate_bands
from index_chart.core.config import GROUP_PALETTE, CATASTROPHIC_FILL
from index_chart.core.exceptions import InvalidConfigError
from index_chart.models import Band, IndexType, Geometry, ChartConfig
from index_chart.visualization import (
    build_chart,
    resolve_band_labels,
    resolve_legend_labels,
    resolve_band_colors,
    resolve_categories,
    resolve_category_labels,
)
from tests.fixtures.sample_data import create_sample_msna_data, create_many_groups_data

SPEC_LOGGER = 'index_chart.visualization.chart_spec'


def sample_aggregate(index_max=4):
    return aggregate_bands(create_sample_msna_data(), group='pop_group', index='msni',
                           index_max=index_max)


class TestBandResolution(unittest.TestCase):
    """Test suite for labels and colours of the severity bands."""

    def test_msni_labels(self):
        labels = resolve_band_labels("msni", 4)
        self.assertEqual(list(labels.keys()), [Band.ONE, Band.TWO, Band.THREE, Band.FOUR])
        self.assertEqual(labels[Band.ONE], "Minimal (1)")
        self.assertEqual(labels[Band.FOUR], "Extreme (4)")

    def test_msni_five_band_legend(self):
        self.assertEqual(
            resolve_legend_labels("msni", 5),
            ("Extreme+ (4+)", "Extreme (4)", "Severe (3)", "Stress (2)", "Minimal (1)"),
        )

    def test_lsg_legend(self):
        self.assertEqual(
            resolve_legend_labels("lsg", 5),
            ("Catastrophic", "Extreme", "Severe", "Stress", "Minimal"),
        )

    def test_unknown_index_type_uses_generic_labels(self):
        """Test an unrecognised index_type falls back silently."""
        self.assertEqual(resolve_legend_labels("foo", 4), ("Extreme", "Severe", "Stress", "Minimal"))
        self.assertIs(IndexType.from_value("foo"), IndexType.OTHER)

    def test_index_type_is_case_sensitive(self):
        self.assertIs(IndexType.from_value("MSNI"), IndexType.OTHER)

    def test_four_band_colors(self):
        colors = resolve_band_colors(4)
        self.assertNotIn(Band.FOUR_PLUS, colors)
        self.assertEqual(colors[Band.ONE], "#58585A")
        self.assertEqual(colors[Band.FOUR], "#F7ACAC")

    def test_five_band_colors(self):
        colors = resolve_band_colors(5)
        self.assertEqual(len(colors), 5)
        self.assertEqual(colors[Band.FOUR_PLUS], CATASTROPHIC_FILL)

    def test_band_order(self):
        self.assertEqual([b.rank for b in Band], [0, 1, 2, 3, 4])
        self.assertTrue(Band.FOUR_PLUS.is_overflow)
        self.assertEqual(Band.ONE, "1")


class TestCategoryResolution(unittest.TestCase):
    """Test suite for category order and display labels."""

    def test_alphabetical_default(self):
        self.assertEqual(resolve_categories(['IDP', 'Host', 'IDP', 'Returnee']),
                         ('Host', 'IDP', 'Returnee'))

    def test_missing_group_sorts_last(self):
        self.assertEqual(resolve_categories([None, 'B', np.nan, 'A']), ('A', 'B', None))

    def test_na_label_distinct_from_missing(self):
        """Test a real "NA" group is ordered as a name, not as the missing group."""
        self.assertEqual(resolve_categories([None, 'NA', 'B']), ('B', 'NA', None))
        self.assertEqual(resolve_category_labels(('NA', None)), ('NA', 'NA'))

    def test_mixed_label_types(self):
        """Test int and str group labels fall back to text order."""
        self.assertEqual(resolve_categories([2, 'A', 10]), (10, 2, 'A'))

    def test_group_order_may_list_missing_group(self):
        self.assertEqual(resolve_categories(['A', None], [np.nan, 'A']), (None, 'A'))

    def test_group_order_drops_unlisted(self):
        """Test groups missing from group_order are excluded from the chart."""
        with self.assertLogs(SPEC_LOGGER, level='INFO') as logs:
            categories = resolve_categories(['Host', 'IDP', 'Returnee'], ['Returnee', 'Host'])

        self.assertEqual(categories, ('Returnee', 'Host'))
        self.assertIn('IDP', logs.output[0])

    def test_group_order_ignores_absent_values(self):
        self.assertEqual(resolve_categories(['Host'], ['Refugee', 'Host']), ('Host',))

    def test_duplicate_group_order(self):
        with self.assertRaises(InvalidConfigError):
            resolve_categories(['A', 'B'], ['A', 'A', 'B'])

    def test_labels_default_to_values(self):
        self.assertEqual(resolve_category_labels(('A', 'B')), ('A', 'B'))

    def test_labels_by_position(self):
        self.assertEqual(resolve_category_labels(('A', 'B'), ['Alpha', 'Beta']), ('Alpha', 'Beta'))

    def test_short_labels_warn(self):
        """Test too few labels warn and leave the remaining categories unlabelled."""
        with self.assertLogs(SPEC_LOGGER, level='WARNING') as logs:
            labels = resolve_category_labels(('A', 'B', 'C'), ['Alpha'])

        self.assertEqual(labels, ('Alpha', 'B', 'C'))
        self.assertIn('1 group_labels', logs.output[0])

    def test_long_labels_warn(self):
        with self.assertLogs(SPEC_LOGGER, level='WARNING'):
            labels = resolve_category_labels(('A',), ['Alpha', 'Beta'])
        self.assertEqual(labels, ('Alpha',))


class TestBarDescription(unittest.TestCase):
    """Test suite for stacked bar chart descriptions."""

    def setUp(self):
        self.data = sample_aggregate()
        self.description = build_chart(self.data, ChartConfig(), group='pop_group')

    def test_geometry_and_orientation(self):
        self.assertIs(self.description.geometry, Geometry.BAR)
        self.assertTrue(self.description.is_bar)
        self.assertTrue(self.description.is_horizontal)
        self.assertEqual(self.description.value_axis.tick_format, "percent")

    def test_one_series_per_band_in_stack_order(self):
        self.assertEqual([s.key for s in self.description.series],
                         [Band.ONE, Band.TWO, Band.THREE, Band.FOUR])

    def test_series_values_follow_categories(self):
        self.assertEqual(self.description.categories, ('Host', 'IDP', 'Returnee'))
        band_one = self.description.series_by_key(Band.ONE)
        self.assertEqual(band_one.x, ('Host', 'IDP', 'Returnee'))
        np.testing.assert_allclose(band_one.y, [20.0, 0.0, 50.0])

    def test_series_colors_and_labels(self):
        band_four = self.description.series_by_key(Band.FOUR)
        self.assertEqual(band_four.color, "#F7ACAC")
        self.assertEqual(band_four.label, "Extreme (4)")

    def test_legend_high_to_low(self):
        self.assertEqual(self.description.legend_order,
                         (Band.FOUR, Band.THREE, Band.TWO, Band.ONE))

    def test_category_axis(self):
        axis = self.description.category_axis
        self.assertEqual(axis.role, "category")
        self.assertEqual(axis.tick_labels, ('Host', 'IDP', 'Returnee'))

    def test_five_band(self):
        description = build_chart(sample_aggregate(index_max=5),
                                  ChartConfig(index_max=5, index_type="lsg"), group='pop_group')

        self.assertEqual(len(description.series), 5)
        overflow = description.series_by_key(Band.FOUR_PLUS)
        self.assertEqual(overflow.label, "Catastrophic")
        self.assertEqual(overflow.color, CATASTROPHIC_FILL)
        self.assertAlmostEqual(overflow.y[1], 0.25)
        self.assertEqual(description.legend_order[0], Band.FOUR_PLUS)

    def test_five_band_data_in_four_band_chart(self):
        """Test extra "4+" rows are ignored by a 4-band config."""
        description = build_chart(sample_aggregate(index_max=5), ChartConfig(), group='pop_group')
        self.assertEqual(len(description.series), 4)

    def test_group_order_and_labels(self):
        config = ChartConfig(group_order=['Returnee', 'Host', 'IDP'],
                             group_labels=['Returnees', 'Host community', 'IDPs'])
        description = build_chart(self.data, config, group='pop_group')

        self.assertEqual(description.categories, ('Returnee', 'Host', 'IDP'))
        self.assertEqual(description.category_labels, ('Returnees', 'Host community', 'IDPs'))
        np.testing.assert_allclose(description.series_by_key(Band.ONE).y, [50.0, 20.0, 0.0])

    def test_missing_group_shown_as_na(self):
        df = pd.DataFrame({'group': ['A', None], 'msni': [1, 2]})
        description = build_chart(aggregate_bands(df), ChartConfig())

        self.assertEqual(description.categories, ('A', None))
        self.assertEqual(description.category_labels, ('A', 'NA'))
        self.assertEqual(description.series_by_key(Band.TWO).y, (0.0, 100.0))

    def test_na_named_group_kept_apart_from_missing(self):
        """Test a group literally named "NA" keeps its own data next to the missing group."""
        df = pd.DataFrame({'group': ['NA', None], 'msni': [1, 4]})
        description = build_chart(aggregate_bands(df), ChartConfig())

        self.assertEqual(description.categories, ('NA', None))
        self.assertEqual(description.series_by_key(Band.ONE).y, (100.0, 0.0))
        self.assertEqual(description.series_by_key(Band.FOUR).y, (0.0, 100.0))

    def test_nan_percent_preserved(self):
        df = pd.DataFrame({'group': ['A', 'B'], 'msni': [1, 2], 'w': [1.0, 0.0]})
        data = aggregate_bands(df, weighting_function=lambda records: records['w'])
        description = build_chart(data, ChartConfig())

        self.assertTrue(math.isnan(description.series_by_key(Band.TWO).y[1]))

    def test_input_not_modified(self):
        original = self.data.copy()
        build_chart(self.data, ChartConfig(), group='pop_group')
        assert_frame_equal(self.data, original)

    def test_missing_column(self):
        with self.assertRaises(InvalidConfigError):
            build_chart(self.data, ChartConfig(), group='region')

    def test_to_dict(self):
        result = self.description.to_dict()

        self.assertEqual(result['geometry'], 'bar')
        self.assertEqual(result['bands'], ['1', '2', '3', '4'])
        self.assertEqual(result['legend_order'], ['4', '3', '2', '1'])
        self.assertEqual(result['series'][0]['key'], '1')
        self.assertEqual(result['band_labels']['1'], 'Minimal (1)')


class TestLineDescription(unittest.TestCase):
    """Test suite for line chart descriptions."""

    def setUp(self):
        self.config = ChartConfig.from_options(bar_graph=False)
        self.description = build_chart(sample_aggregate(), self.config, group='pop_group')

    def test_geometry(self):
        self.assertIs(self.description.geometry, Geometry.LINE)
        self.assertFalse(self.description.is_bar)
        self.assertEqual(self.description.orientation, "vertical")

    def test_one_series_per_group(self):
        self.assertEqual([s.key for s in self.description.series], ['Host', 'IDP', 'Returnee'])
        self.assertEqual([s.color for s in self.description.series], list(GROUP_PALETTE[:3]))
        np.testing.assert_allclose(self.description.series_by_key('Host').y, [20.0, 40.0, 20.0, 20.0])

    def test_band_axis_low_to_high(self):
        axis = self.description.category_axis
        self.assertEqual(axis.role, "band")
        self.assertEqual(axis.values, (Band.ONE, Band.TWO, Band.THREE, Band.FOUR))
        self.assertEqual(axis.tick_labels,
                         ("Minimal (1)", "Stress (2)", "Severe (3)", "Extreme (4)"))

    def test_legend_follows_categories(self):
        self.assertEqual(self.description.legend_order, ('Host', 'IDP', 'Returnee'))

    def test_group_labels_name_lines(self):
        config = ChartConfig.from_options(bar_graph=False, group_labels=['H', 'I', 'R'])
        description = build_chart(sample_aggregate(), config, group='pop_group')
        self.assertEqual([s.label for s in description.series], ['H', 'I', 'R'])

    def test_palette_cycles_beyond_nine_groups(self):
        data = aggregate_bands(create_many_groups_data(11))

        with self.assertLogs(SPEC_LOGGER, level='WARNING') as logs:
            description = build_chart(data, self.config)

        self.assertEqual(len(description.series), 11)
        self.assertEqual(description.series[9].color, GROUP_PALETTE[0])
        self.assertIn('11 groups', logs.output[0])


class TestChartConfig(unittest.TestCase):
    """Test suite for ChartConfig validation."""

    def test_defaults(self):
        config = ChartConfig()
        self.assertEqual(config.index_max, 4)
        self.assertIs(config.index_type, IndexType.MSNI)
        self.assertIs(config.geometry, Geometry.BAR)

    def test_string_options_normalised(self):
        config = ChartConfig(index_type="lsg", geometry="line", group_order=['b', 'a'])
        self.assertIs(config.index_type, IndexType.LSG)
        self.assertIs(config.geometry, Geometry.LINE)
        self.assertEqual(config.group_order, ('b', 'a'))

    def test_invalid_index_max(self):
        for value in (3, 6, True, "4"):
            with self.assertRaises(InvalidConfigError):
                ChartConfig(index_max=value)

    def test_invalid_geometry(self):
        with self.assertRaises(InvalidConfigError):
            ChartConfig(geometry="pie")

    def test_frozen(self):
        config = ChartConfig()
        with self.assertRaises(Exception):
            config.index_max = 5

    def test_from_options(self):
        config = ChartConfig.from_options(index_max=5, index_type="foo", bar_graph=False)
        self.assertEqual(config.bands, tuple(Band))
        self.assertIs(config.index_type, IndexType.OTHER)
        self.assertIs(config.geometry, Geometry.LINE)


if __name__ == '__main__':
    unittest.main()

"""
Central Configuration Module for Index Chart.

=== PURPOSE ===
This module is the single source of truth for every presentation constant,
default column name and figure parameter used across the package.  Every
other module imports from here rather than defining its own magic values,
which keeps the chart output easy to audit and re-tune.

=== DATA FLOW ===
  1. DEFAULT_* column names and options seed the public ``index_chart()``
     signature in the pipeline module.
  2. EXACT_BAND_SCORES / OVERFLOW_THRESHOLD / PERCENT_SCALE drive the
     weighted aggregator (which bands exist and how they are scaled).
  3. SEVERITY_FILL / CATASTROPHIC_FILL / GROUP_PALETTE and the label tables
     are read only by the chart spec builder when it resolves colours and
     legend text.
  4. PDF_* and LINE_* constants are read by the renderers and the exporter.

=== KEY DESIGN DECISIONS ===
- All tables are tuples or read-only mappings; nothing here is mutated at
  runtime.
- Label tables are keyed by band value so the builder can produce either
  the legend order (high to low) or the axis order (low to high) from the
  same source.

Contains all constants, palettes, labels and defaults.
"""

from types import MappingProxyType


# ==========================================
# INPUT COLUMN DEFAULTS
# ==========================================
# Column names are caller-specified at run time; these are only the defaults
# of the public ``index_chart()`` entry point.
DEFAULT_GROUP_COL = "group"   # Column holding the grouping label (e.g. population type)
DEFAULT_INDEX_COL = "msni"    # Column holding the ordinal severity score

# Column added to the working frame while aggregating
WEIGHT_COL = "weights"

# Columns of the long-format aggregated frame
BAND_COL = "band"
PERCENT_COL = "percent"

# Category shown for records whose group value is missing
MISSING_GROUP_LABEL = "NA"

# ==========================================
# INDEX SCALES
# ==========================================
# An index either tops out at 4, or has an extra overflow band for any
# score strictly greater than 4.
SUPPORTED_INDEX_MAX = (4, 5)
DEFAULT_INDEX_MAX = 4
DEFAULT_INDEX_TYPE = "msni"

# Scores that map one-to-one onto a band
EXACT_BAND_SCORES = (1, 2, 3, 4)

# Scores above this value fall into the "4+" overflow band
OVERFLOW_THRESHOLD = 4

# Percentages for the exact bands are scaled by this factor.  The overflow
# band is NOT scaled (it stays a 0-1 fraction), matching previously
# published charts.
PERCENT_SCALE = 100

# ==========================================
# SEVERITY LABELS
# ==========================================
# Keyed by band value ("1".."4", "4+").
MSNI_LABELS = MappingProxyType({
    "1": "Minimal (1)",
    "2": "Stress (2)",
    "3": "Severe (3)",
    "4": "Extreme (4)",
    "4+": "Extreme+ (4+)",
})

# Used for "lsg" and every other index type
GENERIC_LABELS = MappingProxyType({
    "1": "Minimal",
    "2": "Stress",
    "3": "Severe",
    "4": "Extreme",
    "4+": "Catastrophic",
})

# ==========================================
# COLOUR PALETTES
# ==========================================
# Severity ramp used to fill the stacked bar segments
SEVERITY_FILL = MappingProxyType({
    "4": "#F7ACAC",
    "3": "#FACDCD",
    "2": "#A7A9AC",
    "1": "#58585A",
})

# Extra colour prepended to the ramp in 5-band mode
CATASTROPHIC_FILL = "#EE5A59"

# Categorical palette for the line chart (one colour per group)
GROUP_PALETTE = (
    "#EE5859",  # Red
    "#58585A",  # Dark grey
    "#D1D3D4",  # Light grey
    "#D2CBB8",  # Beige
    "#A9C5A1",  # Sage
    "#FFF67A",  # Yellow
    "#F69E61",  # Orange
    "#95A0A9",  # Blue grey
    "#56B3CD",  # Sky blue
)

# ==========================================
# FIGURE / EXPORT
# ==========================================
DEFAULT_PLOT_NAME = "severity_bar_chart"
PDF_WIDTH_IN = 7.0        # Width of exported PDFs in inches
PDF_DPI = 300
FIGURE_HEIGHT_PER_GROUP = 0.6   # On-screen figure height per group (inches)
MIN_FIGURE_HEIGHT = 3.0
LINE_WIDTH = 2.5
BAR_HEIGHT = 0.7
PLOTLY_TEMPLATE = "plotly_white"
PLOTLY_HEIGHT_PER_GROUP = 60
PLOTLY_MIN_HEIGHT = 320

# Render backends accepted by visualization.renderers.render_chart
RENDER_BACKENDS = ("matplotlib", "plotly")
DEFAULT_RENDER_BACKEND = "matplotlib"

# Percent axis: whole-number accuracy, values already on a 0-100 scale
PERCENT_ACCURACY = 1

"""
Utility functions for data validation, logging setup and axis formatting.
"""

import math
import time
import logging
from pathlib import Path

import pandas as pd

from .config import PERCENT_ACCURACY
from .exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


def validate_columns(df, required_cols):
    """Validate that required columns exist in dataframe"""
    missing = [c for c in required_cols if c not in df.columns]
    if missing:
        raise InvalidConfigError(f"Columns {missing} not found in dataframe")
    return True


def is_missing(value):
    """True for None / NaN / NA scalars."""
    return value is None or bool(pd.isna(value))


def format_percent(value, accuracy=PERCENT_ACCURACY):
    """
    Format a value already on a 0-100 scale as a percent label.

    Mirrors ``percent_format(accuracy = 1, scale = 1)``: the value is rounded
    to the nearest multiple of ``accuracy`` and suffixed with ``%``.  Missing
    values render as ``"NA"``.

    Examples:
        >>> format_percent(66.666)
        '67%'
        >>> format_percent(12.34, accuracy=0.1)
        '12.3%'
    """
    if is_missing(value):
        return "NA"
    rounded = round(value / accuracy) * accuracy
    decimals = max(0, -int(math.floor(math.log10(accuracy)))) if accuracy < 1 else 0
    return f"{rounded:.{decimals}f}%"


def setup_logging(verbose: bool = False, log_dir=None):
    """
    Configure the root logger with a console handler and an optional file handler.

    The console handler shows only warnings (or info in verbose mode) to keep
    terminal output clean.  When ``log_dir`` is given, a timestamped log file
    is created there that always captures DEBUG-level messages.

    Args:
        verbose: When True, lower the console handler to INFO level.
        log_dir: Directory for the log file.  No file is written when None.

    Returns:
        Path | None: Path to the newly created log file, if any.
    """
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # Drop handlers from a previous call so messages aren't duplicated
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime('%Y%m%d_%H%M%S')
        log_file = log_dir / f"index_chart_{timestamp}.log"

        # File formatter includes the logger name for tracing across submodules
        file_formatter = logging.Formatter(
            '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Matplotlib's font manager is noisy at DEBUG
    logging.getLogger('matplotlib').setLevel(logging.WARNING)

    logger.debug(f"Logging configured (verbose={verbose}, file={log_file})")
    return log_file

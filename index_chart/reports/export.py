"""
PDF export for rendered severity charts.

Export is a separate, explicitly invoked step: building and rendering a
chart never writes files.  The output height follows the number of groups
(one inch per group) at a fixed width, so bar charts keep a constant bar
thickness regardless of how many groups they show.
"""

import os
import logging
from pathlib import Path

from matplotlib.figure import Figure

from ..core.config import DEFAULT_PLOT_NAME, PDF_WIDTH_IN, PDF_DPI
from ..core.exceptions import InvalidConfigError

logger = logging.getLogger(__name__)


def pdf_path(plot_name: str = DEFAULT_PLOT_NAME, path=None) -> Path:
    """Target file ``<path>/<plot_name>.pdf`` (current directory when ``path`` is None)."""
    directory = Path(path) if path is not None else Path(os.getcwd())
    return directory / f"{plot_name}.pdf"


def export_pdf(figure: Figure, plot_name: str = DEFAULT_PLOT_NAME, path=None,
               height: float = None, width: float = PDF_WIDTH_IN) -> Path:
    """
    Write a matplotlib figure to ``<plot_name>.pdf``.

    The page is exactly ``width`` x ``height`` inches.  The figure is resized
    and re-laid out only while it is saved; its own size is restored
    afterwards.

    Args:
        figure: Figure returned by ``render_matplotlib``.
        plot_name: File name without extension.
        path: Output directory.  Created if missing; current directory when None.
        height: Page height in inches, normally the number of groups.  Keeps
            the figure's own height when None.
        width: Page width in inches.

    Returns:
        Path: The written file.

    Raises:
        TypeError: ``figure`` is not a matplotlib figure.
        InvalidConfigError: ``height`` or ``width`` is not positive.
    """
    if not isinstance(figure, Figure):
        raise TypeError(f"PDF export needs a matplotlib Figure, got {type(figure).__name__}")

    if height is None:
        height = figure.get_figheight()
    if height <= 0 or width <= 0:
        raise InvalidConfigError(f"PDF size must be positive, got {width}x{height} in")

    target = pdf_path(plot_name, path)
    target.parent.mkdir(parents=True, exist_ok=True)

    original_size = figure.get_size_inches().copy()
    try:
        figure.set_size_inches(width, height)
        # No tight bounding box: it would crop the page below width x height
        figure.tight_layout()
        with open(target, "wb") as handle:
            figure.savefig(handle, format="pdf", dpi=PDF_DPI)
    finally:
        figure.set_size_inches(original_size)
        figure.tight_layout()

    logger.info(f"[Export] Saved {target} ({width:.1f}x{height:.1f} in)")
    return target

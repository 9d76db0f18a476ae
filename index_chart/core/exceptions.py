"""
Exceptions raised by the index chart package.

Both subclass ``ValueError`` so callers that already guard the public entry
point with ``except ValueError`` keep working.
"""


class IndexChartError(ValueError):
    """Base class for all index chart errors."""


class InvalidConfigError(IndexChartError):
    """Raised when chart options are outside the supported set.

    Covers an ``index_max`` other than 4 or 5, group/index columns missing
    from the input frame, unknown geometries or render backends, and a
    non-positive export height.
    """


class WeightMismatchError(IndexChartError):
    """Raised when a weighting function returns the wrong number of weights."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(
            f"Weighting function returned {received} weights for {expected} records"
        )

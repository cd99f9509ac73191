"""Exceptions raised by the chart engine."""

from __future__ import annotations


class ChartError(ValueError):
    """Base class for chart engine input errors."""


class UnknownMetricKey(ChartError):
    """Raised when a selected metric is not part of the MetricKey enumeration."""

    def __init__(self, *, key: object) -> None:
        """Initialize the error.

        Args:
            key: The rejected metric key as received at the call boundary.
        """

        super().__init__(f"Unknown metric key {key!r}.")
        self.key = key


class EmptyDataset(ChartError):
    """Raised when an extent is requested for an empty set of values."""

    def __init__(self) -> None:
        super().__init__("Cannot compute an extent for an empty set of values.")


class InvalidChartSizing(ChartError):
    """Raised when chart dimensions leave no room for the plot area."""

    def __init__(self, *, width: float, height: float, padding: float) -> None:
        """Initialize the error.

        Args:
            width: Requested chart width in pixels.
            height: Requested chart height in pixels.
            padding: Requested padding in pixels.
        """

        super().__init__(
            f"Invalid chart sizing width={width}, height={height}, padding={padding}: "
            "width and height must exceed twice the padding."
        )
        self.width = width
        self.height = height
        self.padding = padding

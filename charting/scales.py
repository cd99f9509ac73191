"""Linear axis scales and tick generation.

Scales map a numeric domain onto a pixel range. Ticks are raw evenly spaced
values over the data extent; no "nice number" snapping is applied.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .dto import ChartSizing
from .errors import EmptyDataset

TICK_COUNT = 6


@dataclass(frozen=True, slots=True)
class ValueExtent:
    """Minimum and maximum of a set of values."""

    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


def value_extent(values: Iterable[float]) -> ValueExtent:
    """Return the plain min/max of `values`.

    Raises:
        EmptyDataset: When `values` is empty.
    """

    materialized = list(values)
    if not materialized:
        raise EmptyDataset()
    return ValueExtent(min=min(materialized), max=max(materialized))


@dataclass(frozen=True, slots=True)
class AxisScale:
    """Linear mapping from `[domain_min, domain_max]` to `[range_min, range_max]`.

    `range_min` may be larger than `range_max` (vertical axes are inverted).
    When the domain has zero width every value maps to the middle of the
    pixel range.
    """

    domain_min: float
    domain_max: float
    range_min: float
    range_max: float

    @property
    def is_degenerate(self) -> bool:
        return self.domain_max == self.domain_min

    def __call__(self, value: float) -> float:
        if self.is_degenerate:
            return (self.range_min + self.range_max) / 2
        return self.range_min + (self.range_max - self.range_min) * (value - self.domain_min) / (
            self.domain_max - self.domain_min
        )


def horizontal_scale(extent: ValueExtent, sizing: ChartSizing) -> AxisScale:
    """Return the x scale spanning the plot area left to right."""

    return AxisScale(
        domain_min=extent.min,
        domain_max=extent.max,
        range_min=sizing.padding,
        range_max=sizing.width - sizing.padding,
    )


def vertical_scale(extent: ValueExtent, sizing: ChartSizing) -> AxisScale:
    """Return the y scale; larger values map to smaller pixel y."""

    return AxisScale(
        domain_min=extent.min,
        domain_max=extent.max,
        range_min=sizing.height - sizing.padding,
        range_max=sizing.padding,
    )


def linear_ticks(extent: ValueExtent, *, count: int = TICK_COUNT) -> tuple[float, ...]:
    """Return `count` evenly spaced values from `extent.min` to `extent.max`.

    Args:
        extent: Data extent along the axis.
        count: Number of ticks (>= 2); both endpoints are always included.

    Returns:
        Tick values in ascending order.
    """

    if count < 2:
        raise ValueError("count must be >= 2")

    steps = count - 1
    ticks = [extent.min + (extent.span / steps) * k for k in range(steps)]
    ticks.append(extent.max)
    return tuple(ticks)

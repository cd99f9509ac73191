"""Plottable metric definitions.

The set of dependent variables is closed: every chart axis must resolve to a
`MetricKey`. Free-text axes are rejected with `UnknownMetricKey`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from .errors import UnknownMetricKey


class MetricKey(Enum):
    """Dependent variables recorded for each PMT measurement."""

    light_response = "light_response"
    current = "current"
    intensity = "intensity"


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    """Display metadata for a metric.

    Args:
        key: MetricKey this definition describes.
        label: Human-friendly label.
        unit: Display unit string.
    """

    key: MetricKey
    label: str
    unit: str

    @property
    def axis_title(self) -> str:
        """Return the vertical axis title, e.g. `Current (A)`."""

        return f"{self.label} ({self.unit})"


METRIC_DEFINITIONS: Final[tuple[MetricDefinition, ...]] = (
    MetricDefinition(key=MetricKey.light_response, label="Light Response", unit="A/uWatt/cm²/nm"),
    MetricDefinition(key=MetricKey.current, label="Current", unit="A"),
    MetricDefinition(key=MetricKey.intensity, label="Intensity", unit="uWatt/cm²/nm"),
)

_DEFINITIONS_BY_KEY: Final[dict[MetricKey, MetricDefinition]] = {d.key: d for d in METRIC_DEFINITIONS}

DEFAULT_METRIC: Final[MetricKey] = MetricKey.light_response


def resolve_metric(key: MetricKey | str) -> MetricKey:
    """Resolve a metric selection into a MetricKey.

    Args:
        key: A MetricKey member or its string value.

    Returns:
        The matching MetricKey.

    Raises:
        UnknownMetricKey: When `key` is not part of the enumeration.
    """

    if isinstance(key, MetricKey):
        return key
    if isinstance(key, str):
        try:
            return MetricKey(key)
        except ValueError:
            pass
    raise UnknownMetricKey(key=key)


def get_metric_definition(key: MetricKey | str) -> MetricDefinition:
    """Return the MetricDefinition for a metric key (fails fast on unknown keys)."""

    return _DEFINITIONS_BY_KEY[resolve_metric(key)]

"""DTO types consumed and returned by the chart engine.

DTOs are plain, immutable data containers. The scene types describe geometry
in pixel coordinates and carry pre-formatted strings, so any presentation
layer (SVG template, JSON API, tests) can draw them without recomputing.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from typing import Any, Literal

from .errors import InvalidChartSizing
from .metrics import MetricKey

Orientation = Literal["horizontal", "vertical"]
Axis = Literal["x", "y"]
TextAnchor = Literal["start", "middle", "end"]


@dataclass(frozen=True)
class MeasurementPoint:
    """One PMT observation.

    Attributes:
        source_id: Identifier of the measuring device/run (e.g. `J23-1062.txt`).
        wavelength: Independent variable in nanometers.
        metric_values: Dependent measurements keyed by MetricKey.
    """

    source_id: str
    wavelength: float
    metric_values: Mapping[MetricKey, float]

    def value(self, metric: MetricKey) -> float:
        """Return the value recorded for `metric`."""

        return self.metric_values[metric]


@dataclass(frozen=True, slots=True)
class ChartSizing:
    """Pixel dimensions of the chart viewport.

    Args:
        width: Total chart width.
        height: Total chart height.
        padding: Space reserved on every side for ticks and titles.
    """

    width: float = 700
    height: float = 400
    padding: float = 50

    def __post_init__(self) -> None:
        if self.padding < 0 or self.width <= 2 * self.padding or self.height <= 2 * self.padding:
            raise InvalidChartSizing(width=self.width, height=self.height, padding=self.padding)


DEFAULT_SIZING = ChartSizing()


@dataclass(frozen=True, slots=True)
class GridLine:
    """A dashed reference line drawn at a tick position."""

    x1: float
    y1: float
    x2: float
    y2: float
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class TickLabel:
    """A formatted tick value positioned next to its grid line."""

    axis: Axis
    value: float
    text: str
    x: float
    y: float
    anchor: TextAnchor


@dataclass(frozen=True, slots=True)
class Marker:
    """A filled circle drawn on a polyline vertex, with hover text."""

    x: float
    y: float
    radius: float
    wavelength: float
    value: float
    tooltip: str


@dataclass(frozen=True, slots=True)
class SeriesPolyline:
    """Geometry for one source's series.

    Attributes:
        source_id: Source the series belongs to.
        color: Stroke/fill color from the color assignment.
        vertices: Pixel coordinates in ascending wavelength order.
        markers: One marker per vertex.
    """

    source_id: str
    color: str
    vertices: tuple[tuple[float, float], ...]
    markers: tuple[Marker, ...]

    @property
    def points_attr(self) -> str:
        """Return vertices as an SVG `points` attribute (`"x1,y1 x2,y2"`)."""

        return " ".join(f"{x:g},{y:g}" for x, y in self.vertices)


@dataclass(frozen=True, slots=True)
class AxisLine:
    """A solid axis line."""

    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True, slots=True)
class AxisTitle:
    """An axis title; `rotation` is in degrees around (x, y)."""

    text: str
    x: float
    y: float
    rotation: float = 0


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """A legend swatch for a selected source."""

    source_id: str
    color: str


@dataclass(frozen=True)
class SceneDescription:
    """Everything a presentation layer needs to draw one chart.

    A scene with a `placeholder` message has no geometry: it is returned when
    the filtered data set is empty.

    Attributes:
        width: Viewport width.
        height: Viewport height.
        metric: Metric plotted on the vertical axis.
        title: Chart title.
        x_title: Horizontal axis title.
        y_title: Vertical axis title.
        grid_lines: Horizontal then vertical grid lines.
        tick_labels: Labels aligned to `grid_lines`.
        series: One polyline per active source, in selection order.
        axes: Horizontal and vertical axis lines.
        legend: Legend entries in selection order.
        placeholder: Empty-state message, or None when geometry is present.
    """

    width: float
    height: float
    metric: MetricKey
    title: str
    x_title: AxisTitle | None = None
    y_title: AxisTitle | None = None
    grid_lines: tuple[GridLine, ...] = ()
    tick_labels: tuple[TickLabel, ...] = ()
    series: tuple[SeriesPolyline, ...] = ()
    axes: tuple[AxisLine, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    placeholder: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None

    def ticks(self, axis: Axis) -> tuple[TickLabel, ...]:
        """Return tick labels for one axis."""

        return tuple(t for t in self.tick_labels if t.axis == axis)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation of the scene."""

        payload = asdict(self)
        payload["metric"] = self.metric.value
        payload["is_placeholder"] = self.is_placeholder
        return payload

    def elements(self) -> Iterator[object]:
        """Yield drawables in draw order.

        Grid lines and tick labels come first, then each series (line before
        its markers), then the axis lines so they are never occluded.
        """

        yield from self.grid_lines
        yield from self.tick_labels
        for polyline in self.series:
            yield polyline
            yield from polyline.markers
        yield from self.axes

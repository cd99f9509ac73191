"""Chart engine entry point.

`render_chart` is a pure function of (snapshot, selection, metric, sizing).
Every call recomputes colors, groups, scales and geometry from scratch; no
state survives between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .dto import (
    DEFAULT_SIZING,
    AxisLine,
    AxisTitle,
    ChartSizing,
    GridLine,
    LegendEntry,
    Marker,
    MeasurementPoint,
    SceneDescription,
    SeriesPolyline,
    TickLabel,
)
from .formatting import (
    X_AXIS_TITLE,
    X_TICK_DIGITS,
    Y_TICK_DIGITS,
    chart_title,
    format_fixed,
    format_scientific,
    format_tooltip,
)
from .metrics import MetricKey, get_metric_definition, resolve_metric
from .scales import AxisScale, horizontal_scale, linear_ticks, value_extent, vertical_scale
from .series import assign_colors, distinct_sources, group_series

logger = logging.getLogger(__name__)

EMPTY_STATE_MESSAGE = "No data selected or available to plot."
MARKER_RADIUS = 4
Y_LABEL_OFFSET = 10
X_LABEL_OFFSET = 15
X_TITLE_OFFSET = 5
Y_TITLE_X = 10


def render_chart(
    points: Sequence[MeasurementPoint],
    selected_sources: Sequence[str],
    selected_metric: MetricKey | str,
    sizing: ChartSizing = DEFAULT_SIZING,
) -> SceneDescription:
    """Render a line chart scene for the selected sources and metric.

    Args:
        points: Full data snapshot (all sources).
        selected_sources: Source ids in selection order; ids missing from the
            snapshot are ignored.
        selected_metric: Metric plotted on the vertical axis.
        sizing: Viewport dimensions.

    Returns:
        A SceneDescription. When no points remain after filtering, the scene
        carries a placeholder message and no geometry.

    Raises:
        UnknownMetricKey: When `selected_metric` is not a MetricKey.
    """

    metric = resolve_metric(selected_metric)
    colors = assign_colors(distinct_sources(points))
    groups = group_series(points, selected_sources)
    plotted = [point for group in groups.values() for point in group]

    if not plotted:
        return SceneDescription(
            width=sizing.width,
            height=sizing.height,
            metric=metric,
            title=chart_title(metric),
            placeholder=EMPTY_STATE_MESSAGE,
        )

    x_extent = value_extent(p.wavelength for p in plotted)
    y_extent = value_extent(p.value(metric) for p in plotted)
    x_scale = horizontal_scale(x_extent, sizing)
    y_scale = vertical_scale(y_extent, sizing)
    if x_scale.is_degenerate or y_scale.is_degenerate:
        logger.debug(
            "Degenerate chart domain (x=%s, y=%s); collapsing to range midpoint.",
            x_scale.is_degenerate,
            y_scale.is_degenerate,
        )

    grid_lines, tick_labels = _grid(
        x_ticks=linear_ticks(x_extent),
        y_ticks=linear_ticks(y_extent),
        x_scale=x_scale,
        y_scale=y_scale,
        sizing=sizing,
    )

    series = tuple(
        _polyline(
            source_id=source_id,
            points=group,
            metric=metric,
            color=colors[source_id],
            x_scale=x_scale,
            y_scale=y_scale,
        )
        for source_id, group in groups.items()
    )

    left = sizing.padding
    right = sizing.width - sizing.padding
    top = sizing.padding
    bottom = sizing.height - sizing.padding
    axes = (
        AxisLine(x1=left, y1=bottom, x2=right, y2=bottom),
        AxisLine(x1=left, y1=top, x2=left, y2=bottom),
    )

    return SceneDescription(
        width=sizing.width,
        height=sizing.height,
        metric=metric,
        title=chart_title(metric),
        x_title=AxisTitle(text=X_AXIS_TITLE, x=sizing.width / 2, y=sizing.height - X_TITLE_OFFSET),
        y_title=AxisTitle(
            text=get_metric_definition(metric).axis_title,
            x=Y_TITLE_X,
            y=sizing.height / 2,
            rotation=-90,
        ),
        grid_lines=grid_lines,
        tick_labels=tick_labels,
        series=series,
        axes=axes,
        legend=tuple(LegendEntry(source_id=s.source_id, color=s.color) for s in series),
    )


def _grid(
    *,
    x_ticks: tuple[float, ...],
    y_ticks: tuple[float, ...],
    x_scale: AxisScale,
    y_scale: AxisScale,
    sizing: ChartSizing,
) -> tuple[tuple[GridLine, ...], tuple[TickLabel, ...]]:
    """Build grid lines and tick labels for both axes (y first, then x)."""

    left = sizing.padding
    right = sizing.width - sizing.padding
    top = sizing.padding
    bottom = sizing.height - sizing.padding

    lines: list[GridLine] = []
    labels: list[TickLabel] = []
    for tick in y_ticks:
        y = y_scale(tick)
        lines.append(GridLine(x1=left, y1=y, x2=right, y2=y, orientation="horizontal"))
        labels.append(
            TickLabel(
                axis="y",
                value=tick,
                text=format_scientific(tick, Y_TICK_DIGITS),
                x=left - Y_LABEL_OFFSET,
                y=y,
                anchor="end",
            )
        )
    for tick in x_ticks:
        x = x_scale(tick)
        lines.append(GridLine(x1=x, y1=top, x2=x, y2=bottom, orientation="vertical"))
        labels.append(
            TickLabel(
                axis="x",
                value=tick,
                text=format_fixed(tick, X_TICK_DIGITS),
                x=x,
                y=bottom + X_LABEL_OFFSET,
                anchor="middle",
            )
        )
    return tuple(lines), tuple(labels)


def _polyline(
    *,
    source_id: str,
    points: tuple[MeasurementPoint, ...],
    metric: MetricKey,
    color: str,
    x_scale: AxisScale,
    y_scale: AxisScale,
) -> SeriesPolyline:
    """Map one source's sorted points into a polyline with markers."""

    vertices: list[tuple[float, float]] = []
    markers: list[Marker] = []
    for point in points:
        value = point.value(metric)
        x = x_scale(point.wavelength)
        y = y_scale(value)
        vertices.append((x, y))
        markers.append(
            Marker(
                x=x,
                y=y,
                radius=MARKER_RADIUS,
                wavelength=point.wavelength,
                value=value,
                tooltip=format_tooltip(source_id, point.wavelength, metric, value),
            )
        )
    return SeriesPolyline(source_id=source_id, color=color, vertices=tuple(vertices), markers=tuple(markers))

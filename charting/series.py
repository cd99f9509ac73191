"""Series grouping and color assignment.

Selections are validated against the snapshot: sources that no longer exist
are dropped silently. Colors are derived from the sorted list of *all*
sources in the snapshot so a source keeps its color regardless of selection.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Final

from .dto import MeasurementPoint

PLOT_COLORS: Final[tuple[str, ...]] = (
    "#ef4444",
    "#3b82f6",
    "#10b981",
    "#f97316",
    "#a855f7",
    "#06b6d4",
    "#eab308",
    "#ec4899",
    "#84cc16",
    "#6366f1",
)


def distinct_sources(points: Iterable[MeasurementPoint]) -> tuple[str, ...]:
    """Return the sorted distinct source ids present in `points`."""

    return tuple(sorted({point.source_id for point in points}))


def active_selection(selected: Sequence[str], points: Iterable[MeasurementPoint]) -> tuple[str, ...]:
    """Filter a selection down to sources present in the snapshot.

    Args:
        selected: Source ids in selection order (may contain stale ids).
        points: Full snapshot of measurement points.

    Returns:
        The selection with unknown and duplicate ids removed, order preserved.
    """

    available = {point.source_id for point in points}
    active: list[str] = []
    for source_id in selected:
        if source_id in available and source_id not in active:
            active.append(source_id)
    return tuple(active)


def group_series(
    points: Sequence[MeasurementPoint],
    selected: Sequence[str],
) -> dict[str, tuple[MeasurementPoint, ...]]:
    """Partition points by source for the active selection.

    Args:
        points: Full snapshot of measurement points.
        selected: Source ids in selection order.

    Returns:
        Mapping of source id -> points sorted ascending by wavelength, in
        selection order. Sources absent from the snapshot are not present.
    """

    buckets: dict[str, list[MeasurementPoint]] = {source_id: [] for source_id in active_selection(selected, points)}
    for point in points:
        bucket = buckets.get(point.source_id)
        if bucket is not None:
            bucket.append(point)
    return {source_id: tuple(sorted(bucket, key=lambda p: p.wavelength)) for source_id, bucket in buckets.items()}


def assign_colors(source_ids: Iterable[str], *, palette: Sequence[str] = PLOT_COLORS) -> dict[str, str]:
    """Assign palette colors to sources by sorted index.

    Colors wrap around when there are more sources than palette entries;
    wrapped sources share a color with an earlier source.

    Args:
        source_ids: All source ids in the snapshot (any order, duplicates ok).
        palette: Ordered color palette.

    Returns:
        Mapping of source id -> color.
    """

    if not palette:
        raise ValueError("palette must contain at least one color")
    ordered = sorted(set(source_ids))
    return {source_id: palette[idx % len(palette)] for idx, source_id in enumerate(ordered)}

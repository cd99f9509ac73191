"""Selection state transitions for the explorer UI.

The UI state (selected sources, plotted metric) is modelled as an immutable
value. Every user action or snapshot change produces a new state; the chart
engine only ever sees the resulting, validated arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from .metrics import DEFAULT_METRIC, MetricKey, resolve_metric

DEFAULT_SELECTION_LIMIT = 5


def reconcile_selection(
    previous: Sequence[str] | None,
    available: Sequence[str],
    *,
    limit: int = DEFAULT_SELECTION_LIMIT,
) -> tuple[str, ...]:
    """Validate a selection against the sources currently available.

    Args:
        previous: Prior selection, or None when no selection was ever made.
        available: Sorted source ids present in the latest snapshot.
        limit: Size of the default selection.

    Returns:
        The first `limit` available sources when `previous` is None;
        otherwise `previous` without ids missing from `available`.
    """

    # Only a missing selection gets the default; an explicitly cleared one stays empty.
    if previous is None:
        return tuple(available[:limit])
    present = set(available)
    kept: list[str] = []
    for source_id in previous:
        if source_id in present and source_id not in kept:
            kept.append(source_id)
    return tuple(kept)


@dataclass(frozen=True, slots=True)
class ExplorerState:
    """Selected sources (in selection order) and the plotted metric."""

    selected_sources: tuple[str, ...] = ()
    metric: MetricKey = DEFAULT_METRIC

    def toggle(self, source_id: str) -> ExplorerState:
        """Deselect `source_id` if selected, otherwise append it."""

        if source_id in self.selected_sources:
            return replace(self, selected_sources=tuple(s for s in self.selected_sources if s != source_id))
        return replace(self, selected_sources=(*self.selected_sources, source_id))

    def select_all(self, available: Sequence[str]) -> ExplorerState:
        return replace(self, selected_sources=tuple(available))

    def clear(self) -> ExplorerState:
        return replace(self, selected_sources=())

    def with_metric(self, metric: MetricKey | str) -> ExplorerState:
        return replace(self, metric=resolve_metric(metric))

    def reconciled(self, available: Sequence[str]) -> ExplorerState:
        """Drop selected sources that are no longer available."""

        return replace(self, selected_sources=reconcile_selection(self.selected_sources, available))

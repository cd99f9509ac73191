"""Unit tests for explorer selection state transitions."""

from __future__ import annotations

import pytest

from charting.errors import UnknownMetricKey
from charting.metrics import DEFAULT_METRIC, MetricKey, resolve_metric
from charting.selection import ExplorerState, reconcile_selection

pytestmark = pytest.mark.unit

SOURCES = tuple(f"PMT-{idx}.txt" for idx in range(7))


def test_reconcile_without_prior_selection_picks_first_five() -> None:
    """Default to the first five sorted sources."""

    assert reconcile_selection(None, SOURCES) == SOURCES[:5]
    assert reconcile_selection(None, SOURCES[:2]) == SOURCES[:2]
    assert reconcile_selection(None, SOURCES, limit=1) == SOURCES[:1]


def test_reconcile_drops_sources_missing_from_snapshot() -> None:
    """Keep only previously selected sources that still exist."""

    previous = ("PMT-6.txt", "gone.txt", "PMT-1.txt")
    assert reconcile_selection(previous, SOURCES) == ("PMT-6.txt", "PMT-1.txt")


def test_reconcile_keeps_an_explicitly_empty_selection() -> None:
    """Do not re-apply the default when the user cleared the selection."""

    assert reconcile_selection((), SOURCES) == ()


def test_toggle_adds_then_removes_a_source() -> None:
    """Append a new source and remove it on the second toggle."""

    state = ExplorerState(selected_sources=("PMT-0.txt",))
    toggled = state.toggle("PMT-3.txt")

    assert toggled.selected_sources == ("PMT-0.txt", "PMT-3.txt")
    assert toggled.toggle("PMT-0.txt").selected_sources == ("PMT-3.txt",)
    assert state.selected_sources == ("PMT-0.txt",)


def test_select_all_and_clear() -> None:
    """Select every available source, then none."""

    state = ExplorerState().select_all(SOURCES)
    assert state.selected_sources == SOURCES
    assert state.clear().selected_sources == ()


def test_reconciled_state_preserves_metric() -> None:
    """Drop stale sources without touching the plotted metric."""

    state = ExplorerState(selected_sources=("gone.txt", "PMT-2.txt"), metric=MetricKey.current)
    reconciled = state.reconciled(SOURCES)

    assert reconciled.selected_sources == ("PMT-2.txt",)
    assert reconciled.metric is MetricKey.current


def test_with_metric_resolves_strings_and_rejects_unknown_keys() -> None:
    """Accept enum values as strings and fail fast on anything else."""

    assert ExplorerState().metric is DEFAULT_METRIC
    assert ExplorerState().with_metric("intensity").metric is MetricKey.intensity
    with pytest.raises(UnknownMetricKey):
        ExplorerState().with_metric("Intensity")


def test_resolve_metric_rejects_non_strings() -> None:
    """Reject values that are neither MetricKey members nor strings."""

    with pytest.raises(UnknownMetricKey) as excinfo:
        resolve_metric(3)  # type: ignore[arg-type]
    assert excinfo.value.key == 3

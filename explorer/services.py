"""Chart rendering service bound to a live measurement store."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict

from charting.dto import SceneDescription
from charting.engine import render_chart
from charting.metrics import DEFAULT_METRIC, resolve_metric
from charting.selection import ExplorerState, reconcile_selection

from .config import ExplorerConfig
from .store import MeasurementStore, StoreSnapshot

logger = logging.getLogger(__name__)

SCENE_CACHE_SIZE = 256

SceneKey = tuple[int, tuple[str, ...], str]


class ChartService:
    """Render scenes from the latest store snapshot.

    The service subscribes to the store and keeps the most recent snapshot.
    Rendered scenes are memoized per (snapshot version, selection, metric) in
    a least-recently-used cache of at most `cache_size` entries; the memo is
    cleared on every change notification.
    """

    def __init__(
        self,
        *,
        store: MeasurementStore,
        config: ExplorerConfig,
        cache_size: int = SCENE_CACHE_SIZE,
    ) -> None:
        if cache_size < 1:
            raise ValueError(f"cache_size must be at least 1, got {cache_size}.")
        self.store = store
        self.config = config
        self.cache_size = cache_size
        self._lock = threading.Lock()
        self._snapshot: StoreSnapshot | None = None
        self._scenes: OrderedDict[SceneKey, SceneDescription] = OrderedDict()
        self._unsubscribe = store.subscribe(self._on_snapshot)

    @property
    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            if self._snapshot is None:  # pragma: no cover
                raise RuntimeError("ChartService has not received a snapshot yet.")
            return self._snapshot

    def resolve_state(
        self,
        *,
        selected_sources: list[str] | None,
        metric: str | None = None,
    ) -> ExplorerState:
        """Build a validated ExplorerState against the current snapshot.

        Args:
            selected_sources: Requested selection, or None for the default
                selection (first N available sources).
            metric: Requested metric key, or None for the default metric.

        Raises:
            UnknownMetricKey: When `metric` is not a MetricKey value.
        """

        sources = reconcile_selection(
            selected_sources,
            self.snapshot.sources,
            limit=self.config.default_selection_limit,
        )
        return ExplorerState(
            selected_sources=sources,
            metric=resolve_metric(metric) if metric else DEFAULT_METRIC,
        )

    def render(self, state: ExplorerState) -> SceneDescription:
        """Render (or reuse) the scene for `state` on the current snapshot."""

        snapshot = self.snapshot
        key = (snapshot.version, state.selected_sources, state.metric.value)
        with self._lock:
            cached = self._scenes.get(key)
            if cached is not None:
                self._scenes.move_to_end(key)
                return cached

        scene = render_chart(
            snapshot.points,
            state.selected_sources,
            state.metric,
            sizing=self.config.sizing,
        )
        with self._lock:
            if self._snapshot is not None and self._snapshot.version == snapshot.version:
                self._scenes[key] = scene
                while len(self._scenes) > self.cache_size:
                    self._scenes.popitem(last=False)
        return scene

    def close(self) -> None:
        """Stop listening to the store."""

        self._unsubscribe()
        with self._lock:
            self._scenes.clear()

    def _on_snapshot(self, snapshot: StoreSnapshot) -> None:
        with self._lock:
            # Notifications from concurrent writers can arrive out of order.
            if self._snapshot is not None and snapshot.version <= self._snapshot.version:
                logger.debug(
                    "Chart service ignored stale snapshot version=%s (current=%s).",
                    snapshot.version,
                    self._snapshot.version,
                )
                return
            self._snapshot = snapshot
            self._scenes.clear()
        logger.debug("Chart service received snapshot version=%s.", snapshot.version)

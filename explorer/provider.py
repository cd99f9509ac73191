"""Process-wide access to the measurement store and chart service."""

from __future__ import annotations

import threading

from django.conf import settings

from .config import ExplorerConfig, load_explorer_config
from .seeding import load_dataset, seed_if_empty
from .services import ChartService
from .store import MeasurementStore

_lock = threading.Lock()
_store: MeasurementStore | None = None
_service: ChartService | None = None


def get_config() -> ExplorerConfig:
    """Return the validated explorer configuration from Django settings."""

    return load_explorer_config(settings)


def get_store() -> MeasurementStore:
    """Return the shared store, creating and seeding it on first use."""

    global _store
    with _lock:
        if _store is None:
            config = get_config()
            store = MeasurementStore(config.collection_path)
            if config.seed_on_startup:
                seed_if_empty(store, load_dataset(config.seed_dataset_path))
            _store = store
        return _store


def get_chart_service() -> ChartService:
    """Return the shared ChartService bound to the shared store."""

    global _service
    store = get_store()
    with _lock:
        if _service is None or _service.store is not store:
            _service = ChartService(store=store, config=get_config())
        return _service


def reset_store() -> None:
    """Drop the shared store and service (used by tests)."""

    global _store, _service
    with _lock:
        if _service is not None:
            _service.close()
        _store = None
        _service = None

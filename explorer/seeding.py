"""Dataset loading and first-run seeding of the measurement store."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .store import MeasurementStore

logger = logging.getLogger(__name__)


class DatasetError(ValueError):
    """Raised when a dataset file cannot be read as a list of records."""


def load_dataset(path: Path | str) -> list[dict[str, Any]]:
    """Load measurement records from a YAML file.

    Args:
        path: YAML file containing a top-level list of mappings.

    Returns:
        The records as plain dicts (not yet validated as measurements).

    Raises:
        DatasetError: When the file is missing, is not valid YAML, or does
            not contain a list of mappings.
    """

    dataset_path = Path(path)
    try:
        raw = dataset_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetError(f"Could not read dataset {dataset_path}: {exc}") from exc

    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DatasetError(f"Dataset {dataset_path} is not valid YAML: {exc}") from exc

    if payload is None:
        return []
    if not isinstance(payload, list) or not all(isinstance(item, Mapping) for item in payload):
        raise DatasetError(f"Dataset {dataset_path} must be a list of records.")
    return [dict(item) for item in payload]


def seed_if_empty(store: MeasurementStore, dataset: Sequence[Mapping[str, Any]]) -> int:
    """Populate an empty store with `dataset`.

    Documents receive predictable ids (`entry_0`, `entry_1`, ...). A store
    that already holds any document is left untouched, so repeated calls are
    no-ops.

    Returns:
        Number of documents written (0 when the store was not empty).
    """

    if not store.is_empty():
        return 0

    logger.info("Seeding %s with %s default PMT records.", store.collection_path, len(dataset))
    written = store.set_documents((f"entry_{index}", record) for index, record in enumerate(dataset))
    logger.info("Seeded %s successfully.", store.collection_path)
    return written

"""In-memory measurement document store.

The store plays the role of the hosted document collection: documents are
keyed by id, every write bumps a version counter, and subscribers are told
about each new snapshot. Nothing is persisted; the store lives as long as the
process.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from charting.dto import MeasurementPoint
from charting.metrics import MetricKey

logger = logging.getLogger(__name__)

SOURCE_FIELD = "source_file"
WAVELENGTH_FIELD = "wavelength"

SnapshotListener = Callable[["StoreSnapshot"], None]


class InvalidMeasurementDocument(ValueError):
    """Raised when a document cannot be converted into a MeasurementPoint."""

    def __init__(self, *, doc_id: str, reason: str) -> None:
        """Initialize the error.

        Args:
            doc_id: Offending document id.
            reason: Human-readable description of the problem.
        """

        super().__init__(f"Invalid measurement document {doc_id!r}: {reason}")
        self.doc_id = doc_id
        self.reason = reason


@dataclass(frozen=True)
class StoreSnapshot:
    """An immutable view of the collection at a given version."""

    version: int
    points: tuple[MeasurementPoint, ...]

    @property
    def sources(self) -> tuple[str, ...]:
        return tuple(sorted({p.source_id for p in self.points}))


def document_to_point(doc_id: str, data: Mapping[str, Any]) -> MeasurementPoint:
    """Validate a raw document and convert it to a MeasurementPoint.

    Args:
        doc_id: Document id (used in error messages).
        data: Raw document fields.

    Returns:
        MeasurementPoint carrying every MetricKey value.

    Raises:
        InvalidMeasurementDocument: When the source is blank or any numeric
            field is missing, non-numeric or non-finite.
    """

    source_id = data.get(SOURCE_FIELD)
    if not isinstance(source_id, str) or not source_id.strip():
        raise InvalidMeasurementDocument(doc_id=doc_id, reason=f"{SOURCE_FIELD} must be a non-empty string.")

    wavelength = _finite_float(doc_id, data, WAVELENGTH_FIELD)
    values = {metric: _finite_float(doc_id, data, metric.value) for metric in MetricKey}
    return MeasurementPoint(source_id=source_id.strip(), wavelength=wavelength, metric_values=values)


def _finite_float(doc_id: str, data: Mapping[str, Any], field: str) -> float:
    raw = data.get(field)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise InvalidMeasurementDocument(doc_id=doc_id, reason=f"{field} must be a number, got {raw!r}.")
    value = float(raw)
    if not math.isfinite(value):
        raise InvalidMeasurementDocument(doc_id=doc_id, reason=f"{field} must be finite, got {raw!r}.")
    return value


class MeasurementStore:
    """Thread-safe in-memory collection of measurement documents."""

    def __init__(self, collection_path: str) -> None:
        self.collection_path = collection_path
        self._lock = threading.RLock()
        self._documents: dict[str, MeasurementPoint] = {}
        self._version = 0
        self._listeners: list[SnapshotListener] = []

    def count(self) -> int:
        with self._lock:
            return len(self._documents)

    def is_empty(self) -> bool:
        return self.count() == 0

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def snapshot(self) -> StoreSnapshot:
        """Return the current documents as MeasurementPoints, ordered by id."""

        with self._lock:
            return self._snapshot_locked()

    def set_document(self, doc_id: str, data: Mapping[str, Any]) -> None:
        """Create or replace a single document."""

        self.set_documents([(doc_id, data)])

    def set_documents(self, items: Iterable[tuple[str, Mapping[str, Any]]]) -> int:
        """Create or replace several documents with a single change notification.

        All documents are validated before any is written.

        Returns:
            Number of documents written.
        """

        converted = [(doc_id, document_to_point(doc_id, data)) for doc_id, data in items]
        if not converted:
            return 0
        with self._lock:
            for doc_id, point in converted:
                self._documents[doc_id] = point
            snapshot = self._bump_locked()
        self._notify(snapshot)
        return len(converted)

    def delete_document(self, doc_id: str) -> bool:
        """Delete a document; returns False when it did not exist."""

        with self._lock:
            if self._documents.pop(doc_id, None) is None:
                return False
            snapshot = self._bump_locked()
        self._notify(snapshot)
        return True

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register a snapshot listener.

        The listener is called immediately with the current snapshot and then
        after every change.

        Returns:
            A callable that removes the listener.
        """

        with self._lock:
            self._listeners.append(listener)
            snapshot = self._snapshot_locked()
        listener(snapshot)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _snapshot_locked(self) -> StoreSnapshot:
        points = tuple(self._documents[doc_id] for doc_id in sorted(self._documents))
        return StoreSnapshot(version=self._version, points=points)

    def _bump_locked(self) -> StoreSnapshot:
        self._version += 1
        return self._snapshot_locked()

    def _notify(self, snapshot: StoreSnapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)
        logger.debug(
            "Collection %s changed (version=%s, documents=%s); notifying %s listener(s).",
            self.collection_path,
            snapshot.version,
            len(snapshot.points),
            len(listeners),
        )
        for listener in listeners:
            listener(snapshot)

"""Pytest fixtures shared across chart engine and explorer tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

import pytest

from charting.dto import MeasurementPoint
from charting.metrics import MetricKey

J23 = "J23-1062.txt"
A24 = "A24-1080.txt"

DEFAULT_DOCUMENTS: tuple[dict[str, object], ...] = (
    {"source_file": J23, "current": -4.7751e-10, "intensity": 176.41, "wavelength": 205.988, "light_response": 2.7068e-12},
    {"source_file": J23, "current": -7.0588e-10, "intensity": 319.546, "wavelength": 216.824, "light_response": 2.209e-12},
    {"source_file": J23, "current": -1.1942e-09, "intensity": 581.395, "wavelength": 226.52, "light_response": 2.0539e-12},
    {"source_file": J23, "current": -2.1352e-09, "intensity": 1032.77, "wavelength": 237.356, "light_response": 2.0674e-12},
    {"source_file": J23, "current": -3.5917e-09, "intensity": 1534.44, "wavelength": 248.192, "light_response": 2.3407e-12},
    {"source_file": A24, "current": -1.3444e-08, "intensity": 3682.72, "wavelength": 280.7, "light_response": 3.6506e-12},
    {"source_file": A24, "current": -1.7417e-08, "intensity": 4439.29, "wavelength": 291.536, "light_response": 3.9235e-12},
    {"source_file": A24, "current": -2.1577e-08, "intensity": 4655.17, "wavelength": 302.372, "light_response": 4.635e-12},
    {"source_file": A24, "current": -2.6307e-08, "intensity": 5135.2, "wavelength": 313.208, "light_response": 5.1229e-12},
    {"source_file": A24, "current": -3.0302e-08, "intensity": 5416.59, "wavelength": 323.474, "light_response": 5.5942e-12},
    {"source_file": A24, "current": -3.3499e-08, "intensity": 6589.64, "wavelength": 333.739, "light_response": 5.0837e-12},
)

PointFactory = Callable[..., MeasurementPoint]


def make_point(
    source_id: str,
    wavelength: float,
    *,
    light_response: float = 1.0e-12,
    current: float = -1.0e-9,
    intensity: float = 100.0,
) -> MeasurementPoint:
    """Build a MeasurementPoint with every metric populated."""

    return MeasurementPoint(
        source_id=source_id,
        wavelength=wavelength,
        metric_values={
            MetricKey.light_response: light_response,
            MetricKey.current: current,
            MetricKey.intensity: intensity,
        },
    )


@pytest.fixture
def point_factory() -> PointFactory:
    """Return the MeasurementPoint builder."""

    return make_point


@pytest.fixture
def default_points() -> tuple[MeasurementPoint, ...]:
    """Return the default two-PMT dataset as MeasurementPoints (shuffled order)."""

    points = [
        make_point(
            str(doc["source_file"]),
            float(doc["wavelength"]),  # type: ignore[arg-type]
            light_response=float(doc["light_response"]),  # type: ignore[arg-type]
            current=float(doc["current"]),  # type: ignore[arg-type]
            intensity=float(doc["intensity"]),  # type: ignore[arg-type]
        )
        for doc in DEFAULT_DOCUMENTS
    ]
    return tuple(reversed(points))


@pytest.fixture(autouse=True)
def fresh_provider() -> Iterator[None]:
    """Give every test its own process-wide explorer store."""

    from explorer.provider import reset_store

    reset_store()
    yield
    reset_store()


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no request handling or file IO.
    - `integration`: tests touching Django views, commands, settings, or files.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )

"""Explorer runtime configuration.

All deployment-specific values live in `settings.PMT_EXPLORER` and are
validated once at startup into an immutable `ExplorerConfig`. Invalid or
missing required values raise `ImproperlyConfigured` immediately instead of
surfacing later as rendering errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from django.core.exceptions import ImproperlyConfigured

from charting.dto import ChartSizing
from charting.errors import InvalidChartSizing

DEFAULT_DATASET_PATH = Path(__file__).resolve().parent / "fixtures" / "default_pmt_data.yaml"


@dataclass(frozen=True, slots=True)
class ExplorerConfig:
    """Validated explorer configuration.

    Args:
        app_id: Application identifier used to namespace the data collection.
        chart_width: Chart viewport width in pixels.
        chart_height: Chart viewport height in pixels.
        chart_padding: Chart padding in pixels.
        default_selection_limit: Number of sources selected by default.
        seed_on_startup: Whether an empty store is seeded with the default dataset.
        seed_dataset_path: YAML dataset used for seeding.
    """

    app_id: str
    chart_width: int = 700
    chart_height: int = 400
    chart_padding: int = 50
    default_selection_limit: int = 5
    seed_on_startup: bool = True
    seed_dataset_path: Path = DEFAULT_DATASET_PATH

    @property
    def collection_path(self) -> str:
        """Return the document collection path for this application."""

        return f"artifacts/{self.app_id}/public/data/pmt_data"

    @property
    def sizing(self) -> ChartSizing:
        return ChartSizing(width=self.chart_width, height=self.chart_height, padding=self.chart_padding)


def load_explorer_config(settings_obj: Any) -> ExplorerConfig:
    """Build and validate an ExplorerConfig from Django settings.

    Args:
        settings_obj: Object exposing a `PMT_EXPLORER` mapping (usually
            `django.conf.settings`).

    Returns:
        A validated ExplorerConfig.

    Raises:
        ImproperlyConfigured: When `PMT_EXPLORER` is missing, `APP_ID` is
            blank, or any numeric value is invalid.
    """

    raw = getattr(settings_obj, "PMT_EXPLORER", None)
    if not isinstance(raw, dict):
        raise ImproperlyConfigured("PMT_EXPLORER must be configured as a dict in settings.")

    app_id = str(raw.get("APP_ID") or "").strip()
    if not app_id:
        raise ImproperlyConfigured("PMT_EXPLORER['APP_ID'] is required.")
    if "/" in app_id:
        raise ImproperlyConfigured(f"PMT_EXPLORER['APP_ID'] must not contain '/': {app_id!r}.")

    width = _positive_int(raw, "CHART_WIDTH", default=700)
    height = _positive_int(raw, "CHART_HEIGHT", default=400)
    padding = _positive_int(raw, "CHART_PADDING", default=50, allow_zero=True)
    limit = _positive_int(raw, "DEFAULT_SELECTION_LIMIT", default=5, allow_zero=True)

    try:
        ChartSizing(width=width, height=height, padding=padding)
    except InvalidChartSizing as exc:
        raise ImproperlyConfigured(str(exc)) from exc

    dataset_path = Path(raw.get("SEED_DATASET_PATH") or DEFAULT_DATASET_PATH)
    seed_on_startup = raw.get("SEED_ON_STARTUP", True)
    if not isinstance(seed_on_startup, bool):
        raise ImproperlyConfigured(
            f"PMT_EXPLORER['SEED_ON_STARTUP'] must be a bool, got {seed_on_startup!r}."
        )
    if seed_on_startup and not dataset_path.is_file():
        raise ImproperlyConfigured(f"PMT_EXPLORER['SEED_DATASET_PATH'] does not exist: {dataset_path}.")

    return ExplorerConfig(
        app_id=app_id,
        chart_width=width,
        chart_height=height,
        chart_padding=padding,
        default_selection_limit=limit,
        seed_on_startup=seed_on_startup,
        seed_dataset_path=dataset_path,
    )


def _positive_int(raw: dict[str, Any], key: str, *, default: int, allow_zero: bool = False) -> int:
    """Read an integer option, rejecting negatives (and zero unless allowed)."""

    value = raw.get(key, default)
    try:
        parsed = int(value)
    except (TypeError, ValueError) as exc:
        raise ImproperlyConfigured(f"PMT_EXPLORER[{key!r}] must be an integer, got {value!r}.") from exc
    if parsed < 0 or (parsed == 0 and not allow_zero):
        raise ImproperlyConfigured(f"PMT_EXPLORER[{key!r}] must be positive, got {parsed}.")
    return parsed

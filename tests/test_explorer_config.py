"""Tests for PMT_EXPLORER configuration validation."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from django.core.exceptions import ImproperlyConfigured

from explorer.config import DEFAULT_DATASET_PATH, load_explorer_config

pytestmark = pytest.mark.unit


def _settings(**overrides: object) -> SimpleNamespace:
    raw: dict[str, object] = {"APP_ID": "pmt-lab"}
    raw.update(overrides)
    return SimpleNamespace(PMT_EXPLORER=raw)


def test_load_config_applies_defaults() -> None:
    """Fill optional values and derive the collection path."""

    config = load_explorer_config(_settings())

    assert config.app_id == "pmt-lab"
    assert config.collection_path == "artifacts/pmt-lab/public/data/pmt_data"
    assert (config.chart_width, config.chart_height, config.chart_padding) == (700, 400, 50)
    assert config.default_selection_limit == 5
    assert config.seed_on_startup is True
    assert config.seed_dataset_path == DEFAULT_DATASET_PATH
    assert config.sizing.width == 700


def test_missing_settings_block_fails_fast() -> None:
    """Require the PMT_EXPLORER dict."""

    with pytest.raises(ImproperlyConfigured):
        load_explorer_config(SimpleNamespace())


@pytest.mark.parametrize("app_id", ["", "   ", None, "a/b"])
def test_invalid_app_id_fails_fast(app_id: object) -> None:
    """Reject blank or path-like application ids."""

    with pytest.raises(ImproperlyConfigured):
        load_explorer_config(_settings(APP_ID=app_id))


@pytest.mark.parametrize(
    "overrides",
    [
        {"CHART_WIDTH": "wide"},
        {"CHART_WIDTH": 0},
        {"CHART_HEIGHT": -10},
        {"CHART_WIDTH": 90, "CHART_PADDING": 50},
        {"DEFAULT_SELECTION_LIMIT": -1},
    ],
)
def test_invalid_numeric_options_fail_fast(overrides: dict[str, object]) -> None:
    """Reject non-integer, negative, or unusable chart sizes."""

    with pytest.raises(ImproperlyConfigured):
        load_explorer_config(_settings(**overrides))


def test_missing_seed_dataset_fails_only_when_seeding(tmp_path) -> None:
    """Require the seed dataset file only when seeding is enabled."""

    missing = tmp_path / "missing.yaml"
    with pytest.raises(ImproperlyConfigured):
        load_explorer_config(_settings(SEED_DATASET_PATH=str(missing)))

    config = load_explorer_config(_settings(SEED_DATASET_PATH=str(missing), SEED_ON_STARTUP=False))
    assert config.seed_on_startup is False


@pytest.mark.parametrize("value", ["false", "0", 1, None])
def test_seed_on_startup_requires_a_bool(value: object) -> None:
    """Reject strings and other truthy stand-ins for the seeding flag."""

    with pytest.raises(ImproperlyConfigured):
        load_explorer_config(_settings(SEED_ON_STARTUP=value))

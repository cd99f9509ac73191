"""Integration tests for YAML dataset loading."""

from __future__ import annotations

import pytest

from explorer.config import DEFAULT_DATASET_PATH
from explorer.seeding import DatasetError, load_dataset
from explorer.store import document_to_point

pytestmark = pytest.mark.integration


def test_bundled_dataset_holds_two_devices() -> None:
    """Ship eleven valid records for two PMT serial numbers."""

    records = load_dataset(DEFAULT_DATASET_PATH)
    points = [document_to_point(f"entry_{i}", record) for i, record in enumerate(records)]

    assert len(points) == 11
    assert sorted({p.source_id for p in points}) == ["A24-1080.txt", "J23-1062.txt"]
    assert sum(p.source_id == "J23-1062.txt" for p in points) == 5


def test_empty_file_loads_as_no_records(tmp_path) -> None:
    """Treat an empty YAML document as an empty dataset."""

    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_dataset(path) == []


@pytest.mark.parametrize("content", ["just text", "- 1\n- 2\n", "[unclosed"])
def test_non_record_content_is_rejected(tmp_path, content: str) -> None:
    """Reject scalars, lists of non-mappings, and invalid YAML."""

    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(DatasetError):
        load_dataset(path)


def test_missing_file_is_rejected(tmp_path) -> None:
    """Wrap read errors in DatasetError."""

    with pytest.raises(DatasetError):
        load_dataset(tmp_path / "absent.yaml")

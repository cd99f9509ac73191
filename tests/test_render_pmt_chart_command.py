"""Integration tests for the render_pmt_chart management command."""

from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = pytest.mark.integration


def _run(*args: str) -> str:
    out = StringIO()
    call_command("render_pmt_chart", *args, stdout=out)
    return out.getvalue()


def test_command_renders_svg_for_default_selection() -> None:
    """Write SVG for the seeded collection to stdout."""

    output = _run()

    assert output.lstrip().startswith("<svg")
    assert output.count('<g class="series"') == 2


def test_command_renders_scene_json() -> None:
    """Emit the scene description for an explicit source and metric."""

    payload = json.loads(_run("--source=J23-1062.txt", "--metric=current", "--format=json"))

    assert payload["metric"] == "current"
    assert [s["source_id"] for s in payload["series"]] == ["J23-1062.txt"]
    assert payload["title"] == "Current (A) vs. Wavelength (nm)"


def test_command_rejects_unknown_metric() -> None:
    """Surface unknown metrics as a CommandError."""

    with pytest.raises(CommandError):
        _run("--metric=voltage")


def test_command_reads_dataset_file_and_writes_output(tmp_path) -> None:
    """Plot a private YAML dataset and write the result to a file."""

    dataset = tmp_path / "lab.yaml"
    dataset.write_text(
        "\n".join(
            [
                "- {source_file: L01.txt, wavelength: 300.0, current: -1.0e-9, intensity: 10.0, light_response: 1.0e-12}",
                "- {source_file: L01.txt, wavelength: 310.0, current: -2.0e-9, intensity: 20.0, light_response: 2.0e-12}",
            ]
        ),
        encoding="utf-8",
    )
    target = tmp_path / "chart.json"

    message = _run(f"--data={dataset}", "--format=json", f"--output={target}")

    assert "Wrote json chart" in message
    payload = json.loads(target.read_text(encoding="utf-8"))
    assert [s["source_id"] for s in payload["series"]] == ["L01.txt"]
    assert len(payload["series"][0]["vertices"]) == 2


def test_command_rejects_malformed_dataset(tmp_path) -> None:
    """Report invalid dataset records as a CommandError."""

    dataset = tmp_path / "broken.yaml"
    dataset.write_text("- {source_file: '', wavelength: 300.0}\n", encoding="utf-8")

    with pytest.raises(CommandError):
        _run(f"--data={dataset}")

    dataset.write_text("source_file: not-a-list\n", encoding="utf-8")
    with pytest.raises(CommandError):
        _run(f"--data={dataset}")


def test_command_reports_unwritable_output(tmp_path) -> None:
    """Surface output write failures as a CommandError."""

    target = tmp_path / "missing-dir" / "chart.svg"

    with pytest.raises(CommandError):
        _run(f"--output={target}")

"""Render a PMT chart to SVG or JSON from the command line."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from charting.errors import UnknownMetricKey
from charting.metrics import DEFAULT_METRIC, MetricKey
from explorer.config import ExplorerConfig
from explorer.provider import get_config, get_store
from explorer.seeding import DatasetError, load_dataset, seed_if_empty
from explorer.services import ChartService
from explorer.store import InvalidMeasurementDocument, MeasurementStore
from explorer.svg import render_scene_svg


class Command(BaseCommand):
    """Render the chart for a selection of PMT sources."""

    help = "Render a PMT chart (SVG or scene JSON) for the selected sources and metric."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--source",
            action="append",
            dest="sources",
            help="Source id to plot (repeatable). Defaults to the first sources in the collection.",
        )
        parser.add_argument(
            "--metric",
            default=DEFAULT_METRIC.value,
            help=f"Metric to plot: {', '.join(m.value for m in MetricKey)} (default: {DEFAULT_METRIC.value}).",
        )
        parser.add_argument(
            "--data",
            help="YAML dataset to plot instead of the shared collection.",
        )
        parser.add_argument(
            "--format",
            choices=("svg", "json"),
            default="svg",
            help="Output format (default: svg).",
        )
        parser.add_argument(
            "--output",
            help="Write to this file instead of stdout.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        config = get_config()
        store = self._store_for(options.get("data"), config=config)
        service = ChartService(store=store, config=config)
        try:
            state = service.resolve_state(selected_sources=options.get("sources"), metric=options["metric"])
            scene = service.render(state)
        except UnknownMetricKey as exc:
            raise CommandError(str(exc)) from exc
        finally:
            service.close()

        if options["format"] == "json":
            rendered = json.dumps(scene.to_dict(), indent=2)
        else:
            rendered = str(render_scene_svg(scene))

        output = options.get("output")
        if output:
            try:
                Path(output).write_text(rendered, encoding="utf-8")
            except OSError as exc:
                raise CommandError(f"Could not write {output}: {exc}") from exc
            self.stdout.write(
                f"Wrote {options['format']} chart for sources={list(state.selected_sources)} "
                f"metric={state.metric.value} to {output}"
            )
        else:
            self.stdout.write(rendered)
        return None

    def _store_for(self, data_path: str | None, *, config: ExplorerConfig) -> MeasurementStore:
        """Return the shared store, or a private store loaded from `data_path`."""

        if not data_path:
            return get_store()
        store = MeasurementStore(config.collection_path)
        try:
            seed_if_empty(store, load_dataset(data_path))
        except (DatasetError, InvalidMeasurementDocument) as exc:
            raise CommandError(str(exc)) from exc
        return store

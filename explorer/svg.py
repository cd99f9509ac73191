"""SVG presentation of chart scenes."""

from __future__ import annotations

from django.template.loader import render_to_string
from django.utils.safestring import SafeString

from charting.dto import SceneDescription

CHART_TEMPLATE = "explorer/chart.svg"


def render_scene_svg(scene: SceneDescription) -> SafeString:
    """Render a scene as standalone SVG markup.

    Elements are emitted in scene draw order; marker tooltips become SVG
    `<title>` children so browsers show them on hover.
    """

    return render_to_string(CHART_TEMPLATE, {"scene": scene})

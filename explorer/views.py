"""Views for the PMT data explorer."""

from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse, QueryDict
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET

from charting.metrics import METRIC_DEFINITIONS
from charting.selection import ExplorerState

from .forms import ACTION_CLEAR, ACTION_SELECT_ALL, ACTION_TOGGLE, ChartSelectionForm
from .provider import get_chart_service
from .svg import render_scene_svg

logger = logging.getLogger(__name__)


def _requested_sources(request: HttpRequest) -> list[str] | None:
    """Return the requested selection, or None when no selection was given.

    An explicitly empty selection is encoded as a single blank `sources`
    value so that "cleared" and "never selected" stay distinguishable.
    """

    if "sources" not in request.GET:
        return None
    return [value for value in request.GET.getlist("sources") if value.strip()]


def _state_query(state: ExplorerState, **extra: str) -> str:
    """Encode an ExplorerState (plus optional action params) as a query string."""

    params = QueryDict(mutable=True)
    params.setlist("sources", list(state.selected_sources) or [""])
    params["metric"] = state.metric.value
    for key, value in extra.items():
        params[key] = value
    return params.urlencode()


def _bad_request(request: HttpRequest, form: ChartSelectionForm) -> HttpResponse:
    logger.warning("Rejected explorer request %s: %s", request.get_full_path(), form.errors.as_json())
    return render(request, "explorer/error.html", {"form": form}, status=400)


def _resolve(request: HttpRequest) -> tuple[ChartSelectionForm, ExplorerState | None]:
    """Validate the query string and build the current ExplorerState."""

    form = ChartSelectionForm(request.GET)
    if not form.is_valid():
        return form, None
    state = get_chart_service().resolve_state(
        selected_sources=_requested_sources(request),
        metric=form.cleaned_data["metric"],
    )
    return form, state


@require_GET
def dashboard(request: HttpRequest) -> HttpResponse:
    """Render the explorer page: controls, chart, legend."""

    form, state = _resolve(request)
    if state is None:
        return _bad_request(request, form)

    service = get_chart_service()
    snapshot = service.snapshot
    available = snapshot.sources

    action = form.cleaned_data.get("action")
    if action:
        if action == ACTION_TOGGLE:
            state = state.toggle(form.cleaned_data["source"].strip())
        elif action == ACTION_SELECT_ALL:
            state = state.select_all(available)
        elif action == ACTION_CLEAR:
            state = state.clear()
        state = state.reconciled(available)
        return redirect(f"{reverse('explorer:dashboard')}?{_state_query(state)}")

    scene = service.render(state)
    colors = {entry.source_id: entry.color for entry in scene.legend}
    source_buttons = [
        {
            "source_id": source_id,
            "selected": source_id in state.selected_sources,
            "color": colors.get(source_id),
            "query": _state_query(state, action=ACTION_TOGGLE, source=source_id),
        }
        for source_id in available
    ]
    metric_buttons = [
        {
            "key": definition.key.value,
            "label": definition.axis_title,
            "active": definition.key is state.metric,
            "query": _state_query(state.with_metric(definition.key)),
        }
        for definition in METRIC_DEFINITIONS
    ]

    context = {
        "scene": scene,
        "chart_svg": render_scene_svg(scene),
        "source_buttons": source_buttons,
        "metric_buttons": metric_buttons,
        "selected_count": len(state.selected_sources),
        "available_count": len(available),
        "select_all_query": _state_query(state, action=ACTION_SELECT_ALL),
        "clear_query": _state_query(state, action=ACTION_CLEAR),
        "state_query": _state_query(state),
        "collection_path": service.store.collection_path,
        "snapshot_version": snapshot.version,
    }
    return render(request, "explorer/dashboard.html", context)


@require_GET
def chart_svg(request: HttpRequest) -> HttpResponse:
    """Return the current chart as a standalone SVG document."""

    form, state = _resolve(request)
    if state is None:
        return _bad_request(request, form)
    scene = get_chart_service().render(state)
    return HttpResponse(render_scene_svg(scene), content_type="image/svg+xml")


@require_GET
def scene_api(request: HttpRequest) -> JsonResponse:
    """Return the scene description for the requested selection as JSON."""

    form, state = _resolve(request)
    if state is None:
        logger.warning("Rejected scene request %s: %s", request.get_full_path(), form.errors.as_json())
        return JsonResponse({"errors": form.errors.get_json_data()}, status=400)
    scene = get_chart_service().render(state)
    return JsonResponse(
        {
            "selected_sources": list(state.selected_sources),
            "metric": state.metric.value,
            "scene": scene.to_dict(),
        }
    )


@require_GET
def snapshot_api(request: HttpRequest) -> JsonResponse:
    """Return the current snapshot version so pages can refresh on change."""

    snapshot = get_chart_service().snapshot
    return JsonResponse(
        {
            "version": snapshot.version,
            "count": len(snapshot.points),
            "sources": list(snapshot.sources),
        }
    )

"""Forms for the explorer dashboard controls."""

from __future__ import annotations

from django import forms

from charting.metrics import DEFAULT_METRIC, METRIC_DEFINITIONS

ACTION_TOGGLE = "toggle"
ACTION_SELECT_ALL = "select_all"
ACTION_CLEAR = "clear"


class ChartSelectionForm(forms.Form):
    """Validate the metric and optional selection action from the query string.

    Source ids are not validated here: stale ids are dropped against the live
    snapshot instead of rejected.
    """

    metric = forms.ChoiceField(
        required=False,
        choices=[(d.key.value, d.axis_title) for d in METRIC_DEFINITIONS],
        label="Y-Axis Metric",
    )
    action = forms.ChoiceField(
        required=False,
        choices=[
            ("", "---"),
            (ACTION_TOGGLE, "Toggle source"),
            (ACTION_SELECT_ALL, "Select All"),
            (ACTION_CLEAR, "Clear Selection"),
        ],
    )
    source = forms.CharField(required=False, max_length=255)

    def clean_metric(self) -> str:
        return self.cleaned_data.get("metric") or DEFAULT_METRIC.value

    def clean(self) -> dict[str, object]:
        cleaned = super().clean()
        if cleaned.get("action") == ACTION_TOGGLE and not (cleaned.get("source") or "").strip():
            self.add_error("source", "A source is required to toggle the selection.")
        return cleaned

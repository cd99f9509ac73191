"""Label and tooltip formatting for chart scenes."""

from __future__ import annotations

from .metrics import MetricKey, get_metric_definition

X_AXIS_TITLE = "Wavelength (nm)"
X_TICK_DIGITS = 0
Y_TICK_DIGITS = 2
TOOLTIP_DIGITS = 3


def format_fixed(value: float, digits: int = X_TICK_DIGITS) -> str:
    """Format a value in fixed-point notation with `digits` decimals."""

    text = f"{value:.{digits}f}"
    if text.startswith("-") and float(text) == 0:
        return text[1:]
    return text


def format_scientific(value: float, digits: int) -> str:
    """Format a value in scientific notation with a compact exponent.

    Examples:
        >>> format_scientific(2.7068e-12, 2)
        '2.71e-12'
        >>> format_scientific(176.41, 2)
        '1.76e+2'
    """

    mantissa, exponent = f"{value:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def format_tooltip(source_id: str, wavelength: float, metric: MetricKey, value: float) -> str:
    """Return the hover text for a single marker.

    Example: `J23-1062.txt: Wavelength=206.0nm, light_response=2.707e-12`.
    """

    return (
        f"{source_id}: Wavelength={format_fixed(wavelength, 1)}nm, "
        f"{metric.value}={format_scientific(value, TOOLTIP_DIGITS)}"
    )


def chart_title(metric: MetricKey) -> str:
    """Return the chart heading for the plotted metric."""

    return f"{get_metric_definition(metric).axis_title} vs. {X_AXIS_TITLE}"

"""Pure chart engine for PMT calibration measurements.

This package turns a snapshot of measurement points plus a selection into a
scene description (grid lines, ticks, polylines, markers, axes). It must not
import Django or perform any I/O.
"""

from .engine import render_chart

__all__ = ["render_chart"]

"""
OsciTrace visualization.

Static matplotlib views of an oscillator run:
- plot_time_series: position / velocity / force against time
- plot_phase_portrait: velocity against position
"""

from .static import MPL_AVAILABLE, plot_phase_portrait, plot_time_series

__all__ = [
    "MPL_AVAILABLE",
    "plot_phase_portrait",
    "plot_time_series",
]

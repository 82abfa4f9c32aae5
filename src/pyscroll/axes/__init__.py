"""
Axis state components for pyscroll.

Intervals, zoomable ranges, the axis registry that owns every bound, and the
managers that move those bounds (gestures, time-window scrolling, matplotlib).
"""

from pyscroll.axes.continuous_range import UNCONSTRAINED, ContinuousRange
from pyscroll.axes.gesture_manager import GestureManager
from pyscroll.axes.interval import Interval
from pyscroll.axes.mpl_binding import MatplotlibAxesBinding
from pyscroll.axes.registry import (
    AxesAssignment,
    AxesState,
    AxisRegistry,
    PlotDimensions,
)
from pyscroll.axes.time_window import TimeWindowBehavior, TimeWindowTracker

__all__ = [
    "Interval",
    "ContinuousRange",
    "UNCONSTRAINED",
    "AxisRegistry",
    "AxesState",
    "AxesAssignment",
    "PlotDimensions",
    "GestureManager",
    "TimeWindowTracker",
    "TimeWindowBehavior",
    "MatplotlibAxesBinding",
]

"""
PyScroll: Live Scrolling Chart Library

A library for streaming time-series into derived views (successive differences
and iterate maps) on zoomable, pannable, scrolling axes.
"""

# Import from axes subpackage
from pyscroll.axes.continuous_range import ContinuousRange
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
from pyscroll.chart import LiveChart, configure_logging
from pyscroll.errors import ConfigurationError

# Import from stream subpackage
from pyscroll.stream.aggregator import (
    DerivedExtremum,
    DerivedKind,
    DerivedStreamRecord,
    StreamAggregator,
)
from pyscroll.stream.data_manager import SeriesDataManager
from pyscroll.stream.datum import Datum, IterateDatum, RawBatch
from pyscroll.stream.windowed import IterateMap, SuccessiveDifference, WindowedTransform

__all__ = [
    # Chart
    "LiveChart",
    "configure_logging",
    "ConfigurationError",
    # Axis state
    "Interval",
    "ContinuousRange",
    "AxisRegistry",
    "AxesState",
    "AxesAssignment",
    "PlotDimensions",
    "GestureManager",
    "TimeWindowTracker",
    "TimeWindowBehavior",
    "MatplotlibAxesBinding",
    # Streams
    "Datum",
    "IterateDatum",
    "RawBatch",
    "WindowedTransform",
    "SuccessiveDifference",
    "IterateMap",
    "StreamAggregator",
    "DerivedKind",
    "DerivedExtremum",
    "DerivedStreamRecord",
    "SeriesDataManager",
]

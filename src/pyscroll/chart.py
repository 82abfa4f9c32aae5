import math
import sys
from typing import Callable, Dict, List, Optional, Tuple, Union

from loguru import logger

from .axes.continuous_range import UNCONSTRAINED, ContinuousRange
from .axes.gesture_manager import AxisIds, GestureManager
from .axes.registry import AxisRegistry
from .axes.time_window import TimeWindowBehavior, TimeWindowTracker
from .stream.aggregator import (
    DerivedKind,
    DerivedPoint,
    DerivedStreamRecord,
    StreamAggregator,
)
from .stream.data_manager import SeriesDataManager
from .stream.datum import Datum, RawBatch
from .stream.kernels import (
    difference_datums,
    iterate_datums,
    iterate_pairs,
    successive_differences,
)
from .stream.windowed import validate_window_size

DataListener = Callable[[str, List[Datum]], None]


def configure_logging(log_level: str = "INFO") -> None:
    """
    Configure loguru logging with specified level.

    Parameters
    ----------
    log_level : str, default="INFO"
        Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        colorize=True,
    )


class LiveChart:
    """
    Live chart of derived streams with zoomable, pannable, scrolling axes.

    Uses separate managers for axis bounds, gestures, time-window advancement,
    raw history and derived streams. Raw batches come in through ``on_batch``;
    every bound change reaches the renderer through the registry's listeners.
    """

    DEFAULT_KIND = DerivedKind.DIFFERENCE
    DEFAULT_WINDOW_SIZE = 1
    DEFAULT_DROP_DATA_AFTER = math.inf
    DEFAULT_TIME_WINDOW_BEHAVIOR = TimeWindowBehavior.SCROLL

    def __init__(
        self,
        kind: Union[str, DerivedKind] = DEFAULT_KIND,
        window_size: int = DEFAULT_WINDOW_SIZE,
        use_start_anchor: bool = True,
        drop_data_after: float = DEFAULT_DROP_DATA_AFTER,
        time_window_behavior: TimeWindowBehavior = DEFAULT_TIME_WINDOW_BEHAVIOR,
        scroll_time_axes: Optional[bool] = None,
        plot_dimensions: Tuple[float, float] = (0.0, 0.0),
    ):
        """
        Initialise the chart.

        Parameters
        ----------
        kind : Union[str, DerivedKind], default=DerivedKind.DIFFERENCE
            Derived stream computed from the raw data.
        window_size : int, default=1
            Lag ``n`` of the derived stream.
        use_start_anchor : bool, default=True
            For differences, whether a difference takes the older sample's time.
        drop_data_after : float, default=inf
            Raw history older than this (relative to the axis time) is dropped.
        time_window_behavior : TimeWindowBehavior, default=SCROLL
            How the x-axes follow the stream.
        scroll_time_axes : Optional[bool], default=None
            Whether the x-axes are time axes that follow the stream. Defaults to
            True for differences (plotted against time) and False for iterates
            (plotted against the lagged value).
        plot_dimensions : Tuple[float, float], default=(0.0, 0.0)
            Plot width and height handed to bound-update listeners.
        """
        self.axes = AxisRegistry(plot_dimensions)
        self.gestures = GestureManager(self.axes)
        self.time_window = TimeWindowTracker(self.axes, time_window_behavior)
        self.data = SeriesDataManager(drop_data_after)
        self.aggregator = StreamAggregator(kind, window_size, use_start_anchor)

        self.scroll_time_axes = (
            self.aggregator.kind is DerivedKind.DIFFERENCE
            if scroll_time_axes is None
            else scroll_time_axes
        )
        self.last_record: Optional[DerivedStreamRecord] = None
        self._data_listeners: Dict[str, DataListener] = {}

    @property
    def kind(self) -> DerivedKind:
        return self.aggregator.kind

    @property
    def window_size(self) -> int:
        return self.aggregator.n

    def add_x_axis(
        self, axis_id: str, initial_range: Optional[Tuple[float, float]] = None, axis=None
    ) -> None:
        """Register an x-axis; its initial start pins the window when squeezing."""
        self.axes.add_x_axis(axis, axis_id, initial_range)
        if initial_range is not None:
            self.time_window.initial_times[axis_id] = min(initial_range)

    def add_y_axis(
        self, axis_id: str, initial_range: Optional[Tuple[float, float]] = None, axis=None
    ) -> None:
        self.axes.add_y_axis(axis, axis_id, initial_range)

    def add_data_listener(self, listener_id: str, listener: DataListener) -> None:
        """Register a callback receiving the raw points of every batch, per series."""
        self._data_listeners[listener_id] = listener

    def remove_data_listener(self, listener_id: str) -> None:
        self._data_listeners.pop(listener_id, None)

    def _series_time(self, name: str, batch: RawBatch) -> float:
        if self.scroll_time_axes and len(self.axes.x_axes) > 0:
            axis_id = self.axes.x_axis_for(name)
            return self.time_window.current_times.get(axis_id, batch.max_time)
        return batch.max_times.get(name, batch.max_time)

    def on_batch(self, batch: RawBatch) -> DerivedStreamRecord:
        """
        Process one raw batch.

        Stores the raw points, updates the derived streams, moves the time axes
        when the stream has run past their end, and drops expired history.

        Parameters
        ----------
        batch : RawBatch
            New raw points per series.

        Returns
        -------
        DerivedStreamRecord
            Derived points of this batch and the updated extrema.
        """
        for name, points in batch.new_points.items():
            self.data.append(name, points)
            for listener in list(self._data_listeners.values()):
                listener(name, points)

        record = self.aggregator.process(batch)

        if self.scroll_time_axes and len(self.axes.x_axes) > 0:
            updates = self.time_window.advance(batch.max_times, batch.max_time)
            if updates:
                self.axes.update_bounds(updates)

        for name in batch.new_points:
            self.data.drop_older_than(name, self._series_time(name, batch))

        self.last_record = record
        return record

    def zoom(
        self,
        axis_ids: AxisIds,
        factor: float,
        anchor: float,
        constraint: Optional[Tuple[float, float]] = None,
    ) -> Dict[str, ContinuousRange]:
        return self.gestures.zoom(axis_ids, factor, anchor, constraint)

    def pan(
        self,
        axis_ids: AxisIds,
        delta: float,
        constraint: Tuple[float, float] = UNCONSTRAINED,
    ) -> Dict[str, ContinuousRange]:
        return self.gestures.pan(axis_ids, delta, constraint)

    def home(self) -> Dict[str, ContinuousRange]:
        """Return every axis to its original bounds."""
        return self.gestures.home()

    def derived_history(self, name: str) -> List[DerivedPoint]:
        """
        Recompute the derived series of one series from its retained history.

        Returns
        -------
        List[DerivedPoint]
            Derived points over the retained raw data.
        """
        t, x = self.data.get_series(name)
        if self.kind is DerivedKind.ITERATE:
            return iterate_datums(*iterate_pairs(t, x, self.window_size))
        return difference_datums(
            *successive_differences(t, x, self.window_size, self.aggregator.use_start_anchor)
        )

    def set_window_size(self, n: int) -> Dict[str, List[DerivedPoint]]:
        """
        Change the lag of the derived streams.

        The transforms are rebuilt and primed with the last ``n`` raw points of
        each series, so streaming continues without a gap. The derived series
        over the retained history are recomputed and returned for redrawing.

        Parameters
        ----------
        n : int
            New window size.

        Returns
        -------
        Dict[str, List[DerivedPoint]]
            Recomputed derived points per series.
        """
        n = validate_window_size(n)
        series_names = self.aggregator.series_names()
        logger.info(f"Window size changed from {self.window_size} to {n}")

        self.aggregator = StreamAggregator(self.kind, n, self.aggregator.use_start_anchor)
        history = {}
        for name in series_names:
            self.aggregator.transform_for(name).prime(self.data.last_points(name, n))
            history[name] = self.derived_history(name)
            self.aggregator.seed(name, history[name])
        return history

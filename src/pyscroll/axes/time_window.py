import math
from enum import Enum
from typing import Dict, List, Mapping, Optional

from loguru import logger

from .continuous_range import ContinuousRange
from .registry import AxisRegistry


class TimeWindowBehavior(Enum):
    """How a time axis follows the live stream."""

    # keep the window width, move the window along with the data
    SCROLL = 1
    # keep the start pinned at the initial time, widen the window
    SQUEEZE = 2


class TimeWindowTracker:
    """
    Advances the x-axes (time axes) of a registry as streamed data arrives.

    Each x-axis follows the latest timestamp among the series assigned to it.
    The tracker only computes the repositioned ranges; the caller writes them
    with ``AxisRegistry.update_bounds`` together with any other changes.
    """

    def __init__(
        self,
        registry: AxisRegistry,
        behavior: TimeWindowBehavior = TimeWindowBehavior.SCROLL,
        initial_times: Optional[Mapping[str, float]] = None,
    ):
        """
        Initialise the time-window tracker.

        Parameters
        ----------
        registry : AxisRegistry
            Registry owning the x-axes.
        behavior : TimeWindowBehavior, default=SCROLL
            Scrolling or squeezing of the time window.
        initial_times : Optional[Mapping[str, float]], default=None
            Pinned start time per axis id, used by ``SQUEEZE``. Axes without an
            entry scroll.
        """
        self.registry = registry
        self.behavior = behavior
        self.initial_times: Dict[str, float] = dict(initial_times or {})
        self.current_times: Dict[str, float] = {}

    def axis_series(self, series_names: List[str]) -> Dict[str, List[str]]:
        """Group series by the x-axis they are assigned to."""
        grouped: Dict[str, List[str]] = {}
        for name in series_names:
            axis_id = self.registry.x_axis_for(name)
            grouped.setdefault(axis_id, []).append(name)
        return grouped

    def axis_times(
        self, max_times: Mapping[str, float], fallback_time: float
    ) -> Dict[str, float]:
        """
        Latest time per x-axis over the series assigned to it.

        Series without a max time contribute ``fallback_time``.
        """
        times = {}
        for axis_id, names in self.axis_series(list(max_times)).items():
            series_times = [
                fallback_time if math.isnan(max_times[name]) else max_times[name]
                for name in names
            ]
            series_times = [t for t in series_times if not math.isnan(t)]
            times[axis_id] = max(series_times) if series_times else math.nan
        return times

    def window_for(
        self, axis_range: ContinuousRange, axis_id: str, axis_time: float
    ) -> ContinuousRange:
        """Range of an axis repositioned so that it ends at (or after) ``axis_time``."""
        start, end = axis_range.current.as_tuple()
        width = end - start
        if self.behavior is TimeWindowBehavior.SQUEEZE and axis_id in self.initial_times:
            new_start = self.initial_times[axis_id]
        else:
            new_start = max(0.0, axis_time - width)
        return axis_range.update(new_start, max(axis_time, width))

    def advance(
        self, max_times: Mapping[str, float], fallback_time: float = math.nan
    ) -> Dict[str, ContinuousRange]:
        """
        Compute the x-axis ranges that must move to show the latest data.

        Parameters
        ----------
        max_times : Mapping[str, float]
            Latest time per series, as carried by a raw batch.
        fallback_time : float, default=nan
            Time used for series whose max time is NaN.

        Returns
        -------
        Dict[str, ContinuousRange]
            The repositioned ranges, only for axes whose end fell behind.
        """
        updates = {}
        for axis_id, axis_time in self.axis_times(max_times, fallback_time).items():
            if math.isnan(axis_time):
                continue
            self.current_times[axis_id] = axis_time

            axis_range = self.registry.range_for(axis_id)
            if axis_range.current.is_empty() or axis_range.end >= axis_time:
                continue

            updates[axis_id] = self.window_for(axis_range, axis_id, axis_time)
            logger.debug(
                f"Time axis '{axis_id}' advanced to {updates[axis_id].current} at t={axis_time}"
            )
        return updates

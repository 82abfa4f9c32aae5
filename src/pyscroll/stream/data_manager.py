import math
from typing import Dict, List, Sequence, Tuple

import numpy as np
from loguru import logger

from .datum import Datum


class SeriesDataManager:
    """
    Retains the raw history of every streamed series.

    Each series is stored as a pair of float64 arrays (time, value). Data older
    than ``drop_data_after`` (relative to the latest time of the series' axis)
    is dropped on append, which bounds memory for long-running streams.
    """

    def __init__(self, drop_data_after: float = math.inf):
        """
        Initialise the data manager.

        Parameters
        ----------
        drop_data_after : float, default=inf
            Age beyond which points are dropped. Infinite keeps everything.
        """
        if drop_data_after <= 0:
            raise ValueError(f"drop_data_after must be positive, got {drop_data_after}")
        self.drop_data_after = drop_data_after
        self.t_arrays: Dict[str, np.ndarray] = {}
        self.x_arrays: Dict[str, np.ndarray] = {}

    @property
    def num_series(self) -> int:
        return len(self.t_arrays)

    def series_names(self) -> List[str]:
        return list(self.t_arrays)

    def _validate_core_data(self, name: str, t: np.ndarray, x: np.ndarray) -> None:
        """
        Validate new points for a series.

        Raises
        ------
        ValueError
            If the time and value arrays have different lengths.
        """
        if len(t) != len(x):
            raise ValueError(
                f"Time and value arrays for series '{name}' must have the same length. Got t={len(t)}, x={len(x)}"
            )
        if len(t) == 0:
            return

        previous = self.t_arrays.get(name)
        last_time = previous[-1] if previous is not None and previous.size > 0 else -np.inf
        if t[0] < last_time or (len(t) > 1 and np.any(np.diff(t) < 0)):
            # out-of-order data is a caller error; it is kept as delivered
            logger.warning(
                f"Time array for series '{name}' is not monotonic (last stored t={last_time}, "
                f"new t[0]={t[0]}). Derived streams assume non-decreasing times."
            )

    def append(self, name: str, points: Sequence[Datum]) -> int:
        """
        Append new points to a series.

        Parameters
        ----------
        name : str
            Series name.
        points : Sequence[Datum]
            New points in time order.

        Returns
        -------
        int
            Number of points stored for the series afterwards.
        """
        t = np.fromiter((p.time for p in points), dtype=np.float64, count=len(points))
        x = np.fromiter((p.value for p in points), dtype=np.float64, count=len(points))
        return self.append_arrays(name, t, x)

    def append_arrays(self, name: str, t: np.ndarray, x: np.ndarray) -> int:
        t = np.asarray(t, dtype=np.float64)
        x = np.asarray(x, dtype=np.float64)
        self._validate_core_data(name, t, x)

        if name not in self.t_arrays:
            self.t_arrays[name] = t.copy()
            self.x_arrays[name] = x.copy()
        else:
            self.t_arrays[name] = np.concatenate((self.t_arrays[name], t))
            self.x_arrays[name] = np.concatenate((self.x_arrays[name], x))
        return self.t_arrays[name].size

    def drop_older_than(self, name: str, current_time: float) -> int:
        """
        Drop points older than ``drop_data_after`` relative to ``current_time``.

        Returns
        -------
        int
            Number of points dropped.
        """
        t_arr = self.t_arrays.get(name)
        if t_arr is None or t_arr.size == 0 or math.isinf(self.drop_data_after):
            return 0
        if math.isnan(current_time):
            return 0

        keep = (current_time - t_arr) <= self.drop_data_after
        dropped = int(t_arr.size - np.count_nonzero(keep))
        if dropped > 0:
            self.t_arrays[name] = t_arr[keep]
            self.x_arrays[name] = self.x_arrays[name][keep]
            logger.debug(f"Dropped {dropped} points older than {self.drop_data_after} from '{name}'")
        return dropped

    def get_series(self, name: str) -> Tuple[np.ndarray, np.ndarray]:
        """Time and value arrays of a series (empty arrays when unknown)."""
        if name not in self.t_arrays:
            return np.array([], dtype=np.float64), np.array([], dtype=np.float64)
        return self.t_arrays[name], self.x_arrays[name]

    def last_points(self, name: str, count: int) -> List[Datum]:
        """The last ``count`` points of a series."""
        t_arr, x_arr = self.get_series(name)
        if count <= 0:
            return []
        return [Datum(float(t), float(x)) for t, x in zip(t_arr[-count:], x_arr[-count:])]

    def get_time_range(self, name: str) -> Tuple[float, float]:
        """
        Time range of a series.

        Returns
        -------
        Tuple[float, float]
            First and last time, or ``(nan, nan)`` for an empty series.
        """
        t_arr, _ = self.get_series(name)
        if t_arr.size == 0:
            return math.nan, math.nan
        return float(t_arr[0]), float(t_arr[-1])

    def get_global_time_range(self) -> Tuple[float, float]:
        """Time range over all series, or ``(nan, nan)`` when nothing is stored."""
        starts = [t_arr[0] for t_arr in self.t_arrays.values() if t_arr.size > 0]
        ends = [t_arr[-1] for t_arr in self.t_arrays.values() if t_arr.size > 0]
        if not starts:
            return math.nan, math.nan
        return float(min(starts)), float(max(ends))

    def get_data_in_range(
        self, name: str, t_start: float, t_end: float
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Extract the points of a series within ``[t_start, t_end]``.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            Time and value arrays.
        """
        t_arr, x_arr = self.get_series(name)
        mask = (t_arr >= t_start) & (t_arr <= t_end)
        if not np.any(mask):
            logger.debug(f"No data in range [{t_start}, {t_end}] for series '{name}'")
            return np.array([], dtype=np.float64), np.array([], dtype=np.float64)
        return t_arr[mask], x_arr[mask]

    def clear(self) -> None:
        self.t_arrays.clear()
        self.x_arrays.clear()

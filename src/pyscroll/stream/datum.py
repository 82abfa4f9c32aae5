import math
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple


class Datum(NamedTuple):
    """A raw ``(time, value)`` point, also used for successive differences."""

    time: float
    value: float

    def is_empty(self) -> bool:
        return math.isnan(self.time) or math.isnan(self.value)


class IterateDatum(NamedTuple):
    """
    A point of an n-lag return map with its informational time.

    ``iterate_n`` is the value n steps ago and ``iterate_n1`` the current value;
    the pair is plotted as ``(iterate_n, iterate_n1)``.
    """

    time: float
    iterate_n: float
    iterate_n1: float

    @property
    def value(self) -> float:
        """Primary (plotted y) coordinate."""
        return self.iterate_n1

    def is_empty(self) -> bool:
        return (
            math.isnan(self.time)
            or math.isnan(self.iterate_n)
            or math.isnan(self.iterate_n1)
        )


def datums_from_tuples(points: Iterable[Tuple[float, float]]) -> List[Datum]:
    return [Datum(float(t), float(v)) for t, v in points]


class RawBatch(NamedTuple):
    """
    One delivery of new raw points.

    Attributes
    ----------
    max_times : Dict[str, float]
        Latest timestamp per series so far.
    new_points : Dict[str, List[Datum]]
        New points per series, in increasing time order. A series may have
        zero, one or many points in a batch.
    current_time : Optional[float]
        Optional wall-clock time of the batch (cadence-driven streams).
    """

    max_times: Dict[str, float]
    new_points: Dict[str, List[Datum]]
    current_time: Optional[float] = None

    @classmethod
    def from_points(
        cls,
        new_points: Mapping[str, Sequence[Tuple[float, float]]],
        current_time: Optional[float] = None,
    ) -> "RawBatch":
        """
        Build a batch from ``(time, value)`` tuples, deriving the max times.

        Series without points are given a max time of NaN.
        """
        points = {name: datums_from_tuples(data) for name, data in new_points.items()}
        max_times = {
            name: data[-1].time if data else math.nan for name, data in points.items()
        }
        return cls(max_times, points, current_time)

    @property
    def max_time(self) -> float:
        """Latest timestamp over all series, or NaN for a batch without times."""
        times = [t for t in self.max_times.values() if not math.isnan(t)]
        return max(times) if times else math.nan

    def series_names(self) -> List[str]:
        return list(self.new_points)

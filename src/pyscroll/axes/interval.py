import math
from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple


@dataclass(frozen=True, eq=False)
class Interval:
    """
    Immutable numeric interval with ``start <= end``.

    The bounds are swapped at construction when given in reverse order. An
    interval is empty when either bound is NaN; empty intervals propagate
    through the axis math so that renderers can detect and skip them.
    """

    start: float
    end: float

    def __post_init__(self):
        start = float(self.start)
        end = float(self.end)
        if start > end:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def from_tuple(cls, bounds: Tuple[float, float]) -> "Interval":
        """Create an interval from a ``(start, end)`` tuple."""
        return cls(bounds[0], bounds[1])

    @classmethod
    def empty(cls) -> "Interval":
        """Create an empty ``(nan, nan)`` interval."""
        return cls(math.nan, math.nan)

    def is_empty(self) -> bool:
        return math.isnan(self.start) or math.isnan(self.end)

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    def measure(self) -> float:
        """Distance between the bounds (``end - start``)."""
        return self.end - self.start

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    def map(self, fn: Callable[[float, float], Tuple[float, float]]) -> "Interval":
        """
        Apply a transform to the bounds and renormalize the result.

        Parameters
        ----------
        fn : Callable[[float, float], Tuple[float, float]]
            Pure function accepting ``(start, end)`` and returning new bounds.

        Returns
        -------
        Interval
            New interval built from the transformed bounds.
        """
        start, end = fn(self.start, self.end)
        return Interval(start, end)

    def translate_start(self, delta: float) -> "Interval":
        """Shift only the start bound by ``delta``."""
        return Interval(self.start + delta, self.end)

    def translate_end(self, delta: float) -> "Interval":
        """Shift only the end bound by ``delta``."""
        return Interval(self.start, self.end + delta)

    def equals_interval(self, start: float, end: float) -> bool:
        return self == Interval(start, end)

    def copy(self) -> "Interval":
        return Interval(self.start, self.end)

    def as_tuple(self) -> Tuple[float, float]:
        return self.start, self.end

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return NotImplemented
        if self.is_empty() or other.is_empty():
            return self.is_empty() and other.is_empty()
        return self.start == other.start and self.end == other.end

    def __hash__(self):
        if self.is_empty():
            return hash((Interval, "empty"))
        return hash((self.start, self.end))

    def __repr__(self) -> str:
        return f"Interval({self.start:g}, {self.end:g})"


def copy_interval_map(intervals: Mapping[str, Interval]) -> Dict[str, Interval]:
    """Value copy of a ``{axis_id: Interval}`` map."""
    return {axis_id: interval.copy() for axis_id, interval in intervals.items()}

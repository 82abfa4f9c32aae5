import numbers
from collections import deque
from typing import (
    Any,
    Callable,
    Deque,
    Generic,
    Iterable,
    List,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
)

from ..errors import ConfigurationError
from .datum import Datum, IterateDatum

T = TypeVar("T")
R = TypeVar("R")


def validate_window_size(n) -> int:
    """
    Check that a window size is a positive integer.

    Raises
    ------
    ConfigurationError
        If ``n`` is not an integer or is smaller than 1.
    """
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ConfigurationError(f"Window size must be an integer, got {n!r}")
    if n < 1:
        raise ConfigurationError(f"Window size must be at least 1, got {n}")
    return int(n)


class WindowState(NamedTuple):
    n: int
    previous: Tuple[Any, ...]
    current: Optional[Any]


class WindowedTransform(Generic[T, R]):
    """
    Fixed-lag sliding-window reducer.

    Holds up to ``n`` previous samples in FIFO order. A sample arriving while
    the FIFO is full pushes out the oldest sample, and ``reducer(oldest, sample)``
    is emitted. Fewer than ``n`` earlier samples means nothing is emitted.

    Samples must arrive in non-decreasing time order; this is not checked.
    """

    def __init__(self, n: int, reducer: Callable[[T, T], R]):
        """
        Initialise the transform.

        Parameters
        ----------
        n : int
            Window size (lag), at least 1.
        reducer : Callable[[T, T], R]
            Combines the sample ``n`` steps back with the incoming sample.

        Raises
        ------
        ConfigurationError
            If ``n`` is not a positive integer.
        """
        self.n = validate_window_size(n)
        self._reducer = reducer
        self._previous: Deque[T] = deque()
        self._current: Optional[R] = None

    @property
    def is_primed(self) -> bool:
        """True once the next sample will produce a derived value."""
        return len(self._previous) >= self.n

    @property
    def current(self) -> Optional[R]:
        """Last derived value, or None before the first emission."""
        return self._current

    @property
    def state(self) -> WindowState:
        return WindowState(self.n, tuple(self._previous), self._current)

    def push(self, sample: T) -> Optional[R]:
        """Consume one sample, returning the derived value if one is produced."""
        if len(self._previous) >= self.n:
            self._previous.append(sample)
            first = self._previous.popleft()
            self._current = self._reducer(first, sample)
            return self._current

        self._previous.append(sample)
        return None

    def extend(self, samples: Iterable[T]) -> List[R]:
        """Consume samples in order, returning every derived value produced."""
        derived = []
        for sample in samples:
            value = self.push(sample)
            if value is not None:
                derived.append(value)
        return derived

    def prime(self, samples: Iterable[T]) -> None:
        """Fill the FIFO with the last ``n`` samples without emitting."""
        self._previous = deque(list(samples)[-self.n :])

    def reset(self) -> None:
        self._previous.clear()
        self._current = None


class SuccessiveDifference(WindowedTransform[Datum, Datum]):
    """
    n-step successive differences of a ``(time, value)`` stream.

    Each emission is ``value(k) - value(k - n)``, placed at the time of the
    older sample when ``use_start_anchor`` is set and at the time of the newer
    sample otherwise.
    """

    def __init__(self, n: int = 1, use_start_anchor: bool = True):
        self.use_start_anchor = use_start_anchor
        super().__init__(n, self._difference)

    def _difference(self, first: Datum, last: Datum) -> Datum:
        return Datum(
            first.time if self.use_start_anchor else last.time,
            last.value - first.value,
        )


class IterateMap(WindowedTransform[Datum, IterateDatum]):
    """
    n-lag return map of a ``(time, value)`` stream.

    Pairs the value ``n`` steps back with the current value, so that plotting
    ``(iterate_n, iterate_n1)`` shows the recurrence structure of the series.
    """

    def __init__(self, n: int = 1):
        super().__init__(n, self._iterate)

    @staticmethod
    def _iterate(first: Datum, last: Datum) -> IterateDatum:
        return IterateDatum(first.time, first.value, last.value)

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from loguru import logger

from .interval import Interval

UNCONSTRAINED: Tuple[float, float] = (-math.inf, math.inf)


@dataclass(frozen=True)
class ContinuousRange:
    """
    Immutable zoom/pan state of a continuous numeric axis.

    Holds the interval currently displayed and the original interval (the
    bounds before any zooming or panning). Every operation returns a new
    range; ``original`` is only replaced by ``update_original``.

    Degenerate inputs never raise. NaN bounds or anchors propagate as an empty
    ``current`` interval, and requests that cannot be honoured (zero-width
    current interval, non-positive zoom factor) return the range unchanged.
    """

    current: Interval
    original: Interval

    @classmethod
    def from_bounds(
        cls,
        start: float,
        end: float,
        original_start: Optional[float] = None,
        original_end: Optional[float] = None,
    ) -> "ContinuousRange":
        """
        Create a range from its current bounds and optional original bounds.

        Parameters
        ----------
        start : float
            Start of the current interval.
        end : float
            End of the current interval.
        original_start : Optional[float], default=None
            Start of the original interval. Defaults to ``start``.
        original_end : Optional[float], default=None
            End of the original interval. Defaults to ``end``.

        Returns
        -------
        ContinuousRange
            New range instance.
        """
        return cls(
            Interval(start, end),
            Interval(
                start if original_start is None else original_start,
                end if original_end is None else original_end,
            ),
        )

    @classmethod
    def from_interval(
        cls, current: Interval, original: Optional[Interval] = None
    ) -> "ContinuousRange":
        return cls(current, current if original is None else original)

    @property
    def start(self) -> float:
        return self.current.start

    @property
    def end(self) -> float:
        return self.current.end

    @property
    def current_distance(self) -> float:
        return self.current.measure()

    @property
    def original_distance(self) -> float:
        return self.original.measure()

    @property
    def scale_factor(self) -> float:
        """
        Ratio of the current to the original distance.

        A zero-width original interval has no meaningful zoom level, so the
        factor is reported as 1.0 in that case.
        """
        original_distance = self.original_distance
        if original_distance == 0:
            return 1.0
        return self.current_distance / original_distance

    def matches_original(self, start: float, end: float) -> bool:
        return self.original.equals_interval(start, end)

    def _scaled_interval(self, factor: float, anchor: float) -> Optional[Interval]:
        """
        Interval whose absolute zoom level (relative to the original) is ``factor``.

        Returns None when the request cannot be honoured and the caller should
        keep the current state.
        """
        if factor <= 0:
            logger.debug(f"Ignoring non-positive zoom factor {factor}")
            return None

        scale_factor = self.scale_factor
        if scale_factor == 0:
            logger.debug(
                f"Cannot zoom a zero-width interval {self.current}, keeping it unchanged"
            )
            return None

        k = factor / scale_factor
        d_start = anchor - self.current.start
        d_end = self.current.end - anchor
        return Interval(anchor - d_start * k, anchor + d_end * k)

    def scale(self, factor: float, anchor: float) -> "ContinuousRange":
        """
        Zoom so that the range is ``factor`` times the original distance.

        The point ``anchor`` stays fixed, and the distances from the anchor to
        each bound are scaled by ``factor / scale_factor``. Because the factor
        is absolute, calling this twice with the same arguments yields the same
        range.

        Parameters
        ----------
        factor : float
            Zoom level relative to the original interval (1.0 means no zoom).
        anchor : float
            Data value held fixed during the zoom.

        Returns
        -------
        ContinuousRange
            New range with the scaled current interval.
        """
        scaled = self._scaled_interval(factor, anchor)
        if scaled is None:
            return self
        return ContinuousRange(scaled, self.original)

    def constrained_scale(
        self, factor: float, anchor: float, constraint: Tuple[float, float]
    ) -> "ContinuousRange":
        """
        Zoom like ``scale``, then clamp each bound into ``constraint``.

        The bounds are clamped independently, so when one side hits its limit
        the result is no longer symmetric about ``anchor``.
        """
        scaled = self._scaled_interval(factor, anchor)
        if scaled is None:
            return self
        if scaled.is_empty():
            return ContinuousRange(Interval.empty(), self.original)
        c_min, c_max = constraint
        return ContinuousRange(
            Interval(max(c_min, scaled.start), min(c_max, scaled.end)), self.original
        )

    def translate(
        self, amount: float, constraint: Tuple[float, float] = UNCONSTRAINED
    ) -> "ContinuousRange":
        """
        Pan the range by ``amount``.

        The pan is accepted in full when both constraint bounds are infinite,
        or when the shifted interval stays within the constraint. Otherwise the
        unchanged range is returned: a pan is never clipped, since clipping
        would silently shrink the displayed width.

        Parameters
        ----------
        amount : float
            Distance by which to shift both bounds.
        constraint : Tuple[float, float], default=(-inf, inf)
            Interval in which the shifted range must lie.

        Returns
        -------
        ContinuousRange
            Translated range, or this range when the pan is rejected.
        """
        c_start, c_end = constraint
        start = self.current.start + amount
        end = self.current.end + amount
        if (not math.isfinite(c_start) and not math.isfinite(c_end)) or (
            start >= c_start and end <= c_end
        ):
            return ContinuousRange(Interval(start, end), self.original)

        logger.debug(
            f"Rejected pan of {amount} for {self.current}: outside constraint {constraint}"
        )
        return self

    def update(self, start: float, end: float) -> "ContinuousRange":
        """Replace the current interval, keeping the original one."""
        return ContinuousRange(Interval(start, end), self.original)

    def update_original(self, start: float, end: float) -> "ContinuousRange":
        """Replace the original interval, keeping the current one."""
        return ContinuousRange(self.current, Interval(start, end))

    def reset(self) -> "ContinuousRange":
        """Restore the current interval to the original one."""
        return ContinuousRange(self.original, self.original)

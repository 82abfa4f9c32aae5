from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from loguru import logger

from ..errors import ConfigurationError
from .continuous_range import ContinuousRange
from .interval import Interval, copy_interval_map

A = TypeVar("A")

RangeLike = Union[ContinuousRange, Interval, Tuple[float, float]]
RangeProvider = Callable[[float, float], ContinuousRange]


class PlotDimensions(NamedTuple):
    width: float
    height: float


class AxesAssignment(NamedTuple):
    """The x-axis and y-axis ids a series is plotted against."""

    x_axis: str
    y_axis: str


BoundsUpdateListener = Callable[[Dict[str, ContinuousRange], PlotDimensions], None]


class AxesState(Generic[A]):
    """
    Ordered pool of axes keyed by axis id.

    The first registered axis is the default axis of the pool; lookups for an
    unknown id fall back to it.
    """

    def __init__(self, axes: Optional[Dict[str, A]] = None):
        self.axes: Dict[str, A] = dict(axes) if axes is not None else {}

    def copy(self) -> "AxesState[A]":
        return AxesState(self.axes)

    def add_axis(self, axis: A, axis_id: str) -> None:
        self.axes[axis_id] = axis

    def axis_for(self, axis_id: str) -> Optional[A]:
        """Axis for the id, or the default axis when the id is unknown."""
        axis = self.axes.get(axis_id)
        if axis is None and len(self.axes) >= 1:
            return self.default_axis()
        return axis

    def default_axis(self) -> Optional[A]:
        return next(iter(self.axes.values()), None)

    def default_axis_id(self) -> Optional[str]:
        return next(iter(self.axes), None)

    def axis_ids(self) -> List[str]:
        return list(self.axes)

    def __contains__(self, axis_id: object) -> bool:
        return axis_id in self.axes

    def __len__(self) -> int:
        return len(self.axes)


def _as_range(value: RangeLike, original: Optional[Interval]) -> ContinuousRange:
    if isinstance(value, ContinuousRange):
        return value
    current = value if isinstance(value, Interval) else Interval.from_tuple(value)
    if original is not None and original.is_empty():
        original = None
    return ContinuousRange.from_interval(current, original)


class AxisRegistry:
    """
    Single owner of the axis bounds of a chart.

    Tracks the current and original bounds of every x- and y-axis, which axes
    each series is assigned to, and the listeners that are notified when bounds
    change. All bound changes go through ``update_bounds`` so that every
    listener sees one complete set of updates.

    Listener fan-out is not reentrant-safe: a listener must not add or remove
    listeners while it is being invoked.
    """

    def __init__(self, plot_dimensions: Tuple[float, float] = (0.0, 0.0)):
        """
        Initialise an empty registry.

        Parameters
        ----------
        plot_dimensions : Tuple[float, float], default=(0.0, 0.0)
            Width and height of the plot area handed to listeners.
        """
        self.x_axes: AxesState[Any] = AxesState()
        self.y_axes: AxesState[Any] = AxesState()
        self.plot_dimensions = PlotDimensions(*plot_dimensions)

        self._bounds: Dict[str, Interval] = {}
        self._original_bounds: Dict[str, Interval] = {}
        self._assignments: Dict[str, AxesAssignment] = {}
        self._listeners: Dict[str, BoundsUpdateListener] = {}

    def _add_axis(
        self,
        pool: AxesState,
        axis: Any,
        axis_id: str,
        initial_range: Optional[Tuple[float, float]],
    ) -> None:
        pool.add_axis(axis, axis_id)
        if initial_range is not None:
            interval = Interval.from_tuple(initial_range)
            self._original_bounds[axis_id] = interval
            self._bounds[axis_id] = interval
        logger.debug(f"Registered axis '{axis_id}' with initial range {initial_range}")

    def add_x_axis(
        self,
        axis: Any,
        axis_id: str,
        initial_range: Optional[Tuple[float, float]] = None,
    ) -> None:
        """
        Register an x-axis.

        Parameters
        ----------
        axis : Any
            The axis object (owned by the renderer, opaque to the registry).
        axis_id : str
            Unique id of the axis. Registering an id again replaces the axis.
        initial_range : Optional[Tuple[float, float]], default=None
            When given, seeds both the current and the original bounds.
        """
        self._add_axis(self.x_axes, axis, axis_id, initial_range)

    def add_y_axis(
        self,
        axis: Any,
        axis_id: str,
        initial_range: Optional[Tuple[float, float]] = None,
    ) -> None:
        """Register a y-axis. See ``add_x_axis``."""
        self._add_axis(self.y_axes, axis, axis_id, initial_range)

    def set_plot_dimensions(self, width: float, height: float) -> None:
        self.plot_dimensions = PlotDimensions(width, height)

    def set_axis_assignments(self, assignments: Mapping[str, AxesAssignment]) -> None:
        """Replace the series-to-axes assignments. Should cover all series."""
        self._assignments = {
            name: AxesAssignment(*assignment) for name, assignment in assignments.items()
        }

    def axis_assignments_for(self, series_name: str) -> AxesAssignment:
        """
        Axes assigned to a series, defaulting to each pool's default axis.

        Raises
        ------
        ConfigurationError
            If the series has no assignment and a pool holds no axes.
        """
        assignment = self._assignments.get(series_name)
        if assignment is not None:
            return assignment

        x_axis = self.x_axes.default_axis_id()
        y_axis = self.y_axes.default_axis_id()
        if x_axis is None or y_axis is None:
            raise ConfigurationError(
                f"Series '{series_name}' has no axis assignment and no default "
                f"{'x' if x_axis is None else 'y'}-axis is registered"
            )
        return AxesAssignment(x_axis, y_axis)

    def x_axis_for(self, series_name: str) -> str:
        """X-axis id of a series; only the x-axis pool needs to be populated."""
        assignment = self._assignments.get(series_name)
        if assignment is not None:
            return assignment.x_axis
        x_axis = self.x_axes.default_axis_id()
        if x_axis is None:
            raise ConfigurationError(
                f"Series '{series_name}' has no axis assignment and no default x-axis is registered"
            )
        return x_axis

    def axis_bounds_for(self, axis_id: str) -> Interval:
        """Current bounds of the axis, or an empty interval when unknown."""
        return self._bounds.get(axis_id, Interval.empty())

    def original_axis_bounds_for(self, axis_id: str) -> Interval:
        """Original bounds of the axis, or an empty interval when unknown."""
        return self._original_bounds.get(axis_id, Interval.empty())

    def axis_bounds(self) -> Dict[str, Interval]:
        return copy_interval_map(self._bounds)

    def original_axis_bounds(self) -> Dict[str, Interval]:
        return copy_interval_map(self._original_bounds)

    def range_for(self, axis_id: str) -> ContinuousRange:
        """The axis bounds as a ``ContinuousRange`` ready for zooming or panning."""
        return ContinuousRange(
            self.axis_bounds_for(axis_id), self.original_axis_bounds_for(axis_id)
        )

    def ranges(self) -> Dict[str, ContinuousRange]:
        return {axis_id: self.range_for(axis_id) for axis_id in self._bounds}

    def add_bounds_update_listener(
        self, listener_id: str, listener: BoundsUpdateListener
    ) -> None:
        """
        Register a callback invoked on every bounds update.

        Raises
        ------
        ConfigurationError
            If a listener is already registered under ``listener_id``.
        """
        if listener_id in self._listeners:
            raise ConfigurationError(
                f"A bounds-update listener with id '{listener_id}' is already registered"
            )
        self._listeners[listener_id] = listener
        logger.debug(f"Added bounds-update listener '{listener_id}'")

    def remove_bounds_update_listener(self, listener_id: str) -> bool:
        """Remove a listener; returns False when no such listener exists."""
        removed = self._listeners.pop(listener_id, None) is not None
        if removed:
            logger.debug(f"Removed bounds-update listener '{listener_id}'")
        return removed

    def listener_ids(self) -> List[str]:
        return list(self._listeners)

    def update_bounds(self, updates: Mapping[str, RangeLike]) -> Dict[str, ContinuousRange]:
        """
        Write new current bounds and notify every listener.

        All bounds are written before the first listener is called. Listeners
        are then invoked once each, synchronously, in registration order, with
        the full map of updates and the current plot dimensions.

        Parameters
        ----------
        updates : Mapping[str, RangeLike]
            Map of axis id to its new range, as a ``ContinuousRange``, an
            ``Interval`` or a ``(start, end)`` tuple.

        Returns
        -------
        Dict[str, ContinuousRange]
            The normalized updates handed to the listeners.
        """
        normalized = {
            axis_id: _as_range(value, self._original_bounds.get(axis_id))
            for axis_id, value in updates.items()
        }
        for axis_id, axis_range in normalized.items():
            self._bounds[axis_id] = axis_range.current
            stored = self._original_bounds.get(axis_id)
            if stored is None or stored.is_empty():
                # first non-empty bounds seen for an axis registered without a range
                seed = (
                    axis_range.original
                    if axis_range.original.is_not_empty()
                    else axis_range.current
                )
                if seed.is_not_empty():
                    self._original_bounds[axis_id] = seed
                    normalized[axis_id] = ContinuousRange(axis_range.current, seed)

        for listener in list(self._listeners.values()):
            listener(dict(normalized), self.plot_dimensions)
        return normalized

    def reset_axis_bounds_for(
        self, axis_id: str, provider: RangeProvider = ContinuousRange.from_bounds
    ) -> Optional[ContinuousRange]:
        """
        Restore the current bounds of one axis to its original bounds.

        Parameters
        ----------
        axis_id : str
            Axis to reset.
        provider : RangeProvider, default=ContinuousRange.from_bounds
            Factory building the reset range from the original ``(start, end)``.

        Returns
        -------
        Optional[ContinuousRange]
            The range written, or None when the axis has no original bounds.
        """
        original = self._original_bounds.get(axis_id)
        if original is None:
            logger.warning(f"Cannot reset axis '{axis_id}': it has no original bounds")
            return None

        logger.info(f"Resetting axis '{axis_id}' to {original}")
        reset = provider(original.start, original.end)
        return self.update_bounds({axis_id: reset})[axis_id]

    def reset_axes_bounds(
        self,
        providers: Mapping[str, RangeProvider],
        overrides: Optional[Mapping[str, Tuple[float, float]]] = None,
    ) -> Dict[str, ContinuousRange]:
        """
        Reset every axis that has original bounds or an override.

        An override replaces the original bounds of its axis before the reset.
        Every axis in the working set must have a provider; the check happens
        before anything is written so that a failed reset leaves all axes as
        they were.

        Parameters
        ----------
        providers : Mapping[str, RangeProvider]
            Range factory per axis id.
        overrides : Optional[Mapping[str, Tuple[float, float]]], default=None
            New original bounds per axis id.

        Returns
        -------
        Dict[str, ContinuousRange]
            The ranges written.

        Raises
        ------
        ConfigurationError
            If an axis in the working set has no provider.
        """
        overrides = overrides or {}
        axis_ids = list(self._original_bounds)
        axis_ids.extend(axis_id for axis_id in overrides if axis_id not in self._original_bounds)

        missing = [axis_id for axis_id in axis_ids if axis_id not in providers]
        if missing:
            raise ConfigurationError(
                f"No range provider for axis '{missing[0]}' while resetting axes bounds"
            )

        for axis_id, bounds in overrides.items():
            self._original_bounds[axis_id] = Interval.from_tuple(bounds)

        updates = {}
        for axis_id in axis_ids:
            original = self._original_bounds[axis_id]
            updates[axis_id] = providers[axis_id](original.start, original.end)

        logger.info(f"Resetting bounds for axes {axis_ids}")
        return self.update_bounds(updates)

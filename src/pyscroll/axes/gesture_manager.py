from typing import Dict, Iterable, Optional, Tuple, Union

from loguru import logger

from .continuous_range import UNCONSTRAINED, ContinuousRange
from .registry import AxisRegistry

AxisIds = Union[str, Iterable[str]]


def _axis_id_list(axis_ids: AxisIds):
    if isinstance(axis_ids, str):
        return [axis_ids]
    return list(axis_ids)


class GestureManager:
    """
    Applies user zoom and pan gestures to the axes of a registry.

    Centralises the gesture-to-range conversion so that every gesture results
    in exactly one ``update_bounds`` call, however many axes it touches.
    """

    def __init__(self, registry: AxisRegistry):
        """
        Initialise the gesture manager.

        Parameters
        ----------
        registry : AxisRegistry
            Registry owning the axis bounds.
        """
        self.registry = registry

    def zoom(
        self,
        axis_ids: AxisIds,
        factor: float,
        anchor: float,
        constraint: Optional[Tuple[float, float]] = None,
    ) -> Dict[str, ContinuousRange]:
        """
        Zoom one or more axes to an absolute zoom level.

        Parameters
        ----------
        axis_ids : str | Iterable[str]
            Axes to zoom.
        factor : float
            Zoom level relative to each axis's original bounds.
        anchor : float
            Data value held fixed by the zoom.
        constraint : Optional[Tuple[float, float]], default=None
            When given, each bound is clamped into this interval.

        Returns
        -------
        Dict[str, ContinuousRange]
            The ranges written to the registry.
        """
        updates = {}
        for axis_id in _axis_id_list(axis_ids):
            axis_range = self.registry.range_for(axis_id)
            if constraint is None:
                updates[axis_id] = axis_range.scale(factor, anchor)
            else:
                updates[axis_id] = axis_range.constrained_scale(factor, anchor, constraint)

        logger.debug(f"Zoom to factor {factor} at {anchor} on axes {list(updates)}")
        return self.registry.update_bounds(updates)

    def pan(
        self,
        axis_ids: AxisIds,
        delta: float,
        constraint: Tuple[float, float] = UNCONSTRAINED,
    ) -> Dict[str, ContinuousRange]:
        """
        Pan one or more axes by ``delta``.

        A pan that would leave ``constraint`` leaves that axis unchanged.
        Listeners are notified even then, so a renderer always sees a response
        to the gesture.
        """
        updates = {
            axis_id: self.registry.range_for(axis_id).translate(delta, constraint)
            for axis_id in _axis_id_list(axis_ids)
        }
        logger.debug(f"Pan by {delta} on axes {list(updates)}")
        return self.registry.update_bounds(updates)

    def home(self) -> Dict[str, ContinuousRange]:
        """Reset every axis with known original bounds."""
        providers = {
            axis_id: ContinuousRange.from_bounds
            for axis_id in self.registry.original_axis_bounds()
        }
        return self.registry.reset_axes_bounds(providers)

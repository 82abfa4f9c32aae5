from typing import Dict, Optional

from loguru import logger
from matplotlib.axes import Axes

from .continuous_range import ContinuousRange
from .registry import AxisRegistry, PlotDimensions


def plot_dimensions_for(ax: Axes) -> PlotDimensions:
    """Width and height of the axes' plot area in display pixels."""
    bbox = ax.get_window_extent()
    return PlotDimensions(float(bbox.width), float(bbox.height))


class MatplotlibAxesBinding:
    """
    Forwards registry bound updates to a matplotlib ``Axes``.

    Listens for one x-axis id and one y-axis id, and applies their current
    intervals with ``set_xlim``/``set_ylim``. Empty intervals are skipped so the
    axes keep their last valid limits. Drawing stays with the caller.
    """

    def __init__(
        self,
        registry: AxisRegistry,
        ax: Axes,
        x_axis_id: str,
        y_axis_id: str,
        listener_id: Optional[str] = None,
    ):
        """
        Initialise the binding and register it as a bounds-update listener.

        Parameters
        ----------
        registry : AxisRegistry
            Registry whose updates are forwarded.
        ax : Axes
            Target matplotlib axes.
        x_axis_id : str
            Registry axis id mapped to the horizontal axis.
        y_axis_id : str
            Registry axis id mapped to the vertical axis.
        listener_id : Optional[str], default=None
            Listener id, defaults to ``"mpl:<x_axis_id>:<y_axis_id>"``.
        """
        self.registry = registry
        self.ax = ax
        self.x_axis_id = x_axis_id
        self.y_axis_id = y_axis_id
        self.listener_id = listener_id or f"mpl:{x_axis_id}:{y_axis_id}"
        self.last_plot_dimensions: Optional[PlotDimensions] = None

        registry.add_bounds_update_listener(self.listener_id, self.on_bounds_update)
        registry.set_plot_dimensions(*plot_dimensions_for(ax))

        # show whatever bounds the registry already holds
        for axis_id, setter in ((x_axis_id, ax.set_xlim), (y_axis_id, ax.set_ylim)):
            bounds = registry.axis_bounds_for(axis_id)
            if bounds.is_not_empty() and bounds.measure() > 0:
                setter(bounds.as_tuple())

    def on_bounds_update(
        self, updates: Dict[str, ContinuousRange], plot_dimensions: PlotDimensions
    ) -> None:
        self.last_plot_dimensions = plot_dimensions
        for axis_id, setter in (
            (self.x_axis_id, self.ax.set_xlim),
            (self.y_axis_id, self.ax.set_ylim),
        ):
            axis_range = updates.get(axis_id)
            if axis_range is None:
                continue
            if axis_range.current.is_empty():
                logger.debug(f"Skipping empty bounds for axis '{axis_id}'")
                continue
            setter(axis_range.current.as_tuple())

    def detach(self) -> None:
        self.registry.remove_bounds_update_listener(self.listener_id)

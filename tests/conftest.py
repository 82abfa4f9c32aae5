import pytest

from pyscroll.axes.registry import AxisRegistry


@pytest.fixture
def registry():
    """Registry with one time axis and one value axis."""
    registry = AxisRegistry(plot_dimensions=(640.0, 480.0))
    registry.add_x_axis(None, "x", (0.0, 100.0))
    registry.add_y_axis(None, "y", (-1.0, 1.0))
    return registry


@pytest.fixture
def recorded_updates(registry):
    """Records every bounds update delivered to a listener on ``registry``."""
    calls = []
    registry.add_bounds_update_listener(
        "recorder", lambda updates, dims: calls.append((updates, dims))
    )
    return calls

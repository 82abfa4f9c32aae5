"""Tests for forwarding registry bounds to matplotlib axes."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from pyscroll.axes.gesture_manager import GestureManager  # noqa: E402
from pyscroll.axes.mpl_binding import MatplotlibAxesBinding  # noqa: E402


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


def test_binding_applies_existing_bounds(registry, ax):
    MatplotlibAxesBinding(registry, ax, "x", "y")
    assert ax.get_xlim() == (0.0, 100.0)
    assert ax.get_ylim() == (-1.0, 1.0)
    assert registry.plot_dimensions.width > 0


def test_binding_follows_gestures(registry, ax):
    binding = MatplotlibAxesBinding(registry, ax, "x", "y")
    GestureManager(registry).zoom("x", 0.5, 50.0)

    assert ax.get_xlim() == (25.0, 75.0)
    assert ax.get_ylim() == (-1.0, 1.0)
    assert binding.last_plot_dimensions == registry.plot_dimensions


def test_empty_bounds_are_skipped(registry, ax):
    MatplotlibAxesBinding(registry, ax, "x", "y")
    registry.update_bounds({"x": (float("nan"), float("nan"))})
    assert ax.get_xlim() == (0.0, 100.0)


def test_detach(registry, ax):
    binding = MatplotlibAxesBinding(registry, ax, "x", "y", listener_id="main")
    assert registry.listener_ids() == ["main"]
    binding.detach()
    registry.update_bounds({"x": (10.0, 20.0)})
    assert registry.listener_ids() == []
    assert ax.get_xlim() == (0.0, 100.0)

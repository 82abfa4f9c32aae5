"""Unit tests for AxisRegistry bound ownership, listeners and resets."""

import pytest

from pyscroll.axes.continuous_range import ContinuousRange
from pyscroll.axes.interval import Interval
from pyscroll.axes.registry import AxesAssignment, AxesState, AxisRegistry
from pyscroll.errors import ConfigurationError


def test_initial_range_seeds_current_and_original(registry):
    assert registry.axis_bounds_for("x") == Interval(0.0, 100.0)
    assert registry.original_axis_bounds_for("y") == Interval(-1.0, 1.0)
    assert registry.axis_bounds_for("missing").is_empty()


def test_update_bounds_notifies_once_with_all_updates(registry, recorded_updates):
    registry.update_bounds({"x": (10.0, 20.0), "y": Interval(-2.0, 2.0)})

    assert len(recorded_updates) == 1
    updates, dims = recorded_updates[0]
    assert set(updates) == {"x", "y"}
    assert updates["x"].current == Interval(10.0, 20.0)
    assert updates["x"].original == Interval(0.0, 100.0)
    assert dims == (640.0, 480.0)


def test_bounds_are_written_before_listeners_run(registry):
    """No listener observes a partially applied update."""
    seen = []
    registry.add_bounds_update_listener(
        "reader",
        lambda updates, dims: seen.append(
            (registry.axis_bounds_for("x"), registry.axis_bounds_for("y"))
        ),
    )
    registry.update_bounds({"x": (1.0, 2.0), "y": (3.0, 4.0)})
    assert seen == [(Interval(1.0, 2.0), Interval(3.0, 4.0))]


def test_listeners_run_in_registration_order(registry):
    order = []
    registry.add_bounds_update_listener("first", lambda u, d: order.append("first"))
    registry.add_bounds_update_listener("second", lambda u, d: order.append("second"))
    registry.update_bounds({"x": (0.0, 1.0)})
    assert order == ["first", "second"]


def test_duplicate_listener_id_raises(registry, recorded_updates):
    with pytest.raises(ConfigurationError):
        registry.add_bounds_update_listener("recorder", lambda u, d: None)


def test_remove_listener(registry, recorded_updates):
    assert registry.remove_bounds_update_listener("recorder")
    assert not registry.remove_bounds_update_listener("recorder")
    registry.update_bounds({"x": (0.0, 1.0)})
    assert recorded_updates == []


def test_first_update_sets_original_for_axis_without_range():
    registry = AxisRegistry()
    registry.add_x_axis(None, "t")
    assert registry.original_axis_bounds_for("t").is_empty()

    registry.update_bounds({"t": (0.0, 10.0)})
    registry.update_bounds({"t": (5.0, 15.0)})
    assert registry.original_axis_bounds_for("t") == Interval(0.0, 10.0)
    assert registry.axis_bounds_for("t") == Interval(5.0, 15.0)


def test_gesture_before_first_data_does_not_fix_original():
    """A zoom on an axis without bounds leaves it free to take its first real bounds."""
    registry = AxisRegistry()
    registry.add_x_axis(None, "t")
    registry.update_bounds({"t": registry.range_for("t").scale(0.5, 1.0)})
    assert registry.axis_bounds_for("t").is_empty()
    assert registry.original_axis_bounds_for("t").is_empty()

    registry.update_bounds({"t": (0.0, 10.0)})
    assert registry.original_axis_bounds_for("t") == Interval(0.0, 10.0)
    assert registry.range_for("t").scale(0.5, 5.0).current == Interval(2.5, 7.5)

    registry.update_bounds({"t": (4.0, 6.0)})
    assert registry.reset_axis_bounds_for("t").current == Interval(0.0, 10.0)


def test_update_with_empty_original_seeds_from_current():
    registry = AxisRegistry()
    registry.add_y_axis(None, "v")
    updates = registry.update_bounds(
        {"v": ContinuousRange(Interval(-1.0, 1.0), Interval.empty())}
    )
    assert updates["v"].original == Interval(-1.0, 1.0)
    assert registry.original_axis_bounds_for("v") == Interval(-1.0, 1.0)


def test_axis_assignments_default_to_first_axes(registry):
    registry.add_x_axis(None, "x2", (0.0, 1.0))
    assert registry.axis_assignments_for("a") == AxesAssignment("x", "y")

    registry.set_axis_assignments({"a": ("x2", "y")})
    assert registry.axis_assignments_for("a") == AxesAssignment("x2", "y")
    assert registry.x_axis_for("a") == "x2"
    assert registry.x_axis_for("b") == "x"


def test_axis_assignments_with_empty_pool_raise():
    registry = AxisRegistry()
    registry.add_x_axis(None, "x", (0.0, 1.0))
    assert registry.x_axis_for("a") == "x"
    with pytest.raises(ConfigurationError):
        registry.axis_assignments_for("a")


def test_axes_state_falls_back_to_default():
    state = AxesState()
    assert state.axis_for("x") is None
    state.add_axis("first", "a")
    state.add_axis("second", "b")
    assert state.axis_for("b") == "second"
    assert state.axis_for("unknown") == "first"
    assert state.default_axis_id() == "a"
    assert "b" in state
    assert len(state.copy()) == 2


def test_reset_axis_bounds_for_restores_original(registry, recorded_updates):
    registry.update_bounds({"x": (40.0, 50.0)})
    reset = registry.reset_axis_bounds_for("x")

    assert reset.current == Interval(0.0, 100.0)
    assert registry.axis_bounds_for("x") == Interval(0.0, 100.0)
    assert len(recorded_updates) == 2


def test_reset_axis_bounds_for_unknown_axis(registry, recorded_updates):
    assert registry.reset_axis_bounds_for("missing") is None
    assert recorded_updates == []


def test_reset_axes_bounds_with_overrides(registry, recorded_updates):
    registry.update_bounds({"x": (40.0, 50.0), "y": (0.0, 0.5)})
    providers = {"x": ContinuousRange.from_bounds, "y": ContinuousRange.from_bounds}
    written = registry.reset_axes_bounds(providers, overrides={"y": (-5.0, 5.0)})

    assert written["x"].current == Interval(0.0, 100.0)
    assert written["y"].current == Interval(-5.0, 5.0)
    assert registry.original_axis_bounds_for("y") == Interval(-5.0, 5.0)
    assert len(recorded_updates) == 2


def test_reset_axes_bounds_missing_provider_changes_nothing(registry, recorded_updates):
    """A failed reset leaves every axis and listener untouched."""
    registry.update_bounds({"x": (40.0, 50.0)})
    with pytest.raises(ConfigurationError):
        registry.reset_axes_bounds(
            {"x": ContinuousRange.from_bounds}, overrides={"y": (-5.0, 5.0)}
        )

    assert registry.axis_bounds_for("x") == Interval(40.0, 50.0)
    assert registry.original_axis_bounds_for("y") == Interval(-1.0, 1.0)
    assert len(recorded_updates) == 1


def test_ranges_and_copies_are_detached(registry):
    bounds = registry.axis_bounds()
    bounds["x"] = Interval(7.0, 8.0)
    assert registry.axis_bounds_for("x") == Interval(0.0, 100.0)
    assert set(registry.ranges()) == {"x", "y"}

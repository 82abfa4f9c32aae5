"""Integration tests for LiveChart batch handling and gestures."""

import pytest

from pyscroll.axes.interval import Interval
from pyscroll.chart import LiveChart
from pyscroll.errors import ConfigurationError
from pyscroll.stream.aggregator import DerivedKind
from pyscroll.stream.datum import Datum, RawBatch


@pytest.fixture
def chart():
    chart = LiveChart()
    chart.add_x_axis("x", (0.0, 100.0))
    chart.add_y_axis("y", (-1.0, 1.0))
    return chart


def test_time_axis_scrolls_with_the_stream(chart):
    updates = []
    chart.axes.add_bounds_update_listener("test", lambda u, d: updates.append(u))
    record = chart.on_batch(RawBatch.from_points({"a": [(90.0, 0.0), (150.0, 1.0)]}))

    assert record.new_points == {"a": [Datum(90.0, 1.0)]}
    assert chart.axes.axis_bounds_for("x") == Interval(50.0, 150.0)
    assert chart.axes.original_axis_bounds_for("x") == Interval(0.0, 100.0)
    assert len(updates) == 1
    assert chart.last_record is record


def test_data_listeners_receive_raw_points(chart):
    received = []
    chart.add_data_listener("test", lambda name, points: received.append((name, points)))
    chart.on_batch(RawBatch.from_points({"a": [(1.0, 2.0)]}))
    chart.remove_data_listener("test")
    chart.on_batch(RawBatch.from_points({"a": [(2.0, 3.0)]}))

    assert received == [("a", [Datum(1.0, 2.0)])]


def test_gestures_and_home(chart):
    chart.zoom("x", 0.5, 50.0)
    chart.pan("x", 10.0)
    assert chart.axes.axis_bounds_for("x") == Interval(35.0, 85.0)

    chart.home()
    assert chart.axes.axis_bounds_for("x") == Interval(0.0, 100.0)


def test_set_window_size_continues_without_gap(chart):
    """The rebuilt transforms pick up exactly where the history ends."""
    chart.on_batch(
        RawBatch.from_points({"a": [(0.0, 0.0), (1.0, 1.0), (2.0, 4.0), (3.0, 9.0)]})
    )
    history = chart.set_window_size(2)

    assert chart.window_size == 2
    assert history == {"a": [Datum(0.0, 4.0), Datum(1.0, 8.0)]}

    record = chart.on_batch(RawBatch.from_points({"a": [(4.0, 16.0)]}))
    assert record.new_points == {"a": [Datum(2.0, 12.0)]}
    assert record.per_series_min["a"] == Datum(0.0, 4.0)
    assert record.per_series_max["a"] == Datum(2.0, 12.0)


def test_invalid_window_size(chart):
    with pytest.raises(ConfigurationError):
        chart.set_window_size(0)
    with pytest.raises(ConfigurationError):
        LiveChart(window_size=0)


def test_old_data_is_dropped():
    chart = LiveChart(drop_data_after=10.0)
    chart.on_batch(RawBatch.from_points({"a": [(float(t), 0.0) for t in range(21)]}))

    assert chart.data.get_time_range("a") == (10.0, 20.0)
    assert len(chart.derived_history("a")) == 10


def test_iterate_chart_does_not_scroll():
    chart = LiveChart(kind="iterate")
    chart.add_x_axis("x", (0.0, 1.0))
    chart.add_y_axis("y", (0.0, 1.0))
    record = chart.on_batch(RawBatch.from_points({"a": [(0.0, 0.2), (25.0, 0.4)]}))

    assert chart.kind is DerivedKind.ITERATE
    assert not chart.scroll_time_axes
    assert chart.axes.axis_bounds_for("x") == Interval(0.0, 1.0)
    assert record.new_points["a"][0].iterate_n == pytest.approx(0.2)

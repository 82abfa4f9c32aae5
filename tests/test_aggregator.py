"""Unit tests for derived-stream aggregation and extrema."""

import math

import pytest

from pyscroll.errors import ConfigurationError
from pyscroll.stream.aggregator import DerivedKind, StreamAggregator, fold_extremum
from pyscroll.stream.datum import Datum, IterateDatum, RawBatch


def test_ties_go_to_first_registered_series():
    """Equal derived values resolve to the series seen first."""
    aggregator = StreamAggregator()
    record = aggregator.process(
        RawBatch.from_points({"a": [(0, 0), (1, 1)], "b": [(0, 0), (1, 1)]})
    )

    assert record.global_min is record.latest["a"]
    assert record.global_max is record.latest["a"]
    assert record.global_min == Datum(0.0, 1.0)


def test_global_extrema_fold_over_latest_points():
    aggregator = StreamAggregator()
    aggregator.process(RawBatch.from_points({"a": [(0, 0), (1, 5)], "b": [(0, 0), (1, 2)]}))
    record = aggregator.process(RawBatch.from_points({"a": [(2, 4)]}))

    assert record.global_min == Datum(1.0, -1.0)
    assert record.global_max == Datum(0.0, 2.0)


def test_new_points_only_hold_this_batch():
    """Silent series are absent from new_points but keep their latest point."""
    aggregator = StreamAggregator()
    aggregator.process(RawBatch.from_points({"a": [(0, 0), (1, 1)], "b": [(0, 0), (1, 3)]}))
    record = aggregator.process(RawBatch.from_points({"a": [(2, 3)]}))

    assert record.new_points == {"a": [Datum(1.0, 2.0)]}
    assert record.latest["b"] == Datum(0.0, 3.0)


def test_per_series_extrema_are_running():
    aggregator = StreamAggregator()
    record = aggregator.process(
        RawBatch.from_points({"a": [(0, 0), (1, 5), (2, 2), (3, 3)]})
    )

    assert record.new_points["a"] == [Datum(0.0, 5.0), Datum(1.0, -3.0), Datum(2.0, 1.0)]
    assert record.per_series_min["a"] == Datum(1.0, -3.0)
    assert record.per_series_max["a"] == Datum(0.0, 5.0)
    assert record.latest["a"] == Datum(2.0, 1.0)


def test_series_without_points_appear_empty():
    aggregator = StreamAggregator()
    record = aggregator.process(RawBatch.from_points({"a": [(0, 1)], "b": []}))

    assert record.new_points == {"a": [], "b": []}
    assert record.global_min is None
    assert record.global_max is None
    assert math.isnan(RawBatch.from_points({"b": []}).max_time)


def test_nan_points_are_never_extrema():
    aggregator = StreamAggregator()
    record = aggregator.process(
        RawBatch.from_points({"a": [(0, 0), (1, math.nan)], "b": [(0, 0), (1, 2)]})
    )

    assert record.new_points["a"][0].is_empty()
    assert "a" not in record.per_series_min
    assert record.global_min == Datum(0.0, 2.0)


def test_iterate_extrema_use_current_iterate():
    aggregator = StreamAggregator(DerivedKind.ITERATE, n=1)
    record = aggregator.process(
        RawBatch.from_points({"a": [(0, 0.9), (1, 0.1)], "b": [(0, 0.2), (1, 0.5)]})
    )

    assert record.global_min == IterateDatum(0.0, 0.9, 0.1)
    assert record.global_max == IterateDatum(0.0, 0.2, 0.5)


def test_kind_accepts_strings():
    assert StreamAggregator("iterate").kind is DerivedKind.ITERATE
    with pytest.raises(ConfigurationError):
        StreamAggregator("integral")


def test_seed_and_reset():
    aggregator = StreamAggregator()
    aggregator.register_series(["a", "b"])
    aggregator.seed("b", [Datum(0.0, 4.0), Datum(1.0, -2.0)])

    assert aggregator.series_names() == ["a", "b"]
    assert aggregator.extremum.global_min == Datum(1.0, -2.0)

    aggregator.reset()
    assert aggregator.series_names() == []
    assert aggregator.extremum.global_max is None


def test_fold_extremum_skips_unknown_series():
    extremum = fold_extremum({"a": Datum(0.0, 1.0)}, ["b", "a"])
    assert extremum.global_min == extremum.global_max == Datum(0.0, 1.0)

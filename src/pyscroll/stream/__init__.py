"""
Streaming components for pyscroll.

This package turns raw (time, value) batches into derived streams (successive
differences and n-lag iterates) and keeps the raw history.
"""

from pyscroll.stream.aggregator import (
    DerivedExtremum,
    DerivedKind,
    DerivedStreamRecord,
    StreamAggregator,
)
from pyscroll.stream.data_manager import SeriesDataManager
from pyscroll.stream.datum import Datum, IterateDatum, RawBatch
from pyscroll.stream.iterate_functions import (
    gauss_map_fn,
    iterate_batches,
    logistic_map_fn,
    tent_map_fn,
)
from pyscroll.stream.kernels import iterate_pairs, successive_differences
from pyscroll.stream.windowed import IterateMap, SuccessiveDifference, WindowedTransform

__all__ = [
    "Datum",
    "IterateDatum",
    "RawBatch",
    "WindowedTransform",
    "SuccessiveDifference",
    "IterateMap",
    "StreamAggregator",
    "DerivedKind",
    "DerivedExtremum",
    "DerivedStreamRecord",
    "SeriesDataManager",
    "successive_differences",
    "iterate_pairs",
    "tent_map_fn",
    "logistic_map_fn",
    "gauss_map_fn",
    "iterate_batches",
]

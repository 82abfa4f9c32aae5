from enum import Enum
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Union

from loguru import logger

from ..errors import ConfigurationError
from .datum import Datum, IterateDatum, RawBatch
from .windowed import (
    IterateMap,
    SuccessiveDifference,
    WindowedTransform,
    validate_window_size,
)

DerivedPoint = Union[Datum, IterateDatum]


class DerivedKind(Enum):
    DIFFERENCE = "difference"
    ITERATE = "iterate"


def derived_kind(kind: Union[str, DerivedKind]) -> DerivedKind:
    try:
        return DerivedKind(kind)
    except ValueError:
        raise ConfigurationError(
            f"Unknown derived kind {kind!r}, expected one of {[k.value for k in DerivedKind]}"
        ) from None


class DerivedExtremum(NamedTuple):
    """
    Latest derived point per series and the extreme ones among them.

    ``global_min`` and ``global_max`` are None until some series has emitted a
    non-empty derived point.
    """

    per_series: Dict[str, DerivedPoint]
    global_min: Optional[DerivedPoint]
    global_max: Optional[DerivedPoint]


class DerivedStreamRecord(NamedTuple):
    """
    Result of processing one raw batch.

    Attributes
    ----------
    global_min : Optional[DerivedPoint]
        Smallest latest derived point over all series.
    global_max : Optional[DerivedPoint]
        Largest latest derived point over all series.
    per_series_min : Dict[str, DerivedPoint]
        Running minimum derived point per series.
    per_series_max : Dict[str, DerivedPoint]
        Running maximum derived point per series.
    new_points : Dict[str, List[DerivedPoint]]
        Derived points emitted by this batch only, per series in the batch.
    latest : Dict[str, DerivedPoint]
        Latest derived point per series, carried forward for silent series.
    """

    global_min: Optional[DerivedPoint]
    global_max: Optional[DerivedPoint]
    per_series_min: Dict[str, DerivedPoint]
    per_series_max: Dict[str, DerivedPoint]
    new_points: Dict[str, List[DerivedPoint]]
    latest: Dict[str, DerivedPoint]


def fold_extremum(
    latest: Mapping[str, DerivedPoint], order: Iterable[str]
) -> DerivedExtremum:
    """
    Find the latest derived points with the smallest and largest value.

    Series are visited in ``order``; on equal values the series visited first
    wins. Empty (NaN) points are never selected.
    """
    global_min = None
    global_max = None
    for name in order:
        point = latest.get(name)
        if point is None or point.is_empty():
            continue
        if global_min is None or point.value < global_min.value:
            global_min = point
        if global_max is None or point.value > global_max.value:
            global_max = point
    return DerivedExtremum(dict(latest), global_min, global_max)


class StreamAggregator:
    """
    Turns a stream of raw batches into derived streams with running extrema.

    Drives one windowed transform per series, successive differences or
    iterate maps depending on ``kind``. Series are registered the first time
    they appear in a batch (or explicitly through ``register_series``), and
    the registration order breaks ties between equal extrema.

    Batches must be delivered in non-decreasing time order per series.
    """

    def __init__(
        self,
        kind: Union[str, DerivedKind] = DerivedKind.DIFFERENCE,
        n: int = 1,
        use_start_anchor: bool = True,
    ):
        """
        Initialise the aggregator.

        Parameters
        ----------
        kind : Union[str, DerivedKind], default=DerivedKind.DIFFERENCE
            The derived stream to compute.
        n : int, default=1
            Window size (lag) of every transform.
        use_start_anchor : bool, default=True
            For differences, whether emissions take the older sample's time.

        Raises
        ------
        ConfigurationError
            If ``kind`` is unknown or ``n`` is not a positive integer.
        """
        self.kind = derived_kind(kind)
        self.n = validate_window_size(n)
        self.use_start_anchor = use_start_anchor

        self._transforms: Dict[str, WindowedTransform] = {}
        self._latest: Dict[str, DerivedPoint] = {}
        self._min: Dict[str, DerivedPoint] = {}
        self._max: Dict[str, DerivedPoint] = {}
        self._extremum = DerivedExtremum({}, None, None)

    def _create_transform(self) -> WindowedTransform:
        if self.kind is DerivedKind.ITERATE:
            return IterateMap(self.n)
        return SuccessiveDifference(self.n, self.use_start_anchor)

    def transform_for(self, series_name: str) -> WindowedTransform:
        """Transform of a series, registering the series when it is new."""
        transform = self._transforms.get(series_name)
        if transform is None:
            transform = self._create_transform()
            self._transforms[series_name] = transform
            logger.debug(
                f"Created {self.kind.value} transform (n={self.n}) for series '{series_name}'"
            )
        return transform

    def register_series(self, series_names: Iterable[str]) -> None:
        for name in series_names:
            self.transform_for(name)

    def series_names(self) -> List[str]:
        return list(self._transforms)

    @property
    def extremum(self) -> DerivedExtremum:
        return self._extremum

    def _track_extrema(self, series_name: str, point: DerivedPoint) -> None:
        if point.is_empty():
            return
        current_min = self._min.get(series_name)
        if current_min is None or point.value < current_min.value:
            self._min[series_name] = point
        current_max = self._max.get(series_name)
        if current_max is None or point.value > current_max.value:
            self._max[series_name] = point

    def process(self, batch: RawBatch) -> DerivedStreamRecord:
        """
        Consume one raw batch.

        Parameters
        ----------
        batch : RawBatch
            New raw points per series.

        Returns
        -------
        DerivedStreamRecord
            Emissions of this batch and the updated extrema.
        """
        new_points: Dict[str, List[DerivedPoint]] = {}
        for series_name, points in batch.new_points.items():
            derived = self.transform_for(series_name).extend(points)
            new_points[series_name] = derived
            for point in derived:
                self._track_extrema(series_name, point)
            if derived:
                self._latest[series_name] = derived[-1]

        self._extremum = fold_extremum(self._latest, self._transforms)
        return DerivedStreamRecord(
            global_min=self._extremum.global_min,
            global_max=self._extremum.global_max,
            per_series_min=dict(self._min),
            per_series_max=dict(self._max),
            new_points=new_points,
            latest=dict(self._latest),
        )

    def seed(self, series_name: str, derived: Iterable[DerivedPoint]) -> None:
        """
        Load previously derived points of a series into the extrema.

        Used when the transforms are rebuilt from retained history, so that the
        running extrema survive the rebuild. The transform's FIFO is not touched.
        """
        self.transform_for(series_name)
        last = None
        for point in derived:
            self._track_extrema(series_name, point)
            last = point
        if last is not None:
            self._latest[series_name] = last
        self._extremum = fold_extremum(self._latest, self._transforms)

    def reset(self) -> None:
        """Forget all series state."""
        self._transforms.clear()
        self._latest.clear()
        self._min.clear()
        self._max.clear()
        self._extremum = DerivedExtremum({}, None, None)

"""
Iterated maps used to generate live test streams.

Each map is built by a higher-order function that fixes its parameters and
returns ``f(time, x_n) -> Datum(time, x_{n+1})``. The time is informational
only; it never enters the calculation of the next iterate.
"""

import math
from typing import Callable, Dict, Iterator, Mapping

from loguru import logger

from .datum import Datum, RawBatch

IterateFunction = Callable[[float, float], Datum]


def tent_map_fn(mu: float) -> IterateFunction:
    """
    Tent map ``x[n+1] = mu * min(x[n], 1 - x[n])``.

    ``mu`` is clamped to ``[0, 2]``; ``x[n]`` should lie on the unit interval.
    """
    clean_mu = max(0.0, min(mu, 2.0))
    if clean_mu != mu:
        logger.warning(f"Tent map slope {mu} clamped to {clean_mu}")

    def tent_map(time: float, xn: float) -> Datum:
        return Datum(time, clean_mu * min(xn, 1 - xn))

    return tent_map


def logistic_map_fn(r: float) -> IterateFunction:
    """Logistic map ``x[n+1] = r * x[n] * (1 - x[n])`` with ``r`` clamped to ``[0, 4]``."""
    clean_r = max(0.0, min(r, 4.0))
    if clean_r != r:
        logger.warning(f"Logistic map rate {r} clamped to {clean_r}")

    def logistic_map(time: float, xn: float) -> Datum:
        return Datum(time, clean_r * xn * (1 - xn))

    return logistic_map


def gauss_map_fn(alpha: float, beta: float) -> IterateFunction:
    """Gauss map ``x[n+1] = exp(-alpha * x[n]^2) + beta``."""

    def gauss_map(time: float, xn: float) -> Datum:
        return Datum(time, math.exp(-alpha * xn * xn) + beta)

    return gauss_map


def iterate_batches(
    iterate_function: IterateFunction,
    initial: Mapping[str, Datum],
    update_period: float = 25.0,
    num_batches: int = 10,
) -> Iterator[RawBatch]:
    """
    Stream the iterates of a map, one new point per series per batch.

    Parameters
    ----------
    iterate_function : IterateFunction
        Map producing the next point from the previous one.
    initial : Mapping[str, Datum]
        Initial point per series.
    update_period : float, default=25.0
        Time step between successive iterates.
    num_batches : int, default=10
        Number of batches to produce.

    Yields
    ------
    RawBatch
        Batch holding the next iterate of every series.
    """
    last: Dict[str, Datum] = dict(initial)
    for _ in range(num_batches):
        new_points = {}
        for name, datum in last.items():
            new_points[name] = [iterate_function(datum.time + update_period, datum.value)]
        last = {name: points[-1] for name, points in new_points.items()}
        yield RawBatch(
            max_times={name: datum.time for name, datum in last.items()},
            new_points=new_points,
        )

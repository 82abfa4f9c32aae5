from typing import List, Tuple

import numpy as np
from loguru import logger
from numba import njit

from .datum import Datum, IterateDatum
from .windowed import validate_window_size


@njit
def _successive_differences_numba(
    t: np.ndarray, x: np.ndarray, n: int, use_start_x: bool
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Numba-optimized n-step successive differences.

    Parameters
    ----------
    t : np.ndarray
        Input time array.
    x : np.ndarray
        Input value array.
    n : int
        Lag between the differenced samples.
    use_start_x : bool
        Whether each difference takes the time of the older sample.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Times and differences, ``len(t) - n`` entries each.
    """
    count = max(len(t) - n, 0)
    t_out = np.empty(count, dtype=np.float64)
    d_out = np.empty(count, dtype=np.float64)

    for i in range(count):
        if use_start_x:
            t_out[i] = t[i]
        else:
            t_out[i] = t[i + n]
        d_out[i] = x[i + n] - x[i]

    return t_out, d_out


@njit
def _iterate_pairs_numba(
    t: np.ndarray, x: np.ndarray, n: int
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Numba-optimized n-lag return map.

    Parameters
    ----------
    t : np.ndarray
        Input time array.
    x : np.ndarray
        Input value array.
    n : int
        Lag between the paired samples.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        Times, values n steps back, and current values.
    """
    count = max(len(t) - n, 0)
    t_out = np.empty(count, dtype=np.float64)
    xn_out = np.empty(count, dtype=np.float64)
    xn1_out = np.empty(count, dtype=np.float64)

    for i in range(count):
        t_out[i] = t[i]
        xn_out[i] = x[i]
        xn1_out[i] = x[i + n]

    return t_out, xn_out, xn1_out


def _as_arrays(t: np.ndarray, x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    t = np.ascontiguousarray(t, dtype=np.float64)
    x = np.ascontiguousarray(x, dtype=np.float64)
    if t.shape != x.shape or t.ndim != 1:
        raise ValueError(
            f"Time and value arrays must be 1D with the same length. Got t={t.shape}, x={x.shape}"
        )
    return t, x


def successive_differences(
    t: np.ndarray, x: np.ndarray, n: int = 1, use_start_x: bool = True
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the n-step successive differences of a whole series at once.

    Produces the same values as feeding the series point by point through a
    ``SuccessiveDifference`` transform.

    Parameters
    ----------
    t : np.ndarray
        Time array.
    x : np.ndarray
        Value array.
    n : int, default=1
        Lag between the differenced samples.
    use_start_x : bool, default=True
        Whether each difference takes the time of the older sample.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Times and differences.
    """
    n = validate_window_size(n)
    t, x = _as_arrays(t, x)
    logger.debug(f"Computing {n}-step differences over {t.size} samples")
    return _successive_differences_numba(t, x, n, use_start_x)


def iterate_pairs(
    t: np.ndarray, x: np.ndarray, n: int = 1
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute the n-lag return map of a whole series at once.

    Produces the same values as feeding the series point by point through an
    ``IterateMap`` transform.
    """
    n = validate_window_size(n)
    t, x = _as_arrays(t, x)
    logger.debug(f"Computing {n}-lag iterates over {t.size} samples")
    return _iterate_pairs_numba(t, x, n)


def difference_datums(t: np.ndarray, d: np.ndarray) -> List[Datum]:
    return [Datum(float(ti), float(di)) for ti, di in zip(t, d)]


def iterate_datums(t: np.ndarray, xn: np.ndarray, xn1: np.ndarray) -> List[IterateDatum]:
    return [
        IterateDatum(float(ti), float(a), float(b)) for ti, a, b in zip(t, xn, xn1)
    ]

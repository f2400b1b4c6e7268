"""
Data processing utilities for probability and entropy computation.
"""

from typing import Sequence

import numpy as np

from .dataset import Dataset
from .errors import IncompatibleInputError


def as_series(x, name: str = "estimator") -> np.ndarray:
    """
    Make any array-like a scalar timeseries.

    Parameters
    ----------
    x : array_like
        1-d data (a 2-d array with a single row or column is accepted)
    name : str
        Name used in the error message

    Returns
    -------
    np.ndarray
        1-d float array
    """
    if isinstance(x, Dataset):
        if x.dimension != 1:
            raise IncompatibleInputError(f"{name} only works for timeseries input, "
                                         f"got a {x.dimension}-dimensional Dataset")
        return x.data[:, 0]
    x = np.asarray(x, dtype=np.float64)
    if x.ndim == 2 and 1 in x.shape:
        x = x.ravel()
    if x.ndim != 1:
        raise IncompatibleInputError(f"{name} only works for timeseries input, "
                                     f"got an array of shape {x.shape}")
    return x


def as_dataset(x) -> Dataset:
    """
    Make any array-like a Dataset.

    A 1-d array becomes a 1-dimensional Dataset; 2-d arrays are read row-wise.
    """
    if isinstance(x, Dataset):
        return x
    return Dataset(x)


def is_series(x) -> bool:
    """True if x is a scalar timeseries (1-d array), False for a Dataset or 2-d array."""
    if isinstance(x, Dataset):
        return False
    return np.ndim(x) == 1


def embed(x, lags: Sequence[int]) -> Dataset:
    """
    Time-embed a scalar timeseries with arbitrary lags.

    The state vector at time t is (x[t + lags[0]], x[t + lags[1]], ...).
    Lags are usually non-positive (0 is the current sample, -1 the previous one);
    times for which any lagged sample falls outside the series are dropped.

    Parameters
    ----------
    x : np.ndarray
        Signal of shape (n_pts,)
    lags : Sequence[int]
        Integer offsets, one per embedding dimension

    Returns
    -------
    Dataset
        Embedded data with len(lags) columns

    Example
    -------
    >>> embed(np.arange(5.0), (0, -2)).data
    array([[2., 0.],
           [3., 1.],
           [4., 2.]])
    """
    x = as_series(x, "embed")
    lags = np.asarray(lags, dtype=int)
    if lags.ndim != 1 or lags.size == 0:
        raise ValueError("please provide at least one lag")

    npts = x.size
    t_min = -min(int(lags.min()), 0)
    t_max = npts - max(int(lags.max()), 0)
    if t_max <= t_min:
        raise ValueError(f"Not enough points ({npts}) for embedding with lags {tuple(lags)}")

    t = np.arange(t_min, t_max)
    output = x[t[:, None] + lags[None, :]]
    return Dataset(output)


genembed = embed


def delay_lags(m: int, tau: int) -> tuple:
    """Causal lags (0, -tau, ..., -(m-1)*tau) of an m-dimensional delay embedding."""
    return tuple(-tau * i for i in range(m))

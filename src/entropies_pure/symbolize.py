"""
Ordinal pattern symbolization.

A vector of length m is mapped to the permutation that sorts it, and the
permutation is encoded as an integer in [0, m!-1] using the factorial number
system (Lehmer code). The identity permutation (already sorted vector) is 0.

The order used for sorting is given by a strict "less than" predicate ``lt``:

- ``isless``       : natural order, equal values keep their index order
- ``isless_rand``  : natural order, equal values are ordered at random

``isless_rand`` is the default of the permutation estimators: the same vector
with repeated values may be encoded to different symbols on two calls. Use
``isless`` (or call ``np.random.seed``) when reproducibility matters.
"""

from functools import cmp_to_key
from math import factorial
from typing import Callable, Optional

import numpy as np

from .dataset import Dataset
from .tools import as_dataset, delay_lags, embed, is_series


def isless(a, b) -> bool:
    """Natural strict order."""
    return a < b


def isless_rand(a, b) -> bool:
    """Natural strict order, ties broken uniformly at random."""
    if a == b:
        return bool(np.random.random() < 0.5)
    return a < b


def encode_motif(perm, m: Optional[int] = None) -> int:
    """
    Encode a permutation (or any vector) as its Lehmer code.

    For each position i, the number of later entries smaller than entry i is
    multiplied by (m-1-i)! and the results are summed.

    Parameters
    ----------
    perm : sequence
        Permutation of 0..m-1 (any real vector gives the code of its ranking)
    m : int
        Length of the motif (default: len(perm))

    Returns
    -------
    int
        Symbol in [0, m!-1]
    """
    if m is None:
        m = len(perm)
    n = 0
    for i in range(m - 1):
        for j in range(i + 1, m):
            n += 1 if perm[i] > perm[j] else 0
        n *= m - 1 - i
    return n


def _encode_rows(perms: np.ndarray) -> np.ndarray:
    """Vectorized encode_motif over the rows of an (N, m) array."""
    n_rows, m = perms.shape
    symbols = np.zeros(n_rows, dtype=np.int64)
    for i in range(m - 1):
        smaller_after = np.sum(perms[:, i + 1:] < perms[:, i:i + 1], axis=1)
        symbols += smaller_after * factorial(m - 1 - i)
    return symbols


def _three_way(lt: Callable, x) -> Callable:
    def compare(i, j):
        if lt(x[i], x[j]):
            return -1
        if lt(x[j], x[i]):
            return 1
        return 0
    return compare


def sortperm(x, lt: Callable = isless_rand) -> np.ndarray:
    """Indices that sort x under the order lt."""
    x = np.asarray(x)
    if lt is isless:
        return np.argsort(x, kind='stable')
    if lt is isless_rand:
        return np.lexsort((np.random.random(x.shape), x))
    return np.array(sorted(range(len(x)), key=cmp_to_key(_three_way(lt, x))))


def ordinal_pattern(x, lt: Callable = isless_rand) -> int:
    """
    Symbol of the ordinal pattern of a single vector.

    >>> ordinal_pattern([1, 2, 3, 4, 5], lt=isless)
    0
    >>> ordinal_pattern([5, 4, 3, 2, 1], lt=isless)
    119
    """
    return encode_motif(sortperm(x, lt))


def _sortperm_rows(X: np.ndarray, lt: Callable) -> np.ndarray:
    if lt is isless:
        return np.argsort(X, axis=1, kind='stable')
    if lt is isless_rand:
        return np.lexsort((np.random.random(X.shape), X), axis=-1)
    return np.array([sortperm(row, lt) for row in X], dtype=np.int64).reshape(X.shape)


class OrdinalPattern:
    """
    Ordinal pattern symbolization scheme.

    Parameters
    ----------
    m : int
        Motif length (>= 2)
    lt : Callable
        Strict order used to sort the vectors
    """

    def __init__(self, m: int = 3, lt: Callable = isless_rand):
        if m < 2:
            raise ValueError(f"Need m >= 2, otherwise no dynamical information is encoded in the symbols. Got m={m}.")
        self.m = m
        self.lt = lt

    def encode(self, x) -> int:
        if len(x) != self.m:
            raise ValueError(f"expected a vector of length {self.m}, got {len(x)}")
        return ordinal_pattern(x, self.lt)

    def __repr__(self):
        return f"OrdinalPattern(m={self.m}, lt={getattr(self.lt, '__name__', self.lt)})"


def symbolize_dataset(x: Dataset, lt: Callable = isless_rand,
                      out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Ordinal pattern symbol of every state vector of a Dataset.

    Parameters
    ----------
    x : Dataset
        State vectors, the motif length is the dimension of the Dataset
    lt : Callable
        Strict order used for the whole call
    out : np.ndarray, optional
        Pre-allocated integer workspace of length >= len(x). It is owned by the
        caller and must not be shared between concurrent calls.

    Returns
    -------
    np.ndarray
        Integer symbols (a view on ``out`` when given)
    """
    x = as_dataset(x)
    if x.dimension < 2:
        raise ValueError(f"Need state vectors of dimension >= 2 to define ordinal patterns, "
                         f"got {x.dimension}")
    if len(x) == 0:
        symbols = np.zeros(0, dtype=np.int64)
    else:
        symbols = _encode_rows(_sortperm_rows(x.data, lt))
    if out is None:
        return symbols
    if len(out) < len(symbols):
        raise ValueError(f"workspace of length {len(out)} is too short for {len(symbols)} symbols")
    out[:len(symbols)] = symbols
    return out[:len(symbols)]


def symbolize(x, est, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Symbolize a scalar timeseries or a Dataset with a permutation estimator.

    A timeseries is first embedded with the estimator's m and tau (causal lags
    0, -tau, ..., -(m-1)tau); a Dataset is symbolized directly and its
    dimension sets the motif length.

    Parameters
    ----------
    x : np.ndarray or Dataset
        Signal
    est : SymbolicPermutation (or a variant)
        Gives m, tau and lt
    out : np.ndarray, optional
        Pre-allocated workspace (see symbolize_dataset)

    Returns
    -------
    np.ndarray
        Integer symbols
    """
    if is_series(x):
        x = embed(x, delay_lags(est.m, est.tau))
    return symbolize_dataset(x, est.lt, out=out)

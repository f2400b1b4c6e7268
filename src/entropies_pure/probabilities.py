"""
The Probabilities container, universal output of the probability estimators,
and histogram helpers used to build it.
"""

import warnings
from collections import Counter
from typing import Optional, Tuple

import numpy as np

_ATOL = 1e-8


class Probabilities:
    """
    Immutable probability mass function.

    Parameters
    ----------
    x : array_like
        Non-negative weights, or already normalized probabilities when ``normed=True``
    normed : bool
        If False (default), ``x`` is divided by its sum.
        If True, ``x`` is only validated (sum must be 1 within tolerance).
    events : array_like, optional
        Labels of the outcomes, parallel to ``x``

    Raises
    ------
    ValueError
        for empty, negative, non-finite, zero-sum or non-normalized input
    """

    __slots__ = ('_p', '_events')

    def __init__(self, x, normed: bool = False, events=None):
        if isinstance(x, Probabilities):
            p = x._p
            if events is None:
                events = x._events
        else:
            p = np.array(x, dtype=np.float64).ravel()
            if p.size == 0:
                raise ValueError("Probabilities need at least one outcome")
            if not np.all(np.isfinite(p)):
                raise ValueError("Probabilities must be finite")
            if np.any(p < 0):
                raise ValueError("Probabilities must be non-negative")
            total = p.sum()
            if normed:
                if abs(total - 1.0) > _ATOL * max(1, p.size):
                    raise ValueError(f"normed=True but probabilities sum to {total}")
            else:
                if total <= 0:
                    raise ValueError("cannot normalize weights that sum to zero")
                p = p / total
            p.flags.writeable = False

        if events is not None:
            events = np.array(events)
            if len(events) != p.size:
                raise ValueError(f"got {len(events)} events for {p.size} probabilities")
            events.flags.writeable = False

        object.__setattr__(self, '_p', p)
        object.__setattr__(self, '_events', events)

    def __setattr__(self, name, value):
        raise AttributeError("Probabilities are immutable")

    @property
    def p(self) -> np.ndarray:
        """Read-only array of the probabilities."""
        return self._p

    @property
    def events(self) -> Optional[np.ndarray]:
        """Outcomes behind each probability, or None."""
        return self._events

    def __len__(self):
        return self._p.size

    def __iter__(self):
        return iter(self._p)

    def __getitem__(self, item):
        return self._p[item]

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._p.copy() if copy else self._p
        return self._p.astype(dtype)

    def sum(self, axis=None, dtype=None, out=None):
        # signature of ndarray.sum, which np.sum(p) calls
        return self._p.sum(axis=axis, dtype=dtype, out=out)

    def nonzero(self) -> np.ndarray:
        """The strictly positive probabilities."""
        return self._p[self._p > 0]

    def __repr__(self):
        return f"Probabilities({np.array2string(self._p, threshold=10)})"


def _trivial(what: str) -> Probabilities:
    warnings.warn(f"no {what} to count, returning a single-outcome distribution")
    return Probabilities([1.0], normed=True)


def counts_and_events(x) -> Tuple[np.ndarray, list]:
    """
    Count the distinct values of x.

    Rows of 2-d arrays count as single values; any other iterable of hashable
    values is accepted too.

    Returns
    -------
    Tuple[np.ndarray, list]
        (counts, events) with events sorted when they are orderable,
        in order of first appearance otherwise
    """
    if isinstance(x, np.ndarray) or hasattr(x, '__array__'):
        arr = np.asarray(x)
        if arr.ndim == 1 and arr.dtype != object:
            values, counts = np.unique(arr, return_counts=True)
            return counts, list(values)
        if arr.ndim == 2 and arr.dtype != object:
            values, counts = np.unique(arr, axis=0, return_counts=True)
            return counts, [tuple(v) for v in values]
        x = arr.tolist() if arr.ndim > 1 else list(arr)

    counter = Counter(tuple(v) if isinstance(v, list) else v for v in x)
    try:
        events = sorted(counter)
    except TypeError:
        events = list(counter)
    counts = np.array([counter[e] for e in events], dtype=np.int64)
    return counts, events


def histogram(x) -> Probabilities:
    """Relative frequencies of the distinct values of x (events attached)."""
    counts, events = counts_and_events(x)
    if len(events) == 0:
        return _trivial("values")
    if any(isinstance(e, tuple) for e in events):
        # keep one tuple per event, np.array would broadcast them
        packed = np.empty(len(events), dtype=object)
        for i, e in enumerate(events):
            packed[i] = e
        events = packed
    return Probabilities(counts, events=events)


def symprobs(symbols, weights=None) -> Probabilities:
    """
    Probabilities of integer symbols, each occurrence contributing its weight.

    Parameters
    ----------
    symbols : np.ndarray
        Integer symbols
    weights : np.ndarray, optional
        One non-negative weight per symbol. If None, every occurrence counts 1.

    Returns
    -------
    Probabilities
        Weight sum per distinct symbol over the total weight, events = sorted symbols
    """
    symbols = np.asarray(symbols)
    if symbols.size == 0:
        return _trivial("symbols")
    events, inverse = np.unique(symbols, return_inverse=True)
    if weights is None:
        sums = np.bincount(inverse.ravel()).astype(np.float64)
    else:
        weights = np.asarray(weights, dtype=np.float64)
        if weights.shape != symbols.shape:
            raise ValueError("need one weight per symbol")
        sums = np.bincount(inverse.ravel(), weights=weights)
    if sums.sum() <= 0:
        # all weights vanish (e.g. constant signal): fall back to plain counting
        warnings.warn("all weights are zero, falling back to unweighted symbol counts")
        sums = np.bincount(inverse.ravel()).astype(np.float64)
    return Probabilities(sums, events=events)

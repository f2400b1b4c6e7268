"""
Spatial (spatiotemporal) permutation probabilities for N-dimensional arrays.

References:
- Ribeiro, H.V. et al. (2012) PLoS ONE 7, e40689
- Schlemmer, A. et al. (2018) Front. Phys. 6, 39
"""

from math import factorial
from typing import Callable, Optional, Sequence

import numpy as np

from .errors import IncompatibleInputError
from .estimators import ProbabilitiesEstimator
from .probabilities import Probabilities, symprobs
from .symbolize import isless, symbolize_dataset


class SpatialSymbolicPermutation(ProbabilitiesEstimator):
    """
    Permutation probabilities of the patterns found in a stencil moved over an array.

    The stencil is a list of offsets (one integer per array dimension) relative
    to the current pixel. The pixel itself (zero offset) is always included and
    always first; the order of the offsets is the order in which values are
    compared, and the stencil length is the motif length m.

    Parameters
    ----------
    stencil : sequence of tuples, or integer array
        Offsets, e.g. [(0, 1), (1, 1), (1, 0)], or a 0/1 array of the same
        dimensionality as x whose non-zero entries define the stencil (the first
        non-zero entry is the pixel itself), e.g. np.array([[1, 1], [1, 1]])
    x : np.ndarray
        Example of the data, only its shape is used
    periodic : bool
        If True, the stencil wraps around the array edges. If False, pixels
        whose stencil exceeds the array are skipped.
    lt : Callable
        Strict order used to sort the values inside the stencil

    Example
    -------
    >>> x = np.random.rand(50, 50)
    >>> est = SpatialSymbolicPermutation([(0, 1), (1, 1), (1, 0)], x)
    >>> est.m
    4
    """

    def __init__(self, stencil, x, periodic: bool = True, lt: Callable = isless):
        shape = np.shape(x)
        ndim = len(shape)
        if isinstance(stencil, np.ndarray) and stencil.ndim == ndim:
            offsets = np.argwhere(stencil.astype(bool))
            if offsets.shape[0] == 0:
                raise ValueError("the stencil array has no non-zero entry")
            offsets = offsets - offsets[0]
            offsets = [tuple(int(v) for v in o) for o in offsets[1:]]
        else:
            offsets = [tuple(int(v) for v in o) for o in stencil]
        if any(len(o) != ndim for o in offsets):
            raise ValueError(f"stencil offsets and input array must match dimensionality ({ndim})")

        offsets = [o for o in offsets if any(o)]
        self.stencil = np.array([(0,) * ndim] + offsets, dtype=np.int64).reshape(-1, ndim)
        if len(self.stencil) < 2:
            raise ValueError("the stencil needs at least one non-zero offset")
        self.arraysize = tuple(shape)
        self.periodic = periodic
        self.lt = lt

    @classmethod
    def from_extent(cls, extent: Sequence[int], lag: Sequence[int], x,
                    periodic: bool = True, lt: Callable = isless):
        """
        Rectangular (or cuboid) stencil of `extent` points along each axis, spaced by `lag`.

        >>> est = SpatialSymbolicPermutation.from_extent((2, 2), (1, 1), np.zeros((10, 10)))
        >>> est.stencil.tolist()
        [[0, 0], [0, 1], [1, 0], [1, 1]]
        """
        if len(extent) != len(lag):
            raise ValueError("extent and lag must have the same length")
        grids = np.meshgrid(*[np.arange(e) * l for e, l in zip(extent, lag)], indexing='ij')
        offsets = np.stack([g.ravel() for g in grids], axis=1)
        return cls([tuple(o) for o in offsets[1:]], x, periodic=periodic, lt=lt)

    @property
    def m(self) -> int:
        return len(self.stencil)

    def valid_shape(self) -> tuple:
        """Shape of the block of pixels whose pattern is computed."""
        if self.periodic:
            return self.arraysize
        maxoffsets = np.maximum(self.stencil.max(axis=0), 0)
        minoffsets = np.minimum(self.stencil.min(axis=0), 0)
        return tuple(int(max(n - hi + lo, 0)) for n, hi, lo in zip(self.arraysize, maxoffsets, minoffsets))

    def stencil_values(self, x) -> np.ndarray:
        """
        Values inside the stencil of every valid pixel.

        Returns
        -------
        np.ndarray
            Shape (n_valid_pixels, m), the first column is the pixel itself
        """
        x = np.asarray(x)
        if x.shape != self.arraysize:
            raise IncompatibleInputError(f"estimator was built for arrays of shape {self.arraysize}, "
                                         f"got {x.shape}")
        axes = tuple(range(x.ndim))
        if self.periodic:
            columns = [np.roll(x, shift=tuple(-o), axis=axes).ravel() for o in self.stencil]
        else:
            minoffsets = np.minimum(self.stencil.min(axis=0), 0)
            valid = self.valid_shape()
            columns = []
            for o in self.stencil:
                start = o - minoffsets
                window = tuple(slice(s, s + n) for s, n in zip(start, valid))
                columns.append(x[window].ravel())
        return np.stack(columns, axis=1)

    def probabilities(self, x, out: Optional[np.ndarray] = None) -> Probabilities:
        symbols = symbolize_dataset(self.stencil_values(x), self.lt, out=out)
        return symprobs(symbols)

    def probabilities_and_events(self, x, out: Optional[np.ndarray] = None):
        probs = self.probabilities(x, out=out)
        return probs, probs.events

    def alphabet_length(self, x=None) -> int:
        return factorial(self.m)

    def __repr__(self):
        return (f"Spatial permutation estimator for {len(self.arraysize)}-dimensional data "
                f"(periodic={self.periodic}). Stencil: {self.stencil.tolist()}")

"""
Rectangular binning of multivariate datasets.

A binning is defined per dimension either by a number of bins (int) or by a
bin width (float). Applied to a Dataset it gives the axis minima, the edge
length of the bins along each axis, and one integer bin-id vector per point.
"""

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .dataset import Dataset
from .tools import as_dataset

logger = logging.getLogger(__name__)


class RectangularBinning:
    """
    Rectangular partition of state space into boxes.

    Parameters
    ----------
    eps : int, float, or sequence of ints or floats
        - int n            : n equal bins along every axis
        - float e          : bins of width e along every axis
        - [n_1, ..., n_D]  : n_d equal bins along axis d
        - [e_1, ..., e_D]  : bins of width e_d along axis d

    Example
    -------
    >>> RectangularBinning(5)
    RectangularBinning(5)
    >>> RectangularBinning([0.2, 0.3, 0.3])
    RectangularBinning([0.2, 0.3, 0.3])
    """

    def __init__(self, eps):
        if isinstance(eps, (bool, np.bool_)):
            raise ValueError("a binning needs numbers, not booleans")
        if np.ndim(eps) == 0:
            values = [eps]
            self.per_dimension = False
        else:
            values = list(eps)
            if len(values) == 0:
                raise ValueError("please provide at least one bin count or width")
            self.per_dimension = True

        if all(isinstance(v, (int, np.integer)) for v in values):
            self.counts = True
        elif all(isinstance(v, (float, np.floating)) for v in values):
            self.counts = False
        else:
            raise ValueError("bin counts (ints) and bin widths (floats) cannot be mixed")

        if any(v <= 0 for v in values):
            raise ValueError(f"bin counts and widths must be positive, got {eps}")
        self.eps = values if self.per_dimension else values[0]

    def per_axis(self, dimension: int) -> np.ndarray:
        """The bin count or width of each of the `dimension` axes."""
        if not self.per_dimension:
            return np.full(dimension, self.eps)
        if len(self.eps) != dimension:
            raise ValueError(f"binning has {len(self.eps)} entries but data has dimension {dimension}")
        return np.asarray(self.eps)

    def __eq__(self, other):
        return isinstance(other, RectangularBinning) and self.eps == other.eps

    def __hash__(self):
        return hash(tuple(np.atleast_1d(self.eps)))

    def __repr__(self):
        return f"RectangularBinning({self.eps})"


def minima_edgelengths(x, binning: RectangularBinning) -> Tuple[np.ndarray, np.ndarray]:
    """
    Axis minima and box edge lengths of a binning applied to a dataset.

    In count mode, the upper end of each axis is moved outward by 1% of a bin
    width so that the maximum of the data falls inside the last bin.
    Axes on which all points are equal get a single bin of length 1, and so
    does every axis of an empty dataset.

    Parameters
    ----------
    x : Dataset
        Data
    binning : RectangularBinning
        Binning scheme

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (axis minima, edge lengths), one entry per dimension
    """
    x = as_dataset(x)
    if len(x) == 0:
        binning.per_axis(x.dimension)
        logger.debug("binning an empty dataset, one bin per axis")
        return np.zeros(x.dimension), np.ones(x.dimension)
    axisminima = x.minima()
    axismaxima = x.maxima()
    ranges = axismaxima - axisminima
    eps = binning.per_axis(x.dimension)

    if binning.counts:
        n = eps.astype(np.float64)
        edgelengths = ((axismaxima + ranges / n / 100) - axisminima) / n
    else:
        edgelengths = eps.astype(np.float64)

    degenerate = ranges == 0
    if np.any(degenerate):
        logger.debug("collapsing constant dimensions %s to a single bin", np.flatnonzero(degenerate))
        edgelengths = np.where(degenerate, 1.0, edgelengths)
    return axisminima, edgelengths


def bins_per_axis(x: Dataset, binning: RectangularBinning,
                  axisminima: np.ndarray, edgelengths: np.ndarray) -> np.ndarray:
    """Number of bins along each axis."""
    if len(x) == 0:
        return np.ones(x.dimension, dtype=np.int64)
    ranges = x.maxima() - axisminima
    if binning.counts:
        n_bins = binning.per_axis(x.dimension).astype(np.int64)
    else:
        n_bins = np.floor(ranges / edgelengths).astype(np.int64) + 1
    return np.where(ranges == 0, 1, n_bins)


def bin_edges(x, binning: RectangularBinning) -> List[np.ndarray]:
    """
    Edges of the bins along each dimension.

    Returns
    -------
    List[np.ndarray]
        For each dimension d, n_d + 1 increasing edges starting at the minimum of the data
    """
    x = as_dataset(x)
    axisminima, edgelengths = minima_edgelengths(x, binning)
    n_bins = bins_per_axis(x, binning, axisminima, edgelengths)
    return [mini + length * np.arange(n + 1)
            for mini, length, n in zip(axisminima, edgelengths, n_bins)]


def encode_points(x, binning: RectangularBinning) -> np.ndarray:
    """
    Bin id of every point of a dataset.

    Along dimension d, the bin id of point p is floor((p[d] - min_d) / edgelength_d);
    bins are right-open except the last one.

    Returns
    -------
    np.ndarray
        Integer array of shape (n_points, dimension)
    """
    x = as_dataset(x)
    axisminima, edgelengths = minima_edgelengths(x, binning)
    n_bins = bins_per_axis(x, binning, axisminima, edgelengths)
    ids = np.floor((x.data - axisminima) / edgelengths).astype(np.int64)
    return np.clip(ids, 0, n_bins - 1)


def bin_dataset(x, binning: RectangularBinning) -> Tuple[np.ndarray, List[np.ndarray]]:
    """Bin ids of all points and the edges of the bins."""
    return encode_points(x, binning), bin_edges(x, binning)


def _visits(ids: np.ndarray) -> Dict[tuple, List[int]]:
    if ids.shape[0] == 0:
        return {}
    bins, inverse = np.unique(ids, axis=0, return_inverse=True)
    inverse = inverse.ravel()
    order = np.argsort(inverse, kind='stable')
    splits = np.cumsum(np.bincount(inverse, minlength=len(bins)))[:-1]
    return {tuple(int(i) for i in b): idx.tolist()
            for b, idx in zip(bins, np.split(order, splits))}


def joint_visits(x, binning: RectangularBinning) -> Dict[tuple, List[int]]:
    """
    Points visiting each occupied bin.

    Returns
    -------
    Dict[tuple, List[int]]
        Occupied bin id (one integer per dimension, keys sorted) -> indices of
        the points in that bin, in increasing order
    """
    return _visits(encode_points(x, binning))


def marginal_visits(x, binning: RectangularBinning, dims: Sequence[int]) -> Dict[tuple, List[int]]:
    """
    Points visiting each occupied bin of the marginal over `dims`.

    The bins are those of the joint binning, projected onto `dims`.

    Returns
    -------
    Dict[tuple, List[int]]
        Occupied marginal bin id -> indices of the points in that bin
    """
    dims = list(dims)
    x = as_dataset(x)
    if any(d < 0 or d >= x.dimension for d in dims):
        raise ValueError(f"dims {dims} out of range for a {x.dimension}-dimensional dataset")
    return _visits(encode_points(x, binning)[:, dims])

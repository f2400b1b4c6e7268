"""
Visitation frequency (histogram) probabilities over a rectangular binning.
"""

from typing import Tuple

import numpy as np

from .binning import RectangularBinning, encode_points, minima_edgelengths, bins_per_axis
from .estimators import ProbabilitiesEstimator
from .probabilities import Probabilities, _trivial
from .tools import as_dataset


def binhist(x, binning) -> Tuple[Probabilities, np.ndarray]:
    """
    Visitation frequencies of the occupied bins.

    Parameters
    ----------
    x : Dataset or array_like
        Data (a 1-d array is a 1-dimensional dataset)
    binning : RectangularBinning, int, float or sequence
        Binning scheme (bare numbers are wrapped in a RectangularBinning)

    Returns
    -------
    Tuple[Probabilities, np.ndarray]
        Probabilities of the occupied bins, and the coordinates of the lower
        corner of each of these bins, shape (n_occupied, dimension)
    """
    if not isinstance(binning, RectangularBinning):
        binning = RectangularBinning(binning)
    x = as_dataset(x)
    if len(x) == 0:
        return _trivial("points"), np.zeros((1, x.dimension))
    mini, edgelengths = minima_edgelengths(x, binning)
    ids = encode_points(x, binning)
    bins, counts = np.unique(ids, axis=0, return_counts=True)
    corners = mini + edgelengths * bins
    return Probabilities(counts, events=corners), corners


class VisitationFrequency(ProbabilitiesEstimator):
    """
    Probabilities of the bins of a rectangular partition, by counting visits.

    Parameters
    ----------
    binning : RectangularBinning
        Partition of the state space

    Example
    -------
    >>> D = Dataset(np.random.rand(100, 3))
    >>> p = VisitationFrequency(RectangularBinning(3)).probabilities(D)
    """

    def __init__(self, binning: RectangularBinning):
        if not isinstance(binning, RectangularBinning):
            binning = RectangularBinning(binning)
        self.binning = binning

    def probabilities_and_events(self, x):
        return binhist(x, self.binning)

    def alphabet_length(self, x=None) -> int:
        if x is None and self.binning.counts and self.binning.per_dimension:
            return int(np.prod(self.binning.eps))
        self._need_data(x, "the data range or dimension")
        x = as_dataset(x)
        mini, edgelengths = minima_edgelengths(x, self.binning)
        return int(np.prod(bins_per_axis(x, self.binning, mini, edgelengths)))

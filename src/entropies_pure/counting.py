"""
Probabilities from direct counting of the values in the data.
"""

from .estimators import ProbabilitiesEstimator
from .probabilities import counts_and_events, histogram


class CountOccurrences(ProbabilitiesEstimator):
    """
    Relative frequency of each distinct value of the input.

    Works for scalar timeseries, Datasets (each state vector is one value),
    and any sequence of hashable values. The events are the distinct values,
    sorted when they can be ordered.

    Example
    -------
    >>> p, events = CountOccurrences().probabilities_and_events([1, 1, 2, 2, 3])
    >>> p.p, events
    (array([0.4, 0.4, 0.2]), array([1, 2, 3]))
    """

    def probabilities_and_events(self, x):
        probs = histogram(x)
        return probs, probs.events

    def alphabet_length(self, x=None) -> int:
        self._need_data(x, "the number of distinct values in the data")
        counts, _ = counts_and_events(x)
        return len(counts)

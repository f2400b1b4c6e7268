"""
Permutation (ordinal pattern) probabilities estimators.

References:
- Bandt, C., Pompe, B. (2002) PRL 88, 174102
- Fadlallah, B. et al. (2013) PRE 87, 022911 (weighted permutation entropy)
- Azami, H., Escudero, J. (2016) Comput. Methods Programs Biomed. 128, 40-51
  (amplitude-aware permutation entropy)
"""

from math import factorial
from typing import Callable, Optional

import numpy as np

from .dataset import Dataset
from .estimators import ProbabilitiesEstimator
from .probabilities import Probabilities, symprobs
from .symbolize import isless_rand, symbolize_dataset
from .tools import delay_lags, embed, is_series


def _check_m(m: int) -> None:
    if m < 2:
        raise ValueError(f"Need m >= 2, otherwise no dynamical information is encoded in the symbols. Got m={m}.")


class SymbolicPermutation(ProbabilitiesEstimator):
    """
    Probabilities of the ordinal patterns of length m.

    A timeseries is embedded with lags (0, -tau, ..., -(m-1)tau); for a Dataset,
    each state vector is symbolized directly (the motif length is then the
    dimension of the Dataset).

    Parameters
    ----------
    m : int
        Embedding dimension / motif length (>= 2)
    tau : int
        Embedding lag (>= 1)
    lt : Callable
        Strict order for sorting; the default breaks ties at random

    Notes
    -----
    ``probabilities(x, out=s)`` writes the symbols into the integer array s
    (length >= number of state vectors) instead of allocating a new one. The
    workspace is owned by the caller and must not be used by two concurrent
    calls.
    """

    def __init__(self, m: int = 3, tau: int = 1, lt: Callable = isless_rand):
        _check_m(m)
        if tau < 1:
            raise ValueError(f"Need tau >= 1, got tau={tau}")
        self.m = m
        self.tau = tau
        self.lt = lt

    @property
    def lags(self) -> tuple:
        """Lags of the delay embedding applied to timeseries."""
        return delay_lags(self.m, self.tau)

    def _state_vectors(self, x) -> Dataset:
        if is_series(x):
            return embed(x, self.lags)
        x = Dataset(x)
        _check_m(x.dimension)
        return x

    def _weights(self, x: Dataset) -> Optional[np.ndarray]:
        return None

    def probabilities(self, x, out: Optional[np.ndarray] = None) -> Probabilities:
        x = self._state_vectors(x)
        symbols = symbolize_dataset(x, self.lt, out=out)
        return symprobs(symbols, self._weights(x))

    def probabilities_and_events(self, x, out: Optional[np.ndarray] = None):
        probs = self.probabilities(x, out=out)
        return probs, probs.events

    def alphabet_length(self, x=None) -> int:
        if x is not None and not is_series(x):
            return factorial(Dataset(x).dimension)
        return factorial(self.m)

    def __repr__(self):
        return f"{type(self).__name__}(m={self.m}, tau={self.tau}, lt={getattr(self.lt, '__name__', self.lt)})"


def weights_from_variance(x: np.ndarray, m: int) -> np.ndarray:
    """Variance of each state vector (row of x)."""
    return np.sum((x - x.mean(axis=1, keepdims=True)) ** 2, axis=1) / m


class SymbolicWeightedPermutation(SymbolicPermutation):
    """
    Weighted permutation probabilities (Fadlallah et al., 2013).

    Each ordinal pattern occurrence contributes the variance of its state vector

        w_j = 1/m * sum_k (x_k - mean(x))^2

    instead of 1; probabilities are the weight sums per symbol over the total
    weight. With identical positive weights this reduces to SymbolicPermutation.
    Flat (low amplitude) motifs thus contribute less.
    """

    def _weights(self, x: Dataset) -> np.ndarray:
        return weights_from_variance(x.data, x.dimension)


def weights_from_amplitude(x: np.ndarray, A: float, m: int) -> np.ndarray:
    """Amplitude-aware weight of each state vector (row of x)."""
    mean_amplitude = np.sum(np.abs(x), axis=1) / m
    mean_increment = np.sum(np.abs(np.diff(x, axis=1)), axis=1) / (m - 1)
    return A * mean_amplitude + (1 - A) * mean_increment


class SymbolicAmplitudeAwarePermutation(SymbolicPermutation):
    """
    Amplitude-aware permutation probabilities (Azami & Escudero, 2016).

    The weight of each state vector blends its mean absolute amplitude and its
    mean absolute consecutive difference:

        w_j = A/m * sum_k |x_k| + (1-A)/(m-1) * sum_k |x_k - x_{k-1}|

    Parameters
    ----------
    A : float
        Mixing coefficient in [0, 1] (default 0.5)
    """

    def __init__(self, m: int = 3, tau: int = 1, A: float = 0.5, lt: Callable = isless_rand):
        super().__init__(m=m, tau=tau, lt=lt)
        if not 0 <= A <= 1:
            raise ValueError(f"A must be in [0, 1], got A={A}")
        self.A = A

    def _weights(self, x: Dataset) -> np.ndarray:
        return weights_from_amplitude(x.data, self.A, x.dimension)

    def __repr__(self):
        return (f"{type(self).__name__}(m={self.m}, tau={self.tau}, A={self.A}, "
                f"lt={getattr(self.lt, '__name__', self.lt)})")

"""
Generalized entropies of probability distributions.

This module implements:
- genentropy: Renyi entropy of any order (Shannon for alpha=1, min-entropy for alpha=inf)
- entropy types Renyi, Shannon, Tsallis and Curado, with their maxima
- entropy, entropy_maximum, entropy_normalized: entropy of data through an estimator

References:
- Renyi, A. (1961) Proc. 4th Berkeley Symp. Math. Stat. Probab. 1, 547-561
- Tsallis, C. (1988) J. Stat. Phys. 52, 479-487
- Curado, E.M., Nobre, F.D. (2004) Physica A 335, 94-106
"""

import logging
from typing import Optional

import numpy as np

from .estimators import ProbabilitiesEstimator, _default_estimator, alphabet_length, probabilities
from .nearest_neighbors import NearestNeighborEntropyEstimator
from .probabilities import Probabilities

logger = logging.getLogger(__name__)


def _check_base(base: float) -> None:
    if base <= 0 or base == 1:
        raise ValueError(f"base must be positive and != 1, got {base}")


def _renyi(p: np.ndarray, q: float, base: float) -> float:
    """Renyi entropy of order q >= 0 of a normalized vector p."""
    p = p[p > 0]
    if q == 1:
        h = -np.sum(p * np.log(p))
    elif np.isinf(q):
        h = -np.log(np.max(p))
    elif q == 0:
        h = np.log(p.size)
    else:
        h = np.log(np.sum(p ** q)) / (1 - q)
    # -0.0 for a single outcome
    return float(h / np.log(base)) + 0.0


def genentropy(x, est: Optional[ProbabilitiesEstimator] = None, *,
               alpha: float = 1.0, base: float = np.e) -> float:
    """
    Generalized (Renyi) entropy of order alpha.

        H_alpha = 1/(1-alpha) * log_base(sum_i p_i^alpha)

    with the limits H_1 = -sum_i p_i log_base(p_i) (Shannon) and
    H_inf = -log_base(max_i p_i) (min-entropy). Zero probabilities do not contribute.

    Parameters
    ----------
    x : Probabilities, or data
        A probability distribution; any other input needs an estimator
    est : ProbabilitiesEstimator, optional
        Estimator turning the data x into probabilities. With Kraskov or
        KozachenkoLeonenko, their differential entropy estimate is returned.
    alpha : float
        Order of the entropy (> 0, may be np.inf)
    base : float
        Base of the logarithm

    Returns
    -------
    float
        entropy, in units given by the base (nats for e, bits for 2)

    Example
    -------
    >>> genentropy(Probabilities([0.5, 0.5]), base=2)
    1.0
    """
    if alpha <= 0:
        raise ValueError(f"alpha must be > 0, got {alpha}")
    _check_base(base)

    if est is not None:
        if isinstance(est, NearestNeighborEntropyEstimator):
            if alpha != 1:
                raise ValueError(f"{type(est).__name__} only estimates the Shannon entropy (alpha=1)")
            # the estimator has its own base
            return est.entropy(x) * np.log(est.base) / np.log(base)
        x = probabilities(x, est)
    elif not isinstance(x, Probabilities):
        raise TypeError("genentropy needs a Probabilities object, or data and an estimator: "
                        "genentropy(x, est)")
    return _renyi(x.p, alpha, base)


class Entropy:
    """Base class of the generalized entropy types."""

    def compute(self, p: np.ndarray) -> float:
        raise NotImplementedError

    def maximum(self, L: int) -> float:
        raise NotImplementedError

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"


class Renyi(Entropy):
    """
    Renyi entropy of order q: 1/(1-q) * log_base(sum_i p_i^q).

    q=0 gives the Hartley entropy log_base(number of non-zero outcomes),
    q=1 the Shannon entropy, q=np.inf the min-entropy.
    """

    def __init__(self, q: float = 1.0, base: float = 2):
        if q < 0:
            raise ValueError(f"q must be >= 0, got {q}")
        _check_base(base)
        self.q = q
        self.base = base

    def compute(self, p):
        return _renyi(p, self.q, self.base)

    def maximum(self, L):
        return float(np.log(L) / np.log(self.base))


class Shannon(Renyi):
    """Shannon entropy -sum_i p_i log_base(p_i)."""

    def __init__(self, base: float = 2):
        super().__init__(q=1.0, base=base)

    def __repr__(self):
        return f"Shannon(base={self.base!r})"


class Tsallis(Entropy):
    """
    Tsallis entropy k/(q-1) * (1 - sum_i p_i^q).

    At q=1 it reduces to k times the Shannon entropy in the given base.
    """

    def __init__(self, q: float = 1.0, k: float = 1, base: float = 2):
        _check_base(base)
        self.q = q
        self.k = k
        self.base = base

    def compute(self, p):
        p = p[p > 0]
        if self.q == 1:
            return float(-self.k * np.sum(p * np.log(p)) / np.log(self.base)) + 0.0
        return float(self.k / (self.q - 1) * (1 - np.sum(p ** self.q))) + 0.0

    def maximum(self, L):
        if self.q == 1:
            return float(self.k * np.log(L) / np.log(self.base))
        return float(self.k * (L ** (1 - self.q) - 1) / (1 - self.q))


class Curado(Entropy):
    """
    Curado entropy sum_i (1 - exp(-b p_i)) + exp(-b) - 1, with b > 0.

    The constant terms make the entropy of a single certain outcome vanish.
    """

    def __init__(self, b: float = 1.0):
        if b <= 0:
            raise ValueError(f"Curado entropy needs b > 0, got b={b}")
        self.b = b

    def compute(self, p):
        b = self.b
        return float(np.sum(1 - np.exp(-b * p)) + np.exp(-b) - 1)

    def maximum(self, L):
        b = self.b
        return float(L * (1 - np.exp(-b / L)) + np.exp(-b) - 1)


def _check_entropy(e) -> None:
    if not isinstance(e, Entropy):
        raise TypeError(f"expected an entropy type (Renyi, Shannon, Tsallis, Curado), "
                        f"got {type(e).__name__}")


def entropy(e: Entropy, x, est: Optional[ProbabilitiesEstimator] = None) -> float:
    """
    Entropy of type e of a distribution, or of data through an estimator.

    Parameters
    ----------
    e : Entropy
        Renyi, Shannon, Tsallis or Curado
    x : Probabilities, or data
        Distribution, or data given to the estimator
    est : ProbabilitiesEstimator, optional
        Estimator (CountOccurrences if x is data and est is None)

    Returns
    -------
    float
    """
    _check_entropy(e)
    if isinstance(est, NearestNeighborEntropyEstimator):
        if not (isinstance(e, Renyi) and e.q == 1):
            raise TypeError(f"{type(est).__name__} only estimates the Shannon entropy")
        return genentropy(x, est, base=e.base)
    if not isinstance(x, Probabilities):
        x = probabilities(x, est)
    return e.compute(x.p)


def entropy_maximum(e: Entropy, L: int) -> float:
    """Maximum of the entropy e over distributions with L outcomes (reached by the uniform one)."""
    _check_entropy(e)
    if L < 1:
        raise ValueError(f"L must be >= 1, got {L}")
    return e.maximum(int(L))


def entropy_normalized(e: Entropy, x, est: Optional[ProbabilitiesEstimator] = None) -> float:
    """
    Entropy of x divided by its maximum over the alphabet of the estimator.

    The result lies in [0, 1]. Estimators without a finite alphabet raise
    UnboundedAlphabetError.
    """
    est = _default_estimator(est)
    L = alphabet_length(est, x)
    if L < 2:
        raise ValueError("normalized entropy is undefined for an alphabet of a single outcome")
    h = entropy(e, x, est)
    h_max = entropy_maximum(e, L)
    logger.debug("normalized entropy: %g / %g (alphabet length %d)", h, h_max, L)
    return h / h_max

"""
Differential entropy from nearest-neighbor distances.

This module implements:
- Kraskov k-th nearest neighbor estimator
- Kozachenko-Leonenko (first nearest neighbor) estimator

Neighbor searches exclude the points within a Theiler window w of the query
point in time (|i - j| <= w), to reduce the bias due to autocorrelation.
The search structure is pluggable: KDTreeSearch (default) and
BruteForceSearch give the same distances.

References:
- Kozachenko, L.F., Leonenko, N.N. (1987) Probl. Peredachi Inf. 23, 9-16
- Kraskov, A., Stogbauer, H., Grassberger, P. (2004) PRE 69, 066138
- Charzynska, A., Gambin, A. (2016) Entropy 18, 13
"""

import logging
import warnings
from typing import Optional

import numpy as np
from scipy.spatial import KDTree
from scipy.spatial.distance import cdist
from scipy.special import digamma, gammaln

from . import commons
from .estimators import ProbabilitiesEstimator
from .tools import as_dataset

logger = logging.getLogger(__name__)

_minkowski_p = {'euclidean': 2, 'chebyshev': np.inf}


def _check_metric(metric: str) -> None:
    if metric not in _minkowski_p:
        raise ValueError(f"metric must be one of {sorted(_minkowski_p)}, got '{metric}'")


def log_ball_volume(dimension: int, metric: str = 'euclidean') -> float:
    """
    Logarithm of the volume of the unit ball in `dimension` dimensions.

    Euclidean: pi^(d/2) / Gamma(d/2 + 1); Chebyshev (max norm): 2^d.
    """
    _check_metric(metric)
    if metric == 'chebyshev':
        return dimension * np.log(2.0)
    return 0.5 * dimension * np.log(np.pi) - gammaln(0.5 * dimension + 1)


class KDTreeSearch:
    """
    Nearest neighbor search with scipy's k-d tree.

    Parameters
    ----------
    metric : str
        'euclidean' or 'chebyshev'
    leafsize : int
        Leaf size of the tree
    """

    def __init__(self, metric: str = 'euclidean', leafsize: int = 16):
        _check_metric(metric)
        self.metric = metric
        self.leafsize = leafsize

    def k_nearest(self, points: np.ndarray, k: int, w: int = 0) -> np.ndarray:
        """
        Distance from each point to its k-th nearest neighbor outside the Theiler window.

        Parameters
        ----------
        points : np.ndarray
            Data of shape (n_pts, n_dims)
        k : int
            Neighbor rank
        w : int
            Theiler window, neighbors j with |i - j| <= w are ignored

        Returns
        -------
        np.ndarray
            Distances, shape (n_pts,)
        """
        n_pts = points.shape[0]
        # at most 2w+1 candidates (self included) fall in the window
        n_query = min(k + 2 * w + 1, n_pts)
        tree = KDTree(points, leafsize=self.leafsize)
        distances, indices = tree.query(points, k=n_query, p=_minkowski_p[self.metric],
                                        workers=commons.get_threads_number())
        distances = distances.reshape(n_pts, n_query)
        indices = indices.reshape(n_pts, n_query)

        valid = np.abs(indices - np.arange(n_pts)[:, None]) > w
        rank = np.cumsum(valid, axis=1)
        position = np.argmax(rank >= k, axis=1)
        return distances[np.arange(n_pts), position]

    def __repr__(self):
        return f"KDTreeSearch(metric='{self.metric}')"


class BruteForceSearch:
    """
    Nearest neighbor search from the full distance matrix (O(N^2) memory).

    Parameters
    ----------
    metric : str
        'euclidean' or 'chebyshev'
    """

    def __init__(self, metric: str = 'euclidean'):
        _check_metric(metric)
        self.metric = metric

    def k_nearest(self, points: np.ndarray, k: int, w: int = 0) -> np.ndarray:
        """Same contract as KDTreeSearch.k_nearest."""
        n_pts = points.shape[0]
        distances = cdist(points, points, metric=self.metric)
        t = np.arange(n_pts)
        distances[np.abs(t[:, None] - t[None, :]) <= w] = np.inf
        return np.partition(distances, k - 1, axis=1)[:, k - 1]

    def __repr__(self):
        return f"BruteForceSearch(metric='{self.metric}')"


_searches = {'kdtree': KDTreeSearch, 'bruteforce': BruteForceSearch}


def _neighbor_search(search, metric: str):
    if isinstance(search, str):
        if search not in _searches:
            raise ValueError(f"search must be one of {sorted(_searches)}, got '{search}'")
        return _searches[search](metric=metric)
    if not hasattr(search, 'k_nearest'):
        raise TypeError("a neighbor search must provide k_nearest(points, k, w)")
    return search


class NearestNeighborEntropyEstimator(ProbabilitiesEstimator):
    """
    Base class of the differential entropy estimators.

    These estimators do not build a Probabilities object: use ``entropy(x)``
    (or ``genentropy(x, est)``), which returns a real number.
    """

    def __init__(self, k: int, w: Optional[int], base: Optional[float],
                 metric: str, search):
        if w is None:
            w = commons.get_default('w')
        if base is None:
            base = commons.get_default('base')
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}")
        if w < 0:
            raise ValueError(f"w must be >= 0, got {w}")
        if base <= 0 or base == 1:
            raise ValueError(f"base must be positive and != 1, got {base}")
        self.k = k
        self.w = w
        self.base = base
        self.metric = metric
        self.search = _neighbor_search(search, metric)

    def probabilities_and_events(self, x):
        raise TypeError(f"{type(self).__name__} estimates differential entropy directly, "
                        "use its entropy method or genentropy(x, est)")

    def _distances(self, x):
        """
        k-th neighbor distances of the points of x, without the zero distances.

        Returns
        -------
        Tuple[np.ndarray, int]
            (non-zero distances, dimension)
        """
        x = as_dataset(x)
        n_pts, n_dims = len(x), x.dimension
        commons._reset_last_info()
        commons._last_info['n_points'] = n_pts

        if n_pts <= self.k + 2 * self.w:
            warnings.warn(f"Not enough points ({n_pts}) for k={self.k} neighbors "
                          f"outside a Theiler window w={self.w}")
            return np.zeros(0), n_dims

        rho = self.search.k_nearest(np.ascontiguousarray(x.data), self.k, self.w)

        # Filter out zero distances (duplicated points)
        valid = rho > 0
        n_valid = int(np.sum(valid))
        commons._last_info['n_errors'] = n_pts - n_valid
        commons._last_info['n_eff'] = n_valid
        if n_valid < n_pts:
            warnings.warn(f"{n_pts - n_valid} points have a zero distance to their neighbor "
                          "and are discarded")
        logger.debug("%s: %d points, %d used", type(self).__name__, n_pts, n_valid)
        return rho[valid], n_dims

    def entropy(self, x) -> float:
        raise NotImplementedError

    def __repr__(self):
        return (f"{type(self).__name__}(k={self.k}, w={self.w}, base={self.base}, "
                f"metric='{self.metric}', search={self.search!r})")


class Kraskov(NearestNeighborEntropyEstimator):
    """
    k-th nearest neighbor estimator of the differential entropy (Kraskov et al., 2004).

        H = -psi(k) + psi(N) + log(V_D) + D/N * sum_i log(rho_i)

    where rho_i is the distance from point i to its k-th nearest neighbor and
    V_D the volume of the unit ball of the metric.

    Parameters
    ----------
    k : int
        Neighbor rank (default from commons, 1)
    w : int
        Theiler window (default from commons, 0)
    base : float
        Base of the logarithm (default from commons, e)
    metric : str
        'euclidean' or 'chebyshev'
    search : str or neighbor search
        'kdtree', 'bruteforce', or an object with k_nearest(points, k, w)
    """

    def __init__(self, k: Optional[int] = None, w: Optional[int] = None,
                 base: Optional[float] = None, metric: str = 'euclidean', search='kdtree'):
        if k is None:
            k = commons.get_default('k')
        super().__init__(k, w, base, metric, search)

    def entropy(self, x) -> float:
        rho, n_dims = self._distances(x)
        n_valid = rho.size
        if n_valid == 0:
            return np.nan
        h = (-digamma(self.k) + digamma(n_valid) + log_ball_volume(n_dims, self.metric)
             + n_dims * np.mean(np.log(rho)))
        return h / np.log(self.base)


class KozachenkoLeonenko(NearestNeighborEntropyEstimator):
    """
    Nearest neighbor estimator of the differential entropy (Kozachenko & Leonenko, 1987).

        H = D/N * sum_i log(rho_i) + log(V_D) + gamma + log(N - 1)

    where rho_i is the distance from point i to its nearest neighbor and gamma
    the Euler-Mascheroni constant.

    Parameters
    ----------
    w : int
        Theiler window (default from commons, 0)
    base : float
        Base of the logarithm (default from commons, e)
    metric, search
        As for Kraskov
    """

    def __init__(self, w: Optional[int] = None, base: Optional[float] = None,
                 metric: str = 'euclidean', search='kdtree'):
        super().__init__(1, w, base, metric, search)

    def entropy(self, x) -> float:
        rho, n_dims = self._distances(x)
        n_valid = rho.size
        if n_valid < 2:
            return np.nan
        h = (n_dims * np.mean(np.log(rho)) + log_ball_volume(n_dims, self.metric)
             + np.euler_gamma + np.log(n_valid - 1))
        return h / np.log(self.base)

    def __repr__(self):
        return (f"KozachenkoLeonenko(w={self.w}, base={self.base}, "
                f"metric='{self.metric}', search={self.search!r})")

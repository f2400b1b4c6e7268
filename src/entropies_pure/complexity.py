"""
Kernel estimates of complexity: approximate entropy and sample entropy.

Template vectors of length m (and m+1) are built with a delay tau; two
templates match when their Chebyshev distance is at most r * std(x).

References:
- Pincus, S.M. (1991) PNAS 88, 2297-2301
- Richman, J.S., Moorman, J.R. (2000) Am. J. Physiol. 278, H2039-H2049
"""

import warnings

import numpy as np
from scipy.spatial import KDTree

from . import commons
from .tools import as_series, embed


def _check_parameters(x: np.ndarray, m: int, tau: int, r: float) -> None:
    if m < 1:
        raise ValueError(f"m must be >= 1, got {m}")
    if tau < 1:
        raise ValueError(f"tau must be >= 1, got {tau}")
    if r < 0:
        raise ValueError(f"r must be >= 0, got {r}")
    if x.size <= m * tau + 1:
        raise ValueError(f"Not enough points ({x.size}) for templates of length {m + 1} "
                         f"with tau={tau}")


def _templates(x: np.ndarray, m: int, tau: int) -> np.ndarray:
    return embed(x, tuple(tau * i for i in range(m))).data


def _match_counts(templates: np.ndarray, r_abs: float) -> np.ndarray:
    """Number of templates within r_abs of each template (self included)."""
    tree = KDTree(templates)
    return tree.query_ball_point(templates, r_abs, p=np.inf, return_length=True,
                                 workers=commons.get_threads_number())


def approx_entropy(x, m: int = 2, tau: int = 1, r: float = 0.2) -> float:
    """
    Approximate entropy ApEn(m, r) = Phi_m - Phi_{m+1}.

    Phi_m is the average over templates of the logarithm of the fraction of
    templates of length m matching it, self-matches included.

    Parameters
    ----------
    x : np.ndarray
        Signal
    m : int
        Template length
    tau : int
        Delay between the samples of a template
    r : float
        Tolerance, as a fraction of the standard deviation of x

    Returns
    -------
    float
        ApEn, in nats
    """
    x = as_series(x, "approx_entropy")
    _check_parameters(x, m, tau, r)
    r_abs = r * np.std(x)

    phi = []
    for length in (m, m + 1):
        templates = _templates(x, length, tau)
        counts = _match_counts(templates, r_abs)
        phi.append(np.mean(np.log(counts / len(templates))))
    return float(phi[0] - phi[1])


def sample_entropy(x, m: int = 2, tau: int = 1, r: float = 0.2) -> float:
    """
    Sample entropy SampEn(m, r) = -log(A / B).

    B (resp. A) is the number of pairs of distinct templates of length m
    (resp. m+1) that match. The same N - m*tau template start times are used
    for both lengths.

    Parameters
    ----------
    x : np.ndarray
        Signal
    m : int
        Template length
    tau : int
        Delay between the samples of a template
    r : float
        Tolerance, as a fraction of the standard deviation of x

    Returns
    -------
    float
        SampEn in nats, or np.nan if no pair of templates matches
    """
    x = as_series(x, "sample_entropy")
    _check_parameters(x, m, tau, r)
    r_abs = r * np.std(x)
    n_templates = x.size - m * tau

    pairs = []
    for length in (m, m + 1):
        templates = _templates(x, length, tau)[:n_templates]
        counts = _match_counts(templates, r_abs)
        pairs.append(np.sum(counts - 1))

    B, A = pairs
    if A == 0 or B == 0:
        warnings.warn(f"no matching templates of length {m + 1 if A == 0 else m} "
                      f"within r={r}, sample entropy is undefined")
        return np.nan
    return float(-np.log(A / B))

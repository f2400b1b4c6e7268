"""
Transfer operator (Ulam / Markov) approximation over a rectangular binning,
and its invariant measure.

The transfer operator is estimated by counting transitions of the trajectory
between the occupied bins: entry (i, j) of the transfer matrix is the fraction
of the points of bin i whose successor lies in bin j. Since the number of
occupied bins is usually much smaller than the number of bins of the grid,
only occupied bins are kept and the matrix is stored as a sparse matrix.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from scipy import sparse

from . import commons
from .binning import RectangularBinning, encode_points, minima_edgelengths
from .estimators import ProbabilitiesEstimator
from .probabilities import Probabilities
from .tools import as_dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferOperatorApproximation:
    """Transfer matrix over the occupied bins of a rectangular binning."""
    transfermatrix: sparse.csr_matrix
    binning: RectangularBinning
    bins: np.ndarray            # bin ids of the occupied bins, shape (n_bins, dimension)
    mini: np.ndarray            # axis minima
    edgelengths: np.ndarray     # box edge lengths
    visits: np.ndarray          # bin slot visited by each point of the trajectory

    def __len__(self):
        return self.transfermatrix.shape[0]

    def corners(self) -> np.ndarray:
        """Coordinates of the lower corner of each occupied bin."""
        return self.mini + self.edgelengths * self.bins


@dataclass(frozen=True)
class InvariantMeasureEstimate:
    """Invariant measure of a transfer operator approximation."""
    to: TransferOperatorApproximation
    rho: Probabilities
    converged: bool
    n_iterations: int


def transferoperator(x, binning: RectangularBinning) -> TransferOperatorApproximation:
    """
    Estimate the transfer operator of a trajectory on a rectangular binning.

    Parameters
    ----------
    x : Dataset
        Trajectory, points in time order
    binning : RectangularBinning
        Partition of the state space

    Returns
    -------
    TransferOperatorApproximation
        Rows of bins with at least one outgoing transition sum to 1,
        rows of bins without outgoing transitions are zero.
    """
    if not isinstance(binning, RectangularBinning):
        binning = RectangularBinning(binning)
    x = as_dataset(x)
    if len(x) < 2:
        raise ValueError(f"need at least 2 points to estimate transitions, got {len(x)}")

    mini, edgelengths = minima_edgelengths(x, binning)
    ids = encode_points(x, binning)
    bins, visits = np.unique(ids, axis=0, return_inverse=True)
    visits = visits.ravel()
    n_bins = len(bins)

    # transition counts between consecutive points
    counts = sparse.coo_matrix(
        (np.ones(len(visits) - 1), (visits[:-1], visits[1:])),
        shape=(n_bins, n_bins),
    ).tocsr()

    outgoing = np.asarray(counts.sum(axis=1)).ravel()
    scale = np.divide(1.0, outgoing, out=np.zeros_like(outgoing), where=outgoing > 0)
    transfermatrix = sparse.diags(scale).dot(counts).tocsr()

    logger.debug("transfer operator over %d occupied bins, %d non-zero transitions",
                 n_bins, transfermatrix.nnz)
    return TransferOperatorApproximation(transfermatrix, binning, bins, mini, edgelengths, visits)


def transfermatrix(to: TransferOperatorApproximation) -> sparse.csr_matrix:
    """The sparse transfer matrix of a transfer operator approximation."""
    return to.transfermatrix


def invariantmeasure(to, binning: Optional[RectangularBinning] = None,
                     tolerance: Optional[float] = None,
                     max_iterations: Optional[int] = None) -> InvariantMeasureEstimate:
    """
    Invariant measure of a transfer operator, by power iteration.

    Starting from the uniform distribution over the occupied bins, rho is
    repeatedly replaced by (P^T rho) / sum(P^T rho) until the L1 change drops
    below `tolerance` or `max_iterations` is reached.

    Parameters
    ----------
    to : TransferOperatorApproximation, or a Dataset (then `binning` is needed)
    binning : RectangularBinning, optional
        Binning, when `to` is a Dataset
    tolerance : float
        L1 tolerance (default from commons.set_defaults)
    max_iterations : int
        Maximum number of iterations (default from commons.set_defaults)

    Returns
    -------
    InvariantMeasureEstimate
        The best estimate; `converged` is False if the tolerance was not reached.
    """
    if not isinstance(to, TransferOperatorApproximation):
        if binning is None:
            raise ValueError("please provide a binning to estimate the transfer operator")
        to = transferoperator(to, binning)
    if tolerance is None:
        tolerance = commons.get_default('tolerance')
    if max_iterations is None:
        max_iterations = commons.get_default('max_iterations')
    if tolerance <= 0:
        raise ValueError(f"tolerance must be positive, got {tolerance}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

    P_T = to.transfermatrix.T.tocsr()
    n_bins = P_T.shape[0]
    rho = np.full(n_bins, 1.0 / n_bins)
    converged = False
    residual = np.inf
    n_iterations = 0

    for n_iterations in range(1, max_iterations + 1):
        new = P_T.dot(rho)
        total = new.sum()
        if total <= 0:
            # all the mass drained into bins without outgoing transitions
            warnings.warn("invariant measure: all mass left the occupied bins, "
                          "returning the last non-zero iterate", RuntimeWarning)
            break
        new /= total
        residual = np.abs(new - rho).sum()
        rho = new
        if residual < tolerance:
            converged = True
            break
    else:
        warnings.warn(f"invariant measure did not converge in {max_iterations} iterations "
                      f"(L1 change {residual:.3g} > {tolerance:.3g})", RuntimeWarning)

    commons._reset_last_info()
    commons._last_info.update(n_points=len(to.visits), n_eff=n_bins, n_iterations=n_iterations,
                              converged=converged, residual=float(residual))
    logger.info("invariant measure: %d iterations, converged=%s", n_iterations, converged)

    return InvariantMeasureEstimate(to, Probabilities(rho, events=to.corners()), converged, n_iterations)


def binhist(to) -> Tuple[Probabilities, np.ndarray]:
    """Invariant measure of a transfer operator and the corners of its bins."""
    if isinstance(to, TransferOperatorApproximation):
        to = invariantmeasure(to)
    return to.rho, to.to.corners()


class TransferOperator(ProbabilitiesEstimator):
    """
    Probabilities given by the invariant measure of the transfer operator on a binning.

    Parameters
    ----------
    binning : RectangularBinning
        Partition of the state space
    tolerance, max_iterations
        Settings of the invariant measure iteration (defaults from commons)
    """

    def __init__(self, binning: RectangularBinning, tolerance: Optional[float] = None,
                 max_iterations: Optional[int] = None):
        if not isinstance(binning, RectangularBinning):
            binning = RectangularBinning(binning)
        self.binning = binning
        self.tolerance = tolerance
        self.max_iterations = max_iterations

    def transferoperator(self, x) -> TransferOperatorApproximation:
        return transferoperator(x, self.binning)

    def invariantmeasure(self, x) -> InvariantMeasureEstimate:
        return invariantmeasure(self.transferoperator(x), tolerance=self.tolerance,
                                max_iterations=self.max_iterations)

    def probabilities_and_events(self, x):
        return binhist(self.invariantmeasure(x))

    def alphabet_length(self, x=None) -> int:
        from .histogram import VisitationFrequency
        return VisitationFrequency(self.binning).alphabet_length(x)

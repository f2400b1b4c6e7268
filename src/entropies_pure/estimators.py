"""
Common interface of the probabilities estimators.

Every estimator turns input data into a Probabilities object with
``probabilities(x)``, also returns the outcomes behind each probability with
``probabilities_and_events(x)``, and gives the number of possible outcomes
with ``alphabet_length(x)``.
"""

from typing import Optional, Tuple

import numpy as np

from .errors import UnboundedAlphabetError
from .probabilities import Probabilities


class ProbabilitiesEstimator:
    """
    Base class of the probabilities estimators.

    The set of estimators is closed: CountOccurrences, the permutation family,
    VisitationFrequency, TransferOperator, SpatialSymbolicPermutation,
    PowerSpectrum and TimeScaleMODWT. Kraskov and KozachenkoLeonenko share the
    interface but estimate differential entropy directly.
    """

    def probabilities(self, x, out: Optional[np.ndarray] = None) -> Probabilities:
        """Probabilities of x. Estimators that need no workspace ignore `out`."""
        probs, _ = self.probabilities_and_events(x)
        return probs

    def probabilities_and_events(self, x) -> Tuple[Probabilities, np.ndarray]:
        raise NotImplementedError(f"{type(self).__name__} does not define probabilities")

    def alphabet_length(self, x=None) -> int:
        raise UnboundedAlphabetError(
            f"the number of possible outcomes of {type(self).__name__} is not finite or not known")

    def _need_data(self, x, what: str = "the input data"):
        if x is None:
            raise UnboundedAlphabetError(
                f"the alphabet length of {type(self).__name__} depends on {what}, please provide x")

    def __repr__(self):
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if not k.startswith('_'))
        return f"{type(self).__name__}({params})"


def _default_estimator(est: Optional[ProbabilitiesEstimator]) -> ProbabilitiesEstimator:
    if est is None:
        from .counting import CountOccurrences
        return CountOccurrences()
    if not isinstance(est, ProbabilitiesEstimator):
        raise TypeError(f"expected a probabilities estimator, got {type(est).__name__}")
    return est


def probabilities(x, est: Optional[ProbabilitiesEstimator] = None, **kwargs) -> Probabilities:
    """
    Probabilities of the data x, estimated with est (CountOccurrences by default).

    Keyword arguments are passed to the estimator. A pre-allocated ``out``
    workspace is used by the permutation and spatial estimators and ignored by the others.
    """
    return _default_estimator(est).probabilities(x, **kwargs)


def probabilities_and_events(x, est: Optional[ProbabilitiesEstimator] = None):
    """Probabilities of x and the outcomes they correspond to."""
    return _default_estimator(est).probabilities_and_events(x)


def alphabet_length(est: ProbabilitiesEstimator, x=None) -> int:
    """Number of possible outcomes of est (some estimators need the data x)."""
    return _default_estimator(est).alphabet_length(x)

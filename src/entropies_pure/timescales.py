"""
Probabilities from the distribution of the signal energy over frequencies or time-scales.

This module implements:
- PowerSpectrum: normalized power spectrum (spectral entropy)
- TimeScaleMODWT: relative wavelet energies of a maximal overlap discrete
  wavelet transform (wavelet entropy)

References:
- Llanos, F. et al. (2017) J. Acoust. Soc. Am. 141, EL127
- Rosso, O.A. et al. (2001) J. Neurosci. Methods 105, 65-75
- Percival, D.B., Walden, A.T. (2000) Wavelet Methods for Time Series Analysis
"""

from typing import Optional, Sequence

import numpy as np
import pywt

from . import commons
from .estimators import ProbabilitiesEstimator
from .probabilities import Probabilities
from .tools import as_series


class PowerSpectrum(ProbabilitiesEstimator):
    """
    Power spectrum of a timeseries, normalized to sum 1.

    The probabilities are |rfft(x)|^2 over the non-negative frequencies; the
    events are these frequencies (in units of the sampling rate). Entropies of
    series of different lengths are not comparable since the frequency
    resolution depends on the length.
    """

    def probabilities_and_events(self, x):
        x = as_series(x, "PowerSpectrum")
        if x.size == 0:
            raise ValueError("PowerSpectrum needs a non-empty timeseries")
        f = np.fft.rfft(x)
        events = np.fft.rfftfreq(x.size)
        probs = Probabilities(np.abs(f) ** 2, events=events)
        return probs, events

    def alphabet_length(self, x=None) -> int:
        self._need_data(x, "the length of the timeseries")
        return as_series(x, "PowerSpectrum").size // 2 + 1


def maxmodwttransformlevels(x) -> int:
    """Maximum number of MODWT levels for a series: floor(log2(len(x)))."""
    n = len(x)
    if n < 2:
        raise ValueError(f"need at least 2 points for a wavelet transform, got {n}")
    return int(np.floor(np.log2(n)))


def modwt(x: np.ndarray, wavelet, levels: int) -> np.ndarray:
    """
    Maximal overlap discrete wavelet transform, with periodic boundaries.

    Pyramid algorithm: at level j the rescaled filters (divided by sqrt 2) are
    applied with a spacing of 2^(j-1) samples to the smooth of level j-1.

    Parameters
    ----------
    x : np.ndarray
        Signal, shape (n_pts,)
    wavelet : str or pywt.Wavelet
        Orthogonal wavelet
    levels : int
        Number of levels J

    Returns
    -------
    np.ndarray
        Shape (n_pts, J+1): wavelet coefficients of levels 1..J, then the
        scaling coefficients (smooth) of level J
    """
    wavelet = pywt.Wavelet(wavelet) if isinstance(wavelet, str) else wavelet
    if not wavelet.orthogonal:
        raise ValueError(f"MODWT needs an orthogonal wavelet, got {wavelet.name}")
    h = np.asarray(wavelet.rec_hi) / np.sqrt(2)
    g = np.asarray(wavelet.rec_lo) / np.sqrt(2)

    n_pts = x.size
    W = np.zeros((n_pts, levels + 1))
    v = x.astype(np.float64)
    for j in range(levels):
        spacing = 2 ** j
        w_j = np.zeros(n_pts)
        v_j = np.zeros(n_pts)
        for l in range(len(h)):
            shifted = np.roll(v, (spacing * l) % n_pts)
            w_j += h[l] * shifted
            v_j += g[l] * shifted
        W[:, j] = w_j
        v = v_j
    W[:, levels] = v
    return W


def get_modwt(x, wavelet=None) -> np.ndarray:
    """
    MODWT of a timeseries over the maximum number of levels.

    Parameters
    ----------
    x : np.ndarray
        Signal
    wavelet : str or pywt.Wavelet
        Orthogonal wavelet (default from commons, 'db12')

    Returns
    -------
    np.ndarray
        Coefficients, shape (n_pts, maxmodwttransformlevels(x) + 1)
    """
    x = as_series(x, "get_modwt")
    if wavelet is None:
        wavelet = commons.get_default('wavelet')
    return modwt(x, wavelet, maxmodwttransformlevels(x))


def energy_at_scale(W: np.ndarray, j: int) -> float:
    """Energy of the coefficients at scale j (1 = finest, the last column is the smooth)."""
    n_scales = W.shape[1]
    if j < 1 or j > n_scales:
        raise ValueError(f"scale j must be between 1 and {n_scales}, got j={j}")
    return float(np.sum(W[:, j - 1] ** 2))


def energy_at_time(W: np.ndarray, t: int) -> float:
    """Energy of the coefficients at time index t, summed over all scales."""
    n_pts = W.shape[0]
    if t < 0 or t >= n_pts:
        raise ValueError(f"time index t must be between 0 and {n_pts - 1}, got t={t}")
    return float(np.sum(W[t, :] ** 2))


def relative_wavelet_energy(W: np.ndarray, j: int) -> float:
    """Energy at scale j over the total energy of all scales."""
    total = float(np.sum(W ** 2))
    if total == 0:
        raise ValueError("the wavelet coefficients have zero energy")
    return energy_at_scale(W, j) / total


def relative_wavelet_energies(W: np.ndarray, scales: Optional[Sequence[int]] = None) -> np.ndarray:
    """Relative wavelet energies of several scales (default: all scales)."""
    if scales is None:
        scales = range(1, W.shape[1] + 1)
    return np.array([relative_wavelet_energy(W, j) for j in scales])


def time_scale_density(x, wavelet=None) -> np.ndarray:
    """Relative energies of all MODWT scales of x (they sum to 1)."""
    return relative_wavelet_energies(get_modwt(x, wavelet))


class TimeScaleMODWT(ProbabilitiesEstimator):
    """
    Relative energies of the scales of a maximal overlap discrete wavelet transform.

    The signal is decomposed over floor(log2(N)) levels; the probabilities are
    the fractions of the energy carried by each level and by the final smooth.
    The events are the scale numbers (1 = finest, last = smooth).

    Parameters
    ----------
    wavelet : str or pywt.Wavelet
        Orthogonal wavelet, e.g. 'db4', 'sym8' (default from commons, 'db12')
    """

    def __init__(self, wavelet=None):
        if wavelet is None:
            wavelet = commons.get_default('wavelet')
        if isinstance(wavelet, str):
            wavelet = pywt.Wavelet(wavelet)
        if not wavelet.orthogonal:
            raise ValueError(f"MODWT needs an orthogonal wavelet, got {wavelet.name}")
        self.wavelet = wavelet

    def probabilities_and_events(self, x):
        density = time_scale_density(as_series(x, "TimeScaleMODWT"), self.wavelet)
        events = np.arange(1, density.size + 1)
        return Probabilities(density, events=events), events

    def alphabet_length(self, x=None) -> int:
        self._need_data(x, "the length of the timeseries")
        return maxmodwttransformlevels(as_series(x, "TimeScaleMODWT")) + 1

    def __repr__(self):
        return f"TimeScaleMODWT(wavelet='{self.wavelet.name}')"

"""
Test script for the spectral and wavelet (time-scale) estimators.
"""
import numpy as np
import pytest
import sys
import os

# Add parent directory to path for local testing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from entropies_pure import (
    Dataset,
    IncompatibleInputError,
    PowerSpectrum,
    TimeScaleMODWT,
    UnboundedAlphabetError,
    alphabet_length,
    energy_at_scale,
    energy_at_time,
    get_modwt,
    maxmodwttransformlevels,
    probabilities_and_events,
    relative_wavelet_energy,
    time_scale_density,
)
from entropies_pure.timescales import relative_wavelet_energies


def test_power_spectrum():
    """Test the power spectrum of a pure sine."""
    print("Testing power spectrum...")

    n_pts = 256
    x = np.sin(2 * np.pi * 8 * np.arange(n_pts) / n_pts)
    p, freqs = probabilities_and_events(x, PowerSpectrum())
    print(f"  peak at frequency {freqs[np.argmax(p.p)]}")
    assert len(p) == n_pts // 2 + 1
    assert np.argmax(p.p) == 8 and p.p[8] > 0.999, "all power should be at the sine frequency"
    np.testing.assert_allclose(freqs[8], 8 / n_pts)

    assert alphabet_length(PowerSpectrum(), np.zeros(101)) == 51
    with pytest.raises(UnboundedAlphabetError):
        PowerSpectrum().alphabet_length()
    with pytest.raises(IncompatibleInputError):
        PowerSpectrum().probabilities(Dataset(np.random.rand(50, 2)))

    print("  PASSED\n")


def test_modwt_energy():
    """Test that the MODWT preserves the energy of the signal."""
    print("Testing MODWT energy conservation...")
    np.random.seed(42)

    for n_pts, wavelet in ((128, 'db4'), (200, 'haar'), (64, 'db12'), (100, 'sym8')):
        x = np.random.randn(n_pts)
        W = get_modwt(x, wavelet)
        J = maxmodwttransformlevels(x)
        assert W.shape == (n_pts, J + 1)
        print(f"  {wavelet}, N={n_pts}: energy {np.sum(W ** 2):.6f} vs {np.sum(x ** 2):.6f}")
        np.testing.assert_allclose(np.sum(W ** 2), np.sum(x ** 2), rtol=1e-8)

        by_scale = sum(energy_at_scale(W, j) for j in range(1, J + 2))
        by_time = sum(energy_at_time(W, t) for t in range(n_pts))
        np.testing.assert_allclose(by_scale, np.sum(x ** 2), rtol=1e-8)
        np.testing.assert_allclose(by_time, np.sum(x ** 2), rtol=1e-8)

    print("  PASSED\n")


def test_haar_first_level():
    """Test the first level of the Haar MODWT against its closed form."""
    print("Testing Haar MODWT coefficients...")
    np.random.seed(42)

    x = np.random.randn(16)
    W = get_modwt(x, 'haar')
    # smooth: average of two consecutive samples (periodic)
    np.testing.assert_allclose(W[:, -1].mean(), x.mean())
    np.testing.assert_allclose(np.abs(W[:, 0]), np.abs(x - np.roll(x, 1)) / 2)

    print("  PASSED\n")


def test_scale_and_time_ranges():
    """Test that scales and times outside the transform raise."""
    print("Testing scale and time ranges...")
    np.random.seed(42)

    x = np.random.randn(64)
    W = get_modwt(x, 'db4')
    assert W.shape[1] == 7
    for j in (0, 8):
        with pytest.raises(ValueError):
            energy_at_scale(W, j)
    for t in (-1, 64):
        with pytest.raises(ValueError):
            energy_at_time(W, t)
    with pytest.raises(ValueError):
        maxmodwttransformlevels([1.0])

    print("  PASSED\n")


def test_relative_energies():
    """Test the relative wavelet energies."""
    print("Testing relative wavelet energies...")
    np.random.seed(42)

    noise = np.random.randn(512)
    density = time_scale_density(noise, 'db4')
    assert len(density) == 10
    np.testing.assert_allclose(density.sum(), 1)
    W = get_modwt(noise, 'db4')
    np.testing.assert_allclose(relative_wavelet_energies(W), density)
    print(f"  white noise: finest scale {density[0]:.3f}, smooth {density[-1]:.4f}")
    assert relative_wavelet_energy(W, 1) > 0.3, "white noise has half its energy at the finest scale"

    slow = np.sin(2 * np.pi * np.arange(512) / 64)
    density = time_scale_density(slow, 'db4')
    assert density[0] < 0.01, "a slow oscillation has no energy at the finest scale"

    print("  PASSED\n")


def test_time_scale_estimator():
    """Test the TimeScaleMODWT estimator."""
    print("Testing TimeScaleMODWT...")
    np.random.seed(42)

    x = np.random.randn(256)
    est = TimeScaleMODWT('db4')
    p, scales = est.probabilities_and_events(x)
    assert abs(p.sum() - 1) < 1e-10
    np.testing.assert_array_equal(scales, np.arange(1, 10))
    assert alphabet_length(est, x) == 9
    with pytest.raises(UnboundedAlphabetError):
        est.alphabet_length()

    assert TimeScaleMODWT().wavelet.name == 'db12'
    with pytest.raises(ValueError):
        TimeScaleMODWT('bior2.2')

    print("  PASSED\n")


if __name__ == "__main__":
    print("=" * 60)
    print("Testing entropies_pure time-scale estimators")
    print("=" * 60 + "\n")

    test_power_spectrum()
    test_modwt_energy()
    test_haar_first_level()
    test_scale_and_time_ranges()
    test_relative_energies()
    test_time_scale_estimator()

    print("=" * 60)
    print("All tests PASSED!")
    print("=" * 60)

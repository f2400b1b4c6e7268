"""
Test script for the nearest-neighbor differential entropy estimators.
"""
import numpy as np
import pytest
import sys
import os

# Add parent directory to path for local testing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from entropies_pure import (
    BruteForceSearch,
    Dataset,
    KDTreeSearch,
    KozachenkoLeonenko,
    Kraskov,
    genentropy,
    get_last_info,
    probabilities,
)
from entropies_pure.nearest_neighbors import log_ball_volume

H_GAUSS = 0.5 * (1 + np.log(2 * np.pi))


def test_entropy_gaussian():
    """Test differential entropy estimates on Gaussian data."""
    print("Testing k-NN entropy on Gaussian data...")
    np.random.seed(42)

    n_pts = 5000
    x = np.random.randn(n_pts)

    H_kr = Kraskov(k=3).entropy(x)
    H_kl = KozachenkoLeonenko().entropy(x)
    print(f"  Kraskov H = {H_kr:.4f}, KL H = {H_kl:.4f}, Theory = {H_GAUSS:.4f}")
    assert abs(H_kr - H_GAUSS) < 0.1, f"Kraskov estimate too far from theory: {H_kr} vs {H_GAUSS}"
    assert abs(H_kl - H_GAUSS) < 0.1, f"KL estimate too far from theory: {H_kl} vs {H_GAUSS}"

    # 2D Gaussian
    x2d = Dataset(np.random.randn(n_pts, 2))
    H_2d = Kraskov(k=5).entropy(x2d)
    print(f"  Kraskov H (2D) = {H_2d:.4f}, Theory = {2 * H_GAUSS:.4f}")
    assert abs(H_2d - 2 * H_GAUSS) < 0.15, "2D entropy estimate too far from theory"

    print("  PASSED\n")


def test_entropy_uniform_chebyshev():
    """Test the max-norm ball on uniform data (entropy 0)."""
    print("Testing k-NN entropy with the Chebyshev metric...")
    np.random.seed(42)

    x = np.random.rand(4000, 2)
    H = Kraskov(k=4, metric='chebyshev').entropy(x)
    print(f"  H = {H:.4f}, Theory = 0")
    assert abs(H) < 0.15, "uniform data on the unit square has zero entropy"

    print("  PASSED\n")


def test_base():
    """Test the logarithm base."""
    print("Testing logarithm base...")
    np.random.seed(42)

    x = np.random.randn(1000)
    H_nats = Kraskov(k=2).entropy(x)
    H_bits = Kraskov(k=2, base=2).entropy(x)
    np.testing.assert_allclose(H_bits, H_nats / np.log(2))

    np.testing.assert_allclose(genentropy(x, Kraskov(k=2)), H_nats)
    np.testing.assert_allclose(genentropy(x, Kraskov(k=2), base=2), H_bits)

    print("  PASSED\n")


def test_searches_agree():
    """Test that the k-d tree and the brute force search give the same distances."""
    print("Testing neighbor searches...")
    np.random.seed(42)

    points = np.random.randn(300, 2)
    for metric in ('euclidean', 'chebyshev'):
        for k, w in ((1, 0), (3, 0), (2, 5)):
            d_tree = KDTreeSearch(metric).k_nearest(points, k, w)
            d_brute = BruteForceSearch(metric).k_nearest(points, k, w)
            np.testing.assert_allclose(d_tree, d_brute, err_msg=f"metric={metric}, k={k}, w={w}")

    x = np.random.randn(500)
    np.testing.assert_allclose(Kraskov(k=2, w=3, search='bruteforce').entropy(x),
                               Kraskov(k=2, w=3, search='kdtree').entropy(x))

    print("  PASSED\n")


def test_theiler_window():
    """Test that the Theiler window removes the temporal neighbors."""
    print("Testing Theiler window...")

    # neighbors in time are also neighbors in space for a slow ramp
    x = np.linspace(0, 1, 200)
    d0 = KDTreeSearch().k_nearest(x[:, None], 1, 0)
    d5 = KDTreeSearch().k_nearest(x[:, None], 1, 5)
    step = x[1] - x[0]
    np.testing.assert_allclose(d0, step)
    np.testing.assert_allclose(d5, 6 * step)

    print("  PASSED\n")


def test_degenerate_input():
    """Test duplicated points and too short inputs."""
    print("Testing degenerate input...")
    np.random.seed(42)

    x = np.concatenate([np.random.randn(200), np.zeros(10)])
    with pytest.warns(UserWarning):
        H = KozachenkoLeonenko().entropy(x)
    assert np.isfinite(H)
    info = get_last_info()
    print(f"  points: {info[0]}, discarded: {info[1]}")
    assert info[0] == 210 and info[1] == 10

    with pytest.warns(UserWarning):
        H = Kraskov(k=5).entropy(np.random.randn(4))
    assert np.isnan(H)

    print("  PASSED\n")


def test_parameters():
    """Test argument checking."""
    print("Testing parameters...")

    for kwargs in ({'k': 0}, {'w': -1}, {'base': 1}, {'metric': 'manhattan'}, {'search': 'ball'}):
        with pytest.raises(ValueError):
            Kraskov(**kwargs)
    with pytest.raises(TypeError):
        Kraskov(search=object())
    with pytest.raises(TypeError):
        probabilities(np.random.randn(100), Kraskov())
    with pytest.raises(ValueError):
        genentropy(np.random.randn(100), Kraskov(), alpha=2)

    np.testing.assert_allclose(log_ball_volume(1), np.log(2))
    np.testing.assert_allclose(log_ball_volume(2), np.log(np.pi))
    np.testing.assert_allclose(log_ball_volume(3, 'chebyshev'), np.log(8))

    print("  PASSED\n")


if __name__ == "__main__":
    print("=" * 60)
    print("Testing entropies_pure nearest-neighbor estimators")
    print("=" * 60 + "\n")

    test_entropy_gaussian()
    test_entropy_uniform_chebyshev()
    test_base()
    test_searches_agree()
    test_theiler_window()
    test_degenerate_input()
    test_parameters()

    print("=" * 60)
    print("All tests PASSED!")
    print("=" * 60)

"""
Test script for rectangular binnings and visitation frequencies.
"""
import numpy as np
import pytest
import sys
import os

# Add parent directory to path for local testing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from entropies_pure import (
    Dataset,
    RectangularBinning,
    VisitationFrequency,
    UnboundedAlphabetError,
    bin_dataset,
    bin_edges,
    binhist,
    encode_points,
    joint_visits,
    marginal_visits,
    minima_edgelengths,
    probabilities,
)


def test_binning_validation():
    """Test the accepted forms of a binning."""
    print("Testing RectangularBinning validation...")

    assert RectangularBinning(5).counts
    assert not RectangularBinning(0.2).counts
    assert RectangularBinning([2, 3]).per_dimension
    assert RectangularBinning([2, 3]) == RectangularBinning([2, 3])

    for bad in ([1, 0.5], 0, -0.1, [], True, [3, -1]):
        with pytest.raises(ValueError):
            RectangularBinning(bad)

    with pytest.raises(ValueError):
        RectangularBinning([2, 3]).per_axis(3)

    print("  PASSED\n")


def test_single_bin():
    """Test that one bin per axis holds all points."""
    print("Testing a single bin...")
    np.random.seed(42)

    x = Dataset(np.random.rand(100, 3))
    p, corners = binhist(x, RectangularBinning(1))
    np.testing.assert_allclose(p.p, [1.0])
    assert corners.shape == (1, 3)
    np.testing.assert_allclose(corners[0], x.minima())

    print("  PASSED\n")


def test_count_mode():
    """Test that the maximum of the data falls in the last bin in count mode."""
    print("Testing bin counts...")
    np.random.seed(42)

    x = Dataset(np.random.rand(500, 2))
    ids = encode_points(x, RectangularBinning(10))
    assert ids.min() == 0 and ids.max() == 9
    assert ids[np.argmax(x.data[:, 0]), 0] == 9, "maximum should be in the last bin"

    mini, edgelengths = minima_edgelengths(x, RectangularBinning(10))
    ranges = x.maxima() - x.minima()
    assert np.all(edgelengths * 10 > ranges), "bins should cover slightly more than the range"
    np.testing.assert_allclose(edgelengths, ranges * 1.001 / 10)

    _, edges = bin_dataset(x, RectangularBinning(10))
    assert len(edges) == 2 and len(edges[0]) == 11
    assert edges[0][0] == mini[0] and edges[0][-1] >= x.maxima()[0]

    print("  PASSED\n")


def test_width_mode():
    """Test bins of a fixed width."""
    print("Testing bin widths...")

    x = np.array([0.0, 0.4, 0.6, 1.9, 2.0])
    ids = encode_points(x, RectangularBinning(0.5))
    np.testing.assert_array_equal(ids[:, 0], [0, 0, 1, 3, 4])

    p, corners = binhist(x, 0.5)
    np.testing.assert_allclose(p.p, [0.4, 0.2, 0.2, 0.2])
    np.testing.assert_allclose(corners[:, 0], [0.0, 0.5, 1.5, 2.0])

    print("  PASSED\n")


def test_constant_dimension():
    """Test that a constant dimension collapses to one bin."""
    print("Testing constant dimension...")
    np.random.seed(42)

    x = Dataset(np.column_stack([np.random.rand(50), np.full(50, 3.0)]))
    ids = encode_points(x, RectangularBinning(4))
    assert np.all(ids[:, 1] == 0), "a constant dimension should have a single bin"
    p = probabilities(x, VisitationFrequency(RectangularBinning(4)))
    assert len(p) <= 4

    print("  PASSED\n")


def test_visits():
    """Test the points visiting each bin."""
    print("Testing joint and marginal visits...")

    x = Dataset([[0.0, 0.0], [1.0, 1.0], [0.0, 0.1], [1.0, 0.0]])
    visits = joint_visits(x, RectangularBinning(2))
    print(f"  joint visits: {visits}")
    assert visits == {(0, 0): [0, 2], (1, 0): [3], (1, 1): [1]}

    marginal = marginal_visits(x, RectangularBinning(2), [0])
    assert marginal == {(0,): [0, 2], (1,): [1, 3]}

    with pytest.raises(ValueError):
        marginal_visits(x, RectangularBinning(2), [2])

    print("  PASSED\n")


def test_empty_dataset():
    """Test that an empty dataset gives one bin per axis and no visits."""
    print("Testing binning of an empty dataset...")

    x = Dataset(np.zeros((0, 2)))
    binning = RectangularBinning(3)

    ids = encode_points(x, binning)
    assert ids.shape == (0, 2)
    assert np.issubdtype(ids.dtype, np.integer)

    edges = bin_edges(x, binning)
    assert len(edges) == 2
    for e in edges:
        np.testing.assert_allclose(e, [0.0, 1.0])

    ids, edges = bin_dataset(x, binning)
    assert ids.shape == (0, 2) and len(edges) == 2

    assert joint_visits(x, binning) == {}
    assert marginal_visits(x, binning, [1]) == {}
    assert marginal_visits(x, RectangularBinning(0.5), [0, 1]) == {}

    print("  PASSED\n")


def test_visitation_frequency_alphabet():
    """Test the alphabet length of the histogram estimator."""
    print("Testing VisitationFrequency alphabet length...")
    np.random.seed(42)

    assert VisitationFrequency(RectangularBinning([3, 4])).alphabet_length() == 12
    x = np.random.rand(100, 2)
    assert VisitationFrequency(RectangularBinning(3)).alphabet_length(x) == 9
    with pytest.raises(UnboundedAlphabetError):
        VisitationFrequency(RectangularBinning(0.1)).alphabet_length()

    p = VisitationFrequency(RectangularBinning(3)).probabilities(x)
    assert abs(p.sum() - 1) < 1e-12
    assert len(p) <= 9

    print("  PASSED\n")


if __name__ == "__main__":
    print("=" * 60)
    print("Testing entropies_pure binning")
    print("=" * 60 + "\n")

    test_binning_validation()
    test_single_bin()
    test_count_mode()
    test_width_mode()
    test_constant_dimension()
    test_visits()
    test_empty_dataset()
    test_visitation_frequency_alphabet()

    print("=" * 60)
    print("All tests PASSED!")
    print("=" * 60)

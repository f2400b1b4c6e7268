"""
Test script for the Probabilities container and direct counting.
"""
import numpy as np
import pytest
import sys
import os

# Add parent directory to path for local testing
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from entropies_pure import (
    Probabilities,
    CountOccurrences,
    Dataset,
    probabilities,
    probabilities_and_events,
    alphabet_length,
    UnboundedAlphabetError,
)
from entropies_pure.probabilities import symprobs


def test_normalization():
    """Test that weights are normalized and normed input is validated."""
    print("Testing Probabilities normalization...")

    p = Probabilities([1, 1, 2])
    np.testing.assert_allclose(p.p, [0.25, 0.25, 0.5])
    assert abs(p.sum() - 1) < 1e-12, "probabilities should sum to 1"
    assert abs(np.sum(p) - 1) < 1e-12, "Probabilities should behave as an array"
    assert len(p) == 3

    q = Probabilities([0.3, 0.7], normed=True)
    np.testing.assert_allclose(q.p, [0.3, 0.7])

    with pytest.raises(ValueError):
        Probabilities([0.3, 0.3], normed=True)
    with pytest.raises(ValueError):
        Probabilities([1, -1, 2])
    with pytest.raises(ValueError):
        Probabilities([])
    with pytest.raises(ValueError):
        Probabilities([0, 0])
    with pytest.raises(ValueError):
        Probabilities([1, np.nan])

    print("  PASSED\n")


def test_immutability():
    """Test that Probabilities cannot be modified after construction."""
    print("Testing Probabilities immutability...")

    weights = np.array([1.0, 3.0])
    p = Probabilities(weights)
    weights[0] = 100.0
    np.testing.assert_allclose(p.p, [0.25, 0.75], err_msg="Probabilities should not share caller memory")

    with pytest.raises(ValueError):
        p.p[0] = 0.5
    with pytest.raises(AttributeError):
        p.events = [1, 2]

    print("  PASSED\n")


def test_count_occurrences():
    """Test direct counting on a small integer sequence."""
    print("Testing CountOccurrences...")

    p, events = CountOccurrences().probabilities_and_events([1, 1, 2, 2, 3])
    print(f"  p = {p.p}, events = {events}")
    np.testing.assert_allclose(p.p, [0.4, 0.4, 0.2])
    assert list(events) == [1, 2, 3], "events should be the sorted distinct values"

    # default estimator
    np.testing.assert_allclose(probabilities(np.array([1, 1, 2, 2, 3])).p, [0.4, 0.4, 0.2])

    # non numeric values
    p, events = probabilities_and_events(['b', 'a', 'b'], CountOccurrences())
    assert list(events) == ['a', 'b']
    np.testing.assert_allclose(p.p, [1 / 3, 2 / 3])

    # each state vector of a Dataset is one value
    D = Dataset([[0, 1], [0, 1], [1, 0]])
    p, events = CountOccurrences().probabilities_and_events(D)
    np.testing.assert_allclose(p.p, [2 / 3, 1 / 3])
    assert tuple(events[0]) == (0.0, 1.0)

    print("  PASSED\n")


def test_array_conversion():
    """Test that array conversion copies on request and leaves the data untouched."""
    print("Testing array conversion...")

    p = Probabilities([1.0, 3.0])
    arr = np.array(p)
    arr[0] = 0.0
    np.testing.assert_allclose(p.p, [0.25, 0.75])
    assert p.__array__(copy=True) is not p.p
    assert p.__array__(copy=True).flags.writeable

    D = Dataset([[0, 1], [2, 3]])
    arr = np.array(D)
    arr[0, 0] = 5.0
    np.testing.assert_allclose(D.data, [[0, 1], [2, 3]])
    assert D.__array__(copy=True).flags.writeable
    assert not D.__array__().flags.writeable

    print("  PASSED\n")


def test_workspace_ignored():
    """Test that estimators without a workspace accept and ignore one."""
    print("Testing the out workspace on direct counting...")

    s = np.zeros(5, dtype=np.int64)
    p = probabilities(np.array([1, 1, 2, 2, 3]), out=s)
    np.testing.assert_allclose(p.p, [0.4, 0.4, 0.2])
    np.testing.assert_allclose(CountOccurrences().probabilities([1, 2], out=s).p, [0.5, 0.5])

    print("  PASSED\n")


def test_count_occurrences_alphabet():
    """Test the alphabet length of direct counting."""
    print("Testing CountOccurrences alphabet length...")

    assert alphabet_length(CountOccurrences(), [1, 1, 2, 2, 3]) == 3
    with pytest.raises(UnboundedAlphabetError):
        CountOccurrences().alphabet_length()

    print("  PASSED\n")


def test_empty_input():
    """Test that empty input gives the trivial distribution with a warning."""
    print("Testing empty input...")

    with pytest.warns(UserWarning):
        p = CountOccurrences().probabilities([])
    np.testing.assert_allclose(p.p, [1.0])

    print("  PASSED\n")


def test_symprobs_weights():
    """Test weighted symbol probabilities."""
    print("Testing weighted symbol counts...")

    symbols = np.array([0, 1, 1, 5, 5, 5])
    plain = symprobs(symbols)
    np.testing.assert_allclose(plain.p, [1 / 6, 2 / 6, 3 / 6])
    assert list(plain.events) == [0, 1, 5]

    same = symprobs(symbols, np.full(6, 2.5))
    np.testing.assert_allclose(same.p, plain.p, err_msg="identical weights should not change the probabilities")

    weighted = symprobs(symbols, np.array([3.0, 1.0, 1.0, 1.0, 1.0, 1.0]))
    np.testing.assert_allclose(weighted.p, [3 / 8, 2 / 8, 3 / 8])

    with pytest.warns(UserWarning):
        fallback = symprobs(symbols, np.zeros(6))
    np.testing.assert_allclose(fallback.p, plain.p)

    print("  PASSED\n")


if __name__ == "__main__":
    print("=" * 60)
    print("Testing entropies_pure probabilities")
    print("=" * 60 + "\n")

    test_normalization()
    test_immutability()
    test_count_occurrences()
    test_array_conversion()
    test_workspace_ignored()
    test_count_occurrences_alphabet()
    test_empty_input()
    test_symprobs_weights()

    print("=" * 60)
    print("All tests PASSED!")
    print("=" * 60)

from itertools import product

import pytest

from macross.indicators import CrossoverState, classify, detect_crossover

LEVELS = [99.0, 100.0, 101.0]


def test_cross_from_below():
    assert classify(99.0, 100.0, 101.0, 100.0) is CrossoverState.CROSS_FROM_BELOW


def test_cross_from_above():
    assert classify(101.0, 100.0, 99.0, 100.0) is CrossoverState.CROSS_FROM_ABOVE


def test_touch_then_separate_counts_as_cross():
    assert classify(100.0, 100.0, 100.5, 100.0) is CrossoverState.CROSS_FROM_BELOW
    assert classify(100.0, 100.0, 99.5, 100.0) is CrossoverState.CROSS_FROM_ABOVE


def test_equal_on_both_bars_is_no_cross():
    assert classify(100.0, 100.0, 100.0, 100.0) is CrossoverState.NO_CROSS
    assert classify(100.0, 100.0, 105.0, 105.0) is CrossoverState.NO_CROSS


def test_staying_on_one_side_is_no_cross():
    assert classify(101.0, 100.0, 102.0, 100.0) is CrossoverState.NO_CROSS
    assert classify(99.0, 100.0, 98.0, 100.0) is CrossoverState.NO_CROSS


@pytest.mark.parametrize("a,b,c,d", list(product(LEVELS, repeat=4)))
def test_classify_is_antisymmetric(a, b, c, d):
    below = classify(a, b, c, d) is CrossoverState.CROSS_FROM_BELOW
    mirrored_above = classify(b, a, d, c) is CrossoverState.CROSS_FROM_ABOVE
    assert below == mirrored_above


def test_detect_requires_two_bars():
    assert detect_crossover([], []) is CrossoverState.NO_CROSS
    assert detect_crossover([101.0], [100.0]) is CrossoverState.NO_CROSS
    assert detect_crossover([99.0, 101.0], [100.0, 100.0], index=0) is CrossoverState.NO_CROSS


def test_detect_uses_latest_transition_by_default():
    fast = [99.0, 101.0, 102.0]
    slow = [100.0, 100.0, 100.0]

    assert detect_crossover(fast, slow) is CrossoverState.NO_CROSS
    assert detect_crossover(fast, slow, index=1) is CrossoverState.CROSS_FROM_BELOW


def test_detect_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        detect_crossover([1.0, 2.0], [1.0])

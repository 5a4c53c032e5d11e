import itertools
import random

import numpy as np
import pytest

from finperm import (InvalidPermutation, Permutation, config, factorial,
                     group, iter_group, random_permutation, rank, unrank)


def test_factorial():
    assert factorial(-3) == 1
    assert factorial(0) == 1
    assert factorial(1) == 1
    assert factorial(5) == 120
    assert factorial(25) == 15511210043330985984000000
    assert factorial(2000) > 0


def test_unrank():
    assert unrank(0, 3).tuple == (0, 1, 2)
    assert unrank(1, 3).tuple == (0, 2, 1)
    assert unrank(2, 3).tuple == (1, 0, 2)
    assert unrank(5, 3).tuple == (2, 1, 0)
    assert unrank(0, 6) == Permutation.identity(6)
    with pytest.raises(InvalidPermutation, match='out of bounds'):
        unrank(6, 3)
    with pytest.raises(InvalidPermutation, match='out of bounds'):
        unrank(-1, 3)
    with pytest.raises(InvalidPermutation):
        unrank(0, 1)


def test_rank():
    for degree in [2, 3, 4, 5]:
        for n, g in enumerate(iter_group(degree)):
            assert rank(g) == n
    p = unrank(123456789, 12)
    assert rank(p) == 123456789


def test_group_2():
    G = group(2)
    assert [g.tuple for g in G] == [(0, 1), (1, 0)]


def test_group():
    for degree in [2, 3, 4, 5]:
        G = group(degree)
        assert len(G) == factorial(degree)
        assert len(set(G)) == len(G)
        assert set(G) == {
            Permutation(t)
            for t in itertools.permutations(range(degree))
        }


def test_group_is_deterministic():
    assert group(4) == group(4)
    assert group(4) == list(iter_group(4))


def test_group_invalid_degree():
    for degree in [-1, 0, 1]:
        with pytest.raises(InvalidPermutation):
            group(degree)


def test_group_max_degree():
    config.set('enumeration.max_degree', 3)
    try:
        with pytest.warns(RuntimeWarning, match='max_degree'):
            G = group(4)
        assert len(G) == 24
    finally:
        config.reset()


def test_random_permutation():
    rng = np.random.default_rng(1234)
    G = set(group(4))
    for _ in range(200):
        p = random_permutation(4, rng)
        assert p.size == 4
        assert p in G


def test_random_permutation_default_rng():
    G = set(group(3))
    for _ in range(20):
        assert random_permutation(3) in G


def test_random_permutation_seed():
    a = [random_permutation(6, np.random.default_rng(42)) for _ in range(3)]
    assert a[0] == a[1] == a[2]

    rng1, rng2 = random.Random(7), random.Random(7)
    assert [random_permutation(5, rng1) for _ in range(10)
            ] == [random_permutation(5, rng2) for _ in range(10)]


def test_random_permutation_covers_group():
    rng = np.random.default_rng(0)
    samples = {random_permutation(3, rng) for _ in range(600)}
    assert samples == set(group(3))


def test_random_permutation_large_degree():
    rng = np.random.default_rng(5)
    p = random_permutation(30, rng)
    assert sorted(p.tuple) == list(range(30))


def test_random_permutation_huge_degree():
    rng = np.random.default_rng(0)
    for degree in [171, 200]:
        p = random_permutation(degree, rng)
        assert p.size == degree
        assert sorted(p.tuple) == list(range(degree))
        assert 0 <= rank(p) < factorial(degree)


def test_random_permutation_index():

    class Fixed():

        def __init__(self, x):
            self.x = x

        def random(self):
            return self.x

    assert random_permutation(3, Fixed(0.0)) == unrank(0, 3)
    assert random_permutation(3, Fixed(0.5)) == unrank(3, 3)
    assert random_permutation(3, Fixed(0.9999)) == unrank(5, 3)


def test_random_permutation_invalid_degree():
    for degree in [-1, 0, 1]:
        with pytest.raises(InvalidPermutation, match='at least 2'):
            random_permutation(degree)

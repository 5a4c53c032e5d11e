from __future__ import annotations

import logging
import warnings
from typing import Iterator, Protocol

import numpy as np

from .config import config
from .permutation import InvalidPermutation, Permutation

logger = logging.getLogger(__name__)


class RandomSource(Protocol):

    def random(self) -> float:
        ...


def factorial(num: int) -> int:
    """Returns ``num!``, or 1 when ``num <= 0``."""
    ret = 1
    for k in range(2, num + 1):
        ret *= k
    return ret


def unrank(index: int, degree: int) -> Permutation:
    """Decode an index in ``[0, degree!)`` into a permutation.

    The index is written in factorial base with radices ``1, 2, ..., degree``
    (least significant digit last), and each digit selects and removes an
    element from the working list ``[0, ..., degree - 1]``.

    Args:
        index (int): index of the permutation
        degree (int): degree of the permutation

    Returns:
        Permutation: the decoded permutation
    """
    if index < 0 or factorial(degree) <= index:
        raise InvalidPermutation(
            f"out of bounds {index} for degree {degree}")
    digits = [0] * degree
    n = index
    for j in range(degree):
        n, digits[degree - j - 1] = divmod(n, j + 1)
    pool = list(range(degree))
    return Permutation([pool.pop(d) for d in digits])


def rank(perm: Permutation) -> int:
    """Returns the index that ``unrank`` decodes into ``perm``."""
    pool = list(range(perm.size))
    digits = []
    for x in perm.tuple:
        i = pool.index(x)
        digits.append(i)
        pool.pop(i)
    n = 0
    for j in reversed(range(perm.size)):
        n = n * (j + 1) + digits[perm.size - j - 1]
    return n


def iter_group(degree: int) -> Iterator[Permutation]:
    """Yield every permutation of the given degree in index order."""
    for n in range(factorial(degree)):
        yield unrank(n, degree)


def group(degree: int) -> list[Permutation]:
    """Returns the symmetric group of the given degree.

    The ``degree!`` elements are listed in index order, see ``unrank``.
    """
    max_degree = config.query('enumeration.max_degree')
    if degree > max_degree:
        logger.warning("enumerating %d permutations of degree %d",
                       factorial(degree), degree)
        warnings.warn(
            f"degree {degree} exceeds enumeration.max_degree={max_degree}, "
            f"the group has {factorial(degree)} elements", RuntimeWarning)
    ret = list(iter_group(degree))
    logger.debug("enumerated symmetric group of degree %d", degree)
    return ret


def random_permutation(degree: int,
                       rng: RandomSource | None = None) -> Permutation:
    """Returns a random permutation of the given degree.

    Args:
        degree (int): degree of the permutation, at least 2
        rng: random source with a ``random()`` method returning floats in
            ``[0, 1)``, e.g. ``numpy.random.default_rng(seed)`` or
            ``random.Random(seed)``. A fresh ``numpy`` generator is used
            when omitted.

    Returns:
        Permutation: a permutation drawn from ``group(degree)``
    """
    if degree < 2:
        raise InvalidPermutation(f"degree must be at least 2, got {degree}")
    if rng is None:
        rng = np.random.default_rng()
    num = factorial(degree)
    # 53 random bits scaled to [0, num) in integer arithmetic; above
    # num = 2**53 only 2**53 of the indices can be drawn
    index = (int(rng.random() * 2**53) * num) >> 53
    return unrank(index, degree)

from __future__ import annotations

import functools
import logging
import operator
from typing import Iterable, Iterator

import numpy as np

from .config import config

logger = logging.getLogger(__name__)


class InvalidPermutation(ValueError):
    """Raised when data cannot define a valid permutation."""


def _validate_linear(origin: tuple[int, ...]) -> None:
    size = len(origin)
    seen = [False] * size
    for x in origin:
        if 0 <= x < size:
            if seen[x]:
                raise InvalidPermutation(f"duplicate mapping of {x}")
            seen[x] = True
    for i, found in enumerate(seen):
        if not found:
            raise InvalidPermutation(f"unmapped element {i}")


def _validate_quadratic(origin: tuple[int, ...]) -> None:
    for i in range(len(origin)):
        found = False
        for x in origin:
            if x != i:
                continue
            if found:
                raise InvalidPermutation(f"duplicate mapping of {i}")
            found = True
        if not found:
            raise InvalidPermutation(f"unmapped element {i}")


_validators = {
    'linear': _validate_linear,
    'quadratic': _validate_quadratic,
}


@functools.total_ordering
class Permutation():
    """An immutable bijection on ``{0, ..., size - 1}``.

    Element ``i`` is mapped to ``tuple[i]``.

    >>> p = Permutation([1, 0, 2])
    >>> p.image(0)
    1
    >>> p.transposition(0, 2).tuple
    (2, 0, 1)
    """

    __slots__ = ('_tuple', '_size')

    def __init__(self, origin: Iterable[int]):
        try:
            origin = tuple(operator.index(x) for x in origin)
        except TypeError as e:
            raise InvalidPermutation(f"not a sequence of integers: {e}") from e
        if len(origin) < 2:
            raise InvalidPermutation("not enough elements")
        _validators[config.query('validation.method')](origin)
        object.__setattr__(self, '_tuple', origin)
        object.__setattr__(self, '_size', len(origin))

    @classmethod
    def identity(cls, degree: int) -> Permutation:
        """Returns the identity permutation of the given degree."""
        return cls(range(degree))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def size(self) -> int:
        return self._size

    @property
    def tuple(self) -> tuple[int, ...]:
        return self._tuple

    def _check_bounds(self, element: int) -> int:
        try:
            element = operator.index(element)
        except TypeError as e:
            raise InvalidPermutation(f"not an integer element: {e}") from e
        if element < 0 or self._size <= element:
            raise InvalidPermutation(f"out of bounds {element}")
        return element

    def image(self, element: int) -> int:
        """Returns the image of ``element``."""
        return self._tuple[self._check_bounds(element)]

    def __call__(self, element: int) -> int:
        return self.image(element)

    def __len__(self):
        return self._size

    def __iter__(self) -> Iterator[int]:
        return iter(self._tuple)

    def transposition(self, element1: int, element2: int) -> Permutation:
        """Returns a permutation with the images of two elements swapped."""
        element1 = self._check_bounds(element1)
        element2 = self._check_bounds(element2)
        transposed = list(self._tuple)
        transposed[element1], transposed[element2] = (self._tuple[element2],
                                                      self._tuple[element1])
        return Permutation(transposed)

    def product(self, other: Permutation) -> Permutation:
        """Returns the composition of two permutations.

        ``p.product(q)`` maps ``i`` to ``p(q(i))``: ``q`` is applied first,
        then ``p``. Operands of different degree are extended by the
        identity, so the result has degree ``max(p.size, q.size)``. The
        order of application does not depend on which operand is larger.
        """
        lhs, rhs = self._tuple, other._tuple
        size = max(self._size, other._size)
        if self._size != other._size:
            logger.debug("extending product of degrees %d and %d to %d",
                         self._size, other._size, size)
            lhs = lhs + tuple(range(self._size, size))
            rhs = rhs + tuple(range(other._size, size))
        return Permutation([lhs[rhs[i]] for i in range(size)])

    def __mul__(self, other: Permutation) -> Permutation:
        if not isinstance(other, Permutation):
            return NotImplemented
        return self.product(other)

    def inverse(self) -> Permutation:
        """Returns the inverse permutation."""
        inverse = [0] * self._size
        for i, x in enumerate(self._tuple):
            inverse[x] = i
        return Permutation(inverse)

    def copy(self) -> Permutation:
        return Permutation(self._tuple)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __reduce__(self):
        return (Permutation, (self._tuple, ))

    def to_matrix(self) -> np.ndarray:
        """Returns the permutation matrix.

        Column ``i`` holds a single one in row ``p(i)``, so the matrix of a
        product is the matrix product of the factors.
        """
        m = np.zeros((self._size, self._size), dtype=np.int8)
        m[list(self._tuple), np.arange(self._size)] = 1
        return m

    def __eq__(self, value: object) -> bool:
        if not isinstance(value, Permutation):
            return NotImplemented
        return self._size == value._size and self._tuple == value._tuple

    def __lt__(self, value: Permutation) -> bool:
        if not isinstance(value, Permutation):
            return NotImplemented
        return (self._size, self._tuple) < (value._size, value._tuple)

    def __hash__(self):
        return hash(self._tuple)

    def __repr__(self):
        return f'Permutation({self._tuple!r})'

    def __str__(self):
        digit = len(str(self._size))
        return ''.join(f"{i:>{digit}} -> {x:>{digit}}\n"
                       for i, x in enumerate(self._tuple))


def product(p1: Permutation, p2: Permutation) -> Permutation:
    """Returns ``p1.product(p2)``."""
    return p1.product(p2)

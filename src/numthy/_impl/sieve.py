from __future__ import annotations

from collections.abc import Sequence, Iterator, Iterable
from numbers import Integral
from operator import index
from typing import Self, overload, Literal
import typing as t
import math

import numpy as np

from .utils.cls import cachedProp
from .utils.search import bsearch, rank

__all__ = [
    "PrimeList",
    "primeSieve",
    "fromSieve",
    "primes",
    "smallestPrimeFactors",
    "smallestPrimePowers",
    "totientSieve",
]

_INT_MAX = int(np.iinfo(np.int64).max)

if t.TYPE_CHECKING:

    @overload
    def primes(n: Integral, withSieve: Literal[False] = False) -> PrimeList: ...

    @overload
    def primes(
        n: Integral, withSieve: Literal[True]
    ) -> tuple[PrimeList, np.ndarray]: ...

    @overload
    def smallestPrimeFactors(n: Integral, withSieve: Literal[False] = False) -> np.ndarray: ...

    @overload
    def smallestPrimeFactors(
        n: Integral, withSieve: Literal[True]
    ) -> tuple[np.ndarray, np.ndarray]: ...


def _resolveSize(n: Integral) -> int:
    n = index(n)
    if n > _INT_MAX:
        raise OverflowError(f"Sieve size {n} does not fit in a 64-bit integer.")
    return max(n, 0)


def _strikeLimit(n: int) -> int:
    # equals `floor(sqrt(n - 0.5))`, the largest prime whose square may still be below `n`
    return math.isqrt(n - 1) if n > 1 else 0


class PrimeList(Sequence[int]):
    """
    An immutable ascending list of primes, together with the exclusive bound of the sieve it
    was taken from. A `PrimeList` with bound `b` holds *every* prime less than `b`, which is
    what the prime counting functions need to know about it.

    Items are plain Python `int`s, so arithmetic on them never wraps around.

    Usually obtained from `primes()`:

    >>> ps = primes(30)
    >>> list(ps)
    [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
    >>> ps.bound
    30
    """

    __slots__ = ("_data", "_bound", "_values")

    def __init__(self, data: Iterable[Integral] | np.ndarray, bound: Integral):
        arr = np.array(data, dtype=np.int64).reshape(-1)
        arr.flags.writeable = False
        self._data = arr
        self._bound = index(bound)
        if len(arr) > 0 and arr[-1] >= self._bound:
            raise ValueError(
                f"Largest prime {arr[-1]} is not below the sieve bound {self._bound}."
            )

    @property
    def bound(self) -> int:
        """Exclusive upper bound below which the list holds every prime."""
        return self._bound

    @cachedProp
    def values(self) -> tuple[int, ...]:
        """The primes as a tuple of Python integers."""
        return tuple(self._data.tolist())

    @property
    def largest(self) -> int | None:
        """The largest prime in the list, or `None` if it is empty."""
        return self.values[-1] if self.values else None

    def covers(self, n: Integral) -> bool:
        """Whether every prime `<= n` is in the list."""
        return index(n) < self._bound

    def asArray(self) -> np.ndarray:
        """A read-only `numpy` view of the primes."""
        return self._data

    def primepi(self, n: Integral) -> int:
        """
        Number of primes `<= n`, read off the list by binary search. Only meaningful when
        `self.covers(n)`.
        """
        return rank(self.values, index(n))

    def __len__(self) -> int:
        return len(self._data)

    @overload
    def __getitem__(self, key: int) -> int: ...

    @overload
    def __getitem__(self, key: slice) -> tuple[int, ...]: ...

    def __getitem__(self, key):
        return self.values[key]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, Integral):
            return False
        return bsearch(self.values, int(value)) >= 0

    def index(self, value: int, start: int = 0, stop: int | None = None) -> int:
        idx = bsearch(self.values, value, start, stop)
        if idx < 0:
            raise ValueError(f"{value} is not in the prime list")
        return idx

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrimeList):
            return NotImplemented
        return self._bound == other._bound and np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        return hash((self._bound, self.values))

    def __repr__(self) -> str:
        if len(self) <= 6:
            body = ", ".join(map(str, self.values))
        else:
            v = self.values
            body = f"{v[0]}, {v[1]}, {v[2]}, ..., {v[-2]}, {v[-1]}"
        return f"{self.__class__.__name__}([{body}], bound={self._bound})"

    def __reduce__(self) -> tuple[type[Self], tuple[np.ndarray, int]]:
        return (self.__class__, (np.array(self._data), self._bound))


def primeSieve(n: Integral, out: np.ndarray | None = None) -> np.ndarray:
    """
    Sieve of Eratosthenes over `[0, n)`.

    Returns a boolean array whose entry `i` is `True` if and only if `i` is prime. When an
    array is passed as `out`, the sieve is written into its first `n` entries in place and
    the remaining entries are left untouched; `out` is then returned.

    A non-positive `n` gives an empty result.
    """
    n = _resolveSize(n)
    if out is None:
        out = np.empty(n, dtype=bool)
    elif len(out) < n:
        raise ValueError(f"Output array of length {len(out)} cannot hold a sieve of size {n}.")
    if n == 0:
        return out

    out[:n] = True
    out[: min(n, 2)] = False
    for p in range(2, _strikeLimit(n) + 1):
        if out[p]:
            out[p * p : n : p] = False
    return out


def fromSieve(sieve: Sequence[bool] | np.ndarray) -> list[int]:
    """Returns, in ascending order, every index at which `sieve` is true."""
    return np.flatnonzero(np.asarray(sieve, dtype=bool)).tolist()


def primes(n: Integral, withSieve: bool = False):
    """
    All primes less than `n`, as a `PrimeList` with bound `n`. With `withSieve=True`, the
    boolean sieve is returned alongside, as `(primeList, sieve)`.
    """
    n = _resolveSize(n)
    sieve = primeSieve(n)
    primeList = PrimeList(np.flatnonzero(sieve), n)
    if withSieve:
        return primeList, sieve
    return primeList


def _spf(n: int) -> np.ndarray:
    spf = np.zeros(n, dtype=np.int64)
    for p in range(2, _strikeLimit(n) + 1):
        if spf[p] == 0:
            multiples = spf[p * p : n : p]
            # only the first prime to reach a number is its smallest factor
            multiples[multiples == 0] = p
    unmarked = np.flatnonzero(spf == 0)
    spf[unmarked] = unmarked
    return spf


def smallestPrimeFactors(n: Integral, withSieve: bool = False):
    """
    Smallest prime factor of every integer in `[0, n)`.

    By convention the smallest prime factor of `0` is `0` and that of `1` is `1`. With
    `withSieve=True`, also returns the primality sieve as `(factors, sieve)`.
    """
    n = _resolveSize(n)
    spf = _spf(n)
    if withSieve:
        sieve = spf == np.arange(n)
        sieve[: min(n, 2)] = False
        return spf, sieve
    return spf


def smallestPrimePowers(n: Integral) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    For every integer `k` in `[0, n)`, finds its smallest prime factor `p`, the largest power
    `p ** e` dividing `k`, and the exponent `e`. Returns the three arrays
    `(factors, powers, exponents)`.

    This is the information needed to evaluate multiplicative functions over a range. Index
    `0` maps to `(0, 0, 0)` and index `1` to `(1, 1, 0)`.
    """
    n = _resolveSize(n)
    factors = _spf(n)
    powers = factors.copy()
    exponents = (np.arange(n) >= 2).astype(np.int64)

    for p in range(2, _strikeLimit(n) + 1):
        if factors[p] != p:
            continue
        power, e = p * p, 2
        while power < n:
            idx = np.arange(power, n, power)
            idx = idx[factors[idx] == p]
            powers[idx] = power
            exponents[idx] = e
            power *= p
            e += 1
    return factors, powers, exponents


def totientSieve(n: Integral) -> np.ndarray:
    """
    Euler's totient function for every integer in `[0, n)`, with `phi(0) = 0` and
    `phi(1) = 1`.
    """
    n = _resolveSize(n)
    totients = np.arange(n, dtype=np.int64)
    for p in np.flatnonzero(primeSieve(n)).tolist():
        multiples = totients[p::p]
        multiples -= multiples // p
    return totients

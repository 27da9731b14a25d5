"""
Prime counting by Lehmer's method.

Let `phi(x, a)` count the integers in `[1, x]` having no prime factor among the first `a`
primes (Legendre's function). With `a = π(x^(1/4))`, `b = π(x^(1/3))` and `c = π(x^(1/2))`,
Lehmer (1959) showed

    π(x) = phi(x, a) + (c + a - 2)(c - a + 1) / 2
           - sum(π(x / p_i) for a < i <= c)
           - sum(π(x / (p_i p_j)) - (j - 1) for a < i <= b, i <= j <= π(sqrt(x / p_i)))

so `π(x)` is found from `phi` and values of `π` at much smaller arguments, which are
computed the same way until they fall inside a precomputed prime list.
"""

from __future__ import annotations

from collections.abc import Sequence, MutableMapping
from contextlib import nullcontext
from numbers import Integral
from operator import index
import itertools as it

from .cache import PiCache
from .sieve import PrimeList
from .utils.number import iroot
from .utils.search import rank

__all__ = [
    "InsufficientPrimesError",
    "checkPrimes",
    "phi",
    "countPrimes",
    "countPrimesMemoized",
]

type PhiCache = MutableMapping[tuple[int, int], int]


class InsufficientPrimesError(ValueError):
    """
    Raised when a prime list does not hold every prime up to the square root of the number
    whose primes are to be counted.
    """

    def __init__(self, n: int, needed: int, largest: int | None, reason: str | None = None):
        self.n = n
        self.needed = needed
        self.largest = largest
        if reason is None:
            reason = (
                f"Counting primes up to {n} needs every prime up to {needed}, but the largest "
                f"listed prime is {largest}."
            )
        super().__init__(reason)


def _asInts(primeList: Sequence[Integral]) -> Sequence[int]:
    if isinstance(primeList, PrimeList):
        return primeList.values
    ps = tuple(map(index, primeList))
    if any(p >= q for p, q in it.pairwise(ps)):
        raise ValueError("Prime list must be strictly ascending.")
    return ps


def _isPrime(m: int, ps: Sequence[int]) -> bool:
    # trial division, assuming `ps` holds every prime up to `sqrt(m)`
    return all(m % p for p in it.takewhile(lambda p: p * p <= m, ps))


def _checkPrimes(n: int, ps: Sequence[int]) -> None:
    needed = iroot(n, 2)
    if not ps:
        raise InsufficientPrimesError(n, needed, None)
    if ps[0] != 2:
        raise InsufficientPrimesError(
            n, needed, ps[-1], f"Prime list must start at 2, got {ps[0]}."
        )
    last = ps[-1]
    if last >= needed:
        return
    # completeness up to `needed` is settled by looking for a prime in `(last, needed]`,
    # which always exists when `needed >= 2 * last`
    if needed >= 2 * last or any(_isPrime(m, ps) for m in range(last + 1, needed + 1)):
        raise InsufficientPrimesError(n, needed, last)


def checkPrimes(n: Integral, primeList: Sequence[Integral]) -> None:
    """
    Checks that `primeList` can be used to count the primes up to `n`, i.e. that it holds, in
    ascending order, every prime up to `floor(sqrt(n))`. Raises `InsufficientPrimesError` if
    it does not.

    The largest entry is compared first, and only if it falls short is the gap up to
    `floor(sqrt(n))` searched for a missing prime. This holds for a `PrimeList` too, whose
    sieve bound is not trusted on its own.
    """
    n = index(n)
    if n < 2:
        return
    _checkPrimes(n, _asInts(primeList))


def _phiBase(limit: int, k: int, cache: PhiCache, ps: Sequence[int]) -> int | None:
    if k == 0:
        return limit
    if k == 1:
        return (limit + 1) >> 1
    if limit < ps[k - 1]:
        # nothing in `[2, limit]` escapes the first `k - 1` primes
        return 1 if limit >= 1 else 0
    return cache.get((limit, k))


def _phi(limit: int, k: int, cache: PhiCache, ps: Sequence[int]) -> int:
    # `phi(x, k) = phi(x, j) - sum(phi(x // p_i, i - 1) for j < i <= k)`: walk `k` down in a
    # loop and recurse only on the quotients, so the depth is bounded by `log2(limit)`
    subtracted = []
    j = k
    while (value := _phiBase(limit, j, cache, ps)) is None:
        subtracted.append(_phi(limit // ps[j - 1], j - 1, cache, ps))
        j -= 1
    for term in reversed(subtracted):
        j += 1
        value -= term
        cache[limit, j] = value
    return value


def phi(
    limit: Integral,
    primeIndex: Integral,
    cache: PhiCache | None,
    primeList: Sequence[Integral],
) -> int:
    """
    Legendre's function: the number of integers in `[1, limit]` not divisible by any of the
    first `primeIndex` primes of `primeList`.

    Evaluated by the recurrence `phi(x, k) = phi(x, k - 1) - phi(x // p_k, k - 1)` down to
    `phi(x, 1) = ceil(x / 2)`. Every intermediate value is stored in `cache` under the key
    `(x, k)`; pass `None` to use a throwaway dictionary.
    """
    limit = index(limit)
    primeIndex = index(primeIndex)
    if limit < 0:
        raise ValueError(f"Limit must be non-negative, got {limit}.")
    if primeIndex < 0:
        raise ValueError(f"Prime index must be non-negative, got {primeIndex}.")
    ps = _asInts(primeList)
    if primeIndex > len(ps):
        raise InsufficientPrimesError(
            limit,
            primeIndex,
            ps[-1] if ps else None,
            f"Prime index {primeIndex} is past the end of a list of {len(ps)} primes.",
        )
    if cache is None:
        cache = {}
    return _phi(limit, primeIndex, cache, ps)


def _countPrimes(
    n: int, ps: Sequence[int], memo: MutableMapping[int, int], phiCache: PhiCache
) -> int:
    if n < 2:
        return 0
    if (count := memo.get(n)) is not None:
        return count
    if n <= ps[-1]:
        count = rank(ps, n)
        memo[n] = count
        return count

    a = _countPrimes(iroot(n, 4), ps, memo, phiCache)
    b = _countPrimes(iroot(n, 3), ps, memo, phiCache)
    c = _countPrimes(iroot(n, 2), ps, memo, phiCache)

    count = _phi(n, a, phiCache, ps) + (c + a - 2) * (c - a + 1) // 2
    for i in range(a + 1, c + 1):
        quotient = n // ps[i - 1]
        count -= _countPrimes(quotient, ps, memo, phiCache)
        if i <= b:
            piSqrtQuotient = _countPrimes(iroot(quotient, 2), ps, memo, phiCache)
            for j in range(i, piSqrtQuotient + 1):
                count -= _countPrimes(quotient // ps[j - 1], ps, memo, phiCache) - (j - 1)

    memo[n] = count
    return count


def countPrimesMemoized(
    n: Integral, primeList: Sequence[Integral], cache: MutableMapping[int, int]
) -> int:
    """
    Number of primes `<= n`, reading and extending the caller-owned memo `cache` of
    `m -> π(m)` values.

    `primeList` must hold every prime up to `floor(sqrt(n))` in ascending order, otherwise
    `InsufficientPrimesError` is raised. A `PiCache` is locked for the duration of the call
    and may be shared between threads; any other mutable mapping must not be.

    A throwaway memo of Legendre's `phi` is kept for this call only.
    """
    n = index(n)
    if n < 2:
        return 0
    ps = _asInts(primeList)
    _checkPrimes(n, ps)
    with cache.lock if isinstance(cache, PiCache) else nullcontext():
        return _countPrimes(n, ps, cache, {})


def countPrimes(n: Integral, primeList: Sequence[Integral]) -> int:
    """
    The prime counting function `π(n)`: number of primes less than or equal to `n`.

    `primeList` must hold every prime up to `floor(sqrt(n))`, for instance
    `primes(math.isqrt(n) + 1)`.

    >>> countPrimes(10**6, primes(1001))
    78498
    """
    return countPrimesMemoized(n, primeList, {})

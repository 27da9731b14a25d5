from __future__ import annotations

from collections.abc import MutableMapping, Mapping, Iterator, Iterable, Callable
from numbers import Integral
from operator import index
from threading import RLock

import pyrsistent as pyr
from sortedcontainers import SortedDict

__all__ = ["PiCache"]


class PiCache(MutableMapping[int, int]):
    """
    A persistent memo of prime counting values `n -> π(n)`, meant to be owned by the caller
    and handed to `countPrimesMemoized()` again and again, so that later queries reuse the
    sub-results of earlier ones.

    Keys are kept in ascending order. All access goes through a reentrant lock, and
    `countPrimesMemoized()` holds that lock for the whole of a query, so one cache can be
    shared by threads issuing queries concurrently. A plain `dict` works as a memo too, but
    only from a single thread.

    >>> cache = PiCache()
    >>> countPrimesMemoized(100, primes(11), cache)
    25
    >>> cache[100]
    25
    """

    __slots__ = ("_data", "_lock")

    def __init__(self, initial: Mapping[int, int] | Iterable[tuple[int, int]] = ()):
        self._lock = RLock()
        self._data: SortedDict = SortedDict()
        self.update(initial)

    @property
    def lock(self) -> RLock:
        """The reentrant lock guarding this cache."""
        return self._lock

    def __getitem__(self, n: Integral) -> int:
        with self._lock:
            return self._data[index(n)]

    def __setitem__(self, n: Integral, count: Integral):
        n, count = index(n), index(count)
        if count < 0:
            raise ValueError(f"Prime count cannot be negative, got π({n}) = {count}.")
        with self._lock:
            self._data[n] = count

    def __delitem__(self, n: Integral):
        with self._lock:
            del self._data[index(n)]

    def __contains__(self, n: object) -> bool:
        if not isinstance(n, Integral):
            return False
        with self._lock:
            return int(n) in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __iter__(self) -> Iterator[int]:
        # iterate over a copy so other threads may keep writing
        with self._lock:
            keys = list(self._data.keys())
        return iter(keys)

    def getOrCompute(self, n: Integral, func: Callable[[int], int]) -> int:
        """
        Returns the cached value for `n`, or computes it with `func(n)`, stores it and returns
        it. The check and the insertion happen under the same lock.
        """
        n = index(n)
        with self._lock:
            if (count := self._data.get(n)) is None:
                count = func(n)
                self[n] = count
            return count

    def known(self, lo: Integral | None = None, hi: Integral | None = None) -> list[tuple[int, int]]:
        """
        Every cached pair `(n, π(n))` with `lo <= n <= hi`, in ascending order of `n`. Either
        bound may be omitted.
        """
        with self._lock:
            keys = self._data.irange(lo, hi)
            return [(n, self._data[n]) for n in keys]

    def snapshot(self) -> pyr.PMap:
        """An immutable copy of the current contents."""
        with self._lock:
            return pyr.pmap(dict(self._data))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} values)"

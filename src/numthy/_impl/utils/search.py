from collections.abc import Sequence
from typing import Callable
from bisect import bisect_left, bisect_right

__all__ = ["rank", "bsearch"]


def rank[T](
    a: Sequence[T],
    x: T,
    lo: int = 0,
    hi: int | None = None,
    /,
    key: Callable[[T], int] | None = None,
) -> int:
    """
    Returns the number of items in the ascending sequence `a` that are less than or equal to
    `x`. This is also the 1-based position of the rightmost such item, or `0` if every item
    is greater than `x`.

    For a list of all primes up to some bound, `rank(primes, n)` equals `π(n)` for every `n`
    within that bound.
    """
    if hi is None:
        hi = len(a)
    return bisect_right(a, x, lo, hi, key=key)


def bsearch[T](
    a: Sequence[T],
    x: T,
    lo: int = 0,
    hi: int | None = None,
    key: Callable[[T], int] | None = None,
) -> int:
    """
    Perform binary search on a sorted sequence `a` to find the index of item `x`.
    If `x` exists in `a`, returns its index. Otherwise, returns -(insertion point) - 1

    **Note**: This method works like Java's `Arrays.binarySearch()` method.
    """
    if hi is None:
        hi = len(a)
    idx = bisect_left(a, x, lo, hi, key=key)
    if idx < hi and (a[idx] if key is None else key(a[idx])) == x:
        return idx
    else:
        return -idx - 1

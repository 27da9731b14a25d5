import math
import typing as t
from operator import index

__all__ = [
    "ROOT_EPSILON",
    "iroot",
    "cdiv",
]

ROOT_EPSILON = 1e-8
"""
Added to a floating-point root before truncation, so that `pow(n, 1 / k)` landing just
below an exact integer root does not truncate one too low.
"""

if t.TYPE_CHECKING:
    from numbers import Integral


def cdiv(n: int, k: int) -> int:
    """Ceiling division of integers."""
    return -(-n // k)


def _newtonRoot(n: int, k: int) -> int:
    # start above the root and descend, the iteration never undershoots
    r = 1 << cdiv(n.bit_length(), k)
    while True:
        s = ((k - 1) * r + n // r ** (k - 1)) // k
        if s >= r:
            return r
        r = s


def iroot(n: "Integral", k: "Integral" = 2) -> int:
    """
    Returns `floor(n ** (1 / k))` exactly, for `n >= 0` and `k >= 1`.

    The first guess is the floating-point root plus `ROOT_EPSILON`, truncated. It is then
    corrected with integer arithmetic until `r ** k <= n < (r + 1) ** k`, so round-off near
    perfect powers can never shift the result. Square roots go straight to `math.isqrt()`.
    Integers too large to be converted to a float are handled by Newton's iteration.
    """
    n = index(n)
    k = index(k)
    if k < 1:
        raise ValueError(f"Root degree must be positive, got {k}.")
    if n < 0:
        raise ValueError(f"Cannot take the integer root of a negative number: {n}.")
    if k == 1 or n < 2:
        return n
    if k == 2:
        return math.isqrt(n)
    try:
        r = int(n ** (1.0 / k) + ROOT_EPSILON)
    except OverflowError:
        return _newtonRoot(n, k)
    while r**k > n:
        r -= 1
    while (r + 1) ** k <= n:
        r += 1
    return r

from collections.abc import Iterable
from numbers import Integral
from operator import index
import functools as ft
import math
import warnings

__all__ = [
    "extGcd",
    "modInverse",
    "powMod",
    "factMod",
    "solveCongruences",
    "crt",
]


def _resolveModulus(modulus: Integral) -> int:
    modulus = index(modulus)
    if modulus == 0:
        raise ValueError("Modulus cannot be zero.")
    if modulus < 0:
        warnings.warn(
            f"Modulus should be positive, got {modulus}. Here the absolute value is taken."
        )
        modulus = -modulus
    return modulus


def extGcd(a: Integral, b: Integral) -> tuple[int, int, int]:
    """
    Extended Euclidean algorithm. Returns `(g, x, y)` where `g = gcd(a, b) >= 0` and
    `a * x + b * y == g`.
    """
    a, b = index(a), index(b)
    x0, y0, x1, y1 = 1, 0, 0, 1
    while b != 0:
        q, r = divmod(a, b)
        a, b = b, r
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    if a < 0:
        return -a, -x0, -y0
    return a, x0, y0


def modInverse(a: Integral, modulus: Integral) -> int:
    """
    The inverse of `a` modulo `modulus`, in `[0, modulus)`.

    Raises `ValueError` if `a` and `modulus` are not coprime.
    """
    modulus = _resolveModulus(modulus)
    g, x, _ = extGcd(index(a) % modulus, modulus)
    if g != 1:
        raise ValueError(f"{a} has no inverse modulo {modulus}.")
    return x % modulus


def powMod(base: Integral, exponent: Integral, modulus: Integral) -> int:
    """
    `base ** exponent % modulus` by square-and-multiply, in `[0, modulus)`.

    A negative exponent raises the inverse of `base` to `-exponent`, and fails with
    `ValueError` when `base` is not invertible.
    """
    modulus = _resolveModulus(modulus)
    base, exponent = index(base) % modulus, index(exponent)
    if exponent < 0:
        base = modInverse(base, modulus)
        exponent = -exponent
    result = 1 % modulus
    while exponent > 0:
        if exponent & 1:
            result = result * base % modulus
        exponent >>= 1
        base = base * base % modulus
    return result


def factMod(n: Integral, modulus: Integral) -> int:
    """
    `n! % modulus`. Meant for one-off use; build a table when many factorials are needed.
    """
    n = index(n)
    if n < 0:
        raise ValueError(f"Factorial of a negative number is undefined: {n}.")
    modulus = _resolveModulus(modulus)
    if n >= modulus:
        return 0
    result = 1 % modulus
    for k in range(2, n + 1):
        result = result * k % modulus
    return result


def solveCongruences(
    a: Integral, firstModulus: Integral, b: Integral, secondModulus: Integral
) -> int | None:
    """
    Smallest non-negative `x` with `x ≡ a (mod firstModulus)` and `x ≡ b (mod secondModulus)`.

    The moduli need not be coprime. Returns `None` if the congruences are inconsistent.
    """
    m1, m2 = _resolveModulus(firstModulus), _resolveModulus(secondModulus)
    a, b = index(a), index(b)
    g = math.gcd(m1, m2)
    if (b - a) % g != 0:
        return None
    lcm = m1 // g * m2
    # solve `m1 * t ≡ b - a (mod m2)` for `t`
    t = (b - a) // g * modInverse(m1 // g, m2 // g) % (m2 // g)
    return (a + m1 * t) % lcm


def crt(residues: Iterable[Integral], moduli: Iterable[Integral]) -> int | None:
    """
    Chinese remainder theorem over any number of congruences `x ≡ residues[i] (mod moduli[i])`.
    Returns the smallest non-negative solution, or `None` if there is none.
    """
    pairs = list(zip(residues, moduli, strict=True))
    if not pairs:
        return 0

    def fold(acc: tuple[int, int] | None, pair: tuple[Integral, Integral]):
        if acc is None:
            return None
        x, m = acc
        r, n = pair
        n = _resolveModulus(n)
        y = solveCongruences(x, m, r, n)
        return None if y is None else (y, math.lcm(m, n))

    first, *rest = pairs
    m0 = _resolveModulus(first[1])
    result = ft.reduce(fold, rest, (index(first[0]) % m0, m0))
    return None if result is None else result[0]

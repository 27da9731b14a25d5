"""
# `numthy`: a Number-Theory Computation Library

This is the top-level module of the `numthy` library. Sieves, the prime counting function
and modular arithmetic helpers are all accessible from here:

>>> import numthy as nt
>>> ps = nt.primes(1001)
>>> nt.countPrimes(10**6, ps)
78498
"""

from ._impl import *  # noqa: F401, F403
from . import utils  # noqa: F401

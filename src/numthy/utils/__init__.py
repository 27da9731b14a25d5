"""Integer helpers used throughout `numthy`."""

from .._impl.utils.number import ROOT_EPSILON, iroot, cdiv
from .._impl.utils.search import rank, bsearch

__all__ = ["ROOT_EPSILON", "iroot", "cdiv", "rank", "bsearch"]

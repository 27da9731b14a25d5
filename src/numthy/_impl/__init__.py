from .sieve import *  # noqa: F401, F403
from .sieve import __all__ as _sieve_all
from .cache import *  # noqa: F401, F403
from .cache import __all__ as _cache_all
from .primecount import *  # noqa: F401, F403
from .primecount import __all__ as _primecount_all
from .modarith import *  # noqa: F401, F403
from .modarith import __all__ as _modarith_all

__all__ = [*_sieve_all, *_cache_all, *_primecount_all, *_modarith_all]

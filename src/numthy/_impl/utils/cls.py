from __future__ import annotations

from typing import Callable
from threading import RLock

__all__ = ["cachedProp"]

_DUMMY = object()


class cachedProp[T, P](property):
    """
    A read-only property whose value is computed once per instance and then kept in a private
    slot, by default the property name with a leading underscore. Pass `key=` to pick another
    slot name through `functools.partial(cachedProp, key=...)`.

    **Note**: Unlike `functools.cached_property`, this works on classes that define
    `__slots__`, as long as the slot named by the key is declared.
    """

    def __init__(self, fget: Callable[[T], P], doc: str | None = None, *, key: str = None):
        super().__init__(fget, None, None, doc)
        self._key = "_" + fget.__name__ if key is None else key
        self._lock = RLock()

    def __get__(self, instance: T | None, owner: type[T] = None) -> P:
        if instance is None:
            return self
        if (value := getattr(instance, self._key, _DUMMY)) is not _DUMMY:
            return value
        with self._lock:
            if (value := getattr(instance, self._key, _DUMMY)) is _DUMMY:
                value = self.fget(instance)
                setattr(instance, self._key, value)
            return value

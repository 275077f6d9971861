"""Utility decorators for the fundcalc codebase."""

import functools
from typing import Any, TypeVar

T = TypeVar("T")


def singleton(cls: type[T]) -> type[T]:
    """
    Singleton decorator for classes.

    Creates one instance of the decorated class per process. The first call's
    arguments win; later calls return the cached instance and ignore theirs.
    Not guarded by a lock, so construct it once at startup before handing it
    to worker threads.

    Usage:
        @singleton
        class Settings:
            ...

        assert Settings() is Settings()
    """
    instances: dict[type[Any], Any] = {}

    @functools.wraps(cls)
    def get_instance(*args: Any, **kwargs: Any) -> T:
        if cls not in instances:
            instances[cls] = cls(*args, **kwargs)
        return instances[cls]

    # Exposed so tests can reset the cached instance
    get_instance._instances = instances  # type: ignore
    get_instance._clear = lambda: instances.clear()  # type: ignore

    return get_instance  # type: ignore

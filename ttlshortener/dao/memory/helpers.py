import functools
from typing import TypeVar, Any
from collections.abc import Callable


__all__ = ['synchronized']

F = TypeVar('F', bound=Callable[..., Any])


def synchronized(method: F) -> F:
    """Run a DAO method while holding the instance's lock

    Every public registry method is wrapped with this decorator, so they
    behave as if executed under a single mutex. The lock is re-entrant so
    synchronized methods may call each other.

    Args:
        method (Callable[..., Any]):
            DAO method reading or mutating shared registry state.

    Returns:
        Callable[..., Any]:
            Wrapped method which acquires `self._lock` for its whole duration.

    Example:
        >>> @synchronized
        ... def count(self):
        ...     return len(self._records)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper

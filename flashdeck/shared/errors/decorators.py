"""Decorators shielding callers from technical exceptions."""

import logging
from collections.abc import Callable
from functools import wraps
from inspect import iscoroutinefunction
from typing import Never, ParamSpec, TypeVar

from .base import AppError
from .mapping import ExceptionMapper

logger = logging.getLogger(__name__)
P = ParamSpec("P")
T = TypeVar("T")


def safe(func: Callable[P, T]) -> Callable[P, T]:
    """Translate technical errors raised by repository and service methods.

    Usage:
        @safe
        async def add(self, deck: Deck) -> Deck:
            # AppError subclasses pass through unchanged,
            # IntegrityError and friends become domain errors.
            ...

    Works with both sync and async callables.
    """

    def _reraise(exc: Exception, func_name: str) -> Never:
        if isinstance(exc, AppError):
            raise exc
        raise ExceptionMapper.map(exc, func_name) from exc

    if iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _reraise(e, func.__qualname__)

        return async_wrapper  # type: ignore[return-value]

    @wraps(func)
    def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            _reraise(e, func.__qualname__)

    return sync_wrapper  # type: ignore[return-value]

"""
Use-case error boundary

Domain errors (CustomBaseError subclasses) pass through untouched so callers
can map them to a status code. Anything else is an infrastructure failure:
it is logged with its traceback and replaced by an opaque InternalError.
"""

from functools import wraps
from typing import Awaitable, Callable, ParamSpec, TypeVar

from src.platform.exception.exceptions import CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger


_P = ParamSpec('_P')
_T = TypeVar('_T')


def guard_internal_errors(func: Callable[_P, Awaitable[_T]]) -> Callable[_P, Awaitable[_T]]:
    @wraps(func)
    async def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _T:
        try:
            return await func(*args, **kwargs)
        except CustomBaseError:
            raise
        except Exception as e:
            # Flagged by an inner @Logger.io, which already logged the traceback
            if not getattr(e, '_has_logged', False):
                Logger.base.exception(f'💥 [{func.__qualname__}] {type(e).__name__}: {e}')
            internal = InternalError()
            internal._has_logged = True  # type: ignore[attr-defined]
            raise internal from e

    return wrapper

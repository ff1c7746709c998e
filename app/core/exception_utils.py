# app/core/exception_utils.py
"""Helpers for raising and translating application exceptions."""

import functools
import logging
from typing import Any, Callable, Optional, Type

from app.core.exceptions import BaseAppException, InternalServerError

logger = logging.getLogger(__name__)


def raise_for_status(
    *,
    condition: bool,
    exception: Type[BaseAppException],
    detail: Optional[str] = None,
    resource_type: Optional[str] = None,
) -> None:
    """Raise ``exception`` when ``condition`` holds."""
    if condition:
        raise exception(detail=detail, resource_type=resource_type)


def handle_exceptions(
    default_exception: Type[BaseAppException] = InternalServerError,
    message: str = "An unexpected error occurred.",
) -> Callable:
    """
    Decorator for async repository methods.

    Application exceptions propagate unchanged. Anything else is logged,
    the session passed as ``db`` is rolled back so it stays usable, and
    ``default_exception`` is raised in its place.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except BaseAppException:
                raise
            except Exception as e:
                logger.error(
                    f"Unhandled error in {func.__qualname__}: {e}",
                    exc_info=True,
                )
                db = kwargs.get("db")
                if db is not None:
                    await db.rollback()
                raise default_exception(detail=message) from e

        return wrapper

    return decorator

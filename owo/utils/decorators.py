"""
Decorator for logging bridge calls.
"""

from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable, TypeVar

from owo.logging.logger import bind_context, get_logger
from owo.utils.exceptions import OwoError

F = TypeVar("F", bound=Callable[..., Any])


def _elapsed_ms(started: float) -> float:
    return (time.monotonic() - started) * 1000.0


def log_call(component: str, operation: str) -> Callable[[F], F]:
    """
    Decorator that logs start/end and duration for a bridge operation.

    OwoError is logged with its code and re-raised unchanged. Works for plain
    and coroutine functions.

    Usage:
        @log_call("requests", "upload_files")
        def upload_files(self, key, payloads):
            ...
    """

    def decorator(func: F) -> F:
        logger = get_logger(f"owo.{component}.{operation}")

        def _failed(exc: OwoError, elapsed_ms: float) -> None:
            logger.warning(
                "call_error: %s",
                exc.message,
                extra=bind_context(
                    component,
                    operation,
                    {"duration_ms": elapsed_ms, "error_code": exc.code},
                ),
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                started = time.monotonic()
                logger.debug("call_start", extra=bind_context(component, operation))
                try:
                    result = await func(*args, **kwargs)
                except OwoError as e:
                    _failed(e, _elapsed_ms(started))
                    raise
                logger.debug(
                    "call_end",
                    extra=bind_context(component, operation, {"duration_ms": _elapsed_ms(started)}),
                )
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.monotonic()
            logger.debug("call_start", extra=bind_context(component, operation))
            try:
                result = func(*args, **kwargs)
            except OwoError as e:
                _failed(e, _elapsed_ms(started))
                raise
            logger.debug(
                "call_end",
                extra=bind_context(component, operation, {"duration_ms": _elapsed_ms(started)}),
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator

"""Observability helpers for instrumenting generative capability calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from logic.errors import WardrobeError
from wardrobe_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
R = TypeVar("R")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def instrument_capability(
    capability_name: str,
) -> Callable[[Callable[..., Awaitable[R]]], Callable[..., Awaitable[R]]]:
    """Wrap an async capability call with started/completed/failed log events.

    Failures from the wardrobe error taxonomy are expected outcomes and are
    logged with their reason; anything else is logged with its traceback.
    Exceptions are always re-raised.
    """

    def decorator(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> R:
            correlation_id = ensure_correlation_id()
            start = time.perf_counter()
            log_event(
                LOGGER,
                logging.INFO,
                "capability_call_started",
                capability=capability_name,
                correlation_id=correlation_id,
            )
            try:
                result = await func(*args, **kwargs)
            except WardrobeError as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "capability_call_failed",
                    capability=capability_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    reason=exc.reason,
                    error_type=type(exc).__name__,
                )
                raise
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "capability_call_crashed",
                    capability=capability_name,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(start),
                    error_type=type(exc).__name__,
                    exc_info=True,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "capability_call_completed",
                capability=capability_name,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(start),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_capability"]

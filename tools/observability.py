"""Timing and outcome logs for calls to Gemini, Open-Meteo and Unsplash."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Callable, ParamSpec, TypeVar

from attire_app.logging_config import ensure_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def instrument_call(service: str) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Decorate an adapter method so each call logs its service, duration and outcome.

    Failures are logged at WARNING with the exception class name only (messages
    can echo user input) and then re-raised unchanged.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        operation = f"{service}.{func.__name__}"

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = ensure_correlation_id()
            log_event(LOGGER, logging.DEBUG, "service_call_started", service=service, operation=operation)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "service_call_failed",
                    service=service,
                    operation=operation,
                    correlation_id=correlation_id,
                    duration_ms=_elapsed_ms(started),
                    error=type(exc).__name__,
                )
                raise
            log_event(
                LOGGER,
                logging.INFO,
                "service_call_completed",
                service=service,
                operation=operation,
                correlation_id=correlation_id,
                duration_ms=_elapsed_ms(started),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_call"]

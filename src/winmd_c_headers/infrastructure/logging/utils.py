#!/usr/bin/env python3

"""Logging helpers shared by the generator modules."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])

BANNER_WIDTH = 70


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Decorator logging how long a call took, and the error if it raised.

    The exception is re-raised unchanged; only the log line is added.

    Args:
        func: Function to decorate

    Returns:
        Wrapped function
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        name = func.__qualname__
        logger.debug(f"Starting {name}")
        start = perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"Failed {name} after {perf_counter() - start:.3f}s: {e}")
            raise
        logger.debug(f"Completed {name} in {perf_counter() - start:.3f}s")
        return result

    return cast("F", wrapper)


def log_banner(logger: logging.Logger, title: str) -> None:
    """Log a title framed by separator lines."""
    logger.info("=" * BANNER_WIDTH)
    logger.info(title)
    logger.info("=" * BANNER_WIDTH)

from __future__ import annotations
import logging
import time
from functools import wraps
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator to log calls and their duration at DEBUG level, logging errors before re-raising."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = logger_name or func.__module__
        logger = logging.getLogger(name)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            logger.debug("Calling %s args=%s kwargs=%s", func.__qualname__, args, kwargs)
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error("Error in %s: %s", func.__qualname__, e, exc_info=logger.isEnabledFor(logging.DEBUG))
                raise
            logger.debug(
                "%s returned %r in %.2fms", func.__qualname__, result, (time.perf_counter() - started) * 1000.0
            )
            return result

        return _wrapper

    return _decorator


def configure_logging(verbose: bool = False) -> None:
    """Route spectree logging through rich; DEBUG when verbose, WARNING otherwise."""
    logger = logging.getLogger("spectree")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

"""Structured logging helpers with per-thread context."""

import functools
import logging
import threading
import uuid
from typing import Any, Callable, Dict, Optional

_thread_local = threading.local()


def generate_correlation_id() -> str:
    """Generate a unique id for tagging the log lines of one calculation."""
    return str(uuid.uuid4())


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the context fields active in this thread."""
    return dict(getattr(_thread_local, "context", {}))


def get_correlation_id() -> Optional[str]:
    """Return the correlation id of the current context, if any."""
    return get_log_context().get("correlation_id")


class LogContext:
    """Context manager adding fields to every log record in its scope.

    Fields live in thread-local storage, so concurrent calculations in
    different threads keep separate contexts. Nested contexts merge their
    fields and restore the outer context on exit.

    Example:
        with LogContext(correlation_id=generate_correlation_id(), vehicle_type="car"):
            logger.info("Calculating congestion tax")
    """

    def __init__(self, **fields: Any):
        self.fields = fields
        self._previous: Dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self._previous = get_log_context()
        _thread_local.context = {**self._previous, **self.fields}
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        _thread_local.context = self._previous


class _ContextFilter(logging.Filter):
    """Copies the active LogContext fields onto each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            setattr(record, key, value)
        return True


def log_function_call(
    func: Optional[Callable] = None, *, include_args: bool = False, level: str = "DEBUG"
) -> Callable:
    """Decorator logging function entry, exit and exceptions.

    Usable bare (@log_function_call) or with options
    (@log_function_call(include_args=True, level="INFO")).

    Args:
        func: Function to decorate when used without arguments
        include_args: Whether to log the call arguments
        level: Log level for entry and exit messages
    """

    def decorator(f: Callable) -> Callable:
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            logger = logging.getLogger(f.__module__)
            log_level = getattr(logging, level.upper())

            if include_args:
                signature = ", ".join(
                    [repr(a) for a in args] + [f"{k}={v!r}" for k, v in kwargs.items()]
                )
                logger.log(log_level, f"Entering {f.__qualname__}({signature})")
            else:
                logger.log(log_level, f"Entering {f.__qualname__}")

            try:
                result = f(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Exception in {f.__qualname__}: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            logger.log(log_level, f"Exiting {f.__qualname__}")
            return result

        return wrapper

    if func is None:
        return decorator
    return decorator(func)

"""
Performance logging utilities.

Timing context managers and a decorator that log durations to the perf
category, tagged with the current cycle ID.

Usage:
    with log_timing("normalize", warn_threshold_ms=50) as ctx:
        ctx["rows"] = len(data)
        normalized, shares = normalize(data, totals)

    async with log_timing_async("heatmap_build"):
        heatmap = await HeatmapResult.from_model(model, result)

    @timed("ranking")
    def get_ranking(...):
        ...

Use these for per-build or per-navigation operations, not for per-cell
lookups: each call costs tens of microseconds.
"""

from __future__ import annotations

import asyncio
import time
import logging
import functools
from contextlib import contextmanager, asynccontextmanager
from typing import Optional, Callable, Any, Generator, AsyncGenerator

from .trace_context import get_cycle_id

_perf_logger: Optional[logging.Logger] = None


def get_perf_logger() -> logging.Logger:
    """Get or create the performance logger."""
    global _perf_logger
    if _perf_logger is None:
        _perf_logger = logging.getLogger("heatmap.perf")
    return _perf_logger


def set_perf_logger(logger: logging.Logger) -> None:
    """Set the performance logger (for testing or custom configuration)."""
    global _perf_logger
    _perf_logger = logger


def _emit(
    operation: str,
    duration_ms: float,
    warn_threshold_ms: float,
    error_threshold_ms: float,
    context: dict,
) -> None:
    logger = get_perf_logger()
    cycle_id = get_cycle_id()
    log_data = {
        "cycle": cycle_id,
        "operation": operation,
        "duration_ms": round(duration_ms, 2),
        **context,
    }

    if duration_ms >= error_threshold_ms:
        logger.error(f"[{cycle_id}] SLOW {operation}: {duration_ms:.1f}ms", extra={"data": log_data})
    elif duration_ms >= warn_threshold_ms:
        logger.warning(f"[{cycle_id}] {operation}: {duration_ms:.1f}ms (slow)", extra={"data": log_data})
    else:
        logger.debug(f"[{cycle_id}] {operation}: {duration_ms:.1f}ms", extra={"data": log_data})


@contextmanager
def log_timing(
    operation: str,
    warn_threshold_ms: float = 500.0,
    error_threshold_ms: float = 2000.0,
    extra: Optional[dict] = None,
) -> Generator[dict, None, None]:
    """
    Context manager to log operation timing.

    Escalates the log level when the duration crosses a threshold.

    Args:
        operation: Name of the operation being timed.
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.
        extra: Additional data to include in the log.

    Yields:
        Dict that can be updated with additional context during execution.
    """
    context = extra.copy() if extra else {}
    start_time = time.perf_counter()

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        _emit(operation, duration_ms, warn_threshold_ms, error_threshold_ms, context)


@asynccontextmanager
async def log_timing_async(
    operation: str,
    warn_threshold_ms: float = 500.0,
    error_threshold_ms: float = 2000.0,
    extra: Optional[dict] = None,
) -> AsyncGenerator[dict, None]:
    """Async variant of log_timing."""
    context = extra.copy() if extra else {}
    start_time = time.perf_counter()

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        _emit(operation, duration_ms, warn_threshold_ms, error_threshold_ms, context)


def timed(
    operation: Optional[str] = None,
    warn_threshold_ms: float = 500.0,
    error_threshold_ms: float = 2000.0,
) -> Callable:
    """
    Decorator to log function timing. Works on sync and async functions.

    Args:
        operation: Name of the operation. Defaults to function name.
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.
    """
    def decorator(func: Callable) -> Callable:
        op_name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with log_timing(op_name, warn_threshold_ms, error_threshold_ms):
                return func(*args, **kwargs)

        @functools.wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            async with log_timing_async(op_name, warn_threshold_ms, error_threshold_ms):
                return await func(*args, **kwargs)

        if asyncio.iscoroutinefunction(func):
            return async_wrapper
        return wrapper

    return decorator


def log_heatmap_build_timing():
    """Pre-configured timing for HeatmapResult construction."""
    return log_timing_async("heatmap_build", warn_threshold_ms=250, error_threshold_ms=1000)

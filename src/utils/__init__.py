"""Utility modules."""

from .logging_setup import (
    setup_category_logging,
    flush_all_loggers,
    shutdown_logging,
    reset_session_run_number,
    set_log_timezone,
    get_log_timezone,
    get_current_timestamp,
    get_logger,
    set_verbose_mode,
    set_console_enabled,
    is_verbose_mode,
    is_console_enabled,
)
from .trace_context import (
    get_cycle_id,
    set_cycle_id,
    new_cycle,
    generate_cycle_id,
)
from .perf_logger import (
    log_timing,
    log_timing_async,
    timed,
)

__all__ = [
    # Logging setup
    "setup_category_logging",
    "flush_all_loggers",
    "shutdown_logging",
    "reset_session_run_number",
    "set_log_timezone",
    "get_log_timezone",
    "get_current_timestamp",
    "get_logger",
    "set_verbose_mode",
    "set_console_enabled",
    "is_verbose_mode",
    "is_console_enabled",
    # Trace context
    "get_cycle_id",
    "set_cycle_id",
    "new_cycle",
    "generate_cycle_id",
    # Performance logging
    "log_timing",
    "log_timing_async",
    "timed",
]

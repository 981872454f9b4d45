"""
Logging setup with categories and cycle ID support.

Provides:
- 5 log categories: system, calc, sync, data, perf
- Automatic module → category routing
- Cycle ID correlation in all logs
- One JSON-lines file per category, written off-thread via QueueListener
- Console output (optional, colored)
- Configurable timezone for log timestamps

Categories:
- system: Startup, shutdown, config, CLI
- calc: Aggregation, normalization, ranking
- sync: Widget lifecycle, config transmitter, URL codec
- data: Model adapters and file loading
- perf: Timing, performance diagnostics
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import os
import re
import json
from queue import Queue
from pathlib import Path
from typing import Optional, Dict, List
from datetime import datetime
from zoneinfo import ZoneInfo

from .trace_context import get_cycle_id

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Run number for this session (determined at first setup)
_session_run_number: Optional[int] = None

# Timezone for log timestamps (None = local time)
_log_timezone: Optional[ZoneInfo] = None

_verbose_mode: bool = False

_console_enabled: bool = False

# Set via --log-level
_log_level_override: Optional[str] = None

_category_loggers: Dict[str, logging.Logger] = {}

# One queue listener per category
_queue_listeners: List[logging.handlers.QueueListener] = []

ROOT_LOGGER_NAME = "heatmap"

# =============================================================================
# LOG CATEGORIES AND ROUTING
# =============================================================================

CATEGORIES = ["system", "calc", "sync", "data", "perf"]

CATEGORY_SUFFIXES = {
    "system": "sys",
    "calc": "clc",
    "sync": "syn",
    "data": "dat",
    "perf": "prf",
}

# Module path → category routing
# More specific paths should come first
MODULE_ROUTING: List[tuple[str, str]] = [
    ("src.domain.services.heatmap", "calc"),
    ("src.domain.services.url_codec", "sync"),
    ("src.application", "sync"),
    ("src.infrastructure.adapters", "data"),
    ("src.infrastructure.location", "sync"),
    ("src.models", "data"),
    ("src.presentation", "system"),
    ("src.utils.perf_logger", "perf"),

    # Default fallback
    ("src", "system"),
]


def get_category_for_module(module_name: str) -> str:
    """
    Determine the log category for a given module name.

    Args:
        module_name: Full module path (e.g., "src.domain.services.heatmap.ranker").

    Returns:
        Category name.
    """
    for prefix, category in MODULE_ROUTING:
        if module_name.startswith(prefix):
            return category
    return "system"


# =============================================================================
# TIMEZONE SUPPORT
# =============================================================================

def set_log_timezone(tz: Optional[str] = None) -> None:
    """
    Set the timezone for log timestamps.

    Args:
        tz: Timezone name (e.g., "Europe/Berlin", "UTC").
            If None, uses local system time.
    """
    global _log_timezone
    if tz is None or tz == "local":
        _log_timezone = None
    else:
        _log_timezone = ZoneInfo(tz)


def get_log_timezone() -> Optional[ZoneInfo]:
    return _log_timezone


def get_current_timestamp() -> str:
    """ISO format timestamp in the configured log timezone."""
    if _log_timezone is not None:
        return datetime.now(_log_timezone).isoformat()
    return datetime.now().isoformat()


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable verbose mode (DEBUG level logging)."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    return _verbose_mode


def set_console_enabled(enabled: bool) -> None:
    global _console_enabled
    _console_enabled = enabled


def is_console_enabled() -> bool:
    return _console_enabled


def set_log_level_override(level: Optional[str]) -> None:
    global _log_level_override
    _log_level_override = level.upper() if level else None


def get_effective_log_level() -> str:
    """Get the effective log level (considering verbose mode and overrides)."""
    if _verbose_mode:
        return "DEBUG"
    if _log_level_override:
        return _log_level_override
    return "INFO"


# =============================================================================
# FORMATTERS
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging with cycle ID support.

    Formats log records as single-line JSON with:
    - Timestamp (with timezone)
    - Level
    - Category (derived from logger name)
    - Cycle ID (for correlation)
    - Message
    - Extra data passed via ``extra={"data": {...}}``
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": get_current_timestamp(),
            "level": record.levelname,
            "cat": self._get_category(record.name),
            "cycle": get_cycle_id(),
            "msg": record.getMessage(),
        }

        if hasattr(record, "data") and record.data:
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)

    def _get_category(self, logger_name: str) -> str:
        if logger_name.startswith(f"{ROOT_LOGGER_NAME}."):
            parts = logger_name.split(".")
            if len(parts) >= 2 and parts[1] in CATEGORIES:
                return parts[1]
        return "system"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with cycle ID and color support.

    Format: [LEVEL] [cycle] message
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        cycle_id = get_cycle_id()
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            return f"{color}[{level:7}]{self.RESET} [{cycle_id}] {record.getMessage()}"
        return f"[{level:7}] [{cycle_id}] {record.getMessage()}"


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module, routed to its category.

    Args:
        module_name: Module name (typically __name__).

    Returns:
        The category logger, e.g. ``heatmap.calc``.

    Example:
        from src.utils.logging_setup import get_logger
        logger = get_logger(__name__)
        logger.info("Aggregating...")
    """
    category = get_category_for_module(module_name)
    category_logger_name = f"{ROOT_LOGGER_NAME}.{category}"

    logger = logging.getLogger(category_logger_name)

    if not logger.handlers and category not in _category_loggers:
        # Temporary setup - replaced by setup_category_logging
        logger.setLevel(logging.DEBUG)

    return logger


# =============================================================================
# RUN NUMBER MANAGEMENT
# =============================================================================

def _get_next_run_number(log_dir: str, env: str, date_str: str) -> int:
    """Find the next available run number for today's date."""
    log_path = Path(log_dir) / date_str
    if not log_path.exists():
        return 1

    # Pattern: heatmap_{env}_{suffix}_{date}_{N}.log
    suffixes = "|".join(CATEGORY_SUFFIXES.values())
    pattern = re.compile(
        rf'^heatmap_{re.escape(env)}_(?:{suffixes})_{re.escape(date_str)}_(\d+)\.log$'
    )

    max_num = 0
    for filename in os.listdir(log_path):
        match = pattern.match(filename)
        if match:
            max_num = max(max_num, int(match.group(1)))

    return max_num + 1


def _get_session_run_number(log_dir: str, env: str) -> int:
    global _session_run_number

    if _session_run_number is None:
        date_str = datetime.now().strftime('%Y-%m-%d')
        _session_run_number = _get_next_run_number(log_dir, env, date_str)

    return _session_run_number


def reset_session_run_number() -> None:
    """Reset the session run number (for testing)."""
    global _session_run_number
    _session_run_number = None


# =============================================================================
# CATEGORY LOGGING SETUP
# =============================================================================

def setup_category_logging(
    env: str,
    log_dir: str = "./logs",
    level: str = "INFO",
    console: bool = False,
    verbose: bool = False,
    file_output: bool = True,
) -> Dict[str, logging.Logger]:
    """
    Set up separate log files for each category.

    Creates log files in a date-specific subdirectory:
    - logs/{date}/heatmap_{env}_sys_{date}_{run}.log
    - logs/{date}/heatmap_{env}_clc_{date}_{run}.log
    - logs/{date}/heatmap_{env}_syn_{date}_{run}.log
    - logs/{date}/heatmap_{env}_dat_{date}_{run}.log
    - logs/{date}/heatmap_{env}_prf_{date}_{run}.log

    Args:
        env: Environment name (dev/prod/test).
        log_dir: Base directory for log files.
        level: Default logging level.
        console: Enable console output.
        verbose: Enable verbose (DEBUG) mode.
        file_output: Write category files (disable for tests).

    Returns:
        Dict mapping category name to logger.
    """
    global _category_loggers, _queue_listeners

    # Release handlers from a previous setup
    for listener in _queue_listeners:
        listener.stop()
    _queue_listeners.clear()

    for category in CATEGORIES:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}")
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    set_verbose_mode(verbose)
    set_console_enabled(console)
    if not verbose:
        set_log_level_override(level)

    effective_level = getattr(logging, get_effective_log_level(), logging.INFO)

    date_str = datetime.now().strftime('%Y-%m-%d')
    log_path = Path(log_dir) / date_str
    run_number = 0
    if file_output:
        log_path.mkdir(parents=True, exist_ok=True)
        run_number = _get_session_run_number(log_dir, env)

    for category in CATEGORIES:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}")
        logger.setLevel(effective_level)
        logger.propagate = False

        if file_output:
            suffix = CATEGORY_SUFFIXES[category]
            filename = f"heatmap_{env}_{suffix}_{date_str}_{run_number}.log"

            file_handler = logging.FileHandler(
                filename=str(log_path / filename),
                mode='a',
                encoding='utf-8',
            )
            file_handler.setFormatter(JSONFormatter())
            file_handler.setLevel(effective_level)

            # Non-blocking writes: records go through a queue to the file handler
            log_queue: Queue = Queue(-1)
            logger.addHandler(logging.handlers.QueueHandler(log_queue))

            listener = logging.handlers.QueueListener(
                log_queue, file_handler, respect_handler_level=True
            )
            listener.start()
            _queue_listeners.append(listener)

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ConsoleFormatter(use_colors=sys.stderr.isatty()))
            console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
            logger.addHandler(console_handler)

        _category_loggers[category] = logger

    return _category_loggers


def get_category_loggers() -> Dict[str, logging.Logger]:
    return _category_loggers


def flush_all_loggers() -> None:
    """Flush all handlers to ensure logs are written to disk."""
    for category in CATEGORIES:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}")
        for handler in logger.handlers:
            handler.flush()


def shutdown_logging() -> None:
    """Stop all queue listeners (call during application shutdown)."""
    for listener in _queue_listeners:
        listener.stop()
    _queue_listeners.clear()

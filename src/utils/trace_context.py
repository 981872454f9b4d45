"""
Trace context for correlating logs across a single sync cycle.

A sync cycle is one burst of configuration traffic: a navigation event
fanning out to every joined widget, or one CLI render pass.

Provides:
- Unique cycle IDs (6-char hex) per cycle
- Context propagation via contextvars (async-safe)
- Easy access to the current cycle ID from any module

Usage:
    with new_cycle():
        await location.dispatch_pending()

    from src.utils.trace_context import get_cycle_id
    logger.info(f"[{get_cycle_id()}] Pushing config...")
"""

from __future__ import annotations

import secrets
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional, Generator

_cycle_id: ContextVar[Optional[str]] = ContextVar("cycle_id", default=None)

# Cycles created in this session
_cycle_counter: int = 0


def generate_cycle_id() -> str:
    """
    Generate a new unique cycle ID.

    Returns:
        6-character hex string (e.g., "a7f3b2").
    """
    return secrets.token_hex(3)


def get_cycle_id() -> str:
    """Current cycle ID, or "------" if no cycle is active."""
    cycle_id = _cycle_id.get()
    return cycle_id if cycle_id else "------"


def set_cycle_id(cycle_id: str) -> None:
    _cycle_id.set(cycle_id)


def clear_cycle_id() -> None:
    _cycle_id.set(None)


@contextmanager
def new_cycle() -> Generator[str, None, None]:
    """
    Context manager to run a block under a fresh cycle ID.

    Nested cycles restore the outer ID on exit.

    Yields:
        The new cycle ID.
    """
    global _cycle_counter
    _cycle_counter += 1

    cycle_id = generate_cycle_id()
    token = _cycle_id.set(cycle_id)

    try:
        yield cycle_id
    finally:
        _cycle_id.reset(token)


def get_cycle_counter() -> int:
    return _cycle_counter


def reset_cycle_counter() -> None:
    """Reset the cycle counter (for testing)."""
    global _cycle_counter
    _cycle_counter = 0

"""Widget base: readiness gate, single-slot pending update, change listeners."""

from __future__ import annotations
from enum import Enum
from typing import Callable, List, Optional
from uuid import uuid4

from ..models.widget_config import WidgetConfig
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)

ChangeListener = Callable[[WidgetConfig], None]


class WidgetState(Enum):
    """Widget readiness states."""
    NOT_READY = "not_ready"
    READY = "ready"


class Widget:
    """
    Participant in configuration sync.

    State machine:
        NOT_READY --mark_ready()--> READY   (one way, once)

    While NOT_READY, inbound updates are coalesced into a single pending
    slot: a later update replaces an earlier unapplied one. On the
    transition the pending update, if any, is applied. While READY,
    updates are applied immediately.

    Subclasses override ``handle_update`` and call ``mark_ready()`` when
    their own initialization is done. Local user changes are announced
    with ``fire_change``.
    """

    def __init__(self, identity: Optional[str] = None):
        """
        Args:
            identity: Opaque id stamped on outbound changes. Generated if omitted.
        """
        self._identity = identity or uuid4().hex
        self._state = WidgetState.NOT_READY
        self._pending: Optional[WidgetConfig] = None
        self._listeners: List[ChangeListener] = []

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def state(self) -> WidgetState:
        return self._state

    def is_ready(self) -> bool:
        return self._state == WidgetState.READY

    @property
    def pending(self) -> Optional[WidgetConfig]:
        return self._pending

    async def update(self, config: Optional[WidgetConfig]) -> None:
        """
        Receive a configuration.

        Ignored if ``config`` is None or was produced by this widget.
        """
        if config is None or config.source == self._identity:
            return
        if not self.is_ready():
            if self._pending is not None:
                logger.debug(f"Widget {self._identity[:8]}: replacing pending update")
            self._pending = config
            return
        await self.handle_update(config)

    async def mark_ready(self) -> None:
        """Switch to READY and apply the pending update, if any."""
        if self.is_ready():
            return
        self._state = WidgetState.READY
        pending, self._pending = self._pending, None
        logger.debug(
            f"Widget {self._identity[:8]} ready"
            f"{' (applying pending update)' if pending is not None else ''}"
        )
        if pending is not None:
            await self.handle_update(pending)

    def on_changed(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def fire_change(self, config: WidgetConfig) -> None:
        """Stamp ``config`` with this widget's identity and notify listeners in order."""
        config.source = self._identity
        for listener in list(self._listeners):
            listener(config)

    async def handle_update(self, config: WidgetConfig) -> None:
        """Apply a configuration. The default does nothing."""
        pass

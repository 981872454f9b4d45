"""In-memory page location with queued navigation events."""

from __future__ import annotations
from typing import List, Optional, Sequence

from ...domain.interfaces.location_provider import NavigationCallback
from ...utils.logging_setup import get_logger

logger = get_logger(__name__)


class MemoryLocationProvider:
    """
    Headless LocationProvider.

    Every URL change (``set_url``, ``navigate``, ``back``) queues one
    navigation event, like a browser queues ``hashchange``. Queued events
    are delivered by ``dispatch_pending()``; callbacks read the address
    current at delivery time.

    Usage:
        location = MemoryLocationProvider("https://x/page.html?model=M1")
        transmitter = UrlConfigTransmitter(location)
        location.navigate("https://x/page.html?model=M1#year=2020")
        await location.dispatch_pending()
    """

    def __init__(self, url: str = "", script_urls: Optional[Sequence[str]] = None):
        self._url = url
        self._script_urls: List[str] = list(script_urls or [])
        self._callbacks: List[NavigationCallback] = []
        self._history: List[str] = [url]
        self._pending_events = 0

    def current_url(self) -> str:
        return self._url

    def script_urls(self) -> List[str]:
        return list(self._script_urls)

    def on_navigate(self, callback: NavigationCallback) -> None:
        self._callbacks.append(callback)

    def set_url(self, url: str) -> None:
        """Programmatic URL change (adds a history entry)."""
        self._change(url)

    def navigate(self, url: str) -> None:
        """User navigation, e.g. a manually edited address."""
        self._change(url)

    def back(self) -> bool:
        """Go to the previous history entry; False if there is none."""
        if len(self._history) < 2:
            return False
        self._history.pop()
        self._url = self._history[-1]
        self._pending_events += 1
        return True

    @property
    def history(self) -> List[str]:
        return list(self._history)

    @property
    def pending_events(self) -> int:
        return self._pending_events

    async def dispatch_pending(self) -> int:
        """
        Deliver queued navigation events, including ones queued meanwhile.

        Returns:
            Number of events delivered.
        """
        delivered = 0
        while self._pending_events > 0:
            self._pending_events -= 1
            delivered += 1
            for callback in list(self._callbacks):
                await callback()
        if delivered:
            logger.debug(f"Delivered {delivered} navigation event(s), now at {self._url}")
        return delivered

    def _change(self, url: str) -> None:
        if url == self._url:
            return
        self._url = url
        self._history.append(url)
        self._pending_events += 1

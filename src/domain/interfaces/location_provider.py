"""Navigation capability the config transmitter is bound to."""

from __future__ import annotations
from typing import Awaitable, Callable, List, Protocol, runtime_checkable

NavigationCallback = Callable[[], Awaitable[None]]


@runtime_checkable
class LocationProvider(Protocol):
    """
    Access to the page address and its navigation events.

    Implementations:
    - MemoryLocationProvider (headless, used by the CLI and tests)

    A navigation event is delivered whenever the current URL changes,
    whether by ``set_url`` or by user navigation (back/forward, manual
    edit). Callbacks read the new address via ``current_url()``.
    """

    def current_url(self) -> str:
        ...

    def set_url(self, url: str) -> None:
        ...

    def on_navigate(self, callback: NavigationCallback) -> None:
        ...

    def script_urls(self) -> List[str]:
        """URLs of the scripts included by the page, in document order."""
        ...

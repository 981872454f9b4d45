"""
Config transmitter - keeps widgets and the page URL in sync.

The transmitter owns the canonical WidgetConfig of a page session. Widgets
join it; their changes are merged into the config and written to the URL.
A navigation event (the URL changed, by our own write or by back/forward
or a manual edit) re-reads the URL and pushes the result to every joined
widget. Echo loops are broken by the ``source`` stamp: a widget ignores a
config carrying its own identity.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import uuid4

from ..domain.interfaces.location_provider import LocationProvider
from ..domain.services.url_codec import encode_fragment, parse_url_config, with_fragment
from ..models.widget_config import WidgetConfig
from ..utils.logging_setup import get_logger
from ..utils.trace_context import get_cycle_id, new_cycle
from .widget import Widget

logger = get_logger(__name__)


class ConfigTransmitter(ABC):
    """Hub distributing configuration between widgets."""

    @abstractmethod
    async def join(self, widget: Widget) -> None:
        """Register a widget and push the current config to it."""
        pass

    @abstractmethod
    def update(self, config: WidgetConfig) -> None:
        """Merge a config coming from outside the widgets."""
        pass


class UrlConfigTransmitter(ConfigTransmitter):
    """
    Transmitter persisting the config in the page URL fragment.

    Initial config precedence (first writer wins per field):
        page fragment > page query > script 1 fragment > script 1 query > ...
    """

    def __init__(
        self,
        location: LocationProvider,
        with_scripts: bool = True,
        identity: Optional[str] = None,
    ):
        """
        Initialize the transmitter from the current URL.

        Args:
            location: Page address and navigation events.
            with_scripts: Also read the URLs of included scripts.
            identity: Opaque id stamped on updates made via ``update()``.
        """
        self._location = location
        self._identity = identity or uuid4().hex
        self._widgets: List[Widget] = []
        # Last URL this transmitter wrote; a navigation to it is our own echo
        self._written_url: Optional[str] = None

        urls = [location.current_url()]
        if with_scripts:
            urls.extend(location.script_urls())
        self._config = parse_url_config(urls)

        location.on_navigate(self._on_navigate)
        logger.info(f"Config transmitter initialized: {self._config.to_dict()}")

    @property
    def identity(self) -> str:
        return self._identity

    @property
    def widgets(self) -> List[Widget]:
        return list(self._widgets)

    def get(self) -> WidgetConfig:
        """Copy of the current configuration."""
        return self._config.copy()

    async def join(self, widget: Widget) -> None:
        self._widgets.append(widget)
        logger.debug(f"Widget {widget.identity[:8]} joined ({len(self._widgets)} total)")
        await widget.update(self.get())

        def on_widget_change(config: WidgetConfig) -> None:
            self._config = self._config.merged(config)
            self._config.source = widget.identity
            logger.debug(f"Change from widget {widget.identity[:8]}: {config.to_dict()}")
            self._write_url()

        widget.on_changed(on_widget_change)

    def update(self, config: WidgetConfig) -> None:
        self._config = self._config.merged(config)
        self._config.source = self._identity
        self._write_url()

    def update_if_absent(self, values: Optional[Dict[str, Any]]) -> None:
        """
        Fill unset fields from ``values``; update only if something was filled.

        Keys that are not config fields are ignored.
        """
        if not values:
            return
        known = set(WidgetConfig.field_names())
        next_config = self._config.copy()
        needs_update = False
        for key, value in values.items():
            if key not in known:
                continue
            if not getattr(next_config, key):
                setattr(next_config, key, value)
                needs_update = True
        if needs_update:
            self.update(next_config)

    def clear_all(self) -> None:
        """Remove the config fragment from the URL."""
        self._set_url(with_fragment(self._location.current_url(), ""))

    async def _on_navigate(self) -> None:
        url = self._location.current_url()
        echo = url == self._written_url
        with new_cycle():
            self._config = self._config.merged(parse_url_config([url]))
            if not echo:
                # External navigation: every widget must receive it
                self._config.source = self._identity
            logger.debug(
                f"[{get_cycle_id()}] Navigation ({'echo' if echo else 'external'}), "
                f"pushing to {len(self._widgets)} widget(s)"
            )
            for widget in list(self._widgets):
                await widget.update(self.get())

    def _write_url(self) -> None:
        url = with_fragment(self._location.current_url(), encode_fragment(self._config))
        self._set_url(url)

    def _set_url(self, url: str) -> None:
        if url == self._location.current_url():
            return
        self._written_url = url
        self._location.set_url(url)

"""Application layer - widget lifecycle and configuration sync."""

from .widget import Widget, WidgetState, ChangeListener
from .config_transmitter import ConfigTransmitter, UrlConfigTransmitter

__all__ = [
    "Widget",
    "WidgetState",
    "ChangeListener",
    "ConfigTransmitter",
    "UrlConfigTransmitter",
]

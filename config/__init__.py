"""Configuration management (YAML files -> AppConfig)."""

from .config_manager import ConfigManager
from .models import AppConfig, HeatmapConfig, TransmitterConfig, DisplayConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "AppConfig",
    "HeatmapConfig",
    "TransmitterConfig",
    "DisplayConfig",
    "LoggingConfig",
]

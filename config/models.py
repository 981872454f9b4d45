"""Configuration data models."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class HeatmapConfig:
    """Heatmap calculation settings."""
    default_ranking_count: int = 10


@dataclass
class TransmitterConfig:
    """Config transmitter settings."""
    with_scripts: bool = True


@dataclass
class DisplayConfig:
    """Terminal display settings."""
    share_precision: int = 1
    show_shares: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: bool = True  # Write per-category log files
    log_dir: str = "./logs"
    timezone: str = "local"  # e.g. "Europe/Berlin", "UTC", or "local"


@dataclass
class AppConfig:
    """Complete application configuration."""
    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    transmitter: TransmitterConfig = field(default_factory=TransmitterConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    raw: Dict[str, Any] = field(default_factory=dict)  # Merged YAML as loaded

"""
Configuration manager with environment-based loading.

Supports:
- Base configuration (base.yaml)
- Environment-specific overrides (dev.yaml, prod.yaml, test.yaml)
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any
import yaml
import logging

from src.domain.exceptions import ConfigurationError

from .models import (
    AppConfig,
    HeatmapConfig,
    TransmitterConfig,
    DisplayConfig,
    LoggingConfig,
)


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigManager:
    """
    Configuration manager with environment support.

    Loads configuration in this order:
    1. base.yaml (default config)
    2. {env}.yaml (environment-specific, e.g., dev.yaml)

    Later configs override earlier ones.
    """

    def __init__(self, config_dir: str | Path = "config", env: str = "dev"):
        """
        Initialize config manager.

        Args:
            config_dir: Directory containing config files.
            env: Environment name (dev, prod, test).
        """
        self.config_dir = Path(config_dir)
        self.env = env
        self.config: Dict[str, Any] = {}

    def load(self) -> AppConfig:
        """
        Load configuration from YAML files.

        Returns:
            AppConfig object.

        Raises:
            ConfigurationError: If base config is missing or a value is invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise ConfigurationError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)
        logger.info(f"Loaded base config from {base_path}")

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path)
            self.config = self._merge_dicts(self.config, env_config)
            logger.info(f"Loaded {self.env} config from {env_path}")

        return self._parse_config()

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Expected a mapping in {path}")
        return data

    def _merge_dicts(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def _parse_config(self) -> AppConfig:
        """Parse raw dict into AppConfig."""
        heatmap_raw = self.config.get("heatmap") or {}
        heatmap = HeatmapConfig(
            default_ranking_count=heatmap_raw.get("default_ranking_count", 10),
        )

        transmitter_raw = self.config.get("transmitter") or {}
        transmitter = TransmitterConfig(
            with_scripts=transmitter_raw.get("with_scripts", True),
        )

        display_raw = self.config.get("display") or {}
        display = DisplayConfig(
            share_precision=display_raw.get("share_precision", 1),
            show_shares=display_raw.get("show_shares", True),
        )

        logging_raw = self.config.get("logging") or {}
        logging_config = LoggingConfig(
            level=str(logging_raw.get("level", "INFO")).upper(),
            file=logging_raw.get("file", True),
            log_dir=logging_raw.get("log_dir", "./logs"),
            timezone=logging_raw.get("timezone", "local"),
        )

        app_config = AppConfig(
            heatmap=heatmap,
            transmitter=transmitter,
            display=display,
            logging=logging_config,
            raw=self.config,
        )
        self._validate(app_config)
        return app_config

    def _validate(self, config: AppConfig) -> None:
        count = config.heatmap.default_ranking_count
        if not isinstance(count, int) or isinstance(count, bool) or count <= 0:
            raise ConfigurationError(
                f"heatmap.default_ranking_count must be a positive integer, got {count!r}"
            )
        precision = config.display.share_precision
        if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0:
            raise ConfigurationError(
                f"display.share_precision must be a non-negative integer, got {precision!r}"
            )
        if config.logging.level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {config.logging.level}")

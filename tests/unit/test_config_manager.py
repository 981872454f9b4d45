"""Unit tests for layered YAML configuration."""

from pathlib import Path

import pytest
import yaml

from config import ConfigManager
from src.domain.exceptions import ConfigurationError, FatalError

CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"


def _write(directory: Path, name: str, data: dict) -> None:
    (directory / name).write_text(yaml.safe_dump(data))


class TestRepositoryConfig:
    """Tests for the shipped config files."""

    def test_base_defaults(self):
        config = ConfigManager(config_dir=CONFIG_DIR, env="missing").load()

        assert config.heatmap.default_ranking_count == 10
        assert config.transmitter.with_scripts is True
        assert config.display.share_precision == 1
        assert config.logging.level == "INFO"

    def test_test_env_disables_log_files(self):
        config = ConfigManager(config_dir=CONFIG_DIR, env="test").load()
        assert config.logging.file is False

    def test_prod_overrides(self):
        config = ConfigManager(config_dir=CONFIG_DIR, env="prod").load()

        assert config.heatmap.default_ranking_count == 20
        assert config.logging.level == "WARNING"
        assert config.logging.timezone == "UTC"
        # Untouched sections come from base.yaml
        assert config.display.show_shares is True


class TestLoading:
    """Tests for merge and validation rules."""

    def test_deep_merge(self, tmp_path):
        _write(tmp_path, "base.yaml", {"display": {"share_precision": 1, "show_shares": True}})
        _write(tmp_path, "dev.yaml", {"display": {"share_precision": 3}})

        manager = ConfigManager(config_dir=tmp_path, env="dev")
        config = manager.load()

        assert config.display.share_precision == 3
        assert config.display.show_shares is True
        assert manager.config["display"] == {"share_precision": 3, "show_shares": True}

    def test_empty_base_uses_defaults(self, tmp_path):
        (tmp_path / "base.yaml").write_text("")

        config = ConfigManager(config_dir=tmp_path).load()

        assert config.heatmap.default_ranking_count == 10
        assert config.raw == {}

    def test_missing_base_is_fatal(self, tmp_path):
        with pytest.raises(FatalError):
            ConfigManager(config_dir=tmp_path).load()

    @pytest.mark.parametrize("data", [
        {"heatmap": {"default_ranking_count": 0}},
        {"heatmap": {"default_ranking_count": "ten"}},
        {"heatmap": {"default_ranking_count": True}},
        {"display": {"share_precision": -1}},
        {"logging": {"level": "chatty"}},
    ])
    def test_invalid_values(self, tmp_path, data):
        _write(tmp_path, "base.yaml", data)

        with pytest.raises(ConfigurationError):
            ConfigManager(config_dir=tmp_path).load()

    def test_log_level_is_uppercased(self, tmp_path):
        _write(tmp_path, "base.yaml", {"logging": {"level": "debug"}})
        assert ConfigManager(config_dir=tmp_path).load().logging.level == "DEBUG"

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "base.yaml").write_text("heatmap: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigManager(config_dir=tmp_path).load()

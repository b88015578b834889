"""Tests for configuration loading and saving."""

import logging
from pathlib import Path

from taskline.config import Config, ConfigModel, load_config, save_config


class TestConfigModel:
    """Test the configuration dataclass."""

    def test_defaults(self):
        config = ConfigModel()

        assert config.data_file == "tasks.txt"
        assert config.log_level == "WARNING"
        assert not config.auto_backup
        assert config.get_data_path() == Path(config.data_dir) / "tasks.txt"

    def test_user_paths_are_expanded(self):
        config = ConfigModel(data_dir="~/somewhere")
        assert not config.data_dir.startswith("~")

    def test_absolute_data_file_wins(self, tmp_path):
        config = ConfigModel(data_dir=str(tmp_path / "a"), data_file=str(tmp_path / "b.txt"))
        assert config.get_data_path() == tmp_path / "b.txt"

    def test_yaml_round_trip(self, tmp_path):
        config = ConfigModel(data_dir=str(tmp_path), no_color=True, log_level="debug")

        restored = ConfigModel.from_yaml(config.to_yaml())

        assert restored == config
        assert restored.log_level == "DEBUG"

    def test_unknown_keys_are_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="taskline"):
            config = ConfigModel.from_yaml("show_banner: false\ntheme: dark\n")

        assert config.show_banner is False
        assert "theme" in caplog.text


class TestConfigManager:
    """Test loading configuration from disk."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")

        assert config == ConfigModel()
        assert not (tmp_path / "missing.yaml").exists()

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(data_file="mine.txt", show_banner=False), path)

        config = Config.reload(path)

        assert config.data_file == "mine.txt"
        assert config.show_banner is False

    def test_environment_selects_config(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("data_file: from_env.txt\n", encoding="utf-8")
        monkeypatch.setenv("TASKLINE_CONFIG", str(path))

        assert Config.reload().data_file == "from_env.txt"

    def test_broken_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("data_file: [unclosed\n", encoding="utf-8")

        assert Config.reload(path) == ConfigModel()

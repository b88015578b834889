"""Configuration management for taskline."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TASKLINE_CONFIG"
DEFAULT_CONFIG_PATH = "~/.taskline/config.yaml"


@dataclass
class ConfigModel:
    """Global configuration model for taskline."""

    # File paths
    data_dir: str = "~/.taskline"
    data_file: str = "tasks.txt"
    backup_dir: str = "~/.taskline/backups"

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    # Display preferences
    no_color: bool = False
    show_banner: bool = True

    # Behavior settings
    auto_backup: bool = False  # Copy the tasks file aside before the first save

    def __post_init__(self):
        """Expand user paths."""
        self.data_dir = os.path.expanduser(self.data_dir)
        self.backup_dir = os.path.expanduser(self.backup_dir)
        if self.log_file:
            self.log_file = os.path.expanduser(self.log_file)
        self.log_level = str(self.log_level).upper()

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning("Ignoring unknown configuration key: %s", key)
        return cls(**{k: v for k, v in data.items() if k in known})

    def get_data_path(self) -> Path:
        """Get the tasks file path; an absolute ``data_file`` wins over ``data_dir``."""
        data_file = Path(os.path.expanduser(self.data_file))
        if data_file.is_absolute():
            return data_file
        return Path(self.data_dir) / data_file

    def get_backup_path(self, timestamp: Optional[str] = None) -> Path:
        """Get backup directory path."""
        if timestamp:
            return Path(self.backup_dir) / timestamp
        return Path(self.backup_dir)


def default_config_path() -> Path:
    """Config file path from the environment, or the default location."""
    return Path(os.path.expanduser(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)))


class Config:
    """Configuration manager for taskline."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file, falling back to defaults."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = default_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    config = ConfigModel.from_yaml(f.read())
                logger.debug("Loaded configuration from %s", config_path)
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning("Failed to load config from %s: %s", config_path, e)
                logger.warning("Using default configuration.")
        else:
            logger.debug("No configuration at %s, using defaults", config_path)

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
        logger.info("Configuration saved to %s", config_path)

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)

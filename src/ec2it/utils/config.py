#!/usr/bin/env python3
"""
utils/config.py

Configuration management for ec2it.
Loads the YAML settings file once per invocation into an immutable Config.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ec2it.core.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG_DIR
from ec2it.utils.exceptions import ConfigError
from ec2it.utils.logger import setup_logger

logger = setup_logger(__name__, "config.log")


@dataclass(frozen=True)
class Config:
    """Settings resolved from the settings file."""

    default_instance_type: Optional[str] = None
    default_security_group: Optional[str] = None
    default_availability_zone: Optional[str] = None
    region: Optional[str] = None
    profile: Optional[str] = None
    log_level: str = "INFO"


class ConfigManager:
    """
    Simple configuration manager.

    Features:
    - YAML configuration loading
    - Environment variable override support

    Lookup order for the settings file: explicit path, $EC2IT_CONFIG,
    ~/.ec2it/settings.yaml, ~/.ec2it/settings.yml.
    """

    def __init__(self, config_file: Optional[Path] = None):
        if config_file:
            self.settings_file = Path(config_file).expanduser()
        elif os.environ.get(CONFIG_ENV_VAR):
            self.settings_file = Path(os.environ[CONFIG_ENV_VAR]).expanduser()
        else:
            config_dir = Path(DEFAULT_CONFIG_DIR).expanduser()
            yml_file = config_dir / "settings.yml"
            yaml_file = config_dir / "settings.yaml"
            if yml_file.exists() and not yaml_file.exists():
                self.settings_file = yml_file
            else:
                self.settings_file = yaml_file  # Default to .yaml for error messages

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load a YAML file safely.
        """
        if not file_path.exists():
            logger.warning(f"Config file not found: {file_path}")
            return {}

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error loading {file_path}: {e}") from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(f"Expected a mapping at the top of {file_path}")
        return content

    def load_settings(self) -> Dict[str, Any]:
        """
        Load raw application settings.
        """
        return self._load_yaml_file(self.settings_file)

    @property
    def settings(self) -> Dict[str, Any]:
        """Raw settings, read from disk on first access."""
        if not hasattr(self, "_cached_settings"):
            self._cached_settings = self.load_settings()
        return self._cached_settings

    def get_value(
        self, key_path: str, default: Any = None, env_var: Optional[str] = None
    ) -> Any:
        """
        Get configuration value with dot notation support and environment variable override.
        """
        if env_var and env_var in os.environ:
            return os.environ[env_var]

        current = self.settings
        try:
            for key in key_path.split("."):
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_log_level(self) -> str:
        """Get logging level; an empty value means INFO."""
        level = self.get_value("logging.level", env_var="LOG_LEVEL")
        if level is None or level == "":
            return "INFO"
        if not isinstance(level, str):
            raise ConfigError(f"logging.level must be a level name such as INFO, got {level!r}")
        return level.upper()

    def load_config(self) -> Config:
        """Build the immutable Config for this invocation."""
        config = Config(
            default_instance_type=self.get_value("instance.default_instance_type"),
            default_security_group=self.get_value("instance.default_security_group"),
            default_availability_zone=self.get_value("vpc.default_availability_zone"),
            region=self.get_value("aws.region", env_var="AWS_DEFAULT_REGION"),
            profile=self.get_value("aws.profile", env_var="AWS_PROFILE"),
            log_level=self.get_log_level(),
        )
        logger.debug(f"Loaded configuration from {self.settings_file}: {config}")
        return config


def load_config(config_file: Optional[Path] = None) -> Config:
    """Load Config from the given file or the default location."""
    return ConfigManager(config_file).load_config()

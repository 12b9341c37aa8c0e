# utils/__init__.py

from .exceptions import (
    CLIError,
    ConfigError,
    DryRunSucceeded,
    Ec2ItError,
    ResolutionError,
    SnapshotNotFoundError,
    ValidationRules,
)
from .logger import setup_logger, set_console_level
from .config import Config, ConfigManager, load_config
from .session import SessionManager

__all__ = [
    "CLIError",
    "ConfigError",
    "DryRunSucceeded",
    "Ec2ItError",
    "ResolutionError",
    "SnapshotNotFoundError",
    "ValidationRules",
    "setup_logger",
    "set_console_level",
    "Config",
    "ConfigManager",
    "load_config",
    "SessionManager",
]

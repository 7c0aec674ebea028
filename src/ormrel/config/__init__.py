"""
Configuration system using Pydantic models loaded from YAML
"""

from ormrel.config.exceptions import (
    ConfigurationError,
    ConfigurationNotFoundError,
    ConfigurationValidationError,
)
from ormrel.config.loader import ConfigManager, load_config
from ormrel.config.models import (
    AppConfig,
    ConsoleLoggingConfig,
    FileLoggingConfig,
    GeneratorConfig,
    GlobalConfig,
    LoggingConfig,
    NamespaceConfig,
)

__all__ = [
    "AppConfig",
    "ConfigManager",
    "ConfigurationError",
    "ConfigurationNotFoundError",
    "ConfigurationValidationError",
    "ConsoleLoggingConfig",
    "FileLoggingConfig",
    "GeneratorConfig",
    "GlobalConfig",
    "LoggingConfig",
    "NamespaceConfig",
    "load_config",
]

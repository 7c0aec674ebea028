"""
Configuration-related exceptions
"""

from ormrel.exceptions import OrmRelError


class ConfigurationError(OrmRelError):
    """Base exception for configuration errors"""

    pass


class ConfigurationNotFoundError(ConfigurationError):
    """Raised when configuration file is not found"""

    pass


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration validation fails"""

    pass

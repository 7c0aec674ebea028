"""
ormrel utilities: logging setup and rich consoles.
"""

from ormrel.utils.console import console, get_console
from ormrel.utils.logging import ormrel_logger, setup_logging

__all__ = [
    "console",
    "get_console",
    "ormrel_logger",
    "setup_logging",
]

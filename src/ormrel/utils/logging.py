"""
Centralized logging configuration for the ormrel application.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger
from rich.console import Console

from ormrel.config import AppConfig

LEVEL_COLORS = {
    "ERROR": "bold red",
    "CRITICAL": "bold red",
    "WARNING": "bold orange1",
    "SUCCESS": "bold green",
}


class OrmRelLogger:
    """Centralized logger for the ormrel application with config integration."""

    def __init__(self):
        # Log output never shares stdout with generated Rel
        self.console = Console(stderr=True)
        self._is_configured = False
        self._current_level = "INFO"
        self._log_file: Optional[Path] = None
        self._environment = "development"

    def setup(
        self,
        verbose: bool = False,
        log_file: Optional[Path] = None,
        app_config: Optional[AppConfig] = None,
        environment: str = "development",
        force: bool = False,
    ):
        """
        Setup logging from an application configuration.

        Args:
            verbose: Enable debug logging (overrides config)
            log_file: Optional custom log file path (overrides config)
            app_config: Loaded configuration (default: built-in defaults)
            environment: Environment name used in the log file template
            force: Reconfigure even if logging was already set up
        """
        if self._is_configured and not force:
            return

        app_config = app_config or AppConfig()
        self._environment = environment
        logging_config = app_config.global_.get_logging_config(environment)

        log_level = "DEBUG" if verbose else app_config.global_.log_level
        self._current_level = log_level
        self._log_file = None

        # Remove default loguru handler
        logger.remove()

        self._setup_console_logging(log_level, verbose, logging_config["console"])

        if log_file:
            self._log_file = Path(log_file)
            self._setup_file_logging(
                log_level,
                {"rotation": "10 MB", "retention": "30 days", "compression": "gz"},
            )
        elif logging_config["file"]["enabled"] and logging_config["file"]["path"]:
            self._log_file = logging_config["file"]["path"]
            self._setup_file_logging(log_level, logging_config["file"])

        self._is_configured = True
        logger.debug(
            f"ormrel logging initialized (level={log_level}, env={environment}, "
            f"file={self._log_file})"
        )

    def _setup_console_logging(
        self, log_level: str, verbose: bool, console_config: Dict
    ):
        """Setup console logging based on configuration."""
        detailed = verbose or console_config.get("format", "simple") == "detailed"
        show_time = console_config.get("show_time", True)
        show_path = console_config.get("show_path", False)

        supports_color = self.console.is_terminal and not self.console.legacy_windows
        if not supports_color:
            parts = []
            if show_time:
                parts.append("{time:HH:mm:ss}")
            parts.append("{level: <8}")
            if detailed:
                location = "{name}:{function}:{line}" if show_path else "{name}:{function}"
                parts.append(location + " - {message}")
            else:
                parts.append("{message}")
            logger.add(
                sys.stderr,
                format=" | ".join(parts),
                level=log_level,
                colorize=False,
                diagnose=verbose,
            )
            return

        def rich_sink(message):
            record = message.record
            level = record["level"].name
            style = LEVEL_COLORS.get(level, "bold")
            parts = []
            if show_time:
                parts.append(f"[green]{record['time'].strftime('%H:%M:%S')}[/green]")
            parts.append(f"[{style}]{level}[/{style}]")
            if detailed:
                location = f"{record['name']}:{record['function']}"
                if show_path:
                    location += f":{record['line']}"
                parts.append(f"[cyan]{location}[/cyan] - {record['message']}")
            else:
                parts.append(record["message"])
            # Messages may contain brackets (e.g. Rel bodies), so the message
            # itself is never interpreted as markup
            self.console.print(
                " | ".join(parts[:-1]), end=" | ", markup=True, highlight=False
            )
            self.console.print(parts[-1], markup=False, highlight=False)

        logger.add(
            rich_sink,
            format="{message}",
            level=log_level,
            colorize=False,
            diagnose=verbose,
        )

    def _setup_file_logging(self, log_level: str, file_config: Dict):
        """Setup file logging based on configuration."""
        if not self._log_file:
            return

        self._log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(self._log_file),
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=log_level,
            rotation=file_config.get("rotation", "10 MB"),
            retention=file_config.get("retention", "30 days"),
            compression=file_config.get("compression", "gz"),
            diagnose=True,
        )

    def show_log_info(self, console: Optional[Console] = None):
        """Display logging information."""
        console = console or self.console
        console.print("[bold]Logging Configuration:[/bold]")
        console.print(f"  Environment: {self._environment}")
        console.print(f"  Level: {self._current_level}")
        console.print(f"  Log file: {self._log_file}")
        if self._log_file and self._log_file.exists():
            size_mb = self._log_file.stat().st_size / (1024 * 1024)
            console.print(f"  File size: {size_mb:.2f} MB")


# Global logger instance
ormrel_logger = OrmRelLogger()


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    app_config: Optional[AppConfig] = None,
    environment: str = "development",
    force: bool = False,
):
    """
    Setup logging for the ormrel application.

    Args:
        verbose: Enable debug logging
        log_file: Optional custom log file path
        app_config: Loaded configuration
        environment: Environment name
        force: Reconfigure even if already set up
    """
    ormrel_logger.setup(
        verbose=verbose,
        log_file=log_file,
        app_config=app_config,
        environment=environment,
        force=force,
    )

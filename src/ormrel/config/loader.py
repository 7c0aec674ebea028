"""
Configuration loader supporting separate environment files and environment
variable overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from ormrel.config.exceptions import (
    ConfigurationError,
    ConfigurationNotFoundError,
    ConfigurationValidationError,
)
from ormrel.config.models import AppConfig

# Generated Rel may be printed on stdout, so configuration chatter goes to stderr
console = Console(stderr=True)

ENV_PREFIX = "ORMREL"
SECTIONS = ["global", "generator", "namespaces"]


class ConfigManager:
    """Loads a base YAML file, merges environment overrides and validates"""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def _log(self, message: str) -> None:
        if not self.quiet:
            console.log(message)

    def load_config(
        self,
        config_path: Optional[Path] = None,
        environment: str = "development",
    ) -> AppConfig:
        """Load configuration with separate environment files"""
        # 1. Load base configuration
        base_config_data = self._load_base_config(config_path)

        # 2. Load environment-specific overrides
        env_config_data = self._load_environment_config(config_path, environment)

        # 3. Merge environment overrides into base config
        if env_config_data:
            self._merge_configs(base_config_data, env_config_data)

        # 4. Apply environment variable overrides
        self._apply_env_overrides(base_config_data)

        # 5. Create and validate config using Pydantic
        try:
            return AppConfig(**base_config_data)
        except ValidationError as e:
            raise ConfigurationValidationError(f"Invalid configuration: {e}") from e

    def _read_yaml(self, path: Path) -> list[Any]:
        try:
            with open(path, "r") as f:
                return list(yaml.safe_load_all(f))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    def _load_base_config(self, config_path: Optional[Path]) -> dict:
        """Load the base configuration file, or start from the defaults"""
        if config_path is None:
            config_path = self._find_base_config_file()
            if config_path is None:
                self._log("🔧 No configuration file found, using defaults")
                return {}
        elif not config_path.exists():
            raise ConfigurationNotFoundError(
                f"Configuration file not found: {config_path}"
            )

        self._log(f"🔧 Loading base config: {config_path}")
        configs = [c for c in self._read_yaml(config_path) if c]
        if not configs:
            return {}
        if not all(isinstance(c, dict) for c in configs):
            raise ConfigurationError(f"Configuration must be a mapping: {config_path}")

        # First document is the base, further documents are merged in order
        base_config = configs[0]
        for config in configs[1:]:
            self._merge_configs(base_config, config)
        return base_config

    def _load_environment_config(
        self, base_config_path: Optional[Path], environment: str
    ) -> Optional[dict]:
        """Load environment-specific configuration file"""
        for env_path in self._find_environment_config_paths(
            base_config_path, environment
        ):
            if env_path.exists():
                self._log(f"🔧 Loading environment config: {env_path}")
                env_config = next(iter(self._read_yaml(env_path)), None)
                if env_config:
                    return env_config
                self._log(f"[yellow]⚠️  Environment config is empty: {env_path}[/yellow]")

        self._log(f"⚠️  No environment config found for '{environment}'")
        return None

    def _find_base_config_file(self) -> Optional[Path]:
        search_paths = [
            Path("config/ormrel_config.yaml"),
            Path("config/config.yaml"),
            Path("~/.config/ormrel/config.yaml").expanduser(),
        ]
        for path in search_paths:
            if path.exists():
                return path
        return None

    def _find_environment_config_paths(
        self, base_config_path: Optional[Path], environment: str
    ) -> list[Path]:
        base_dir = base_config_path.parent if base_config_path else Path("config")
        return [
            base_dir / "environments" / f"{environment}.yaml",
            base_dir / "environments" / f"{environment}.yml",
            base_dir / f"{environment}.yaml",
            base_dir / f"{environment}.yml",
        ]

    def _merge_configs(self, base: dict, override: dict) -> None:
        """Recursively merge configuration dictionaries"""
        for key, value in override.items():
            if key.startswith("_"):  # Skip meta keys like _environment
                continue

            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value
                self._log(f"🔧 Override: {key} = {value}")

    def _apply_env_overrides(self, config: dict) -> None:
        """
        Apply environment variable overrides.

        ORMREL_<SECTION>_<KEY> sets a key of a section, with "__" separating
        nested keys: ORMREL_GENERATOR_OUTPUT_DIR=out or
        ORMREL_GLOBAL_LOGGING__FILE__ENABLED=true
        """
        for section in SECTIONS:
            prefix = f"{ENV_PREFIX}_{section.upper()}_"
            for env_var, value in os.environ.items():
                if not env_var.startswith(prefix):
                    continue
                config_path = env_var[len(prefix) :].lower().split("__")
                self._set_nested_value(config.setdefault(section, {}), config_path, value)
                self._log(f"🔧 Env override: {env_var} = {value}")

    def _set_nested_value(self, config: dict, path: list[str], value: str) -> None:
        current = config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value


def load_config(
    config_path: Optional[Path] = None,
    environment: str = "development",
    quiet: bool = False,
) -> AppConfig:
    """Load configuration with separate environment files"""
    return ConfigManager(quiet=quiet).load_config(config_path, environment)

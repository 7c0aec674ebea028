"""
Pydantic configuration models for ormrel
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, validator

from ormrel.orm.parser import DEFAULT_NAMESPACES


class FileLoggingConfig(BaseModel):
    """File logging configuration with template support"""

    enabled: bool = False
    path: str = "logs/ormrel_{environment}_{date}.log"  # Keep as string template
    rotation: str = "10 MB"
    retention: str = "30 days"
    compression: str = "gz"

    @validator("path")
    def validate_path_template(cls, v):
        """Validate that path template has valid placeholders"""
        valid_placeholders = {"{environment}", "{date}", "{datetime}"}
        found_placeholders = set(re.findall(r"\{[^}]+\}", v))

        invalid_placeholders = found_placeholders - valid_placeholders
        if invalid_placeholders:
            raise ValueError(
                f"Invalid placeholders in path: {invalid_placeholders}. "
                f"Valid placeholders: {valid_placeholders}"
            )
        return v

    def get_resolved_path(self, environment: str) -> Path:
        """
        Resolve template placeholders in the path.

        Args:
            environment: Environment name (e.g., 'development', 'production')

        Returns:
            Path with placeholders resolved
        """
        now = datetime.now()
        return Path(
            self.path.format(
                environment=environment,
                date=now.strftime("%Y%m%d"),
                datetime=now.strftime("%Y%m%d_%H%M%S"),
            )
        )

    @validator("rotation")
    def validate_rotation(cls, v):
        """Validate rotation format (e.g., '10 MB', '1 GB', '1 day')"""
        if not re.match(r"^\d+\s*(MB|GB|KB|day|days|hour|hours)$", v, re.IGNORECASE):
            raise ValueError(
                "rotation must be in format like '10 MB', '1 GB', or '1 day'"
            )
        return v

    @validator("retention")
    def validate_retention(cls, v):
        if not re.match(
            r"^\d+\s*(day|days|week|weeks|month|months)$", v, re.IGNORECASE
        ):
            raise ValueError(
                "retention must be in format like '30 days', '1 week', '6 months'"
            )
        return v


class ConsoleLoggingConfig(BaseModel):
    """Console logging configuration"""

    format: str = "simple"  # "simple" or "detailed"
    show_time: bool = True
    show_path: bool = False

    @validator("format")
    def validate_format(cls, v):
        if v not in ["simple", "detailed"]:
            raise ValueError("format must be 'simple' or 'detailed'")
        return v


class LoggingConfig(BaseModel):
    """Complete logging configuration"""

    file: FileLoggingConfig = FileLoggingConfig()
    console: ConsoleLoggingConfig = ConsoleLoggingConfig()

    def get_file_path(self, environment: str) -> Optional[Path]:
        """Resolved file path if file logging is enabled, None otherwise"""
        if self.file.enabled:
            return self.file.get_resolved_path(environment)
        return None

    def get_log_config_for_environment(self, environment: str) -> Dict[str, Any]:
        """
        Get complete logging configuration for a specific environment.

        Args:
            environment: Environment name

        Returns:
            Dict with resolved configuration for logging setup
        """
        return {
            "file": {
                "enabled": self.file.enabled,
                "path": self.get_file_path(environment),
                "rotation": self.file.rotation,
                "retention": self.file.retention,
                "compression": self.file.compression,
            },
            "console": {
                "format": self.console.format,
                "show_time": self.console.show_time,
                "show_path": self.console.show_path,
            },
        }


class GlobalConfig(BaseModel):
    """Global configuration settings"""

    log_level: str = "INFO"
    logging: LoggingConfig = LoggingConfig()

    @validator("log_level")
    def log_level_must_be_valid(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    def get_logging_config(self, environment: str) -> Dict[str, Any]:
        return self.logging.get_log_config_for_environment(environment)


class GeneratorConfig(BaseModel):
    """Rel schema generation settings"""

    output_dir: Path = Path("rel/model")
    filename_template: str = "{concept}_schema.rel"
    encoding: str = "utf-8"

    @validator("output_dir", pre=True)
    def parse_output_dir(cls, v):
        return Path(v) if not isinstance(v, Path) else v

    @validator("filename_template")
    def template_must_name_concept(cls, v):
        if "{concept}" not in v:
            raise ValueError("filename_template must contain the {concept} placeholder")
        unknown = set(re.findall(r"\{[^}]*\}", v)) - {"{concept}"}
        if unknown:
            raise ValueError(f"Invalid placeholders in filename_template: {unknown}")
        return v

    @validator("encoding")
    def encoding_must_be_known(cls, v):
        try:
            "".encode(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}")
        return v

    def filename_for(self, concept_name: str) -> str:
        """Artifact filename for a concept, e.g. 'event_schema.rel' for 'Event'"""
        return self.filename_template.format(concept=concept_name.lower())


class NamespaceConfig(BaseModel):
    """XML namespaces of the NORMA document format"""

    orm: str = DEFAULT_NAMESPACES["orm"]
    orm_diagram: str = DEFAULT_NAMESPACES["ormDiagram"]

    @validator("orm", "orm_diagram")
    def uri_must_not_be_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("namespace URI cannot be empty")
        return v.strip()

    def as_dict(self) -> Dict[str, str]:
        """Prefix -> URI map as used in ElementTree paths"""
        return {"orm": self.orm, "ormDiagram": self.orm_diagram}


class AppConfig(BaseModel):
    """Main application configuration"""

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    namespaces: NamespaceConfig = Field(default_factory=NamespaceConfig)

    class Config:
        validate_by_name = True

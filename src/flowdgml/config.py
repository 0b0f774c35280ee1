"""Configuration management for flowdgml using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from flowdgml.graph.categories import DECLARED_CATEGORIES, CategoryTable

CONFIG_FILE_NAME = ".flowdgml.json"


class OutputFormat(str, Enum):
    """Output format types."""
    DGML = "dgml"
    MERMAID = "mermaid"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    def to_logging(self) -> int:
        return {
            LogLevel.ERROR: logging.ERROR,
            LogLevel.WARN: logging.WARNING,
            LogLevel.INFO: logging.INFO,
            LogLevel.DEBUG: logging.DEBUG,
        }[self]


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.DGML
    indent: int = 2

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v):
        if v < 0:
            raise ValueError("indent must be >= 0")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO


class FlowDgmlConfig(BaseModel):
    """Complete flowdgml configuration model."""
    output: OutputConfig = Field(default_factory=OutputConfig)
    palette: dict[str, str] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("palette")
    @classmethod
    def validate_palette(cls, v):
        """Only declared categories can be recoloured."""
        unknown = sorted(set(v) - set(DECLARED_CATEGORIES))
        if unknown:
            raise ValueError(f"palette contains unknown categories: {unknown}")
        empty = sorted(category for category, colour in v.items() if not colour)
        if empty:
            raise ValueError(f"palette colours must not be empty: {empty}")
        return v

    model_config = ConfigDict(extra="forbid")

    def category_table(self) -> CategoryTable:
        return CategoryTable.with_overrides(self.palette)


def load_config(config_path: str | Path | None = None) -> FlowDgmlConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .flowdgml.json

    Returns:
        FlowDgmlConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid or an explicit path does not exist
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ValueError(f"Config file not found: {config_path}")

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return FlowDgmlConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except ValidationError as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    return FlowDgmlConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .flowdgml.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None

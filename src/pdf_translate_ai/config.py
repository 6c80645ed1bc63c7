"""
Configuration management for pdf-translate-ai.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if present (before Settings initialization)
load_dotenv()

CREDENTIAL_ENV_VAR = "OPENAI_KEY"


class PathsConfig(BaseModel):
    """Configuration for file paths."""

    # Transient download target, removed once page discovery stops
    document_path: Path = Field(default=Path("file.pdf"))

    @field_validator("document_path")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory."""
        return Path(v).expanduser()


class DownloadConfig(BaseModel):
    """Configuration for fetching the source document."""

    # None disables the timeout entirely
    timeout_seconds: float | None = Field(default=None, gt=0)
    chunk_size: int = Field(default=128 * 1024, ge=1024)


class ExtractionConfig(BaseModel):
    """Configuration for page text extraction."""

    pdftotext_path: str = Field(default="pdftotext")
    layout: bool = Field(default=True)


class TranslationConfig(BaseModel):
    """Configuration for translation."""

    model: str = Field(default="gpt-3.5-turbo")
    base_url: str = Field(default="https://api.openai.com/v1")
    api_key: str = Field(default="")
    timeout_seconds: float | None = Field(default=None, gt=0)


class ProcessingConfig(BaseModel):
    """Configuration for the dispatch loop."""

    # Stop discovery after this many pages; None relies on extraction failure alone
    max_pages: int | None = Field(default=None, ge=1)
    # Upper bound on in-flight translation requests; None is unbounded
    max_concurrent_pages: int | None = Field(default=None, ge=1)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="WARNING")
    file: Path | None = Field(default=None)
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)

    @field_validator("level")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="",  # No prefix for simpler env vars
        env_nested_delimiter="__",
        extra="ignore",
    )

    paths: PathsConfig = Field(default_factory=PathsConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallback for the API key."""
        super().__init__(**data)
        if not self.translation.api_key:
            self.translation.api_key = os.getenv(CREDENTIAL_ENV_VAR, "")

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            env_var = value[2:-1]
            result[key] = os.getenv(env_var, "")
        elif isinstance(value, list):
            result[key] = [
                _substitute_env_vars(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, looks for config.yaml in current directory.

    Returns:
        Settings instance with merged YAML and environment configurations.
    """
    if path is None:
        default_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(".translate-pdf.yaml"),
        ]
        for p in default_paths:
            if p.exists():
                path = p
                break

    if path is not None:
        return Settings.from_yaml(path)

    return Settings()


def setup_logging(config: LoggingConfig) -> None:
    """Configure the package logger. Log records go to stderr, never stdout."""
    logger = logging.getLogger("pdf_translate_ai")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(config.format)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if config.file is not None:
        config.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.setLevel(config.level)
    logger.propagate = False

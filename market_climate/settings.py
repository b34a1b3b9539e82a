"""
Market Climate Settings
=======================

12-Factor configuration using a dataclass.

Settings are loaded from:
1. Environment variables (highest priority)
2. .env file (if exists)
3. Default values (fallback)

Usage:
    from market_climate.settings import get_settings

    settings = get_settings()
    source = settings.data_source
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .pipeline.config import PipelineConfig, load_pipeline_config
from .services.errors import ConfigError

load_dotenv()

TRUTHY = ("true", "1", "yes")


@dataclass
class Settings:
    """
    Runtime configuration for ingestion, logging and the CLI.

    Pipeline semantics (columns, ordering, exclusions) live in a YAML file
    referenced by ``pipeline_config_path``, not in environment variables.
    """

    # ===== Input =====
    data_source: str = "data.csv"
    pipeline_config_path: Optional[Path] = None
    fetch_timeout: float = 30.0

    # ===== Logs =====
    # No directory means console-only logging
    logs_dir: Optional[Path] = None
    log_level: str = "INFO"
    debug: bool = False

    def __post_init__(self):
        """Initialize settings from the environment."""
        self._load_from_env()
        self._validate()

    def _load_from_env(self):
        """Load settings from environment variables."""
        if source := os.getenv("MARKET_CLIMATE_DATA_SOURCE"):
            self.data_source = source
        if config_path := os.getenv("MARKET_CLIMATE_CONFIG"):
            self.pipeline_config_path = Path(config_path)
        if timeout := os.getenv("MARKET_CLIMATE_FETCH_TIMEOUT"):
            try:
                self.fetch_timeout = float(timeout)
            except ValueError:
                raise ConfigError(
                    f"MARKET_CLIMATE_FETCH_TIMEOUT must be a number, got {timeout!r}"
                ) from None
        if logs_dir := os.getenv("MARKET_CLIMATE_LOGS_DIR"):
            self.logs_dir = Path(logs_dir)
        if level := os.getenv("LOG_LEVEL"):
            self.log_level = level.upper()
        if debug := os.getenv("MARKET_CLIMATE_DEBUG"):
            self.debug = debug.lower() in TRUTHY

    def _validate(self):
        if self.fetch_timeout <= 0:
            raise ConfigError(f"fetch_timeout must be > 0, got {self.fetch_timeout}")

    def pipeline_config(self) -> PipelineConfig:
        """PipelineConfig from the configured YAML file, or the defaults."""
        if self.pipeline_config_path is None:
            return PipelineConfig()
        return load_pipeline_config(self.pipeline_config_path)


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get singleton settings instance.

    Returns:
        Settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reset_settings():
    """
    Reset settings (for testing).

    WARNING: Only use in tests!
    """
    global _settings
    _settings = None

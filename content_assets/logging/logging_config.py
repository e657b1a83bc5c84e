"""Centralized logging configuration for Content Assets.

@public

This module provides logging configuration management that integrates
with Prefect's logging system, so stores embedded in Prefect flows log
through the run logger. It supports both YAML-based configuration and
programmatic setup with sensible defaults.

Usage:
    >>> from content_assets.logging import get_pipeline_logger
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Store opened")

Environment variables:
    CONTENT_ASSETS_LOGGING_CONFIG: Path to custom logging.yml
    CONTENT_ASSETS_LOG_LEVEL: Default log level (INFO, DEBUG, etc.)
    PREFECT_LOGGING_LEVEL: Prefect's logging level
    PREFECT_LOGGING_SETTINGS_PATH: Alternative config path
"""

import logging.config
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from prefect.logging import get_logger

# Default log levels for different components
DEFAULT_LOG_LEVELS = {
    "content_assets": "INFO",
    "content_assets.stores": "INFO",
}


class LoggingConfig:
    """Manages logging configuration for the library.

    @public

    Attributes:
        config_path: Path to YAML configuration file.
        _config: Cached configuration dictionary.

    Configuration precedence:
        1. Explicit config_path parameter
        2. CONTENT_ASSETS_LOGGING_CONFIG environment variable
        3. PREFECT_LOGGING_SETTINGS_PATH environment variable
        4. Default configuration

    Example:
        >>> config = LoggingConfig()
        >>> config.apply()
        >>>
        >>> config = LoggingConfig(Path("custom_logging.yml"))
        >>> config.apply()
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize logging configuration.

        Args:
            config_path: Optional path to YAML configuration file.
                        If None, checks environment variables and
                        falls back to default configuration.
        """
        self.config_path = config_path or self._get_default_config_path()
        self._config: Optional[Dict[str, Any]] = None

    @staticmethod
    def _get_default_config_path() -> Optional[Path]:
        """Get default config path from environment variables.

        Returns:
            Path to configuration file if found in environment,
            None otherwise (will use default configuration).
        """
        if env_path := os.environ.get("CONTENT_ASSETS_LOGGING_CONFIG"):
            return Path(env_path)

        if prefect_path := os.environ.get("PREFECT_LOGGING_SETTINGS_PATH"):
            return Path(prefect_path)

        return None

    def load_config(self) -> Dict[str, Any]:
        """Load logging configuration from file or defaults.

        Returns:
            Dictionary in logging.config.dictConfig format. Cached after
            the first load; create a new LoggingConfig to reload from disk.
        """
        if self._config is None:
            if self.config_path and self.config_path.exists():
                with open(self.config_path, "r") as f:
                    self._config = yaml.safe_load(f)
            else:
                self._config = self._get_default_config()
        assert self._config is not None
        return self._config

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default logging configuration.

        Default format:
            "HH:MM:SS.mmm | LEVEL | logger.name - message"

        Console output goes to stderr so the CLI can stream asset bytes
        on stdout.
        """
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s.%(msecs)03d | %(levelname)-7s | %(name)s - %(message)s",
                    "datefmt": "%H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "content_assets": {
                    "level": os.environ.get("CONTENT_ASSETS_LOG_LEVEL", "INFO"),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
            "root": {
                "level": "WARNING",
                "handlers": ["console"],
            },
        }

    def apply(self):
        """Apply the logging configuration to Python's logging system.

        Also sets PREFECT_LOGGING_LEVEL when the configuration defines a
        "prefect" logger.
        """
        config = self.load_config()
        logging.config.dictConfig(config)

        if "prefect" in config.get("loggers", {}):
            prefect_level = config["loggers"]["prefect"].get("level", "INFO")
            os.environ.setdefault("PREFECT_LOGGING_LEVEL", prefect_level)


# Global configuration instance
_logging_config: Optional[LoggingConfig] = None


def setup_logging(config_path: Optional[Path] = None, level: Optional[str] = None):
    """Setup logging for the Content Assets library.

    @public

    Args:
        config_path: Optional path to YAML logging configuration file.
                    If None, uses environment variables or defaults.
        level: Optional log level override (INFO, DEBUG, WARNING, etc.).
              This overrides any level set in configuration or environment.

    Example:
        >>> setup_logging()
        >>> setup_logging(level="DEBUG")
        >>> setup_logging(Path("custom.yml"), level="WARNING")
    """
    global _logging_config

    _logging_config = LoggingConfig(config_path)
    _logging_config.apply()

    if level:
        for logger_name in DEFAULT_LOG_LEVELS:
            logger = get_logger(logger_name)
            logger.setLevel(level)

        os.environ["PREFECT_LOGGING_LEVEL"] = level


def get_pipeline_logger(name: str):
    """Get a logger for library components.

    @public

    Returns a Prefect-integrated logger, initializing logging on first use.

    Args:
        name: Logger name, typically __name__.

    Example:
        >>> logger = get_pipeline_logger(__name__)
        >>> logger.debug("Committed %s", digest)
    """
    if _logging_config is None:
        setup_logging()

    return get_logger(name)

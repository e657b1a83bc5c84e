"""Logging infrastructure for Content Assets.

@public

Provides Prefect-integrated logging configured from YAML or built-in defaults.

Key components:
    get_pipeline_logger: Factory function for creating library loggers
    setup_logging: Initialize logging configuration
    LoggingConfig: Configuration class for logging settings

Example:
    >>> from content_assets.logging import get_pipeline_logger
    >>>
    >>> logger = get_pipeline_logger(__name__)
    >>> logger.info("Store opened")

Note:
    Library modules use get_pipeline_logger() rather than logging.getLogger()
    for consistent Prefect integration.
"""

from .logging_config import LoggingConfig, get_pipeline_logger, setup_logging

__all__ = [
    "LoggingConfig",
    "setup_logging",
    "get_pipeline_logger",
]

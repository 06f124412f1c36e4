"""
Logging configuration utilities for glassprofile.

This module provides pre-configured logging setups for different environments.
"""
import os
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError
from .logging import initialize_logging, LogManager


class LoggingPresets:
    """Pre-configured logging setups for different environments."""

    @staticmethod
    def development(log_file: Optional[str] = None) -> LogManager:
        """
        Development logging: verbose JSON output.

        Args:
            log_file: Optional log file path

        Returns:
            Configured log manager
        """
        return initialize_logging(
            log_level="DEBUG",
            log_format="json",
            log_file=log_file,
            max_bytes=5 * 1024 * 1024,  # 5MB
            backup_count=3,
            force=True
        )

    @staticmethod
    def production(log_file: Optional[str] = None) -> LogManager:
        """
        Production logging: INFO and above, larger rotation window.

        Args:
            log_file: Optional log file path

        Returns:
            Configured log manager
        """
        return initialize_logging(
            log_level="INFO",
            log_format="json",
            log_file=log_file,
            max_bytes=50 * 1024 * 1024,  # 50MB
            backup_count=10,
            force=True
        )

    @staticmethod
    def testing(log_file: Optional[str] = None) -> LogManager:
        """
        Testing logging: warnings only, plain text.

        Args:
            log_file: Optional log file path

        Returns:
            Configured log manager
        """
        return initialize_logging(
            log_level="WARNING",
            log_format="text",
            log_file=log_file,
            max_bytes=1 * 1024 * 1024,  # 1MB
            backup_count=1,
            force=True
        )


def _int_from_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", e)


def configure_from_environment() -> LogManager:
    """
    Configure logging based on environment variables.

    Environment variables:
    - GLASSPROFILE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - GLASSPROFILE_LOG_FORMAT: Log format (json, text)
    - GLASSPROFILE_LOG_FILE: Log file path
    - GLASSPROFILE_LOG_MAX_BYTES: Max file size in bytes
    - GLASSPROFILE_LOG_BACKUP_COUNT: Number of backup files

    Returns:
        Configured log manager

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    log_level = os.getenv("GLASSPROFILE_LOG_LEVEL", "INFO").upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(f"Unknown log level: {log_level!r}")

    log_format = os.getenv("GLASSPROFILE_LOG_FORMAT", "json").lower()
    if log_format not in ("json", "text"):
        raise ConfigurationError(f"Unknown log format: {log_format!r}")

    return initialize_logging(
        log_level=log_level,
        log_format=log_format,
        log_file=os.getenv("GLASSPROFILE_LOG_FILE"),
        max_bytes=_int_from_env("GLASSPROFILE_LOG_MAX_BYTES", "10485760"),  # 10MB default
        backup_count=_int_from_env("GLASSPROFILE_LOG_BACKUP_COUNT", "5"),
        force=True
    )


def get_logging_config() -> Dict[str, Any]:
    """
    Get current logging configuration.

    Returns:
        Dictionary with current logging configuration
    """
    from . import logging as glass_logging

    manager = glass_logging._log_manager
    if manager is None:
        return {"status": "not_initialized"}

    return {
        "status": "initialized",
        "log_level": manager.log_level,
        "log_format": manager.log_format,
        "log_file": manager.log_file,
        "max_bytes": manager.max_bytes,
        "backup_count": manager.backup_count,
    }

"""glassprofile utility modules."""

from .logging import (
    get_logger,
    get_adapter,
    initialize_logging
)
from .logging_config import (
    LoggingPresets,
    configure_from_environment,
    get_logging_config
)
from .profile_settings import (
    EmptyAveragePolicy,
    ProfileSettings,
    get_default_settings,
    set_default_settings
)

__all__ = [
    # Logging functions
    "get_logger",
    "get_adapter",
    "initialize_logging",
    # Logging configuration
    "LoggingPresets",
    "configure_from_environment",
    "get_logging_config",
    # Profile settings
    "EmptyAveragePolicy",
    "ProfileSettings",
    "get_default_settings",
    "set_default_settings"
]

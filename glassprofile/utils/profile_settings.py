"""
Profile Settings
================

Behavioural settings for method profiles and the process-wide defaults.
"""

import os
import threading
from enum import Enum
from typing import Optional, Union

import attrs

from ..exceptions import ConfigurationError


class EmptyAveragePolicy(str, Enum):
    """What a profile reports as its average before any call was recorded."""
    ZERO = "zero"
    NAN = "nan"
    RAISE = "raise"


# Default settings
DEFAULT_EMPTY_AVERAGE_POLICY = EmptyAveragePolicy.ZERO
DEFAULT_WARN_ON_NEGATIVE_DURATION = True

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _to_policy(value: Union[str, EmptyAveragePolicy]) -> EmptyAveragePolicy:
    if isinstance(value, EmptyAveragePolicy):
        return value
    try:
        return EmptyAveragePolicy(str(value).strip().lower())
    except ValueError as e:
        allowed = ", ".join(p.value for p in EmptyAveragePolicy)
        raise ConfigurationError(
            f"Invalid empty average policy {value!r} (expected one of: {allowed})", e
        )


def _to_flag(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


@attrs.define(frozen=True)
class ProfileSettings:
    """Behavioural settings shared by method profiles."""

    empty_average_policy: EmptyAveragePolicy = attrs.field(
        default=DEFAULT_EMPTY_AVERAGE_POLICY, converter=_to_policy
    )
    warn_on_negative_duration: bool = attrs.field(
        default=DEFAULT_WARN_ON_NEGATIVE_DURATION,
        validator=attrs.validators.instance_of(bool)
    )

    @classmethod
    def from_environment(cls) -> "ProfileSettings":
        """
        Build settings from environment variables.

        Environment variables:
        - GLASSPROFILE_EMPTY_AVERAGE_POLICY: zero, nan or raise
        - GLASSPROFILE_WARN_NEGATIVE_DURATION: Log negative durations (true/false)

        Unset variables fall back to the module defaults.
        """
        policy = os.getenv("GLASSPROFILE_EMPTY_AVERAGE_POLICY", DEFAULT_EMPTY_AVERAGE_POLICY.value)
        warn_raw = os.getenv("GLASSPROFILE_WARN_NEGATIVE_DURATION")
        warn = (
            DEFAULT_WARN_ON_NEGATIVE_DURATION if warn_raw is None
            else _to_flag("GLASSPROFILE_WARN_NEGATIVE_DURATION", warn_raw)
        )
        return cls(empty_average_policy=policy, warn_on_negative_duration=warn)


_default_settings: Optional[ProfileSettings] = None
_default_settings_lock = threading.Lock()


def get_default_settings() -> ProfileSettings:
    """
    Get the process-wide default settings.

    Returns:
        Settings used by profiles created without explicit settings
    """
    global _default_settings
    with _default_settings_lock:
        if _default_settings is None:
            _default_settings = ProfileSettings()
        return _default_settings


def set_default_settings(settings: Optional[ProfileSettings]) -> None:
    """Replace the process-wide default settings; ``None`` restores the built-in defaults."""
    global _default_settings
    if settings is not None and not isinstance(settings, ProfileSettings):
        raise ConfigurationError(f"Expected ProfileSettings, got {type(settings).__name__}")
    with _default_settings_lock:
        _default_settings = settings

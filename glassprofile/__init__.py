"""
glassprofile - Method Call Profiling Records
============================================

Per-method call counters and cumulative timings, ranked by total time.
"""

__version__ = "0.1.0"

from .exceptions import (
    GlassProfileError,
    ConfigurationError,
    EmptyProfileError,
    SignatureError
)
from .models import (
    MethodProfile,
    MethodSignature,
    compare_profiles,
    rank_profiles,
    total_time_key
)
from .utils.profile_settings import (
    EmptyAveragePolicy,
    ProfileSettings,
    get_default_settings,
    set_default_settings
)

__all__ = [
    "MethodProfile",
    "MethodSignature",
    "compare_profiles",
    "rank_profiles",
    "total_time_key",
    "EmptyAveragePolicy",
    "ProfileSettings",
    "get_default_settings",
    "set_default_settings",
    "GlassProfileError",
    "ConfigurationError",
    "EmptyProfileError",
    "SignatureError"
]

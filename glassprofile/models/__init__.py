"""
Models package for glassprofile.
"""

from .method_profile import MethodProfile, compare_profiles, rank_profiles, total_time_key
from .signature import MethodSignature

__all__ = [
    "MethodProfile",
    "MethodSignature",
    "compare_profiles",
    "rank_profiles",
    "total_time_key"
]

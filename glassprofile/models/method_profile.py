"""
Method Profile
==============

Per-method call statistics: how often a method was called and how many
milliseconds were spent in it in total. Profiles rank by total time,
longest first.
"""

import threading
from typing import Any, Dict, Hashable, Iterable, List, Optional, Tuple

import attrs

from ..exceptions import EmptyProfileError
from ..utils.logging import get_logger
from ..utils.profile_settings import EmptyAveragePolicy, ProfileSettings, get_default_settings

logger = get_logger(__name__)


@attrs.define(eq=False)
class MethodProfile:
    """
    Call count and cumulative time for one method signature.

    Counters are updated under a per-instance lock, so a profile may be
    shared by every thread that calls the profiled method.
    """

    _signature: Hashable = attrs.field()
    settings: Optional[ProfileSettings] = attrs.field(default=None, kw_only=True)
    _call_count: int = attrs.field(default=0, init=False)
    _total_time: int = attrs.field(default=0, init=False)  # milliseconds
    _lock: threading.Lock = attrs.field(factory=threading.Lock, init=False, repr=False)

    @property
    def signature(self) -> Hashable:
        return self._signature

    @property
    def call_count(self) -> int:
        with self._lock:
            return self._call_count

    @property
    def total_time(self) -> int:
        """Total time spent in the method, in milliseconds."""
        with self._lock:
            return self._total_time

    def snapshot(self) -> Tuple[int, int]:
        """Return ``(call_count, total_time)`` read as one consistent pair."""
        with self._lock:
            return self._call_count, self._total_time

    def record_call(self, duration_ms: int) -> None:
        """
        Count one call to the method and add the time spent in it.

        Negative durations are accepted as given; they are logged as a
        warning unless the settings disable it.

        Args:
            duration_ms: Time spent in the call, in milliseconds
        """
        with self._lock:
            # Both counters change together or not at all.
            new_total = self._total_time + duration_ms
            self._total_time = new_total
            self._call_count += 1

        if duration_ms < 0 and self._settings().warn_on_negative_duration:
            logger.warning(
                "Negative duration recorded",
                extra={'extra_fields': {
                    'event_type': 'negative_duration',
                    'signature': str(self._signature),
                    'duration_ms': duration_ms,
                }}
            )

    def average_time_per_call(self) -> float:
        """
        Average milliseconds per call.

        Before any call is recorded the result depends on the configured
        :class:`EmptyAveragePolicy`: ``0.0`` (default), ``nan``, or
        :class:`EmptyProfileError`.
        """
        call_count, total_time = self.snapshot()
        if call_count:
            return total_time / call_count

        policy = self._settings().empty_average_policy
        if policy is EmptyAveragePolicy.RAISE:
            raise EmptyProfileError("No calls recorded", signature=self._signature)
        if policy is EmptyAveragePolicy.NAN:
            return float("nan")
        return 0.0

    def compare_to(self, other: "MethodProfile") -> int:
        """
        Compare by total time, descending.

        Returns:
            -1 if this profile spent more time than ``other`` (ranks first),
            1 if it spent less, 0 if the totals are equal
        """
        if not isinstance(other, MethodProfile):
            raise TypeError(f"Cannot compare MethodProfile with {type(other).__name__}")
        # Each total is read under its own lock; never hold both.
        mine = self.total_time
        theirs = other.total_time
        if mine > theirs:
            return -1
        if mine < theirs:
            return 1
        return 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, MethodProfile):
            return NotImplemented
        return self.compare_to(other) < 0

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, MethodProfile):
            return NotImplemented
        return self.compare_to(other) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization; the average is ``None`` before any call."""
        call_count, total_time = self.snapshot()
        return {
            "signature": str(self._signature),
            "call_count": call_count,
            "total_time_ms": total_time,
            "average_time_per_call_ms": total_time / call_count if call_count else None,
        }

    def _settings(self) -> ProfileSettings:
        return self.settings if self.settings is not None else get_default_settings()


def compare_profiles(first: MethodProfile, second: MethodProfile) -> int:
    """Comparison function for ``functools.cmp_to_key``; longest total time first."""
    return first.compare_to(second)


def total_time_key(profile: MethodProfile) -> int:
    """Sort key placing the profile with the largest total time first."""
    return -profile.total_time


def rank_profiles(profiles: Iterable[MethodProfile]) -> List[MethodProfile]:
    """
    Return the profiles ordered by total time, longest first.

    The sort is stable: profiles with equal totals keep their input order.
    """
    return sorted(profiles, key=total_time_key)

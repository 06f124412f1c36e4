#!/usr/bin/env python3
"""
Minimal glassprofile Demo
=========================

Times a few functions by hand, records the durations in method profiles
and prints them ranked by total time.
"""

import time

from glassprofile import MethodProfile, MethodSignature, rank_profiles
from glassprofile.utils.logging_config import LoggingPresets


def tokenize(text: str):
    return text.split()


def count_words(text: str):
    return len(tokenize(text))


def slow_join(words: list):
    time.sleep(0.002)
    return " ".join(words)


def timed(profile: MethodProfile, func, *args):
    start = time.perf_counter()
    try:
        return func(*args)
    finally:
        profile.record_call(int((time.perf_counter() - start) * 1000))


def minimal_demo():
    """Profile three functions and print the ranking."""
    print("glassprofile minimal demo")
    print("=" * 40)

    LoggingPresets.development()

    profiles = {
        func: MethodProfile(MethodSignature.from_callable(func))
        for func in (tokenize, count_words, slow_join)
    }

    text = "the quick brown fox jumps over the lazy dog " * 200
    for _ in range(50):
        words = timed(profiles[tokenize], tokenize, text)
        timed(profiles[count_words], count_words, text)
        timed(profiles[slow_join], slow_join, words)

    print(f"{'method':<50} {'calls':>6} {'total ms':>9} {'avg ms':>8}")
    for profile in rank_profiles(profiles.values()):
        print(
            f"{profile.signature.short_string():<50} {profile.call_count:>6} "
            f"{profile.total_time:>9} {profile.average_time_per_call():>8.2f}"
        )

    # No calls yet: the average falls back to 0.0 by default
    idle = MethodProfile(MethodSignature("demo", "never_called"))
    print(f"\n{idle.signature}: average {idle.average_time_per_call()}")


if __name__ == "__main__":
    minimal_demo()

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Timing conventions for transform buffers.

Timestamps are integer nanoseconds. A query time of ``TIME_LATEST_NS``
requests the most recent data available instead of a specific instant.
"""

from __future__ import annotations

import math


class TimeBaseError(Exception):
    """Raised when time conversions or validation fail."""


# Nanoseconds per second for time conversions
NS_PER_S: int = 1_000_000_000

# Sentinel query time meaning "most recent available"
TIME_LATEST_NS: int = 0


def sec_to_ns(t_sec: float) -> int:
    """Convert seconds to integer nanoseconds with deterministic rounding.

    Rounds to the nearest integer nanosecond using Python's built-in round
    (ties-to-even) to keep conversion stable across runs.
    """
    if not math.isfinite(t_sec):
        raise TimeBaseError("Seconds must be finite")
    if t_sec < 0.0:
        raise TimeBaseError("Seconds must be non-negative")
    return int(round(t_sec * NS_PER_S))


def ns_to_sec(t_ns: int) -> float:
    """Convert integer nanoseconds to seconds."""
    if t_ns < 0:
        raise TimeBaseError("Nanoseconds must be non-negative")
    return float(t_ns) / NS_PER_S


def stamp_to_ns(sec: int, nanosec: int) -> int:
    """Convert a (sec, nanosec) stamp to integer nanoseconds."""
    if sec < 0:
        raise TimeBaseError("Stamp seconds must be non-negative")
    if not 0 <= nanosec < NS_PER_S:
        raise TimeBaseError("Stamp nanoseconds must be in [0, 1e9)")
    return sec * NS_PER_S + nanosec


def ns_to_stamp(t_ns: int) -> tuple[int, int]:
    """Convert integer nanoseconds to a (sec, nanosec) stamp."""
    if t_ns < 0:
        raise TimeBaseError("Nanoseconds must be non-negative")
    sec, nanosec = divmod(t_ns, NS_PER_S)
    return sec, nanosec


def validate_t_ns(t_ns: int, name: str = "t_ns") -> int:
    """Return ``t_ns`` after checking it is a non-negative int."""
    if not isinstance(t_ns, int) or isinstance(t_ns, bool):
        raise TimeBaseError(f"{name} must be an int")
    if t_ns < 0:
        raise TimeBaseError(f"{name} must be non-negative")
    return t_ns


def is_latest(t_ns: int) -> bool:
    """Return True if the query time requests the newest data."""
    return t_ns == TIME_LATEST_NS

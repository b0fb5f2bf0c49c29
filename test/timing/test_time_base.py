################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for time conversion helpers."""

from __future__ import annotations

import pytest

from oasis_tf.timing.time_base import TIME_LATEST_NS
from oasis_tf.timing.time_base import TimeBaseError
from oasis_tf.timing.time_base import is_latest
from oasis_tf.timing.time_base import ns_to_sec
from oasis_tf.timing.time_base import ns_to_stamp
from oasis_tf.timing.time_base import sec_to_ns
from oasis_tf.timing.time_base import stamp_to_ns
from oasis_tf.timing.time_base import validate_t_ns


def test_sec_ns_conversion() -> None:
    """Checks seconds and nanoseconds convert both ways."""
    assert sec_to_ns(1.5) == 1_500_000_000
    assert ns_to_sec(2_250_000_000) == 2.25


def test_stamp_conversion() -> None:
    """Checks ROS-style stamps convert both ways."""
    assert stamp_to_ns(3, 45) == 3_000_000_045
    assert ns_to_stamp(3_000_000_045) == (3, 45)


def test_rejects_invalid_values() -> None:
    """Checks negative or non-finite values are rejected."""
    with pytest.raises(TimeBaseError):
        sec_to_ns(-1.0)
    with pytest.raises(TimeBaseError):
        sec_to_ns(float("nan"))
    with pytest.raises(TimeBaseError):
        stamp_to_ns(1, 1_000_000_000)
    with pytest.raises(TimeBaseError):
        validate_t_ns(-5)
    with pytest.raises(TimeBaseError):
        validate_t_ns(1.0)  # type: ignore[arg-type]
    with pytest.raises(TimeBaseError):
        validate_t_ns(True)


def test_latest_sentinel() -> None:
    """Checks time zero requests the latest data."""
    assert TIME_LATEST_NS == 0
    assert is_latest(0)
    assert not is_latest(1)

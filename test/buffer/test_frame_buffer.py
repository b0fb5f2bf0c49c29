################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the per-edge frame buffer."""

from __future__ import annotations

import math

import numpy as np
import pytest

from oasis_tf.buffer.frame_buffer import FrameBuffer
from oasis_tf.math_utils.quat import Quaternion
from oasis_tf.tf_errors import ExtrapolationError
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_errors import LookupInFutureError
from oasis_tf.tf_errors import LookupInPastError
from oasis_tf.tf_errors import NoDataError
from oasis_tf.tf_errors import OutOfOrderError
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.time_base import TIME_LATEST_NS
from oasis_tf.timing.time_base import sec_to_ns


DURATION_NS: int = sec_to_ns(10.0)


def _record(
    t_sec: float,
    x: float = 0.0,
    yaw_rad: float = 0.0,
    parent: str = "base",
    child: str = "arm",
) -> TransformRecord:
    return TransformRecord(
        t_ns=sec_to_ns(t_sec),
        parent_frame=parent,
        child_frame=child,
        translation_m=np.array([x, 0.0, 0.0]),
        rotation=Quaternion.from_axis_angle([0.0, 0.0, 1.0], yaw_rad),
    )


def _buffer(is_static: bool = False) -> FrameBuffer:
    return FrameBuffer(
        "base", "arm", max_storage_duration_ns=DURATION_NS, is_static=is_static
    )


def test_empty_buffer_has_no_data() -> None:
    """Querying an empty buffer raises NoDataError."""
    buffer: FrameBuffer = _buffer()
    assert buffer.is_empty()
    with pytest.raises(NoDataError):
        buffer.query(sec_to_ns(1.0))
    with pytest.raises(NoDataError):
        buffer.query(TIME_LATEST_NS)


def test_exact_match_returns_stored_record() -> None:
    """A query at a stored stamp returns that record without interpolation."""
    buffer: FrameBuffer = _buffer()
    first: TransformRecord = _record(1.0, x=1.0, yaw_rad=0.1)
    second: TransformRecord = _record(2.0, x=2.0, yaw_rad=0.7)
    buffer.insert(first)
    buffer.insert(second)

    assert buffer.query(first.t_ns) is first
    assert buffer.query(second.t_ns) is second


def test_linear_translation_interpolation() -> None:
    """Translation between two records is linearly interpolated."""
    buffer: FrameBuffer = _buffer()
    buffer.insert(_record(1.0, x=1.0))
    buffer.insert(_record(2.0, x=2.0))

    result: TransformRecord = buffer.query(sec_to_ns(1.5))
    assert result.t_ns == sec_to_ns(1.5)
    assert np.allclose(result.translation_m, [1.5, 0.0, 0.0])
    assert result.parent_frame == "base"
    assert result.child_frame == "arm"


def test_rotation_interpolation_is_proportional() -> None:
    """Angular distance to each endpoint is proportional to the time fraction."""
    buffer: FrameBuffer = _buffer()
    start: TransformRecord = _record(1.0, yaw_rad=0.0)
    end: TransformRecord = _record(2.0, yaw_rad=1.2)
    buffer.insert(start)
    buffer.insert(end)

    result: TransformRecord = buffer.query(sec_to_ns(1.25))
    assert math.isclose(start.rotation.angle_to(result.rotation), 0.3, abs_tol=1e-9)
    assert math.isclose(result.rotation.angle_to(end.rotation), 0.9, abs_tol=1e-9)


def test_extrapolation_errors() -> None:
    """Queries outside the stored range raise past or future errors."""
    buffer: FrameBuffer = _buffer()
    buffer.insert(_record(1.0))
    buffer.insert(_record(2.0))

    with pytest.raises(LookupInPastError) as past:
        buffer.query(sec_to_ns(0.5))
    assert past.value.oldest_ns == sec_to_ns(1.0)
    assert past.value.newest_ns == sec_to_ns(2.0)

    with pytest.raises(LookupInFutureError) as future:
        buffer.query(sec_to_ns(2.5))
    assert future.value.t_ns == sec_to_ns(2.5)


def test_single_record_exact_and_future() -> None:
    """A single record answers its own stamp and rejects later times."""
    buffer: FrameBuffer = _buffer()
    record: TransformRecord = _record(5.0, x=3.0)
    buffer.insert(record)

    assert buffer.query(sec_to_ns(5.0)) is record
    with pytest.raises(ExtrapolationError):
        buffer.query(sec_to_ns(6.0))


def test_latest_returns_newest() -> None:
    """Time zero returns the newest stored record."""
    buffer: FrameBuffer = _buffer()
    buffer.insert(_record(1.0, x=1.0))
    newest: TransformRecord = _record(3.0, x=3.0)
    buffer.insert(newest)
    assert buffer.query(TIME_LATEST_NS) is newest


def test_too_old_insert_is_rejected() -> None:
    """Records older than the retention window leave the buffer unchanged."""
    buffer: FrameBuffer = _buffer()
    buffer.insert(_record(20.0, x=20.0))
    buffer.insert(_record(25.0, x=25.0))
    before: list[int] = [record.t_ns for record in buffer.records()]

    with pytest.raises(OutOfOrderError):
        buffer.insert(_record(14.0, x=14.0))

    assert [record.t_ns for record in buffer.records()] == before


def test_out_of_order_within_window_is_sorted() -> None:
    """Late records inside the window are stored in time order."""
    buffer: FrameBuffer = _buffer()
    buffer.insert(_record(1.0, x=1.0))
    buffer.insert(_record(3.0, x=3.0))
    buffer.insert(_record(2.0, x=2.0))

    stamps: list[int] = [record.t_ns for record in buffer.records()]
    assert stamps == sorted(stamps)
    assert np.allclose(buffer.query(sec_to_ns(1.5)).translation_m, [1.5, 0.0, 0.0])
    assert np.allclose(buffer.query(sec_to_ns(2.5)).translation_m, [2.5, 0.0, 0.0])


def test_duplicate_stamps() -> None:
    """Identical duplicates are ignored and conflicting ones rejected."""
    buffer: FrameBuffer = _buffer()
    assert buffer.insert(_record(1.0, x=1.0))
    assert not buffer.insert(_record(1.0, x=1.0))
    assert len(buffer) == 1

    with pytest.raises(OutOfOrderError):
        buffer.insert(_record(1.0, x=9.0))
    assert len(buffer) == 1


def test_eviction_keeps_retention_window() -> None:
    """Only records older than newest minus the duration are evicted."""
    buffer: FrameBuffer = _buffer()
    for t_sec in (0.0, 5.0, 10.0, 15.0):
        buffer.insert(_record(t_sec, x=t_sec))

    # Cutoff is 5.0 s: the record exactly at the cutoff is kept
    assert buffer.oldest_time_ns() == sec_to_ns(5.0)
    assert buffer.newest_time_ns() == sec_to_ns(15.0)
    assert len(buffer) == 3

    with pytest.raises(LookupInPastError):
        buffer.query(sec_to_ns(2.0))


def test_static_buffer_ignores_time() -> None:
    """A static buffer answers every query time with its single record."""
    buffer: FrameBuffer = _buffer(is_static=True)
    first: TransformRecord = _record(1.0, x=1.0)
    buffer.insert(first)
    assert buffer.query(sec_to_ns(100.0)) is first
    assert buffer.query(0) is first

    replacement: TransformRecord = _record(0.5, x=2.0)
    buffer.insert(replacement)
    assert len(buffer) == 1
    assert buffer.query(sec_to_ns(3.0)) is replacement


def test_insert_rejects_other_edge() -> None:
    """Records for a different edge are rejected."""
    buffer: FrameBuffer = _buffer()
    with pytest.raises(InvalidRecordError):
        buffer.insert(_record(1.0, parent="map", child="arm"))


def test_has_valid_transform_and_clear() -> None:
    """Availability probes track the stored range and clearing empties it."""
    buffer: FrameBuffer = _buffer()
    assert not buffer.has_valid_transform(TIME_LATEST_NS)
    buffer.insert(_record(1.0))
    buffer.insert(_record(2.0))
    assert buffer.has_valid_transform(sec_to_ns(1.5))
    assert not buffer.has_valid_transform(sec_to_ns(2.5))

    buffer.clear()
    assert buffer.is_empty()
    assert buffer.oldest_time_ns() is None
    assert buffer.newest_time_ns() is None

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""
Time-ordered transform history for a single parent/child edge
"""

from __future__ import annotations

from bisect import bisect_left
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from oasis_tf.math_utils.quat import Quaternion
from oasis_tf.math_utils.units import NumericConstants
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_errors import LookupInFutureError
from oasis_tf.tf_errors import LookupInPastError
from oasis_tf.tf_errors import NoDataError
from oasis_tf.tf_errors import OutOfOrderError
from oasis_tf.tf_types.transform_record import TransformRecord
from oasis_tf.timing.rw_lock import ReadWriteLock
from oasis_tf.timing.time_base import is_latest


class FrameBuffer:
    """
    Bounded history of transforms for one (parent, child) edge

    Dynamic buffers keep records sorted by timestamp and retain everything
    within ``max_storage_duration_ns`` of the newest record. Static buffers
    hold a single record that answers every query time.
    """

    def __init__(
        self,
        parent_frame: str,
        child_frame: str,
        *,
        max_storage_duration_ns: int,
        is_static: bool = False,
        slerp_dot_threshold: float = NumericConstants.SLERP_DOT_THRESHOLD,
    ) -> None:
        if max_storage_duration_ns <= 0:
            raise ValueError("max_storage_duration_ns must be positive")

        self._parent_frame: str = parent_frame
        self._child_frame: str = child_frame
        self._max_storage_duration_ns: int = max_storage_duration_ns
        self._is_static: bool = is_static
        self._slerp_dot_threshold: float = slerp_dot_threshold

        self._lock: ReadWriteLock = ReadWriteLock()
        self._records: list[TransformRecord] = []
        # Parallel to _records for bisection
        self._timestamps: list[int] = []

    @property
    def parent_frame(self) -> str:
        return self._parent_frame

    @property
    def child_frame(self) -> str:
        return self._child_frame

    @property
    def is_static(self) -> bool:
        return self._is_static

    @property
    def max_storage_duration_ns(self) -> int:
        return self._max_storage_duration_ns

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def is_empty(self) -> bool:
        with self._lock.read_locked():
            return not self._records

    def insert(self, record: TransformRecord) -> bool:
        """
        Store a record for this edge and evict expired history

        :return: True if the record was stored, False for an identical
                 duplicate that left the buffer unchanged

        :raises InvalidRecordError: if the record belongs to another edge
        :raises OutOfOrderError: if the record is older than the retention
                                 window or conflicts with a stored stamp
        """
        if (
            record.parent_frame != self._parent_frame
            or record.child_frame != self._child_frame
        ):
            raise InvalidRecordError(
                f"Record {record.parent_frame} -> {record.child_frame} does not "
                f"belong to edge {self._parent_frame} -> {self._child_frame}"
            )

        with self._lock.write_locked():
            if self._is_static:
                self._records = [record]
                self._timestamps = [record.t_ns]
                return True

            if not self._records:
                self._records.append(record)
                self._timestamps.append(record.t_ns)
                return True

            newest_ns: int = self._timestamps[-1]
            cutoff_ns: int = newest_ns - self._max_storage_duration_ns
            if record.t_ns < cutoff_ns:
                raise OutOfOrderError(
                    f"Transform {self._parent_frame} -> {self._child_frame} at "
                    f"{record.t_ns} ns is older than the retention window "
                    f"(newest {newest_ns} ns, cutoff {cutoff_ns} ns)"
                )

            index: int = bisect_left(self._timestamps, record.t_ns)
            if index < len(self._timestamps) and self._timestamps[index] == record.t_ns:
                if self._records[index].same_values(record):
                    return False
                raise OutOfOrderError(
                    f"Transform {self._parent_frame} -> {self._child_frame} at "
                    f"{record.t_ns} ns conflicts with a stored record"
                )

            self._records.insert(index, record)
            self._timestamps.insert(index, record.t_ns)
            self._evict_locked()
            return True

    def query(self, t_ns: int) -> TransformRecord:
        """
        Resolve the transform for this edge at the given time

        :raises NoDataError: if the buffer is empty
        :raises LookupInPastError: if ``t_ns`` precedes the stored history
        :raises LookupInFutureError: if ``t_ns`` follows the stored history
        """
        with self._lock.read_locked():
            if not self._records:
                raise NoDataError(
                    f"No transform stored for {self._parent_frame} -> "
                    f"{self._child_frame}"
                )

            if self._is_static or is_latest(t_ns):
                return self._records[-1]

            oldest_ns: int = self._timestamps[0]
            newest_ns: int = self._timestamps[-1]
            if t_ns < oldest_ns:
                raise LookupInPastError(
                    f"Lookup of {self._parent_frame} -> {self._child_frame} at "
                    f"{t_ns} ns is before the oldest data at {oldest_ns} ns",
                    t_ns=t_ns,
                    oldest_ns=oldest_ns,
                    newest_ns=newest_ns,
                )
            if t_ns > newest_ns:
                raise LookupInFutureError(
                    f"Lookup of {self._parent_frame} -> {self._child_frame} at "
                    f"{t_ns} ns is after the newest data at {newest_ns} ns",
                    t_ns=t_ns,
                    oldest_ns=oldest_ns,
                    newest_ns=newest_ns,
                )

            index: int = bisect_left(self._timestamps, t_ns)
            if self._timestamps[index] == t_ns:
                return self._records[index]

            before: TransformRecord = self._records[index - 1]
            after: TransformRecord = self._records[index]

        return _interpolate(before, after, t_ns, self._slerp_dot_threshold)

    def has_valid_transform(self, t_ns: int) -> bool:
        """Return True if ``query(t_ns)`` would succeed."""
        with self._lock.read_locked():
            if not self._records:
                return False
            if self._is_static or is_latest(t_ns):
                return True
            return self._timestamps[0] <= t_ns <= self._timestamps[-1]

    def oldest_time_ns(self) -> Optional[int]:
        with self._lock.read_locked():
            if not self._timestamps:
                return None
            return self._timestamps[0]

    def newest_time_ns(self) -> Optional[int]:
        with self._lock.read_locked():
            if not self._timestamps:
                return None
            return self._timestamps[-1]

    def records(self) -> list[TransformRecord]:
        """Return a snapshot of the stored records in time order."""
        with self._lock.read_locked():
            return list(self._records)

    def clear(self) -> None:
        with self._lock.write_locked():
            self._records = []
            self._timestamps = []

    def _evict_locked(self) -> None:
        # Records exactly at the cutoff are kept
        cutoff_ns: int = self._timestamps[-1] - self._max_storage_duration_ns
        index: int = bisect_left(self._timestamps, cutoff_ns)
        if index > 0:
            del self._records[:index]
            del self._timestamps[:index]


def _interpolate(
    before: TransformRecord,
    after: TransformRecord,
    t_ns: int,
    slerp_dot_threshold: float,
) -> TransformRecord:
    """Blend two bracketing records at a time strictly between them."""
    fraction: float = float(t_ns - before.t_ns) / float(after.t_ns - before.t_ns)

    translation_m: NDArray[np.float64] = before.translation_m + fraction * (
        after.translation_m - before.translation_m
    )
    rotation: Quaternion = before.rotation.slerp(
        after.rotation, fraction, dot_threshold=slerp_dot_threshold
    )

    return TransformRecord(
        t_ns=t_ns,
        parent_frame=after.parent_frame,
        child_frame=after.child_frame,
        translation_m=translation_m,
        rotation=rotation,
    )

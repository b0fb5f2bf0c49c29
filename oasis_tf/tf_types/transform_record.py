################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Immutable stamped rigid transform between a parent and a child frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from oasis_tf.math_utils.quat import Quaternion
from oasis_tf.math_utils.se3 import SE3
from oasis_tf.math_utils.units import NumericConstants
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.timing.time_base import TimeBaseError
from oasis_tf.timing.time_base import validate_t_ns


@dataclass(frozen=True)
class TransformRecord:
    """Snapshot of the transform from ``child_frame`` to ``parent_frame``.

    The transform maps coordinates expressed in the child frame into the
    parent frame. Both frames are equal only for the identity lookup of a
    frame relative to itself; edges always connect distinct frames.

    Attributes:
        t_ns: Timestamp in nanoseconds
        parent_frame: Parent frame ID
        child_frame: Child frame ID
        translation_m: Child origin in the parent frame, meters, XYZ order
        rotation: Unit quaternion rotating child axes into the parent frame
    """

    t_ns: int
    parent_frame: str
    child_frame: str
    translation_m: NDArray[np.float64]
    rotation: Quaternion

    def __post_init__(self) -> None:
        """Validate fields, normalize the rotation and freeze storage."""
        try:
            validate_t_ns(self.t_ns)
        except TimeBaseError as exc:
            raise InvalidRecordError(str(exc)) from exc
        _require_frame(self.parent_frame, "parent_frame")
        _require_frame(self.child_frame, "child_frame")

        try:
            translation_m: NDArray[np.float64] = np.array(
                self.translation_m, dtype=float
            )
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError(f"translation_m is malformed: {exc}") from exc
        if translation_m.shape != (3,):
            raise InvalidRecordError("translation_m must be shape (3,)")
        if not np.all(np.isfinite(translation_m)):
            raise InvalidRecordError("translation_m must be finite")
        translation_m.setflags(write=False)

        if not isinstance(self.rotation, Quaternion):
            raise InvalidRecordError("rotation must be a Quaternion")
        if self.rotation.norm() < NumericConstants.EPS:
            raise InvalidRecordError("rotation must be non-zero")

        object.__setattr__(self, "translation_m", translation_m)
        object.__setattr__(self, "rotation", self.rotation.normalized())

    @staticmethod
    def create(
        *,
        t_ns: int,
        parent_frame: str,
        child_frame: str,
        translation: Sequence[float] | NDArray[np.float64],
        rotation_xyzw: Sequence[float] | NDArray[np.float64],
        norm_tolerance: Optional[float] = None,
    ) -> "TransformRecord":
        """Build a record from wire-order components.

        Args:
            t_ns: Timestamp in nanoseconds
            parent_frame: Parent frame ID
            child_frame: Child frame ID
            translation: Translation in meters, XYZ order
            rotation_xyzw: Quaternion in x, y, z, w order
            norm_tolerance: Max allowed deviation of the quaternion norm from
                1 before normalization, or None to accept any non-zero norm

        Returns:
            A validated record with a normalized rotation
        """
        require_distinct_frames(parent_frame, child_frame)
        rotation: Quaternion = _quaternion_from_xyzw(rotation_xyzw)
        if norm_tolerance is not None:
            check_rotation_norm(rotation, norm_tolerance)
        return TransformRecord(
            t_ns=t_ns,
            parent_frame=parent_frame,
            child_frame=child_frame,
            translation_m=translation,
            rotation=rotation,
        )

    @staticmethod
    def identity(parent_frame: str, child_frame: str, t_ns: int) -> "TransformRecord":
        """Return an identity transform between two frames."""
        return TransformRecord.from_transform(
            t_ns=t_ns,
            parent_frame=parent_frame,
            child_frame=child_frame,
            transform=SE3.identity(),
        )

    @staticmethod
    def from_transform(
        *, t_ns: int, parent_frame: str, child_frame: str, transform: SE3
    ) -> "TransformRecord":
        """Stamp an SE(3) transform with frames and a time."""
        return TransformRecord(
            t_ns=t_ns,
            parent_frame=parent_frame,
            child_frame=child_frame,
            translation_m=transform.p,
            rotation=transform.q,
        )

    @property
    def rotation_xyzw(self) -> NDArray[np.float64]:
        """Return the rotation in wire order."""
        return self.rotation.to_xyzw()

    def as_transform(self) -> SE3:
        """Return the SE(3) transform ``T_parent_child``."""
        return SE3(self.rotation, self.translation_m)

    def inverse(self) -> "TransformRecord":
        """Return the reversed edge, from parent to child."""
        return TransformRecord.from_transform(
            t_ns=self.t_ns,
            parent_frame=self.child_frame,
            child_frame=self.parent_frame,
            transform=self.as_transform().inverse(),
        )

    def same_values(self, other: "TransformRecord") -> bool:
        """Return True if two records carry identical stamps and values."""
        return (
            self.t_ns == other.t_ns
            and self.parent_frame == other.parent_frame
            and self.child_frame == other.child_frame
            and bool(np.array_equal(self.translation_m, other.translation_m))
            and bool(np.array_equal(self.rotation.wxyz, other.rotation.wxyz))
        )


def require_distinct_frames(parent_frame: str, child_frame: str) -> None:
    """Raise InvalidRecordError if an edge would connect a frame to itself."""
    if parent_frame == child_frame:
        raise InvalidRecordError(
            f"parent_frame and child_frame must differ ({child_frame!r})"
        )


def check_rotation_norm(rotation: Quaternion, tolerance: float) -> None:
    """Raise InvalidRecordError unless the quaternion is unit within tolerance."""
    norm: float = rotation.norm()
    if abs(norm - 1.0) > tolerance:
        raise InvalidRecordError(
            f"rotation must be a unit quaternion (norm={norm:.6g}, "
            f"tolerance={tolerance:.3g})"
        )


def _quaternion_from_xyzw(
    rotation_xyzw: Sequence[float] | NDArray[np.float64],
) -> Quaternion:
    try:
        return Quaternion.from_xyzw(rotation_xyzw)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(f"rotation is malformed: {exc}") from exc


def _require_frame(frame: str, name: str) -> None:
    """Ensure a frame string is valid and non-empty."""
    if not isinstance(frame, str):
        raise InvalidRecordError(f"{name} must be a str")
    if not frame:
        raise InvalidRecordError(f"{name} must be non-empty")

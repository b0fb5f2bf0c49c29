################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Transport-facing shape of a stamped transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Mapping
from typing import Optional

from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_types.transform_record import TransformRecord


_REQUIRED_FIELDS: tuple[str, ...] = (
    "parent_frame",
    "child_frame",
    "t_ns",
    "translation",
    "rotation_xyzw",
)


@dataclass(frozen=True)
class TransformMessage:
    """Stamped transform as exchanged with the transport layer.

    Fields are kept loosely typed so a malformed producer payload can still be
    represented and then rejected on conversion.

    Attributes:
        parent_frame: Parent frame ID
        child_frame: Child frame ID
        t_ns: Timestamp in nanoseconds
        translation: Translation in meters, XYZ order
        rotation_xyzw: Quaternion in x, y, z, w order
        is_static: Per-message static flag, or None when the channel decides
    """

    parent_frame: str
    child_frame: str
    t_ns: int
    translation: tuple[float, ...]
    rotation_xyzw: tuple[float, ...]
    is_static: Optional[bool] = None

    @staticmethod
    def from_record(
        record: TransformRecord, is_static: Optional[bool] = None
    ) -> "TransformMessage":
        """Build the outbound message for a validated record."""
        return TransformMessage(
            parent_frame=record.parent_frame,
            child_frame=record.child_frame,
            t_ns=record.t_ns,
            translation=tuple(float(v) for v in record.translation_m),
            rotation_xyzw=tuple(float(v) for v in record.rotation_xyzw),
            is_static=is_static,
        )

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "TransformMessage":
        """Build a message from a mapping, rejecting missing fields."""
        missing: list[str] = [key for key in _REQUIRED_FIELDS if key not in payload]
        if missing:
            raise InvalidRecordError(
                "transform is missing required fields: " + ", ".join(missing)
            )
        is_static: Any = payload.get("is_static")
        if is_static is not None and not isinstance(is_static, bool):
            raise InvalidRecordError("is_static must be a bool")
        try:
            translation: tuple[float, ...] = tuple(payload["translation"])
            rotation_xyzw: tuple[float, ...] = tuple(payload["rotation_xyzw"])
        except TypeError as exc:
            raise InvalidRecordError(f"transform vectors are malformed: {exc}") from exc
        return TransformMessage(
            parent_frame=payload["parent_frame"],
            child_frame=payload["child_frame"],
            t_ns=payload["t_ns"],
            translation=translation,
            rotation_xyzw=rotation_xyzw,
            is_static=is_static,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping suitable for serialization."""
        payload: dict[str, Any] = {
            "parent_frame": self.parent_frame,
            "child_frame": self.child_frame,
            "t_ns": self.t_ns,
            "translation": list(self.translation),
            "rotation_xyzw": list(self.rotation_xyzw),
        }
        if self.is_static is not None:
            payload["is_static"] = self.is_static
        return payload

    def to_record(self, norm_tolerance: Optional[float] = None) -> TransformRecord:
        """Validate the message and convert it to a normalized record."""
        return TransformRecord.create(
            t_ns=self.t_ns,
            parent_frame=self.parent_frame,
            child_frame=self.child_frame,
            translation=self.translation,
            rotation_xyzw=self.rotation_xyzw,
            norm_tolerance=norm_tolerance,
        )

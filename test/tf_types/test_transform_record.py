################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for TransformRecord."""

from __future__ import annotations

import math

import numpy as np
import pytest

from oasis_tf.math_utils.quat import Quaternion
from oasis_tf.math_utils.se3 import SE3
from oasis_tf.tf_errors import InvalidRecordError
from oasis_tf.tf_types.transform_record import TransformRecord


def _record(**overrides: object) -> TransformRecord:
    values: dict[str, object] = {
        "t_ns": 1_000,
        "parent_frame": "base",
        "child_frame": "arm",
        "translation": (1.0, 2.0, 3.0),
        "rotation_xyzw": (0.0, 0.0, 0.0, 1.0),
    }
    values.update(overrides)
    return TransformRecord.create(**values)  # type: ignore[arg-type]


def test_create_valid_record() -> None:
    """Checks a well-formed record is constructed."""
    record: TransformRecord = _record()
    assert record.parent_frame == "base"
    assert record.child_frame == "arm"
    assert np.allclose(record.translation_m, [1.0, 2.0, 3.0])
    assert record.rotation.almost_equal(Quaternion.identity())


def test_record_is_immutable() -> None:
    """Checks translation storage is read-only."""
    record: TransformRecord = _record()
    with pytest.raises(ValueError):
        record.translation_m[0] = 5.0


def test_rotation_is_normalized() -> None:
    """Checks a slightly off-unit quaternion is normalized."""
    record: TransformRecord = _record(
        rotation_xyzw=(0.0, 0.0, 0.0, 1.0005), norm_tolerance=1e-3
    )
    assert math.isclose(record.rotation.norm(), 1.0, abs_tol=1e-12)


@pytest.mark.parametrize(
    "overrides",
    [
        {"parent_frame": ""},
        {"child_frame": ""},
        {"child_frame": "base"},
        {"t_ns": -1},
        {"translation": (1.0, 2.0)},
        {"translation": (1.0, float("nan"), 0.0)},
        {"translation": "abc"},
        {"rotation_xyzw": (0.0, 0.0, 1.0)},
        {"rotation_xyzw": (0.0, 0.0, 0.0, 0.0)},
        {"rotation_xyzw": (0.0, 0.0, 0.0, 2.0), "norm_tolerance": 1e-3},
    ],
)
def test_create_rejects_malformed(overrides: dict[str, object]) -> None:
    """Checks malformed fields raise InvalidRecordError."""
    with pytest.raises(InvalidRecordError):
        _record(**overrides)


def test_identity_of_frame_to_itself() -> None:
    """Checks the identity helper accepts equal frames."""
    record: TransformRecord = TransformRecord.identity("map", "map", 0)
    assert record.as_transform().almost_equal(SE3.identity())


def test_inverse_swaps_frames() -> None:
    """Checks the inverse reverses the edge and the transform."""
    record: TransformRecord = _record(
        rotation_xyzw=tuple(
            Quaternion.from_axis_angle([0.0, 0.0, 1.0], 0.5).to_xyzw()
        )
    )
    inverse: TransformRecord = record.inverse()
    assert inverse.parent_frame == "arm"
    assert inverse.child_frame == "base"
    assert (record.as_transform() * inverse.as_transform()).almost_equal(
        SE3.identity(), atol=1e-9
    )


def test_same_values() -> None:
    """Checks value equality of records."""
    assert _record().same_values(_record())
    assert not _record().same_values(_record(translation=(1.0, 2.0, 3.5)))
    assert not _record().same_values(_record(t_ns=2_000))

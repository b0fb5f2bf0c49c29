################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for quaternion utilities."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_tf.math_utils.quat import Quaternion


def test_identity_properties() -> None:
    """Checks identity quaternion properties."""
    q: Quaternion = Quaternion.identity()
    mat: NDArray[np.float64] = q.as_matrix()
    assert np.allclose(mat, np.eye(3))


def test_wire_order_conversion() -> None:
    """Checks xyzw construction maps onto wxyz storage."""
    q: Quaternion = Quaternion.from_xyzw([0.0, 0.0, 0.0, 1.0])
    assert q.almost_equal(Quaternion.identity())

    q2: Quaternion = Quaternion.from_xyzw([0.1, 0.2, 0.3, 0.9])
    assert np.allclose(q2.to_wxyz(), [0.9, 0.1, 0.2, 0.3])
    assert np.allclose(q2.to_xyzw(), [0.1, 0.2, 0.3, 0.9])


def test_storage_is_read_only() -> None:
    """Checks the component array cannot be mutated."""
    q: Quaternion = Quaternion.identity()
    with pytest.raises(ValueError):
        q.wxyz[0] = 2.0


def test_rejects_non_finite() -> None:
    """Checks non-finite components are rejected."""
    with pytest.raises(ValueError):
        Quaternion.from_wxyz(float("nan"), 0.0, 0.0, 0.0)


def test_multiplication_inverse() -> None:
    """Checks quaternion multiplication with inverse returns identity."""
    q: Quaternion = Quaternion.from_axis_angle([0.2, 0.0, -0.1], 0.7)
    identity: Quaternion = q * q.inverse()
    assert identity.almost_equal(Quaternion.identity())


def test_from_matrix_roundtrip() -> None:
    """Checks conversion between matrix and quaternion."""
    q: Quaternion = Quaternion.from_axis_angle([1.0, 2.0, 3.0], 2.5)
    roundtrip: Quaternion = Quaternion.from_matrix(q.as_matrix())
    assert roundtrip.almost_equal(q, atol=1e-8)


def test_rotate_about_z() -> None:
    """Checks a quarter turn about Z maps X onto Y."""
    q: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2.0)
    rotated: NDArray[np.float64] = q.rotate(np.array([1.0, 0.0, 0.0]))
    assert np.allclose(rotated, [0.0, 1.0, 0.0])


def test_almost_equal_sign_flip() -> None:
    """Checks almost_equal handles sign flips."""
    q: Quaternion = Quaternion.from_axis_angle([0.0, 1.0, 0.0], 0.3)
    flipped: Quaternion = Quaternion(-q.wxyz)
    assert q.almost_equal(flipped)


def test_slerp_endpoints() -> None:
    """Checks slerp returns its operands at fractions 0 and 1."""
    q0: Quaternion = Quaternion.identity()
    q1: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 1.0], 1.0)
    assert q0.slerp(q1, 0.0).almost_equal(q0)
    assert q0.slerp(q1, 1.0).almost_equal(q1)


def test_slerp_angle_is_proportional() -> None:
    """Checks angular distance grows linearly with the fraction."""
    q0: Quaternion = Quaternion.identity()
    q1: Quaternion = Quaternion.from_axis_angle([1.0, 1.0, 0.0], 2.0)
    for fraction in (0.1, 0.25, 0.5, 0.8):
        q: Quaternion = q0.slerp(q1, fraction)
        assert math.isclose(q0.angle_to(q), 2.0 * fraction, abs_tol=1e-9)
        assert math.isclose(q.angle_to(q1), 2.0 * (1.0 - fraction), abs_tol=1e-9)


def test_slerp_takes_shortest_arc() -> None:
    """Checks operands in opposite hemispheres interpolate the short way."""
    q0: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 1.0], 0.2)
    q1: Quaternion = Quaternion(-Quaternion.from_axis_angle([0.0, 0.0, 1.0], 0.6).wxyz)
    mid: Quaternion = q0.slerp(q1, 0.5)
    expected: Quaternion = Quaternion.from_axis_angle([0.0, 0.0, 1.0], 0.4)
    assert mid.almost_equal(expected, atol=1e-9)


def test_slerp_nearly_parallel_is_unit() -> None:
    """Checks the linear-blend fallback still returns a unit quaternion."""
    q0: Quaternion = Quaternion.identity()
    q1: Quaternion = Quaternion.from_axis_angle([0.0, 1.0, 0.0], 1e-4)
    mid: Quaternion = q0.slerp(q1, 0.5)
    assert math.isclose(mid.norm(), 1.0, abs_tol=1e-12)
    assert math.isclose(q0.angle_to(mid), 0.5e-4, abs_tol=1e-8)

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for SE3 transforms."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_tf.math_utils.quat import Quaternion
from oasis_tf.math_utils.se3 import SE3


def _sample_transform() -> SE3:
    return SE3(
        Quaternion.from_axis_angle([0.3, -0.2, 1.0], 0.8),
        np.array([1.0, -2.0, 0.5], dtype=float),
    )


def test_inverse_composition_is_identity() -> None:
    """Checks T * T^-1 is the identity."""
    T: SE3 = _sample_transform()
    assert (T * T.inverse()).almost_equal(SE3.identity(), atol=1e-9)
    assert (T.inverse() * T).almost_equal(SE3.identity(), atol=1e-9)


def test_composition_matches_matrices() -> None:
    """Checks composition agrees with homogeneous matrix products."""
    T_ab: SE3 = _sample_transform()
    T_bc: SE3 = SE3(
        Quaternion.from_axis_angle([0.0, 1.0, 0.0], -0.4),
        np.array([0.0, 0.3, 2.0], dtype=float),
    )
    expected: NDArray[np.float64] = T_ab.as_matrix4() @ T_bc.as_matrix4()
    assert np.allclose((T_ab * T_bc).as_matrix4(), expected)


def test_transform_point_and_vector() -> None:
    """Checks points get translated and vectors do not."""
    T: SE3 = SE3(
        Quaternion.from_axis_angle([0.0, 0.0, 1.0], math.pi / 2.0),
        np.array([1.0, 0.0, 0.0], dtype=float),
    )
    point: NDArray[np.float64] = T.transform_point(np.array([1.0, 0.0, 0.0]))
    vector: NDArray[np.float64] = T.transform_vector(np.array([1.0, 0.0, 0.0]))
    assert np.allclose(point, [1.0, 1.0, 0.0])
    assert np.allclose(vector, [0.0, 1.0, 0.0])


def test_from_matrix4_roundtrip() -> None:
    """Checks conversion through a homogeneous matrix."""
    T: SE3 = _sample_transform()
    assert SE3.from_matrix4(T.as_matrix4()).almost_equal(T, atol=1e-9)


def test_rejects_bad_translation() -> None:
    """Checks malformed translations are rejected."""
    with pytest.raises(ValueError):
        SE3(Quaternion.identity(), np.array([1.0, 2.0], dtype=float))
    with pytest.raises(ValueError):
        SE3(Quaternion.identity(), np.array([1.0, np.inf, 0.0], dtype=float))

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""SE(3) rigid-body transforms backed by a unit quaternion."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .quat import Quaternion
from .units import as_vector3


@dataclass(frozen=True)
class SE3:
    """Rigid-body transform with rotation and translation.

    ``T_AB * x_B`` maps a point expressed in frame B into frame A.
    """

    q: Quaternion
    p: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate inputs and normalize the rotation."""
        p_vec: NDArray[np.float64] = as_vector3(self.p, "p")
        p_vec.setflags(write=False)
        object.__setattr__(self, "q", self.q.normalized())
        object.__setattr__(self, "p", p_vec)

    @staticmethod
    def identity() -> "SE3":
        """Return the identity transform."""
        return SE3(Quaternion.identity(), np.zeros(3, dtype=float))

    @staticmethod
    def from_matrix4(mat: NDArray[np.float64]) -> "SE3":
        """Create a transform from a homogeneous 4x4 matrix."""
        T: NDArray[np.float64] = np.asarray(mat, dtype=float)
        if T.shape != (4, 4):
            raise ValueError("mat must be shape (4, 4)")
        return SE3(Quaternion.from_matrix(T[:3, :3]), T[:3, 3])

    @property
    def R(self) -> NDArray[np.float64]:
        """Return the rotation matrix."""
        return self.q.as_matrix()

    def as_matrix4(self) -> NDArray[np.float64]:
        """Return the homogeneous 4x4 transform matrix."""
        mat: NDArray[np.float64] = np.eye(4, dtype=float)
        mat[:3, :3] = self.R
        mat[:3, 3] = self.p
        return mat

    def inverse(self) -> "SE3":
        """Return the inverse transform."""
        q_inv: Quaternion = self.q.inverse()
        p_inv: NDArray[np.float64] = -q_inv.rotate(self.p)
        return SE3(q_inv, p_inv)

    def __mul__(self, other: "SE3") -> "SE3":
        """Compose two transforms."""
        q_new: Quaternion = self.q * other.q
        p_new: NDArray[np.float64] = self.q.rotate(other.p) + self.p
        return SE3(q_new, p_new)

    def transform_point(self, x: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a point by rotation and translation."""
        vec: NDArray[np.float64] = as_vector3(x, "x")
        return self.q.rotate(vec) + self.p

    def transform_vector(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Transform a vector by rotation only."""
        vec: NDArray[np.float64] = as_vector3(v, "v")
        return self.q.rotate(vec)

    def almost_equal(self, other: "SE3", atol: float = 1e-9) -> bool:
        """Check approximate equality of rotation and translation."""
        if not np.allclose(self.p, other.p, atol=atol):
            return False
        return self.q.almost_equal(other.q, atol=atol)

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion utilities using the wxyz convention.

Wire formats carry quaternions in xyzw order; ``from_xyzw`` and ``to_xyzw``
convert at that boundary so everything internal stays wxyz.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .units import NumericConstants
from .units import assert_finite


@dataclass(frozen=True)
class Quaternion:
    """Quaternion stored in wxyz order.

    The component array is read-only so instances can be shared between
    threads without copying.
    """

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Validate quaternion inputs and freeze storage."""
        wxyz: NDArray[np.float64] = np.array(self.wxyz, dtype=float)
        if wxyz.shape != (4,):
            raise ValueError("wxyz must be shape (4,)")
        assert_finite(wxyz, "wxyz")
        wxyz.setflags(write=False)
        object.__setattr__(self, "wxyz", wxyz)

    @staticmethod
    def identity() -> "Quaternion":
        """Return the identity quaternion."""
        return Quaternion.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_wxyz(w: float, x: float, y: float, z: float) -> "Quaternion":
        """Create a quaternion from components."""
        return Quaternion(np.array([w, x, y, z], dtype=float))

    @staticmethod
    def from_xyzw(xyzw: Sequence[float] | NDArray[np.float64]) -> "Quaternion":
        """Create a quaternion from wire-order xyzw components."""
        values: NDArray[np.float64] = np.asarray(xyzw, dtype=float)
        if values.shape != (4,):
            raise ValueError("xyzw must be shape (4,)")
        return Quaternion.from_wxyz(
            float(values[3]), float(values[0]), float(values[1]), float(values[2])
        )

    @staticmethod
    def from_axis_angle(
        axis: Sequence[float] | NDArray[np.float64], angle_rad: float
    ) -> "Quaternion":
        """Create a rotation of ``angle_rad`` about ``axis``."""
        vec: NDArray[np.float64] = np.asarray(axis, dtype=float)
        if vec.shape != (3,):
            raise ValueError("axis must be shape (3,)")
        assert_finite(vec, "axis")
        norm: float = float(np.linalg.norm(vec))
        if norm < NumericConstants.EPS:
            raise ValueError("axis norm is too small")
        half: float = 0.5 * float(angle_rad)
        xyz: NDArray[np.float64] = vec / norm * np.sin(half)
        return Quaternion.from_wxyz(
            float(np.cos(half)), float(xyz[0]), float(xyz[1]), float(xyz[2])
        )

    @staticmethod
    def from_matrix(R: NDArray[np.float64]) -> "Quaternion":
        """Create a quaternion from a rotation matrix."""
        mat: NDArray[np.float64] = np.asarray(R, dtype=float)
        if mat.shape != (3, 3):
            raise ValueError("R must be shape (3, 3)")
        assert_finite(mat, "R")
        trace: float = float(np.trace(mat))
        if trace > 0.0:
            s: float = float(np.sqrt(trace + 1.0) * 2.0)
            w: float = 0.25 * s
            x: float = float((mat[2, 1] - mat[1, 2]) / s)
            y: float = float((mat[0, 2] - mat[2, 0]) / s)
            z: float = float((mat[1, 0] - mat[0, 1]) / s)
        else:
            diag: NDArray[np.float64] = np.diag(mat)
            idx: int = int(np.argmax(diag))
            if idx == 0:
                s = float(np.sqrt(1.0 + mat[0, 0] - mat[1, 1] - mat[2, 2]) * 2.0)
                w = float((mat[2, 1] - mat[1, 2]) / s)
                x = 0.25 * s
                y = float((mat[0, 1] + mat[1, 0]) / s)
                z = float((mat[0, 2] + mat[2, 0]) / s)
            elif idx == 1:
                s = float(np.sqrt(1.0 + mat[1, 1] - mat[0, 0] - mat[2, 2]) * 2.0)
                w = float((mat[0, 2] - mat[2, 0]) / s)
                x = float((mat[0, 1] + mat[1, 0]) / s)
                y = 0.25 * s
                z = float((mat[1, 2] + mat[2, 1]) / s)
            else:
                s = float(np.sqrt(1.0 + mat[2, 2] - mat[0, 0] - mat[1, 1]) * 2.0)
                w = float((mat[1, 0] - mat[0, 1]) / s)
                x = float((mat[0, 2] + mat[2, 0]) / s)
                y = float((mat[1, 2] + mat[2, 1]) / s)
                z = 0.25 * s
        return Quaternion.from_wxyz(w, x, y, z).normalized()

    @property
    def w(self) -> float:
        return float(self.wxyz[0])

    @property
    def x(self) -> float:
        return float(self.wxyz[1])

    @property
    def y(self) -> float:
        return float(self.wxyz[2])

    @property
    def z(self) -> float:
        return float(self.wxyz[3])

    def norm(self) -> float:
        """Return the Euclidean norm of the components."""
        return float(np.linalg.norm(self.wxyz))

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the rotation matrix representation."""
        q: NDArray[np.float64] = self.normalized().wxyz
        w: float = float(q[0])
        x: float = float(q[1])
        y: float = float(q[2])
        z: float = float(q[3])
        return np.array(
            [
                [
                    1.0 - 2.0 * (y * y + z * z),
                    2.0 * (x * y - z * w),
                    2.0 * (x * z + y * w),
                ],
                [
                    2.0 * (x * y + z * w),
                    1.0 - 2.0 * (x * x + z * z),
                    2.0 * (y * z - x * w),
                ],
                [
                    2.0 * (x * z - y * w),
                    2.0 * (y * z + x * w),
                    1.0 - 2.0 * (x * x + y * y),
                ],
            ],
            dtype=float,
        )

    def normalized(self) -> "Quaternion":
        """Return a normalized quaternion."""
        norm: float = self.norm()
        if norm < NumericConstants.EPS:
            raise ValueError("Quaternion norm is too small")
        return Quaternion(self.wxyz / norm)

    def inverse(self) -> "Quaternion":
        """Return the inverse quaternion."""
        q: NDArray[np.float64] = self.normalized().wxyz
        return Quaternion.from_wxyz(
            float(q[0]), float(-q[1]), float(-q[2]), float(-q[3])
        )

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        """Multiply two quaternions using the Hamilton product."""
        q1: NDArray[np.float64] = self.wxyz
        q2: NDArray[np.float64] = other.wxyz
        w1: float = float(q1[0])
        x1: float = float(q1[1])
        y1: float = float(q1[2])
        z1: float = float(q1[3])
        w2: float = float(q2[0])
        x2: float = float(q2[1])
        y2: float = float(q2[2])
        z2: float = float(q2[3])
        w: float = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
        x: float = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
        y: float = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
        z: float = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2
        return Quaternion.from_wxyz(w, x, y, z)

    def rotate(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Rotate a 3-vector by this quaternion."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=float)
        if vec.shape != (3,):
            raise ValueError("v must be shape (3,)")
        assert_finite(vec, "v")
        return self.as_matrix() @ vec

    def dot(self, other: "Quaternion") -> float:
        """Return the 4D dot product of the components."""
        return float(np.dot(self.wxyz, other.wxyz))

    def angle_to(self, other: "Quaternion") -> float:
        """Return the rotation angle in radians between two orientations."""
        dot: float = abs(self.normalized().dot(other.normalized()))
        return 2.0 * float(np.arccos(min(1.0, dot)))

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return a copy of the quaternion components."""
        return np.array(self.wxyz, dtype=float)

    def to_xyzw(self) -> NDArray[np.float64]:
        """Return a copy of the components in wire order."""
        return np.array(
            [self.wxyz[1], self.wxyz[2], self.wxyz[3], self.wxyz[0]], dtype=float
        )

    def almost_equal(self, other: "Quaternion", atol: float = 1e-9) -> bool:
        """Check approximate equality, accounting for sign ambiguity."""
        q1: NDArray[np.float64] = self.wxyz
        q2: NDArray[np.float64] = other.wxyz
        if np.allclose(q1, q2, atol=atol):
            return True
        return bool(np.allclose(q1, -q2, atol=atol))

    def slerp(
        self,
        other: "Quaternion",
        fraction: float,
        dot_threshold: float = NumericConstants.SLERP_DOT_THRESHOLD,
    ) -> "Quaternion":
        """Spherically interpolate from this quaternion toward ``other``.

        Interpolation follows the shortest great-circle arc: when the operands
        lie in opposite hemispheres, ``other`` is negated first. Nearly
        parallel operands fall back to a normalized linear blend.

        Args:
            other: Orientation reached at ``fraction == 1``
            fraction: Interpolation parameter in [0, 1]
            dot_threshold: Dot product above which the linear blend is used

        Returns:
            The interpolated unit quaternion
        """
        q0: NDArray[np.float64] = self.normalized().wxyz
        q1: NDArray[np.float64] = other.normalized().wxyz
        dot: float = float(np.dot(q0, q1))
        if dot < 0.0:
            q1 = -q1
            dot = -dot

        if dot > dot_threshold:
            blend: NDArray[np.float64] = q0 + fraction * (q1 - q0)
            return Quaternion(blend).normalized()

        theta_0: float = float(np.arccos(min(1.0, dot)))
        theta: float = theta_0 * fraction
        sin_theta_0: float = float(np.sin(theta_0))
        s0: float = float(np.sin(theta_0 - theta)) / sin_theta_0
        s1: float = float(np.sin(theta)) / sin_theta_0
        return Quaternion(s0 * q0 + s1 * q1).normalized()

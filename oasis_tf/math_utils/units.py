################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Unit conversion helpers and numeric constants."""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray


class Angle:
    """Angular unit conversions."""

    @staticmethod
    def rad2deg(x: float | NDArray[np.float64]) -> float | NDArray[np.float64]:
        """Convert radians to degrees."""
        arr: NDArray[np.float64] = np.asarray(x, dtype=float)
        result: NDArray[np.float64] = np.rad2deg(arr)
        if np.ndim(result) == 0:
            return float(result)
        return result


class NumericConstants:
    """Numeric constants used by math utilities."""

    EPS: float = 1e-12

    # Quaternion dot product above which slerp degenerates to a linear blend
    SLERP_DOT_THRESHOLD: float = 0.9995


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")


def as_vector3(
    values: Sequence[float] | NDArray[np.float64],
    name: str,
) -> NDArray[np.float64]:
    """Return a finite float64 copy of a 3-vector."""
    vec: NDArray[np.float64] = np.array(values, dtype=float)
    if vec.shape != (3,):
        raise ValueError(f"{name} must be shape (3,)")
    assert_finite(vec, name)
    return vec

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""3-vector helpers for a Y-up, Z-forward body frame.

The axis constants are shared arrays. Treat them as read-only; use
``np.array(POS_X)`` when a mutable copy is needed.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray

from .units import PhysicalConstants
from .units import assert_finite


POS_X: NDArray[np.float64] = np.array([1.0, 0.0, 0.0], dtype=np.float64)
NEG_X: NDArray[np.float64] = np.array([-1.0, 0.0, 0.0], dtype=np.float64)
POS_Y: NDArray[np.float64] = np.array([0.0, 1.0, 0.0], dtype=np.float64)
NEG_Y: NDArray[np.float64] = np.array([0.0, -1.0, 0.0], dtype=np.float64)
POS_Z: NDArray[np.float64] = np.array([0.0, 0.0, 1.0], dtype=np.float64)
NEG_Z: NDArray[np.float64] = np.array([0.0, 0.0, -1.0], dtype=np.float64)

# Vertical axis; yaw is rotation about this axis
UP_AXIS: NDArray[np.float64] = POS_Y

# Canonical forward direction for heading comparisons
FORWARD_AXIS: NDArray[np.float64] = POS_Z

for _axis in (POS_X, NEG_X, POS_Y, NEG_Y, POS_Z, NEG_Z):
    _axis.setflags(write=False)


def as_vector3(value: Any, name: str) -> NDArray[np.float64]:
    """Coerce a value to a finite float64 array with shape (3,)."""
    vec: NDArray[np.float64] = np.array(value, dtype=np.float64)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have shape (3,)")
    assert_finite(vec, name)
    return vec


def norm(v: NDArray[np.float64]) -> float:
    """Return the Euclidean length of a vector."""
    return float(np.linalg.norm(v))


def unit(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return the unit vector in the direction of v."""
    length: float = norm(v)
    if length <= PhysicalConstants.EPS or not np.isfinite(length):
        raise ValueError("vector must be non-zero")
    return np.asarray(v, dtype=np.float64) / length


def reject(v: NDArray[np.float64], axis: NDArray[np.float64]) -> NDArray[np.float64]:
    """Remove the component of v that lies along axis."""
    axis_unit: NDArray[np.float64] = unit(axis)
    return v - float(v @ axis_unit) * axis_unit


def angle_between(a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """Return the unsigned angle between two vectors in radians.

    Uses atan2 of the cross and dot products, which stays accurate near 0 and
    pi where arccos loses precision. A zero-length input yields pi / 2, the
    angle of a vector against the zero vector's undefined direction.
    """
    if norm(a) <= PhysicalConstants.EPS or norm(b) <= PhysicalConstants.EPS:
        return float(np.pi / 2.0)
    cross_norm: float = norm(np.cross(a, b))
    dot: float = float(np.dot(a, b))
    return float(np.arctan2(cross_norm, dot))

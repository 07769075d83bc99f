################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Unit quaternions for tracker orientations, stored as wxyz."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .units import Angle
from .units import PhysicalConstants
from .units import assert_finite
from .vectors import POS_Y
from .vectors import POS_Z
from .vectors import as_vector3
from .vectors import unit


# Units: unitless. Meaning: quaternion norm below which no rotation remains
_DEGENERATE_NORM: float = 1e-9

# Units: radians. Meaning: rotation angle below which rotvec maps linearize
_SMALL_ANGLE_RAD: float = 1e-8


@dataclass(frozen=True)
class Quaternion:
    """Rotation quaternion with components ordered (w, x, y, z)."""

    wxyz: NDArray[np.float64]

    def __post_init__(self) -> None:
        """Coerce components to a finite float array of length 4."""
        components: NDArray[np.float64] = np.array(self.wxyz, dtype=np.float64)
        if components.shape != (4,):
            raise ValueError("quaternion needs exactly 4 components")
        assert_finite(components, "wxyz")
        object.__setattr__(self, "wxyz", components)

    @classmethod
    def identity(cls) -> Quaternion:
        """Return the rotation that leaves every vector unchanged."""
        return cls.from_wxyz(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_wxyz(cls, w: float, x: float, y: float, z: float) -> Quaternion:
        """Build a quaternion from its scalar and vector components."""
        return cls(np.array([w, x, y, z], dtype=np.float64))

    @classmethod
    def _from_parts(cls, w: float, v: NDArray[np.float64]) -> Quaternion:
        return cls(np.concatenate(([w], v)))

    @classmethod
    def from_axis_angle(cls, axis: NDArray[np.float64], angle_rad: float) -> Quaternion:
        """Build the rotation of angle_rad about axis (right-hand rule)."""
        half: float = 0.5 * float(angle_rad)
        axis_unit: NDArray[np.float64] = unit(as_vector3(axis, "axis"))
        return cls._from_parts(math.cos(half), math.sin(half) * axis_unit)

    @classmethod
    def from_rotvec(cls, rotvec: NDArray[np.float64]) -> Quaternion:
        """Build a rotation from an axis scaled by its angle in radians."""
        vec: NDArray[np.float64] = as_vector3(rotvec, "rotvec")
        angle: float = float(np.linalg.norm(vec))
        if angle < _SMALL_ANGLE_RAD:
            return cls._from_parts(1.0, 0.5 * vec).normalized()
        return cls.from_axis_angle(vec, angle)

    @classmethod
    def rotation_about_y(cls, angle_rad: float) -> Quaternion:
        """Return a heading change about the vertical (Y) axis."""
        return cls.from_axis_angle(POS_Y, angle_rad)

    @classmethod
    def rotation_about_z(cls, angle_rad: float) -> Quaternion:
        """Return a rotation about the Z axis."""
        return cls.from_axis_angle(POS_Z, angle_rad)

    @property
    def w(self) -> float:
        """Scalar part."""
        return float(self.wxyz[0])

    @property
    def vec(self) -> NDArray[np.float64]:
        """Vector part (x, y, z)."""
        return self.wxyz[1:]

    def normalized(self) -> Quaternion:
        """Return this quaternion scaled to unit length."""
        length: float = float(np.linalg.norm(self.wxyz))
        if length < PhysicalConstants.EPS:
            raise ValueError("cannot normalize a zero quaternion")
        return Quaternion(self.wxyz / length)

    def inverse(self) -> Quaternion:
        """Return the opposite rotation (conjugate of the unit quaternion)."""
        q: Quaternion = self.normalized()
        return Quaternion._from_parts(q.w, -q.vec)

    def __mul__(self, other: Quaternion) -> Quaternion:
        """Compose rotations: (self * other) applies other first."""
        w1: float = self.w
        w2: float = other.w
        v1: NDArray[np.float64] = self.vec
        v2: NDArray[np.float64] = other.vec
        return Quaternion._from_parts(
            w1 * w2 - float(v1 @ v2),
            w1 * v2 + w2 * v1 + np.cross(v1, v2),
        )

    def rotate(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the rotation to a 3-vector (sandwich product q v q^-1)."""
        point: NDArray[np.float64] = as_vector3(v, "v")
        q: Quaternion = self.normalized()
        t: NDArray[np.float64] = 2.0 * np.cross(q.vec, point)
        return point + q.w * t + np.cross(q.vec, t)

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the 3x3 matrix whose columns are the rotated basis vectors."""
        return np.column_stack([self.rotate(axis) for axis in np.eye(3)])

    def as_rotvec(self) -> NDArray[np.float64]:
        """Return axis * angle with the angle in [0, pi]."""
        q: Quaternion = self.normalized()
        w: float = q.w
        vec: NDArray[np.float64] = q.vec
        if w < 0.0:
            w, vec = -w, -vec
        sin_half: float = float(np.linalg.norm(vec))
        if sin_half < _SMALL_ANGLE_RAD:
            return 2.0 * vec
        return vec * (2.0 * math.atan2(sin_half, w) / sin_half)

    def angle_to(self, other: Quaternion) -> float:
        """Return the smallest angle rotating this orientation onto other."""
        delta: Quaternion = self.inverse() * other.normalized()
        return 2.0 * math.atan2(float(np.linalg.norm(delta.vec)), abs(delta.w))

    def reject_axis(self, axis: NDArray[np.float64]) -> Quaternion:
        """Drop the part of the rotation axis along axis and renormalize.

        A pure rotation about axis has nothing left and maps to the identity.
        """
        q: Quaternion = self.normalized()
        axis_unit: NDArray[np.float64] = unit(as_vector3(axis, "axis"))
        kept: NDArray[np.float64] = q.vec - float(q.vec @ axis_unit) * axis_unit
        rejected: Quaternion = Quaternion._from_parts(q.w, kept)
        if float(np.linalg.norm(rejected.wxyz)) < _DEGENERATE_NORM:
            return Quaternion.identity()
        return rejected.normalized()

    def project_axis(self, axis: NDArray[np.float64]) -> Quaternion:
        """Return the twist about axis from a swing-twist decomposition."""
        q: Quaternion = self.normalized()
        axis_unit: NDArray[np.float64] = unit(as_vector3(axis, "axis"))
        twist: Quaternion = Quaternion._from_parts(
            q.w, float(q.vec @ axis_unit) * axis_unit
        )
        if float(np.linalg.norm(twist.wxyz)) < _DEGENERATE_NORM:
            raise ValueError("rotation has no twist about the given axis")
        return twist.normalized()

    def yaw(self) -> float:
        """Return the heading angle about +Y, wrapped to [-pi, pi)."""
        twist: Quaternion = self.project_axis(POS_Y)
        return Angle.wrap_pi(2.0 * math.atan2(float(twist.vec[1]), twist.w))

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return a writable copy of the components."""
        return self.wxyz.copy()

    def almost_equal(self, other: Quaternion, atol: float = 1e-9) -> bool:
        """Compare rotations, treating q and -q as the same rotation."""
        return bool(
            np.allclose(self.wxyz, other.wxyz, atol=atol)
            or np.allclose(self.wxyz, -other.wxyz, atol=atol)
        )

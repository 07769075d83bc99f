################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Coarse yaw alignment of a tracker mount from paired acceleration vectors.

The reference (head) and tracker measure the same acceleration event in a
shared, gravity-leveled frame. Only the difference between their horizontal
headings matters: it tells how the tracker is turned about the vertical
axis relative to the reference. Axis-aligned inputs land on one of four
mount classes; anything else gives a continuous yaw correction.

The result only seeds yaw_fix before fine calibration.
"""

from __future__ import annotations

import enum
import math
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.units import Angle
from tracker_calibration.math_utils.vectors import FORWARD_AXIS
from tracker_calibration.math_utils.vectors import UP_AXIS
from tracker_calibration.math_utils.vectors import as_vector3
from tracker_calibration.math_utils.vectors import norm
from tracker_calibration.math_utils.vectors import reject


# Units: unitless. Meaning: minimum horizontal length of a unit input vector
_HORIZONTAL_EPS: float = 1e-6


class MountAlignmentError(Exception):
    """Raised when alignment vectors cannot define a heading."""


class MountClass(enum.Enum):
    """Discrete tracker mount directions, by aligned forward vector."""

    FRONT = "front"
    RIGHT = "right"
    BACK = "back"
    LEFT = "left"

    @property
    def yaw_rad(self) -> float:
        """Return the heading of this mount class about the vertical axis."""
        return _MOUNT_CLASS_YAW[self]


_MOUNT_CLASS_YAW: dict[MountClass, float] = {
    MountClass.FRONT: 0.0,
    MountClass.RIGHT: 0.5 * math.pi,
    MountClass.BACK: math.pi,
    MountClass.LEFT: -0.5 * math.pi,
}


def _unit_heading(vec: NDArray[np.float64], name: str) -> NDArray[np.float64]:
    """Normalize a vector and require a usable horizontal component."""
    v: NDArray[np.float64] = as_vector3(vec, name)
    length: float = norm(v)
    if length <= 0.0 or not math.isfinite(length):
        raise MountAlignmentError(f"{name} must be non-zero")
    v = v / length
    if norm(reject(v, UP_AXIS)) < _HORIZONTAL_EPS:
        raise MountAlignmentError(f"{name} has no horizontal component")
    return v


def yaw_angle(v: NDArray[np.float64]) -> float:
    """Return the heading of v projected onto the horizontal plane."""
    return math.atan2(float(v[0]), float(v[2]))


def align_mount_yaw(
    hmd_vec: NDArray[np.float64], tracker_vec: NDArray[np.float64]
) -> NDArray[np.float64]:
    """Return the tracker's direction re-expressed in the reference heading.

    Raises:
        MountAlignmentError: When either vector is zero or vertical
    """
    hmd_unit: NDArray[np.float64] = _unit_heading(hmd_vec, "hmd_vec")
    tracker_unit: NDArray[np.float64] = _unit_heading(tracker_vec, "tracker_vec")

    hmd_rot: Quaternion = Quaternion.rotation_about_y(yaw_angle(hmd_unit)).inverse()
    tracker_rot: Quaternion = Quaternion.rotation_about_y(yaw_angle(tracker_unit))
    return (tracker_rot * hmd_rot).rotate(FORWARD_AXIS)


def classify_mount(aligned: NDArray[np.float64]) -> MountClass:
    """Return the mount class nearest to an aligned forward vector."""
    heading: float = yaw_angle(as_vector3(aligned, "aligned"))
    return min(
        MountClass,
        key=lambda mount: abs(Angle.wrap_pi(heading - mount.yaw_rad)),
    )


def mount_yaw_from_observations(
    pairs: Iterable[tuple[NDArray[np.float64], NDArray[np.float64]]],
) -> float:
    """Return the circular mean mount yaw over (hmd, tracker) vector pairs.

    Raises:
        MountAlignmentError: When no pairs are given or the headings cancel
    """
    sum_sin: float = 0.0
    sum_cos: float = 0.0
    count: int = 0
    for hmd_vec, tracker_vec in pairs:
        heading: float = yaw_angle(align_mount_yaw(hmd_vec, tracker_vec))
        sum_sin += math.sin(heading)
        sum_cos += math.cos(heading)
        count += 1

    if count == 0:
        raise MountAlignmentError("at least one observation pair is required")
    if math.hypot(sum_sin, sum_cos) < _HORIZONTAL_EPS * count:
        raise MountAlignmentError("observation headings cancel out")

    return math.atan2(sum_sin, sum_cos)


def seed_yaw_fix(
    pairs: Iterable[tuple[NDArray[np.float64], NDArray[np.float64]]],
    *,
    snap_to_class: bool = False,
) -> Quaternion:
    """Return a yaw_fix seed from (hmd, tracker) vector pairs.

    The tracker heading is the mount yaw; yaw_fix is the rotation undoing it.
    """
    yaw: float = mount_yaw_from_observations(pairs)
    if snap_to_class:
        forward: NDArray[np.float64] = Quaternion.rotation_about_y(yaw).rotate(
            FORWARD_AXIS
        )
        yaw = classify_mount(forward).yaw_rad
    return Quaternion.rotation_about_y(-yaw)

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Centripetal acceleration model for a segment swinging about its pivot.

The angular displacement between two orientations over dt is treated as
uniform circular motion of radius r = bone_length:

    v = angle * r / dt
    a = v^2 / r = angle^2 * r / dt^2

The segment's rest pose points down (-Y), so the acceleration of its end
points back along the rotated rest direction toward the pivot.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.vectors import NEG_Y


class MotionModelError(Exception):
    """Raised when motion model preconditions are violated."""


def estimate_centripetal_accel(
    rot_prev: Quaternion,
    rot_cur: Quaternion,
    bone_length: float,
    dt: float,
) -> NDArray[np.float64]:
    """Return the centripetal acceleration in m/s^2 for one time step.

    Args:
        rot_prev: Segment orientation at the previous sample
        rot_cur: Segment orientation at the current sample
        bone_length: Radius of the circular motion in meters
        dt: Elapsed time between the samples in seconds, must be positive

    Raises:
        MotionModelError: When dt is not positive and finite
    """
    if not math.isfinite(dt) or dt <= 0.0:
        raise MotionModelError(f"dt must be positive and finite, got {dt}")

    angle_diff: float = rot_prev.angle_to(rot_cur)
    magnitude: float = (angle_diff * angle_diff * bone_length) / (dt * dt)

    direction: NDArray[np.float64] = -rot_cur.rotate(NEG_Y)
    return direction * magnitude

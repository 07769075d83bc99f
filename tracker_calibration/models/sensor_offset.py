################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Chip orientation on the tracker board."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from tracker_calibration.math_utils.quat import Quaternion


# Units: radians. Meaning: board rotation of the IMU on stock trackers (270 deg)
DEFAULT_SENSOR_OFFSET_RAD: float = -0.5 * math.pi


def sensor_offset_rotation(angle_rad: float = DEFAULT_SENSOR_OFFSET_RAD) -> Quaternion:
    """Return the rotation about the board normal (+Z) for a mounted IMU chip."""
    return Quaternion.rotation_about_z(angle_rad)


def apply_sensor_offset(
    accel: NDArray[np.float64],
    angle_rad: float = DEFAULT_SENSOR_OFFSET_RAD,
) -> NDArray[np.float64]:
    """Rotate a chip-frame acceleration into the tracker board frame."""
    return sensor_offset_rotation(angle_rad).rotate(accel)

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Flat parameter vector for the calibration search.

Layout, 5 scalars:

    [bone_length, tracker_placement, att_x, att_z, yaw]

(att_x, 0, att_z) is the rotation vector of the attachment fix after its
vertical component is rejected. Rotation about the vertical axis is carried
by yaw alone, since attachment and yaw cannot be told apart there.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.vectors import UP_AXIS


VECTOR_SIZE: int = 5

INDEX_BONE_LENGTH: int = 0
INDEX_TRACKER_PLACEMENT: int = 1
INDEX_ATT_X: int = 2
INDEX_ATT_Z: int = 3
INDEX_YAW: int = 4

# Slice of the scalars searched by the rotation optimizer
ROTATION_SLICE: slice = slice(INDEX_ATT_X, VECTOR_SIZE)


def project_attachment(attachment_fix: Quaternion) -> Quaternion:
    """Reject the vertical component of the attachment's rotation axis."""
    return attachment_fix.reject_axis(UP_AXIS)


def project_calibration(params: TrackerCalibration) -> TrackerCalibration:
    """Return params with the attachment fix restricted to the search space."""
    return TrackerCalibration(
        bone_length=params.bone_length,
        tracker_placement=params.tracker_placement,
        attachment_fix=project_attachment(params.attachment_fix),
        yaw_fix=params.yaw_fix,
    )


def to_vector(params: TrackerCalibration) -> NDArray[np.float64]:
    """Flatten calibration parameters into a search vector."""
    rotvec: NDArray[np.float64] = project_attachment(params.attachment_fix).as_rotvec()
    return np.array(
        [
            params.bone_length,
            params.tracker_placement,
            rotvec[0],
            rotvec[2],
            params.yaw_rad,
        ],
        dtype=np.float64,
    )


def from_vector(x: NDArray[np.float64]) -> TrackerCalibration:
    """Build calibration parameters from a search vector."""
    vec: NDArray[np.float64] = np.asarray(x, dtype=np.float64)
    if vec.shape != (VECTOR_SIZE,):
        raise ValueError(f"x must have shape ({VECTOR_SIZE},)")
    attachment: Quaternion = Quaternion.from_rotvec(
        np.array([vec[INDEX_ATT_X], 0.0, vec[INDEX_ATT_Z]], dtype=np.float64)
    )
    return TrackerCalibration(
        bone_length=float(vec[INDEX_BONE_LENGTH]),
        tracker_placement=float(vec[INDEX_TRACKER_PLACEMENT]),
        attachment_fix=project_attachment(attachment),
        yaw_fix=Quaternion.rotation_about_y(float(vec[INDEX_YAW])),
    )

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the calibration search vector."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.typing import NDArray

from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.solver.parameterization import INDEX_YAW
from tracker_calibration.solver.parameterization import VECTOR_SIZE
from tracker_calibration.solver.parameterization import from_vector
from tracker_calibration.solver.parameterization import project_attachment
from tracker_calibration.solver.parameterization import project_calibration
from tracker_calibration.solver.parameterization import to_vector


def test_vector_roundtrip_in_search_space() -> None:
    """Parameters inside the search space survive flattening."""
    params: TrackerCalibration = TrackerCalibration(
        bone_length=0.42,
        tracker_placement=0.3,
        attachment_fix=Quaternion.from_rotvec(np.array([0.3, 0.0, -0.2])),
        yaw_fix=Quaternion.rotation_about_y(-1.1),
    )
    x: NDArray[np.float64] = to_vector(params)
    assert x.shape == (VECTOR_SIZE,)
    assert x[INDEX_YAW] == pytest.approx(-1.1)
    assert from_vector(x).almost_equal(params, atol=1e-9)


def test_projection_drops_vertical_axis() -> None:
    """The attachment's vertical rotation-axis component is removed."""
    attachment: Quaternion = Quaternion.from_rotvec(np.array([0.3, 0.8, -0.2]))
    projected: Quaternion = project_attachment(attachment)
    assert projected.wxyz[2] == pytest.approx(0.0, abs=1e-12)

    params: TrackerCalibration = TrackerCalibration(
        bone_length=0.5,
        tracker_placement=0.5,
        attachment_fix=attachment,
        yaw_fix=Quaternion.identity(),
    )
    assert project_calibration(params).attachment_fix.almost_equal(projected)


def test_from_vector_rejects_bad_shape() -> None:
    """Search vectors have exactly five entries."""
    with pytest.raises(ValueError):
        from_vector(np.zeros(4))

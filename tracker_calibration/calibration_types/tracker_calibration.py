################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Calibration parameter record for one tracker."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import replace

import numpy as np

from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.vectors import UP_AXIS


# Units: meters. Meaning: nominal segment length used to seed a session
NOMINAL_BONE_LENGTH_M: float = 0.5

# Units: unitless. Meaning: nominal tracker placement used to seed a session
NOMINAL_TRACKER_PLACEMENT: float = 0.5


class TrackerCalibrationError(Exception):
    """Raised when tracker calibration parameters are invalid."""


@dataclass(frozen=True)
class TrackerCalibration:
    """Mounting parameters that map raw tracker samples to the body frame.

    Values are immutable; each refinement step returns a new record.

    Attributes:
        bone_length: Pivot to reference point distance in meters, positive
        tracker_placement: Fraction of bone_length where the tracker sits,
            clamped to [0, 1] (0 at the pivot, 1 at the distal end)
        attachment_fix: Rotation from calibrated segment orientation to the
            tracker's physical mounting orientation
        yaw_fix: Rotation about the vertical axis only, correcting the
            tracker's heading reference against the segment's
    """

    bone_length: float
    tracker_placement: float
    attachment_fix: Quaternion
    yaw_fix: Quaternion

    def __post_init__(self) -> None:
        """Validate lengths and enforce rotation invariants."""
        bone_length: float = float(self.bone_length)
        if not math.isfinite(bone_length) or bone_length <= 0.0:
            raise TrackerCalibrationError("bone_length must be positive and finite")

        placement: float = float(self.tracker_placement)
        if not math.isfinite(placement):
            raise TrackerCalibrationError("tracker_placement must be finite")

        if not isinstance(self.attachment_fix, Quaternion):
            raise TrackerCalibrationError("attachment_fix must be a Quaternion")
        if not isinstance(self.yaw_fix, Quaternion):
            raise TrackerCalibrationError("yaw_fix must be a Quaternion")

        try:
            attachment_fix: Quaternion = self.attachment_fix.normalized()
            yaw_fix: Quaternion = self.yaw_fix.project_axis(UP_AXIS)
        except ValueError as exc:
            raise TrackerCalibrationError(str(exc)) from exc

        placement = float(np.clip(placement, 0.0, 1.0))

        object.__setattr__(self, "bone_length", bone_length)
        object.__setattr__(self, "tracker_placement", placement)
        object.__setattr__(self, "attachment_fix", attachment_fix)
        object.__setattr__(self, "yaw_fix", yaw_fix)

    @classmethod
    def seed(
        cls,
        *,
        bone_length: float = NOMINAL_BONE_LENGTH_M,
        tracker_placement: float = NOMINAL_TRACKER_PLACEMENT,
        yaw_rad: float = 0.0,
    ) -> TrackerCalibration:
        """Return the starting estimate for a calibration session."""
        return cls(
            bone_length=bone_length,
            tracker_placement=tracker_placement,
            attachment_fix=Quaternion.identity(),
            yaw_fix=Quaternion.rotation_about_y(yaw_rad),
        )

    @property
    def yaw_rad(self) -> float:
        """Return the yaw correction angle in radians."""
        return self.yaw_fix.yaw()

    @property
    def lever_arm(self) -> float:
        """Return the tracker's distance from the pivot in meters."""
        return self.bone_length * self.tracker_placement

    def with_yaw(self, yaw_rad: float) -> TrackerCalibration:
        """Return a copy with a new yaw correction."""
        return replace(self, yaw_fix=Quaternion.rotation_about_y(yaw_rad))

    def almost_equal(self, other: TrackerCalibration, atol: float = 1e-6) -> bool:
        """Check approximate equality of all parameters."""
        return (
            abs(self.bone_length - other.bone_length) <= atol
            and abs(self.tracker_placement - other.tracker_placement) <= atol
            and self.attachment_fix.almost_equal(other.attachment_fix, atol=atol)
            and self.yaw_fix.almost_equal(other.yaw_fix, atol=atol)
        )

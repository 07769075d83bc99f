################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Sample types for calibration timelines."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.vectors import as_vector3


class TrackerFrameError(Exception):
    """Raised when a tracker frame is malformed."""


@dataclass(frozen=True)
class TrackerFrame:
    """One tracker sample, expressed either raw or calibrated.

    Attributes:
        head_accel: Reference acceleration at the segment pivot in m/s^2
        rot: Segment orientation
        accel: Acceleration at the tracker in m/s^2, same frame as rot
        time_offset: Seconds since the previous frame, 0 for the first
    """

    head_accel: np.ndarray
    rot: Quaternion
    accel: np.ndarray
    time_offset: float = 0.0

    def __post_init__(self) -> None:
        """Validate frame fields."""
        try:
            head_accel: np.ndarray = as_vector3(self.head_accel, "head_accel")
            accel: np.ndarray = as_vector3(self.accel, "accel")
        except ValueError as exc:
            raise TrackerFrameError(str(exc)) from exc
        if not isinstance(self.rot, Quaternion):
            raise TrackerFrameError("rot must be a Quaternion")

        time_offset: float = float(self.time_offset)
        if not math.isfinite(time_offset) or time_offset < 0.0:
            raise TrackerFrameError("time_offset must be finite and non-negative")

        head_accel.setflags(write=False)
        accel.setflags(write=False)
        object.__setattr__(self, "head_accel", head_accel)
        object.__setattr__(self, "accel", accel)
        object.__setattr__(self, "time_offset", time_offset)


# Ordered, time-increasing sequence of frames
Timeline = tuple[TrackerFrame, ...]

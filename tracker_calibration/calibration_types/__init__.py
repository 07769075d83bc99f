################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Type definitions for tracker calibration."""

from __future__ import annotations

from tracker_calibration.calibration_types.calibration_report import (
    CalibrationReport,
)
from tracker_calibration.calibration_types.calibration_report import (
    CalibrationStatus,
)
from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibrationError,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.calibration_types.tracker_frame import TrackerFrameError


__all__ = [
    "CalibrationReport",
    "CalibrationStatus",
    "Timeline",
    "TrackerCalibration",
    "TrackerCalibrationError",
    "TrackerFrame",
    "TrackerFrameError",
]

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Conversions between raw tracker samples and the calibrated body frame."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable
from typing import Iterable
from typing import TypeVar

import numpy as np

from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.math_utils.quat import Quaternion


T = TypeVar("T")


def to_raw(params: TrackerCalibration, frame: TrackerFrame) -> TrackerFrame:
    """Return the raw sample a tracker would report for a calibrated frame."""
    attachment_inv: Quaternion = params.attachment_fix.inverse()
    rot_raw: Quaternion = params.yaw_fix.inverse() * frame.rot * attachment_inv

    # Acceleration only sees the attachment, yaw is already part of rot
    sensor_rot: Quaternion = frame.rot * attachment_inv
    accel_raw: np.ndarray = sensor_rot.inverse().rotate(frame.accel)

    return replace(frame, rot=rot_raw, accel=accel_raw)


def to_calibrated(params: TrackerCalibration, frame: TrackerFrame) -> TrackerFrame:
    """Return the body-frame sample for a raw tracker frame."""
    rot_cal: Quaternion = params.yaw_fix * frame.rot * params.attachment_fix

    sensor_rot: Quaternion = rot_cal * params.attachment_fix.inverse()
    accel_cal: np.ndarray = sensor_rot.rotate(frame.accel)

    return replace(frame, rot=rot_cal, accel=accel_cal)


def scan_timeline(
    frames: Iterable[TrackerFrame],
    step: Callable[[TrackerFrame | None, TrackerFrame], T],
) -> list[T]:
    """Apply step to every frame together with its immediate predecessor.

    The first frame is paired with None.
    """
    results: list[T] = []
    prev: TrackerFrame | None = None
    for frame in frames:
        results.append(step(prev, frame))
        prev = frame
    return results


def to_calibrated_timeline(
    params: TrackerCalibration, timeline: Iterable[TrackerFrame]
) -> Timeline:
    """Convert a raw timeline to calibrated frames."""
    return tuple(
        scan_timeline(timeline, lambda _, frame: to_calibrated(params, frame))
    )


def to_raw_timeline(
    params: TrackerCalibration, timeline: Iterable[TrackerFrame]
) -> Timeline:
    """Convert a calibrated timeline to raw frames."""
    return tuple(scan_timeline(timeline, lambda _, frame: to_raw(params, frame)))

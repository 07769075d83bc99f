################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Centripetal consistency error for calibrated tracker samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import NDArray

from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.config.calibration_params import ErrorParams
from tracker_calibration.math_utils.vectors import angle_between
from tracker_calibration.math_utils.vectors import norm
from tracker_calibration.models.frame_transform import scan_timeline
from tracker_calibration.models.frame_transform import to_calibrated_timeline
from tracker_calibration.models.motion_model import estimate_centripetal_accel


# Sentinel for a sample without enough signal to be scored
INSUFFICIENT_SIGNAL: float = -1.0


@dataclass(frozen=True)
class TimelineErrorStats:
    """Aggregate error over a timeline.

    Attributes:
        total: Sum of all scored sample errors, sentinels count as zero
        scored_count: Number of frame pairs that produced an error value
        sentinel_count: Number of frame pairs with insufficient signal
    """

    total: float
    scored_count: int
    sentinel_count: int

    @property
    def mean(self) -> float | None:
        """Return the mean error over scored samples."""
        if self.scored_count == 0:
            return None
        return self.total / self.scored_count


def sample_error(
    params: TrackerCalibration,
    prev_frame: TrackerFrame | None,
    cur_frame: TrackerFrame,
    thresholds: ErrorParams | None = None,
) -> float:
    """Return the calibration error of one calibrated sample.

    With strong angular motion the error is the angle between the predicted
    centripetal acceleration and the measured acceleration relative to the
    head. With weak motion but an informative head acceleration it is the
    magnitude of that relative acceleration. Otherwise the sample cannot be
    scored and INSUFFICIENT_SIGNAL is returned.
    """
    if prev_frame is None:
        return 0.0
    if thresholds is None:
        thresholds = ErrorParams()

    estimated: NDArray[np.float64] = estimate_centripetal_accel(
        prev_frame.rot,
        cur_frame.rot,
        params.bone_length,
        cur_frame.time_offset,
    )
    actual: NDArray[np.float64] = cur_frame.accel - cur_frame.head_accel

    if norm(estimated) > thresholds.motion_threshold_mps2:
        return angle_between(estimated, actual)
    if norm(cur_frame.head_accel) > thresholds.head_accel_threshold_mps2:
        return norm(actual)
    return INSUFFICIENT_SIGNAL


def sample_errors(
    params: TrackerCalibration,
    timeline: Iterable[TrackerFrame],
    thresholds: ErrorParams | None = None,
) -> list[float]:
    """Return the error of every frame after the first, raw timeline input."""
    calibrated: Timeline = to_calibrated_timeline(params, timeline)
    errors: list[float] = scan_timeline(
        calibrated,
        lambda prev, cur: sample_error(params, prev, cur, thresholds),
    )
    return errors[1:]


def timeline_error_stats(
    params: TrackerCalibration,
    timeline: Iterable[TrackerFrame],
    thresholds: ErrorParams | None = None,
) -> TimelineErrorStats:
    """Return the aggregate error of a raw timeline with sample counts."""
    total: float = 0.0
    scored: int = 0
    sentinels: int = 0
    for error in sample_errors(params, timeline, thresholds):
        if error < 0.0:
            sentinels += 1
            continue
        total += error
        scored += 1
    return TimelineErrorStats(
        total=total,
        scored_count=scored,
        sentinel_count=sentinels,
    )


def timeline_error(
    params: TrackerCalibration,
    timeline: Iterable[TrackerFrame],
    thresholds: ErrorParams | None = None,
) -> float:
    """Return the summed error of a raw timeline.

    Samples with insufficient signal contribute zero rather than being
    excluded; see timeline_error_stats for counts and a per-sample mean.
    """
    return timeline_error_stats(params, timeline, thresholds).total

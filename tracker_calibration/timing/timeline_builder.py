################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Construction of calibration timelines from timestamped samples."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.config.calibration_params import TimelineParams
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.timing.time_base import TimeBase
from tracker_calibration.timing.time_base import sec_to_ns


@dataclass(frozen=True)
class TimedSample:
    """Raw tracker sample with an absolute timestamp.

    Attributes:
        t_ns: Sample time in nanoseconds
        head_accel: Reference acceleration at the pivot in m/s^2
        rot: Raw tracker orientation
        accel: Raw tracker acceleration in m/s^2
    """

    t_ns: int
    head_accel: np.ndarray
    rot: Quaternion
    accel: np.ndarray

    def __post_init__(self) -> None:
        """Validate the timestamp."""
        if not isinstance(self.t_ns, int) or isinstance(self.t_ns, bool):
            raise ValueError("t_ns must be an int")


def time_base_for(params: TimelineParams | None) -> TimeBase:
    """Return the time base enforcing the configured sample spacing."""
    if params is None:
        params = TimelineParams()
    return TimeBase(min_step_ns=max(sec_to_ns(params.min_time_offset_sec), 1))


def build_timeline(
    samples: Iterable[TimedSample],
    params: TimelineParams | None = None,
) -> Timeline:
    """Return a timeline with per-frame offsets from absolute timestamps.

    Raises:
        TimeBaseError: When timestamps do not strictly increase
    """
    time_base: TimeBase = time_base_for(params)
    frames: list[TrackerFrame] = []
    t_prev_ns: int | None = None
    for sample in samples:
        frames.append(
            TrackerFrame(
                head_accel=sample.head_accel,
                rot=sample.rot,
                accel=sample.accel,
                time_offset=time_base.step_sec(t_prev_ns, sample.t_ns),
            )
        )
        t_prev_ns = sample.t_ns
    return tuple(frames)

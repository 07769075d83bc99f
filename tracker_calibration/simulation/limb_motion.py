################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Simulation helpers for limb-mounted tracker timelines."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.models.frame_transform import to_raw_timeline
from tracker_calibration.models.motion_model import estimate_centripetal_accel


# s, sample interval for a 20 Hz stream
SAMPLE_DT_SEC: float = 0.05

# rad/s, mean sweep rate of the limb about the vertical axis
SWEEP_RATE_RADS: float = 1.5

# rad, mean tilt of the limb away from hanging straight down
TILT_MEAN_RAD: float = 0.7


@dataclass(frozen=True)
class ScriptStep:
    """One step of a scripted limb motion.

    Attributes:
        head_accel: Reference acceleration at the pivot in m/s^2
        rot: Calibrated segment orientation
    """

    head_accel: np.ndarray
    rot: Quaternion


def default_limb_script(
    sample_count: int = 40,
    dt: float = SAMPLE_DT_SEC,
) -> list[ScriptStep]:
    """Return a swinging-limb script with continuously varying rotation axes.

    The limb sweeps about the vertical axis at a rate that never stops while
    its tilt oscillates, so every step carries enough angular motion to be
    scored by direction. The head acceleration wanders in all three axes.
    """
    steps: list[ScriptStep] = []
    for index in range(sample_count):
        t: float = index * dt
        sweep: float = SWEEP_RATE_RADS * t + 0.4 * math.sin(2.1 * t)
        tilt: float = TILT_MEAN_RAD + 0.4 * math.sin(3.3 * t + 0.3)
        sweep_rot: Quaternion = Quaternion.rotation_about_y(sweep)
        tilt_rot: Quaternion = Quaternion.rotation_about_z(tilt)
        head_accel: np.ndarray = np.array(
            [
                0.6 * math.cos(3.1 * t),
                0.3 * math.sin(1.9 * t + 0.2),
                0.5 * math.sin(2.7 * t + 1.0),
            ],
            dtype=np.float64,
        )
        steps.append(ScriptStep(head_accel=head_accel, rot=sweep_rot * tilt_rot))
    return steps


def simulate_calibrated_timeline(
    script: Sequence[ScriptStep],
    truth: TrackerCalibration,
    dt: float = SAMPLE_DT_SEC,
) -> Timeline:
    """Return the calibrated timeline a tracker at truth would observe.

    The tracker sees the head acceleration plus the segment's centripetal
    acceleration scaled by its placement along the segment.
    """
    frames: list[TrackerFrame] = []
    for index, step in enumerate(script):
        if index == 0:
            frames.append(
                TrackerFrame(
                    head_accel=step.head_accel,
                    rot=step.rot,
                    accel=step.head_accel,
                    time_offset=0.0,
                )
            )
            continue
        centripetal: np.ndarray = estimate_centripetal_accel(
            script[index - 1].rot, step.rot, truth.bone_length, dt
        )
        frames.append(
            TrackerFrame(
                head_accel=step.head_accel,
                rot=step.rot,
                accel=step.head_accel + centripetal * truth.tracker_placement,
                time_offset=dt,
            )
        )
    return tuple(frames)


def simulate_raw_timeline(
    script: Sequence[ScriptStep],
    truth: TrackerCalibration,
    dt: float = SAMPLE_DT_SEC,
) -> Timeline:
    """Return the raw timeline a tracker mounted with truth would report."""
    return to_raw_timeline(truth, simulate_calibrated_timeline(script, truth, dt))

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for the calibration optimizer."""

from __future__ import annotations

from dataclasses import replace

import numpy as np
import pytest

from tracker_calibration.calibration_types.calibration_report import (
    CalibrationReport,
)
from tracker_calibration.calibration_types.calibration_report import (
    CalibrationStatus,
)
from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.calibration_types.tracker_frame import TrackerFrame
from tracker_calibration.config.calibration_params import CalibrationParams
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.models.error_model import timeline_error
from tracker_calibration.models.motion_model import MotionModelError
from tracker_calibration.simulation.limb_motion import default_limb_script
from tracker_calibration.simulation.limb_motion import simulate_raw_timeline
from tracker_calibration.solver.optimizer import apply_lever_arm
from tracker_calibration.solver.optimizer import fit_lever_arm
from tracker_calibration.solver.optimizer import optimize_calibration


TRUTH: TrackerCalibration = TrackerCalibration(
    bone_length=0.6,
    tracker_placement=0.7,
    attachment_fix=Quaternion.from_rotvec(np.array([0.3, 0.0, -0.2])),
    yaw_fix=Quaternion.rotation_about_y(0.7),
)


def _raw_timeline(sample_count: int = 30) -> Timeline:
    return simulate_raw_timeline(default_limb_script(sample_count), TRUTH)


def _params(**solver_overrides: object) -> CalibrationParams:
    params: CalibrationParams = CalibrationParams.defaults()
    return params.replace(solver=replace(params.solver, **solver_overrides))


@pytest.mark.parametrize("seed_yaw", [0.7, 0.4, 1.1])
def test_recovers_truth_from_yaw_seed(seed_yaw: float) -> None:
    """Starting near the aligned yaw recovers every parameter."""
    raw: Timeline = _raw_timeline()
    seed: TrackerCalibration = TrackerCalibration.seed(
        bone_length=TRUTH.bone_length, yaw_rad=seed_yaw
    )

    result: TrackerCalibration
    report: CalibrationReport
    result, report = optimize_calibration(raw, seed, _params(yaw_restarts=False))

    assert report.is_usable
    assert report.final_cost < report.initial_cost
    assert report.final_cost == pytest.approx(0.0, abs=1e-4)
    assert report.usable_samples == len(raw) - 1
    assert result.bone_length == pytest.approx(TRUTH.bone_length)
    assert result.tracker_placement == pytest.approx(
        TRUTH.tracker_placement, abs=1e-4
    )
    assert result.attachment_fix.almost_equal(TRUTH.attachment_fix, atol=1e-4)
    assert result.yaw_rad == pytest.approx(TRUTH.yaw_rad, abs=1e-4)


def test_yaw_restarts_escape_wrong_mount_class() -> None:
    """A seed a quarter turn off still finds the true yaw."""
    raw: Timeline = _raw_timeline()
    seed: TrackerCalibration = TrackerCalibration.seed(
        bone_length=TRUTH.bone_length, yaw_rad=TRUTH.yaw_rad + 1.6
    )

    result: TrackerCalibration
    report: CalibrationReport
    result, report = optimize_calibration(raw, seed, _params(yaw_restarts=True))

    assert report.is_usable
    assert timeline_error(result, raw) == pytest.approx(0.0, abs=1e-4)
    assert result.yaw_rad == pytest.approx(TRUTH.yaw_rad, abs=1e-4)


def test_iteration_cap_is_usable() -> None:
    """Running out of iterations reports the best estimate, not a failure."""
    raw: Timeline = _raw_timeline()
    seed: TrackerCalibration = TrackerCalibration.seed(yaw_rad=0.4)

    report: CalibrationReport
    _, report = optimize_calibration(
        raw, seed, _params(max_iters=2, yaw_restarts=False)
    )

    assert report.status is CalibrationStatus.ITERATION_CAP
    assert report.is_usable
    assert report.iterations <= 2
    assert report.message is not None


@pytest.mark.parametrize("frame_count", [0, 1])
def test_degenerate_timelines(frame_count: int) -> None:
    """Timelines without frame pairs are reported as degenerate."""
    raw: Timeline = _raw_timeline()[:frame_count]
    seed: TrackerCalibration = TrackerCalibration.seed(yaw_rad=0.4)

    result: TrackerCalibration
    report: CalibrationReport
    result, report = optimize_calibration(raw, seed)

    assert report.status is CalibrationStatus.DEGENERATE
    assert not report.is_usable
    assert report.final_cost == 0.0
    assert report.iterations == 0
    assert result is seed


def test_single_scored_pair_is_degenerate() -> None:
    """One scored frame pair cannot pin down the rotations."""
    raw: Timeline = _raw_timeline(2)
    seed: TrackerCalibration = TrackerCalibration.seed(
        bone_length=TRUTH.bone_length, yaw_rad=0.0
    )

    result: TrackerCalibration
    report: CalibrationReport
    result, report = optimize_calibration(raw, seed)

    assert report.status is CalibrationStatus.DEGENERATE
    assert not report.is_usable
    assert report.usable_samples == 1
    assert report.iterations == 0
    assert result is seed


def test_two_scored_pairs_are_enough() -> None:
    """Two scored frame pairs recover the true yaw."""
    raw: Timeline = _raw_timeline(3)
    seed: TrackerCalibration = TrackerCalibration.seed(
        bone_length=TRUTH.bone_length, yaw_rad=0.4
    )

    result: TrackerCalibration
    report: CalibrationReport
    result, report = optimize_calibration(raw, seed)

    assert report.is_usable
    assert report.usable_samples == 2
    assert result.yaw_rad == pytest.approx(TRUTH.yaw_rad, abs=1e-3)


def test_all_sentinel_timeline_is_degenerate() -> None:
    """A still tracker with a still reference has nothing to calibrate."""
    zero: np.ndarray = np.zeros(3, dtype=float)
    frames: Timeline = tuple(
        TrackerFrame(
            head_accel=zero,
            rot=Quaternion.identity(),
            accel=zero,
            time_offset=0.0 if index == 0 else 0.05,
        )
        for index in range(5)
    )

    report: CalibrationReport
    _, report = optimize_calibration(frames, TrackerCalibration.seed())

    assert report.status is CalibrationStatus.DEGENERATE
    assert report.sentinel_samples == 4
    assert report.mean_error is None


def test_zero_time_offset_raises() -> None:
    """A frame pair without elapsed time is a precondition violation."""
    raw: Timeline = _raw_timeline(5)
    broken: Timeline = raw[:2] + (replace(raw[2], time_offset=0.0),) + raw[3:]
    with pytest.raises(MotionModelError):
        optimize_calibration(broken, TrackerCalibration.seed())


def test_fit_lever_arm_recovers_distance() -> None:
    """The closed-form fit returns bone_length * tracker_placement."""
    raw: Timeline = _raw_timeline()
    guess: TrackerCalibration = replace(TRUTH, tracker_placement=0.2)
    lever_arm: float | None = fit_lever_arm(guess, raw)
    assert lever_arm == pytest.approx(TRUTH.lever_arm, abs=1e-9)


def test_apply_lever_arm_grows_bone_when_needed() -> None:
    """A lever arm longer than the segment extends it to the tracker."""
    seed: TrackerCalibration = TrackerCalibration.seed(bone_length=0.5)
    inside: TrackerCalibration = apply_lever_arm(seed, 0.2)
    assert inside.bone_length == pytest.approx(0.5)
    assert inside.tracker_placement == pytest.approx(0.4)

    outside: TrackerCalibration = apply_lever_arm(seed, 0.8)
    assert outside.bone_length == pytest.approx(0.8)
    assert outside.tracker_placement == pytest.approx(1.0)

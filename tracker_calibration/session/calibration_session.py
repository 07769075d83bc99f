################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Calibration session for a single tracker."""

from __future__ import annotations

import logging

import numpy as np

from tracker_calibration.calibration_types.calibration_report import (
    CalibrationReport,
)
from tracker_calibration.calibration_types.tracker_calibration import (
    TrackerCalibration,
)
from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.config.calibration_config import CalibrationConfig
from tracker_calibration.config.calibration_params import CalibrationParams
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.math_utils.vectors import as_vector3
from tracker_calibration.models.mount_aligner import align_mount_yaw
from tracker_calibration.models.mount_aligner import seed_yaw_fix
from tracker_calibration.session.pose_reset import PoseResetHandler
from tracker_calibration.solver.optimizer import optimize_calibration
from tracker_calibration.timing.time_base import TimeBase
from tracker_calibration.timing.timeline_builder import TimedSample
from tracker_calibration.timing.timeline_builder import build_timeline
from tracker_calibration.timing.timeline_builder import time_base_for


_LOG: logging.Logger = logging.getLogger(__name__)


class CalibrationSessionError(Exception):
    """Raised for calibration session contract violations."""


class CalibrationSession:
    """Collects one tracker's samples and runs the two-stage calibration.

    Alignment observations seed the yaw fix, then the optimizer refines all
    parameters over the sampled timeline. Each run works on a snapshot of
    the samples collected so far.
    """

    def __init__(
        self, *, tracker_name: str, config: CalibrationConfig | None = None
    ) -> None:
        """Initialize the session with configuration."""
        if not tracker_name:
            raise CalibrationSessionError("tracker_name must be set")
        if config is None:
            config = CalibrationConfig.defaults()
        if not isinstance(config, CalibrationConfig):
            raise CalibrationSessionError("config must be a CalibrationConfig")

        self._tracker_name: str = tracker_name
        self._params: CalibrationParams = config.params
        self._time_base: TimeBase = time_base_for(self._params.timeline)

        self._alignments: list[tuple[np.ndarray, np.ndarray]] = []
        self._samples: list[TimedSample] = []
        self._last_t_ns: int | None = None

        self._result: TrackerCalibration | None = None
        self._report: CalibrationReport | None = None

    @property
    def tracker_name(self) -> str:
        """Return the name of the tracker being calibrated."""
        return self._tracker_name

    @property
    def sample_count(self) -> int:
        """Return the number of collected samples."""
        return len(self._samples)

    @property
    def result(self) -> TrackerCalibration | None:
        """Return the parameters of the last usable run."""
        return self._result

    @property
    def report(self) -> CalibrationReport | None:
        """Return the report of the last run."""
        return self._report

    def reset(self) -> None:
        """Discard collected data and results."""
        self._alignments.clear()
        self._samples.clear()
        self._last_t_ns = None
        self._result = None
        self._report = None

    def add_alignment(self, hmd_vec: np.ndarray, tracker_vec: np.ndarray) -> None:
        """Record a paired reference/tracker acceleration for the yaw seed."""
        hmd: np.ndarray = as_vector3(hmd_vec, "hmd_vec")
        tracker: np.ndarray = as_vector3(tracker_vec, "tracker_vec")
        # Reject unusable pairs now rather than at seeding time
        align_mount_yaw(hmd, tracker)
        self._alignments.append((hmd, tracker))

    def add_sample(self, sample: TimedSample) -> None:
        """Append a raw sample; timestamps must strictly increase."""
        self._time_base.validate_increasing(self._last_t_ns, sample.t_ns)
        self._samples.append(sample)
        self._last_t_ns = sample.t_ns

    def seed(self) -> TrackerCalibration:
        """Return the starting estimate from nominal values and alignments."""
        yaw_fix: Quaternion = Quaternion.identity()
        if self._alignments:
            yaw_fix = seed_yaw_fix(
                self._alignments,
                snap_to_class=self._params.seed.snap_to_mount_class,
            )
        return TrackerCalibration(
            bone_length=self._params.seed.bone_length_m,
            tracker_placement=self._params.seed.tracker_placement,
            attachment_fix=Quaternion.identity(),
            yaw_fix=yaw_fix,
        )

    def timeline(self) -> Timeline:
        """Return an immutable snapshot of the collected samples."""
        return build_timeline(self._samples, self._params.timeline)

    def run(self) -> tuple[TrackerCalibration, CalibrationReport]:
        """Optimize the calibration over the samples collected so far."""
        calibration: TrackerCalibration
        report: CalibrationReport
        calibration, report = optimize_calibration(
            self.timeline(), self.seed(), self._params
        )
        self._report = report
        self._result = calibration if report.is_usable else None
        _LOG.info(
            "Tracker %s calibration finished with status %s",
            self._tracker_name,
            report.status.value,
        )
        return calibration, report

    def apply(self, handler: PoseResetHandler, reason: str) -> TrackerCalibration:
        """Hand the calibration to the pose solver with a full reset.

        Raises:
            CalibrationSessionError: When no usable calibration exists
        """
        result: TrackerCalibration = self._usable_result()
        _LOG.info(
            "Applying calibration for tracker %s (%s)", self._tracker_name, reason
        )
        handler.reset_trackers_full(reason)
        return result

    def apply_yaw(self, handler: PoseResetHandler, reason: str) -> TrackerCalibration:
        """Hand the calibration over with a yaw-only reset.

        Used after a pass that only refined the heading, so the pose solver
        keeps its pitch and roll.
        """
        result: TrackerCalibration = self._usable_result()
        _LOG.info(
            "Applying yaw calibration for tracker %s (%s)", self._tracker_name, reason
        )
        handler.reset_trackers_yaw(reason)
        return result

    def _usable_result(self) -> TrackerCalibration:
        if self._result is None:
            raise CalibrationSessionError(
                f"No usable calibration for tracker {self._tracker_name}"
            )
        return self._result

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for timeline construction from timestamped samples."""

from __future__ import annotations

import numpy as np
import pytest

from tracker_calibration.calibration_types.tracker_frame import Timeline
from tracker_calibration.config.calibration_params import TimelineParams
from tracker_calibration.math_utils.quat import Quaternion
from tracker_calibration.timing.time_base import TimeBaseError
from tracker_calibration.timing.timeline_builder import TimedSample
from tracker_calibration.timing.timeline_builder import build_timeline


def _sample(t_ns: int) -> TimedSample:
    return TimedSample(
        t_ns=t_ns,
        head_accel=np.array([0.0, 0.0, 1.0]),
        rot=Quaternion.rotation_about_y(1e-9 * t_ns),
        accel=np.array([0.0, 1.0, 0.0]),
    )


def test_offsets_from_stamps() -> None:
    """Offsets are the time since the previous sample."""
    timeline: Timeline = build_timeline(
        [_sample(1_000_000_000), _sample(1_050_000_000), _sample(1_150_000_000)]
    )
    assert [frame.time_offset for frame in timeline] == pytest.approx(
        [0.0, 0.05, 0.1]
    )


def test_empty_input() -> None:
    """No samples give an empty timeline."""
    assert build_timeline([]) == ()


def test_rejects_repeated_stamp() -> None:
    """Repeated or decreasing stamps fail fast."""
    with pytest.raises(TimeBaseError):
        build_timeline([_sample(100), _sample(100)])
    with pytest.raises(TimeBaseError):
        build_timeline([_sample(100), _sample(50)])


def test_min_time_offset_policy() -> None:
    """Samples closer than the configured spacing are rejected."""
    params: TimelineParams = TimelineParams(min_time_offset_sec=0.01)
    with pytest.raises(TimeBaseError):
        build_timeline([_sample(0), _sample(5_000_000)], params)


def test_sample_requires_int_stamp() -> None:
    """Timestamps are integer nanoseconds."""
    with pytest.raises(ValueError):
        TimedSample(
            t_ns=1.5,  # type: ignore[arg-type]
            head_accel=np.zeros(3),
            rot=Quaternion.identity(),
            accel=np.zeros(3),
        )

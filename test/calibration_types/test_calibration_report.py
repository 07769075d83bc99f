################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for CalibrationReport."""

from __future__ import annotations

import math

import pytest

from tracker_calibration.calibration_types.calibration_report import (
    CalibrationReport,
)
from tracker_calibration.calibration_types.calibration_report import (
    CalibrationStatus,
)


def _report(**overrides: object) -> CalibrationReport:
    fields: dict[str, object] = {
        "status": CalibrationStatus.CONVERGED,
        "initial_cost": 1.0,
        "final_cost": 0.0,
        "iterations": 10,
        "usable_samples": 5,
        "sentinel_samples": 0,
    }
    fields.update(overrides)
    return CalibrationReport(**fields)  # type: ignore[arg-type]


def test_report_valid() -> None:
    """Valid reports should construct."""
    report: CalibrationReport = _report(mean_error=0.0, message="ok")
    assert report.is_usable


def test_usable_statuses() -> None:
    """Only the degenerate status is unusable."""
    assert _report(status=CalibrationStatus.ITERATION_CAP).is_usable
    assert not _report(status=CalibrationStatus.DEGENERATE).is_usable


def test_report_rejects_invalid_fields() -> None:
    """Invalid field values should raise."""
    with pytest.raises(ValueError):
        _report(status="converged")
    with pytest.raises(ValueError):
        _report(final_cost=math.nan)
    with pytest.raises(ValueError):
        _report(initial_cost=-1.0)
    with pytest.raises(ValueError):
        _report(iterations=-1)
    with pytest.raises(ValueError):
        _report(usable_samples=1.5)
    with pytest.raises(ValueError):
        _report(mean_error=math.inf)

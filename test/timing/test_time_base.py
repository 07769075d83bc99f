################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Tests for time base helpers."""

from __future__ import annotations

import math

import pytest

from tracker_calibration.timing.time_base import TimeBase
from tracker_calibration.timing.time_base import TimeBaseError
from tracker_calibration.timing.time_base import ns_to_sec
from tracker_calibration.timing.time_base import sec_to_ns


def test_sec_to_ns_and_back() -> None:
    """Ensure round-trip conversion is stable."""
    t_ns: int = sec_to_ns(0.05)
    assert t_ns == 50_000_000
    assert ns_to_sec(t_ns) == pytest.approx(0.05)


def test_sec_to_ns_rejects_invalid() -> None:
    """Ensure invalid seconds inputs are rejected."""
    with pytest.raises(TimeBaseError):
        sec_to_ns(-1.0)
    with pytest.raises(TimeBaseError):
        sec_to_ns(math.nan)
    with pytest.raises(TimeBaseError):
        ns_to_sec(-5)


def test_validate_increasing_rejects_equal() -> None:
    """Repeated stamps would give a zero time step."""
    base: TimeBase = TimeBase()
    base.validate_increasing(None, 0)
    base.validate_increasing(5, 6)
    with pytest.raises(TimeBaseError):
        base.validate_increasing(5, 5)
    with pytest.raises(TimeBaseError):
        base.validate_increasing(5, 4)
    with pytest.raises(TimeBaseError):
        base.validate_increasing(None, -1)


def test_min_step() -> None:
    """Stamps closer than min_step_ns are rejected."""
    base: TimeBase = TimeBase(min_step_ns=1000)
    base.validate_increasing(0, 1000)
    with pytest.raises(TimeBaseError):
        base.validate_increasing(0, 999)
    with pytest.raises(TimeBaseError):
        TimeBase(min_step_ns=0)


def test_step_sec() -> None:
    """The first stamp has no step, later ones return seconds."""
    base: TimeBase = TimeBase()
    assert base.step_sec(None, 123) == 0.0
    assert base.step_sec(1_000_000_000, 1_250_000_000) == pytest.approx(0.25)

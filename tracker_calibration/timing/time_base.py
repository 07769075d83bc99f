################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Timing utilities for calibration timelines."""

from __future__ import annotations

import math
from dataclasses import dataclass


class TimeBaseError(Exception):
    """Raised for invalid durations or out-of-order timestamps."""


def sec_to_ns(t_sec: float) -> int:
    """Return whole nanoseconds for a non-negative duration in seconds."""
    if not math.isfinite(t_sec):
        raise TimeBaseError("Seconds must be finite")
    if t_sec < 0.0:
        raise TimeBaseError("Seconds must be non-negative")
    return int(round(t_sec * 1e9))


def ns_to_sec(t_ns: int) -> float:
    """Return seconds for a non-negative nanosecond count."""
    if t_ns < 0:
        raise TimeBaseError("Nanoseconds must be non-negative")
    return float(t_ns) / 1e9


@dataclass(frozen=True)
class TimeBase:
    """Validate timestamp sequences for calibration timelines.

    The motion model divides by the time between samples, so consecutive
    stamps must be strictly increasing and at least min_step_ns apart.

    Attributes:
        min_step_ns: Minimum spacing between consecutive stamps
    """

    min_step_ns: int = 1

    def __post_init__(self) -> None:
        """Validate the minimum spacing."""
        if self.min_step_ns < 1:
            raise TimeBaseError("min_step_ns must be at least 1")

    def validate_increasing(self, t_prev_ns: int | None, t_ns: int) -> None:
        """Validate that a timestamp advances past its predecessor."""
        if t_ns < 0:
            raise TimeBaseError("Timestamp must be non-negative")
        if t_prev_ns is None:
            return
        if t_ns - t_prev_ns < self.min_step_ns:
            raise TimeBaseError(
                f"Timestamp {t_ns} must follow {t_prev_ns} by at least "
                f"{self.min_step_ns} ns"
            )

    def step_sec(self, t_prev_ns: int | None, t_ns: int) -> float:
        """Return the validated time since the previous stamp in seconds."""
        self.validate_increasing(t_prev_ns, t_ns)
        if t_prev_ns is None:
            return 0.0
        return ns_to_sec(t_ns - t_prev_ns)

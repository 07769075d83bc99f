################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Report types for calibration optimizer runs."""

from __future__ import annotations

import enum
from dataclasses import dataclass

import numpy as np


class CalibrationStatus(enum.Enum):
    """Outcome of a calibration optimizer run."""

    # Cost improvement fell below tolerance
    CONVERGED = "converged"
    # Iteration cap reached, best parameters still usable
    ITERATION_CAP = "iteration_cap"
    # Too few usable samples, no calibration was produced
    DEGENERATE = "degenerate"


@dataclass(frozen=True)
class CalibrationReport:
    """Summary of one calibration optimizer run.

    Attributes:
        status: Outcome of the run
        initial_cost: Timeline error of the seed parameters
        final_cost: Timeline error of the returned parameters
        iterations: Optimizer iterations executed across all restarts
        usable_samples: Frame pairs that produced a non-sentinel error
        sentinel_samples: Frame pairs with insufficient signal
        mean_error: final_cost over usable_samples, None when nothing scored
        message: Optional status message
    """

    status: CalibrationStatus
    initial_cost: float
    final_cost: float
    iterations: int
    usable_samples: int
    sentinel_samples: int
    mean_error: float | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        """Validate report fields."""
        if not isinstance(self.status, CalibrationStatus):
            raise ValueError("status must be a CalibrationStatus")
        _require_finite_non_negative(self.initial_cost, "initial_cost")
        _require_finite_non_negative(self.final_cost, "final_cost")
        for name in ("iterations", "usable_samples", "sentinel_samples"):
            value: object = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an int")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.mean_error is not None:
            _require_finite_non_negative(self.mean_error, "mean_error")

    @property
    def is_usable(self) -> bool:
        """Return True when the run produced usable parameters."""
        return self.status is not CalibrationStatus.DEGENERATE


def _require_finite_non_negative(value: float, name: str) -> None:
    """Require a finite, non-negative scalar value."""
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite")
    if value < 0.0:
        raise ValueError(f"{name} must be non-negative")

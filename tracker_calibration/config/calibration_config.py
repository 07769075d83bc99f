################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for tracker calibration."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .calibration_params import CalibrationParams
from .calibration_params import CalibrationParamsError


class CalibrationConfigError(Exception):
    """Raised when calibration configuration validation fails."""


@dataclass(frozen=True)
class CalibrationConfig:
    """Convenience wrapper around calibration parameters."""

    params: CalibrationParams

    def __init__(self, params: CalibrationParams) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(self, "params", params)
        self.validate()

    @classmethod
    def defaults(cls) -> CalibrationConfig:
        """Return a validated configuration with default parameters."""
        return cls(CalibrationParams.defaults())

    def validate(self) -> None:
        """Validate parameter invariants and cross-namespace policies."""
        try:
            self.params.validate()
        except CalibrationParamsError as exc:
            raise CalibrationConfigError(str(exc)) from exc

        if self.params.solver.initial_step_rad >= math.pi:
            raise CalibrationConfigError("solver.initial_step_rad must be below pi")

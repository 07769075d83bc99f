################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Structured configuration schema for tracker calibration."""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any


# Minimum centripetal estimate magnitude in m/s^2 for the direction metric
ERROR_MOTION_THRESHOLD_MPS2: float = 0.01
# Minimum head acceleration magnitude in m/s^2 for the magnitude metric
ERROR_HEAD_ACCEL_THRESHOLD_MPS2: float = 0.01

# Nominal segment length in meters for a fresh session
SEED_BONE_LENGTH_M: float = 0.5
# Nominal tracker placement fraction for a fresh session
SEED_TRACKER_PLACEMENT: float = 0.5
# Snap the coarse yaw seed to the nearest front/right/back/left mount
SEED_SNAP_TO_MOUNT_CLASS: bool = False

# Maximum optimizer iterations per restart
SOLVER_MAX_ITERS: int = 2000
# Absolute cost change tolerance for convergence
SOLVER_FATOL: float = 1e-8
# Absolute parameter change tolerance for convergence in radians
SOLVER_XATOL: float = 1e-8
# Initial simplex step in radians
SOLVER_INITIAL_STEP_RAD: float = 0.25
# Also start from the other three quarter-turn yaw classes
SOLVER_YAW_RESTARTS: bool = True
# Fit the lever arm (bone_length * tracker_placement) after the rotation search
SOLVER_FIT_LEVER_ARM: bool = True
# Minimum number of scored frame pairs for a usable calibration
SOLVER_MIN_USABLE_SAMPLES: int = 2

# Minimum time between consecutive samples in seconds
TIMELINE_MIN_TIME_OFFSET_SEC: float = 0.0


class CalibrationParamsError(Exception):
    """Raised when calibration parameter validation fails."""


def _require_positive(value: float, name: str) -> None:
    """Require a positive, finite value."""
    if not math.isfinite(value) or value <= 0.0:
        raise CalibrationParamsError(f"{name} must be positive")


def _require_non_negative(value: float, name: str) -> None:
    """Require a non-negative, finite value."""
    if not math.isfinite(value) or value < 0.0:
        raise CalibrationParamsError(f"{name} must be non-negative")


def _require_positive_int(value: int, name: str) -> None:
    """Require a positive integer value."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise CalibrationParamsError(f"{name} must be an int")
    if value <= 0:
        raise CalibrationParamsError(f"{name} must be positive")


@dataclass(frozen=True)
class ErrorParams:
    """Signal thresholds for the per-sample error metric."""

    # Minimum centripetal estimate magnitude in m/s^2
    motion_threshold_mps2: float = ERROR_MOTION_THRESHOLD_MPS2
    # Minimum head acceleration magnitude in m/s^2
    head_accel_threshold_mps2: float = ERROR_HEAD_ACCEL_THRESHOLD_MPS2


@dataclass(frozen=True)
class SeedParams:
    """Starting estimate for a calibration session."""

    # Nominal segment length in meters
    bone_length_m: float = SEED_BONE_LENGTH_M
    # Nominal tracker placement fraction
    tracker_placement: float = SEED_TRACKER_PLACEMENT
    # Snap the coarse yaw seed to a discrete mount class
    snap_to_mount_class: bool = SEED_SNAP_TO_MOUNT_CLASS


@dataclass(frozen=True)
class SolverParams:
    """Optimizer configuration parameters."""

    # Maximum optimizer iterations per restart
    max_iters: int = SOLVER_MAX_ITERS
    # Absolute cost change tolerance
    fatol: float = SOLVER_FATOL
    # Absolute parameter change tolerance in radians
    xatol: float = SOLVER_XATOL
    # Initial simplex step in radians
    initial_step_rad: float = SOLVER_INITIAL_STEP_RAD
    # Try the other quarter-turn yaw classes as extra starting points
    yaw_restarts: bool = SOLVER_YAW_RESTARTS
    # Fit the lever arm after the rotation search
    fit_lever_arm: bool = SOLVER_FIT_LEVER_ARM
    # Minimum number of scored frame pairs
    min_usable_samples: int = SOLVER_MIN_USABLE_SAMPLES


@dataclass(frozen=True)
class TimelineParams:
    """Timeline construction policy."""

    # Minimum time between consecutive samples in seconds
    min_time_offset_sec: float = TIMELINE_MIN_TIME_OFFSET_SEC


@dataclass(frozen=True)
class CalibrationParams:
    """Complete configuration tree for tracker calibration."""

    error: ErrorParams
    seed: SeedParams
    solver: SolverParams
    timeline: TimelineParams

    @classmethod
    def defaults(cls) -> CalibrationParams:
        """Return the default calibration parameter tree."""
        return cls(
            error=ErrorParams(),
            seed=SeedParams(),
            solver=SolverParams(),
            timeline=TimelineParams(),
        )

    def validate(self) -> None:
        """Validate parameter invariants and constraints."""
        _require_non_negative(
            self.error.motion_threshold_mps2, "error.motion_threshold_mps2"
        )
        _require_non_negative(
            self.error.head_accel_threshold_mps2, "error.head_accel_threshold_mps2"
        )

        _require_positive(self.seed.bone_length_m, "seed.bone_length_m")
        _require_non_negative(self.seed.tracker_placement, "seed.tracker_placement")
        if self.seed.tracker_placement > 1.0:
            raise CalibrationParamsError("seed.tracker_placement must not exceed 1")

        _require_positive_int(self.solver.max_iters, "solver.max_iters")
        _require_positive(self.solver.fatol, "solver.fatol")
        _require_positive(self.solver.xatol, "solver.xatol")
        _require_positive(self.solver.initial_step_rad, "solver.initial_step_rad")
        _require_positive_int(
            self.solver.min_usable_samples, "solver.min_usable_samples"
        )

        _require_non_negative(
            self.timeline.min_time_offset_sec, "timeline.min_time_offset_sec"
        )

    def replace(self, **namespace_overrides: Any) -> CalibrationParams:
        """Return a modified copy of the parameters."""
        return replace(self, **namespace_overrides)

    def as_nested_dict(self) -> dict[str, Any]:
        """Return a nested dict representation for debugging."""
        return _dataclass_to_dict(self)


def _dataclass_to_dict(value: Any) -> Any:
    """Convert dataclasses into plain Python values."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            field.name: _dataclass_to_dict(getattr(value, field.name))
            for field in fields(value)
        }
    return value

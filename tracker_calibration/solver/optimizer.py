################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Nelder-Mead search for tracker calibration parameters."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np
from numpy.typing import NDArray
from scipy import optimize

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
from tracker_calibration.config.calibration_params import ErrorParams
from tracker_calibration.config.calibration_params import SolverParams
from tracker_calibration.math_utils.units import PhysicalConstants
from tracker_calibration.math_utils.vectors import norm
from tracker_calibration.models.error_model import TimelineErrorStats
from tracker_calibration.models.error_model import timeline_error
from tracker_calibration.models.error_model import timeline_error_stats
from tracker_calibration.models.frame_transform import scan_timeline
from tracker_calibration.models.frame_transform import to_calibrated_timeline
from tracker_calibration.models.motion_model import estimate_centripetal_accel
from tracker_calibration.solver.parameterization import INDEX_YAW
from tracker_calibration.solver.parameterization import ROTATION_SLICE
from tracker_calibration.solver.parameterization import from_vector
from tracker_calibration.solver.parameterization import project_calibration
from tracker_calibration.solver.parameterization import to_vector


_LOG: logging.Logger = logging.getLogger(__name__)

# Units: radians. Meaning: yaw offsets of the extra quarter-turn starting points
_YAW_RESTART_OFFSETS: tuple[float, ...] = (0.5 * math.pi, math.pi, -0.5 * math.pi)


@dataclass(frozen=True)
class _SearchResult:
    x: NDArray[np.float64]
    cost: float
    iterations: int
    converged: bool


def _initial_simplex(x0: NDArray[np.float64], step: float) -> NDArray[np.float64]:
    """Return an axis-aligned simplex around x0."""
    dim: int = int(x0.shape[0])
    simplex: NDArray[np.float64] = np.tile(x0, (dim + 1, 1))
    simplex[1:] += np.eye(dim, dtype=np.float64) * step
    return simplex


def _search_rotations(
    x_seed: NDArray[np.float64],
    frames: Timeline,
    thresholds: ErrorParams,
    solver: SolverParams,
) -> _SearchResult:
    """Minimize timeline error over the attachment and yaw scalars."""
    x_full: NDArray[np.float64] = np.array(x_seed, dtype=np.float64)

    def cost(x_rot: NDArray[np.float64]) -> float:
        x_full[ROTATION_SLICE] = x_rot
        return timeline_error(from_vector(x_full), frames, thresholds)

    x0: NDArray[np.float64] = np.array(x_seed[ROTATION_SLICE], dtype=np.float64)
    result: optimize.OptimizeResult = optimize.minimize(
        cost,
        x0,
        method="Nelder-Mead",
        options={
            "maxiter": solver.max_iters,
            "xatol": solver.xatol,
            "fatol": solver.fatol,
            "initial_simplex": _initial_simplex(x0, solver.initial_step_rad),
        },
    )

    x_best: NDArray[np.float64] = np.array(x_seed, dtype=np.float64)
    x_best[ROTATION_SLICE] = result.x
    return _SearchResult(
        x=x_best,
        cost=float(result.fun),
        iterations=int(result.nit),
        converged=bool(result.success),
    )


def _lever_terms(
    prev: TrackerFrame | None,
    cur: TrackerFrame,
    bone_length: float,
    thresholds: ErrorParams,
) -> tuple[float, float]:
    """Return one sample's numerator and denominator for the lever-arm fit."""
    if prev is None:
        return 0.0, 0.0
    # Centripetal acceleration per meter of radius
    unit_accel: NDArray[np.float64] = estimate_centripetal_accel(
        prev.rot, cur.rot, 1.0, cur.time_offset
    )
    if norm(unit_accel) * bone_length <= thresholds.motion_threshold_mps2:
        return 0.0, 0.0
    actual: NDArray[np.float64] = cur.accel - cur.head_accel
    return float(actual @ unit_accel), float(unit_accel @ unit_accel)


def fit_lever_arm(
    params: TrackerCalibration,
    timeline: Iterable[TrackerFrame],
    thresholds: ErrorParams | None = None,
) -> float | None:
    """Return the least-squares tracker distance from the pivot in meters.

    Only samples scored by direction contribute. Returns None when no
    sample has enough motion.
    """
    if thresholds is None:
        thresholds = ErrorParams()
    calibrated: Timeline = to_calibrated_timeline(params, timeline)
    terms: list[tuple[float, float]] = scan_timeline(
        calibrated,
        lambda prev, cur: _lever_terms(prev, cur, params.bone_length, thresholds),
    )
    numerator: float = sum(term[0] for term in terms)
    denominator: float = sum(term[1] for term in terms)
    if denominator <= PhysicalConstants.EPS:
        return None
    return max(numerator / denominator, 0.0)


def apply_lever_arm(params: TrackerCalibration, lever_arm: float) -> TrackerCalibration:
    """Split a lever arm into placement, growing bone_length only if needed."""
    if lever_arm <= params.bone_length:
        return TrackerCalibration(
            bone_length=params.bone_length,
            tracker_placement=lever_arm / params.bone_length,
            attachment_fix=params.attachment_fix,
            yaw_fix=params.yaw_fix,
        )
    return TrackerCalibration(
        bone_length=lever_arm,
        tracker_placement=1.0,
        attachment_fix=params.attachment_fix,
        yaw_fix=params.yaw_fix,
    )


def optimize_calibration(
    timeline: Iterable[TrackerFrame],
    seed: TrackerCalibration,
    params: CalibrationParams | None = None,
) -> tuple[TrackerCalibration, CalibrationReport]:
    """Search for the calibration that best explains a raw timeline.

    Returns the refined parameters and a report. When the timeline has too
    few usable samples the seed is returned unchanged with a DEGENERATE
    status, which callers must treat as no calibration.
    """
    if params is None:
        params = CalibrationParams.defaults()
    thresholds: ErrorParams = params.error
    solver: SolverParams = params.solver

    frames: Timeline = tuple(timeline)
    start: TrackerCalibration = project_calibration(seed)
    initial: TimelineErrorStats = timeline_error_stats(start, frames, thresholds)

    if len(frames) < 2 or initial.scored_count < solver.min_usable_samples:
        _LOG.warning(
            "Calibration input is degenerate: %d frames, %d scored samples",
            len(frames),
            initial.scored_count,
        )
        return seed, CalibrationReport(
            status=CalibrationStatus.DEGENERATE,
            initial_cost=initial.total,
            final_cost=initial.total,
            iterations=0,
            usable_samples=initial.scored_count,
            sentinel_samples=initial.sentinel_count,
            mean_error=initial.mean,
            message="insufficient usable samples",
        )

    x_seed: NDArray[np.float64] = to_vector(start)
    starts: list[NDArray[np.float64]] = [x_seed]
    if solver.yaw_restarts:
        for offset in _YAW_RESTART_OFFSETS:
            x_start: NDArray[np.float64] = np.array(x_seed, dtype=np.float64)
            x_start[INDEX_YAW] += offset
            starts.append(x_start)

    best: _SearchResult | None = None
    iterations: int = 0
    for x_start in starts:
        result: _SearchResult = _search_rotations(x_start, frames, thresholds, solver)
        iterations += result.iterations
        _LOG.debug(
            "Search from yaw %.3f rad: cost %.6g after %d iterations",
            float(x_start[INDEX_YAW]),
            result.cost,
            result.iterations,
        )
        if best is None or result.cost < best.cost:
            best = result
        if best.converged and best.cost <= solver.fatol:
            break
    assert best is not None

    calibration: TrackerCalibration = from_vector(best.x)
    if solver.fit_lever_arm:
        lever_arm: float | None = fit_lever_arm(calibration, frames, thresholds)
        if lever_arm is not None:
            calibration = apply_lever_arm(calibration, lever_arm)

    final: TimelineErrorStats = timeline_error_stats(calibration, frames, thresholds)
    status: CalibrationStatus = (
        CalibrationStatus.CONVERGED
        if best.converged
        else CalibrationStatus.ITERATION_CAP
    )
    _LOG.info(
        "Calibration %s: cost %.6g -> %.6g in %d iterations",
        status.value,
        initial.total,
        final.total,
        iterations,
    )
    return calibration, CalibrationReport(
        status=status,
        initial_cost=initial.total,
        final_cost=final.total,
        iterations=iterations,
        usable_samples=final.scored_count,
        sentinel_samples=final.sentinel_count,
        mean_error=final.mean,
        message=None if best.converged else "iteration cap reached",
    )

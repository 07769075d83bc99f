################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Angle helpers and numeric constants."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


class PhysicalConstants:
    """Numeric constants used by math utilities."""

    EPS: float = 1e-12


class Angle:
    """Angle wrapping helpers."""

    @staticmethod
    def wrap_pi(angle_rad: float) -> float:
        """Wrap an angle to the interval [-pi, pi)."""
        if not math.isfinite(angle_rad):
            raise ValueError("angle_rad must be finite")
        return float((angle_rad + math.pi) % (2.0 * math.pi) - math.pi)


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")

################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Interface of the pose solver that consumes calibrated trackers."""

from __future__ import annotations

from typing import Protocol


class PoseResetHandler(Protocol):
    """Reset operations exposed by a full-body pose solver.

    The reason string is recorded by the solver for auditing.
    """

    def reset_trackers_full(self, reason: str) -> None:
        """Zero tracker orientations and align them to the reference yaw."""

    def reset_trackers_yaw(self, reason: str) -> None:
        """Realign tracker yaw, keeping pitch and roll."""

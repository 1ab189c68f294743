# State validation
# FORBIDDEN: logging, analysis.*

import numpy as np
from typing import List, Tuple

from ..core.math_utils import TWO_PI
from ..core.types import MAX_ANGULAR_VELOCITY, VehicleConfig, VehicleState


class StateValidator:
    """Check vehicle states against the integrator's invariants."""

    # Float slack for clamped quantities
    TOLERANCE = 1e-9

    @classmethod
    def validate(cls, state: VehicleState, config: VehicleConfig) -> Tuple[bool, List[str]]:
        """Check state is within physical bounds.

        Args:
            state: Vehicle state
            config: Config the state was integrated with

        Returns:
            (is_valid, list of violations)
        """
        violations = []

        if not cls.check_nan_inf(state):
            violations.append("State contains NaN or Inf")
            return False, violations

        if state.position.shape != (3,):
            violations.append(f"Position shape must be (3,), got {state.position.shape}")
        if state.velocity.shape != (2,):
            violations.append(f"Velocity shape must be (2,), got {state.velocity.shape}")

        speed = state.speed
        if speed > config.max_speed + cls.TOLERANCE:
            violations.append(f"Speed {speed:.6f} exceeds max_speed {config.max_speed}")

        if abs(state.angular_velocity) > MAX_ANGULAR_VELOCITY + cls.TOLERANCE:
            violations.append(f"Angular velocity out of bounds: {state.angular_velocity}")

        if not -TWO_PI < state.heading < TWO_PI:
            violations.append(f"Heading not wrapped: {state.heading}")

        return len(violations) == 0, violations

    @classmethod
    def check_nan_inf(cls, state: VehicleState) -> bool:
        """Quick check for NaN or Inf values.

        Args:
            state: Vehicle state

        Returns:
            True if state is clean (no NaN/Inf)
        """
        return bool(np.all(np.isfinite(state.to_array())))

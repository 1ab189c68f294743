# Electronic stability control
# FORBIDDEN: logging, any I/O
# Stateless: every decision is made from the current frame only

import numpy as np

from .types import VehicleConfig

MIN_FORWARD_SPEED = 0.01      # m/s, below this slip is undefined
ANTI_SPIN_SLIP_FRACTION = 0.5
COUNTER_STEER_SLIP_FRACTION = 0.3
COUNTER_STEER_MIN_YAW_RATE = 0.5  # rad/s


def slip_angle(forward_velocity: float, lateral_velocity: float) -> float:
    """Unsigned angle between heading and direction of travel.

    Args:
        forward_velocity: Car-space forward velocity in m/s
        lateral_velocity: Car-space lateral velocity in m/s

    Returns:
        Slip angle in radians, 0 when the car is not moving forward
    """
    if abs(forward_velocity) < MIN_FORWARD_SPEED:
        return 0.0
    return float(np.arctan2(abs(lateral_velocity), abs(forward_velocity)))


def is_sliding(slip: float, config: VehicleConfig) -> bool:
    """True when ESC should intervene this frame."""
    return config.stability_enabled and slip > config.max_slip_angle


def stability_factor(slip: float, config: VehicleConfig) -> float:
    """Multiplier for engine and cornering force.

    Binary gate on a continuous attenuation value. Braking and drag
    are never attenuated.
    """
    if is_sliding(slip, config):
        return config.stability_attenuation
    return 1.0


def needs_anti_spin(slip: float, config: VehicleConfig) -> bool:
    """Slip past half the limit: soften yaw torque and damp harder."""
    return slip > ANTI_SPIN_SLIP_FRACTION * config.max_slip_angle


def counter_steer_active(slip: float, angular_velocity: float, config: VehicleConfig) -> bool:
    return (
        slip > COUNTER_STEER_SLIP_FRACTION * config.max_slip_angle
        and abs(angular_velocity) > COUNTER_STEER_MIN_YAW_RATE
    )

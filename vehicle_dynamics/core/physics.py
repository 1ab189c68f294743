# Physics calculations
# FORBIDDEN: logging, any I/O
# Scalar force-model terms; composed per frame in forces.py

import numpy as np

from .math_utils import clamp

AIR_DENSITY = 1.225       # kg/m³
GRAVITY = 9.81            # m/s²
MAX_TIMESTEP = 0.05       # s

MIN_THROTTLE_FACTOR = 0.2
MIN_BRAKE_EFFICIENCY = 0.2
FULL_BRAKE_SPEED = 5.0    # m/s

LATERAL_FRICTION_BASE = 0.3
LATERAL_FRICTION_FULL_SPEED = 3.0  # m/s

MAX_STEERING_ANGLE = 0.5  # rad
STEERING_FULL_KMH = 30.0
STEERING_MID_KMH = 80.0
STEERING_MID_EFFECTIVENESS = 0.6
STEERING_FLOOR_KMH = 120.0
STEERING_FLOOR = 0.3

CORNERING_FORCE_BASE = 8000.0      # N
CORNERING_FORCE_PER_KMH = 20.0     # N per km/h
LOAD_SENSITIVITY = 0.2

COUNTER_STEER_TORQUE = 2000.0      # N·m


def clamp_timestep(dt: float) -> float:
    """Bound the frame time so a slow frame cannot stiffen the integration."""
    return min(dt, MAX_TIMESTEP)


def throttle_factor(forward_velocity: float, max_speed: float) -> float:
    """Engine response taper near top speed.

    Falls off quadratically with speed but never below 20%, so the car
    can always reach max_speed against drag.

    Args:
        forward_velocity: Car-space forward velocity in m/s
        max_speed: Configured top speed in m/s

    Returns:
        Multiplier in [0.2, 1]
    """
    return max(MIN_THROTTLE_FACTOR, 1.0 - (forward_velocity / max_speed) ** 2)


def brake_efficiency(forward_velocity: float) -> float:
    """Braking effect, weakened near standstill."""
    return clamp(abs(forward_velocity) / FULL_BRAKE_SPEED, MIN_BRAKE_EFFICIENCY, 1.0)


def aero_drag(
    velocity: float,
    drag_coefficient: float = 0.3,
    frontal_area: float = 2.0,
    air_density: float = AIR_DENSITY,
) -> float:
    """Calculate aerodynamic drag.

    F = 0.5 * rho * v^2 * Cd * A

    Args:
        velocity: Vehicle velocity in m/s
        drag_coefficient: Drag coefficient
        frontal_area: Frontal area in m²
        air_density: Air density in kg/m³

    Returns:
        Drag force in Newtons
    """
    return 0.5 * air_density * velocity ** 2 * drag_coefficient * frontal_area


def rolling_resistance_force(mass: float, coefficient: float) -> float:
    """Constant rolling resistance magnitude in Newtons."""
    return coefficient * mass * GRAVITY


def normal_force(mass: float, tire_grip: float = 1.0) -> float:
    """Vertical tire load scaled by surface grip."""
    return mass * GRAVITY * tire_grip


def lateral_friction_scale(lateral_velocity: float) -> float:
    """Progressive friction build-up with lateral speed.

    30% of the friction limit at zero lateral speed, rising linearly to
    100% at 3 m/s. The weak initial grip is what lets the rear step out.
    """
    ratio = min(abs(lateral_velocity) / LATERAL_FRICTION_FULL_SPEED, 1.0)
    return LATERAL_FRICTION_BASE + (1.0 - LATERAL_FRICTION_BASE) * ratio


def steering_effectiveness(speed_kmh: float) -> float:
    """Speed-dependent steering authority.

    Three segments over forward speed:
        below 30 km/h   1.0
        30 to 80 km/h   linear down to 0.6
        80 to 120 km/h  linear down to the 0.3 floor, held beyond

    Args:
        speed_kmh: Absolute forward speed in km/h

    Returns:
        Effectiveness in [0.3, 1]
    """
    speed_kmh = abs(speed_kmh)
    if speed_kmh <= STEERING_FULL_KMH:
        return 1.0
    if speed_kmh <= STEERING_MID_KMH:
        t = (speed_kmh - STEERING_FULL_KMH) / (STEERING_MID_KMH - STEERING_FULL_KMH)
        return 1.0 - t * (1.0 - STEERING_MID_EFFECTIVENESS)
    t = (speed_kmh - STEERING_MID_KMH) / (STEERING_FLOOR_KMH - STEERING_MID_KMH)
    return max(STEERING_FLOOR, STEERING_MID_EFFECTIVENESS - t * (STEERING_MID_EFFECTIVENESS - STEERING_FLOOR))


def adjusted_cornering_stiffness(cornering_stiffness: float, speed_kmh: float) -> float:
    """Cornering stiffness with load-sensitivity falloff at speed."""
    return cornering_stiffness / (1.0 + LOAD_SENSITIVITY * (speed_kmh / 100.0) ** 2)


def cornering_force_limit(speed_kmh: float) -> float:
    return CORNERING_FORCE_BASE + CORNERING_FORCE_PER_KMH * abs(speed_kmh)


def slip_angle_signed(lateral_velocity: float, forward_velocity: float) -> float:
    """Signed slip angle used for the cornering response."""
    return float(np.arctan2(lateral_velocity, abs(forward_velocity)))

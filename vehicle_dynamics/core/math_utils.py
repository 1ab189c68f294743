# Mathematical utilities
# FORBIDDEN: logging, any I/O

import numpy as np
from typing import Tuple

TWO_PI = 2.0 * np.pi
MS_TO_KMH = 3.6


def wrap_heading(angle: float) -> float:
    """Wrap heading into the open interval (-2π, 2π).

    Sign is preserved, so a car that has turned 370° left reads 10°
    and one that has turned 370° right reads -10°.

    Args:
        angle: Heading in radians

    Returns:
        Wrapped heading
    """
    return float(np.fmod(angle, TWO_PI))


def local_to_world(longitudinal: float, lateral: float, heading: float) -> Tuple[float, float]:
    """Rotate a car-space vector into the world ground plane.

    Args:
        longitudinal: Component along the car's forward axis
        lateral: Component along the car's left axis
        heading: Car heading in radians

    Returns:
        World (x, z) components
    """
    sin_h = np.sin(heading)
    cos_h = np.cos(heading)
    return (
        float(longitudinal * sin_h + lateral * cos_h),
        float(longitudinal * cos_h - lateral * sin_h),
    )


def world_to_local(x: float, z: float, heading: float) -> Tuple[float, float]:
    """Project a world ground-plane vector onto the car axes.

    Returns:
        (longitudinal, lateral) components
    """
    sin_h = np.sin(heading)
    cos_h = np.cos(heading)
    return (
        float(x * sin_h + z * cos_h),
        float(x * cos_h - z * sin_h),
    )


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range.

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def sign(value: float) -> float:
    """Sign of value as a float, 0.0 for zero."""
    return float(np.sign(value))


def to_kmh(speed: float) -> float:
    return speed * MS_TO_KMH


def from_kmh(speed_kmh: float) -> float:
    return speed_kmh / MS_TO_KMH

# Core type definitions
# FORBIDDEN: logging, any I/O

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple
import numpy as np

from .math_utils import world_to_local


class ConfigurationError(ValueError):
    """Raised when a vehicle configuration violates a physical invariant."""


# Hard cap on yaw rate, independent of configuration
MAX_ANGULAR_VELOCITY = 2.5  # rad/s

NUMERIC_FIELDS = (
    "mass",
    "moment_of_inertia",
    "engine_force",
    "brake_force",
    "drag_coefficient",
    "frontal_area",
    "tire_friction",
    "tire_grip",
    "cornering_stiffness",
    "max_speed",
    "wheelbase",
    "rolling_resistance",
    "max_slip_angle",
    "stability_attenuation",
    "anti_spin_damping",
)


@dataclass(frozen=True)
class VehicleConfig:
    """Immutable vehicle tuning parameters.

    Replaced wholesale (never mutated) when a preset or mode changes.
    Defaults correspond to the "balanced" drift sensitivity.
    """
    mass: float = 1200.0                  # kg
    moment_of_inertia: float = 1500.0     # kg·m²
    engine_force: float = 8000.0          # N
    brake_force: float = 12000.0          # N
    drag_coefficient: float = 0.3
    frontal_area: float = 2.0             # m²
    tire_friction: float = 1.0
    tire_grip: float = 1.0
    cornering_stiffness: float = 50000.0  # N/rad
    max_speed: float = 50.0               # m/s (180 km/h)
    wheelbase: float = 2.6                # m
    rolling_resistance: float = 0.015
    stability_enabled: bool = True
    max_slip_angle: float = 0.35          # rad
    stability_attenuation: float = 0.7
    anti_spin_damping: float = 0.9

    def __post_init__(self):
        violations = config_violations(self.to_dict())
        if violations:
            raise ConfigurationError("; ".join(violations))

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def field_defaults(cls) -> Dict[str, Any]:
        return {f.name: f.default for f in fields(cls)}

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in self.field_names()}


def config_violations(params: Dict[str, Any]) -> List[str]:
    """Collect every invariant violation of a set of vehicle parameters.

    Args:
        params: Mapping of every VehicleConfig field to its value

    Returns:
        List of violation messages (empty if valid)
    """
    violations = []

    numeric = {}
    for name in NUMERIC_FIELDS:
        value = params[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            violations.append(f"{name} must be a number, got {value!r}")
        else:
            numeric[name] = value

    for name in ("mass", "moment_of_inertia", "max_speed", "max_slip_angle"):
        value = numeric.get(name)
        if value is not None and not value > 0:
            violations.append(f"{name} must be positive, got {value}")

    for name in (
        "engine_force",
        "brake_force",
        "drag_coefficient",
        "frontal_area",
        "tire_friction",
        "tire_grip",
        "cornering_stiffness",
        "wheelbase",
        "rolling_resistance",
    ):
        value = numeric.get(name)
        if value is not None and not value >= 0:
            violations.append(f"{name} must be non-negative, got {value}")

    for name in ("stability_attenuation", "anti_spin_damping"):
        value = numeric.get(name)
        if value is not None and not 0.0 <= value <= 1.0:
            violations.append(f"{name} must be in [0, 1], got {value}")

    return violations


@dataclass(frozen=True)
class InputSnapshot:
    """Driver input sampled once per tick."""
    accelerate: bool = False
    brake: bool = False
    steer_left: bool = False
    steer_right: bool = False

    @property
    def steer_sign(self) -> int:
        """+1 for left, -1 for right, 0 when neither or both are held."""
        return int(self.steer_left) - int(self.steer_right)

    @property
    def is_idle(self) -> bool:
        return not (self.accelerate or self.brake)

    @classmethod
    def from_flags(cls, flags: Dict[str, bool]) -> "InputSnapshot":
        """Build a snapshot from a dict of flags, ignoring unknown keys."""
        return cls(
            accelerate=bool(flags.get("accelerate", False)),
            brake=bool(flags.get("brake", False)),
            steer_left=bool(flags.get("steer_left", False)),
            steer_right=bool(flags.get("steer_right", False)),
        )


@dataclass
class VehicleState:
    """Mutable simulation state of one car.

    position:          [x, y, z] world metres, y held at ground height
    heading:           rotation about the vertical axis, in (-2π, 2π)
    velocity:          [vx, vz] world ground plane, m/s
    angular_velocity:  heading rate, rad/s (positive turns left)
    """
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    heading: float = 0.0
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    angular_velocity: float = 0.0

    @classmethod
    def spawn(
        cls,
        position: Optional[Tuple[float, float, float]] = None,
        heading: float = 0.0,
    ) -> "VehicleState":
        """Create a state at rest."""
        pos = np.zeros(3) if position is None else np.array(position, dtype=np.float64)
        assert pos.shape == (3,), f"Expected position shape (3,), got {pos.shape}"
        return cls(position=pos, heading=float(heading))

    @property
    def speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[1]))

    @property
    def forward(self) -> np.ndarray:
        """Unit forward vector in world (x, z)."""
        return np.array([np.sin(self.heading), np.cos(self.heading)])

    @property
    def left(self) -> np.ndarray:
        """Unit lateral vector in world (x, z), pointing to the car's left."""
        return np.array([np.cos(self.heading), -np.sin(self.heading)])

    def local_velocity(self) -> Tuple[float, float]:
        """Velocity in car space as (forward, lateral)."""
        return world_to_local(self.velocity[0], self.velocity[1], self.heading)

    def copy(self) -> "VehicleState":
        return VehicleState(
            position=self.position.copy(),
            heading=self.heading,
            velocity=self.velocity.copy(),
            angular_velocity=self.angular_velocity,
        )

    def to_array(self) -> np.ndarray:
        """Flatten to [x, y, z, heading, vx, vz, angular_velocity]."""
        return np.concatenate([
            self.position,
            np.array([self.heading]),
            self.velocity,
            np.array([self.angular_velocity]),
        ])

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "VehicleState":
        """Reconstruct from a flattened array."""
        assert arr.shape == (7,), f"Expected shape (7,), got {arr.shape}"
        return cls(
            position=arr[0:3].astype(np.float64),
            heading=float(arr[3]),
            velocity=arr[4:6].astype(np.float64),
            angular_velocity=float(arr[6]),
        )


@dataclass(frozen=True)
class ForceBundle:
    """Net car-space forces for one frame, plus read-only diagnostics."""
    longitudinal: float = 0.0  # N, along forward
    lateral: float = 0.0       # N, along left
    torque: float = 0.0        # N·m about vertical axis
    slip_angle: float = 0.0
    stability_active: bool = False
    steering_effectiveness: float = 1.0
    # Pedal state the forces were computed under
    accelerate: bool = False
    brake: bool = False

    @property
    def is_idle(self) -> bool:
        return not (self.accelerate or self.brake)

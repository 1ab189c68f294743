# Core module - Pure functions, no side effects
# FORBIDDEN: logging, pathlib, any I/O

from .types import (
    ConfigurationError,
    ForceBundle,
    InputSnapshot,
    VehicleConfig,
    VehicleState,
)
from .forces import compute_forces
from .integrator import integrate, step
from .presets import (
    PRESETS,
    off_road_variant,
    preset,
    set_drift_sensitivity,
    toggle_stability_control,
)
from .stability import slip_angle, stability_factor

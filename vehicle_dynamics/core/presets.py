# Configuration presets and driving modes
# FORBIDDEN: logging, any I/O
# All operations return a new config; none affect the current frame

from dataclasses import replace
from typing import Dict, Optional

from .types import ConfigurationError, VehicleConfig

PRESETS: Dict[str, float] = {
    "stable": 0.0,
    "balanced": 0.5,
    "drift": 1.0,
}

OFF_ROAD_GRIP_SCALE = 0.5
OFF_ROAD_ROLLING_SCALE = 4.0


def set_drift_sensitivity(config: VehicleConfig, sensitivity: float) -> VehicleConfig:
    """Retune the stability thresholds for a drift sensitivity.

    0 is the most planted setting, 1 lets the car slide the furthest
    before ESC cuts in and damps yaw the least.

    Args:
        config: Base configuration
        sensitivity: Drift sensitivity in [0, 1]

    Returns:
        Config with max_slip_angle, stability_attenuation and
        anti_spin_damping replaced
    """
    if not 0.0 <= sensitivity <= 1.0:
        raise ConfigurationError(f"drift sensitivity must be in [0, 1], got {sensitivity}")
    return replace(
        config,
        max_slip_angle=0.2 + 0.3 * sensitivity,
        stability_attenuation=0.9 - 0.4 * sensitivity,
        anti_spin_damping=0.95 - 0.1 * sensitivity,
    )


def toggle_stability_control(config: VehicleConfig) -> VehicleConfig:
    return replace(config, stability_enabled=not config.stability_enabled)


def preset(name: str, base: Optional[VehicleConfig] = None) -> VehicleConfig:
    """Look up a named preset.

    Args:
        name: One of PRESETS
        base: Config to retune (defaults to VehicleConfig())

    Returns:
        Retuned config
    """
    if name not in PRESETS:
        raise ConfigurationError(
            f"Unknown preset: {name}. Expected one of {sorted(PRESETS)}"
        )
    return set_drift_sensitivity(base or VehicleConfig(), PRESETS[name])


def off_road_variant(config: VehicleConfig) -> VehicleConfig:
    """Config used while the car is off the road surface.

    Less grip and much more rolling resistance. Top speed is left alone so
    the speed clamp never acts as a brake when the car leaves the road.
    """
    return replace(
        config,
        tire_grip=config.tire_grip * OFF_ROAD_GRIP_SCALE,
        rolling_resistance=config.rolling_resistance * OFF_ROAD_ROLLING_SCALE,
    )

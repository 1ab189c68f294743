# Configuration loading and validation
# IMPURE - Reads YAML files

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .core.presets import PRESETS, preset, set_drift_sensitivity
from .core.types import ConfigurationError, VehicleConfig, config_violations
from .simulation.scenarios import SCENARIOS

REQUIRED_SECTIONS = ["vehicle", "simulation"]
VEHICLE_EXTRA_KEYS = ["preset", "drift_sensitivity"]


def load_config(config_path: Path) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    with open(config_path) as f:
        config = yaml.safe_load(f)
    return config or {}


def apply_overrides(config: dict, overrides: list) -> dict:
    """Apply command-line overrides to config.

    Args:
        config: Base configuration
        overrides: List of "key.subkey=value" strings

    Returns:
        Modified configuration
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected key=value")

        key, value = override.split("=", 1)
        keys = key.split(".")

        # Navigate to nested key
        d = config
        for k in keys[:-1]:
            if k not in d:
                d[k] = {}
            d = d[k]

        # Infer type and set value
        try:
            d[keys[-1]] = int(value)
        except ValueError:
            try:
                d[keys[-1]] = float(value)
            except ValueError:
                if value.lower() in ("true", "false"):
                    d[keys[-1]] = value.lower() == "true"
                else:
                    d[keys[-1]] = value

    return config


def vehicle_config_from_dict(section: Dict[str, Any]) -> VehicleConfig:
    """Build a VehicleConfig from the "vehicle" section.

    Explicit fields are applied first, then "preset", then
    "drift_sensitivity", so a sensitivity always wins over a preset.

    Args:
        section: Mapping of VehicleConfig field names, plus optional
            "preset" and "drift_sensitivity"

    Returns:
        Validated VehicleConfig
    """
    known = set(VehicleConfig.field_names())
    unknown = sorted(set(section) - known - set(VEHICLE_EXTRA_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown vehicle parameters: {unknown}")

    config = VehicleConfig(**{k: v for k, v in section.items() if k in known})
    if "preset" in section:
        config = preset(section["preset"], config)
    if "drift_sensitivity" in section:
        config = set_drift_sensitivity(config, float(section["drift_sensitivity"]))
    return config


def validate_config(config: dict) -> list:
    """Validate configuration.

    Args:
        config: Configuration dictionary

    Returns:
        List of validation errors (empty if valid)
    """
    errors: List[str] = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            errors.append(f"Missing required section: {section}")

    # Validate vehicle
    if "vehicle" in config:
        vehicle = config["vehicle"] or {}
        known = set(VehicleConfig.field_names())
        for key in sorted(set(vehicle) - known - set(VEHICLE_EXTRA_KEYS)):
            errors.append(f"vehicle.{key} is not a vehicle parameter")

        name = vehicle.get("preset")
        if name is not None and name not in PRESETS:
            errors.append(f"vehicle.preset must be one of {sorted(PRESETS)}, got '{name}'")

        sensitivity = vehicle.get("drift_sensitivity")
        if sensitivity is not None and not (
            isinstance(sensitivity, (int, float)) and 0.0 <= sensitivity <= 1.0
        ):
            errors.append(f"vehicle.drift_sensitivity must be in [0, 1], got {sensitivity}")

        fields = {k: v for k, v in vehicle.items() if k in known}
        bad_types = [k for k, v in fields.items() if not isinstance(v, (int, float))]
        for key in bad_types:
            errors.append(f"vehicle.{key} must be numeric, got {fields[key]!r}")

        if not bad_types:
            params = {**VehicleConfig.field_defaults(), **fields}
            errors.extend(f"vehicle.{v}" for v in config_violations(params))

    # Validate simulation
    if "simulation" in config:
        simulation = config["simulation"] or {}
        dt = simulation.get("dt", 0)
        if not isinstance(dt, (int, float)) or dt <= 0:
            errors.append(f"simulation.dt must be positive, got {dt}")

        steps = simulation.get("steps", 0)
        if not isinstance(steps, int) or steps <= 0:
            errors.append(f"simulation.steps must be a positive integer, got {steps}")

        scenario = simulation.get("scenario", "accelerate")
        if scenario not in SCENARIOS:
            errors.append(f"simulation.scenario must be one of {sorted(SCENARIOS)}, got '{scenario}'")

    # Validate surface
    if "surface" in config:
        surface = config["surface"] or {}
        for corner in ("min", "max"):
            value = surface.get(corner)
            if not isinstance(value, (list, tuple)) or len(value) != 3:
                errors.append(f"surface.{corner} must be a list of 3 numbers, got {value}")

    return errors

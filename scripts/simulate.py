#!/usr/bin/env python3
"""Run a scripted driving scenario and report what the car did.

Usage:
    # Straight-line acceleration with the base car
    python scripts/simulate.py --config configs/base.yaml

    # Held slide with ESC switched off
    python scripts/simulate.py --config configs/drift.yaml --override vehicle.stability_enabled=false

    # Record telemetry
    python scripts/simulate.py --config configs/base.yaml --scenario slalom --output runs
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from vehicle_dynamics.analysis import RunLogger, check_run_health, compute_run_metrics, setup_logging
from vehicle_dynamics.config import apply_overrides, load_config, validate_config, vehicle_config_from_dict
from vehicle_dynamics.core import PRESETS, off_road_variant
from vehicle_dynamics.simulation import BoxSurface, Vehicle, get_scenario, run_scenario


def build_vehicle(config: dict) -> Vehicle:
    """Create a ready vehicle from a validated config dict."""
    vehicle_config = vehicle_config_from_dict(config["vehicle"])

    surface = None
    off_road_config = None
    if config.get("surface"):
        surface = BoxSurface.from_dict(config["surface"])
        off_road_config = off_road_variant(vehicle_config)

    vehicle = Vehicle(
        config=vehicle_config,
        surface=surface,
        off_road_config=off_road_config,
    )
    vehicle.reset()
    vehicle.mark_ready()
    return vehicle


def main():
    parser = argparse.ArgumentParser(description="Run a vehicle dynamics scenario")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("configs/base.yaml"),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--preset",
        type=str,
        choices=sorted(PRESETS),
        default=None,
        help="Drift preset (overrides config)",
    )
    parser.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Scenario name (overrides config)",
    )
    parser.add_argument("--steps", type=int, default=None, help="Number of ticks (overrides config)")
    parser.add_argument("--dt", type=float, default=None, help="Frame time in seconds (overrides config)")
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        help="Config overrides in format key.subkey=value",
    )
    parser.add_argument("--output", type=Path, default=None, help="Directory for run logs and telemetry")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (overrides config)")

    args = parser.parse_args()

    config = load_config(args.config)
    if args.override:
        config = apply_overrides(config, args.override)

    config.setdefault("vehicle", {})
    config.setdefault("simulation", {})
    if args.preset:
        config["vehicle"]["preset"] = args.preset
    if args.scenario:
        config["simulation"]["scenario"] = args.scenario
    if args.steps:
        config["simulation"]["steps"] = args.steps
    if args.dt:
        config["simulation"]["dt"] = args.dt

    errors = validate_config(config)
    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    log_section = config.get("logging", {})
    level = args.log_level or log_section.get("level", "INFO")
    scenario = config["simulation"].get("scenario", "accelerate")

    run_logger = None
    recorder = None
    if args.output is not None:
        run_logger = RunLogger(
            scenario,
            base_dir=args.output,
            level=level,
            log_frequency=log_section.get("log_frequency", 1),
        )
        run_logger.save_config(config)
        recorder = run_logger.telemetry
    else:
        setup_logging(level=level)

    logger = logging.getLogger("vehicle_dynamics")

    vehicle = build_vehicle(config)
    dt = float(config["simulation"]["dt"])
    steps = int(config["simulation"]["steps"])

    logger.info(f"Scenario: {scenario}, steps: {steps}, dt: {dt:.4f}")
    logger.info(f"Vehicle: {vehicle.config}")

    records = run_scenario(vehicle, get_scenario(scenario), steps, dt, recorder=recorder)

    metrics = compute_run_metrics(records, vehicle.config.max_speed, dt)
    for warning in check_run_health(metrics):
        logger.warning(warning)

    print("\n" + "=" * 40)
    print("RUN SUMMARY")
    print("=" * 40)
    for name, value in metrics.items():
        print(f"{name:>20s}: {value:.3f}")

    telemetry = vehicle.telemetry
    print(f"{'final_speed_kmh':>20s}: {telemetry.get_speed_kmh():.1f}")
    print(f"{'on_road':>20s}: {telemetry.is_on_road()}")

    if run_logger is not None:
        run_logger.telemetry.save_summary(metrics)
        print(f"Telemetry saved to {run_logger.run_dir}")


if __name__ == "__main__":
    main()

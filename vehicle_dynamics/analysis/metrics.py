# Run metrics computation

import numpy as np
from typing import Any, Dict, List, Optional

# Fraction of max_speed that counts as "at top speed"
TOP_SPEED_FRACTION = 0.999


def compute_run_metrics(
    records: List[Dict[str, Any]],
    max_speed: float,
    dt: Optional[float] = None,
) -> Dict[str, float]:
    """Compute summary metrics from a run's telemetry records.

    Args:
        records: Telemetry rows as produced by Telemetry.record
        max_speed: Top speed of the config used, m/s
        dt: Frame time, used to express time to top speed in seconds

    Returns:
        Dict of computed metrics
    """
    metrics: Dict[str, float] = {}
    if not records:
        return metrics

    speeds = np.array([r["speed"] for r in records], dtype=np.float64)
    slips = np.array([r.get("slip_angle", 0.0) for r in records], dtype=np.float64)
    yaw_rates = np.array([r.get("angular_velocity", 0.0) for r in records], dtype=np.float64)

    metrics["ticks"] = float(len(records))
    metrics["top_speed"] = float(np.max(speeds))
    metrics["mean_speed"] = float(np.mean(speeds))
    metrics["mean_slip_angle"] = float(np.mean(slips))
    metrics["max_slip_angle"] = float(np.max(slips))
    metrics["max_yaw_rate"] = float(np.max(np.abs(yaw_rates)))
    metrics["stability_ratio"] = float(np.mean([bool(r.get("stability_active", False)) for r in records]))
    metrics["off_road_ratio"] = float(np.mean([not r.get("on_road", True) for r in records]))

    reached = np.nonzero(speeds >= TOP_SPEED_FRACTION * max_speed)[0]
    if len(reached) > 0:
        metrics["ticks_to_top_speed"] = float(reached[0] + 1)
        if dt is not None:
            metrics["time_to_top_speed"] = float((reached[0] + 1) * dt)

    return metrics


def check_run_health(metrics: Dict[str, float]) -> List[str]:
    """Check a run for signs of a badly tuned car.

    Args:
        metrics: Output of compute_run_metrics

    Returns:
        List of warning messages
    """
    warnings = []

    if not metrics:
        warnings.append("Run produced no telemetry")
        return warnings

    if "ticks_to_top_speed" not in metrics:
        warnings.append(f"Never reached top speed (best {metrics['top_speed']:.2f} m/s)")

    if metrics.get("stability_ratio", 0.0) > 0.5:
        warnings.append(
            f"Stability control active for {metrics['stability_ratio']:.0%} of the run"
        )

    if metrics.get("off_road_ratio", 0.0) > 0.5:
        warnings.append(f"Off road for {metrics['off_road_ratio']:.0%} of the run")

    return warnings

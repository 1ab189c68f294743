# Scripted input programs for offline runs

from typing import Any, Callable, Dict, List, Optional

from ..core.types import InputSnapshot
from .vehicle import Vehicle

InputProgram = Callable[[int], InputSnapshot]

ACCELERATE = InputSnapshot(accelerate=True)
BRAKE = InputSnapshot(brake=True)


def accelerate_program(step: int) -> InputSnapshot:
    return ACCELERATE


def brake_program(step: int, accelerate_steps: int = 300) -> InputSnapshot:
    """Full throttle, then brake to a stop."""
    return ACCELERATE if step < accelerate_steps else BRAKE


def slalom_program(step: int, period: int = 90, warmup: int = 120) -> InputSnapshot:
    """Build speed, then alternate left and right every half period."""
    if step < warmup:
        return ACCELERATE
    left = ((step - warmup) // (period // 2)) % 2 == 0
    return InputSnapshot(accelerate=True, steer_left=left, steer_right=not left)


def drift_program(step: int, warmup: int = 240) -> InputSnapshot:
    """Build speed, then hold a full-lock left turn on throttle."""
    if step < warmup:
        return ACCELERATE
    return InputSnapshot(accelerate=True, steer_left=True)


SCENARIOS: Dict[str, InputProgram] = {
    "accelerate": accelerate_program,
    "brake": brake_program,
    "slalom": slalom_program,
    "drift": drift_program,
}


def get_scenario(name: str) -> InputProgram:
    if name not in SCENARIOS:
        raise ValueError(f"Unknown scenario: {name}. Expected one of {sorted(SCENARIOS)}")
    return SCENARIOS[name]


def run_scenario(
    vehicle: Vehicle,
    program: InputProgram,
    steps: int,
    dt: float,
    recorder: Optional[Callable[[int, Dict[str, Any]], None]] = None,
) -> List[Dict[str, Any]]:
    """Drive a vehicle through an input program.

    Args:
        vehicle: Vehicle to drive (marked ready if it is not already)
        program: Maps tick index to an InputSnapshot
        steps: Number of ticks
        dt: Frame time in seconds
        recorder: Optional callback receiving (step, record) after each tick

    Returns:
        One telemetry record per tick
    """
    if not vehicle.ready:
        vehicle.mark_ready()

    records = []
    for step in range(steps):
        inputs = program(step)
        vehicle.tick(inputs, dt)
        record = vehicle.telemetry.record(step)
        record.update({
            "accelerate": inputs.accelerate,
            "brake": inputs.brake,
            "steer": inputs.steer_sign,
        })
        records.append(record)
        if recorder is not None:
            recorder(step, record)

    return records

# Semi-implicit Euler integration with structural stability limits
# FORBIDDEN: logging, any I/O

import numpy as np

from .forces import compute_forces
from .math_utils import clamp, local_to_world, wrap_heading
from .physics import clamp_timestep
from .stability import needs_anti_spin
from .types import (
    MAX_ANGULAR_VELOCITY,
    ForceBundle,
    InputSnapshot,
    VehicleConfig,
    VehicleState,
)

REST_SPEED = 0.1               # m/s
YAW_DAMPING = 0.95             # per frame
MIN_ANGULAR_VELOCITY = 0.01    # rad/s


def integrate(
    state: VehicleState,
    forces: ForceBundle,
    config: VehicleConfig,
    dt: float,
) -> VehicleState:
    """Advance a vehicle state by one frame.

    Velocity and yaw rate are updated first, then constrained, and the
    constrained values move the car. The input state is left untouched.
    The rest snap reads the pedal flags carried by the ForceBundle.

    Args:
        state: State at the start of the frame
        forces: Output of compute_forces for the same frame
        config: Vehicle parameters
        dt: Frame time in seconds (clamped to 0.05)

    Returns:
        New VehicleState
    """
    new_state = state.copy()
    dt = clamp_timestep(dt)
    if dt <= 0:
        return new_state

    force_x, force_z = local_to_world(forces.longitudinal, forces.lateral, state.heading)
    velocity = state.velocity + np.array([force_x, force_z]) / config.mass * dt
    angular_velocity = state.angular_velocity + forces.torque / config.moment_of_inertia * dt

    speed = float(np.hypot(velocity[0], velocity[1]))
    if speed > config.max_speed:
        velocity = velocity * (config.max_speed / speed)
    elif speed < REST_SPEED and forces.is_idle:
        velocity = np.zeros(2)

    angular_velocity = clamp(angular_velocity, -MAX_ANGULAR_VELOCITY, MAX_ANGULAR_VELOCITY)
    if needs_anti_spin(forces.slip_angle, config):
        angular_velocity *= config.anti_spin_damping
    else:
        angular_velocity *= YAW_DAMPING
    if abs(angular_velocity) < MIN_ANGULAR_VELOCITY:
        angular_velocity = 0.0

    new_state.velocity = velocity
    new_state.angular_velocity = float(angular_velocity)
    new_state.position = state.position + np.array([velocity[0], 0.0, velocity[1]]) * dt
    new_state.heading = wrap_heading(state.heading + angular_velocity * dt)

    return new_state


def step(
    state: VehicleState,
    inputs: InputSnapshot,
    config: VehicleConfig,
    dt: float,
) -> VehicleState:
    """Run the force model and integrator for one frame."""
    forces = compute_forces(state, inputs, config, dt)
    return integrate(state, forces, config, dt)

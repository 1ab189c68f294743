# Per-frame force model
# FORBIDDEN: logging, any I/O

from .math_utils import clamp, sign, to_kmh
from .physics import (
    COUNTER_STEER_TORQUE,
    MAX_STEERING_ANGLE,
    adjusted_cornering_stiffness,
    aero_drag,
    brake_efficiency,
    clamp_timestep,
    cornering_force_limit,
    lateral_friction_scale,
    normal_force,
    rolling_resistance_force,
    slip_angle_signed,
    steering_effectiveness,
    throttle_factor,
)
from .stability import (
    counter_steer_active,
    is_sliding,
    needs_anti_spin,
    slip_angle,
    stability_factor,
)
from .types import ForceBundle, InputSnapshot, VehicleConfig, VehicleState

MIN_DRAG_SPEED = 0.01          # m/s
MIN_LATERAL_SPEED = 0.01       # m/s
CREEP_SPEED = 0.1              # m/s
MIN_STEERING_SPEED = 0.5       # m/s
ANTI_SPIN_TORQUE_SCALE = 0.7


def compute_forces(
    state: VehicleState,
    inputs: InputSnapshot,
    config: VehicleConfig,
    dt: float,
) -> ForceBundle:
    """Compute car-space forces and yaw torque for one frame.

    Pure function of its arguments. Terms are accumulated in car space
    (forward, left); the integrator rotates them into the world.

    Args:
        state: Current vehicle state
        inputs: Driver input for this frame
        config: Vehicle parameters
        dt: Frame time in seconds (clamped to 0.05)

    Returns:
        ForceBundle with longitudinal, lateral and torque terms
    """
    dt = clamp_timestep(dt)
    v_fwd, v_lat = state.local_velocity()
    speed = state.speed
    speed_kmh = to_kmh(abs(v_fwd))

    # Stability pre-pass
    slip = slip_angle(v_fwd, v_lat)
    esc_factor = stability_factor(slip, config)
    anti_spin = needs_anti_spin(slip, config)

    longitudinal = 0.0
    lateral = 0.0
    torque = 0.0

    if inputs.accelerate:
        longitudinal += config.engine_force * throttle_factor(v_fwd, config.max_speed) * esc_factor

    if inputs.brake:
        longitudinal -= sign(v_fwd) * config.brake_force * brake_efficiency(v_fwd)

    if speed > MIN_DRAG_SPEED:
        drag = aero_drag(speed, config.drag_coefficient, config.frontal_area)
        longitudinal -= drag * v_fwd / speed
        lateral -= drag * v_lat / speed

    if abs(v_fwd) > CREEP_SPEED:
        longitudinal -= sign(v_fwd) * rolling_resistance_force(config.mass, config.rolling_resistance)

    if not inputs.accelerate and dt > 0:
        stopping_force = abs(v_fwd) * config.mass / dt
        if abs(v_fwd) <= CREEP_SPEED:
            # Exact cancel of residual creep; dt-sensitive
            longitudinal = -v_fwd * config.mass / dt
        elif longitudinal * v_fwd < 0 and abs(longitudinal) > stopping_force:
            # Braking never reverses through zero
            longitudinal = -sign(v_fwd) * stopping_force

    if abs(v_lat) > MIN_LATERAL_SPEED:
        friction = (
            config.tire_friction
            * normal_force(config.mass, config.tire_grip)
            * lateral_friction_scale(v_lat)
        )
        if dt > 0:
            friction = min(friction, abs(v_lat) * config.mass / dt)
        lateral -= sign(v_lat) * friction

    effectiveness = steering_effectiveness(speed_kmh)
    if abs(v_fwd) > MIN_STEERING_SPEED and inputs.steer_sign != 0:
        steering_angle = inputs.steer_sign * MAX_STEERING_ANGLE * effectiveness
        target_slip = slip_angle_signed(v_lat, v_fwd) - steering_angle

        stiffness = adjusted_cornering_stiffness(config.cornering_stiffness, speed_kmh)
        limit = cornering_force_limit(speed_kmh)
        cornering = clamp(-stiffness * target_slip, -limit, limit) * esc_factor
        lateral += cornering

        steer_torque = cornering * (config.wheelbase / 2.0) * sign(v_fwd) * effectiveness
        if anti_spin:
            steer_torque *= ANTI_SPIN_TORQUE_SCALE
        torque += steer_torque

    if counter_steer_active(slip, state.angular_velocity, config):
        assist = min(slip / config.max_slip_angle, 1.0) * COUNTER_STEER_TORQUE
        torque -= sign(state.angular_velocity) * assist

    return ForceBundle(
        longitudinal=float(longitudinal),
        lateral=float(lateral),
        torque=float(torque),
        slip_angle=slip,
        stability_active=is_sliding(slip, config),
        steering_effectiveness=effectiveness,
        accelerate=inputs.accelerate,
        brake=inputs.brake,
    )

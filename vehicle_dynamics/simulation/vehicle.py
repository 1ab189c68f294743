# Vehicle entity: owns one state and drives the core once per tick
# IMPURE - Logs configuration changes

import logging
from typing import Optional, Tuple

from ..core.forces import compute_forces
from ..core.integrator import integrate
from ..core.physics import clamp_timestep
from ..core.presets import preset, set_drift_sensitivity, toggle_stability_control
from ..core.types import ForceBundle, InputSnapshot, VehicleConfig, VehicleState
from ..telemetry.state import Telemetry
from .surface import Surface

logger = logging.getLogger("vehicle_dynamics.simulation")


class Vehicle:
    """A single simulated car.

    The embedding loop calls tick() once per frame with a fresh
    InputSnapshot. Configuration changes take effect from the next tick.
    """

    def __init__(
        self,
        config: Optional[VehicleConfig] = None,
        state: Optional[VehicleState] = None,
        surface: Optional[Surface] = None,
        off_road_config: Optional[VehicleConfig] = None,
    ):
        """Initialize vehicle.

        Args:
            config: On-road parameters (defaults to VehicleConfig())
            state: Initial state (defaults to a car at rest at the origin)
            surface: Ground collaborator for on-road and height queries
            off_road_config: Parameters swapped in while off the surface
        """
        self.config = config or VehicleConfig()
        self.state = state or VehicleState.spawn()
        self.surface = surface
        self.off_road_config = off_road_config
        self.ready = False
        self.tick_count = 0
        self._on_road = True
        self._last_forces: Optional[ForceBundle] = None
        self._refresh_surface()

    def mark_ready(self) -> None:
        """Signal that everything the car depends on has finished loading."""
        self.ready = True

    def reset(
        self,
        position: Optional[Tuple[float, float, float]] = None,
        heading: float = 0.0,
    ) -> None:
        self.state = VehicleState.spawn(position, heading)
        self.tick_count = 0
        self._last_forces = None
        self._refresh_surface()

    @property
    def active_config(self) -> VehicleConfig:
        """Config used for the next tick."""
        if not self._on_road and self.off_road_config is not None:
            return self.off_road_config
        return self.config

    @property
    def telemetry(self) -> Telemetry:
        return Telemetry(self.state, on_road=self._on_road, forces=self._last_forces)

    def tick(self, inputs: InputSnapshot, dt: float) -> Optional[ForceBundle]:
        """Advance the car by one frame.

        Args:
            inputs: Driver input for this frame
            dt: Frame time in seconds

        Returns:
            Forces applied this frame, or None if the car is not ready
        """
        if not self.ready:
            logger.debug("Tick ignored: vehicle not ready")
            return None

        dt = clamp_timestep(dt)
        config = self.active_config
        forces = compute_forces(self.state, inputs, config, dt)
        self.state = integrate(self.state, forces, config, dt)
        self._last_forces = forces
        self.tick_count += 1
        self._refresh_surface()
        return forces

    def set_drift_sensitivity(self, sensitivity: float) -> None:
        self.config = set_drift_sensitivity(self.config, sensitivity)
        if self.off_road_config is not None:
            self.off_road_config = set_drift_sensitivity(self.off_road_config, sensitivity)
        logger.info(f"Drift sensitivity set to {sensitivity:.2f}")

    def toggle_stability_control(self) -> bool:
        """Flip ESC on or off.

        Returns:
            New stability_enabled value
        """
        self.config = toggle_stability_control(self.config)
        if self.off_road_config is not None:
            self.off_road_config = toggle_stability_control(self.off_road_config)
        state = "enabled" if self.config.stability_enabled else "disabled"
        logger.info(f"Stability control {state}")
        return self.config.stability_enabled

    def select_preset(self, name: str) -> None:
        self.config = preset(name, self.config)
        if self.off_road_config is not None:
            self.off_road_config = preset(name, self.off_road_config)
        logger.info(f"Preset selected: {name}")

    def _refresh_surface(self) -> None:
        if self.surface is None:
            return

        height = self.surface.height_at(self.state.position[0], self.state.position[2])
        if height is not None:
            self.state.position[1] = height

        on_road = self.surface.is_on_surface(self.state.position)
        if on_road != self._on_road:
            logger.info(f"Vehicle {'returned to' if on_road else 'left'} the road")
        self._on_road = on_road

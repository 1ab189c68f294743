# Read-only telemetry view of a vehicle
# FORBIDDEN: logging, analysis.*

from typing import Any, Dict, Optional, Tuple

from ..core.math_utils import to_kmh
from ..core.types import ForceBundle, VehicleState


class Telemetry:
    """Derived values for HUDs and recorders.

    Holds references only; never mutates the state it reports on.
    Speeds are in m/s unless the accessor says otherwise.
    """

    def __init__(
        self,
        state: VehicleState,
        on_road: bool = True,
        forces: Optional[ForceBundle] = None,
    ):
        self._state = state
        self._on_road = on_road
        self._forces = forces

    def get_speed(self) -> float:
        return self._state.speed

    def is_on_road(self) -> bool:
        return self._on_road

    def get_speed_kmh(self) -> float:
        return to_kmh(self._state.speed)

    def get_heading(self) -> float:
        return self._state.heading

    def local_velocity(self) -> Tuple[float, float]:
        return self._state.local_velocity()

    def get_slip_angle(self) -> float:
        """Slip angle from the most recent force computation, 0 before the first tick."""
        if self._forces is None:
            return 0.0
        return self._forces.slip_angle

    def is_stability_active(self) -> bool:
        return self._forces is not None and self._forces.stability_active

    def record(self, step: int) -> Dict[str, Any]:
        """Flatten into a single telemetry row.

        Args:
            step: Tick index

        Returns:
            Dict of scalar values keyed by column name
        """
        forward, lateral = self.local_velocity()
        x, y, z = (float(v) for v in self._state.position)
        return {
            "step": step,
            "x": x,
            "y": y,
            "z": z,
            "heading": self.get_heading(),
            "speed": self.get_speed(),
            "speed_kmh": self.get_speed_kmh(),
            "forward_velocity": forward,
            "lateral_velocity": lateral,
            "angular_velocity": self._state.angular_velocity,
            "slip_angle": self.get_slip_angle(),
            "stability_active": self.is_stability_active(),
            "on_road": self.is_on_road(),
        }

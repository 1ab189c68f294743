# Ground boundary: surface membership and height lookups

from typing import Optional, Protocol, Sequence

import numpy as np


class Surface(Protocol):
    """What the vehicle needs to know about the ground under it."""

    def is_on_surface(self, position: np.ndarray) -> bool:
        ...

    def height_at(self, x: float, z: float) -> Optional[float]:
        """Ground height under (x, z), or None when the surface has no answer."""
        ...


class BoxSurface:
    """Axis-aligned road bounds with a flat ground height.

    A point is on the surface when it lies inside the box on all three
    axes. height_at returns None outside the box so the caller keeps
    its previous height.
    """

    def __init__(
        self,
        min_corner: Sequence[float],
        max_corner: Sequence[float],
        ground_height: float = 0.0,
    ):
        self.min_corner = np.asarray(min_corner, dtype=np.float64)
        self.max_corner = np.asarray(max_corner, dtype=np.float64)
        if self.min_corner.shape != (3,) or self.max_corner.shape != (3,):
            raise ValueError("Surface corners must be 3D points")
        if np.any(self.min_corner > self.max_corner):
            raise ValueError(f"min_corner {self.min_corner} exceeds max_corner {self.max_corner}")
        self.ground_height = float(ground_height)

    def is_on_surface(self, position: np.ndarray) -> bool:
        position = np.asarray(position, dtype=np.float64)
        return bool(np.all(position >= self.min_corner) and np.all(position <= self.max_corner))

    def height_at(self, x: float, z: float) -> Optional[float]:
        """Flat ground height inside the x/z footprint.

        Returns None outside it rather than falling back to height 0, so an
        off-road car keeps the last height it had on the road.
        """
        inside = (
            self.min_corner[0] <= x <= self.max_corner[0]
            and self.min_corner[2] <= z <= self.max_corner[2]
        )
        return self.ground_height if inside else None

    @classmethod
    def from_dict(cls, section: dict) -> "BoxSurface":
        """Build from a config section with "min", "max" and optional "ground_height"."""
        if "min" not in section or "max" not in section:
            raise ValueError("surface section requires 'min' and 'max'")
        return cls(section["min"], section["max"], section.get("ground_height", 0.0))

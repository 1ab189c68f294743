# Vehicle dynamics core - per-frame car physics with stability control

from .core import (
    ConfigurationError,
    ForceBundle,
    InputSnapshot,
    VehicleConfig,
    VehicleState,
    compute_forces,
    integrate,
    step,
)
from .simulation import Vehicle
from .telemetry import Telemetry

__version__ = "0.1.0"

# Simulation module - Vehicle entity and scripted runs
# IMPURE - Logs configuration changes

from .surface import BoxSurface, Surface
from .vehicle import Vehicle
from .scenarios import SCENARIOS, get_scenario, run_scenario

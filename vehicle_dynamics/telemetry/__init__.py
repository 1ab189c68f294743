# Telemetry module - Read-only views of vehicle state
# FORBIDDEN: logging, analysis.*

from .state import Telemetry
from .validation import StateValidator

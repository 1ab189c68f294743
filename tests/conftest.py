# Pytest configuration and fixtures

import pytest
from pathlib import Path
import tempfile
import yaml

from vehicle_dynamics.core.types import InputSnapshot, VehicleConfig, VehicleState


@pytest.fixture
def make_state():
    """Factory for states with a given car-space velocity."""
    def _make(forward=0.0, lateral=0.0, heading=0.0, angular_velocity=0.0):
        state = VehicleState.spawn(heading=heading)
        state.velocity = forward * state.forward + lateral * state.left
        state.angular_velocity = angular_velocity
        return state
    return _make


@pytest.fixture
def vehicle_config():
    """Default (balanced) vehicle configuration."""
    return VehicleConfig()


@pytest.fixture
def rest_state():
    """Car at rest at the origin."""
    return VehicleState.spawn()


@pytest.fixture
def dt():
    """Standard frame time for tests."""
    return 0.016


@pytest.fixture
def idle():
    return InputSnapshot()


@pytest.fixture
def accelerate():
    return InputSnapshot(accelerate=True)


@pytest.fixture
def brake():
    return InputSnapshot(brake=True)


@pytest.fixture
def config():
    """Standard test configuration."""
    return {
        "vehicle": {
            "mass": 1200.0,
            "moment_of_inertia": 1500.0,
            "engine_force": 8000.0,
            "brake_force": 12000.0,
            "max_speed": 50.0,
            "preset": "balanced",
        },
        "simulation": {
            "dt": 0.016,
            "steps": 120,
            "scenario": "accelerate",
        },
        "surface": {
            "min": [-50.0, -1.0, -50.0],
            "max": [50.0, 1.0, 500.0],
            "ground_height": 0.0,
        },
        "logging": {
            "level": "WARNING",
            "log_frequency": 1,
        },
    }


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config_file(config, temp_dir):
    """Create temporary config file."""
    config_path = temp_dir / "config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(config, f)
    return config_path

# Tests for the vehicle entity, surfaces and scripted scenarios

import logging

import pytest
import numpy as np
from vehicle_dynamics.core.presets import off_road_variant
from vehicle_dynamics.core.types import InputSnapshot, VehicleState
from vehicle_dynamics.simulation import (
    SCENARIOS,
    BoxSurface,
    Vehicle,
    get_scenario,
    run_scenario,
)
from vehicle_dynamics.simulation.scenarios import brake_program, drift_program, slalom_program


@pytest.fixture
def surface():
    return BoxSurface([-10.0, -1.0, -10.0], [10.0, 1.0, 50.0], ground_height=0.5)


@pytest.fixture
def vehicle(vehicle_config, surface):
    vehicle = Vehicle(vehicle_config, surface=surface, off_road_config=off_road_variant(vehicle_config))
    vehicle.reset()
    return vehicle


class TestReadiness:

    def test_tick_ignored_until_ready(self, vehicle, accelerate, dt):
        before = vehicle.state.to_array().copy()
        assert vehicle.tick(accelerate, dt) is None
        assert np.array_equal(vehicle.state.to_array(), before)
        assert vehicle.tick_count == 0

    def test_tick_after_ready(self, vehicle, accelerate, dt):
        vehicle.mark_ready()
        forces = vehicle.tick(accelerate, dt)
        assert forces is not None
        assert forces.longitudinal > 0
        assert vehicle.state.speed > 0
        assert vehicle.tick_count == 1

    def test_reset_returns_to_rest(self, vehicle, accelerate, dt):
        vehicle.mark_ready()
        for _ in range(10):
            vehicle.tick(accelerate, dt)
        vehicle.reset(position=(1.0, 0.0, 2.0), heading=0.3)
        assert vehicle.state.speed == 0.0
        assert vehicle.state.heading == pytest.approx(0.3)
        assert vehicle.tick_count == 0
        assert vehicle.telemetry.get_slip_angle() == 0.0


class TestModes:

    def test_set_drift_sensitivity(self, vehicle):
        vehicle.set_drift_sensitivity(1.0)
        assert vehicle.config.max_slip_angle == pytest.approx(0.5)
        assert vehicle.off_road_config.max_slip_angle == pytest.approx(0.5)

    def test_toggle_stability_control(self, vehicle):
        assert vehicle.toggle_stability_control() is False
        assert not vehicle.off_road_config.stability_enabled
        assert vehicle.toggle_stability_control() is True

    def test_select_preset(self, vehicle):
        vehicle.select_preset("stable")
        assert vehicle.config.stability_attenuation == pytest.approx(0.9)

    def test_mode_changes_are_logged(self, vehicle, caplog):
        caplog.set_level(logging.INFO, logger="vehicle_dynamics.simulation")
        vehicle.set_drift_sensitivity(0.25)
        vehicle.toggle_stability_control()
        vehicle.select_preset("drift")
        messages = [r.getMessage() for r in caplog.records]
        assert "Drift sensitivity set to 0.25" in messages
        assert "Stability control disabled" in messages
        assert "Preset selected: drift" in messages

    def test_mode_change_keeps_state(self, vehicle, accelerate, dt):
        vehicle.mark_ready()
        vehicle.tick(accelerate, dt)
        before = vehicle.state.to_array().copy()
        vehicle.set_drift_sensitivity(0.9)
        assert np.array_equal(vehicle.state.to_array(), before)


class TestSurface:

    def test_box_membership(self, surface):
        assert surface.is_on_surface(np.array([0.0, 0.5, 0.0]))
        assert not surface.is_on_surface(np.array([0.0, 2.0, 0.0]))
        assert not surface.is_on_surface(np.array([20.0, 0.5, 0.0]))

    def test_height_lookup(self, surface):
        assert surface.height_at(0.0, 0.0) == pytest.approx(0.5)
        assert surface.height_at(0.0, 60.0) is None

    def test_invalid_corners(self):
        with pytest.raises(ValueError):
            BoxSurface([1.0, 0.0, 0.0], [0.0, 1.0, 1.0])
        with pytest.raises(ValueError):
            BoxSurface([0.0, 0.0], [1.0, 1.0])

    def test_from_dict(self, config):
        surface = BoxSurface.from_dict(config["surface"])
        assert surface.is_on_surface(np.zeros(3))
        with pytest.raises(ValueError):
            BoxSurface.from_dict({"min": [0.0, 0.0, 0.0]})

    def test_height_follows_ground(self, vehicle):
        assert vehicle.state.position[1] == pytest.approx(0.5)
        assert vehicle.telemetry.is_on_road()

    def test_off_road_swaps_config(self, vehicle, caplog):
        caplog.set_level(logging.INFO, logger="vehicle_dynamics.simulation")
        vehicle.reset(position=(0.0, 0.0, 100.0))
        assert not vehicle.telemetry.is_on_road()
        assert "Vehicle left the road" in [r.getMessage() for r in caplog.records]
        assert vehicle.active_config is vehicle.off_road_config

    def test_spawned_off_road(self, vehicle_config, surface):
        vehicle = Vehicle(
            vehicle_config,
            state=VehicleState.spawn(position=(0.0, 0.0, 100.0)),
            surface=surface,
            off_road_config=off_road_variant(vehicle_config),
        )
        assert not vehicle.telemetry.is_on_road()
        assert vehicle.active_config is vehicle.off_road_config

    def test_off_road_coasting_slows_gradually(self, vehicle, vehicle_config, idle, dt):
        vehicle.reset(position=(0.0, 0.0, 100.0))
        vehicle.mark_ready()
        vehicle.state.velocity = np.array([0.0, 40.0])

        road_car = Vehicle(vehicle_config, state=VehicleState(velocity=np.array([0.0, 40.0])))
        road_car.mark_ready()

        speeds = [vehicle.state.speed]
        for _ in range(30):
            vehicle.tick(idle, dt)
            road_car.tick(idle, dt)
            speeds.append(vehicle.state.speed)
        drops = np.diff(speeds)
        assert np.all(drops < 0)
        assert np.all(drops > -0.1)
        assert vehicle.state.speed < road_car.state.speed

    def test_leaving_road_keeps_speed_continuous(self, vehicle, accelerate):
        vehicle.reset(position=(0.0, 0.0, 49.0))
        vehicle.mark_ready()
        vehicle.state.velocity = np.array([0.0, 49.0])

        speeds = [vehicle.state.speed]
        for _ in range(10):
            vehicle.tick(accelerate, 1.0 / 60.0)
            speeds.append(vehicle.state.speed)
        assert not vehicle.telemetry.is_on_road()
        assert np.max(np.abs(np.diff(speeds))) < 0.5
        assert vehicle.state.position[1] == pytest.approx(0.5)

    def test_no_surface_stays_on_road(self, vehicle_config, accelerate, dt):
        vehicle = Vehicle(vehicle_config)
        vehicle.mark_ready()
        vehicle.tick(accelerate, dt)
        assert vehicle.telemetry.is_on_road()
        assert vehicle.active_config is vehicle.config


class TestScenarios:

    def test_registry(self):
        assert set(SCENARIOS) == {"accelerate", "brake", "slalom", "drift"}
        assert get_scenario("brake") is brake_program

    def test_unknown_scenario(self):
        with pytest.raises(ValueError, match="Unknown scenario"):
            get_scenario("donuts")

    def test_brake_program(self):
        assert brake_program(299).accelerate
        assert brake_program(300).brake

    def test_slalom_alternates(self):
        assert slalom_program(0) == InputSnapshot(accelerate=True)
        assert slalom_program(120).steer_sign == 1
        assert slalom_program(165).steer_sign == -1
        assert slalom_program(210).steer_sign == 1

    def test_drift_program(self):
        assert drift_program(0).steer_sign == 0
        assert drift_program(240).steer_sign == 1

    def test_run_scenario(self, vehicle_config, dt):
        vehicle = Vehicle(vehicle_config)
        seen = []
        records = run_scenario(vehicle, get_scenario("accelerate"), 30, dt, recorder=lambda s, r: seen.append(s))
        assert vehicle.ready
        assert len(records) == 30
        assert seen == list(range(30))
        assert records[-1]["step"] == 29
        assert records[-1]["accelerate"] is True
        assert records[-1]["speed"] > records[0]["speed"]

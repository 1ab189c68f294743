# Tests for scalar physics terms

import pytest
import numpy as np
from vehicle_dynamics.core import physics
from vehicle_dynamics.core.math_utils import (
    TWO_PI,
    from_kmh,
    local_to_world,
    to_kmh,
    world_to_local,
    wrap_heading,
)


class TestSteeringEffectiveness:

    @pytest.mark.parametrize("speed_kmh, expected", [
        (0.0, 1.0),
        (30.0, 1.0),
        (80.0, 0.6),
        (120.0, 0.3),
    ])
    def test_curve_boundaries(self, speed_kmh, expected):
        assert physics.steering_effectiveness(speed_kmh) == pytest.approx(expected)

    def test_boundaries_from_forward_speed(self):
        """Same boundaries when converted from m/s."""
        for kmh, expected in [(0.0, 1.0), (30.0, 1.0), (80.0, 0.6), (120.0, 0.3)]:
            speed = from_kmh(kmh)
            assert physics.steering_effectiveness(to_kmh(speed)) == pytest.approx(expected)

    def test_midpoints(self):
        assert physics.steering_effectiveness(55.0) == pytest.approx(0.8)
        assert physics.steering_effectiveness(100.0) == pytest.approx(0.45)

    def test_floor_holds_beyond_120(self):
        assert physics.steering_effectiveness(250.0) == pytest.approx(0.3)

    def test_monotonic_non_increasing(self):
        values = [physics.steering_effectiveness(k) for k in np.linspace(0, 200, 401)]
        assert all(b <= a + 1e-12 for a, b in zip(values, values[1:]))


class TestForceTerms:

    def test_throttle_factor(self):
        assert physics.throttle_factor(0.0, 50.0) == pytest.approx(1.0)
        assert physics.throttle_factor(25.0, 50.0) == pytest.approx(0.75)

    def test_throttle_factor_never_vanishes(self):
        assert physics.throttle_factor(45.0, 50.0) == pytest.approx(0.2)
        assert physics.throttle_factor(50.0, 50.0) == pytest.approx(0.2)

    def test_brake_efficiency(self):
        assert physics.brake_efficiency(0.0) == pytest.approx(0.2)
        assert physics.brake_efficiency(2.5) == pytest.approx(0.5)
        assert physics.brake_efficiency(-2.5) == pytest.approx(0.5)
        assert physics.brake_efficiency(20.0) == pytest.approx(1.0)

    def test_aero_drag(self):
        """F = 0.5 * rho * v^2 * Cd * A"""
        assert physics.aero_drag(10.0, 0.3, 2.0) == pytest.approx(0.5 * 1.225 * 100.0 * 0.3 * 2.0)

    def test_drag_quadratic(self):
        assert physics.aero_drag(20.0) == pytest.approx(4.0 * physics.aero_drag(10.0))

    def test_lateral_friction_scale(self):
        assert physics.lateral_friction_scale(0.0) == pytest.approx(0.3)
        assert physics.lateral_friction_scale(1.5) == pytest.approx(0.65)
        assert physics.lateral_friction_scale(-1.5) == pytest.approx(0.65)
        assert physics.lateral_friction_scale(3.0) == pytest.approx(1.0)
        assert physics.lateral_friction_scale(10.0) == pytest.approx(1.0)

    def test_adjusted_cornering_stiffness(self):
        assert physics.adjusted_cornering_stiffness(50000.0, 0.0) == pytest.approx(50000.0)
        assert physics.adjusted_cornering_stiffness(50000.0, 100.0) == pytest.approx(50000.0 / 1.2)

    def test_cornering_force_limit(self):
        assert physics.cornering_force_limit(0.0) == pytest.approx(8000.0)
        assert physics.cornering_force_limit(100.0) == pytest.approx(10000.0)

    def test_clamp_timestep(self):
        assert physics.clamp_timestep(0.1) == pytest.approx(0.05)
        assert physics.clamp_timestep(0.016) == pytest.approx(0.016)

    def test_signed_slip(self):
        assert physics.slip_angle_signed(1.0, 1.0) == pytest.approx(np.pi / 4)
        assert physics.slip_angle_signed(-1.0, -1.0) == pytest.approx(-np.pi / 4)


class TestMathUtils:

    def test_wrap_heading_inside_range(self):
        assert wrap_heading(1.0) == pytest.approx(1.0)
        assert wrap_heading(-1.0) == pytest.approx(-1.0)

    def test_wrap_heading_keeps_sign(self):
        assert wrap_heading(TWO_PI + 0.5) == pytest.approx(0.5)
        assert wrap_heading(-TWO_PI - 0.5) == pytest.approx(-0.5)

    def test_wrap_heading_open_interval(self):
        for angle in [TWO_PI, 3 * TWO_PI, -TWO_PI, 100.0, -100.0]:
            assert -TWO_PI < wrap_heading(angle) < TWO_PI

    def test_local_world_roundtrip(self):
        heading = 0.7
        x, z = local_to_world(3.0, -2.0, heading)
        longitudinal, lateral = world_to_local(x, z, heading)
        assert longitudinal == pytest.approx(3.0)
        assert lateral == pytest.approx(-2.0)

    def test_local_to_world_heading_zero(self):
        """Forward maps to +z, left maps to +x."""
        assert local_to_world(1.0, 0.0, 0.0) == pytest.approx((0.0, 1.0))
        assert local_to_world(0.0, 1.0, 0.0) == pytest.approx((1.0, 0.0))

    def test_kmh_conversion(self):
        assert to_kmh(10.0) == pytest.approx(36.0)
        assert from_kmh(36.0) == pytest.approx(10.0)

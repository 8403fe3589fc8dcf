import math
from dataclasses import replace

import pytest

from control.dead_zone import DeadZoneState
from control.guidance import GuidanceController, GuidanceSample
from control.lookahead import lookahead_distance
from control.steering import SteeringLaw, stanley_steer
from control.vehicle_config import VehicleConfig
from shared.types import PositionSample

FIX = PositionSample(easting=0.0, northing=0.0, heading=0.0, speed=10.0)


def _ctrl(**kw) -> GuidanceController:
    return GuidanceController(replace(VehicleConfig(), **kw))


def test_inactive_returns_none():
    ctrl = _ctrl()
    assert not ctrl.is_active
    assert ctrl.calculate(FIX, 0.5, 0.3) is None
    ctrl.start()
    assert isinstance(ctrl.calculate(FIX, 0.5, 0.3), GuidanceSample)
    ctrl.stop()
    assert ctrl.calculate(FIX, 0.5, 0.3) is None


def test_stanley_sample_fields():
    cfg = VehicleConfig()
    ctrl = GuidanceController(cfg)
    ctrl.start()
    out = ctrl.calculate(FIX, 0.25, 0.3)
    assert out.cross_track_error == 0.25
    assert out.lookahead_distance == pytest.approx(lookahead_distance(10.0, 0.25, True, cfg.lookahead))
    assert out.steer_angle == pytest.approx(stanley_steer(0.25, 0.3, 10.0, 1.0, 0.8))
    assert not out.is_on_line
    assert ctrl.cross_track_error == 0.25
    assert ctrl.lookahead_distance == out.lookahead_distance

    assert ctrl.calculate(FIX, -0.05, 0.3).is_on_line


def test_dead_zone_holds_wheel_straight():
    ctrl = _ctrl(dead_zone_heading=10.0, dead_zone_delay=2)
    ctrl.start()
    first = ctrl.calculate(FIX, 0.5, 0.01)
    assert first.steer_angle > 0
    second = ctrl.calculate(FIX, 0.5, 0.01)
    assert second.steer_angle == 0.0
    assert ctrl.dead_zone_state == DeadZoneState(2, True)
    # any heading excursion steers again at once
    third = ctrl.calculate(FIX, 0.5, 0.2)
    assert third.steer_angle != 0.0
    assert ctrl.dead_zone_state == DeadZoneState(0, False)


def test_start_resets_dead_zone():
    ctrl = _ctrl(dead_zone_delay=1)
    ctrl.start()
    ctrl.calculate(FIX, 0.0, 0.0)
    assert ctrl.dead_zone_state.in_dead_zone
    ctrl.stop()
    ctrl.start()
    assert ctrl.dead_zone_state == DeadZoneState(0, False)


def test_output_clamped_to_max_steer():
    ctrl = _ctrl(max_steer_angle=0.3, dead_zone_heading=0.0)
    ctrl.start()
    assert ctrl.calculate(FIX, 5.0, 0.0).steer_angle == 0.3
    assert ctrl.calculate(FIX, -5.0, 0.0).steer_angle == -0.3


def test_pure_pursuit_uses_goal_point_when_given():
    ctrl = _ctrl(steering_law=SteeringLaw.PURE_PURSUIT, dead_zone_heading=0.0)
    ctrl.start()
    out = ctrl.calculate(FIX, 1.0, 0.0, goal_point=(10.0, 10.0))
    assert out.steer_angle == pytest.approx(math.atan(0.25))
    # synthesised goal: left of the line -> steer right
    assert ctrl.calculate(FIX, 1.0, 0.0).steer_angle > 0


def test_non_finite_input_does_not_raise():
    ctrl = _ctrl()
    ctrl.start()
    out = ctrl.calculate(FIX, float("nan"), 0.0)
    assert out.steer_angle == 0.0
    assert not out.is_on_line
    out = ctrl.calculate(PositionSample(0.0, 0.0, 0.0, float("inf")), 0.2, 0.0)
    assert out.steer_angle == 0.0


def test_non_finite_goal_point_holds_wheel():
    ctrl = _ctrl(steering_law=SteeringLaw.PURE_PURSUIT, dead_zone_heading=0.0)
    ctrl.start()
    out = ctrl.calculate(FIX, 0.5, 0.0, goal_point=(float("nan"), 3.0))
    assert out.steer_angle == 0.0
    out = ctrl.calculate(FIX, 0.5, 0.0, goal_point=(4.0, float("inf")))
    assert out.steer_angle == 0.0

from pathlib import Path

import pytest

from control.lookahead import LookaheadParams
from control.steering import SteeringLaw
from control.vehicle_config import VehicleConfig, load_vehicle_config, vehicle_config_from_dict

REPO_CFG = Path(__file__).resolve().parents[2] / "configs" / "vehicle.yaml"


def test_defaults_when_no_file(tmp_path):
    assert load_vehicle_config(None) == VehicleConfig()
    assert load_vehicle_config(str(tmp_path / "missing.yaml")) == VehicleConfig()


def test_repo_config_loads():
    cfg = load_vehicle_config(str(REPO_CFG))
    assert cfg.steering_law is SteeringLaw.STANLEY
    assert cfg.lookahead == LookaheadParams(1.4, 4.0, 1.5, 2.0)
    assert cfg.dead_zone_delay == 10


def test_yaml_overrides(tmp_path):
    p = tmp_path / "v.yaml"
    p.write_text(
        "wheelbase: 3.2\n"
        "steering_law: PURE_PURSUIT\n"
        "lookahead:\n  hold: 3.0\n"
        "dead_zone:\n  heading: 5\n  delay: 4\n"
    )
    cfg = load_vehicle_config(str(p))
    assert cfg.wheelbase == 3.2
    assert cfg.steering_law is SteeringLaw.PURE_PURSUIT
    assert cfg.lookahead.hold == 3.0
    assert cfg.lookahead.multiplier == 1.4  # untouched default
    assert (cfg.dead_zone_heading, cfg.dead_zone_delay) == (5.0, 4)


def test_empty_file_gives_defaults(tmp_path):
    p = tmp_path / "empty.yaml"
    p.write_text("")
    assert load_vehicle_config(str(p)) == VehicleConfig()


@pytest.mark.parametrize(
    "bad",
    [
        {"wheelbase": 0},
        {"steering_law": "mpc"},
        {"lookahead": {"min_distance": -1}},
        {"lookahead": {"hold_dist": 3}},
        {"dead_zone": {"delay": -2}},
        {"max_steer_angle": 0},
    ],
)
def test_invalid_values_raise(bad):
    with pytest.raises(ValueError):
        vehicle_config_from_dict(bad)


def test_config_is_immutable():
    cfg = VehicleConfig()
    with pytest.raises(AttributeError):
        cfg.wheelbase = 4.0

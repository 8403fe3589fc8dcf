from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace

import yaml

from control.lookahead import LookaheadParams
from control.steering import SteeringLaw


@dataclass(frozen=True)
class VehicleConfig:
    """Read-only vehicle/guidance tuning handed to the guidance core."""

    lookahead: LookaheadParams = field(default_factory=LookaheadParams)
    dead_zone_heading: float = 10.0  # x0.01 rad
    dead_zone_delay: int = 10  # ticks
    stanley_heading_gain: float = 1.0
    stanley_distance_gain: float = 0.8
    wheelbase: float = 2.5  # m
    steering_law: SteeringLaw = SteeringLaw.STANLEY
    max_steer_angle: float = 0.61  # rad (~35 deg)
    tool_width: float = 6.0  # m

    def validate(self) -> "VehicleConfig":
        if self.wheelbase <= 0:
            raise ValueError(f"wheelbase must be > 0, got {self.wheelbase}")
        if self.lookahead.min_distance < 0:
            raise ValueError("lookahead.min_distance must be >= 0")
        if self.lookahead.hold <= 0 or self.lookahead.acquire_factor <= 0:
            raise ValueError("lookahead.hold and lookahead.acquire_factor must be > 0")
        if self.dead_zone_delay < 0:
            raise ValueError("dead_zone_delay must be >= 0")
        if self.max_steer_angle <= 0:
            raise ValueError("max_steer_angle must be > 0")
        return self


def _parse_law(v) -> SteeringLaw:
    try:
        return SteeringLaw(str(v).lower())
    except ValueError:
        names = ", ".join(m.value for m in SteeringLaw)
        raise ValueError(f"unknown steering_law {v!r} (expected one of: {names})") from None


def vehicle_config_from_dict(cfg: dict) -> VehicleConfig:
    if not isinstance(cfg, dict):
        raise ValueError(f"vehicle config must be a mapping, got {type(cfg).__name__}")
    la = cfg.get("lookahead", {}) or {}
    st = cfg.get("stanley", {}) or {}
    dz = cfg.get("dead_zone", {}) or {}
    d = VehicleConfig()
    base_la = d.lookahead
    known_la = {f.name for f in fields(LookaheadParams)}
    unknown = set(la) - known_la
    if unknown:
        raise ValueError(f"unknown lookahead keys: {sorted(unknown)}")
    out = replace(
        d,
        lookahead=LookaheadParams(
            multiplier=float(la.get("multiplier", base_la.multiplier)),
            hold=float(la.get("hold", base_la.hold)),
            acquire_factor=float(la.get("acquire_factor", base_la.acquire_factor)),
            min_distance=float(la.get("min_distance", base_la.min_distance)),
        ),
        dead_zone_heading=float(dz.get("heading", d.dead_zone_heading)),
        dead_zone_delay=int(dz.get("delay", d.dead_zone_delay)),
        stanley_heading_gain=float(st.get("heading_gain", d.stanley_heading_gain)),
        stanley_distance_gain=float(st.get("distance_gain", d.stanley_distance_gain)),
        wheelbase=float(cfg.get("wheelbase", d.wheelbase)),
        steering_law=_parse_law(cfg.get("steering_law", d.steering_law.value)),
        max_steer_angle=float(cfg.get("max_steer_angle", d.max_steer_angle)),
        tool_width=float(cfg.get("tool_width", d.tool_width)),
    )
    return out.validate()


def load_vehicle_config(path: str | None) -> VehicleConfig:
    """Load YAML tuning; defaults when no file is given or it does not exist."""
    if not path or not os.path.exists(path):
        return VehicleConfig()
    with open(path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    return vehicle_config_from_dict(cfg)

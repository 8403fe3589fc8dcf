from __future__ import annotations

import argparse
import csv
import math
import os
from dataclasses import replace

from control.guidance import GuidanceController
from control.steering import SteeringLaw
from control.vehicle_config import load_vehicle_config
from shared.types import Point2D
from sim.ab_line import ABLine
from sim.tractor_2d import TractorParams, Tractor2D

COLUMNS = [
    "t",
    "easting",
    "northing",
    "heading",
    "xte",
    "heading_error",
    "lookahead",
    "steer",
    "on_line",
]


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="AB-line demo: guidance -> Tractor2D")
    ap.add_argument("--vehicle-config", default="configs/vehicle.yaml")
    ap.add_argument("--law", choices=[m.value for m in SteeringLaw], default=None)
    ap.add_argument("--speed", type=float, default=10.0, help="km/h")
    ap.add_argument("--start-offset", type=float, default=3.0, help="m left of the line")
    ap.add_argument("--start-heading-deg", type=float, default=-15.0)
    ap.add_argument("--heading-noise", type=float, default=0.0, help="rad std")
    ap.add_argument("--seed", type=int, default=0)
    ap.add_argument("--dt", type=float, default=0.1, help="fix period (s)")
    ap.add_argument("--sim-seconds", type=float, default=60.0)
    ap.add_argument("--csv-out", default="artifacts/guidance_run.csv")
    args = ap.parse_args(argv)

    os.makedirs(os.path.dirname(args.csv_out) or ".", exist_ok=True)

    cfg = load_vehicle_config(args.vehicle_config)
    if args.law:
        cfg = replace(cfg, steering_law=SteeringLaw(args.law))

    line = ABLine(Point2D(0.0, 0.0), Point2D(0.0, 500.0))
    tractor = Tractor2D(
        TractorParams(
            wheelbase=cfg.wheelbase,
            max_steer=cfg.max_steer_angle,
            heading_noise=args.heading_noise,
        ),
        seed=args.seed,
    )
    tractor.reset(-args.start_offset, 0.0, math.radians(args.start_heading_deg), args.speed)

    ctrl = GuidanceController(cfg)
    ctrl.start()

    dt = args.dt
    steps = int(round(args.sim_seconds / dt))
    pos = tractor.sample()
    on_line = 0
    with open(args.csv_out, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(COLUMNS)
        for k in range(steps + 1):
            xte, he = line.errors(pos.easting, pos.northing, pos.heading)
            out = ctrl.calculate(pos, xte, he)
            w.writerow(
                [
                    k * dt,
                    pos.easting,
                    pos.northing,
                    pos.heading,
                    xte,
                    he,
                    out.lookahead_distance,
                    out.steer_angle,
                    int(out.is_on_line),
                ]
            )
            on_line += int(out.is_on_line)
            pos = tractor.step(dt, out.steer_angle)

    ctrl.stop()
    print(f"Sim finished ({cfg.steering_law.value}). On line {on_line}/{steps + 1} ticks")
    print(f"Wrote: {args.csv_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

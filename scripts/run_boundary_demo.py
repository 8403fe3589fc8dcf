from __future__ import annotations

import argparse
import json
import math
import os

from boundary.polygon import BoundaryPolygon
from boundary.recorder import BoundaryKind, BoundaryRecorder
from boundary.region import Boundary
from boundary.stats import FieldStats, format_area
from control.vehicle_config import load_vehicle_config


def drive_rectangle(width: float, height: float, spacing: float):
    """Fixes (easting, northing, heading) for a clockwise lap from the SW corner."""
    corners = [(0.0, 0.0), (0.0, height), (width, height), (width, 0.0)]
    for i, (e0, n0) in enumerate(corners):
        e1, n1 = corners[(i + 1) % len(corners)]
        heading = math.atan2(e1 - e0, n1 - n0) % (2 * math.pi)
        length = math.hypot(e1 - e0, n1 - n0)
        n_steps = max(1, int(length / spacing))
        for k in range(n_steps):
            t = k / n_steps
            yield e0 + t * (e1 - e0), n0 + t * (n1 - n0), heading


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Record a driven boundary and report area")
    ap.add_argument("--vehicle-config", default="configs/vehicle.yaml")
    ap.add_argument("--width", type=float, default=200.0, help="m")
    ap.add_argument("--height", type=float, default=100.0, help="m")
    ap.add_argument("--spacing", type=float, default=2.0, help="m between fixes")
    ap.add_argument("--offset-cm", type=float, default=300.0)
    ap.add_argument("--left", action="store_true", help="offset to the left of travel")
    ap.add_argument("--hole", type=float, default=20.0, help="side of a square hole (m), 0=none")
    ap.add_argument("--json-out", default="artifacts/boundary_demo.json")
    args = ap.parse_args(argv)

    cfg = load_vehicle_config(args.vehicle_config)
    rec = BoundaryRecorder(offset_cm=args.offset_cm, right_side=not args.left)
    rec.start(BoundaryKind.OUTER)
    for e, n, h in drive_rectangle(args.width, args.height, args.spacing):
        rec.add_point(e, n, h)
    outer = rec.stop()
    if outer is None:
        print("[boundary] not enough points, boundary not saved")
        return 1

    region = Boundary(outer=outer)
    if args.hole > 0:
        cx, cy, r = args.width / 2, args.height / 2, args.hole / 2
        region.add_inner(
            BoundaryPolygon.from_coords(
                [(cx - r, cy - r), (cx + r, cy - r), (cx + r, cy + r), (cx - r, cy + r)]
            )
        )

    stats = FieldStats()
    stats.update_boundary_area(region)
    speed = 10.0
    out = {
        "points": len(outer),
        "area_m2": region.area,
        "area_ha": region.area_hectares,
        "area_ac": region.area_acres,
        "center_inside": region.contains(args.width / 2, args.height / 2),
        "corner_inside": region.contains(1.0, 1.0),
        "minutes_to_finish": stats.time_to_finish_minutes(speed, cfg.tool_width),
    }

    os.makedirs(os.path.dirname(args.json_out) or ".", exist_ok=True)
    with open(args.json_out, "w") as f:
        json.dump(out, f, indent=2)

    print(f"Boundary recorded: {out['points']} points")
    print(f"- area={format_area(region.area)} ({format_area(region.area, metric=False)})")
    print(f"- center_inside={out['center_inside']} corner_inside={out['corner_inside']}")
    print(f"- est. {out['minutes_to_finish']:.0f} min at {speed:.0f} km/h, {cfg.tool_width} m tool")
    print(f"Wrote JSON: {args.json_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

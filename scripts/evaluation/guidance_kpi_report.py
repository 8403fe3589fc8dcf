from __future__ import annotations

import argparse
import json
from pathlib import Path

import numpy as np
import pandas as pd

REQUIRED = ["t", "xte", "heading_error", "lookahead", "steer", "on_line"]


def compute_kpis_df(df: pd.DataFrame, settle_band: float = 0.1) -> dict:
    missing = [c for c in REQUIRED if c not in df.columns]
    if missing:
        raise ValueError(f"missing columns: {missing}")

    t = df["t"].to_numpy(dtype=float)
    xte = np.abs(df["xte"].to_numpy(dtype=float))
    steer = df["steer"].to_numpy(dtype=float)

    # first time after which |xte| stays inside the band
    outside = np.nonzero(xte >= settle_band)[0]
    if len(outside) == 0:
        settle_s = float(t[0]) if len(t) else None
    elif outside[-1] + 1 < len(t):
        settle_s = float(t[outside[-1] + 1])
    else:
        settle_s = None

    dt = float(np.median(np.diff(t))) if len(t) > 1 else 1.0
    k = {
        "rms_xte": float(np.sqrt((xte**2).mean())) if len(xte) else 0.0,
        "max_xte": float(xte.max()) if len(xte) else 0.0,
        "final_xte": float(xte[-1]) if len(xte) else 0.0,
        "on_line_pct": float(df["on_line"].astype(int).mean() * 100.0) if len(df) else 0.0,
        "settle_s": settle_s,
        "max_steer": float(np.abs(steer).max()) if len(steer) else 0.0,
        "steer_rate_rms": (
            float(np.sqrt(((np.diff(steer) / dt) ** 2).mean())) if len(steer) > 1 else 0.0
        ),
        "mean_lookahead": float(df["lookahead"].mean()) if len(df) else 0.0,
        "duration_s": float(t[-1] - t[0]) if len(t) else 0.0,
    }
    k["rating"] = "green" if k["final_xte"] < 0.10 else ("yellow" if k["final_xte"] < 0.30 else "red")
    if not len(t):
        k["rating"] = "red"  # no samples
    return k


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Compute KPIs from guidance CSV logs.")
    ap.add_argument("--csv", default="artifacts/guidance_run.csv", help="CSV from run_guidance_demo")
    ap.add_argument("--json-out", default="artifacts/guidance_kpis.json")
    ap.add_argument("--settle-band", type=float, default=0.1, help="m")
    args = ap.parse_args(argv)

    df = pd.read_csv(args.csv)
    k = compute_kpis_df(df, settle_band=args.settle_band)

    Path(args.json_out).parent.mkdir(parents=True, exist_ok=True)
    with open(args.json_out, "w") as f:
        json.dump(k, f, indent=2)

    settle = "never" if k["settle_s"] is None else f"{k['settle_s']:.1f}s"
    print("Guidance KPIs")
    print(f"- rms_xte={k['rms_xte']:.3f}  max_xte={k['max_xte']:.3f}  final_xte={k['final_xte']:.3f}")
    print(f"- on_line={k['on_line_pct']:.1f}%  settle={settle}  max_steer={k['max_steer']:.3f}")
    print(f"- rating={k['rating']}")
    print(f"Wrote JSON: {args.json_out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

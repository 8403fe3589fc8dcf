#!/usr/bin/env python3
from __future__ import annotations

import math
from enum import Enum
from typing import Tuple

# Sign convention shared by both laws: positive steer = turn right (clockwise).
# Cross-track error is positive when the vehicle is left of the line, heading
# error is (line heading - vehicle heading), so positive values ask for right
# steer. Goal points are in the vehicle frame: x forward, y to the right.

KMH_TO_MS = 0.27778
MIN_STANLEY_SPEED_MS = 0.1
MIN_GOAL_DIST_M = 0.1


class SteeringLaw(Enum):
    STANLEY = "stanley"
    PURE_PURSUIT = "pure_pursuit"


def stanley_steer(
    cross_track_error: float,
    heading_error: float,
    speed_kmh: float,
    heading_gain: float,
    distance_gain: float,
) -> float:
    """Stanley law: heading term plus atan of the speed-scaled distance term."""
    speed_ms = max(speed_kmh * KMH_TO_MS, MIN_STANLEY_SPEED_MS)
    return heading_error * heading_gain + math.atan(distance_gain * cross_track_error / speed_ms)


def pure_pursuit_steer(goal_x: float, goal_y: float, wheelbase: float) -> float:
    """Bicycle-model pure pursuit toward a goal point in the vehicle frame."""
    dist = math.hypot(goal_x, goal_y)
    if not math.isfinite(dist) or dist < MIN_GOAL_DIST_M:
        return 0.0
    alpha = math.atan2(goal_y, goal_x)
    curvature = 2.0 * math.sin(alpha) / dist
    return math.atan(curvature * wheelbase)


def goal_from_errors(
    cross_track_error: float, heading_error: float, lookahead: float
) -> Tuple[float, float]:
    """Goal point on a straight line, ``lookahead`` metres from the vehicle.

    If the vehicle is further than ``lookahead`` from the line, the goal is the
    foot of the perpendicular.
    """
    along = math.sqrt(max(lookahead * lookahead - cross_track_error * cross_track_error, 0.0))
    dist = math.hypot(along, cross_track_error)
    bearing = math.atan2(cross_track_error, along) + heading_error  # clockwise from nose
    return dist * math.cos(bearing), dist * math.sin(bearing)


def _clamp(v: float, lim: float) -> float:
    return lim if v > lim else -lim if v < -lim else v


def steer(
    law: SteeringLaw,
    *,
    cross_track_error: float,
    heading_error: float,
    speed_kmh: float,
    lookahead: float,
    heading_gain: float,
    distance_gain: float,
    wheelbase: float,
    goal: Tuple[float, float] | None = None,
    max_angle: float | None = None,
) -> float:
    """Dispatch to the configured law and clamp to ``max_angle`` if given."""
    if law is SteeringLaw.STANLEY:
        out = stanley_steer(cross_track_error, heading_error, speed_kmh, heading_gain, distance_gain)
    else:
        gx, gy = goal if goal is not None else goal_from_errors(
            cross_track_error, heading_error, lookahead
        )
        out = pure_pursuit_steer(gx, gy, wheelbase)
    return _clamp(out, max_angle) if max_angle is not None else out

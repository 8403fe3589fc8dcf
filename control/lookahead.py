from __future__ import annotations

from dataclasses import dataclass

HOLD_BAND_M = 0.1  # xte at or below -> hold distance
ACQUIRE_BAND_M = 0.4  # xte at or above -> acquire distance
MANUAL_HOLD_M = 5.0  # hold distance when auto-steer is off


@dataclass(frozen=True)
class LookaheadParams:
    multiplier: float = 1.4  # speed term gain
    hold: float = 4.0  # m, hold distance when on line
    acquire_factor: float = 1.5  # acquire = hold * factor
    min_distance: float = 2.0  # m, floor


def lookahead_distance(
    speed: float, cross_track_error: float, auto_steer_on: bool, params: LookaheadParams
) -> float:
    """Goal-point distance (m) from speed (km/h) and cross-track error.

    Near the line the hold distance keeps tracking tight; far off it the acquire
    distance gives a smooth re-acquisition; between 0.1 and 0.4 m the two are
    blended linearly so the command has no step at either band edge.
    """
    xte = abs(cross_track_error)
    base = speed * 0.05 * params.multiplier

    hold = params.hold if auto_steer_on else MANUAL_HOLD_M
    acquire = hold * params.acquire_factor

    if xte <= HOLD_BAND_M:
        dist = hold
    elif xte < ACQUIRE_BAND_M:
        frac = (xte - HOLD_BAND_M) / (ACQUIRE_BAND_M - HOLD_BAND_M)
        dist = (1.0 - frac) * (hold - acquire) + acquire
    else:
        dist = acquire

    return max(base * dist + dist, params.min_distance)

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from control.dead_zone import DeadZoneState, DeadZoneTracker
from control.lookahead import lookahead_distance
from control.steering import steer
from control.vehicle_config import VehicleConfig
from shared.types import PositionSample

logger = logging.getLogger(__name__)

ON_LINE_XTE_M = 0.1


@dataclass(frozen=True)
class GuidanceSample:
    cross_track_error: float  # m, + = left of line
    lookahead_distance: float  # m
    steer_angle: float  # rad, + = right
    is_on_line: bool


class GuidanceController:
    """Per-tick steering from cross-track and heading error.

    Lookahead follows speed and error; a debounced heading dead zone holds the
    wheel straight once the vehicle has settled. Call from one thread only.
    """

    def __init__(self, config: VehicleConfig) -> None:
        self.cfg = config
        self.dead_zone = DeadZoneTracker(config.dead_zone_heading, config.dead_zone_delay)
        self._active = False
        self.cross_track_error = 0.0
        self.lookahead_distance = 0.0

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def dead_zone_state(self) -> DeadZoneState:
        return self.dead_zone.state

    def start(self) -> None:
        self.dead_zone.reset()
        self._active = True
        logger.info("guidance started (%s)", self.cfg.steering_law.value)

    def stop(self) -> None:
        self._active = False
        logger.info("guidance stopped")

    def calculate(
        self,
        position: PositionSample,
        cross_track_error: float,
        heading_error: float,
        goal_point: Optional[Tuple[float, float]] = None,
    ) -> Optional[GuidanceSample]:
        """One control tick. Returns None while stopped.

        ``goal_point`` is an optional pure-pursuit target in the vehicle frame,
        metres: x forward, y to the right. Without it the goal is derived from
        the errors at the lookahead distance.
        """
        if not self._active:
            return None

        speed = position.speed
        inputs = (cross_track_error, heading_error, speed) + tuple(goal_point or ())
        if not all(math.isfinite(v) for v in inputs):
            logger.debug(
                "non-finite guidance input xte=%s he=%s speed=%s goal=%s, holding wheel",
                cross_track_error,
                heading_error,
                speed,
                goal_point,
            )
            return GuidanceSample(
                cross_track_error=cross_track_error,
                lookahead_distance=self.lookahead_distance,
                steer_angle=0.0,
                is_on_line=False,
            )

        self.cross_track_error = cross_track_error
        self.lookahead_distance = lookahead_distance(
            speed, cross_track_error, True, self.cfg.lookahead
        )

        if self.dead_zone.update(heading_error):
            angle = 0.0
        else:
            angle = steer(
                self.cfg.steering_law,
                cross_track_error=cross_track_error,
                heading_error=heading_error,
                speed_kmh=speed,
                lookahead=self.lookahead_distance,
                heading_gain=self.cfg.stanley_heading_gain,
                distance_gain=self.cfg.stanley_distance_gain,
                wheelbase=self.cfg.wheelbase,
                goal=goal_point,
                max_angle=self.cfg.max_steer_angle,
            )

        return GuidanceSample(
            cross_track_error=cross_track_error,
            lookahead_distance=self.lookahead_distance,
            steer_angle=angle,
            is_on_line=abs(cross_track_error) < ON_LINE_XTE_M,
        )

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from shared.types import PositionSample


def _clamp(v: float, lo: float, hi: float) -> float:
    return hi if v > hi else lo if v < lo else v


def _wrap_2pi(a: float) -> float:
    return a % (2.0 * math.pi)


@dataclass
class TractorParams:
    wheelbase: float = 2.5  # m
    max_steer: float = 0.61  # rad
    steer_rate: float = 1.0  # rad/s, actuator slew limit
    heading_noise: float = 0.0  # rad std on the reported heading


class Tractor2D:
    """Kinematic bicycle (rear-axle reference) in compass frame.

    Heading 0 = north, clockwise positive; positive steer turns right.
    """

    def __init__(self, params: TractorParams | None = None, seed: int | None = None) -> None:
        self.p = params or TractorParams()
        self.rng = random.Random(seed)
        self.reset()

    def reset(
        self, easting: float = 0.0, northing: float = 0.0, heading: float = 0.0, speed: float = 0.0
    ) -> None:
        self.easting, self.northing = easting, northing
        self.heading = _wrap_2pi(heading)
        self.speed = speed  # km/h
        self.steer = 0.0

    def sample(self) -> PositionSample:
        h = self.heading
        if self.p.heading_noise > 0:
            h = _wrap_2pi(h + self.rng.gauss(0.0, self.p.heading_noise))
        return PositionSample(self.easting, self.northing, h, self.speed)

    def step(self, dt: float, steer_cmd: float) -> PositionSample:
        target = _clamp(steer_cmd, -self.p.max_steer, self.p.max_steer)
        max_delta = self.p.steer_rate * dt
        self.steer += _clamp(target - self.steer, -max_delta, max_delta)

        v = self.speed / 3.6  # m/s
        self.easting += v * math.sin(self.heading) * dt
        self.northing += v * math.cos(self.heading) * dt
        self.heading = _wrap_2pi(self.heading + v / self.p.wheelbase * math.tan(self.steer) * dt)
        return self.sample()

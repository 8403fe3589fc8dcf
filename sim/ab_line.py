from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from shared.types import Point2D


def _wrap_pi(a: float) -> float:
    return (a + math.pi) % (2.0 * math.pi) - math.pi


@dataclass(frozen=True)
class ABLine:
    """Straight reference line through A and B, followable in either direction.

    Only used to feed the demos: the guidance core takes the errors as inputs.
    """

    point_a: Point2D
    point_b: Point2D

    @property
    def heading(self) -> float:
        """Compass heading A->B (rad, 0 = north, clockwise)."""
        return math.atan2(
            self.point_b.easting - self.point_a.easting,
            self.point_b.northing - self.point_a.northing,
        ) % (2.0 * math.pi)

    def errors(self, easting: float, northing: float, heading: float) -> Tuple[float, float]:
        """(cross-track error, heading error) for a vehicle pose.

        XTE is positive when the vehicle is left of the line in its direction of
        travel; heading error is line heading minus vehicle heading in [-pi, pi).
        """
        line_h = self.heading
        if abs(_wrap_pi(heading - line_h)) > math.pi / 2.0:
            line_h = (line_h + math.pi) % (2.0 * math.pi)  # driving B->A
        we = easting - self.point_a.easting
        wn = northing - self.point_a.northing
        right = we * math.cos(line_h) - wn * math.sin(line_h)
        return -right, _wrap_pi(line_h - heading)

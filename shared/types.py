from __future__ import annotations

from dataclasses import dataclass

# Frames & units: local tangent plane (easting=x, northing=y), metres.
# Headings are radians, 0 = north, clockwise positive (compass convention).
# Speeds from the position stream are km/h.


@dataclass(frozen=True)
class Point2D:
    easting: float
    northing: float


@dataclass(frozen=True)
class BoundaryPoint:
    easting: float
    northing: float
    heading: float = 0.0  # rad, heading of the vehicle when captured


@dataclass(frozen=True)
class PositionSample:
    easting: float
    northing: float
    heading: float  # rad
    speed: float  # km/h

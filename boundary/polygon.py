#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

import numpy as np

from shared.types import BoundaryPoint, Point2D


SQM_PER_HECTARE = 10_000.0
SQM_PER_ACRE = 4046.86

AnyPoint = Union[Point2D, BoundaryPoint]


def polygon_area(points: Sequence[AnyPoint]) -> float:
    """Shoelace area in m^2 of the implicitly closed ring; 0 below 3 points.

    Sign of the cross-product sum is dropped, so winding and start index do not
    matter.
    """
    if len(points) < 3:
        return 0.0
    e = np.fromiter((p.easting for p in points), dtype=float, count=len(points))
    n = np.fromiter((p.northing for p in points), dtype=float, count=len(points))
    # pairs (i, i+1 mod N)
    twice = np.dot(e, np.roll(n, -1)) - np.dot(np.roll(e, -1), n)
    return float(abs(twice) / 2.0)


def point_in_polygon(easting: float, northing: float, points: Sequence[AnyPoint]) -> bool:
    """Even-odd ray-cast test toward +easting; False below 3 points.

    Points lying exactly on an edge get whatever answer the crossing count
    gives them (not guaranteed inside or outside).
    """
    n = len(points)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        ei, ni = points[i].easting, points[i].northing
        ej, nj = points[j].easting, points[j].northing
        # edge straddles the scanline, so ni != nj below
        if (ni > northing) != (nj > northing):
            e_cross = (ej - ei) * (northing - ni) / (nj - ni) + ei
            if easting < e_cross:
                inside = not inside
        j = i
    return inside


@dataclass
class BoundaryPolygon:
    """Closed ring of boundary points (outer fence or inner hole).

    Ring order is insertion order; the closing edge last->first is implicit.
    A drive-through polygon is drawn like a hole but never blocks containment.
    """

    points: List[BoundaryPoint] = field(default_factory=list)
    is_drive_through: bool = False

    @classmethod
    def from_coords(
        cls, coords: Iterable[tuple[float, float]], is_drive_through: bool = False
    ) -> "BoundaryPolygon":
        return cls([BoundaryPoint(float(e), float(n)) for e, n in coords], is_drive_through)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_valid(self) -> bool:
        return len(self.points) >= 3

    @property
    def area(self) -> float:
        return polygon_area(self.points)

    @property
    def area_hectares(self) -> float:
        return self.area / SQM_PER_HECTARE

    @property
    def area_acres(self) -> float:
        return self.area / SQM_PER_ACRE

    def contains(self, easting: float, northing: float) -> bool:
        return point_in_polygon(easting, northing, self.points)

    def contains_point(self, p: AnyPoint) -> bool:
        return self.contains(p.easting, p.northing)

    # in-progress editing (recorder / loaders only)
    def append(self, p: BoundaryPoint) -> None:
        self.points.append(p)

    def pop(self) -> BoundaryPoint | None:
        return self.points.pop() if self.points else None

    def copy(self) -> "BoundaryPolygon":
        return BoundaryPolygon(list(self.points), self.is_drive_through)

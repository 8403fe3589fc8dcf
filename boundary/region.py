from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from boundary.polygon import SQM_PER_ACRE, SQM_PER_HECTARE, BoundaryPolygon
from shared.types import PositionSample


@dataclass
class Boundary:
    """Field region: one outer fence plus inner rings.

    Area subtracts every inner ring, drive-through or not (the operator-facing
    figure). Containment only excludes inner rings that are not drive-through.
    """

    outer: Optional[BoundaryPolygon] = None
    inners: List[BoundaryPolygon] = field(default_factory=list)
    is_active: bool = True  # shown / used for guidance

    def __post_init__(self) -> None:
        # boundary owns its rings; never share the caller's instances
        self.outer = self.outer.copy() if self.outer is not None else None
        self.inners = [p.copy() for p in self.inners]

    @property
    def is_empty(self) -> bool:
        return self.outer is None

    @property
    def is_valid(self) -> bool:
        # no outer fence: valid but empty
        return self.outer is None or self.outer.is_valid

    def contains(self, easting: float, northing: float) -> bool:
        if self.outer is None or not self.outer.is_valid:
            return False
        if not self.outer.contains(easting, northing):
            return False
        for inner in self.inners:
            if not inner.is_drive_through and inner.contains(easting, northing):
                return False
        return True

    def contains_position(self, pos: PositionSample) -> bool:
        return self.contains(pos.easting, pos.northing)

    @property
    def area(self) -> float:
        total = self.outer.area if self.outer is not None else 0.0
        for inner in self.inners:
            total -= inner.area
        return total

    @property
    def area_hectares(self) -> float:
        return self.area / SQM_PER_HECTARE

    @property
    def area_acres(self) -> float:
        return self.area / SQM_PER_ACRE

    def add_inner(self, poly: BoundaryPolygon) -> None:
        # boundary owns its rings; never share the caller's instance
        self.inners.append(poly.copy())

    def set_outer(self, poly: Optional[BoundaryPolygon]) -> None:
        self.outer = poly.copy() if poly is not None else None

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from boundary.polygon import SQM_PER_ACRE, SQM_PER_HECTARE
from boundary.region import Boundary

FEET_PER_METRE = 3.28084


@dataclass
class FieldStats:
    """Running field totals shown to the operator."""

    worked_area_m2: float = 0.0
    user_distance_m: float = 0.0
    boundary_area_m2: float = 0.0

    def update_boundary_area(self, boundary: Optional[Boundary]) -> None:
        if boundary is None or not boundary.is_valid:
            self.boundary_area_m2 = 0.0
            return
        self.boundary_area_m2 = boundary.area

    def remaining_area_hectares(self) -> float:
        return (self.boundary_area_m2 - self.worked_area_m2) / SQM_PER_HECTARE

    def remaining_percent(self) -> float:
        if self.boundary_area_m2 > 10.0:
            return (self.boundary_area_m2 - self.worked_area_m2) * 100.0 / self.boundary_area_m2
        return 0.0

    @staticmethod
    def work_rate_ha_per_hour(speed_kmh: float, tool_width_m: float) -> float:
        # m * km/h * 0.1 -> ha/h
        return tool_width_m * speed_kmh * 0.1

    def time_to_finish_minutes(self, speed_kmh: float, tool_width_m: float) -> float:
        if speed_kmh <= 2.0 or tool_width_m <= 0.0:
            return float("inf")
        hours = self.remaining_area_hectares() / self.work_rate_ha_per_hour(speed_kmh, tool_width_m)
        return hours * 60.0

    def reset(self) -> None:
        self.worked_area_m2 = 0.0
        self.user_distance_m = 0.0


def format_area(area_m2: float, metric: bool = True) -> str:
    if metric:
        return f"{area_m2 / SQM_PER_HECTARE:.2f} ha"
    return f"{area_m2 / SQM_PER_ACRE:.2f} ac"


def format_distance(metres: float, metric: bool = True) -> str:
    if metric:
        return f"{metres:.1f} m"
    return f"{metres * FEET_PER_METRE:.1f} ft"

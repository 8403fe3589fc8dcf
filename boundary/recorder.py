#!/usr/bin/env python3
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Tuple

from boundary.polygon import BoundaryPolygon, polygon_area
from shared.types import BoundaryPoint

logger = logging.getLogger(__name__)


class RecorderState(Enum):
    IDLE = "idle"
    RECORDING = "recording"
    PAUSED = "paused"


class BoundaryKind(Enum):
    OUTER = "outer"
    INNER = "inner"


def offset_position(
    easting: float,
    northing: float,
    heading: float,
    offset_m: float,
    right_side: bool = True,
) -> Tuple[float, float]:
    """Shift a fix sideways, perpendicular to the heading.

    Positive offsets go to the right of travel; ``right_side=False`` mirrors
    the shift to the left. Heading is compass style (0 = north, clockwise).
    """
    if offset_m == 0.0:
        return easting, northing
    d = offset_m if right_side else -offset_m
    perp = heading + math.pi / 2.0
    return easting + d * math.sin(perp), northing + d * math.cos(perp)


class BoundaryRecorder:
    """Accumulates driven fixes into a boundary ring.

    Idle -> Recording <-> Paused -> stop() -> Idle, cancel() from any
    non-idle state. Calls made from the wrong state do nothing, so stale UI
    buttons can never break the capture loop. Not thread safe.
    """

    def __init__(
        self, offset_cm: float = 0.0, right_side: bool = True, drive_through: bool = False
    ) -> None:
        self.offset_cm = offset_cm  # operator units
        self.right_side = right_side
        self.drive_through = drive_through
        self._state = RecorderState.IDLE
        self._kind = BoundaryKind.OUTER
        self._points: list[BoundaryPoint] = []

    # ---- views ----
    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def kind(self) -> BoundaryKind:
        return self._kind

    @property
    def is_recording(self) -> bool:
        return self._state is RecorderState.RECORDING

    @property
    def points(self) -> Tuple[BoundaryPoint, ...]:
        return tuple(self._points)

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def area(self) -> float:
        """Area of the ring so far (m^2), for live display."""
        return polygon_area(self._points)

    def set_offset(self, offset_cm: float, right_side: bool = True) -> None:
        self.offset_cm = offset_cm
        self.right_side = right_side

    # ---- transitions ----
    def start(self, kind: BoundaryKind = BoundaryKind.OUTER) -> None:
        if self._state is not RecorderState.IDLE:
            return
        self._points.clear()
        self._kind = kind
        self._state = RecorderState.RECORDING
        logger.info("boundary recording started (%s)", kind.value)

    def pause(self) -> None:
        if self._state is RecorderState.RECORDING:
            self._state = RecorderState.PAUSED
            logger.debug("boundary recording paused at %d points", len(self._points))

    def resume(self) -> None:
        if self._state is RecorderState.PAUSED:
            self._state = RecorderState.RECORDING
            logger.debug("boundary recording resumed")

    def add_point(self, easting: float, northing: float, heading: float) -> Optional[BoundaryPoint]:
        if self._state is not RecorderState.RECORDING:
            return None
        e, n = offset_position(easting, northing, heading, self.offset_cm / 100.0, self.right_side)
        p = BoundaryPoint(e, n, heading)
        self._points.append(p)
        return p

    def remove_last_point(self) -> bool:
        if self._state is RecorderState.IDLE or not self._points:
            return False
        self._points.pop()
        return True

    def clear_points(self) -> None:
        self._points.clear()

    def stop(self) -> Optional[BoundaryPolygon]:
        """Finish the ring. None means fewer than 3 points (not saved)."""
        if self._state is RecorderState.IDLE:
            return None
        pts, self._points = self._points, []
        self._state = RecorderState.IDLE
        if len(pts) < 3:
            logger.info("boundary discarded, only %d points", len(pts))
            return None
        poly = BoundaryPolygon(pts, is_drive_through=self.drive_through)
        logger.info(
            "boundary finished (%s): %d points, %.2f ha",
            self._kind.value,
            len(pts),
            poly.area_hectares,
        )
        return poly

    def cancel(self) -> None:
        if self._state is RecorderState.IDLE:
            return
        self._points.clear()
        self._state = RecorderState.IDLE
        logger.info("boundary recording cancelled")

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeadZoneState:
    delay_counter: int
    in_dead_zone: bool


class DeadZoneTracker:
    """Debounced heading dead zone.

    Entering needs ``delay`` consecutive ticks with |heading error| below the
    threshold; one tick at or above it leaves immediately and clears the count.
    """

    def __init__(self, dead_zone_heading: float, delay: int) -> None:
        self.threshold = dead_zone_heading * 0.01  # rad
        self.delay = max(0, int(delay))
        self.reset()

    def reset(self) -> None:
        self.counter = 0
        self.in_dead_zone = False

    def update(self, heading_error: float) -> bool:
        if abs(heading_error) < self.threshold:
            if self.counter < self.delay:
                self.counter += 1
            if self.counter >= self.delay and not self.in_dead_zone:
                self.in_dead_zone = True
                logger.debug("entered heading dead zone after %d ticks", self.counter)
        else:
            self.in_dead_zone = False
            self.counter = 0
        return self.in_dead_zone

    @property
    def state(self) -> DeadZoneState:
        return DeadZoneState(self.counter, self.in_dead_zone)

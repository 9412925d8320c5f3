"""
Domain models for drivers and races.

These are plain containers; the entity store hands out copies of them so
callers never observe later mutations through a shared reference.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional


@dataclass
class Driver:
    """A driver registered for matching."""
    id: int
    name: str
    car_type: str
    horse_power: int
    race_id: Optional[int] = None

    def copy(self) -> "Driver":
        return replace(self)


@dataclass
class Race:
    """A formed race and its outcome."""
    label: str
    driver_ids: List[int] = field(default_factory=list)
    winner: Optional[str] = None
    id: Optional[int] = None

    def copy(self) -> "Race":
        return replace(self, driver_ids=list(self.driver_ids))

"""
Compatibility Matcher - selects drivers that may race together.

Drivers are compatible when they share the requested car type and their
horsepower is within a fixed tolerance of the first such driver found in
scan order. The reference driver never moves as more drivers are admitted,
so the outcome depends on the order of the driver collection.
"""

from typing import Iterable, List, Optional

from .errors import InsufficientDrivers
from .models import Driver

HORSEPOWER_TOLERANCE = 50
MIN_RACE_DRIVERS = 2


class CompatibilityMatcher:
    """Groups drivers by car type and horsepower proximity."""

    def __init__(self, tolerance: int = HORSEPOWER_TOLERANCE):
        self.tolerance = tolerance

    def match(self, car_type: str, drivers: Iterable[Driver]) -> List[int]:
        """
        Scan drivers in order and return the ids eligible for `car_type`.

        The first driver with a matching car type is always included and
        becomes the reference; later ones are included only if their
        horsepower differs from the reference by at most the tolerance.

        Args:
            car_type: Car type label to match (exact, case-sensitive)
            drivers: Driver collection in scan order

        Returns:
            Eligible driver ids in scan order (possibly fewer than two)
        """
        reference: Optional[Driver] = None
        selected: List[int] = []

        for driver in drivers:
            if driver.car_type != car_type:
                continue
            if reference is None:
                reference = driver
                selected.append(driver.id)
            elif abs(driver.horse_power - reference.horse_power) <= self.tolerance:
                selected.append(driver.id)

        return selected

    def select(self, car_type: str, drivers: Iterable[Driver]) -> List[int]:
        """
        Like `match`, but require enough drivers to form a race.

        Raises:
            InsufficientDrivers: If fewer than two drivers are eligible.
        """
        selected = self.match(car_type, drivers)
        if len(selected) < MIN_RACE_DRIVERS:
            raise InsufficientDrivers(car_type)
        return selected

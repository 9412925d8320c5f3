"""
Entity Store - authoritative in-memory collections of drivers and races.

Both collections are insertion-ordered dicts keyed by integer id. A single
re-entrant lock guards them; `transaction()` lets a caller hold that lock
across a read-modify-write sequence such as id allocation plus insertion.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List

from .errors import Conflict, InvalidInput, NotFound
from .models import Driver, Race


class EntityStore:
    """
    Thread-safe store for drivers and races.

    Values are copied on the way in and on the way out, so the stored state
    only changes through the store's own operations.
    """

    def __init__(self):
        self._drivers: Dict[int, Driver] = {}
        self._races: Dict[int, Race] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator["EntityStore"]:
        """Hold the store lock for the duration of the block."""
        with self._lock:
            yield self

    # Drivers

    def insert_driver(self, driver: Driver) -> Driver:
        """
        Store a new driver.

        Raises:
            InvalidInput: If the driver id is zero (unset).
            Conflict: If a driver with the same id already exists.
        """
        if not driver.id:
            raise InvalidInput("ID is required")

        with self._lock:
            if driver.id in self._drivers:
                raise Conflict("Driver already exists")
            self._drivers[driver.id] = driver.copy()
        return driver

    def get_driver(self, driver_id: int) -> Driver:
        with self._lock:
            driver = self._drivers.get(driver_id)
            if driver is None:
                raise NotFound("Driver not found")
            return driver.copy()

    def list_drivers(self) -> List[Driver]:
        with self._lock:
            return [d.copy() for d in self._drivers.values()]

    def driver_count(self) -> int:
        with self._lock:
            return len(self._drivers)

    # Races

    def next_race_id(self) -> int:
        """
        Return the id the next race should be stored under.

        Equals the current race count + 1. Only unique when allocation and
        insertion happen inside the same `transaction()`.
        """
        with self._lock:
            return len(self._races) + 1

    def insert_race(self, race: Race) -> Race:
        """
        Store a fully formed race under its id.

        Raises:
            InvalidInput: If the id is unset or the race has fewer than
                two drivers.
            Conflict: If a race with the same id already exists.
        """
        if race.id is None or race.id <= 0:
            raise InvalidInput("Race ID is required")
        if len(race.driver_ids) < 2:
            raise InvalidInput("A race needs at least two drivers")

        with self._lock:
            if race.id in self._races:
                raise Conflict("Race already exists")
            self._races[race.id] = race.copy()
        return race

    def get_race(self, race_id: int) -> Race:
        with self._lock:
            race = self._races.get(race_id)
            if race is None:
                raise NotFound("Race not found")
            return race.copy()

    def list_races(self) -> List[Race]:
        with self._lock:
            return [r.copy() for r in self._races.values()]

    def race_count(self) -> int:
        with self._lock:
            return len(self._races)

    def clear(self):
        """Drop every stored driver and race."""
        with self._lock:
            self._drivers.clear()
            self._races.clear()

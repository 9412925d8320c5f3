"""Failure taxonomy for the race-formation engine."""


class RacingError(Exception):
    """Base class for every failure surfaced by the engine."""


class InvalidInput(RacingError, ValueError):
    """Malformed identifier, missing required field or zero/sentinel id."""


class Conflict(RacingError):
    """An entity with the same identifier is already stored."""


class NotFound(RacingError, LookupError):
    """No entity is stored under the requested identifier."""


class InsufficientDrivers(InvalidInput):
    """Fewer than two compatible drivers exist for a car type."""

    def __init__(self, car_type: str):
        self.car_type = car_type
        super().__init__(
            "not enough drivers with the same car type and similar horsepower: "
            f"{car_type!r}"
        )

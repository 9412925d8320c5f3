"""
Race Formation - Core Module

This module contains the race-formation and outcome engine: the in-memory
entity store, the compatibility matcher that groups drivers by car type and
horsepower, and the outcome simulator that picks a winner.
"""

from .errors import (
    RacingError,
    InvalidInput,
    Conflict,
    NotFound,
    InsufficientDrivers,
)
from .models import Driver, Race
from .store import EntityStore
from .matcher import CompatibilityMatcher
from .simulator import OutcomeSimulator
from .orchestrator import RaceFormationOrchestrator

__all__ = [
    "RacingError",
    "InvalidInput",
    "Conflict",
    "NotFound",
    "InsufficientDrivers",
    "Driver",
    "Race",
    "EntityStore",
    "CompatibilityMatcher",
    "OutcomeSimulator",
    "RaceFormationOrchestrator",
]

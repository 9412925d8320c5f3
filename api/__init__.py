"""
Race Formation Service - API Module

FastAPI backend exposing the driver registry and race formation engine.
"""

from .main import app, create_app
from .schemas import (
    DriverSchema,
    RaceRequest,
    RaceSchema,
    HealthResponse,
)

__all__ = [
    "app",
    "create_app",
    "DriverSchema",
    "RaceRequest",
    "RaceSchema",
    "HealthResponse",
]

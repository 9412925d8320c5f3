"""
Pydantic schemas for the Race Formation API.

Wire records use the camelCase field names clients send and receive
(`carType`, `horsePower`, `raceId`, `driverIds`).
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from src.racing.models import Driver, Race


class DriverSchema(BaseModel):
    """A driver as sent and returned over the wire."""
    model_config = ConfigDict(populate_by_name=True, strict=True)

    id: int = Field(0, description="Caller-assigned driver id (must be non-zero)")
    name: str = Field("", description="Display name")
    car_type: str = Field("", alias="carType", description="Car type used for matching")
    horse_power: int = Field(0, alias="horsePower", description="Horsepower used for matching")
    race_id: Optional[int] = Field(None, alias="raceId", description="Race the driver belongs to")

    def to_model(self) -> Driver:
        return Driver(
            id=self.id,
            name=self.name,
            car_type=self.car_type,
            horse_power=self.horse_power,
            race_id=self.race_id,
        )

    @classmethod
    def from_model(cls, driver: Driver) -> "DriverSchema":
        return cls(
            id=driver.id,
            name=driver.name,
            car_type=driver.car_type,
            horse_power=driver.horse_power,
            race_id=driver.race_id,
        )


class RaceRequest(BaseModel):
    """Race creation payload. Only `label` is used."""
    model_config = ConfigDict(populate_by_name=True, strict=True)

    label: str = Field("", description="Car type the race is formed for")
    driver_ids: Optional[List[int]] = Field(None, alias="driverIds", description="Ignored")
    winner: Optional[str] = Field(None, description="Ignored")


class RaceSchema(BaseModel):
    """A formed race as returned over the wire."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(..., description="System-assigned race id")
    label: str = Field(..., description="Car type the race was formed for")
    driver_ids: List[int] = Field(..., alias="driverIds", description="Matched driver ids")
    winner: Optional[str] = Field(None, description="Name of the winning driver")

    @classmethod
    def from_model(cls, race: Race) -> "RaceSchema":
        return cls(
            id=race.id,
            label=race.label,
            driver_ids=race.driver_ids,
            winner=race.winner,
        )


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""
    status: str = Field(..., description="Service status")
    drivers: int = Field(..., description="Number of stored drivers")
    races: int = Field(..., description="Number of stored races")
    version: str = Field(..., description="API version")


class ErrorResponse(BaseModel):
    """Standard error response."""
    detail: str = Field(..., description="Error message")

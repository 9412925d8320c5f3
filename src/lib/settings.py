"""
Service settings loaded from environment variables.
"""

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "RACING_"


class Settings(BaseModel):
    """Runtime configuration for the race service."""
    host: str = Field("0.0.0.0", description="Interface the server binds to")
    port: int = Field(8080, description="Port the server listens on")
    log_level: str = Field("INFO", description="Root logging level")
    random_seed: Optional[int] = Field(
        None, description="Seed for reproducible winners; wall clock if unset"
    )
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from RACING_* variables, falling back to defaults."""
        environ = os.environ if environ is None else environ
        values = {}

        for name in ("host", "port", "log_level", "random_seed"):
            raw = environ.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip() != "":
                values[name] = raw.strip()

        origins = environ.get(ENV_PREFIX + "CORS_ORIGINS")
        if origins:
            values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()

        return cls(**values)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()

"""
Settings - environment driven configuration.

Variables (all optional):
    STATION_RACE_FIRST_STATION   first station on the track (default 1)
    STATION_RACE_LAST_STATION    last station on the track (default 7)
    STATION_RACE_MIN_PLAYERS     players needed to start (default 2)
    STATION_RACE_MAX_PLAYERS     registration slots (default 4)
    STATION_RACE_SEED            seed for reproducible secret stations
    STATION_RACE_LOG_LEVEL       structlog level filter (default INFO)
    STATION_RACE_SESSION_MAX_AGE seconds before an idle table is dropped (default 3600)
    ALLOWED_ORIGINS              comma separated CORS origins (default *)
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Literal, Mapping, Optional

import structlog
from pydantic import BaseModel, Field, field_validator, model_validator

from .engine_core.state import (
    Configuration,
    DEFAULT_FIRST_STATION,
    DEFAULT_LAST_STATION,
    DEFAULT_MIN_PLAYERS,
    DEFAULT_MAX_PLAYERS,
)
from .engine_core.secret_station import make_secret_station, seeded_secret_station

ENV_PREFIX = "STATION_RACE_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    """Game defaults and server settings."""
    first_station: int = DEFAULT_FIRST_STATION
    last_station: int = DEFAULT_LAST_STATION
    min_players: int = Field(DEFAULT_MIN_PLAYERS, ge=2)
    max_players: int = DEFAULT_MAX_PLAYERS
    seed: Optional[int] = None
    log_level: LogLevel = "INFO"
    session_max_age: int = Field(3600, gt=0)
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def check_bounds(self) -> Settings:
        if self.first_station > self.last_station:
            raise ValueError("first_station must be <= last_station")
        if self.max_players < self.min_players:
            raise ValueError("max_players must be >= min_players")
        return self

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Read settings from the environment, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict = {}
        names = (
            "first_station", "last_station", "min_players", "max_players",
            "seed", "log_level", "session_max_age",
        )
        for name in names:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw not in (None, ""):
                values[name] = raw
        origins = env.get("ALLOWED_ORIGINS")
        if origins:
            values["allowed_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
        return cls(**values)

    def configuration(self, seed: int | None = None) -> Configuration:
        """Build an engine Configuration; an explicit seed overrides the settings seed."""
        seed = self.seed if seed is None else seed
        generator = make_secret_station if seed is None else seeded_secret_station(seed)
        return Configuration(
            first_station=self.first_station,
            last_station=self.last_station,
            min_players=self.min_players,
            max_players=self.max_players,
            make_secret_station=generator,
        )


def configure_logging(level: str = "INFO") -> None:
    """Set up structlog with a level filter and console rendering on stderr."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from app.schemas.weather import Location


OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"
FLOODS_STATS_URL = (
    "https://services3.arcgis.com/UDCw00RKDRKPqASe/arcgis/rest/services/FLOODS_PONTS2/FeatureServer/0/query"
)


DEFAULT_CITIES = [
    Location(name="Islamabad", latitude=33.6844, longitude=73.0479, province="Islamabad Capital Territory"),
    Location(name="Lahore", latitude=31.5204, longitude=74.3587, province="Punjab"),
    Location(name="Karachi", latitude=24.8607, longitude=67.0011, province="Sindh"),
    Location(name="Peshawar", latitude=34.0151, longitude=71.5249, province="Khyber Pakhtunkhwa"),
    Location(name="Quetta", latitude=30.1798, longitude=66.9750, province="Balochistan"),
    Location(name="Gilgit", latitude=35.9208, longitude=74.3144, province="Gilgit-Baltistan"),
    Location(name="Multan", latitude=30.1575, longitude=71.5249, province="Punjab"),
    Location(name="Faisalabad", latitude=31.4504, longitude=73.1350, province="Punjab"),
    Location(name="Hyderabad", latitude=25.3960, longitude=68.3578, province="Sindh"),
    Location(name="Muzaffarabad", latitude=34.3700, longitude=73.4711, province="Azad Kashmir"),
]


DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KARTAK_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    http_timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)

    # Upstream provider
    open_meteo_url: str = Field(default=OPEN_METEO_URL)
    forecast_hours: int = Field(default=24, ge=1, le=48)
    floods_stats_url: str = Field(default=FLOODS_STATS_URL)

    # Roster used by /weather/cities
    cities: list[Location] = Field(default_factory=lambda: list(DEFAULT_CITIES))

    log_level: str = Field(default="INFO")
    rate_limit: str = Field(default="60/minute")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: Any) -> Any:
        # Allow KARTAK_CORS_ORIGINS as JSON array or comma-separated string.
        if not isinstance(value, str):
            return value
        parsed = value.strip()
        if parsed.startswith("["):
            try:
                return [str(x).strip() for x in json.loads(parsed) if str(x).strip()]
            except ValueError:
                pass
        return [s.strip() for s in parsed.split(",") if s.strip()]

    def model_post_init(self, __context: Any) -> None:
        self.log_level = self.log_level.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=120)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    province: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict, description="Caller-supplied extras, passed through.")


class CurrentSnapshot(BaseModel):
    """Instantaneous reading reported by the provider.

    Its timestamp is not guaranteed to appear on the hourly time axis.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: str | None = None
    temperature: float | None = None
    wind_speed: float | None = None
    condition_code: int | None = None


class RawSeries(BaseModel):
    """Hourly parameter sequences sharing one time axis."""

    model_config = ConfigDict(frozen=True)

    time: list[str] = Field(default_factory=list)
    values: dict[str, list[float | None]] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_lengths(self) -> "RawSeries":
        expected = len(self.time)
        for name, seq in self.values.items():
            if len(seq) != expected:
                raise ValueError(f"hourly '{name}' has {len(seq)} samples, time axis has {expected}")
        return self

    def __len__(self) -> int:
        return len(self.time)

    def value_at(self, name: str, index: int) -> float | None:
        seq = self.values.get(name)
        if seq is None or not 0 <= index < len(seq):
            return None
        return seq[index]


class ForecastSample(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: str
    hour: int | None = Field(None, ge=0, le=23, description="Local hour of day, unknown when the timestamp is unparseable.")
    temperature: float | None = Field(None, description="Air temperature (C).")
    humidity: float | None = Field(None, description="Relative humidity (%).")
    wind_speed: float | None = Field(None, description="Wind speed (km/h).")
    precipitation: float = Field(0.0, description="Precipitation (mm), zero when unreported.")
    rain: float = Field(0.0, description="Rain (mm), zero when unreported.")
    cloud_cover: float | None = Field(None, description="Cloud cover (%).")


class CurrentConditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(None, description="Air temperature (C).")
    wind_speed: float | None = Field(None, description="Wind speed (km/h).")
    condition_code: int | None = Field(None, description="WMO weather code.")
    condition_text: str | None = Field(None, description="Human-friendly condition.")
    timestamp: str | None = None
    humidity: float | None = None
    precipitation: float | None = None
    rain: float | None = None
    pressure: float | None = Field(None, description="Surface pressure (hPa).")
    cloud_cover: float | None = None


class LocationWeather(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    forecast_24h: list[ForecastSample] = Field(default_factory=list)
    elevation: float | None = None
    timezone: str | None = None
    precipitation_total_mm: float = 0.0
    rain_total_mm: float = 0.0


class LocationWeatherResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: Location
    weather: LocationWeather | None = None
    error: str | None = None


class AggregationBatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: list[LocationWeatherResult]
    generated_at: datetime
    failed: int = 0


class BatchRequest(BaseModel):
    locations: list[Location] = Field(..., min_length=1, max_length=50)


class ConditionResponse(BaseModel):
    code: int
    text: str

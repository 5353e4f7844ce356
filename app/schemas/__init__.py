from __future__ import annotations

from app.schemas.weather import (
    AggregationBatch,
    CurrentConditions,
    ForecastSample,
    Location,
    LocationWeather,
    LocationWeatherResult,
)

__all__ = [
    "AggregationBatch",
    "CurrentConditions",
    "ForecastSample",
    "Location",
    "LocationWeather",
    "LocationWeatherResult",
]

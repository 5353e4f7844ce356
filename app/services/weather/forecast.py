from __future__ import annotations

from app.schemas.weather import ForecastSample, RawSeries
from app.services.weather.alignment import parse_iso


FORECAST_HOURS = 24

# Open-Meteo hourly parameter names.
TEMPERATURE = "temperature_2m"
HUMIDITY = "relative_humidity_2m"
WIND_SPEED = "wind_speed_10m"
PRECIPITATION = "precipitation"
RAIN = "rain"
SNOWFALL = "snowfall"
CLOUD_COVER = "cloud_cover"
PRESSURE = "surface_pressure"

HOURLY_PARAMS = [
    TEMPERATURE,
    RAIN,
    SNOWFALL,
    PRECIPITATION,
    PRESSURE,
    WIND_SPEED,
    CLOUD_COVER,
    HUMIDITY,
]


def _hour_of_day(stamp: str) -> int | None:
    # Provider timestamps are already in location-local time.
    parsed = parse_iso(stamp)
    return parsed.hour if parsed is not None else None


def zero_if_none(value: float | None) -> float:
    return value if value is not None else 0.0


def build_forecast_window(
    series: RawSeries,
    start_index: int | None,
    *,
    hours: int = FORECAST_HOURS,
) -> list[ForecastSample]:
    """Slice up to ``hours`` hourly samples forward from ``start_index``.

    Shorter when the series runs out; never padded, never wrapped.
    """
    if start_index is None or start_index < 0:
        return []

    window: list[ForecastSample] = []
    for offset in range(hours):
        index = start_index + offset
        if index >= len(series.time):
            break
        stamp = series.time[index]
        window.append(
            ForecastSample(
                time=stamp,
                hour=_hour_of_day(stamp),
                temperature=series.value_at(TEMPERATURE, index),
                humidity=series.value_at(HUMIDITY, index),
                wind_speed=series.value_at(WIND_SPEED, index),
                precipitation=zero_if_none(series.value_at(PRECIPITATION, index)),
                rain=zero_if_none(series.value_at(RAIN, index)),
                cloud_cover=series.value_at(CLOUD_COVER, index),
            )
        )
    return window

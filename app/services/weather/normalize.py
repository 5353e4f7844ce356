from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone, tzinfo
from typing import Any

from pydantic import ValidationError

from app.schemas.weather import CurrentConditions, CurrentSnapshot, LocationWeather, RawSeries
from app.services.weather.alignment import resolve_time_index
from app.services.weather.conditions import condition_text
from app.services.weather.errors import MalformedResponseError, NoCurrentDataError
from app.services.weather.forecast import (
    CLOUD_COVER,
    FORECAST_HOURS,
    HUMIDITY,
    PRECIPITATION,
    PRESSURE,
    RAIN,
    build_forecast_window,
    zero_if_none,
)


@dataclass(frozen=True)
class ParsedForecast:
    snapshot: CurrentSnapshot | None
    series: RawSeries
    tz: tzinfo
    elevation: float | None = None
    timezone: str | None = None


def _first_present(section: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if section.get(key) is not None:
            return section[key]
    return None


def _parse_snapshot(data: dict[str, Any]) -> CurrentSnapshot | None:
    # Legacy `current_weather` block first, then the newer `current` block.
    section = data.get("current_weather")
    if not isinstance(section, dict):
        section = data.get("current")
    if not isinstance(section, dict) or not section:
        return None
    try:
        return CurrentSnapshot(
            timestamp=_first_present(section, "time", "timestamp"),
            temperature=_first_present(section, "temperature", "temperature_2m"),
            wind_speed=_first_present(section, "windspeed", "wind_speed_10m", "windSpeed"),
            condition_code=_first_present(section, "weathercode", "weather_code", "conditionCode"),
        )
    except ValidationError:
        return None


def _parse_series(data: dict[str, Any]) -> RawSeries:
    hourly = data.get("hourly")
    if hourly is None:
        return RawSeries()
    if not isinstance(hourly, dict):
        raise MalformedResponseError("Hourly section is not an object")
    time_axis = hourly.get("time") or []
    values = {key: seq for key, seq in hourly.items() if key != "time"}
    try:
        return RawSeries(time=time_axis, values=values)
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid hourly data: {exc.errors()[0]['msg']}") from exc


def parse_forecast_payload(data: Any) -> ParsedForecast:
    """Split a raw Open-Meteo forecast body into typed pipeline inputs."""
    if not isinstance(data, dict):
        raise MalformedResponseError("Weather payload is not an object")

    offset = data.get("utc_offset_seconds")
    tz: tzinfo = dt_timezone.utc
    if isinstance(offset, (int, float)):
        tz = dt_timezone(timedelta(seconds=offset))

    elevation = data.get("elevation")
    return ParsedForecast(
        snapshot=_parse_snapshot(data),
        series=_parse_series(data),
        tz=tz,
        elevation=float(elevation) if isinstance(elevation, (int, float)) else None,
        timezone=data.get("timezone"),
    )


def normalize_location_weather(
    snapshot: CurrentSnapshot | None,
    series: RawSeries,
    *,
    now: datetime | None = None,
    tz: tzinfo = dt_timezone.utc,
    hours: int = FORECAST_HOURS,
    elevation: float | None = None,
    timezone: str | None = None,
) -> LocationWeather:
    """Combine the current snapshot and hourly series into one record.

    Humidity, precipitation, rain, pressure and cloud cover for "now" are read
    from the hourly series at the index aligned with the snapshot timestamp.
    If no index can be resolved they are all unknown (``None``); with an index,
    missing precipitation and rain read as zero.
    """
    if snapshot is None:
        raise NoCurrentDataError()

    index = resolve_time_index(series.time, snapshot.timestamp, now=now, tz=tz)

    humidity = precipitation = rain = pressure = cloud_cover = None
    if index is not None:
        humidity = series.value_at(HUMIDITY, index)
        precipitation = zero_if_none(series.value_at(PRECIPITATION, index))
        rain = zero_if_none(series.value_at(RAIN, index))
        pressure = series.value_at(PRESSURE, index)
        cloud_cover = series.value_at(CLOUD_COVER, index)

    current = CurrentConditions(
        temperature=snapshot.temperature,
        wind_speed=snapshot.wind_speed,
        condition_code=snapshot.condition_code,
        condition_text=condition_text(snapshot.condition_code),
        timestamp=snapshot.timestamp,
        humidity=humidity,
        precipitation=precipitation,
        rain=rain,
        pressure=pressure,
        cloud_cover=cloud_cover,
    )

    window = build_forecast_window(series, index, hours=hours)
    return LocationWeather(
        current=current,
        forecast_24h=window,
        elevation=elevation,
        timezone=timezone,
        precipitation_total_mm=sum(sample.precipitation for sample in window),
        rain_total_mm=sum(sample.rain for sample in window),
    )


def normalize_payload(data: Any, *, now: datetime | None = None, hours: int = FORECAST_HOURS) -> LocationWeather:
    parsed = parse_forecast_payload(data)
    return normalize_location_weather(
        parsed.snapshot,
        parsed.series,
        now=now,
        tz=parsed.tz,
        hours=hours,
        elevation=parsed.elevation,
        timezone=parsed.timezone,
    )

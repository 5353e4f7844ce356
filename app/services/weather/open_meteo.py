from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx

from app.core.config import get_settings
from app.core.http import get_http_client
from app.schemas.weather import LocationWeather
from app.services.weather.errors import MalformedResponseError, TransportError
from app.services.weather.forecast import HOURLY_PARAMS
from app.services.weather.normalize import normalize_payload


async def fetch_forecast(*, lat: float, lon: float) -> dict[str, Any]:
    """Fetch the raw hourly + current forecast body for one point. No retries."""
    client = get_http_client()
    settings = get_settings()
    params = {
        "latitude": lat,
        "longitude": lon,
        "hourly": ",".join(HOURLY_PARAMS),
        "current_weather": "true",
        "timezone": "auto",
    }

    try:
        resp = await client.get(settings.open_meteo_url, params=params)
    except httpx.HTTPError as exc:
        raise TransportError(f"Weather upstream error: {type(exc).__name__}") from exc

    if resp.status_code != 200:
        raise TransportError(f"Weather upstream status {resp.status_code}", status_code=resp.status_code)

    try:
        return resp.json()
    except ValueError as exc:
        raise MalformedResponseError("Weather upstream returned invalid JSON") from exc


async def get_location_weather(*, lat: float, lon: float, now: datetime | None = None) -> LocationWeather:
    data = await fetch_forecast(lat=lat, lon=lon)
    return normalize_payload(data, now=now, hours=get_settings().forecast_hours)

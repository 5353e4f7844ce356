from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone as dt_timezone
from typing import Any, Awaitable, Callable, Optional, Sequence

from app.schemas.weather import AggregationBatch, Location, LocationWeatherResult
from app.services.weather.errors import WeatherError
from app.services.weather.forecast import FORECAST_HOURS
from app.services.weather.normalize import normalize_payload
from app.services.weather.open_meteo import fetch_forecast


logger = logging.getLogger(__name__)

Fetcher = Callable[[Location], Awaitable[Any]]


async def fetch_for_location(location: Location) -> Any:
    return await fetch_forecast(lat=location.latitude, lon=location.longitude)


@dataclass(frozen=True)
class AggregationOptions:
    """Per-call configuration, owned by the caller."""

    fetch: Fetcher = fetch_for_location
    forecast_hours: int = FORECAST_HOURS
    # Returns the instant used for nearest-to-now alignment; None means wall clock.
    clock: Optional[Callable[[], datetime]] = None


async def _settle(location: Location, options: AggregationOptions) -> LocationWeatherResult:
    try:
        data = await options.fetch(location)
        now = options.clock() if options.clock is not None else None
        weather = normalize_payload(data, now=now, hours=options.forecast_hours)
    except WeatherError as exc:
        logger.warning("Weather for %s failed: %s", location.name, exc.message)
        return LocationWeatherResult(location=location, error=exc.message)
    except Exception as exc:
        # One bad location shouldn't kill the whole batch.
        logger.exception("Unexpected error while loading weather for %s", location.name)
        return LocationWeatherResult(location=location, error=str(exc) or type(exc).__name__)
    return LocationWeatherResult(location=location, weather=weather)


async def aggregate_locations(
    locations: Sequence[Location],
    *,
    options: AggregationOptions | None = None,
) -> AggregationBatch:
    """Load weather for every location concurrently.

    Every location yields exactly one result, in input order. Failures are
    recorded on that location's result and never affect its siblings.
    """
    options = options or AggregationOptions()
    results = await asyncio.gather(*(_settle(location, options) for location in locations))
    failed = sum(1 for result in results if result.error is not None)
    if failed:
        logger.info("Weather batch finished: %d/%d locations failed", failed, len(results))
    return AggregationBatch(
        results=list(results),
        generated_at=datetime.now(dt_timezone.utc),
        failed=failed,
    )

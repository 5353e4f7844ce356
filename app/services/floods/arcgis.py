from __future__ import annotations

import json
from datetime import datetime, timezone as dt_timezone
from typing import Any

import httpx
from pydantic import ValidationError

from app.core.config import get_settings
from app.core.http import get_http_client
from app.schemas.floods import FloodStats, FloodStatsResponse
from app.services.weather.errors import MalformedResponseError, TransportError


OUT_STATISTICS = [
    {"statisticType": "count", "onStatisticField": "OBJECTID", "outStatisticFieldName": "record_count"},
    {"statisticType": "avg", "onStatisticField": "flood_intensity", "outStatisticFieldName": "avg_intensity"},
    {"statisticType": "avg", "onStatisticField": "flood_duration", "outStatisticFieldName": "avg_duration"},
    {"statisticType": "max", "onStatisticField": "date", "outStatisticFieldName": "latest_date"},
]


def _epoch_ms_to_datetime(value: Any) -> datetime | None:
    # ArcGIS date fields are epoch milliseconds.
    if not isinstance(value, (int, float)):
        return None
    return datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)


def parse_flood_stats(data: Any) -> FloodStats:
    if not isinstance(data, dict):
        raise MalformedResponseError("Flood statistics payload is not an object")

    # ArcGIS reports query failures as 200 responses with an error body.
    error = data.get("error")
    if isinstance(error, dict):
        raise TransportError(
            f"Flood statistics upstream error: {error.get('message') or 'unknown'}",
            status_code=error.get("code") if isinstance(error.get("code"), int) else None,
        )

    features = data.get("features") or []
    if not features:
        return FloodStats()
    attrs = features[0].get("attributes") if isinstance(features[0], dict) else None
    if not isinstance(attrs, dict):
        raise MalformedResponseError("Flood statistics feature has no attributes")

    try:
        return FloodStats(
            record_count=attrs.get("record_count"),
            avg_intensity=attrs.get("avg_intensity"),
            avg_duration=attrs.get("avg_duration"),
            latest_date=_epoch_ms_to_datetime(attrs.get("latest_date")),
        )
    except ValidationError as exc:
        raise MalformedResponseError(f"Invalid flood statistics: {exc.errors()[0]['msg']}") from exc


async def get_flood_stats() -> FloodStatsResponse:
    client = get_http_client()
    settings = get_settings()
    params = {
        "f": "json",
        "where": "1=1",
        "returnGeometry": "false",
        "outStatistics": json.dumps(OUT_STATISTICS),
    }

    try:
        resp = await client.get(settings.floods_stats_url, params=params)
    except httpx.HTTPError as exc:
        raise TransportError(f"Flood statistics upstream error: {type(exc).__name__}") from exc

    if resp.status_code != 200:
        raise TransportError(f"Flood statistics upstream status {resp.status_code}", status_code=resp.status_code)

    try:
        data = resp.json()
    except ValueError as exc:
        raise MalformedResponseError("Flood statistics upstream returned invalid JSON") from exc

    return FloodStatsResponse(stats=parse_flood_stats(data), generated_at=datetime.now(dt_timezone.utc))

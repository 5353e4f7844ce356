from datetime import datetime, timedelta

import httpx
import pytest
import pytest_asyncio

from app.core.http import set_http_client


def _axis(start: datetime, hours: int) -> list[str]:
    return [(start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]


@pytest.fixture
def make_payload():
    """Build an Open-Meteo style forecast body with predictable hourly values."""

    def factory(
        *,
        hours: int = 48,
        current_time: str | None = "2024-05-01T10:00",
        drop: tuple[str, ...] = (),
        with_current: bool = True,
    ) -> dict:
        hourly = {
            "time": _axis(datetime(2024, 5, 1), hours),
            "temperature_2m": [20.0 + i for i in range(hours)],
            "relative_humidity_2m": [float(50 + i) for i in range(hours)],
            "wind_speed_10m": [5.0 + i for i in range(hours)],
            "precipitation": [0.5 for _ in range(hours)],
            "rain": [0.25 for _ in range(hours)],
            "cloud_cover": [float(i % 100) for i in range(hours)],
            "surface_pressure": [1000.0 + i for i in range(hours)],
        }
        for name in drop:
            hourly.pop(name, None)

        body = {
            "latitude": 33.68,
            "longitude": 73.05,
            "elevation": 540.0,
            "timezone": "Asia/Karachi",
            "utc_offset_seconds": 18000,
            "hourly": hourly,
        }
        if with_current:
            body["current_weather"] = {
                "time": current_time,
                "temperature": 31.5,
                "windspeed": 12.0,
                "weathercode": 2,
            }
        return body

    return factory


@pytest_asyncio.fixture
async def http_client():
    client = httpx.AsyncClient()
    set_http_client(client)
    try:
        yield client
    finally:
        set_http_client(None)
        await client.aclose()

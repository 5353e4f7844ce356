import json

import pytest
import respx
from httpx import ASGITransport, AsyncClient, Response

from app.core.config import FLOODS_STATS_URL
from app.main import create_app


@pytest.mark.asyncio
async def test_flood_stats_success(http_client):
    app = create_app()

    with respx.mock:
        route = respx.get(FLOODS_STATS_URL).mock(
            return_value=Response(
                200,
                json={
                    "features": [
                        {
                            "attributes": {
                                "record_count": 412,
                                "avg_intensity": 3.27,
                                "avg_duration": 11.5,
                                "latest_date": 1661990400000,
                            }
                        }
                    ]
                },
            )
        )

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            r = await client.get("/api/v1/floods/stats")
            assert r.status_code == 200
            stats = r.json()["stats"]
            assert stats["record_count"] == 412
            assert stats["avg_intensity"] == 3.27
            assert stats["avg_duration"] == 11.5
            assert stats["latest_date"].startswith("2022-09-01T00:00:00")

        sent = route.calls.last.request.url.params
        assert sent["where"] == "1=1"
        assert sent["returnGeometry"] == "false"
        fields = [s["outStatisticFieldName"] for s in json.loads(sent["outStatistics"])]
        assert fields == ["record_count", "avg_intensity", "avg_duration", "latest_date"]


@pytest.mark.asyncio
async def test_flood_stats_without_features_are_unknown(http_client):
    app = create_app()

    with respx.mock:
        respx.get(FLOODS_STATS_URL).mock(return_value=Response(200, json={"features": []}))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            r = await client.get("/api/v1/floods/stats")
            assert r.status_code == 200
            assert r.json()["stats"] == {
                "record_count": None,
                "avg_intensity": None,
                "avg_duration": None,
                "latest_date": None,
            }


@pytest.mark.asyncio
async def test_flood_stats_upstream_status(http_client):
    app = create_app()

    with respx.mock:
        respx.get(FLOODS_STATS_URL).mock(return_value=Response(503))

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            r = await client.get("/api/v1/floods/stats")
            assert r.status_code == 502
            assert r.json()["detail"] == "Flood statistics upstream status 503"


@pytest.mark.asyncio
async def test_flood_stats_error_body(http_client):
    app = create_app()

    with respx.mock:
        respx.get(FLOODS_STATS_URL).mock(
            return_value=Response(200, json={"error": {"code": 400, "message": "Invalid query parameters."}})
        )

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            r = await client.get("/api/v1/floods/stats")
            assert r.status_code == 502
            assert "Invalid query parameters." in r.json()["detail"]

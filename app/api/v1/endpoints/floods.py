from fastapi import APIRouter, HTTPException

from app.schemas.floods import FloodStatsResponse
from app.services.floods.arcgis import get_flood_stats
from app.services.weather.errors import WeatherError


router = APIRouter()


@router.get("/stats", response_model=FloodStatsResponse)
async def flood_stats():
    try:
        return await get_flood_stats()
    except WeatherError as exc:
        raise HTTPException(status_code=502, detail=exc.message)

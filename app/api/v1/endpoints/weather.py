from fastapi import APIRouter, HTTPException, Path, Query

from app.core.config import get_settings
from app.schemas.weather import AggregationBatch, BatchRequest, ConditionResponse, LocationWeather
from app.services.weather.aggregate import AggregationOptions, aggregate_locations
from app.services.weather.conditions import condition_text
from app.services.weather.errors import WeatherError
from app.services.weather.open_meteo import get_location_weather


router = APIRouter()


@router.get("/current", response_model=LocationWeather)
async def current_weather(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
):
    try:
        return await get_location_weather(lat=lat, lon=lon)
    except WeatherError as exc:
        raise HTTPException(status_code=502, detail=exc.message)


@router.get("/cities", response_model=AggregationBatch)
async def cities_weather():
    settings = get_settings()
    options = AggregationOptions(forecast_hours=settings.forecast_hours)
    return await aggregate_locations(settings.cities, options=options)


@router.post("/batch", response_model=AggregationBatch)
async def batch_weather(body: BatchRequest):
    options = AggregationOptions(forecast_hours=get_settings().forecast_hours)
    return await aggregate_locations(body.locations, options=options)


@router.get("/conditions/{code}", response_model=ConditionResponse)
async def weather_condition(code: int = Path(..., ge=0, le=99)):
    return ConditionResponse(code=code, text=condition_text(code))

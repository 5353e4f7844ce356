from fastapi import APIRouter

from app.api.v1.endpoints.floods import router as floods_router
from app.api.v1.endpoints.health import router as health_router
from app.api.v1.endpoints.weather import router as weather_router


api_v1_router = APIRouter()
api_v1_router.include_router(health_router)
api_v1_router.include_router(weather_router, prefix="/weather", tags=["weather"])
api_v1_router.include_router(floods_router, prefix="/floods", tags=["floods"])

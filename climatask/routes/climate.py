"""
ClimaTask Backend — Climate Route
===================================

What:  GET /climate?latitude=..&longitude=..&apikey=..
How:   The api-key dependency runs first; only then are the coordinates
       validated and the forecast fetched through WeatherService.

Status codes:
    401  apikey missing or wrong (no outbound request is made)
    422  latitude/longitude missing or out of range
    404  upstream returned no result set
    500  upstream unreachable, non-2xx, or malformed
"""

from fastapi import APIRouter, Depends, Query

from climatask.dependencies import get_weather_service, require_climate_api_key
from climatask.schemas.common import ErrorResponse
from climatask.schemas.weather import ClimateResponse
from climatask.services.weather_service import WeatherService

router = APIRouter(tags=["Climate"], dependencies=[Depends(require_climate_api_key)])


@router.get(
    "/climate",
    response_model=ClimateResponse,
    responses={
        401: {"description": "Invalid API key", "model": ErrorResponse},
        404: {"description": "No forecast for these coordinates", "model": ErrorResponse},
        500: {"description": "Forecast upstream failed", "model": ErrorResponse},
    },
    summary="Current weather and hourly temperature for a coordinate",
)
async def get_climate(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    weather: WeatherService = Depends(get_weather_service),
) -> ClimateResponse:
    return await weather.get_climate(latitude, longitude)

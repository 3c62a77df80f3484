"""
ClimaTask Backend — Route Dependencies
========================================

What:  FastAPI dependencies that hand route handlers their collaborators.
How:   create_app() builds every service once and stores it on `app.state`;
       these getters read them back from the running application.
"""

from typing import Optional

from fastapi import Query, Request

from climatask.exceptions import UnauthorizedError
from climatask.services.location_service import LocationService
from climatask.services.task_service import TaskService
from climatask.services.user_service import UserService
from climatask.services.weather_service import WeatherService


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service


async def require_climate_api_key(
    request: Request,
    apikey: Optional[str] = Query(default=None, description="Static key for /climate"),
) -> None:
    """
    Reject the request unless `apikey` equals the configured key.

    Declared as a router dependency so it runs before the handler's own
    query parameters are validated: a bad key is a 401 even when the
    coordinates are missing.
    """
    expected = request.app.state.settings.climate_api_key
    if apikey != expected:
        raise UnauthorizedError()

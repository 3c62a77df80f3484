"""
ClimaTask Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:   AsyncMock session for service unit tests
    ├── test_settings:     Settings pointed at in-memory SQLite, fast bcrypt
    ├── app:               create_app(test_settings) with tables created
    ├── session_factory:   The app's session factory, for seeding rows directly
    ├── test_client:       HTTPX AsyncClient routed into the app (ASGITransport)
    ├── forecast_payload:  Open-Meteo style JSON document
    └── use_weather_upstream: installs a MockTransport-backed WeatherService
"""

import os
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any climatask import: config.settings is read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["CLIMATE_API_KEY"] = "climate"
os.environ["LOG_LEVEL"] = "WARNING"

from climatask.config import Settings  # noqa: E402
from climatask.database import Base  # noqa: E402
from climatask.main import create_app  # noqa: E402
from climatask.services.weather_service import WeatherService  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Unit-test fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_user(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def forecast_payload() -> Dict[str, Any]:
    """
    Open-Meteo response for Berlin with timeformat=unixtime.

    utc_offset_seconds=3600; hourly samples every 3600s starting at
    1705276800 (2024-01-15T00:00:00Z).
    """
    return {
        "latitude": 52.52,
        "longitude": 13.419998,
        "elevation": 38.0,
        "utc_offset_seconds": 3600,
        "timezone": "Europe/Berlin",
        "current": {
            "time": 1705320000,
            "interval": 900,
            "temperature_2m": 4.1,
            "relative_humidity_2m": 81,
            "apparent_temperature": 0.7,
            "is_day": 1,
            "precipitation": 0.0,
            "rain": 0.0,
            "showers": 0.0,
            "snowfall": 0.0,
            "weather_code": 3,
            "cloud_cover": 100,
            "pressure_msl": 1012.4,
            "surface_pressure": 1007.6,
            "wind_speed_10m": 14.3,
            "wind_direction_10m": 250,
            "wind_gusts_10m": 29.5,
        },
        "hourly": {
            "time": [1705276800, 1705280400, 1705284000, 1705287600],
            "temperature_2m": [3.2, 3.0, 2.7, 2.9],
        },
    }


# ══════════════════════════════════════════════════════════════════════════
# Application fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        bcrypt_rounds=4,
        climate_api_key="climate",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fresh application on its own in-memory database.

    ASGITransport does not run the lifespan, so tables are created and the
    engine disposed here.
    """
    application = create_app(test_settings)
    weather_service = application.state.weather_service
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    await weather_service.aclose()
    await application.state.engine.dispose()


@pytest.fixture
def session_factory(app):
    return app.state.session_factory


@pytest_asyncio.fixture
async def test_client(app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def use_weather_upstream(app):
    """
    Replace the app's WeatherService with one whose HTTP traffic goes to
    `handler`. Returns the list of requests the upstream received.

    Usage:
        requests = use_weather_upstream(lambda request: httpx.Response(200, json=...))
    """
    installed: List[WeatherService] = []

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> List[httpx.Request]:
        seen: List[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        service = WeatherService(transport=httpx.MockTransport(recording_handler))
        installed.append(service)
        app.state.weather_service = service
        return seen

    yield install

    for service in installed:
        await service.aclose()


# ══════════════════════════════════════════════════════════════════════════
# API helpers
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def create_user(test_client):
    """POST /users and return the JSON body (asserting 201)."""

    async def _create(email: str = "ada@example.com", name: str = "Ada", password: str = "s3cret"):
        response = await test_client.post(
            "/users", json={"email": email, "name": name, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create

"""
ClimaTask Backend — Weather (Climate) Response Schemas
========================================================

What:  The reshaped forecast returned by GET /climate.

Variable fields keep the upstream's snake_case names (temperature_2m, ...),
so these models do not use the camelCase generator; only utcOffsetSeconds is
aliased explicitly.

Example:
    {
        "data": {
            "current": {
                "latitude": 52.52, "longitude": 13.42, "elevation": 38.0,
                "utcOffsetSeconds": 3600, "time": "2024-01-15T13:00:00Z",
                "temperature_2m": 4.1, ..., "wind_gusts_10m": 22.3
            },
            "hourly": {
                "time": ["2024-01-15T01:00:00Z", "2024-01-15T02:00:00Z", ...],
                "temperature_2m": [3.2, 3.0, ...]
            }
        }
    }
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CurrentWeather(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latitude: float
    longitude: float
    elevation: Optional[float] = None
    utc_offset_seconds: int = Field(alias="utcOffsetSeconds")
    time: datetime

    temperature_2m: Optional[float] = None
    relative_humidity_2m: Optional[float] = None
    apparent_temperature: Optional[float] = None
    is_day: Optional[float] = None
    precipitation: Optional[float] = None
    rain: Optional[float] = None
    showers: Optional[float] = None
    snowfall: Optional[float] = None
    weather_code: Optional[float] = None
    cloud_cover: Optional[float] = None
    pressure_msl: Optional[float] = None
    surface_pressure: Optional[float] = None
    wind_speed_10m: Optional[float] = None
    wind_direction_10m: Optional[float] = None
    wind_gusts_10m: Optional[float] = None


class HourlyWeather(BaseModel):
    time: List[datetime]
    temperature_2m: List[Optional[float]]


class WeatherData(BaseModel):
    current: CurrentWeather
    hourly: HourlyWeather


class ClimateResponse(BaseModel):
    data: WeatherData

"""
ClimaTask Backend — Weather Forecast Service (Open-Meteo)
==========================================================

What:  Fetches a forecast for a coordinate from the Open-Meteo API and
       reshapes it into the /climate response document.
How:   One shared httpx.AsyncClient per application (closed on shutdown),
       a bounded per-request timeout, optional tenacity retries for
       transport errors, then a pure reshaping step.
Who:   Instantiated by create_app(); called by routes/climate.py.

Upstream contract (timeformat=unixtime):
    {
        "latitude": 52.52, "longitude": 13.42, "elevation": 38.0,
        "utc_offset_seconds": 3600,
        "current": {"time": 1705320000, "interval": 900,
                    "temperature_2m": 4.1, ...},
        "hourly":  {"time": [1705276800, 1705280400, ...],
                    "temperature_2m": [3.2, 3.0, ...]}
    }
    A multi-location query returns a list of such documents; the first one
    is used.

Time handling:
    Hourly data is treated as a columnar series (start, end, interval, values).
    The series has (end - start) / interval samples, and sample i is stamped
    start + i * interval + utc_offset_seconds, interpreted as seconds since the
    epoch. The result is the location's local wall-clock time carried in a
    UTC timestamp.

Failure mapping:
    - Transport errors, timeouts, non-2xx upstream status, malformed JSON or
      missing fields → WeatherServiceError (→ 500)
    - Empty result set → None from parse_forecast, NotFoundError from get_climate (→ 404)
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from climatask.exceptions import NotFoundError, WeatherServiceError
from climatask.schemas.weather import (
    ClimateResponse,
    CurrentWeather,
    HourlyWeather,
    WeatherData,
)

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# Requested "current" variables, in upstream order
CURRENT_VARIABLES: Sequence[str] = (
    "temperature_2m",
    "relative_humidity_2m",
    "apparent_temperature",
    "is_day",
    "precipitation",
    "rain",
    "showers",
    "snowfall",
    "weather_code",
    "cloud_cover",
    "pressure_msl",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "wind_gusts_10m",
)

HOURLY_VARIABLES: Sequence[str] = ("temperature_2m",)

# Used when the hourly block holds a single sample
DEFAULT_HOURLY_INTERVAL = 3600


# ══════════════════════════════════════════════════════════════════════════
# Parsed forecast
# ══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SeriesBlock:
    """Columnar time series: [time, time_end) sampled every `interval` seconds."""
    time: int
    time_end: int
    interval: int
    variables: Mapping[str, List[Optional[float]]]

    @property
    def length(self) -> int:
        return (self.time_end - self.time) // self.interval


@dataclass(frozen=True)
class Forecast:
    latitude: float
    longitude: float
    elevation: Optional[float]
    utc_offset_seconds: int
    current_time: int
    current_values: Mapping[str, Optional[float]]
    hourly: SeriesBlock


def to_instant(epoch_seconds: int, utc_offset_seconds: int) -> datetime:
    """Shift by the location's UTC offset, then convert to an aware UTC datetime."""
    return datetime.fromtimestamp(epoch_seconds + utc_offset_seconds, tz=timezone.utc)


def _hourly_block(hourly: Mapping[str, Any]) -> Optional[SeriesBlock]:
    times = [int(t) for t in hourly["time"]]
    if not times:
        return None

    interval = times[1] - times[0] if len(times) > 1 else DEFAULT_HOURLY_INTERVAL
    if interval <= 0:
        raise ValueError(f"non-increasing hourly time axis (interval={interval})")

    variables = {name: list(hourly[name]) for name in HOURLY_VARIABLES}
    return SeriesBlock(
        time=times[0],
        time_end=times[-1] + interval,
        interval=interval,
        variables=variables,
    )


def parse_forecast(payload: Any) -> Optional[Forecast]:
    """
    Turn an upstream JSON document into a Forecast.

    Returns None when the upstream returned no result set. Raises
    KeyError/TypeError/ValueError on a malformed document.
    """
    if isinstance(payload, list):
        payload = payload[0] if payload else None
    if not payload:
        return None
    if not isinstance(payload, dict):
        raise TypeError(f"forecast document is a {type(payload).__name__}, not an object")

    current = payload.get("current")
    hourly = payload.get("hourly")
    if not current or not hourly:
        return None

    hourly_block = _hourly_block(hourly)
    if hourly_block is None:
        return None

    return Forecast(
        latitude=float(payload["latitude"]),
        longitude=float(payload["longitude"]),
        elevation=payload.get("elevation"),
        utc_offset_seconds=int(payload.get("utc_offset_seconds") or 0),
        current_time=int(current["time"]),
        current_values={name: current[name] for name in CURRENT_VARIABLES},
        hourly=hourly_block,
    )


def reshape_forecast(forecast: Forecast) -> WeatherData:
    """Build the /climate document: offset-adjusted timestamps, zipped hourly values."""
    offset = forecast.utc_offset_seconds
    hourly = forecast.hourly
    n = hourly.length

    current = CurrentWeather(
        latitude=forecast.latitude,
        longitude=forecast.longitude,
        elevation=forecast.elevation,
        utc_offset_seconds=offset,
        time=to_instant(forecast.current_time, offset),
        **forecast.current_values,
    )

    temperatures = hourly.variables["temperature_2m"]
    if len(temperatures) != n:
        raise ValueError(
            f"hourly temperature_2m has {len(temperatures)} values for {n} timestamps"
        )

    hourly_times = [to_instant(hourly.time + i * hourly.interval, offset) for i in range(n)]

    return WeatherData(
        current=current,
        hourly=HourlyWeather(time=hourly_times, temperature_2m=temperatures),
    )


# ══════════════════════════════════════════════════════════════════════════
# Weather Service
# ══════════════════════════════════════════════════════════════════════════

class WeatherService:
    """
    Open-Meteo client.

    Args:
        base_url:       Forecast endpoint
        timeout:        Seconds allowed for one request (connect + read)
        retry_attempts: Attempts on transport errors; 1 disables retrying
        retry_max_wait: Upper bound of the exponential backoff, in seconds
        transport:      Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_FORECAST_URL,
        timeout: float = 10.0,
        retry_attempts: int = 1,
        retry_max_wait: int = 4,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.retry_attempts = retry_attempts
        self.retry_max_wait = retry_max_wait
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    def _query(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return {
            "latitude": latitude,
            "longitude": longitude,
            "current": ",".join(CURRENT_VARIABLES),
            "hourly": ",".join(HOURLY_VARIABLES),
            "timeformat": "unixtime",
        }

    async def fetch_forecast(self, latitude: float, longitude: float) -> Any:
        """
        GET the forecast document, retrying transport errors if configured.

        Raises:
            WeatherServiceError: network failure, non-2xx status or invalid JSON
        """
        start_time = time.perf_counter()
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_random_exponential(multiplier=0.5, max=self.retry_max_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._client.get(
                        self.base_url,
                        params=self._query(latitude, longitude),
                    )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Forecast upstream returned %d for (%s, %s)",
                e.response.status_code,
                latitude,
                longitude,
            )
            raise WeatherServiceError(
                context={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Forecast request failed: %s", str(e))
            raise WeatherServiceError(context={"error_type": type(e).__name__}) from e
        except ValueError as e:
            logger.error("Forecast response is not valid JSON: %s", str(e))
            raise WeatherServiceError(context={"error_type": "invalid_json"}) from e

        logger.info(
            "Forecast fetched for (%s, %s) in %.0fms",
            latitude,
            longitude,
            (time.perf_counter() - start_time) * 1000,
        )
        return payload

    async def get_climate(self, latitude: float, longitude: float) -> ClimateResponse:
        """
        Fetch and reshape the forecast for one coordinate.

        Raises:
            NotFoundError: upstream returned no result set (→ 404)
            WeatherServiceError: upstream unreachable or payload malformed (→ 500)
        """
        payload = await self.fetch_forecast(latitude, longitude)

        try:
            forecast = parse_forecast(payload)
            if forecast is None:
                raise NotFoundError(resource="weather data")
            data = reshape_forecast(forecast)
        except NotFoundError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Could not reshape forecast payload: %s", str(e), exc_info=True)
            raise WeatherServiceError(context={"error_type": type(e).__name__}) from e

        return ClimateResponse(data=data)

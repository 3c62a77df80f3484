"""
ClimaTask Backend — /climate Endpoint Tests
=============================================

What:  The weather proxy through the HTTP stack with a faked upstream.

What we test:
    ✅ Wrong or missing api key → 401, and the upstream is never called
    ✅ api key is checked before coordinates are validated
    ✅ Response shape and hourly reshaping
    ✅ Empty upstream result → 404, upstream failure → 500
"""

from datetime import datetime, timezone

import httpx
import pytest


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["?latitude=52.52&longitude=13.41&apikey=wrong",
                                   "?latitude=52.52&longitude=13.41",
                                   "?apikey=wrong"])
async def test_bad_api_key_makes_no_outbound_call(test_client, use_weather_upstream, query):
    requests = use_weather_upstream(lambda request: httpx.Response(200, json={}))

    response = await test_client.get(f"/climate{query}")

    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"
    assert requests == []


@pytest.mark.asyncio
async def test_missing_coordinates_with_valid_key(test_client, use_weather_upstream):
    requests = use_weather_upstream(lambda request: httpx.Response(200, json={}))

    response = await test_client.get("/climate?apikey=climate&latitude=52.52")

    assert response.status_code == 422
    assert requests == []


@pytest.mark.asyncio
async def test_climate_reshapes_forecast(test_client, use_weather_upstream, forecast_payload):
    requests = use_weather_upstream(lambda request: httpx.Response(200, json=forecast_payload))

    response = await test_client.get("/climate?latitude=52.52&longitude=13.41&apikey=climate")

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(requests) == 1
    assert requests[0].url.params["latitude"] == "52.52"

    current = data["current"]
    assert current["utcOffsetSeconds"] == 3600
    assert current["temperature_2m"] == 4.1
    assert current["wind_gusts_10m"] == 29.5
    assert datetime.fromisoformat(current["time"].replace("Z", "+00:00")) == datetime(
        2024, 1, 15, 13, 0, tzinfo=timezone.utc
    )

    hourly = data["hourly"]
    times = [datetime.fromisoformat(t.replace("Z", "+00:00")) for t in hourly["time"]]
    start = forecast_payload["hourly"]["time"][0]
    assert times == [
        datetime.fromtimestamp(start + i * 3600 + 3600, tz=timezone.utc) for i in range(4)
    ]
    assert hourly["temperature_2m"] == [3.2, 3.0, 2.7, 2.9]


@pytest.mark.asyncio
async def test_empty_upstream_result(test_client, use_weather_upstream):
    use_weather_upstream(lambda request: httpx.Response(200, json=[]))

    response = await test_client.get("/climate?latitude=0&longitude=0&apikey=climate")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_upstream_failure(test_client, use_weather_upstream):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    use_weather_upstream(handler)

    response = await test_client.get("/climate?latitude=0&longitude=0&apikey=climate")

    assert response.status_code == 500
    assert response.json()["error"] == "weather_service_error"

"""
Test suite for OpenWeatherMap client

Covers request building, status code classification and transport errors.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from lib.openweathermap.client import WeatherClient
from lib.openweathermap.exceptions import (
    ApiError,
    InvalidResponseError,
    NetworkError,
    RequestTimeoutError,
    errorMessageForStatus,
)


def makeResponse(statusCode: int = 200, payload=None, text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = statusCode
    response.json.return_value = payload
    response.text = text
    return response


class TestWeatherClient:
    """Test suite for WeatherClient"""

    @pytest.fixture
    def session(self):
        session = MagicMock()
        session.get = AsyncMock()
        session.aclose = AsyncMock()
        return session

    @pytest.fixture
    def client(self, session):
        return WeatherClient(apiKey="test_key", session=session, requestTimeout=10)

    @pytest.mark.asyncio
    async def test_current_weather_params(self, client, session):
        """Coordinate query uses lat, lon, appid and metric units"""
        session.get.return_value = makeResponse(payload={"name": "Berlin"})

        result = await client.getCurrentWeather(52.52, 13.40)

        assert result == {"name": "Berlin"}
        args, kwargs = session.get.call_args
        assert args[0] == "https://api.openweathermap.org/data/2.5/weather"
        assert kwargs["params"] == {"lat": 52.52, "lon": 13.40, "units": "metric", "appid": "test_key"}
        assert kwargs["timeout"] == 10

    @pytest.mark.asyncio
    async def test_city_params(self, client, session):
        session.get.return_value = makeResponse(payload={"name": "Moscow"})

        await client.getWeatherByCity("Moscow")

        args, kwargs = session.get.call_args
        assert args[0].endswith("/weather")
        assert kwargs["params"] == {"q": "Moscow", "units": "metric", "appid": "test_key"}

    @pytest.mark.asyncio
    async def test_forecast_endpoint(self, client, session):
        session.get.return_value = makeResponse(payload={"cnt": 0, "list": []})

        result = await client.getForecast(1.0, 2.0)

        assert result == {"cnt": 0, "list": []}
        args, kwargs = session.get.call_args
        assert args[0].endswith("/forecast")
        assert kwargs["params"]["lat"] == 1.0
        assert kwargs["params"]["lon"] == 2.0

    @pytest.mark.asyncio
    async def test_language_param(self, session):
        client = WeatherClient(apiKey="k", session=session, language="ru", baseUrl="https://example.com/api/")
        session.get.return_value = makeResponse(payload={})

        await client.getWeatherByCity("Москва")

        args, kwargs = session.get.call_args
        assert args[0] == "https://example.com/api/weather"
        assert kwargs["params"]["lang"] == "ru"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "statusCode,message",
        [
            (401, "API key is invalid or missing"),
            (404, "Location not found"),
            (429, "API limit reached"),
            (503, "Server error (code: 503)"),
            (418, "Unknown error (code: 418)"),
        ],
    )
    async def test_error_status_codes(self, client, session, statusCode, message):
        session.get.return_value = makeResponse(statusCode=statusCode, text="{}")

        with pytest.raises(ApiError) as excInfo:
            await client.getWeatherByCity("Nowhere")

        assert excInfo.value.code == statusCode
        assert excInfo.value.message == message
        assert excInfo.value.body == "{}"

    @pytest.mark.asyncio
    async def test_timeout_exception(self, client, session):
        session.get.side_effect = httpx.ReadTimeout("Timeout")

        with pytest.raises(RequestTimeoutError):
            await client.getCurrentWeather(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, client, session):
        session.get.side_effect = httpx.ConnectTimeout("Timeout")

        with pytest.raises(NetworkError):
            await client.getCurrentWeather(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_network_error(self, client, session):
        session.get.side_effect = httpx.ConnectError("Connection refused")

        with pytest.raises(NetworkError) as excInfo:
            await client.getCurrentWeather(1.0, 2.0)

        assert not isinstance(excInfo.value, RequestTimeoutError)

    @pytest.mark.asyncio
    async def test_json_decode_error(self, client, session):
        response = makeResponse()
        response.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
        session.get.return_value = response

        with pytest.raises(InvalidResponseError):
            await client.getCurrentWeather(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_close_releases_session(self, client, session):
        await client.close()
        session.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager(self, session):
        async with WeatherClient(apiKey="k", session=session):
            pass
        session.aclose.assert_awaited_once()


def test_error_message_for_status():
    assert errorMessageForStatus(500) == "Server error (code: 500)"
    assert errorMessageForStatus(599) == "Server error (code: 599)"
    assert errorMessageForStatus(400) == "Unknown error (code: 400)"

"""
Tests for Result, WeatherError and observable UI state
"""

import asyncio

import pytest

from internal.models import Error, ErrorKind, Loading, Result, StateValue, Success, WeatherError


def test_weather_error_constructors():
    assert WeatherError.network("offline").kind == ErrorKind.NETWORK
    server = WeatherError.server(404, "Location not found")
    assert server.kind == ErrorKind.SERVER
    assert server.code == 404
    assert WeatherError.location("no fix").kind == ErrorKind.LOCATION

    cause = ValueError("bad")
    unknown = WeatherError.unknown("parse failed", cause)
    assert unknown.kind == ErrorKind.UNKNOWN
    assert unknown.cause is cause
    assert unknown.code is None


def test_weather_error_str():
    assert str(WeatherError.server(429, "API limit reached")) == "server: API limit reached (code: 429)"
    assert str(WeatherError.network("offline")) == "network: offline"


def test_result_success():
    result = Result.success(42)

    assert result.isSuccess
    assert result.value == 42
    assert result.error is None
    assert result.getOrNone() == 42


def test_result_failure():
    error = WeatherError.network("offline")
    result: Result[int] = Result.failure(error)

    assert not result.isSuccess
    assert result.error == error
    assert result.getOrNone() is None
    with pytest.raises(ValueError):
        result.value


def test_result_equality():
    assert Result.success("a") == Result.success("a")
    assert Result.failure(WeatherError.location("x")) == Result.failure(WeatherError.location("x"))
    assert Result.success("a") != Result.failure(WeatherError.location("a"))


def test_state_value_notifies_listeners():
    state = StateValue(Loading())
    seen = []
    state.addListener(seen.append)
    state.addListener(seen.append)

    state.set(Success(1))
    state.set(Error("boom"))

    assert state.value == Error("boom")
    assert seen == [Success(1), Error("boom")]


def test_state_value_listener_isolated():
    state = StateValue(0)
    seen = []

    def badListener(value):
        raise RuntimeError("listener failed")

    state.addListener(badListener)
    state.addListener(seen.append)

    state.set(5)

    assert seen == [5]
    assert state.value == 5


def test_state_value_remove_listener():
    state = StateValue(0)
    seen = []
    state.addListener(seen.append)
    state.removeListener(seen.append)
    state.removeListener(seen.append)

    state.set(1)

    assert seen == []


@pytest.mark.asyncio
async def test_state_value_async_listener():
    state = StateValue(0)
    seen = []

    async def asyncListener(value):
        seen.append(value)

    state.addListener(asyncListener)
    state.set(7)
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert seen == [7]

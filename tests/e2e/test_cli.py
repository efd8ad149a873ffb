"""
End-to-end tests for command line application wiring.
"""

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from main import PogodaApp
from tests.fixtures.weather_mocks import FakeOpenWeatherMap

CONFIG_TOML = """
[openweathermap]
api-key = "test_key"

[weather]
cache-ttl = "10m"
refresh-interval = "2m"

[location]
latitude = 52.52
longitude = 13.405
name = "Home"
"""


def makeArgs(**kwargs) -> argparse.Namespace:
    args = {"city": None, "lat": None, "lon": None, "current": False, "watch": False}
    args.update(kwargs)
    return argparse.Namespace(**args)


@pytest.fixture
def app(tmp_path: Path):
    """PogodaApp with fake OpenWeatherMap session"""
    configPath = tmp_path / "config.toml"
    configPath.write_text(CONFIG_TOML)

    with patch("main.initLogging"):
        app = PogodaApp(configPath=str(configPath))

    fakeApi = FakeOpenWeatherMap()
    app.weatherClient._session = fakeApi.session
    app.fakeApi = fakeApi  # type: ignore[attr-defined]
    return app


def testAppWiring(app):
    assert app.engineConfig.cacheTtl == 600
    assert app.engineConfig.refreshInterval == 120
    assert app.scheduler.interval == 120
    assert app.locationProvider.geocoder is None
    assert app.controller.scheduler is app.scheduler


async def testRunCity(app, capsys):
    exitCode = await app.run(makeArgs(city="Berlin"))

    assert exitCode == 0
    output = capsys.readouterr().out
    assert "Berlin, DE: Clear sky, 18°C" in output
    app.fakeApi.session.aclose.assert_awaited_once()


async def testRunUnknownCity(app, capsys):
    exitCode = await app.run(makeArgs(city="Nowhere"))

    assert exitCode == 1
    assert "Error: City 'Nowhere' not found" in capsys.readouterr().out


async def testRunCurrentLocationUsesConfiguredName(app, capsys):
    exitCode = await app.run(makeArgs(current=True))

    assert exitCode == 0
    assert "Home, DE: Clear sky, 18°C" in capsys.readouterr().out
    assert app.fakeApi.requests[0]["lat"] == 52.52


async def testRunCoordinate(app):
    exitCode = await app.run(makeArgs(lat=48.85, lon=2.35))

    assert exitCode == 0
    assert app.fakeApi.requests[0]["lat"] == 48.85
    assert app.fakeApi.requests[0]["lon"] == 2.35

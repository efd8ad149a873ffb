"""
Pytest configuration and common fixtures for end-to-end weather tests.

Fixtures build the real service stack (WeatherClient, engine, location
provider, controller) on top of a fake HTTP session answering like
OpenWeatherMap does. All fixtures follow camelCase naming convention.
"""

import pytest

from internal.presentation import WeatherController
from internal.services.location import LocationProvider
from internal.services.weather import WeatherEngineConfig, WeatherRetrievalEngine
from lib.cache import DictCache
from lib.location import GeoCoordinate, StaticLocationService
from lib.openweathermap import WeatherClient
from tests.fixtures.weather_mocks import FakeOpenWeatherMap

# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def fakeApi() -> FakeOpenWeatherMap:
    """Fake OpenWeatherMap backend"""
    return FakeOpenWeatherMap()


@pytest.fixture
def weatherClient(fakeApi) -> WeatherClient:
    """Real WeatherClient on top of fake session"""
    return WeatherClient(apiKey="test_key", session=fakeApi.session)


@pytest.fixture
def engine(weatherClient) -> WeatherRetrievalEngine:
    """Weather engine with default config and fresh in-memory cache"""
    config = WeatherEngineConfig()
    return WeatherRetrievalEngine(weatherClient, cache=DictCache(defaultTtl=config.cacheTtl), config=config)


@pytest.fixture
def locationService() -> StaticLocationService:
    """Location service positioned at Berlin (without name)"""
    return StaticLocationService(GeoCoordinate(52.52, 13.405))


@pytest.fixture
def locationProvider(locationService) -> LocationProvider:
    return LocationProvider(locationService, geocoder=None, timeout=0.1)


@pytest.fixture
async def controller(engine, locationProvider):
    """WeatherController wired to real services, closed after test"""
    controller = WeatherController(engine, locationProvider)
    yield controller
    await controller.close()

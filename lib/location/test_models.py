"""
Tests for location models and static location service
"""

import pytest

from lib.location import GeoCoordinate, LocationRequest, StaticLocationService


def test_coordinate_equality_ignores_name():
    """Name is metadata, not identity"""
    assert GeoCoordinate(1.0, 2.0, "A") == GeoCoordinate(1.0, 2.0, "B")
    assert hash(GeoCoordinate(1.0, 2.0, "A")) == hash(GeoCoordinate(1.0, 2.0))


def test_coordinate_inequality_on_position():
    assert GeoCoordinate(1.0, 2.0, "A") != GeoCoordinate(1.0, 2.1, "A")
    assert GeoCoordinate(1.0, 2.0) != GeoCoordinate(1.1, 2.0)


def test_coordinate_as_dict_key():
    data = {GeoCoordinate(52.52, 13.40, "Berlin"): "first"}
    data[GeoCoordinate(52.52, 13.40, "Somewhere")] = "second"

    assert len(data) == 1
    assert data[GeoCoordinate(52.52, 13.40)] == "second"


def test_coordinate_with_name_and_str():
    coord = GeoCoordinate(52.52, 13.40, "Berlin")

    assert coord.name == "Berlin"
    assert str(coord) == "Latitude: 52.52, Longitude: 13.4, Name: Berlin"
    assert str(GeoCoordinate(1.0, 2.0)) == "Latitude: 1.0, Longitude: 2.0"


@pytest.mark.asyncio
async def test_static_service_last_known():
    service = StaticLocationService()
    assert await service.getLastKnownPosition() is None

    service = StaticLocationService(GeoCoordinate(10.0, 20.0))
    assert await service.getLastKnownPosition() == GeoCoordinate(10.0, 20.0)


def test_static_service_push_and_unsubscribe():
    service = StaticLocationService()
    received = []

    def callback(position):
        received.append(position)

    service.requestPositionUpdates(LocationRequest(), callback)
    service.pushPosition(GeoCoordinate(1.0, 1.0))
    service.removePositionUpdates(callback)
    service.pushPosition(GeoCoordinate(2.0, 2.0))

    assert received == [GeoCoordinate(1.0, 1.0)]
    assert service.subscribersCount() == 0


def test_static_service_isolates_failing_callback():
    service = StaticLocationService()
    received = []

    def badCallback(position):
        raise RuntimeError("boom")

    def goodCallback(position):
        received.append(position)

    service.requestPositionUpdates(LocationRequest(), badCallback)
    service.requestPositionUpdates(LocationRequest(), goodCallback)
    service.pushPosition(GeoCoordinate(3.0, 3.0))

    assert received == [GeoCoordinate(3.0, 3.0)]

"""
Tests for HTTP probe connectivity service
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from lib.network import HttpProbeConnectivityService, NetworkCallback, NetworkCapabilities, Transport

ONLINE = NetworkCapabilities(hasInternet=True, hasValidated=True, transports=frozenset({Transport.ETHERNET}))
PORTAL = NetworkCapabilities(hasInternet=True, hasValidated=False, transports=frozenset({Transport.ETHERNET}))
OFFLINE = NetworkCapabilities(transports=frozenset({Transport.ETHERNET}))


class RecordingCallback(NetworkCallback):
    def __init__(self):
        self.calls = []

    def onAvailable(self) -> None:
        self.calls.append("available")

    def onLost(self) -> None:
        self.calls.append("lost")

    def onUnavailable(self) -> None:
        self.calls.append("unavailable")

    def onCapabilitiesChanged(self, capabilities: NetworkCapabilities) -> None:
        self.calls.append(("capabilities", capabilities.hasInternet, capabilities.hasValidated))


def test_transitions():
    service = HttpProbeConnectivityService()
    callback = RecordingCallback()
    service.registerNetworkCallback(callback)

    service.updateCapabilities(OFFLINE)
    service.updateCapabilities(ONLINE)
    service.updateCapabilities(ONLINE)
    service.updateCapabilities(PORTAL)

    assert callback.calls == [
        "unavailable",
        ("capabilities", False, False),
        "available",
        ("capabilities", True, True),
        "lost",
        ("capabilities", True, False),
    ]


def test_register_delivers_current_state():
    service = HttpProbeConnectivityService()
    service.updateCapabilities(ONLINE)
    callback = RecordingCallback()

    service.registerNetworkCallback(callback)
    service.registerNetworkCallback(callback)

    assert callback.calls == ["available", ("capabilities", True, True)]


def test_unregister_stops_delivery():
    service = HttpProbeConnectivityService()
    callback = RecordingCallback()
    service.registerNetworkCallback(callback)
    service.unregisterNetworkCallback(callback)
    service.unregisterNetworkCallback(callback)

    service.updateCapabilities(ONLINE)

    assert callback.calls == []


def test_active_capabilities():
    service = HttpProbeConnectivityService()
    assert service.getActiveCapabilities() is None

    service.updateCapabilities(OFFLINE)
    assert service.getActiveCapabilities() is None

    service.updateCapabilities(PORTAL)
    assert service.getActiveCapabilities() == PORTAL


def test_failing_callback_isolated():
    service = HttpProbeConnectivityService()
    bad = NetworkCallback()
    bad.onAvailable = MagicMock(side_effect=RuntimeError("boom"))
    good = RecordingCallback()
    service.registerNetworkCallback(bad)
    service.registerNetworkCallback(good)

    service.updateCapabilities(ONLINE)

    assert "available" in good.calls


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "statusCode,expected",
    [(204, ONLINE), (200, ONLINE), (302, PORTAL), (503, PORTAL)],
)
async def test_check_now_status_codes(statusCode, expected):
    service = HttpProbeConnectivityService(probeUrl="http://probe.test/204")

    with patch("httpx.AsyncClient") as mockClient:
        response = MagicMock()
        response.status_code = statusCode
        getMock = AsyncMock(return_value=response)
        mockClient.return_value.__aenter__.return_value.get = getMock

        result = await service.checkNow()

    assert result == expected
    getMock.assert_awaited_once_with("http://probe.test/204")


@pytest.mark.asyncio
async def test_check_now_request_error():
    service = HttpProbeConnectivityService()

    with patch("httpx.AsyncClient") as mockClient:
        mockClient.return_value.__aenter__.return_value.get = AsyncMock(side_effect=httpx.ConnectError("down"))
        result = await service.checkNow()

    assert result == OFFLINE
    assert service.getActiveCapabilities() is None


@pytest.mark.asyncio
async def test_start_stop():
    service = HttpProbeConnectivityService(probeInterval=0.01)
    calls = 0

    async def fakeCheck():
        nonlocal calls
        calls += 1
        return ONLINE

    with patch.object(service, "checkNow", side_effect=fakeCheck):
        service.start()
        service.start()
        await asyncio.sleep(0.05)
        await service.stop()
        stoppedAt = calls
        await asyncio.sleep(0.03)

    assert stoppedAt >= 1
    assert calls == stoppedAt
    await service.stop()

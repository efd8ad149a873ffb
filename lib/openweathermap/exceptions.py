"""
OpenWeatherMap client exceptions

All client errors inherit from OpenWeatherMapError. Callers that need to
tell transient connectivity problems apart from rejected requests catch
NetworkError (includes timeouts) and ApiError separately.
"""

from typing import Optional


class OpenWeatherMapError(Exception):
    """Base exception for all OpenWeatherMap client errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(OpenWeatherMapError):
    """Request did not reach the API or the response was lost (DNS, connect, read errors)"""

    pass


class RequestTimeoutError(NetworkError):
    """Request timed out"""

    def __init__(self, message: str = "Request timeout, check your connection"):
        super().__init__(message)


class ApiError(OpenWeatherMapError):
    """
    API answered with non-2xx status code

    Attributes:
        code: HTTP status code
        body: Raw response body (if available)
    """

    def __init__(self, message: str, code: int, body: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.body = body

    def __str__(self) -> str:
        return f"{self.message} (code: {self.code})"


class InvalidResponseError(OpenWeatherMapError):
    """API answered 2xx, but payload can not be used (bad JSON, missing required blocks)"""

    pass


def errorMessageForStatus(code: int) -> str:
    """Get human readable message for HTTP status code"""
    if code == 401:
        return "API key is invalid or missing"
    elif code == 404:
        return "Location not found"
    elif code == 429:
        return "API limit reached"
    elif 500 <= code <= 599:
        return f"Server error (code: {code})"
    return f"Unknown error (code: {code})"

"""
Result container and tagged error type shared by weather and location services
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Kind of failure, dood!"""

    NETWORK = "network"
    """Connectivity problem or timeout, recoverable with cached data"""
    SERVER = "server"
    """Remote rejected request (non-2xx HTTP status)"""
    LOCATION = "location"
    """Position or place name could not be determined"""
    UNKNOWN = "unknown"
    """Anything else, cause is retained"""


@dataclass(frozen=True)
class WeatherError:
    """
    Tagged error value

    Attributes:
        kind: Error kind
        message: Human readable message
        code: HTTP status code (SERVER only)
        cause: Original exception (UNKNOWN only, diagnostics)
    """

    kind: ErrorKind
    message: str
    code: Optional[int] = None
    cause: Optional[BaseException] = None

    @classmethod
    def network(cls, message: str) -> "WeatherError":
        return cls(ErrorKind.NETWORK, message)

    @classmethod
    def server(cls, code: int, message: str) -> "WeatherError":
        return cls(ErrorKind.SERVER, message, code=code)

    @classmethod
    def location(cls, message: str) -> "WeatherError":
        return cls(ErrorKind.LOCATION, message)

    @classmethod
    def unknown(cls, message: str, cause: Optional[BaseException] = None) -> "WeatherError":
        return cls(ErrorKind.UNKNOWN, message, cause=cause)

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.kind}: {self.message} (code: {self.code})"
        return f"{self.kind}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Either success value or WeatherError, dood!

    Use Result.success() / Result.failure() to create.

    Example:
        >>> result = await engine.fetchByCity("Berlin")
        >>> if result.isSuccess:
        ...     print(result.value.temperature)
        ... else:
        ...     print(result.error.message)
    """

    _value: Optional[T] = None
    _error: Optional[WeatherError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(_value=value)

    @classmethod
    def failure(cls, error: WeatherError) -> "Result[T]":
        return cls(_error=error)

    @property
    def isSuccess(self) -> bool:
        return self._error is None

    @property
    def value(self) -> T:
        """Get success value, raise ValueError on failure"""
        if self._error is not None:
            raise ValueError(f"Result is failure: {self._error}")
        return self._value  # type: ignore[return-value]

    @property
    def error(self) -> Optional[WeatherError]:
        return self._error

    def getOrNone(self) -> Optional[T]:
        return self._value if self._error is None else None

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.failure({self._error!r})"
        return f"Result.success({self._value!r})"

"""
Internal Models Package

This package contains shared models used across services and presentation
layer to avoid circular dependencies.
"""

from .result import ErrorKind, Result, WeatherError
from .ui_state import Error, Loading, StateValue, Success, UiState

__all__ = [
    # Result
    "ErrorKind",
    "WeatherError",
    "Result",
    # UI state
    "UiState",
    "Loading",
    "Success",
    "Error",
    "StateValue",
]

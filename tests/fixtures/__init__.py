"""
Test fixtures package for Pogoda tests.

- weather_mocks: fake OpenWeatherMap session and sample API responses

Service fixtures built on top of these are available through tests/conftest.py.
"""

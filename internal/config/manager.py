"""
Configuration management for Pogoda weather service.
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

import lib.utils as utils
from internal.services.weather import WeatherEngineConfig

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDERS = ("", "YOUR_API_KEY_HERE")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace environment variable placeholders with actual values.

    Args:
        match: A regex match object containing the environment variable name.

    Returns:
        str: The value of the environment variable or the original placeholder
             if the variable is not set.
    """
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Strings, dictionaries and lists are processed, other values are returned
    unchanged.
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


class ConfigManager:
    """Manages configuration loading and validation for Pogoda weather service."""

    def __init__(
        self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None, dotEnvFile: str = ".env"
    ):
        """Initialize ConfigManager with config file path and optional config directories."""
        self.config_path = configPath
        self.config_dirs = configDirs or []
        if Path(dotEnvFile).is_file():
            utils.load_dotenv(path=dotEnvFile)
        self.config = substituteEnvVars(self._loadConfig())
        self._validate()

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, dood!"""
        tomlFiles: List[Path] = []
        dirPath = Path(directory)

        if not dirPath.exists():
            logger.warning(f"Config directory {directory} does not exist, skipping, dood!")
            return tomlFiles

        if not dirPath.is_dir():
            logger.warning(f"Config path {directory} is not a directory, skipping, dood!")
            return tomlFiles

        for tomlFile in dirPath.rglob("*.toml"):
            if tomlFile.is_file():
                tomlFiles.append(tomlFile)
                logger.debug(f"Found config file: {tomlFile}")

        return sorted(tomlFiles)  # Sort for consistent ordering

    def _mergeConfigs(self, baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge two configuration dictionaries, dood!"""
        merged = baseConfig.copy()

        for key, value in newConfig.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._mergeConfigs(merged[key], value)
            else:
                merged[key] = value

        return merged

    def _loadConfig(self) -> Dict[str, Any]:
        """
        Load configuration from TOML file and optional config directories.

        Files found in config directories are merged over the main file in
        sorted order. Broken files in directories are skipped.

        Raises:
            SystemExit: If there is neither config file nor config directories,
                or the main config file can't be parsed.
        """
        configFile = Path(self.config_path)
        hasConfigFile = configFile.exists()
        if not hasConfigFile and not self.config_dirs:
            logger.error(f"Configuration file {self.config_path} not found!")
            sys.exit(1)

        config: Dict[str, Any] = {}
        if hasConfigFile:
            try:
                with open(configFile, "rb") as f:
                    config = tomli.load(f)
            except (OSError, tomli.TOMLDecodeError) as e:
                logger.error(f"Failed to load configuration: {e}")
                sys.exit(1)
            logger.info(f"Loaded main config from {self.config_path}")

        if self.config_dirs:
            logger.info(f"Scanning {len(self.config_dirs)} config directories for .toml files, dood!")

            for configDir in self.config_dirs:
                tomlFiles = self._findTomlFilesRecursive(configDir)
                logger.info(f"Found {len(tomlFiles)} .toml files in {configDir}")

                for tomlFile in tomlFiles:
                    try:
                        with open(tomlFile, "rb") as f:
                            dirConfig = tomli.load(f)
                    except (OSError, tomli.TOMLDecodeError) as e:
                        logger.error(f"Failed to load config file {tomlFile}: {e}")
                        continue

                    config = self._mergeConfigs(config, dirConfig)
                    logger.info(f"Merged config from {tomlFile}")

        logger.info("Configuration loaded and merged successfully, dood!")
        return config

    def _validate(self) -> None:
        """Exit if required settings are missing"""
        if self.getApiKey() in API_KEY_PLACEHOLDERS:
            logger.error("OpenWeatherMap API key not found in configuration, set [openweathermap] api-key!")
            sys.exit(1)

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.get("logging", {})

    def getOpenWeatherMapConfig(self) -> Dict[str, Any]:
        """
        Get OpenWeatherMap configuration

        Returns:
            Dict with OpenWeatherMap settings (api-key, base-url, timeout, lang)
        """
        return self.get("openweathermap", {})

    def getApiKey(self) -> str:
        """Get OpenWeatherMap API key"""
        return str(self.getOpenWeatherMapConfig().get("api-key", ""))

    def getGeocodeMapsConfig(self) -> Dict[str, Any]:
        """
        Get Geocode Maps configuration

        Returns:
            Dict with reverse geocoding settings (enabled, api-key, cache-ttl, lang)
        """
        return self.get("geocode-maps", {})

    def getWeatherConfig(self) -> Dict[str, Any]:
        """Get weather engine configuration (cache-ttl, location-timeout, refresh-interval)."""
        return self.get("weather", {})

    def getLocationConfig(self) -> Dict[str, Any]:
        """Get static location configuration (latitude, longitude, name)."""
        return self.get("location", {})

    def getNetworkConfig(self) -> Dict[str, Any]:
        """Get connectivity probe configuration (probe-url, probe-interval)."""
        return self.get("network", {})

    def getWeatherEngineConfig(self) -> WeatherEngineConfig:
        """
        Build WeatherEngineConfig from [weather] and [openweathermap] sections.

        Durations accept seconds or delay strings like "15m" or "1h30m".
        """
        defaults = WeatherEngineConfig()
        weatherConfig = self.getWeatherConfig()
        owmConfig = self.getOpenWeatherMapConfig()

        return WeatherEngineConfig(
            cacheTtl=utils.parseDelay(weatherConfig.get("cache-ttl", defaults.cacheTtl)),
            locationTimeout=utils.parseDelay(weatherConfig.get("location-timeout", defaults.locationTimeout)),
            refreshInterval=utils.parseDelay(weatherConfig.get("refresh-interval", defaults.refreshInterval)),
            requestTimeout=utils.parseDelay(owmConfig.get("timeout", defaults.requestTimeout)),
        )

"""
Pogoda - current weather for a city, a coordinate or the configured location.
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, List, Optional

import lib.utils as utils
from internal.config.manager import ConfigManager
from internal.models import Error, Loading, Success
from internal.presentation import WeatherController, formatSnapshot
from internal.services.location import LocationProvider
from internal.services.network import NetworkMonitor
from internal.services.refresh import RefreshScheduler
from internal.services.weather import WeatherRetrievalEngine
from lib.cache import DictCache
from lib.geocode_maps import GeocodeMapsClient, GeocodeMapsGeocoder
from lib.location import GeoCoordinate, StaticLocationService
from lib.logging_utils import initLogging
from lib.network import DEFAULT_PROBE_URL, HttpProbeConnectivityService
from lib.openweathermap import WeatherClient

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.INFO)
# set higher logging level for httpx to avoid all GET requests being logged
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


class PogodaApp:
    """Main orchestrator that wires all services together."""

    def __init__(self, configPath: str = "config.toml", configDirs: Optional[List[str]] = None):
        """Initialize application with all components."""
        # Initialize configuration
        self.configManager = ConfigManager(configPath, configDirs)

        # Initialize logging with config
        initLogging(self.configManager.getLoggingConfig())

        self.engineConfig = self.configManager.getWeatherEngineConfig()

        # Weather retrieval
        owmConfig = self.configManager.getOpenWeatherMapConfig()
        self.weatherClient = WeatherClient(
            apiKey=self.configManager.getApiKey(),
            baseUrl=owmConfig.get("base-url", WeatherClient.BASE_URL),
            requestTimeout=self.engineConfig.requestTimeout,
            language=owmConfig.get("lang"),
        )
        self.engine = WeatherRetrievalEngine(self.weatherClient, config=self.engineConfig)

        # Location
        self.locationService = StaticLocationService(self._makeConfiguredPosition())
        self.locationProvider = LocationProvider(
            self.locationService,
            geocoder=self._makeGeocoder(),
            timeout=self.engineConfig.locationTimeout,
        )

        # Connectivity
        networkConfig = self.configManager.getNetworkConfig()
        self.connectivityService = HttpProbeConnectivityService(
            probeUrl=networkConfig.get("probe-url", DEFAULT_PROBE_URL),
            probeInterval=utils.parseDelay(networkConfig.get("probe-interval", 30)),
        )
        self.networkMonitor = NetworkMonitor(self.connectivityService)

        self.scheduler = RefreshScheduler(
            self.engine,
            self.locationProvider,
            interval=self.engineConfig.refreshInterval,
        )
        self.controller = WeatherController(self.engine, self.locationProvider, self.scheduler)
        self.controller.weatherState.addListener(self._render)

    def _makeConfiguredPosition(self) -> Optional[GeoCoordinate]:
        locationConfig = self.configManager.getLocationConfig()
        if "latitude" not in locationConfig or "longitude" not in locationConfig:
            logger.info("No [location] configured, current location is unknown")
            return None

        return GeoCoordinate(
            float(locationConfig["latitude"]),
            float(locationConfig["longitude"]),
            locationConfig.get("name"),
        )

    def _makeGeocoder(self) -> Optional[GeocodeMapsGeocoder]:
        geocodeConfig = self.configManager.getGeocodeMapsConfig()
        if not geocodeConfig.get("enabled", False):
            return None

        apiKey = geocodeConfig.get("api-key", "")
        if not apiKey:
            logger.warning("Geocode Maps is enabled, but api-key is not set, reverse geocoding disabled")
            return None

        cacheTtl = utils.parseDelay(geocodeConfig.get("cache-ttl", "30d"))
        client = GeocodeMapsClient(
            apiKey=apiKey,
            reverseCache=DictCache(defaultTtl=cacheTtl),
            reverseTTL=int(cacheTtl),
            acceptLanguage=geocodeConfig.get("lang"),
        )
        return GeocodeMapsGeocoder(client)

    def _render(self, state: Any) -> None:
        match state:
            case Loading():
                logger.debug("Loading weather...")
            case Success(data=snapshot):
                print()
                for line in formatSnapshot(snapshot, self.controller.cityNameState.value):
                    print(line)
            case Error(message=message):
                print(f"Error: {message}")

    async def run(self, args: argparse.Namespace) -> int:
        """Fetch requested weather, optionally keep refreshing until interrupted."""
        try:
            if args.watch:
                # Auto refresh follows pushed positions
                self.locationProvider.startTracking()

            if args.city:
                result = await self.controller.fetchByCity(args.city)
            elif args.lat is not None:
                coordinate = GeoCoordinate(args.lat, args.lon)
                self.locationService.pushPosition(coordinate)
                result = await self.controller.fetchByCoordinate(coordinate)
            else:
                result = await self.controller.fetchCurrentLocationWeather()

            if args.watch:
                self.connectivityService.start()
                self.networkMonitor.start()
                self.engine.attachNetworkMonitor(self.networkMonitor)
                self.scheduler.attachNetworkMonitor(self.networkMonitor)
                self.controller.startAutoRefresh()
                logger.info(f"Refreshing every {self.engineConfig.refreshInterval} seconds, press Ctrl+C to stop")
                await asyncio.Event().wait()

            return 0 if result is not None and result.isSuccess else 1
        finally:
            self.networkMonitor.stop()
            await self.connectivityService.stop()
            await self.controller.close()


def parse_arguments():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Pogoda - current weather from OpenWeatherMap")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--city", help="City name, optionally with country code (Berlin,DE)")
    target.add_argument("--lat", type=float, help="Latitude (requires --lon)")
    target.add_argument(
        "--current",
        action="store_true",
        help="Weather at current location from [location] section (default)",
    )
    parser.add_argument("--lon", type=float, help="Longitude (requires --lat)")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and refresh weather periodically",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )
    args = parser.parse_args()

    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be specified together")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration"""
    print("=== Pogoda Configuration ===")
    print()
    print(utils.jsonDumps(configManager.config, indent=2, sort_keys=True))
    print()
    print("=== Configuration loaded successfully ===")


def main():
    """Main entry point."""
    args = parse_arguments()

    try:
        if args.print_config:
            prettyPrintConfig(ConfigManager(args.config, args.config_dir))
            sys.exit(0)

        app = PogodaApp(configPath=args.config, configDirs=args.config_dir)
        sys.exit(asyncio.run(app.run(args)))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"Pogoda crashed: {e}")
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()

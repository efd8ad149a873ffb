"""
Tests for the Configuration Manager.

Covers configuration loading, merging, environment substitution and
validation of required settings.
"""

import tempfile
from pathlib import Path

import pytest

from internal.config.manager import ConfigManager, substituteEnvVars
from internal.services.weather import WeatherEngineConfig

# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def tempDir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sampleConfigToml():
    """Provide sample valid TOML configuration."""
    return """
[openweathermap]
api-key = "test_api_key_123"
lang = "en"

[weather]
cache-ttl = "15m"
refresh-interval = 120

[location]
latitude = 52.52
longitude = 13.405
name = "Berlin"

[logging]
level = "INFO"
"""


@pytest.fixture
def overrideToml():
    """Provide override configuration TOML."""
    return """
[openweathermap]
timeout = 5

[weather]
location-timeout = "1m"

[logging]
level = "DEBUG"
"""


@pytest.fixture
def missingApiKeyToml():
    """Provide TOML without OpenWeatherMap API key."""
    return """
[weather]
cache-ttl = 900
"""


# ============================================================================
# Helper Functions
# ============================================================================


def createConfigFile(directory: Path, filename: str, content: str) -> Path:
    """Create a TOML config file in the specified directory."""
    filePath = directory / filename
    filePath.write_text(content)
    return filePath


def createConfigDir(baseDir: Path, dirName: str, files: dict) -> Path:
    """Create a config directory with multiple TOML files."""
    configDir = baseDir / dirName
    configDir.mkdir(parents=True, exist_ok=True)

    for filename, content in files.items():
        createConfigFile(configDir, filename, content)

    return configDir


def makeManager(tempDir: Path, configPath: str, **kwargs) -> ConfigManager:
    return ConfigManager(configPath, dotEnvFile=str(tempDir / ".env"), **kwargs)


# ============================================================================
# Tests
# ============================================================================


class TestConfigManagerLoading:
    """Test ConfigManager loading and merging."""

    def testInitWithValidConfig(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)

        manager = makeManager(tempDir, str(configPath))

        assert manager.getApiKey() == "test_api_key_123"
        assert manager.getLocationConfig()["name"] == "Berlin"
        assert manager.getOpenWeatherMapConfig()["lang"] == "en"
        assert manager.getGeocodeMapsConfig() == {}

    def testMergeConfigDirs(self, tempDir, sampleConfigToml, overrideToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "conf.d", {"10-override.toml": overrideToml})

        manager = makeManager(tempDir, str(configPath), configDirs=[str(configDir)])

        assert manager.getLoggingConfig()["level"] == "DEBUG"
        assert manager.getOpenWeatherMapConfig()["api-key"] == "test_api_key_123"
        assert manager.getOpenWeatherMapConfig()["timeout"] == 5

    def testWithoutConfigFileButWithDirs(self, tempDir, sampleConfigToml):
        configDir = createConfigDir(tempDir, "conf.d", {"main.toml": sampleConfigToml})

        manager = makeManager(tempDir, str(tempDir / "nonexistent.toml"), configDirs=[str(configDir)])

        assert manager.getApiKey() == "test_api_key_123"

    def testBrokenFileInDirSkipped(self, tempDir, sampleConfigToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "conf.d", {"broken.toml": "[weather\ncache-ttl = 1"})

        manager = makeManager(tempDir, str(configPath), configDirs=[str(configDir)])

        assert manager.getWeatherConfig()["cache-ttl"] == "15m"

    def testMissingConfigExits(self, tempDir):
        with pytest.raises(SystemExit):
            makeManager(tempDir, str(tempDir / "nonexistent.toml"))

    def testInvalidSyntaxExits(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", "[openweathermap\napi-key = 1")

        with pytest.raises(SystemExit):
            makeManager(tempDir, str(configPath))

    def testMissingApiKeyExits(self, tempDir, missingApiKeyToml):
        configPath = createConfigFile(tempDir, "config.toml", missingApiKeyToml)

        with pytest.raises(SystemExit):
            makeManager(tempDir, str(configPath))

    def testPlaceholderApiKeyExits(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "YOUR_API_KEY_HERE"\n')

        with pytest.raises(SystemExit):
            makeManager(tempDir, str(configPath))


class TestEnvSubstitution:
    """Test ${VAR} substitution"""

    def testSubstituteFromEnvironment(self, tempDir, monkeypatch):
        monkeypatch.setenv("POGODA_OWM_KEY", "from_env")
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "${POGODA_OWM_KEY}"\n')

        manager = makeManager(tempDir, str(configPath))

        assert manager.getApiKey() == "from_env"

    def testSubstituteFromDotEnv(self, tempDir, monkeypatch):
        monkeypatch.delenv("POGODA_DOTENV_KEY", raising=False)
        (tempDir / ".env").write_text("POGODA_DOTENV_KEY=dotenv_value\n")
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "${POGODA_DOTENV_KEY}"\n')

        manager = makeManager(tempDir, str(configPath))

        assert manager.getApiKey() == "dotenv_value"
        monkeypatch.delenv("POGODA_DOTENV_KEY")

    def testUnknownVariableKept(self, monkeypatch):
        monkeypatch.delenv("POGODA_UNKNOWN_VAR", raising=False)
        assert substituteEnvVars({"a": ["${POGODA_UNKNOWN_VAR}", 1]}) == {"a": ["${POGODA_UNKNOWN_VAR}", 1]}


class TestWeatherEngineConfig:
    """Test building WeatherEngineConfig"""

    def testDefaults(self, tempDir):
        configPath = createConfigFile(tempDir, "config.toml", '[openweathermap]\napi-key = "k"\n')

        assert makeManager(tempDir, str(configPath)).getWeatherEngineConfig() == WeatherEngineConfig()

    def testOverrides(self, tempDir, sampleConfigToml, overrideToml):
        configPath = createConfigFile(tempDir, "config.toml", sampleConfigToml)
        configDir = createConfigDir(tempDir, "conf.d", {"override.toml": overrideToml})

        config = makeManager(tempDir, str(configPath), configDirs=[str(configDir)]).getWeatherEngineConfig()

        assert config.cacheTtl == 900
        assert config.refreshInterval == 120
        assert config.locationTimeout == 60
        assert config.requestTimeout == 5

    def testInvalidDurationRaises(self, tempDir):
        configPath = createConfigFile(
            tempDir, "config.toml", '[openweathermap]\napi-key = "k"\n[weather]\ncache-ttl = "soon"\n'
        )

        with pytest.raises(ValueError):
            makeManager(tempDir, str(configPath)).getWeatherEngineConfig()

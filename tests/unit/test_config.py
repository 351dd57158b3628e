"""
Unit tests for application settings.

Tests cover:
- Default values (port 8080, metrics on, tracing off)
- Environment variable overrides with the COLOR_API_ prefix
- Validation of log level, log format and environment
- Derived serving URL
- Settings cache
"""

import pytest
from pydantic import ValidationError

from color_api.src.config import Settings, get_settings, clear_settings_cache


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test without COLOR_API_ variables or a stray .env file."""
    monkeypatch.chdir(tmp_path)
    for var in ("PORT", "HOST", "LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT", "METRICS_ENABLED"):
        monkeypatch.delenv(f"COLOR_API_{var}", raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


class TestDefaults:
    """Tests for default settings."""

    def test_default_port_is_8080(self):
        """Test the service listens on 8080 unless configured."""
        assert Settings().port == 8080

    def test_default_observability(self):
        """Test metrics are on and tracing is off by default."""
        settings = Settings()

        assert settings.metrics_enabled is True
        assert settings.metrics_endpoint == "/metrics"
        assert settings.tracing_enabled is False

    def test_default_serving_url(self):
        """Test wildcard bind host is announced as localhost."""
        assert Settings().serving_url == "http://localhost:8080"


class TestEnvironmentOverrides:
    """Tests for COLOR_API_ environment variables."""

    def test_port_override(self, monkeypatch):
        """Test COLOR_API_PORT overrides the port."""
        monkeypatch.setenv("COLOR_API_PORT", "9090")

        assert Settings().port == 9090

    def test_host_override_changes_serving_url(self, monkeypatch):
        """Test explicit hosts appear in the serving URL."""
        monkeypatch.setenv("COLOR_API_HOST", "127.0.0.1")

        assert Settings().serving_url == "http://127.0.0.1:8080"

    def test_dotenv_file_is_loaded(self, tmp_path):
        """Test values are read from .env in the working directory."""
        (tmp_path / ".env").write_text("COLOR_API_PORT=8181\n")

        assert Settings().port == 8181


class TestValidation:
    """Tests for settings validators."""

    def test_log_level_is_normalized(self):
        """Test log levels are upper-cased."""
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_environment_is_normalized(self):
        """Test environment names are lower-cased."""
        settings = Settings(environment="Development")

        assert settings.environment == "development"
        assert settings.is_development is True
        assert settings.is_production is False

    def test_invalid_environment_rejected(self):
        """Test unknown environments are rejected."""
        with pytest.raises(ValidationError):
            Settings(environment="qa")

    def test_invalid_log_format_rejected(self):
        """Test unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range_rejected(self, port):
        """Test ports outside 1-65535 are rejected."""
        with pytest.raises(ValidationError):
            Settings(port=port)

    def test_sample_rate_bounds(self):
        """Test sampling rate must lie in [0, 1]."""
        with pytest.raises(ValidationError):
            Settings(tracing_sample_rate=1.5)

    def test_empty_cors_origins_allow_all(self):
        """Test an empty origin list falls back to wildcard."""
        assert Settings(cors_origins=[]).cors_origins == ["*"]


class TestSettingsCache:
    """Tests for get_settings caching."""

    def test_get_settings_is_cached(self):
        """Test repeated calls return the same instance."""
        assert get_settings() is get_settings()

    def test_clear_settings_cache_reloads(self, monkeypatch):
        """Test clearing the cache picks up new environment values."""
        first = get_settings()
        monkeypatch.setenv("COLOR_API_PORT", "8282")
        clear_settings_cache()

        second = get_settings()

        assert second is not first
        assert second.port == 8282

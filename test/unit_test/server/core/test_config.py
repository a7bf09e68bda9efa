"""Unit tests for server configuration settings model.

Tests verify that the Settings model binds the environment variables documented
in .env.example and derives the CORS configuration from them.
"""

from pathlib import Path

import pytest

from storefront_api.server.core.config import CORSConfig, Settings


@pytest.fixture
def env_example_path() -> Path:
    """Get path to .env.example file."""
    return Path(__file__).resolve().parent.parent.parent.parent.parent / ".env.example"


@pytest.fixture
def env_example_vars(env_example_path: Path) -> dict[str, str]:
    """Parse .env.example file and return environment variables."""
    env_vars = {}
    with open(env_example_path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, value = line.split("=", 1)
                env_vars[key.strip()] = value.strip()
    return env_vars


class TestSettingsDefaults:
    """Test default values when nothing is configured."""

    def test_defaults(self, monkeypatch):
        for key in ("STOREFRONT_API_SERVER_PORT", "STOREFRONT_API_DATA_DIR", "STOREFRONT_API_ENVIRONMENT"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(_env_file=None)
        assert settings.server_port == 3000
        assert settings.data_dir == "db"
        assert settings.environment == "development"
        assert settings.is_production is False


class TestSettingsBinding:
    """Test Settings model environment variable binding."""

    def test_every_documented_key_is_bound(self, env_example_vars: dict[str, str]):
        aliases = {field.alias for field in Settings.model_fields.values()}
        documented = {key for key in env_example_vars if not key.startswith("LOGFIRE_")}
        assert documented <= aliases

    def test_server_binding(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_API_SERVER_HOST", "127.0.0.1")
        monkeypatch.setenv("STOREFRONT_API_SERVER_PORT", "8080")

        settings = Settings(_env_file=None)
        assert settings.server_host == "127.0.0.1"
        assert settings.server_port == 8080

    def test_data_dir_binding(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("STOREFRONT_API_DATA_DIR", str(tmp_path))
        assert Settings(_env_file=None).data_dir == str(tmp_path)

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_API_LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    @pytest.mark.parametrize(("value", "expected"), [("production", True), ("Production", True), ("staging", False)])
    def test_is_production(self, monkeypatch, value: str, expected: bool):
        monkeypatch.setenv("STOREFRONT_API_ENVIRONMENT", value)
        assert Settings(_env_file=None).is_production is expected


class TestCORSConfig:
    """Test CORS configuration derived from settings."""

    def test_cors_from_environment(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://localhost:5173"]')
        monkeypatch.setenv("CORS_ALLOW_CREDENTIALS", "false")

        cors = Settings(_env_file=None).cors
        assert isinstance(cors, CORSConfig)
        assert cors.origins == ["http://localhost:5173"]
        assert cors.allow_credentials is False
        assert cors.allow_methods == ["*"]

    def test_cors_defaults(self):
        cors = CORSConfig()
        assert cors.origins == ["*"]
        assert cors.allow_headers == ["*"]

"""Tests for SessionSettings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from docassist_session.config import SessionSettings, StorageBackend, get_settings
from docassist_session.core.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("API_BASE_URL", "STORAGE_BACKEND", "REDIS_URL", "REQUEST_TIMEOUT_SECONDS"):
        monkeypatch.delenv(f"DOCASSIST_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSessionSettings:
    """Test defaults, environment loading and validation."""

    def test_defaults(self):
        settings = SessionSettings(_env_file=None)

        assert settings.api_base_url == "http://localhost:3000/api"
        assert settings.token_storage_key == "auth_token"
        assert settings.token_rotation_header == "X-Refreshed-Token"
        assert settings.storage_backend == StorageBackend.FILE
        assert settings.refresh_path == "/auth/refresh-token"
        assert settings.needs_redis is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DOCASSIST_API_BASE_URL", "https://api.docassist.test/api/")
        monkeypatch.setenv("DOCASSIST_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("DOCASSIST_REQUEST_TIMEOUT_SECONDS", "5")

        settings = SessionSettings(_env_file=None)

        assert settings.api_base_url == "https://api.docassist.test/api"
        assert settings.storage_backend == StorageBackend.MEMORY
        assert settings.request_timeout_seconds == 5.0

    @pytest.mark.parametrize(
        "overrides",
        [
            {"api_base_url": "ftp://example.com"},
            {"request_timeout_seconds": 0},
            {"token_storage_key": "  "},
            {"storage_backend": "sqlite"},
        ],
    )
    def test_invalid_values(self, overrides):
        with pytest.raises(ValidationError):
            SessionSettings(_env_file=None, **overrides)

    def test_storage_dir_is_expanded(self):
        settings = SessionSettings(_env_file=None, token_storage_dir=Path("~/tokens"))
        assert settings.resolved_token_storage_dir == Path("~/tokens").expanduser()

    def test_redis_backend_requires_url(self):
        settings = SessionSettings(_env_file=None, storage_backend="redis")

        assert settings.needs_redis is True
        with pytest.raises(ConfigurationError):
            settings.require_redis_url()

    def test_relay_requires_url(self):
        settings = SessionSettings(_env_file=None, enable_forced_logout_relay=True)
        with pytest.raises(ConfigurationError):
            settings.require_redis_url()

    def test_redis_url_returned(self):
        settings = SessionSettings(_env_file=None, storage_backend="redis", redis_url="redis://localhost:6379/0")
        assert settings.require_redis_url() == "redis://localhost:6379/0"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

"""Tests for application settings"""

import pytest
from pydantic import ValidationError

from app.config import Settings


@pytest.fixture
def base_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("SECRET_KEY", "configured")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("BCRYPT_ROUNDS", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    return monkeypatch


class TestSecretKey:
    def test_missing_secret_key_refuses_to_start(self, base_env):
        base_env.delenv("SECRET_KEY")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_secret_key_refuses_to_start(self, base_env, value):
        base_env.setenv("SECRET_KEY", value)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_secret_key_read_from_environment(self, base_env):
        assert Settings(_env_file=None).SECRET_KEY == "configured"


class TestDefaults:
    def test_production_defaults(self, base_env):
        config = Settings(_env_file=None)

        assert config.ENVIRONMENT == "production"
        assert config.BCRYPT_ROUNDS == 12
        assert config.secure_cookies is True
        assert config.cors_origins_list == []

    def test_development_disables_secure_cookies(self, base_env):
        base_env.setenv("ENVIRONMENT", "development")

        assert Settings(_env_file=None).secure_cookies is False

    @pytest.mark.parametrize("rounds", ["3", "32"])
    def test_bcrypt_rounds_bounds(self, base_env, rounds):
        base_env.setenv("BCRYPT_ROUNDS", rounds)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_cors_origins_parsed(self, base_env):
        base_env.setenv("CORS_ORIGINS", "http://localhost:3000, https://notes.example.com,")

        assert Settings(_env_file=None).cors_origins_list == [
            "http://localhost:3000",
            "https://notes.example.com",
        ]
